# liso

A small HTTP/1.1 server that serves files from a static site directory.
It watches all its connections with `selectors`, splits pipelined requests
on the blank line (CRLF CRLF) that ends each request head, and answers them
one by one.

What it answers:

- `GET` — `200 OK` with `Content-Type: text/html`, `Content-Length` and the file.
- `HEAD` — the same status line and headers, without the body.
- `POST` — the request bytes are sent back unchanged.
- Any other method — `501 Not Implemented`.
- A version other than `HTTP/1.1` — `505 HTTP Version not supported`.
- A request head that cannot be parsed — `400 Bad request`.
- A file that does not exist, or a path that leads outside the site
  directory — `404 Not Found`.

A request for `/` is served from `index.html` in the site directory.

When logging is on, `200`, `400`, `501` and `505` responses go to an access
log and each `404` goes to an error log. The two files are named
`access_<year>_<month>_<day>.log` and `error_<year>_<month>_<day>.log` after
the moment the logger was created (the month counted from zero), and every
record carries that same moment, not the time of the request. The client
address in each record is the fixed string returned by `get_client_ip()`.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Commands

Start the server; by default it listens on port 9999 on all interfaces and
serves the `static_site` directory under the current directory:

```
liso-server
liso-server --host 127.0.0.1 --port 8080 --root site --log-dir logs
```

The log directory must already exist; if the log files cannot be opened the
server says so and runs without logging. It prints `timeout` after every
30 seconds with no activity, accepts at most 1024 connections at a time and
stops on Ctrl-C.

Send the bytes held in a file (up to 8192 of them) to a running server and
print what comes back; one reply is read for each request head in the file:

```
liso-client 127.0.0.1 9999 requests.txt
```

Parse the request held in a file and print its method, version, URI and
headers:

```
liso-example request.txt
```

## Using it from Python

- `liso.parse` — `parse(buffer)` turns the bytes of one request head into a
  `Request` (`http_method`, `http_uri`, `http_version` and a list of
  `RequestHeader` with `name` and `value`); `Request.header(name)` looks a
  header up without regard to case. It raises `ParseError` (a `ValueError`)
  when the head is not terminated or is malformed: the request line must be
  exactly three parts separated by single spaces, the method and version at
  most 49 characters, the URI and each header name and value at most 4095.
  `find_header_end(buffer)` returns the offset just past the first CRLF CRLF,
  or `None`.
- `liso.logger` — `Logger(directory, now)` opens the access and error logs;
  `log_access(request, response_code, response_size)` and
  `log_error(level, message)` append records; it is a context manager that
  closes both files. `format_timestamp(moment)` gives the timestamp format.
- `liso.response` — `Responder(root, logger)` turns the bytes of a request
  into the bytes of the response with `handle_request(data)`;
  `handle_get`, `handle_head` and `resolve_path(uri)` are available on their
  own. `Status` lists the codes it answers with and `status_line(status)`
  builds the line that starts a response.
- `liso.server` — `LisoServer(host, port, responder, timeout)` runs the loop;
  `serve_once()` handles one round of ready sockets and returns how many were
  ready, `serve_forever()` keeps going until `close()`. `address` gives the
  bound address. `split_requests(data)` splits pipelined request heads.
- `liso.client` — `exchange(host, port, payload, out)` sends a payload,
  writes the exchange to `out` and returns the replies; `count_requests(data)`
  tells how many replies to expect.
- `liso.daemonize` — `acquire_lock(lock_file)` takes an exclusive lock on a
  file and writes this process id into it, returning the descriptor, or
  `None` when another process holds the lock. `daemonize(lock_file)` starts a
  new session, closes every open descriptor, points the standard ones at
  `/dev/null`, sets the umask to `027`, takes the lock (exiting quietly if
  another instance holds it) and then ignores `SIGCHLD` and catches `SIGHUP`
  and `SIGTERM`.

```python
from liso.parse import ParseError, parse

try:
    request = parse(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
except ParseError:
    print("bad request")
else:
    print(request.header("Host"))
```

## What it does not do

- `liso-server` has no daemon mode; `daemonize` is there for code that wants
  it, and it does not fork, so it detaches only as far as a new session does.
- Only the first 8192 bytes read at a time from a connection are looked at;
  request bodies are not read, and bytes after the last complete request
  head in a read are dropped.
- Every file is sent as `text/html`; there is no directory listing, no
  keep-alive handling and no HTTPS.