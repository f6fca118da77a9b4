"""A client that sends the contents of a file and prints the replies."""

from __future__ import annotations

import socket
import sys
from typing import Optional, Sequence, TextIO

BUF_SIZE = 8192
_TERMINATOR = b"\r\n\r\n"


def count_requests(data: bytes) -> int:
    """Return how many request heads ``data`` holds."""
    return data.count(_TERMINATOR)


def exchange(
    host: str, port, payload: bytes, out: Optional[TextIO] = None
) -> list[bytes]:
    """Send ``payload`` and read one reply per request head in it.

    Each exchange is written to ``out``; the replies are returned.
    """
    out = out if out is not None else sys.stdout
    family, kind, proto, _, address = socket.getaddrinfo(
        host, port, socket.AF_INET, socket.SOCK_STREAM
    )[0]
    replies = []
    with socket.socket(family, kind, proto) as sock:
        sock.connect(address)
        out.write("================Sending==============\n")
        out.write(payload.decode("latin-1"))
        sock.sendall(payload)
        for _ in range(count_requests(payload)):
            chunk = sock.recv(BUF_SIZE)
            if len(chunk) > 1:
                out.write("================Received==============\n")
                out.write(chunk.decode("latin-1"))
                replies.append(chunk)
    return replies


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Send a request file to a server: <server-ip> <port> <fileName>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 3:
        print("usage: liso-client <server-ip> <port> <fileName>", file=sys.stderr)
        return 1
    host, port, file_name = args
    try:
        with open(file_name, "rb") as handle:
            payload = handle.read(BUF_SIZE)
    except OSError:
        print("Failed to open the file")
        return 0
    try:
        exchange(host, port, payload)
    except socket.gaierror as exc:
        print(f"getaddrinfo error: {exc.strerror} ", file=sys.stderr)
        return 1
    except OSError:
        print("Connect", file=sys.stderr)
        return 1
    return 0