from liso.example import format_request, main
from liso.parse import Request, RequestHeader, parse


def test_format_request_without_headers():
    request = Request("GET", "/", "HTTP/1.1")
    assert format_request(request) == (
        "Http Method GET\nHttp Version HTTP/1.1\nHttp Uri /\n"
    )


def test_format_request_with_header():
    request = Request("HEAD", "/a", "HTTP/1.0", [RequestHeader("Host", "example.com")])
    lines = format_request(request).splitlines()
    assert lines[3:] == ["Request Header", "Header name Host Header Value example.com"]


def test_main_prints_parsed_file(tmp_path, capsys):
    data = b"GET /index.html HTTP/1.1\r\nHost: example.com\r\nAccept: */*\r\n\r\n"
    path = tmp_path / "sample"
    path.write_bytes(data)
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == format_request(parse(data))


def test_main_reports_parse_failure(tmp_path, capsys):
    path = tmp_path / "bad"
    path.write_bytes(b"GET / HTTP/1.1\r\n")
    assert main([str(path)]) == 1
    assert "Parsing Failed" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent")]) == 0
    assert "Failed to open the file" in capsys.readouterr().out