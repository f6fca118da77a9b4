import errno
import os
from datetime import datetime

import pytest

from liso.logger import Logger
from liso.response import Responder, Status, status_line

CONTENT = b"<html><body>hello</body></html>"


@pytest.fixture
def site(tmp_path):
    root = tmp_path / "static_site"
    root.mkdir()
    (root / "index.html").write_bytes(CONTENT)
    (root / "page.html").write_bytes(b"<p>page</p>")
    (tmp_path / "outside.txt").write_bytes(b"hidden")
    return root


@pytest.fixture
def logger(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    with Logger(log_dir, datetime(2024, 1, 15, 9, 5, 7)) as log:
        yield log


def _split(response):
    head, _, body = response.partition(b"\r\n\r\n")
    return head.split(b"\r\n"), body


def test_status_lines():
    assert status_line(Status.OK) == "HTTP/1.1 200 OK\r\n"
    assert status_line(Status.NOT_FOUND) == "HTTP/1.1 404 Not Found\r\n"
    assert Status.NOT_IMPLEMENTED == 501
    assert Status.VERSION_NOT_SUPPORTED.phrase == "HTTP Version not supported"


def test_get_root_serves_index(site, logger):
    responder = Responder(site, logger)
    response = responder.handle_request(b"GET / HTTP/1.1\r\nHost: localhost\r\n\r\n")
    lines, body = _split(response)
    assert lines[0] == b"HTTP/1.1 200 OK"
    assert b"Content-Type: text/html" in lines
    assert b"Content-Length: %d" % len(CONTENT) in lines
    assert body == CONTENT
    access = logger.access_path.read_text(encoding="utf-8")
    assert f'"HTTP/1.1 / GET" 200 {len(response)}' in access


def test_get_named_file(site):
    response = Responder(site).handle_request(b"GET /page.html HTTP/1.1\r\n\r\n")
    assert _split(response)[1] == b"<p>page</p>"


def test_head_has_headers_but_no_body(site, logger):
    responder = Responder(site, logger)
    get_lines, _ = _split(responder.handle_request(b"GET / HTTP/1.1\r\n\r\n"))
    response = responder.handle_request(b"HEAD / HTTP/1.1\r\n\r\n")
    head_lines, body = _split(response)
    assert head_lines == get_lines
    assert body == b""


def test_missing_file_is_404_and_logs_error(site, logger):
    responder = Responder(site, logger)
    response = responder.handle_request(b"GET /nope.html HTTP/1.1\r\n\r\n")
    assert response == b"HTTP/1.1 404 Not Found\r\n\r\n"
    errors = logger.error_path.read_text(encoding="utf-8")
    assert "[error]" in errors
    assert os.strerror(errno.ENOENT) in errors


def test_head_missing_file_is_404(site):
    response = Responder(site).handle_request(b"HEAD /nope.html HTTP/1.1\r\n\r\n")
    assert response == b"HTTP/1.1 404 Not Found\r\n\r\n"


def test_path_outside_root_is_404(site):
    responder = Responder(site)
    assert responder.resolve_path("/../outside.txt") is None
    response = responder.handle_request(b"GET /../outside.txt HTTP/1.1\r\n\r\n")
    assert response == b"HTTP/1.1 404 Not Found\r\n\r\n"


def test_resolve_path_maps_root_to_index(site):
    responder = Responder(site)
    assert responder.resolve_path("/") == (site / "index.html").resolve()
    assert responder.resolve_path("/page.html") == (site / "page.html").resolve()


def test_bad_request(site, logger):
    response = Responder(site, logger).handle_request(b"garbage\r\n\r\n")
    assert response == b"HTTP/1.1 400 Bad request\r\n\r\n"
    access = logger.access_path.read_text(encoding="utf-8")
    assert f'"BAD REQUEST" 400 {len(response)}' in access


def test_unterminated_request_is_bad(site):
    response = Responder(site).handle_request(b"GET / HTTP/1.1\r\n")
    assert response == b"HTTP/1.1 400 Bad request\r\n\r\n"


def test_wrong_version(site, logger):
    response = Responder(site, logger).handle_request(b"GET / HTTP/1.0\r\n\r\n")
    assert response == b"HTTP/1.1 505 HTTP Version not supported\r\n\r\n"
    assert '"HTTP/1.0 / GET" 505' in logger.access_path.read_text(encoding="utf-8")


def test_unknown_method(site):
    response = Responder(site).handle_request(b"DELETE / HTTP/1.1\r\n\r\n")
    assert response == b"HTTP/1.1 501 Not Implemented\r\n\r\n"


def test_post_is_echoed(site):
    data = b"POST /form HTTP/1.1\r\nHost: localhost\r\n\r\n"
    assert Responder(site).handle_request(data) == data