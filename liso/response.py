"""Building HTTP responses for parsed requests."""

from __future__ import annotations

import errno
import os
from enum import IntEnum
from pathlib import Path
from typing import Optional, Union

from liso.logger import Logger
from liso.parse import ParseError, Request, parse

HTTP_VERSION = "HTTP/1.1"
DEFAULT_ROOT = "static_site"


class Status(IntEnum):
    """Response codes the server sends, with their reason phrases."""

    phrase: str

    def __new__(cls, code: int, phrase: str) -> "Status":
        member = int.__new__(cls, code)
        member._value_ = code
        member.phrase = phrase
        return member

    OK = (200, "OK")
    BAD_REQUEST = (400, "Bad request")
    NOT_FOUND = (404, "Not Found")
    NOT_IMPLEMENTED = (501, "Not Implemented")
    VERSION_NOT_SUPPORTED = (505, "HTTP Version not supported")


def status_line(status: Status) -> str:
    """Return the status line for ``status``, CRLF included."""
    return f"{HTTP_VERSION} {status.value} {status.phrase}\r\n"


def _error_response(status: Status) -> bytes:
    return (status_line(status) + "\r\n").encode("ascii")


class Responder:
    """Serves files under ``root`` and logs what it does."""

    def __init__(
        self,
        root: Union[str, Path] = DEFAULT_ROOT,
        logger: Optional[Logger] = None,
    ) -> None:
        self.root = Path(root)
        self.logger = logger

    def _log_access(
        self, request: Optional[Request], status: Status, response: bytes
    ) -> None:
        if self.logger is not None:
            self.logger.log_access(request, status.value, len(response))

    def _not_found(self) -> bytes:
        if self.logger is not None:
            self.logger.log_error("error", os.strerror(errno.ENOENT))
        return _error_response(Status.NOT_FOUND)

    def handle_request(self, data: bytes) -> bytes:
        """Return the bytes to send back for one raw request."""
        try:
            request = parse(data)
        except ParseError:
            response = _error_response(Status.BAD_REQUEST)
            self._log_access(None, Status.BAD_REQUEST, response)
            return response

        if request.http_version != HTTP_VERSION:
            response = _error_response(Status.VERSION_NOT_SUPPORTED)
            self._log_access(request, Status.VERSION_NOT_SUPPORTED, response)
            return response

        if request.http_method == "GET":
            return self.handle_get(request)
        if request.http_method == "HEAD":
            return self.handle_head(request)
        if request.http_method == "POST":
            return bytes(data)

        response = _error_response(Status.NOT_IMPLEMENTED)
        self._log_access(request, Status.NOT_IMPLEMENTED, response)
        return response

    def resolve_path(self, uri: str) -> Optional[Path]:
        """Map ``uri`` to a file under the root, or None if it leaves the root."""
        relative = "index.html" if uri == "/" else uri.lstrip("/")
        root = self.root.resolve()
        target = (root / relative).resolve()
        if target != root and root not in target.parents:
            return None
        return target

    def _headers(self, size: int) -> str:
        return (
            status_line(Status.OK)
            + "Content-Type: text/html\r\n"
            + f"Content-Length: {size}\r\n"
            + "\r\n"
        )

    def _find_file(self, request: Request) -> Optional[Path]:
        path = self.resolve_path(request.http_uri)
        if path is None or not path.is_file():
            return None
        return path

    def handle_get(self, request: Request) -> bytes:
        """Return the file named by the request, headers and body."""
        path = self._find_file(request)
        if path is None:
            return self._not_found()
        body = path.read_bytes()
        response = self._headers(len(body)).encode("ascii") + body
        self._log_access(request, Status.OK, response)
        return response

    def handle_head(self, request: Request) -> bytes:
        """Return the headers a GET of the same request would carry."""
        path = self._find_file(request)
        if path is None:
            return self._not_found()
        response = self._headers(path.stat().st_size).encode("ascii")
        self._log_access(request, Status.OK, response)
        return response