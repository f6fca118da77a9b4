"""Parsing of HTTP request heads into :class:`Request` objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

MAX_TOKEN_LENGTH = 49
MAX_FIELD_LENGTH = 4095


class ParseError(ValueError):
    """Raised when a buffer does not hold a well-formed request head."""


@dataclass(frozen=True)
class RequestHeader:
    """A single ``Name: value`` header field."""

    name: str
    value: str


@dataclass
class Request:
    """The request line and header fields of an HTTP request."""

    http_method: str
    http_uri: str
    http_version: str
    headers: list[RequestHeader] = field(default_factory=list)

    def header(self, name: str) -> Optional[str]:
        """Return the value of the first header called ``name``, ignoring case."""
        wanted = name.lower()
        return next(
            (item.value for item in self.headers if item.name.lower() == wanted),
            None,
        )


class _State(IntEnum):
    START = 0
    CR = 1
    CRLF = 2
    CRLFCR = 3
    CRLFCRLF = 4


_CR = ord("\r")
_LF = ord("\n")

_EXPECTED = {
    _State.START: _CR,
    _State.CR: _LF,
    _State.CRLF: _CR,
    _State.CRLFCR: _LF,
}


def find_header_end(buffer: bytes) -> Optional[int]:
    """Return the offset just past the first CRLF CRLF, or None if there is none.

    A byte that breaks the sequence resets the scan without being
    reconsidered as the start of a new sequence.
    """
    state = _State.START
    for index, byte in enumerate(buffer):
        state = _State(state + 1) if byte == _EXPECTED[state] else _State.START
        if state is _State.CRLFCRLF:
            return index + 1
    return None


def _check_length(kind: str, value: str, limit: int) -> None:
    if len(value) > limit:
        raise ParseError(f"{kind} too long")


def _parse_request_line(line: str) -> tuple[str, str, str]:
    parts = line.split(" ")
    if len(parts) != 3 or not all(parts):
        raise ParseError(f"malformed request line: {line!r}")
    method, uri, version = parts
    _check_length("method", method, MAX_TOKEN_LENGTH)
    _check_length("uri", uri, MAX_FIELD_LENGTH)
    _check_length("version", version, MAX_TOKEN_LENGTH)
    return method, uri, version


def _parse_header(line: str) -> RequestHeader:
    name, separator, value = line.partition(":")
    name = name.strip()
    if not separator or not name or any(ch.isspace() for ch in name):
        raise ParseError(f"malformed header: {line!r}")
    value = value.strip(" \t")
    _check_length("header name", name, MAX_FIELD_LENGTH)
    _check_length("header value", value, MAX_FIELD_LENGTH)
    return RequestHeader(name, value)


def parse(buffer: bytes) -> Request:
    """Parse the request head at the start of ``buffer``.

    Raises :class:`ParseError` when the head is incomplete or malformed.
    """
    end = find_header_end(buffer)
    if end is None:
        raise ParseError("request head is not terminated by a blank line")
    lines = bytes(buffer[:end]).decode("latin-1").split("\r\n")
    # The head ends with CRLF CRLF, so the last two pieces are empty.
    method, uri, version = _parse_request_line(lines[0])
    headers = [_parse_header(line) for line in lines[1:-2]]
    return Request(method, uri, version, headers)