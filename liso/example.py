"""Parse a request stored in a file and print its parts."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from liso.parse import ParseError, Request, parse

BUF_SIZE = 8192


def format_request(request: Request) -> str:
    """Describe the request line and each header, one item per line."""
    lines = [
        f"Http Method {request.http_method}",
        f"Http Version {request.http_version}",
        f"Http Uri {request.http_uri}",
    ]
    for header in request.headers:
        lines.append("Request Header")
        lines.append(f"Header name {header.name} Header Value {header.value}")
    return "\n".join(lines) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the parsed request found in the file named by the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("usage: liso-example <fileName>", file=sys.stderr)
        return 1
    try:
        with open(args[0], "rb") as handle:
            data = handle.read(BUF_SIZE)
    except OSError:
        print("Failed to open the file")
        return 0
    try:
        request = parse(data)
    except ParseError:
        print("Parsing Failed")
        return 1
    sys.stdout.write(format_request(request))
    return 0