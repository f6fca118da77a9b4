"""Access and error logs written to dated files."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from liso.parse import Request

CLIENT_IP = "www.cs.cmu.edu"


def get_client_ip() -> str:
    """Return the client address recorded in log lines."""
    return CLIENT_IP


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as ``month/day/year hour:minute:second``.

    The month is counted from zero and no field is zero-padded.
    """
    return (
        f"{moment.month - 1}/{moment.day}/{moment.year} "
        f"{moment.hour}:{moment.minute}:{moment.second}"
    )


class Logger:
    """Appends access and error records to files named after the start date.

    Every record carries the moment the logger was created.
    """

    def __init__(
        self,
        directory: Union[str, Path] = "logs",
        now: Optional[datetime] = None,
    ) -> None:
        self.now = now if now is not None else datetime.now()
        directory = Path(directory)
        stamp = f"{self.now.year}_{self.now.month - 1}_{self.now.day}"
        self.access_path = directory / f"access_{stamp}.log"
        self.error_path = directory / f"error_{stamp}.log"
        self._access = open(self.access_path, "a+", encoding="utf-8")
        try:
            self._error = open(self.error_path, "a+", encoding="utf-8")
        except OSError:
            self._access.close()
            raise

    def _prefix(self) -> str:
        return f"{get_client_ip()} -- [{format_timestamp(self.now)}]"

    def log_access(
        self, request: Optional[Request], response_code: int, response_size: int
    ) -> None:
        """Record one response; ``request`` is None for an unparsable request."""
        if request is None:
            summary = "BAD REQUEST"
        else:
            summary = f"{request.http_version} {request.http_uri} {request.http_method}"
        self._access.write(
            f'{self._prefix()} "{summary}" {response_code} {response_size}\n'
        )
        self._access.flush()

    def log_error(self, level: str, message: str) -> None:
        """Record an error message at the given level."""
        self._error.write(f"{self._prefix()} [{level}] \n{message}\n")
        self._error.flush()

    def close(self) -> None:
        """Close both log files."""
        self._access.close()
        self._error.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *args) -> None:
        self.close()