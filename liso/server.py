"""A select-driven HTTP server that answers each request head it receives."""

from __future__ import annotations

import argparse
import selectors
import socket
import sys
from typing import Optional, Sequence

from liso.logger import Logger
from liso.response import Responder

ECHO_PORT = 9999
BUF_SIZE = 8192
MAX_CLIENTS = 1024
DEFAULT_TIMEOUT = 30.0
_TERMINATOR = b"\r\n\r\n"


def split_requests(data: bytes) -> list[bytes]:
    """Split ``data`` into request heads, each ending with CRLF CRLF.

    Bytes after the last terminator are dropped.
    """
    pieces = []
    start = 0
    while (pos := data.find(_TERMINATOR, start)) != -1:
        end = pos + len(_TERMINATOR)
        pieces.append(bytes(data[start:end]))
        start = end
    return pieces


class LisoServer:
    """Accepts up to :data:`MAX_CLIENTS` connections and serves them in turn."""

    def __init__(
        self,
        host: str = "",
        port: int = ECHO_PORT,
        responder: Optional[Responder] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        self.responder = responder if responder is not None else Responder()
        self.timeout = timeout
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._listener.bind((host, port))
            self._listener.listen(5)
        except OSError:
            self._listener.close()
            raise
        self._selector = selectors.DefaultSelector()
        self._selector.register(self._listener, selectors.EVENT_READ)
        self._clients: list[socket.socket] = []
        self._closed = False

    @property
    def address(self) -> tuple[str, int]:
        """The address the server listens on."""
        return self._listener.getsockname()

    @property
    def clients(self) -> tuple[socket.socket, ...]:
        """The connections currently open."""
        return tuple(self._clients)

    def _accept(self) -> None:
        client, _ = self._listener.accept()
        if len(self._clients) >= MAX_CLIENTS:
            client.close()
            return
        self._clients.append(client)
        self._selector.register(client, selectors.EVENT_READ)

    def _drop(self, client: socket.socket) -> None:
        self._clients.remove(client)
        self._selector.unregister(client)
        try:
            client.close()
        except OSError:
            print("Failed closing socket.", file=sys.stderr)

    def _service(self, client: socket.socket) -> None:
        try:
            data = client.recv(BUF_SIZE)
        except OSError:
            data = b""
        if not data:
            self._drop(client)
            return
        try:
            for request in split_requests(data):
                client.sendall(self.responder.handle_request(request))
        except OSError:
            self._drop(client)

    def serve_once(self) -> int:
        """Wait for one round of activity and handle it.

        Returns the number of ready sockets, 0 on timeout.
        """
        events = self._selector.select(self.timeout)
        if not events:
            print("timeout")
            return 0
        ready = {key.fileobj for key, _ in events}
        # Connections accepted in this round are read in the next one.
        waiting = [client for client in self._clients if client in ready]
        if self._listener in ready:
            self._accept()
        for client in waiting:
            self._service(client)
        return len(events)

    def serve_forever(self) -> None:
        """Serve until the server is closed or waiting for sockets fails."""
        while not self._closed:
            try:
                self.serve_once()
            except (OSError, ValueError):
                if not self._closed:
                    print("select failed")
                break

    def close(self) -> None:
        """Close every client connection and the listening socket."""
        if self._closed:
            return
        self._closed = True
        for client in list(self._clients):
            self._drop(client)
        self._selector.close()
        self._listener.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the server until interrupted."""
    parser = argparse.ArgumentParser(prog="liso-server")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=ECHO_PORT)
    parser.add_argument("--root", default="static_site")
    parser.add_argument("--log-dir", default="logs")
    args = parser.parse_args(argv)

    logger: Optional[Logger]
    try:
        logger = Logger(args.log_dir)
    except OSError:
        print("Cannot R/W log files", file=sys.stderr)
        logger = None

    print("----- Echo Server -----")
    try:
        server = LisoServer(args.host, args.port, Responder(args.root, logger))
    except OSError:
        print("Failed binding socket.", file=sys.stderr)
        if logger is not None:
            logger.close()
        return 1

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.close()
        if logger is not None:
            logger.close()
    return 0