"""A small HTTP/1.1 static file server with a request parser, logs and a client."""

__version__ = "0.1.0"

__all__ = ["__version__"]