"""Networked pixel game: wire protocol, TCP server and pygame client."""

__version__ = "0.1.0"
__all__ = ["protocol", "client", "server", "app"]