"""Centralized internal error hierarchy.

Every failure that ends a session is raised as one of these so the supervisor
can log it with a meaningful category. Raw ``OSError`` / ``ValueError`` from
the asyncio stream layer are wrapped at the transport boundary.

Classes:
  InternalError          – Base for all internal errors.
  NetworkError           – Connection could not be opened, or a read/write failed.
  ConnectionClosedError  – The server closed the stream (EOF).
  ParsingError           – Malformed line on the wire.
  ProtocolError          – Server replied with something unexpected during handshake.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for transport failures (refused, reset, I/O error)."""


class ConnectionClosedError(NetworkError):
    """Exception raised when the server closes the connection."""


class ParsingError(InternalError):
    """Exception raised for lines that cannot be framed or parsed as IRC."""


class ProtocolError(InternalError):
    """Exception raised when the server sends an unexpected command.

    Attributes:
        command: The command the server actually sent.
    """

    def __init__(self, message: str, *, command: str | None = None) -> None:
        super().__init__(message, data={"command": command})
        self.command = command


__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectionClosedError",
    "ParsingError",
    "ProtocolError",
]
