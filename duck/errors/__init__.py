"""Error types and error logging helpers."""

from .handling import classify_error, log_error
from .internal import (
    ConnectionClosedError,
    InternalError,
    NetworkError,
    ParsingError,
    ProtocolError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectionClosedError",
    "ParsingError",
    "ProtocolError",
    "classify_error",
    "log_error",
]
