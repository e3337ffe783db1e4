from __future__ import annotations

from typing import Any

from ..logging_config import log_structured_error
from .internal import (
    InternalError,
    NetworkError,
    ParsingError,
    ProtocolError,
)


def classify_error(error: BaseException) -> str:
    """Return the aggregation category for an exception."""
    if isinstance(error, NetworkError | OSError):
        return "network"
    if isinstance(error, ProtocolError):
        return "protocol"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str, error: BaseException, context: dict[str, Any] | None = None
) -> None:
    """Logs an error message with the associated exception details.

    The exception is classified first so the aggregator can group repeated
    failures (a server that keeps refusing connections shows up as a growing
    ``network`` count).

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    merged: dict[str, Any] = {}
    if isinstance(error, InternalError) and error.data:
        merged.update({k: v for k, v in error.data.items() if v is not None})
    if context:
        merged.update(context)
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {error}",
        exception=error,
        context=merged or None,
    )
