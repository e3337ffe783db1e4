"""
Logging configuration module for the duck IRC idler.

Provides a colorlog based root logger setup plus structured error logging
with aggregation, so a long-running process can report which kinds of
failures keep recurring.
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
import threading
import time
from collections import defaultdict
from typing import Any

import colorlog

_MAX_ERRORS_PER_TYPE = 1000


class ErrorAggregator:
    """Aggregates error occurrences per category for summary reporting."""

    def __init__(self) -> None:
        self.errors: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.lock = threading.Lock()
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        with self.lock:
            entries = self.errors[error_type]
            entries.append(
                {"timestamp": time.time(), "message": message, "context": context or {}}
            )
            if len(entries) > _MAX_ERRORS_PER_TYPE:
                del entries[:-_MAX_ERRORS_PER_TYPE]

    def get_error_summary(self) -> dict[str, Any]:
        """Get a summary of error patterns."""
        with self.lock:
            summary = {}
            current_time = time.time()
            runtime_hours = (current_time - self.start_time) / 3600
            for error_type, occurrences in self.errors.items():
                recent_count = len(
                    [e for e in occurrences if current_time - e["timestamp"] < 3600]
                )
                summary[error_type] = {
                    "total_count": len(occurrences),
                    "recent_count": recent_count,
                    "rate_per_hour": len(occurrences) / max(runtime_hours, 1),
                    "last_occurrence": occurrences[-1] if occurrences else None,
                }
            return summary

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            logging.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} in last hour, "
                f"{stats['rate_per_hour']:.1f}/hour"
            )
            if stats["last_occurrence"]:
                logging.warning(f"    Last: {stats['last_occurrence']['message']}")


# Global error aggregator instance
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: BaseException | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log an error with structured context and record it in the aggregator.

    Args:
        error_type: Category of the error (e.g., 'network', 'protocol')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    structured_message = f"[{error_type.upper()}] {message}"
    if exception:
        structured_message += f" | Exception: {type(exception).__name__}"
    if context:
        context_str = " | ".join(f"{k}={v}" for k, v in context.items())
        structured_message += f" | Context: {context_str}"

    logging.log(level, structured_message)
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Uses environment variables:
    - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
    """

    def __init__(self, stream=None) -> None:
        self.stream = stream or sys.stderr

    @staticmethod
    def build_formatter() -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self) -> None:
        debug_env = os.environ.get("DEBUG", "").lower()
        log_level = logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(self.build_formatter())

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)

        # asyncio is chatty at DEBUG about selector internals
        logging.getLogger("asyncio").setLevel(logging.WARNING)

        atexit.register(self._log_final_error_summary)

    def _log_final_error_summary(self) -> None:
        logging.info("📊 Final error summary before shutdown:")
        error_aggregator.log_summary_report()
