"""General utility helper functions."""

from __future__ import annotations

__all__ = ["format_duration"]


def format_duration(total_seconds: int | float | None) -> str:
    """Return a human-friendly Hh Mm Ss string for a duration in seconds.

    Examples:
      0.3 -> "0.3s"
      65 -> "1m 5s"
      3605 -> "1h 0m 5s"
      21600 -> "6h 0m 0s"
    """
    if total_seconds is None:
        return "unknown"
    if total_seconds < 1:
        return f"{round(total_seconds, 3)}s"
    seconds = int(total_seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes, sec = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {sec}s"
    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m {sec}s"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h {minutes}m {sec}s"
