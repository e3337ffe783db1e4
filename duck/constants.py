"""
Configuration constants for the duck IRC idler

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same contract as ``_get_env_int`` but parses a float.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Command line defaults
DEFAULT_HOST = os.getenv("DUCK_HOST", "localhost:6667")
DEFAULT_NICK = os.getenv("DUCK_NICK", "duck")
DEFAULT_AWAY_TEXT = os.getenv("DUCK_AWAY", "Hi! Tell me about your problems :⊃")

# Reconnect backoff
BACKOFF_BASE_DELAY = _get_env_float(
    "BACKOFF_BASE_DELAY", 30.0
)  # First wait after a failed session (seconds)
BACKOFF_FACTOR = _get_env_float(
    "BACKOFF_FACTOR", 5.0
)  # Multiplier applied after every sleep
BACKOFF_MAX_DELAY = _get_env_float(
    "BACKOFF_MAX_DELAY", 6 * 3600.0
)  # Upper bound for the wait (6h)
STABILITY_WINDOW_SECONDS = _get_env_float(
    "STABILITY_WINDOW_SECONDS", 3600.0
)  # Session must survive this long after its first PING to reset backoff

# Session pacing
JOIN_PAUSE_SECONDS = _get_env_float(
    "JOIN_PAUSE_SECONDS", 0.3
)  # Pause after each JOIN so the server does not flag us as flooding

# Wire limits
IRC_MAX_LINE_LENGTH = _get_env_int(
    "IRC_MAX_LINE_LENGTH", 512
)  # Bytes per outgoing line, CRLF included (RFC 1459)
IRC_READ_LIMIT = _get_env_int(
    "IRC_READ_LIMIT", 8192
)  # StreamReader buffer limit; longer inbound lines are a framing error
