"""duck: an IRC idler that reconnects forever with exponential backoff."""

__version__ = "1.0.0"
