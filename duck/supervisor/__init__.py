"""Supervisor subsystem package.

Owns reconnect policy: the backoff state and the loop that restarts sessions.
"""

from .backoff import BackoffState
from .supervisor import Supervisor

__all__ = [
    "BackoffState",
    "Supervisor",
]
