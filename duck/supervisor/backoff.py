"""Reconnect backoff state owned by the supervisor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..constants import BACKOFF_BASE_DELAY, BACKOFF_FACTOR, BACKOFF_MAX_DELAY


@dataclass(slots=True)
class BackoffState:
    base_delay: float = BACKOFF_BASE_DELAY
    factor: float = BACKOFF_FACTOR
    max_delay: float = BACKOFF_MAX_DELAY
    current: float = field(init=False)

    def __post_init__(self) -> None:
        if self.base_delay < 0:
            raise ValueError("base_delay must be >= 0")
        if self.factor < 1:
            raise ValueError("factor must be >= 1")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")
        self.current = self.base_delay

    def grow(self) -> float:
        """Multiply the delay by ``factor``, clamped to ``max_delay``."""
        self.current = min(self.current * self.factor, self.max_delay)
        return self.current

    def reset(self) -> None:
        if self.current != self.base_delay:
            logging.debug(f"♻️ Reconnect backoff reset to {self.base_delay}s")
        self.current = self.base_delay

    def take(self) -> float:
        """Return the delay to sleep now and grow it for the next failure."""
        delay = self.current
        self.grow()
        return delay

    def snapshot(self) -> dict[str, float]:  # pragma: no cover (simple accessor)
        return {
            "current": self.current,
            "base_delay": self.base_delay,
            "factor": self.factor,
            "max_delay": self.max_delay,
        }
