"""Keeps one IRC session alive forever.

Each iteration starts a session task and races its stability signal against
its outcome. A session that stays up for a full stability window after its
first PING resets the backoff; anything shorter leaves it alone. Between
iterations the supervisor sleeps for the current delay and grows it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_not_exception_type,
    retry_if_result,
    stop_never,
)

from ..config.model import Settings
from ..constants import STABILITY_WINDOW_SECONDS
from ..errors.handling import log_error
from ..irc.session import IRCSession
from ..logs.logger import logger
from ..utils.helpers import format_duration
from .backoff import BackoffState


class Session(Protocol):
    async def run(self, stable: asyncio.Event) -> None: ...


SessionFactory = Callable[[Settings], Session]
Sleep = Callable[[float], Awaitable[None]]


class Supervisor:
    def __init__(
        self,
        settings: Settings,
        *,
        backoff: BackoffState | None = None,
        stability_window: float = STABILITY_WINDOW_SECONDS,
        session_factory: SessionFactory = IRCSession,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self.backoff = backoff or BackoffState()
        self.stability_window = stability_window
        self.session_factory = session_factory
        self.sleep = sleep
        self.attempts = 0
        self.current_session: Session | None = None
        self.last_outcome: BaseException | None = None

    async def run(self) -> None:
        """Run sessions until cancelled. Session errors never end the loop."""
        retrying = AsyncRetrying(
            sleep=self.sleep,
            stop=stop_never,
            wait=self._next_delay,
            # Every finished attempt is retried; only cancellation gets out.
            retry=retry_if_result(lambda _: True)
            | retry_if_not_exception_type(asyncio.CancelledError),
            before_sleep=self._log_sleep,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self.run_attempt()
        finally:
            logger.log_event(
                "supervisor", "stopped", level=logging.WARNING, user=self.settings.name
            )

    async def run_attempt(self) -> BaseException | None:
        """Run one session to completion and return its error, if any."""
        self.attempts += 1
        address = self.settings.address
        logger.log_event(
            "supervisor",
            "connect_attempt",
            user=self.settings.name,
            address=address,
            attempt=self.attempts,
        )
        stable = asyncio.Event()
        session = self.session_factory(self.settings)
        self.current_session = session
        session_task = asyncio.create_task(
            session.run(stable), name=f"duck-session-{self.attempts}"
        )
        signal_task = asyncio.create_task(stable.wait())
        try:
            await asyncio.wait(
                {session_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
            if stable.is_set():
                logger.log_event(
                    "supervisor", "connected", user=self.settings.name, address=address
                )
                await self._await_stability(session_task)
            await asyncio.wait({session_task})
        except asyncio.CancelledError:
            session_task.cancel()
            await asyncio.gather(session_task, return_exceptions=True)
            raise
        finally:
            signal_task.cancel()

        outcome = self._outcome_of(session_task)
        self.last_outcome = outcome
        if outcome is not None:
            log_error(
                "Session failed",
                outcome,
                {"address": address, "attempt": self.attempts},
            )
        else:
            logger.log_event(
                "supervisor",
                "session_finished",
                level=logging.WARNING,
                user=self.settings.name,
                address=address,
            )
        return outcome

    async def _await_stability(self, session_task: asyncio.Task[None]) -> None:
        done, _ = await asyncio.wait({session_task}, timeout=self.stability_window)
        if done:
            return
        self.backoff.reset()
        logger.log_event(
            "supervisor",
            "stable",
            user=self.settings.name,
            address=self.settings.address,
            delay=format_duration(self.backoff.current),
        )

    @staticmethod
    def _outcome_of(task: asyncio.Task[None]) -> BaseException | None:
        if task.cancelled():
            return asyncio.CancelledError(f"{task.get_name()} was cancelled")
        return task.exception()

    def _next_delay(self, retry_state: RetryCallState) -> float:
        return self.backoff.take()

    def _log_sleep(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.log_event(
            "supervisor",
            "sleeping",
            user=self.settings.name,
            duration=format_duration(delay),
            seconds=delay,
        )

    def get_health_snapshot(self) -> dict[str, Any]:
        snapshot: dict[str, Any] = {
            "address": self.settings.address,
            "attempts": self.attempts,
            "backoff": self.backoff.snapshot(),
            "last_error": repr(self.last_outcome) if self.last_outcome else None,
        }
        session = self.current_session
        if isinstance(session, IRCSession):
            snapshot["session"] = session.get_health_snapshot()
        return snapshot
