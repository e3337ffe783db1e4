"""One connection attempt: handshake, away status, joins, then PING/PONG.

A session never retries anything. The first error ends it and propagates to
whoever awaits ``run``; reconnecting is the supervisor's job.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..config.model import Settings
from ..constants import JOIN_PAUSE_SECONDS
from ..errors.internal import ProtocolError
from ..logs.logger import logger
from .connection import IRCConnection
from .models import (
    AWAY,
    JOIN,
    NICK,
    PING,
    PONG,
    RPL_WELCOME,
    USER,
    IRCMessage,
    SessionState,
)

Connector = Callable[[str, int], Awaitable[IRCConnection]]


class IRCSession:
    def __init__(
        self,
        settings: Settings,
        *,
        connector: Connector = IRCConnection.open,
        join_pause: float = JOIN_PAUSE_SECONDS,
    ) -> None:
        self.settings = settings
        self.connector = connector
        self.join_pause = join_pause
        self.state = SessionState.CONNECTING
        self.pings_answered = 0
        self.stability_signalled = False
        self.channels_requested: list[str] = []

    def _set_state(self, new_state: SessionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "session",
                "state_change",
                level=logging.DEBUG,
                user=self.settings.name,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def run(self, stable: asyncio.Event) -> None:
        """Drive the session until the connection fails.

        ``stable`` is set the first time the server sends a PING. The method
        only returns by raising: ``NetworkError`` for transport failures,
        ``ParsingError`` for malformed data, ``ProtocolError`` when the
        server does not welcome us.
        """
        try:
            connection = await self.connector(self.settings.host, self.settings.port)
            try:
                await self._register(connection)
                await self._await_welcome(connection)
                await self._set_status(connection)
                await self._join_channels(connection)
                await self._steady_state(connection, stable)
            finally:
                await connection.close()
        finally:
            logger.log_event(
                "session",
                "terminated",
                level=logging.DEBUG,
                user=self.settings.name,
                state=self.state.name,
            )
            self._set_state(SessionState.TERMINATED)

    async def _register(self, connection: IRCConnection) -> None:
        self._set_state(SessionState.REGISTERING)
        name = self.settings.name
        logger.log_event("session", "registering", level=logging.DEBUG, name=name)
        await connection.send(IRCMessage(NICK, [name]))
        await connection.send(IRCMessage(USER, [name, "0", "*"], trailing=name))

    async def _await_welcome(self, connection: IRCConnection) -> None:
        self._set_state(SessionState.AWAITING_WELCOME)
        message = await connection.receive()
        if message.command != RPL_WELCOME:
            raise ProtocolError(
                f"expected welcome, got {message.command!r}", command=message.command
            )
        logger.log_event(
            "session",
            "welcome",
            user=self.settings.name,
            server=message.prefix or self.settings.host,
        )

    async def _set_status(self, connection: IRCConnection) -> None:
        if not self.settings.away_text:
            return
        self._set_state(SessionState.SETTING_STATUS)
        await connection.send(IRCMessage(AWAY, trailing=self.settings.away_text))
        logger.log_event(
            "session", "away_set", level=logging.DEBUG, user=self.settings.name
        )

    async def _join_channels(self, connection: IRCConnection) -> None:
        self._set_state(SessionState.JOINING)
        for channel in self.settings.channels:
            await connection.send(IRCMessage(JOIN, [channel]))
            self.channels_requested.append(channel)
            logger.log_event(
                "session", "join_sent", user=self.settings.name, channel=channel
            )
            await asyncio.sleep(self.join_pause)

    async def _steady_state(
        self, connection: IRCConnection, stable: asyncio.Event
    ) -> None:
        self._set_state(SessionState.STEADY_STATE)
        while True:
            message = await connection.receive()
            if message.command == PING:
                await self._handle_ping(connection, message, stable)
            else:
                logger.log_event(
                    "session",
                    "ignored",
                    level=logging.DEBUG,
                    user=self.settings.name,
                    command=message.command,
                )

    async def _handle_ping(
        self, connection: IRCConnection, message: IRCMessage, stable: asyncio.Event
    ) -> None:
        if not self.stability_signalled:
            self.stability_signalled = True
            stable.set()
            logger.log_event("session", "first_ping", user=self.settings.name)
        await connection.send(
            IRCMessage(PONG, list(message.params), trailing=message.trailing)
        )
        self.pings_answered += 1
        logger.log_event(
            "session", "pong_sent", level=logging.DEBUG, user=self.settings.name
        )

    def get_health_snapshot(self) -> dict[str, Any]:
        return {
            "name": self.settings.name,
            "state": self.state.name,
            "stable": self.stability_signalled,
            "pings_answered": self.pings_answered,
            "channels_requested": list(self.channels_requested),
        }
