"""In-memory stand-ins for the IRC transport."""

from __future__ import annotations

import asyncio

from duck.errors.internal import ConnectionClosedError
from duck.irc.models import IRCMessage

WELCOME = IRCMessage("001", ["duck"], trailing="Welcome to the test network", prefix="irc.test")


def ping(*params: str, trailing: str | None = None) -> IRCMessage:
    return IRCMessage("PING", list(params), trailing=trailing)


class FakeConnection:
    """Scripted connection.

    ``incoming`` items are returned (or raised, for exceptions) by successive
    ``receive`` calls; once exhausted, ``receive`` raises
    ``ConnectionClosedError`` like a real EOF. ``fail_on`` maps a command to
    the exception its ``send`` should raise.
    """

    def __init__(
        self,
        incoming: list[IRCMessage | BaseException] | None = None,
        fail_on: dict[str, BaseException] | None = None,
    ) -> None:
        self.incoming = list(incoming or [])
        self.fail_on = dict(fail_on or {})
        self.sent: list[IRCMessage] = []
        self.events: list[str] = []
        self.closed = False

    async def send(self, message: IRCMessage) -> None:
        self.events.append(f"send:{message.command}")
        error = self.fail_on.get(message.command)
        if error is not None:
            raise error
        self.sent.append(message)

    async def receive(self) -> IRCMessage:
        self.events.append("receive")
        if not self.incoming:
            raise ConnectionClosedError("connection closed by server")
        item = self.incoming.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True

    def sent_commands(self) -> list[str]:
        return [m.command for m in self.sent]


class CountingEvent(asyncio.Event):
    def __init__(self) -> None:
        super().__init__()
        self.set_calls = 0

    def set(self) -> None:
        self.set_calls += 1
        super().set()
