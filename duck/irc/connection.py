"""Line-oriented IRC transport over asyncio streams."""

from __future__ import annotations

import asyncio
import logging

from ..constants import IRC_MAX_LINE_LENGTH, IRC_READ_LIMIT
from ..errors.internal import ConnectionClosedError, NetworkError, ParsingError
from ..logs.logger import logger
from .models import IRCMessage
from .parser import encode_irc_message, parse_irc_message


class IRCConnection:
    """One open stream to an IRC server.

    ``send`` and ``receive`` translate stream failures into ``NetworkError``
    (``ConnectionClosedError`` on EOF) and framing problems into
    ``ParsingError``. Only one ``receive`` may be outstanding at a time.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        *,
        max_line_length: int = IRC_MAX_LINE_LENGTH,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.max_line_length = max_line_length

    @classmethod
    async def open(
        cls, host: str, port: int, *, limit: int = IRC_READ_LIMIT
    ) -> IRCConnection:
        logger.log_event(
            "connection", "opening", level=logging.DEBUG, host=host, port=port
        )
        try:
            reader, writer = await asyncio.open_connection(host, port, limit=limit)
        except OSError as e:
            raise NetworkError(
                f"could not connect to {host}:{port}: {e}",
                data={"host": host, "port": port},
            ) from e
        logger.log_event(
            "connection", "opened", level=logging.DEBUG, host=host, port=port
        )
        return cls(reader, writer)

    async def send(self, message: IRCMessage) -> None:
        data = encode_irc_message(message, self.max_line_length)
        logger.log_event(
            "connection",
            "sent",
            level=logging.DEBUG,
            line=data.decode("utf-8").rstrip("\r\n"),
        )
        try:
            self.writer.write(data)
            await self.writer.drain()
        except OSError as e:
            raise NetworkError(f"send failed: {e}") from e

    async def receive(self) -> IRCMessage:
        while True:
            try:
                raw = await self.reader.readline()
            except ValueError as e:
                # StreamReader raises ValueError when a line overruns the limit
                raise ParsingError(f"inbound line too long: {e}") from e
            except OSError as e:
                raise NetworkError(f"receive failed: {e}") from e
            if not raw.endswith(b"\n"):
                raise ConnectionClosedError("connection closed by server")
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if not line.strip():
                continue
            logger.log_event("connection", "received", level=logging.DEBUG, line=line)
            return parse_irc_message(line)

    async def close(self) -> None:
        try:
            self.writer.close()
            await self.writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "connection", "close_error", level=logging.WARNING, error=str(e)
            )
