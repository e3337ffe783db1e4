"""IRC line parsing and formatting."""

from __future__ import annotations

from ..constants import IRC_MAX_LINE_LENGTH
from ..errors.internal import ParsingError
from .models import IRCMessage

_CRLF = b"\r\n"


def parse_irc_message(raw_line: str) -> IRCMessage:
    """Parse one IRC line (without CRLF) into an ``IRCMessage``.

    Raises:
        ParsingError: If the line carries no command.
    """
    tags: dict[str, str] = {}
    prefix: str | None = None
    trailing: str | None = None
    line = raw_line.strip("\r\n")

    if line.startswith("@"):
        tags_part, _, line = line.partition(" ")
        tags = _parse_tags(tags_part[1:])

    line = line.lstrip(" ")
    if line.startswith(":"):
        prefix, _, line = line[1:].partition(" ")

    if line.startswith(":"):
        raise ParsingError("missing command", data={"raw": raw_line})
    if " :" in line:
        line, trailing = line.split(" :", 1)

    parts = line.split()
    if not parts:
        raise ParsingError("missing command", data={"raw": raw_line})
    return IRCMessage(
        command=parts[0].upper(),
        params=parts[1:],
        trailing=trailing,
        prefix=prefix,
        tags=tags,
    )


def _parse_tags(raw_tags: str) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = v
    return tags


def format_irc_message(message: IRCMessage) -> str:
    """Render a message as an IRC line without the trailing CRLF.

    Raises:
        ParsingError: If a field would break framing.
    """
    fields = [message.command, *message.params]
    if message.prefix:
        fields.insert(0, f":{message.prefix}")
    for value in fields:
        if not value or any(ch in value for ch in " \r\n\0"):
            raise ParsingError(
                "invalid command or parameter", data={"value": value}
            )
    for param in message.params:
        if param.startswith(":"):
            raise ParsingError(
                "parameter may not start with ':'", data={"value": param}
            )
    line = " ".join(fields)
    if message.trailing is not None:
        if any(ch in message.trailing for ch in "\r\n\0"):
            raise ParsingError(
                "trailing text may not contain CR, LF or NUL characters"
            )
        line = f"{line} :{message.trailing}"
    return line


def encode_irc_message(
    message: IRCMessage, max_length: int = IRC_MAX_LINE_LENGTH
) -> bytes:
    """Encode a message as UTF-8 with CRLF, truncated to ``max_length`` bytes."""
    data = format_irc_message(message).encode("utf-8")
    limit = max_length - len(_CRLF)
    if len(data) > limit:
        # Don't cut a multi-byte character in half
        data = data[:limit].decode("utf-8", errors="ignore").encode("utf-8")
    return data + _CRLF
