"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

# Commands used by the session
NICK = "NICK"
USER = "USER"
AWAY = "AWAY"
JOIN = "JOIN"
PING = "PING"
PONG = "PONG"
RPL_WELCOME = "001"


class SessionState(Enum):
    CONNECTING = auto()
    REGISTERING = auto()
    AWAITING_WELCOME = auto()
    SETTING_STATUS = auto()
    JOINING = auto()
    STEADY_STATE = auto()
    TERMINATED = auto()


@dataclass(slots=True)
class IRCMessage:
    command: str
    params: list[str] = field(default_factory=list)
    trailing: str | None = None
    prefix: str | None = None
    tags: dict[str, str] = field(default_factory=dict)
