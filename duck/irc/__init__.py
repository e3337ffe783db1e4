"""IRC subsystem package.

Contains the wire codec, the stream connection and the per-attempt session
state machine.
"""

from .connection import IRCConnection  # noqa: F401
from .models import IRCMessage, SessionState  # noqa: F401
from .parser import (  # noqa: F401
    encode_irc_message,
    format_irc_message,
    parse_irc_message,
)
from .session import IRCSession  # noqa: F401

__all__ = [
    "IRCConnection",
    "IRCMessage",
    "IRCSession",
    "SessionState",
    "encode_irc_message",
    "format_irc_message",
    "parse_irc_message",
]
