"""Command line loading of ``Settings``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from ..constants import DEFAULT_AWAY_TEXT, DEFAULT_HOST, DEFAULT_NICK
from .model import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duck",
        description="Idle in IRC channels and stay connected no matter what.",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="IRC server as host:port (env DUCK_HOST, default %(default)s)",
    )
    parser.add_argument(
        "--nick",
        default=DEFAULT_NICK,
        help="IRC nickname (env DUCK_NICK, default %(default)s)",
    )
    parser.add_argument(
        "--away",
        default=DEFAULT_AWAY_TEXT,
        help="Away text, empty to stay present (env DUCK_AWAY)",
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Validate the settings and exit",
    )
    parser.add_argument("channels", nargs="*", help="Channels to join, in order")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Build ``Settings`` from parsed arguments.

    Raises:
        pydantic.ValidationError: If any value is malformed.
    """
    return Settings(
        address=args.host,
        name=args.nick,
        away_text=args.away,
        channels=list(args.channels),
    )


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    return settings_from_args(args)
