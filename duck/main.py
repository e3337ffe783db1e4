#!/usr/bin/env python3
"""
Main entry point for the duck IRC idler
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from .config import Settings, build_parser, settings_from_args
from .errors.handling import log_error
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .supervisor import Supervisor

EXIT_CONFIG_ERROR = 2


def _install_signal_handlers(task: asyncio.Task[None]) -> None:
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, task.cancel)
        except (NotImplementedError, RuntimeError):  # pragma: no cover - Windows
            return


async def main(settings: Settings) -> None:
    """Run the supervisor until the process is asked to stop."""
    logger.log_event("app", "start", user=settings.name)
    task = asyncio.current_task()
    if task is not None:
        _install_signal_handlers(task)
    try:
        await Supervisor(settings).run()
    except asyncio.CancelledError:
        logger.log_event("app", "shutdown", user=settings.name)


def run(argv: Sequence[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: On invalid configuration, after ``--check-config`` or on
            an unexpected top-level error.
    """
    LoggerConfigurator().configure()
    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        logger.log_event(
            "app", "config_invalid", level=logging.ERROR, error=_summarize(e)
        )
        sys.exit(EXIT_CONFIG_ERROR)

    if args.check_config:
        logger.log_event(
            "app", "config_ok", user=settings.name, channels=len(settings.channels)
        )
        sys.exit(0)

    try:
        asyncio.run(main(settings))
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        log_error("Top-level error", e)
        sys.exit(1)


def _summarize(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in item['loc'])}: {item['msg']}"
        for item in error.errors()
    )


if __name__ == "__main__":
    run()
