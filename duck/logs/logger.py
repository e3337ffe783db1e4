"""Structured event logger.

Events are identified by ``(domain, action)`` and rendered with the templates
from ``event_templates.json``. Output goes through the stdlib logger named
``duck`` so whatever handlers ``LoggerConfigurator`` installed on the root
logger apply.
"""

from __future__ import annotations

import logging
import os

_PREFIX_WIDTH = 24
_EVENT_NAME_WIDTH = 32


class BotLogger:
    def __init__(self, name: str = "duck") -> None:
        self.logger = logging.getLogger(name)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        # Local import to avoid cyclic import issues during module init.
        from .event_catalog import EVENT_TEMPLATES

        template = EVENT_TEMPLATES.get((domain, action))
        if template:
            try:
                human_text = template.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                human_text = template
        else:
            human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
            kwargs.setdefault("derived", True)
        self._log(level, event_name, human_text, **kwargs)

    def _log(
        self, level: int, event_name: str, human_text: str, **kwargs: object
    ) -> None:
        kw: dict[str, object] = dict(kwargs)
        user, channel = self._extract_reserved(kw)
        prefix = self._build_prefix(user, channel)
        if self._is_debug_enabled():
            msg = self._build_debug_message(event_name, prefix, human_text, kw)
        else:
            msg = f"{prefix} {human_text}"
        self.logger.log(level, msg)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(kwargs: dict[str, object]) -> tuple[str | None, str | None]:
        user_o = kwargs.pop("user", None)
        channel_o = kwargs.pop("channel", None)
        user = user_o if isinstance(user_o, str) else None
        channel = channel_o if isinstance(channel_o, str) else None
        return user, channel

    @staticmethod
    def _build_prefix(user: str | None, channel: str | None) -> str:
        user_label = user or "system"
        core = f"{user_label}{channel}" if channel else user_label
        return f"[{core.ljust(_PREFIX_WIDTH)[:_PREFIX_WIDTH]}]"

    @staticmethod
    def _build_debug_message(
        event_name: str, prefix: str, human_text: str, kwargs: dict[str, object]
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        if len(event_name) <= _EVENT_NAME_WIDTH:
            ev = event_name.ljust(_EVENT_NAME_WIDTH)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: _EVENT_NAME_WIDTH - 1] + "…"
        base = f"{ev} {prefix} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base


logger = BotLogger()
