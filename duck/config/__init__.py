"""Configuration package: settings model and command line loader."""

from .loader import build_parser, load_settings, settings_from_args
from .model import Settings, normalize_channels

__all__ = [
    "Settings",
    "build_parser",
    "load_settings",
    "normalize_channels",
    "settings_from_args",
]
