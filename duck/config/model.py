from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port_text = address.rpartition(":")
    if not sep or not host or not port_text:
        raise ValueError(f"address must look like host:port, got {address!r}")
    try:
        port = int(port_text)
    except ValueError as e:
        raise ValueError(f"invalid port {port_text!r} in address {address!r}") from e
    if not 0 < port < 65536:
        raise ValueError(f"port out of range in address {address!r}")
    # [::1]:6667 style IPv6 literals
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port


def normalize_channels(channels: Any) -> tuple[str, ...]:
    """Strip channel names, drop empty ones and duplicates, keep order."""
    if isinstance(channels, str):
        channels = [channels]
    if not isinstance(channels, list | tuple):
        raise ValueError("channels must be a list of names")
    cleaned = (c.strip() for c in channels if isinstance(c, str))
    return tuple(dict.fromkeys(c for c in cleaned if c))


class Settings(BaseModel):
    """Process-wide settings, immutable once built.

    Attributes:
        address: Server address as ``host:port``.
        name: Nickname, also used as username and real name.
        away_text: AWAY message sent after registration; empty disables it.
        channels: Channels to join, in order.
    """

    model_config = ConfigDict(frozen=True)

    address: str
    name: str = Field(min_length=1)
    away_text: str = ""
    channels: tuple[str, ...] = ()

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        v = v.strip()
        _split_address(v)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch.isspace() or ch == "\0" for ch in v) or v.startswith(":"):
            raise ValueError(
                "name must be a single word without NUL, not starting with ':'"
            )
        return v

    @field_validator("away_text")
    @classmethod
    def validate_away_text(cls, v: str) -> str:
        if any(ch in v for ch in "\r\n\0"):
            raise ValueError("away_text must be a single line without NUL characters")
        return v.strip()

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> tuple[str, ...]:
        channels = normalize_channels(v)
        for channel in channels:
            if (
                channel.startswith(":")
                or any(ch.isspace() or ch in ",\0" for ch in channel)
            ):
                raise ValueError(f"invalid channel name {channel!r}")
        return channels

    @property
    def host(self) -> str:
        return _split_address(self.address)[0]

    @property
    def port(self) -> int:
        return _split_address(self.address)[1]
