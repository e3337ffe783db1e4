import os

import pytest

# Keep log output concise regardless of the developer's shell
os.environ.setdefault("DEBUG", "false")

from duck.config.model import Settings  # noqa: E402
from irc_fakes import FakeConnection  # noqa: E402


@pytest.fixture
def settings():
    """Settings with an away text and three channels."""
    return Settings(
        address="irc.test:6667",
        name="duck",
        away_text="Hi! Tell me about your problems",
        channels=["#a", "#b", "#c"],
    )


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def connector_for():
    """Build a connector coroutine returning the given fake connection."""

    def _make(connection):
        calls = []

        async def connector(host, port):
            calls.append((host, port))
            return connection

        connector.calls = calls
        return connector

    return _make
