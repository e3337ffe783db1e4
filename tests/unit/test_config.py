"""Tests for the Settings model and command line loader."""

import pytest
from pydantic import ValidationError

from duck.config import Settings, build_parser, load_settings, normalize_channels
from duck.constants import DEFAULT_AWAY_TEXT, DEFAULT_HOST, DEFAULT_NICK
from duck.irc.models import IRCMessage
from duck.irc.parser import encode_irc_message


class TestSettings:
    def test_host_and_port_derived_from_address(self):
        settings = Settings(address="irc.libera.chat:6697", name="duck")
        assert settings.host == "irc.libera.chat"
        assert settings.port == 6697

    def test_ipv6_literal(self):
        settings = Settings(address="[::1]:6667", name="duck")
        assert settings.host == "::1"
        assert settings.port == 6667

    @pytest.mark.parametrize(
        "address", ["localhost", "localhost:", ":6667", "localhost:abc", "localhost:70000"]
    )
    def test_malformed_address_rejected(self, address):
        with pytest.raises(ValidationError):
            Settings(address=address, name="duck")

    @pytest.mark.parametrize("name", ["", "   ", "two words", ":colon", "du\0ck"])
    def test_bad_name_rejected(self, name):
        with pytest.raises(ValidationError):
            Settings(address="localhost:6667", name=name)

    def test_away_text_must_be_single_line(self):
        with pytest.raises(ValidationError):
            Settings(address="localhost:6667", name="duck", away_text="a\r\nQUIT")

    def test_away_text_rejects_nul(self):
        with pytest.raises(ValidationError):
            Settings(address="localhost:6667", name="duck", away_text="a\0b")

    def test_channels_keep_order_and_drop_duplicates(self):
        settings = Settings(
            address="localhost:6667",
            name="duck",
            channels=[" #b", "#a", "", "#b", "#c "],
        )
        assert settings.channels == ("#b", "#a", "#c")

    @pytest.mark.parametrize("channel", ["#a b", "#a,#b", ":oops", "#a\0b"])
    def test_unsendable_channel_rejected(self, channel):
        with pytest.raises(ValidationError):
            Settings(address="localhost:6667", name="duck", channels=[channel])

    def test_accepted_values_encode_on_the_wire(self):
        settings = Settings(
            address="localhost:6667",
            name="d[u]ck",
            away_text="Hi! Tell me about your problems :⊃",
            channels=["#a", "&local", "#c++"],
        )
        messages = [
            IRCMessage("NICK", [settings.name]),
            IRCMessage("USER", [settings.name, "0", "*"], trailing=settings.name),
            IRCMessage("AWAY", trailing=settings.away_text),
            *(IRCMessage("JOIN", [c]) for c in settings.channels),
        ]
        for message in messages:
            assert encode_irc_message(message).endswith(b"\r\n")

    def test_settings_are_frozen(self):
        settings = Settings(address="localhost:6667", name="duck")
        with pytest.raises(ValidationError):
            settings.name = "goose"

    def test_normalize_channels_accepts_single_string(self):
        assert normalize_channels("#solo") == ("#solo",)


class TestLoader:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.host == DEFAULT_HOST
        assert args.nick == DEFAULT_NICK
        assert args.away == DEFAULT_AWAY_TEXT
        assert args.channels == []
        assert args.check_config is False

    def test_load_settings_from_argv(self):
        settings = load_settings(
            ["--host", "irc.test:6667", "--nick", "quack", "--away", "", "#x", "#y"]
        )
        assert settings.address == "irc.test:6667"
        assert settings.name == "quack"
        assert settings.away_text == ""
        assert settings.channels == ("#x", "#y")

    def test_invalid_host_raises_validation_error(self):
        with pytest.raises(ValidationError):
            load_settings(["--host", "nohost"])
