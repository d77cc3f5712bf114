"""Shared fixtures for chat-transcript tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from chat_transcript.log import PACKAGE_LOGGER
from chat_transcript.models.message import CanonicalMessage, User

ALICE = User(id="111", username="alice", displayName="Alice")
BOB = User(id="222", username="bob")


@pytest.fixture()
def monkeypatch_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set every chat-transcript environment variable to a valid value.

    Also patches ``load_dotenv`` so that a real ``.env`` file on disk does not
    override the test values.

    Returns the dict of variables so tests can inspect or override values.
    """
    monkeypatch.setattr("chat_transcript.config.load_dotenv", lambda *_a, **_kw: None)
    env_vars = {
        "LOG_LEVEL": "WARNING",
        "TIMEZONE": "Europe/Berlin",
        "TRANSCRIPT_FOOTER": "Exported for review",
        "REMOVE_EMAILS": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all chat-transcript environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("chat_transcript.config.load_dotenv", lambda *_a, **_kw: None)
    for key in ("LOG_LEVEL", "TIMEZONE", "TRANSCRIPT_FOOTER", "REMOVE_EMAILS"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Generator[None, None, None]:
    """Reset the package logger after each test to prevent handler leaks."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    original_handlers = logger.handlers[:]
    original_level = logger.level
    yield
    logger.handlers = original_handlers
    logger.setLevel(original_level)


@pytest.fixture()
def utc() -> timezone:
    return timezone.utc


@pytest.fixture()
def new_york() -> ZoneInfo:
    return ZoneInfo("America/New_York")


@pytest.fixture()
def make_message() -> Callable[..., CanonicalMessage]:
    """Return a factory for :class:`CanonicalMessage` objects.

    The factory takes the creation time as its first argument and accepts
    any other message field as a keyword.  The author defaults to Alice.
    """

    def _make(created_at: datetime, content: str = "hi", **fields) -> CanonicalMessage:
        fields.setdefault("author", ALICE)
        return CanonicalMessage(content=content, created_at=created_at, **fields)

    return _make
