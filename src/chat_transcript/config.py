"""Configuration loading for chat-transcript.

Reads settings from environment variables (with .env support via
python-dotenv).  Every setting is optional; invalid values raise
:class:`ConfigError`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        timezone: IANA zone used for calendar days and clock times, or
            ``None`` for the system local zone.
        footer_text: Footer appended to every transcript, or ``None``.
        remove_emails: Redact email addresses by default.
    """

    log_level: str = "INFO"
    timezone: str | None = None
    footer_text: str | None = None
    remove_emails: bool = False

    def tzinfo(self) -> ZoneInfo | None:
        """Return the configured zone, or ``None`` for system local time."""
        return ZoneInfo(self.timezone) if self.timezone else None


def _parse_bool(env_var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {env_var}: {raw!r}")


def validate_timezone(name: str) -> str:
    """Return *name* if it is a known IANA zone.

    Raises:
        ConfigError: If the zone cannot be found.
    """
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Unknown timezone: {name!r}") from exc
    return name


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the project root
    is picked up automatically.

    Environment variables: ``LOG_LEVEL``, ``TIMEZONE``,
    ``TRANSCRIPT_FOOTER``, ``REMOVE_EMAILS``.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If ``TIMEZONE`` names an unknown zone or
            ``REMOVE_EMAILS`` is not a recognised boolean.
    """
    load_dotenv()

    values: dict[str, object] = {}

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    timezone = os.environ.get("TIMEZONE", "").strip()
    footer = os.environ.get("TRANSCRIPT_FOOTER", "").strip()
    remove_emails = os.environ.get("REMOVE_EMAILS", "").strip()

    if log_level:
        values["log_level"] = log_level
    if timezone:
        values["timezone"] = validate_timezone(timezone)
    if footer:
        values["footer_text"] = footer
    if remove_emails:
        values["remove_emails"] = _parse_bool("REMOVE_EMAILS", remove_emails)

    return Settings(**values)
