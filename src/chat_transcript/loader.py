"""Loader for exported chat messages.

Reads a JSON export into validated
:class:`~chat_transcript.models.message.CanonicalMessage` objects.  Two
layouts are accepted:

- a JSON array of messages;
- an object ``{"channelName": "...", "messages": [...]}``.

Structural duplicates are dropped and the result is sorted by
``created_at`` (stable), so it can be handed straight to the assembler.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from chat_transcript.exceptions import MessageLoadError
from chat_transcript.models.message import CanonicalMessage

logger = logging.getLogger(__name__)

_MESSAGES_ADAPTER = TypeAdapter(list[CanonicalMessage])

DEFAULT_CHANNEL_NAME = "channel"


@dataclass(frozen=True)
class MessageExport:
    """Top-level return type of the loader.

    Attributes:
        messages: Messages in ascending ``created_at`` order.
        channel_name: Channel name from the export, or ``"channel"``.
        duplicates_dropped: Number of structurally equal messages removed.
        source: File path of the export, or ``"<string>"``.
    """

    messages: list[CanonicalMessage] = field(default_factory=list)
    channel_name: str = DEFAULT_CHANNEL_NAME
    duplicates_dropped: int = 0
    source: str = "<string>"


def drop_duplicates(messages: list[CanonicalMessage]) -> list[CanonicalMessage]:
    """Remove messages equal to an earlier one, keeping first occurrences.

    Equality is model equality on the canonical fields, so key order in
    the source JSON never matters.  Candidates are bucketed by creation
    time since equal messages always share it.
    """
    buckets: dict[Any, list[CanonicalMessage]] = {}
    kept: list[CanonicalMessage] = []
    for message in messages:
        seen = buckets.setdefault(message.created_at, [])
        if any(message == other for other in seen):
            continue
        seen.append(message)
        kept.append(message)
    return kept


def parse_messages(text: str, source: str = "<string>") -> MessageExport:
    """Parse a JSON message export from a string.

    Args:
        text: JSON text in one of the accepted layouts.
        source: Label for the export origin (e.g. a file path).

    Returns:
        A :class:`MessageExport` with deduplicated, sorted messages.

    Raises:
        MessageLoadError: If the text is not valid JSON, has an
            unexpected layout, or fails model validation.
    """
    try:
        payload = json.loads(text) if text.strip() else []
    except json.JSONDecodeError as exc:
        raise MessageLoadError(f"Invalid JSON in {source}: {exc}", source=source) from exc

    channel_name = DEFAULT_CHANNEL_NAME
    if isinstance(payload, dict):
        channel_name = payload.get("channelName") or DEFAULT_CHANNEL_NAME
        payload = payload.get("messages", [])
    if not isinstance(payload, list):
        raise MessageLoadError(
            f"Expected a list of messages in {source}, got {type(payload).__name__}",
            source=source,
        )

    try:
        messages = _MESSAGES_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise MessageLoadError(
            f"Invalid message data in {source}: {exc.error_count()} error(s)\n{exc}",
            source=source,
        ) from exc

    unique = drop_duplicates(messages)
    dropped = len(messages) - len(unique)
    if dropped:
        logger.info("Dropped %d duplicate message(s) from %s", dropped, source)

    unique.sort(key=lambda m: m.created_at)
    logger.debug("Loaded %d messages from %s", len(unique), source)

    return MessageExport(
        messages=unique,
        channel_name=str(channel_name),
        duplicates_dropped=dropped,
        source=source,
    )


def load_messages(file_path: str | Path) -> MessageExport:
    """Load a message export file.

    Reads the file at *file_path* as UTF-8 text and delegates to
    :func:`parse_messages`.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        MessageLoadError: If the contents cannot be parsed or validated.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Message export not found: {path}")

    text = path.read_text(encoding="utf-8")
    return parse_messages(text, source=str(path))
