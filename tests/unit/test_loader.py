"""Unit tests for the message export loader.

Tests cover: both accepted layouts, camelCase field aliases, sorting,
structural deduplication, empty input, and error reporting for invalid
JSON, unexpected layouts, schema violations and missing files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from chat_transcript.exceptions import MessageLoadError
from chat_transcript.loader import load_messages, parse_messages
from chat_transcript.models.message import ActionRow, Button

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _raw(created_at: str, content: str = "hi", user_id: str = "111") -> dict:
    return {
        "author": {"id": user_id, "username": "alice", "displayName": "Alice"},
        "content": content,
        "createdAt": created_at,
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestParseMessages:
    """parse_messages on in-memory JSON."""

    def test_list_layout(self) -> None:
        export = parse_messages(json.dumps([_raw("2024-01-05T15:00:00Z")]))

        assert len(export.messages) == 1
        assert export.channel_name == "channel"
        assert export.source == "<string>"

    def test_object_layout_with_channel_name(self) -> None:
        payload = {"channelName": "general", "messages": [_raw("2024-01-05T15:00:00Z")]}

        export = parse_messages(json.dumps(payload))

        assert export.channel_name == "general"
        assert export.messages[0].author_display_name == "Alice"

    def test_aliases_are_mapped(self) -> None:
        raw = _raw("2024-01-05T15:00:00Z")
        raw["editedAt"] = "2024-01-05T15:05:00Z"
        raw["isBot"] = True
        raw["authorRoleColor"] = 0x3498DB

        (message,) = parse_messages(json.dumps([raw])).messages

        assert message.edited_at is not None
        assert message.is_bot is True
        assert message.author_role_color == 0x3498DB

    def test_components_use_type_discriminator(self) -> None:
        raw = _raw("2024-01-05T15:00:00Z")
        raw["components"] = [
            {"type": 1, "components": [{"type": 2, "style": 5, "label": "Go", "url": "https://x"}]}
        ]

        (message,) = parse_messages(json.dumps([raw])).messages

        (row,) = message.components
        assert isinstance(row, ActionRow)
        assert isinstance(row.components[0], Button)
        assert row.components[0].url == "https://x"

    def test_sorted_by_creation_time(self) -> None:
        payload = [
            _raw("2024-01-05T15:02:00Z", "c"),
            _raw("2024-01-05T15:00:00Z", "a"),
            _raw("2024-01-05T15:01:00Z", "b"),
        ]

        export = parse_messages(json.dumps(payload))

        assert [m.content for m in export.messages] == ["a", "b", "c"]

    def test_duplicates_dropped_regardless_of_key_order(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        first = _raw("2024-01-05T15:00:00Z")
        reordered = dict(reversed(list(first.items())))

        with caplog.at_level(logging.INFO, logger="chat_transcript"):
            export = parse_messages(json.dumps([first, reordered]))

        assert len(export.messages) == 1
        assert export.duplicates_dropped == 1
        assert "Dropped 1 duplicate" in caplog.text

    def test_same_time_different_content_kept(self) -> None:
        payload = [_raw("2024-01-05T15:00:00Z", "a"), _raw("2024-01-05T15:00:00Z", "b")]

        export = parse_messages(json.dumps(payload))

        assert [m.content for m in export.messages] == ["a", "b"]
        assert export.duplicates_dropped == 0

    def test_mixed_naive_and_offset_timestamps(self) -> None:
        """Naive createdAt values are read as UTC and sort with aware ones."""
        payload = [
            _raw("2024-01-05T15:01:00", "b"),
            _raw("2024-01-05T15:00:00Z", "a"),
            _raw("2024-01-05T10:02:00-05:00", "c"),
        ]

        export = parse_messages(json.dumps(payload))

        assert [m.content for m in export.messages] == ["a", "b", "c"]
        assert all(m.created_at.utcoffset() is not None for m in export.messages)

    def test_empty_text(self) -> None:
        assert parse_messages("   ").messages == []


class TestParseErrors:
    """Errors raised at the loader boundary."""

    def test_invalid_json(self) -> None:
        with pytest.raises(MessageLoadError, match="Invalid JSON in export.json") as exc_info:
            parse_messages("{not json", source="export.json")

        assert exc_info.value.source == "export.json"

    def test_unexpected_layout(self) -> None:
        with pytest.raises(MessageLoadError, match="Expected a list of messages"):
            parse_messages('"just a string"')

    def test_schema_violation(self) -> None:
        with pytest.raises(MessageLoadError, match="Invalid message data"):
            parse_messages(json.dumps([{"content": "no author"}]))


class TestLoadMessages:
    """load_messages reads from disk."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "export.json"
        path.write_text(json.dumps([_raw("2024-01-05T15:00:00Z", "héllo")]), encoding="utf-8")

        export = load_messages(path)

        assert export.messages[0].content == "héllo"
        assert export.source == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Message export not found"):
            load_messages(tmp_path / "missing.json")
