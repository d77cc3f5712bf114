"""chat-transcript: chat markup parsing and transcript assembly.

Parses chat-message markup into a typed document tree and turns a
chronological list of messages into a grouped, rendered transcript.
"""

from __future__ import annotations

from chat_transcript.assembler import assemble, build_user_map, redact_emails
from chat_transcript.exceptions import MessageLoadError
from chat_transcript.grouping import date_separator_label, group_messages
from chat_transcript.loader import MessageExport, load_messages, parse_messages
from chat_transcript.markup import build_document, format_inline, segment
from chat_transcript.models import (
    CanonicalMessage,
    Document,
    GroupedMessage,
    Transcript,
    TranscriptOptions,
)

__version__ = "0.1.0"

__all__ = [
    "CanonicalMessage",
    "Document",
    "GroupedMessage",
    "MessageExport",
    "MessageLoadError",
    "Transcript",
    "TranscriptOptions",
    "assemble",
    "build_document",
    "build_user_map",
    "date_separator_label",
    "format_inline",
    "group_messages",
    "load_messages",
    "parse_messages",
    "redact_emails",
    "segment",
]
