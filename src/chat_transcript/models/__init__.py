"""Data models for chat-transcript."""

from __future__ import annotations

from chat_transcript.models.document import (
    BlockNode,
    BlockQuote,
    Bold,
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Document,
    EveryoneMention,
    Heading,
    InlineCode,
    InlineRun,
    Italic,
    Link,
    Paragraph,
    PlainText,
    RawUrl,
    RoleMention,
    Spoiler,
    Strikethrough,
    Timestamp,
    Underline,
    UserMention,
)
from chat_transcript.models.message import (
    Attachment,
    CanonicalMessage,
    Embed,
    Interaction,
    MessageReference,
    User,
)
from chat_transcript.models.transcript import (
    DateSeparator,
    GroupedMessage,
    MessageEntry,
    Transcript,
    TranscriptOptions,
)

__all__ = [
    "Attachment",
    "BlockNode",
    "BlockQuote",
    "Bold",
    "CanonicalMessage",
    "ChannelMention",
    "CodeBlock",
    "CustomEmoji",
    "DateSeparator",
    "Document",
    "Embed",
    "EveryoneMention",
    "GroupedMessage",
    "Heading",
    "InlineCode",
    "InlineRun",
    "Interaction",
    "Italic",
    "Link",
    "MessageEntry",
    "MessageReference",
    "Paragraph",
    "PlainText",
    "RawUrl",
    "RoleMention",
    "Spoiler",
    "Strikethrough",
    "Timestamp",
    "Transcript",
    "TranscriptOptions",
    "Underline",
    "User",
    "UserMention",
]
