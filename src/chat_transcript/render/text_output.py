"""Plain-text transcript formatter.

Renders a :class:`~chat_transcript.models.transcript.Transcript` as
console-friendly text: a banner, date separators, one header line per
message group, indented message bodies, and a summary.

The primary entry point is :func:`format_transcript_text`, which returns
the formatted string.  :func:`print_transcript_text` is a convenience
wrapper that writes directly to stdout.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from datetime import datetime, tzinfo

from chat_transcript.assembler import redact_emails
from chat_transcript.dates import current_time, format_time, format_timestamp_style, to_local
from chat_transcript.models.document import (
    EMPHASIS_TYPES,
    BlockQuote,
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Document,
    EveryoneMention,
    Heading,
    InlineCode,
    InlineRun,
    Link,
    Paragraph,
    PlainText,
    RawUrl,
    RoleMention,
    Spoiler,
    Timestamp,
    UserMention,
)
from chat_transcript.models.transcript import DateSeparator, MessageEntry, Transcript
from chat_transcript.render.html_output import full_timestamp, reply_preview

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BANNER_WIDTH = 60
_SEPARATOR = "=" * _BANNER_WIDTH
_INDENT = "    "


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def format_transcript_text(
    transcript: Transcript,
    *,
    title: str = "channel",
    tz: tzinfo | None = None,
    now: datetime | None = None,
    remove_emails: bool = False,
) -> str:
    """Render a :class:`Transcript` as plain text.

    Args:
        transcript: The assembled transcript.
        title: Channel name shown in the banner.
        tz: Display zone for clock times.
        now: Reference time for relative timestamps.
        remove_emails: Apply the same email redaction as the HTML output.

    Returns:
        A multi-line string ready for console display.
    """
    reference = now if now is not None else current_time(tz)
    lines: list[str] = []

    _append_banner(lines, title)
    for entry in transcript.entries:
        if isinstance(entry, DateSeparator):
            _append_date_separator(lines, entry)
        else:
            _append_message(lines, entry, tz, reference)
    _append_summary(lines, transcript)
    if transcript.footer_text:
        lines.append(transcript.footer_text)
    lines.append(_SEPARATOR)

    text = "\n".join(lines)
    if remove_emails:
        text, _ = redact_emails(text)
    return text


def print_transcript_text(transcript: Transcript, **kwargs) -> None:
    """Format and print a :class:`Transcript` to stdout."""
    sys.stdout.write(format_transcript_text(transcript, **kwargs) + "\n")


# ---------------------------------------------------------------------------
# Internal formatters
# ---------------------------------------------------------------------------


def _append_banner(lines: list[str], title: str) -> None:
    lines.append(_SEPARATOR)
    lines.append(f"  #{title}")
    lines.append(_SEPARATOR)


def _append_date_separator(lines: list[str], separator: DateSeparator) -> None:
    lines.append("")
    lines.append(f"--- {separator.label} ---")


def _append_message(
    lines: list[str],
    entry: MessageEntry,
    tz: tzinfo | None,
    now: datetime,
) -> None:
    """Append a message: header on group start, then the indented body."""
    message = entry.message

    if entry.is_group_start:
        lines.append("")
        if message.reference is not None:
            author = message.reference.author
            name = author.name if author else "Unknown User"
            lines.append(f"  > {name}: {reply_preview(message)}")
        if message.interaction is not None:
            user = message.interaction.user
            name = user.name if user else "Unknown"
            lines.append(f"  {name} used /{message.interaction.name or ''}")
        header = f"  {message.author_display_name}"
        if entry.role_label:
            header += f" ({entry.role_label})"
        if message.is_bot:
            header += " [BOT]"
        header += f"  {full_timestamp(message.created_at, tz)}"
        lines.append(header)

    body = document_text(entry.document, now, tz)
    if message.edited_at is not None and body:
        body += " (edited)"
    if not entry.is_group_start and body:
        compact = format_time(to_local(message.created_at, tz))
        body = f"[{compact}] {body}"
    for line in body.split("\n") if body else []:
        lines.append(f"{_INDENT}{line}")

    for attachment in message.attachments:
        lines.append(f"{_INDENT}[attachment: {attachment.filename}] {attachment.url}")
    for embed in message.embeds:
        label = embed.title or (embed.author.name if embed.author else "") or "embed"
        lines.append(f"{_INDENT}[embed: {label}]")
    if message.components:
        lines.append(f"{_INDENT}[{len(message.components)} component(s)]")


def _append_summary(lines: list[str], transcript: Transcript) -> None:
    messages = transcript.messages
    lines.append("")
    lines.append("--- SUMMARY ---")
    lines.append(f"  Messages: {len(messages)}")
    lines.append(f"  Groups: {sum(1 for m in messages if m.is_group_start)}")
    lines.append(f"  Days: {len(transcript.separators)}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def runs_text(runs: Iterable[InlineRun], now: datetime, tz: tzinfo | None = None) -> str:
    """Flatten inline runs to the text a reader would see."""
    parts: list[str] = []
    for run in runs:
        if isinstance(run, PlainText):
            parts.append(run.text)
        elif isinstance(run, InlineCode):
            parts.append(f"`{run.code}`")
        elif isinstance(run, Link):
            parts.append(f"{run.label} <{run.url}>")
        elif isinstance(run, RawUrl):
            parts.append(run.url)
        elif isinstance(run, UserMention):
            parts.append(f"<@{run.display}>")
        elif isinstance(run, ChannelMention):
            parts.append("#channel")
        elif isinstance(run, RoleMention):
            parts.append("@role")
        elif isinstance(run, EveryoneMention):
            parts.append(f"@{run.kind}")
        elif isinstance(run, CustomEmoji):
            parts.append(f":{run.name}:")
        elif isinstance(run, Timestamp):
            try:
                parts.append(format_timestamp_style(run.unix_seconds, run.style, now, tz))
            except (OverflowError, ValueError, OSError):
                parts.append(f"<t:{run.unix_seconds}:{run.style}>")
        elif isinstance(run, Spoiler):
            parts.append(f"||{runs_text(run.children, now, tz)}||")
        elif isinstance(run, EMPHASIS_TYPES):
            parts.append(runs_text(run.children, now, tz))
    return "".join(parts)


def document_text(document: Document, now: datetime, tz: tzinfo | None = None) -> str:
    """Flatten a document to plain text, one block per line."""
    lines: list[str] = []
    for block in document.blocks:
        if isinstance(block, Paragraph):
            lines.append(runs_text(block.runs, now, tz))
        elif isinstance(block, Heading):
            lines.append(f"{'#' * block.level} {runs_text(block.runs, now, tz)}")
        elif isinstance(block, BlockQuote):
            lines.extend(f"> {runs_text(line, now, tz)}" for line in block.lines)
        elif isinstance(block, CodeBlock):
            lines.append(f"```{block.language}")
            lines.extend(block.code.rstrip("\n").split("\n"))
            lines.append("```")
    return "\n".join(lines)
