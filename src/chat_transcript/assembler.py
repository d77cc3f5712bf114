"""Transcript assembler.

Wires the message grouper, the document builder and the HTML serializer
together.  The top-level entry point is :func:`assemble`, which returns a
:class:`~chat_transcript.models.transcript.Transcript` holding both the
structured entries and the serialized, post-processed HTML fragment.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import datetime, tzinfo

from chat_transcript.dates import current_time
from chat_transcript.grouping import date_separator_label, group_messages
from chat_transcript.markup.document import build_document
from chat_transcript.models.message import CanonicalMessage
from chat_transcript.models.transcript import (
    DateSeparator,
    MessageEntry,
    Transcript,
    TranscriptEntry,
    TranscriptOptions,
)
from chat_transcript.render.html_output import RenderContext, render_entries, render_footer

logger = logging.getLogger(__name__)

EMAIL_REDACTION = "[EMAIL REDACTED]"

_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}", re.IGNORECASE)
_MAILTO_LINK_RE = re.compile(
    r"""<a[^>]*href=["']mailto:[^"']*["'][^>]*>.*?</a>""",
    re.IGNORECASE | re.DOTALL,
)


def build_user_map(messages: Sequence[CanonicalMessage]) -> dict[str, str]:
    """Map every author id to its display name (later messages win)."""
    return {message.author_id: message.author_display_name for message in messages}


def redact_emails(markup: str) -> tuple[str, int]:
    """Drop ``mailto:`` links, then replace email addresses.

    Returns:
        The redacted markup and the number of substitutions made.
    """
    markup, links = _MAILTO_LINK_RE.subn("", markup)
    markup, emails = _EMAIL_RE.subn(EMAIL_REDACTION, markup)
    return markup, links + emails


def build_entries(
    messages: Sequence[CanonicalMessage],
    options: TranscriptOptions,
    tz: tzinfo | None,
    now: datetime,
    user_map: dict[str, str],
) -> list[TranscriptEntry]:
    """Group *messages* and interleave date separators with message entries."""
    entries: list[TranscriptEntry] = []
    for index, grouped in enumerate(group_messages(messages, tz)):
        if grouped.is_date_start:
            entries.append(
                DateSeparator(
                    date_key=grouped.date_key,
                    label=date_separator_label(grouped.message.created_at, now, tz),
                )
            )
        entries.append(
            MessageEntry(
                key=f"msg-{index}",
                grouped=grouped,
                document=build_document(grouped.message.content, user_map),
                role_label=options.user_roles.get(grouped.message.author_id),
                user_map=user_map,
            )
        )
    return entries


def assemble(
    messages: Sequence[CanonicalMessage],
    options: TranscriptOptions | None = None,
    *,
    tz: tzinfo | None = None,
    now: datetime | None = None,
) -> Transcript:
    """Render a chronological message list into a transcript.

    Steps:

    1. Build the user map once from every message author.
    2. Group messages and emit a date separator before each new day.
    3. Parse each message body into a document.
    4. Serialize all entries to an HTML fragment.
    5. Redact emails when ``options.remove_emails`` is set.
    6. Append the footer block, if any.

    Messages are never reordered.

    Args:
        messages: Messages in ascending ``created_at`` order.
        options: Rendering options.  Defaults to :class:`TranscriptOptions`.
        tz: Zone for calendar days and clock times.  ``None`` uses the
            system local zone.
        now: Reference time for "Today"/"Yesterday" labels and relative
            timestamps.  Defaults to the wall clock.

    Returns:
        The assembled :class:`Transcript`.
    """
    opts = options if options is not None else TranscriptOptions()
    reference = now if now is not None else current_time(tz)

    user_map = build_user_map(messages)
    entries = build_entries(messages, opts, tz, reference, user_map)

    ctx = RenderContext(now=reference, tz=tz, user_map=user_map)
    markup = render_entries(entries, ctx)

    if opts.remove_emails:
        markup, redacted = redact_emails(markup)
        logger.debug("Redacted %d email occurrences", redacted)

    if opts.footer_text:
        markup += render_footer(opts.footer_text)

    logger.debug(
        "Assembled transcript: %d messages, %d entries, %d chars",
        len(messages),
        len(entries),
        len(markup),
    )
    return Transcript(entries=tuple(entries), html=markup, footer_text=opts.footer_text)
