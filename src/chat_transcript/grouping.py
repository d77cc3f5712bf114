"""Message grouper.

Annotates a chronological message list with visual grouping flags.  A
message starts a new group when any of these holds:

- it is the first message;
- its author differs from the previous message's author;
- more than :data:`GROUP_WINDOW` passed since the previous message;
- it is a reply;
- it carries a slash-command interaction;
- its local calendar date differs from the previous message's.

Date separator labels are derived here as well, with the same calendar
day definition as the grouping rule.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from chat_transcript.dates import current_time, date_key, format_long_date, local_date
from chat_transcript.models.message import CanonicalMessage
from chat_transcript.models.transcript import GroupedMessage

logger = logging.getLogger(__name__)

GROUP_WINDOW = timedelta(minutes=7)


def is_group_start(
    current: CanonicalMessage,
    previous: CanonicalMessage | None,
    tz: tzinfo | None = None,
) -> bool:
    """Return whether *current* opens a new visual group after *previous*."""
    if previous is None:
        return True
    if previous.author_id != current.author_id:
        return True
    if current.created_at - previous.created_at > GROUP_WINDOW:
        return True
    # Replies and slash commands always get their own header.
    if current.reference is not None or current.interaction is not None:
        return True
    return date_key(previous.created_at, tz) != date_key(current.created_at, tz)


def group_messages(
    messages: Sequence[CanonicalMessage],
    tz: tzinfo | None = None,
) -> list[GroupedMessage]:
    """Compute grouping and date-boundary flags for *messages*.

    Args:
        messages: Messages in ascending ``created_at`` order.  The order
            is kept as given.
        tz: Zone that defines calendar days.  ``None`` uses the system
            local zone.

    Returns:
        One :class:`GroupedMessage` per input message, same order.
    """
    grouped: list[GroupedMessage] = []
    previous: CanonicalMessage | None = None
    last_key = ""

    for message in messages:
        key = date_key(message.created_at, tz)
        grouped.append(
            GroupedMessage(
                message=message,
                is_group_start=is_group_start(message, previous, tz),
                date_key=key,
                is_date_start=key != last_key,
            )
        )
        previous = message
        last_key = key

    logger.debug(
        "Grouped %d messages into %d groups",
        len(grouped),
        sum(1 for g in grouped if g.is_group_start),
    )
    return grouped


def format_date_label(day: date, today: date) -> str:
    """Return ``"Today"``, ``"Yesterday"`` or the long date for *day*."""
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    return format_long_date(day)


def date_separator_label(
    moment: datetime,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> str:
    """Label for the date separator shown before *moment*'s message.

    Args:
        moment: Creation time of the first message of the day.
        now: Reference "current" time.  Defaults to the wall clock.
        tz: Zone that defines calendar days.
    """
    reference = now if now is not None else current_time(tz)
    return format_date_label(local_date(moment, tz), local_date(reference, tz))
