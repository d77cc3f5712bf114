"""Transcript data models.

These dataclasses describe the output of the message grouper and the
transcript assembler.  They are derived per render and never mutate the
source :class:`~chat_transcript.models.message.CanonicalMessage` objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from chat_transcript.models.document import Document
from chat_transcript.models.message import CanonicalMessage


@dataclass(frozen=True)
class GroupedMessage:
    """A message annotated with its visual grouping.

    Attributes:
        message: The source message (read-only).
        is_group_start: ``True`` when the message opens a new visual
            group (avatar and header are shown).
        date_key: Local calendar date of ``message.created_at`` as
            ``YYYY-MM-DD``.
        is_date_start: ``True`` for the first message of each calendar
            date; a date separator precedes it.
    """

    message: CanonicalMessage
    is_group_start: bool
    date_key: str
    is_date_start: bool = False


@dataclass(frozen=True)
class TranscriptOptions:
    """Options consumed by :func:`~chat_transcript.assembler.assemble`.

    Attributes:
        remove_emails: Redact email addresses and drop ``mailto:`` links
            from the serialized output.
        footer_text: Text appended as a final trailing block, if any.
        user_roles: Mapping of user id to a role label shown beside the
            author name.
    """

    remove_emails: bool = False
    footer_text: str | None = None
    user_roles: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class DateSeparator:
    """Divider inserted before the first message of a calendar date."""

    date_key: str
    label: str


@dataclass(frozen=True)
class MessageEntry:
    """One rendered message in the transcript.

    Attributes:
        key: Position-derived identity key (``msg-<index>``).
        grouped: Grouping annotations and the source message.
        document: Parsed body of the message.
        role_label: Role label from the options, if any.
        user_map: Mention lookup used for this transcript.
    """

    key: str
    grouped: GroupedMessage
    document: Document
    role_label: str | None = None
    user_map: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def message(self) -> CanonicalMessage:
        return self.grouped.message

    @property
    def is_group_start(self) -> bool:
        return self.grouped.is_group_start


TranscriptEntry = Union[DateSeparator, MessageEntry]


@dataclass(frozen=True)
class Transcript:
    """Top-level return type of the transcript assembler.

    Attributes:
        entries: Date separators and message entries in display order.
        html: Serialized HTML fragment, post-processed (redaction) and
            with the footer block appended.
        footer_text: Footer text that was appended, if any.
    """

    entries: tuple[TranscriptEntry, ...] = ()
    html: str = ""
    footer_text: str | None = None

    @property
    def messages(self) -> list[MessageEntry]:
        return [e for e in self.entries if isinstance(e, MessageEntry)]

    @property
    def separators(self) -> list[DateSeparator]:
        return [e for e in self.entries if isinstance(e, DateSeparator)]
