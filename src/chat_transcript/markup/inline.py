"""Inline formatter for chat-message markup.

Converts one line (or any segment without block structure) into a tuple
of typed inline runs from :mod:`chat_transcript.models.document`.

The formatter keeps an ordered table of :class:`InlinePattern` entries.
Each scan step searches every pattern against the *remaining* text and
takes the match with the smallest start offset; on a tie the pattern
listed first wins.  There is no longest-match preference and no
backtracking.  Emphasis-like patterns re-run the formatter on their
captured inner text, so constructs nest arbitrarily.

Malformed markup never raises: anything no pattern accepts is kept as
:class:`~chat_transcript.models.document.PlainText`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from chat_transcript.models.document import (
    Bold,
    ChannelMention,
    CustomEmoji,
    EveryoneMention,
    InlineCode,
    InlineRun,
    Italic,
    Link,
    PlainText,
    RawUrl,
    RoleMention,
    Spoiler,
    Strikethrough,
    Timestamp,
    Underline,
    UserMention,
)

UserMap = Mapping[str, str]

# Style used when a timestamp omits one: long date with short time.
DEFAULT_TIMESTAMP_STYLE = "f"


@dataclass(frozen=True)
class InlinePattern:
    """One entry of the inline pattern table.

    Attributes:
        name: Short identifier, used in debugging output and tests.
        regex: Compiled pattern searched against the remaining text.
        build: Turns a match into a run.  Receives the user map and a
            callback that formats nested text.
        literal: ``True`` when captured text is used as-is.
    """

    name: str
    regex: re.Pattern[str]
    build: Callable[[re.Match[str], UserMap, Callable[[str], tuple[InlineRun, ...]]], InlineRun]
    literal: bool = True


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _build_code(m, _users, _fmt):
    return InlineCode(m.group(1))


def _build_link(m, _users, _fmt):
    return Link(label=m.group(1), url=m.group(2))


def _emoji_builder(animated: bool):
    def build(m, _users, _fmt):
        name, emoji_id = m.group(1), m.group(2)
        # No id means there is no image to show; fall back to the short name.
        if not emoji_id:
            return PlainText(f":{name}:")
        return CustomEmoji(name=name, emoji_id=emoji_id, animated=animated)

    return build


def _build_timestamp(m, _users, _fmt):
    return Timestamp(unix_seconds=int(m.group(1)), style=m.group(2) or DEFAULT_TIMESTAMP_STYLE)


def _build_user_mention(m, users, _fmt):
    user_id = m.group(1)
    return UserMention(user_id=user_id, resolved_name=users.get(user_id))


def _build_channel_mention(m, _users, _fmt):
    return ChannelMention(m.group(1))


def _build_role_mention(m, _users, _fmt):
    return RoleMention(m.group(1))


def _build_everyone(m, _users, _fmt):
    return EveryoneMention(m.group(1))


def _build_url(m, _users, _fmt):
    return RawUrl(m.group(1))


def _build_bold_italic(m, _users, fmt):
    return Bold((Italic(fmt(m.group(1))),))


def _emphasis_builder(run_type):
    def build(m, _users, fmt):
        return run_type(fmt(m.group(1)))

    return build


# ---------------------------------------------------------------------------
# Pattern table (priority order, highest first)
# ---------------------------------------------------------------------------

PATTERNS: tuple[InlinePattern, ...] = (
    InlinePattern("inline_code", re.compile(r"`([^`]+)`"), _build_code),
    InlinePattern(
        "masked_link",
        re.compile(r"\[([^\]]+)\]\((https?://[^)]+)\)"),
        _build_link,
    ),
    InlinePattern("animated_emoji", re.compile(r"<a:(\w+):(\d*)>"), _emoji_builder(True)),
    InlinePattern("emoji", re.compile(r"<:(\w+):(\d*)>"), _emoji_builder(False)),
    InlinePattern("timestamp", re.compile(r"<t:(\d+)(?::([tTdDfFR]))?>"), _build_timestamp),
    InlinePattern("user_mention", re.compile(r"<@!?(\d+)>"), _build_user_mention),
    InlinePattern("channel_mention", re.compile(r"<#(\d+)>"), _build_channel_mention),
    InlinePattern("role_mention", re.compile(r"<@&(\d+)>"), _build_role_mention),
    InlinePattern("everyone", re.compile(r"@(everyone|here)\b"), _build_everyone),
    InlinePattern("url", re.compile(r"(https?://[^\s<>\])\"]+)"), _build_url),
    InlinePattern(
        "bold_italic",
        re.compile(r"\*\*\*(.+?)\*\*\*"),
        _build_bold_italic,
        literal=False,
    ),
    InlinePattern("bold", re.compile(r"\*\*(.+?)\*\*"), _emphasis_builder(Bold), literal=False),
    InlinePattern(
        "underline", re.compile(r"__(.+?)__"), _emphasis_builder(Underline), literal=False
    ),
    InlinePattern(
        "italic",
        re.compile(r"(?<![*\\])\*([^*\n]+?)\*(?!\*)"),
        _emphasis_builder(Italic),
        literal=False,
    ),
    InlinePattern(
        "italic_underscore",
        re.compile(r"(?<![\w\\])_([^_\n]+?)_(?!\w)"),
        _emphasis_builder(Italic),
        literal=False,
    ),
    InlinePattern(
        "strikethrough",
        re.compile(r"~~(.+?)~~"),
        _emphasis_builder(Strikethrough),
        literal=False,
    ),
    InlinePattern(
        "spoiler", re.compile(r"\|\|(.+?)\|\|"), _emphasis_builder(Spoiler), literal=False
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_next(
    text: str,
    patterns: tuple[InlinePattern, ...] = PATTERNS,
) -> tuple[InlinePattern, re.Match[str]] | None:
    """Return the winning pattern and match for *text*, or ``None``.

    The winner has the smallest start offset; ties go to the pattern that
    appears first in *patterns*.
    """
    best: tuple[InlinePattern, re.Match[str]] | None = None
    for pattern in patterns:
        match = pattern.regex.search(text)
        if match is None:
            continue
        # Strict comparison keeps the earlier pattern on a tie.
        if best is None or match.start() < best[1].start():
            best = (pattern, match)
            if match.start() == 0:
                break
    return best


def format_inline(text: str, user_map: UserMap | None = None) -> tuple[InlineRun, ...]:
    """Parse *text* into a tuple of inline runs.

    Args:
        text: Raw markup for one line or segment.  May be empty.
        user_map: Optional mapping of user id to display name used to
            resolve ``<@id>`` mentions.  Missing ids resolve to ``None``
            and render as the raw id.

    Returns:
        Runs in left-to-right order.  Adjacent plain text is never split
        except around a matched construct.
    """
    if not text:
        return ()

    users: UserMap = user_map if user_map is not None else {}

    def nested(inner: str) -> tuple[InlineRun, ...]:
        return format_inline(inner, users)

    runs: list[InlineRun] = []
    remaining = text

    while remaining:
        found = find_next(remaining)
        if found is None:
            runs.append(PlainText(remaining))
            break

        pattern, match = found
        if match.start() > 0:
            runs.append(PlainText(remaining[: match.start()]))
        runs.append(pattern.build(match, users, nested))
        remaining = remaining[match.end() :]

    return tuple(runs)
