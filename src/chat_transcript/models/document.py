"""Document tree produced by the markup parser.

Two closed families of frozen dataclasses:

- inline runs (:data:`InlineRun`) -- typed spans of text inside a line.
- block nodes (:data:`BlockNode`) -- structural units of a message body.

Children are stored as tuples so every tree is immutable and strictly
tree-shaped.  A :class:`Document` is the ordered sequence of block nodes
for one message body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

# ---------------------------------------------------------------------------
# Inline runs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlainText:
    """Unformatted text, emitted verbatim."""

    text: str


@dataclass(frozen=True)
class Bold:
    children: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class Italic:
    children: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class Underline:
    children: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class Strikethrough:
    children: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class Spoiler:
    children: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class InlineCode:
    """Inline code span; contents are never parsed for formatting."""

    code: str


@dataclass(frozen=True)
class Link:
    """Masked link written as ``[label](url)``."""

    label: str
    url: str


@dataclass(frozen=True)
class RawUrl:
    url: str


@dataclass(frozen=True)
class UserMention:
    """Mention of a user.

    Attributes:
        user_id: Snowflake id taken from the markup.
        resolved_name: Display name looked up in the caller's user map,
            or ``None`` when the id is unknown.
    """

    user_id: str
    resolved_name: str | None = None

    @property
    def display(self) -> str:
        return self.resolved_name if self.resolved_name is not None else self.user_id


@dataclass(frozen=True)
class ChannelMention:
    channel_id: str


@dataclass(frozen=True)
class RoleMention:
    role_id: str


@dataclass(frozen=True)
class EveryoneMention:
    kind: Literal["everyone", "here"]


@dataclass(frozen=True)
class CustomEmoji:
    """Server emoji written as ``<:name:id>`` or ``<a:name:id>``."""

    name: str
    emoji_id: str
    animated: bool = False


@dataclass(frozen=True)
class Timestamp:
    """Timestamp markup ``<t:unix:style>``.

    Attributes:
        unix_seconds: Seconds since the Unix epoch.
        style: One of ``t T d D f F R``; ``"f"`` when the markup omits it.
    """

    unix_seconds: int
    style: str = "f"


InlineRun = Union[
    PlainText,
    Bold,
    Italic,
    Underline,
    Strikethrough,
    Spoiler,
    InlineCode,
    Link,
    RawUrl,
    UserMention,
    ChannelMention,
    RoleMention,
    EveryoneMention,
    CustomEmoji,
    Timestamp,
]

# Run types that own a list of child runs.
EMPHASIS_TYPES = (Bold, Italic, Underline, Strikethrough, Spoiler)


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class Heading:
    """A ``#``, ``##`` or ``###`` heading line."""

    level: int
    runs: tuple[InlineRun, ...] = ()


@dataclass(frozen=True)
class BlockQuote:
    """Quoted text, one run sequence per source line."""

    lines: tuple[tuple[InlineRun, ...], ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code block.  ``language`` is ``""`` when no tag was given."""

    code: str
    language: str = ""


BlockNode = Union[Paragraph, Heading, BlockQuote, CodeBlock]


@dataclass(frozen=True)
class Document:
    """Ordered block nodes for one message body.

    Attributes:
        blocks: Block nodes in source order.
        keys: Identity key for each block (same length as ``blocks``),
            unique within this document only.
    """

    blocks: tuple[BlockNode, ...] = ()
    keys: tuple[str, ...] = field(default=(), compare=False)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def keyed(self) -> list[tuple[str, BlockNode]]:
        """Return ``(key, block)`` pairs in document order."""
        return list(zip(self.keys, self.blocks))

    @property
    def is_empty(self) -> bool:
        return not self.blocks
