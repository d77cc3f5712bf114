"""Document builder: the public entry point of the markup parser."""

from __future__ import annotations

import logging

from chat_transcript.markup.blocks import segment
from chat_transcript.markup.inline import UserMap
from chat_transcript.models.document import (
    BlockNode,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    Paragraph,
)

logger = logging.getLogger(__name__)

_KEY_PREFIXES: dict[type, str] = {
    Paragraph: "p",
    Heading: "h",
    BlockQuote: "bq",
    CodeBlock: "cb",
}


class _KeyCounter:
    """Identity-key generator scoped to a single :func:`build_document` call."""

    def __init__(self) -> None:
        self._next = 0

    def key_for(self, block: BlockNode) -> str:
        key = f"{_KEY_PREFIXES[type(block)]}-{self._next}"
        self._next += 1
        return key


def build_document(content: str, user_map: UserMap | None = None) -> Document:
    """Parse a message body into a :class:`Document`.

    Fenced code blocks are extracted first and interleaved, at their
    original positions, with the quotes, headings and paragraphs of the
    surrounding text.

    Args:
        content: Raw message markup.  Any string is accepted, including
            the empty string.
        user_map: Optional mapping of user id to display name for
            ``<@id>`` mentions.

    Returns:
        A new, immutable document.  Block keys start from zero on every
        call, so identical input always yields identical keys.
    """
    if not content:
        return Document()

    counter = _KeyCounter()
    blocks = tuple(segment(content, user_map))
    keys = tuple(counter.key_for(block) for block in blocks)

    logger.debug("Built document: %d chars -> %d blocks", len(content), len(blocks))
    return Document(blocks=blocks, keys=keys)
