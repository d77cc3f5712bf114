"""Block segmenter for chat-message markup.

Splits a message body into block nodes in two steps:

1. :func:`split_code_blocks` pulls out fenced code blocks with a
   non-greedy match across the whole message.
2. :func:`segment_span` scans every remaining span line by line, building
   block quotes, headings and paragraphs.  Line content is handed to the
   inline formatter.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from chat_transcript.markup.inline import UserMap, format_inline
from chat_transcript.models.document import (
    BlockNode,
    BlockQuote,
    CodeBlock,
    Heading,
    Paragraph,
)

# ```lang\n...``` -- the language tag and the newline after it are optional.
_CODE_BLOCK_RE = re.compile(r"```(\w*)\n?(.*?)```", re.DOTALL)

_HEADING_RE = re.compile(r"^(#{1,3})\s+(.+)$")

QUOTE_PREFIX = "> "
MULTILINE_QUOTE_PREFIX = ">>> "


def split_code_blocks(text: str) -> Iterator[str | CodeBlock]:
    """Yield non-code spans and :class:`CodeBlock` nodes in source order.

    Empty spans between adjacent code blocks are skipped.  An unterminated
    fence is not a code block; it stays in the surrounding span.
    """
    last_end = 0
    for match in _CODE_BLOCK_RE.finditer(text):
        if match.start() > last_end:
            yield text[last_end : match.start()]
        yield CodeBlock(code=match.group(2), language=match.group(1))
        last_end = match.end()

    if last_end < len(text):
        yield text[last_end:]


def segment_span(span: str, user_map: UserMap | None = None) -> list[BlockNode]:
    """Segment one code-free span into block nodes.

    Args:
        span: Text containing no fenced code blocks.
        user_map: Mention lookup forwarded to the inline formatter.

    Returns:
        Block nodes in line order.
    """
    if not span:
        return []

    blocks: list[BlockNode] = []
    quote_lines: list[str] = []

    def _flush_quote() -> None:
        if quote_lines:
            blocks.append(
                BlockQuote(lines=tuple(format_inline(line, user_map) for line in quote_lines))
            )
            quote_lines.clear()

    lines = span.split("\n")
    for index, line in enumerate(lines):
        if line.startswith(QUOTE_PREFIX):
            quote_lines.append(line[len(QUOTE_PREFIX) :])
            continue

        # ">>> " quotes everything up to the end of the span.
        if line.startswith(MULTILINE_QUOTE_PREFIX):
            quote_lines.append(line[len(MULTILINE_QUOTE_PREFIX) :])
            quote_lines.extend(lines[index + 1 :])
            _flush_quote()
            return blocks

        _flush_quote()

        heading = _HEADING_RE.match(line)
        if heading:
            blocks.append(
                Heading(
                    level=len(heading.group(1)),
                    runs=format_inline(heading.group(2), user_map),
                )
            )
            continue

        if line:
            blocks.append(Paragraph(runs=format_inline(line, user_map)))

    _flush_quote()
    return blocks


def segment(text: str, user_map: UserMap | None = None) -> list[BlockNode]:
    """Segment a full message body into block nodes.

    Code blocks are extracted first; every other span goes through
    :func:`segment_span`.  The result keeps source order.
    """
    blocks: list[BlockNode] = []
    for part in split_code_blocks(text):
        if isinstance(part, CodeBlock):
            blocks.append(part)
        else:
            blocks.extend(segment_span(part, user_map))
    return blocks
