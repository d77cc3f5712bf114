"""Chat-message markup parser: inline runs, blocks and documents."""

from __future__ import annotations

from chat_transcript.markup.blocks import segment, segment_span, split_code_blocks
from chat_transcript.markup.document import build_document
from chat_transcript.markup.inline import PATTERNS, InlinePattern, UserMap, format_inline

__all__ = [
    "PATTERNS",
    "InlinePattern",
    "UserMap",
    "build_document",
    "format_inline",
    "segment",
    "segment_span",
    "split_code_blocks",
]
