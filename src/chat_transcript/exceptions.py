"""Custom exceptions for chat-transcript.

The markup parser and the grouper never raise for bad input; these
exceptions belong to the boundaries around them (reading message exports).
"""

from __future__ import annotations


class MessageLoadError(Exception):
    """Raised when a message export cannot be decoded or validated.

    Covers JSON decode failures and Pydantic schema validation errors.
    A missing file is reported as :class:`FileNotFoundError` instead.

    Attributes:
        source: Path or label of the export that failed to load.
    """

    def __init__(self, message: str, source: str = "<string>") -> None:
        super().__init__(message)
        self.source = source
