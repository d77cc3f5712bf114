"""Tests for package metadata and the public import surface."""

from __future__ import annotations

import chat_transcript


class TestPackage:
    """Top-level package attributes."""

    def test_version(self) -> None:
        assert chat_transcript.__version__ == "0.1.0"

    def test_public_names_importable(self) -> None:
        for name in chat_transcript.__all__:
            assert hasattr(chat_transcript, name), name

    def test_main_module_exposes_main(self) -> None:
        from chat_transcript.__main__ import main

        assert callable(main)
