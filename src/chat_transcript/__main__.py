"""Entry point for ``python -m chat_transcript``.

Provides a CLI that renders a JSON message export into a transcript.
Uses stdlib :mod:`argparse` for argument parsing.

Subcommands:
    render -- Default. Render a message export as HTML or plain text.
    parse  -- Parse a markup string and print its block structure.

Exit codes:
    0 -- Completed successfully.
    1 -- An error occurred (file not found, invalid export, config error,
         output not writable).
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from chat_transcript.assembler import assemble
from chat_transcript.config import ConfigError, load_settings, validate_timezone
from chat_transcript.exceptions import MessageLoadError
from chat_transcript.loader import load_messages
from chat_transcript.log import setup_logging
from chat_transcript.markup.document import build_document
from chat_transcript.models.transcript import TranscriptOptions
from chat_transcript.render.text_output import format_transcript_text

logger = logging.getLogger("chat_transcript.cli")

_SUBCOMMANDS = {"render", "parse"}


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="chat-transcript",
        description="Render chat message exports as grouped transcripts.",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- "render" subcommand (default) --------------------------------
    render_parser = subparsers.add_parser(
        "render",
        help="Render a JSON message export.",
    )
    render_parser.add_argument(
        "messages_file",
        type=str,
        help="Path to the JSON message export.",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write the transcript to this file instead of stdout.",
    )
    render_parser.add_argument(
        "--format",
        choices=("html", "text"),
        default="html",
        help="Output format (default: html).",
    )
    render_parser.add_argument(
        "--footer",
        type=str,
        default=None,
        help="Footer text (defaults to TRANSCRIPT_FOOTER from config).",
    )
    render_parser.add_argument(
        "--remove-emails",
        action="store_true",
        default=None,
        help="Redact email addresses and drop mailto: links.",
    )
    render_parser.add_argument(
        "--role",
        action="append",
        default=[],
        metavar="USER_ID=LABEL",
        help="Role label shown beside a user's name. Repeatable.",
    )
    render_parser.add_argument(
        "--timezone",
        type=str,
        default=None,
        help="IANA zone for dates and times (defaults to TIMEZONE or system local).",
    )
    render_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    # --- "parse" subcommand -------------------------------------------
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a markup string and print its block structure.",
    )
    parse_parser.add_argument("text", type=str, help="Markup to parse.")
    parse_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, prepending ``render`` when no subcommand is given."""
    if not argv:
        argv = ["render"]
    elif argv[0] in {"-h", "--help"}:
        pass
    elif argv[0] not in _SUBCOMMANDS:
        argv = ["render", *argv]

    return parser.parse_args(argv)


def parse_roles(pairs: list[str]) -> dict[str, str]:
    """Turn ``USER_ID=LABEL`` strings into a mapping.

    Raises:
        ValueError: If a pair has no ``=`` or an empty side.
    """
    roles: dict[str, str] = {}
    for pair in pairs:
        user_id, sep, label = pair.partition("=")
        if not sep or not user_id.strip() or not label.strip():
            raise ValueError(f"Invalid role mapping {pair!r}; expected USER_ID=LABEL")
        roles[user_id.strip()] = label.strip()
    return roles


def _handle_render(args: argparse.Namespace) -> int:
    """Execute the ``render`` subcommand.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    try:
        settings = load_settings()
        timezone = (
            validate_timezone(args.timezone) if args.timezone else settings.timezone
        )
        roles = parse_roles(args.role)
        if not args.verbose:
            setup_logging(settings.log_level)
    except (ConfigError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    options = TranscriptOptions(
        remove_emails=(
            args.remove_emails if args.remove_emails is not None else settings.remove_emails
        ),
        footer_text=args.footer if args.footer is not None else settings.footer_text,
        user_roles=roles,
    )
    tz = replace(settings, timezone=timezone).tzinfo()

    try:
        export = load_messages(args.messages_file)
    except (FileNotFoundError, MessageLoadError) as exc:
        logger.error("Could not load %s", args.messages_file)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    transcript = assemble(export.messages, options, tz=tz)

    if args.format == "text":
        output = format_transcript_text(
            transcript,
            title=export.channel_name,
            tz=tz,
            remove_emails=options.remove_emails,
        )
    else:
        output = transcript.html

    if args.output is None:
        sys.stdout.write(output + "\n")
        return 0

    try:
        Path(args.output).write_text(output, encoding="utf-8")
    except OSError as exc:
        logger.error("Could not write %s", args.output)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.info("Wrote %d messages to %s", len(export.messages), args.output)
    return 0


def _handle_parse(args: argparse.Namespace) -> int:
    """Execute the ``parse`` subcommand: print one block per line."""
    document = build_document(args.text)
    for key, block in document.keyed():
        print(f"{key}: {block!r}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the chat-transcript CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    # --- Configure logging --------------------------------------------
    log_level = "DEBUG" if getattr(args, "verbose", False) else "INFO"
    setup_logging(log_level)

    # --- Dispatch to subcommand handler -------------------------------
    if args.command == "parse":
        return _handle_parse(args)

    return _handle_render(args)


if __name__ == "__main__":
    raise SystemExit(main())
