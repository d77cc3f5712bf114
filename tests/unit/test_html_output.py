"""Unit tests for the HTML fragment serializer.

Tests cover: inline runs and blocks, escaping, timestamps (including the
out-of-range fallback), attachments, embeds, components, and message
chrome (headers, compact timestamps, replies, interactions).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from chat_transcript.markup.document import build_document
from chat_transcript.models.document import (
    CodeBlock,
    CustomEmoji,
    Document,
    Heading,
    PlainText,
    Timestamp,
    UserMention,
)
from chat_transcript.models.message import (
    ActionRow,
    Attachment,
    Button,
    CanonicalMessage,
    Container,
    Embed,
    EmbedField,
    EmbedFooter,
    Interaction,
    MessageReference,
    Separator,
    TextDisplay,
    User,
)
from chat_transcript.models.transcript import GroupedMessage, MessageEntry
from chat_transcript.render.html_output import (
    DEFAULT_EMBED_COLOR,
    RenderContext,
    attachment_kind,
    avatar_color,
    format_file_size,
    render_attachments,
    render_block,
    render_component,
    render_document,
    render_embed,
    render_message,
    render_run,
    reply_preview,
)

NOW = datetime(2024, 1, 5, 15, 0, tzinfo=timezone.utc)


@pytest.fixture()
def ctx() -> RenderContext:
    return RenderContext(now=NOW, tz=timezone.utc)


def _entry(message: CanonicalMessage, group_start: bool = True) -> MessageEntry:
    return MessageEntry(
        key="msg-0",
        grouped=GroupedMessage(message=message, is_group_start=group_start, date_key="2024-01-05"),
        document=build_document(message.content),
    )


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class TestDocuments:
    """Inline runs and block nodes."""

    def test_paragraphs_joined_by_break(self, ctx) -> None:
        assert render_document(build_document("a\nb"), ctx) == "a<br>b"

    def test_text_is_escaped(self, ctx) -> None:
        html = render_document(build_document("<script>alert(1)</script>"), ctx)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_nested_emphasis(self, ctx) -> None:
        html = render_document(build_document("**a *b* c**"), ctx)

        assert html == "<strong>a <em>b</em> c</strong>"

    def test_heading(self, ctx) -> None:
        html = render_block(Heading(level=2, runs=(PlainText("Hi"),)), ctx)

        assert html == '<div class="chat-heading chat-h2">Hi</div>'

    def test_code_block_escaped_with_language(self, ctx) -> None:
        html = render_block(CodeBlock(code="a < b\n", language="py"), ctx)

        assert html == (
            '<pre class="chat-code-block" data-language="py"><code>a &lt; b\n</code></pre>'
        )

    def test_quote_lines_joined_by_break(self, ctx) -> None:
        html = render_document(build_document("> one\n> two"), ctx)

        assert "one<br>two" in html
        assert html.startswith('<div class="chat-blockquote">')

    def test_no_page_shell(self, ctx) -> None:
        html = render_document(build_document("# T\nbody"), ctx)

        assert "<html" not in html
        assert "<style" not in html

    def test_empty_document(self, ctx) -> None:
        assert render_document(Document(), ctx) == ""


class TestInlineRuns:
    """Runs with special rendering."""

    def test_user_mention_shows_name(self, ctx) -> None:
        html = render_run(UserMention("111", "Alice"), ctx)

        assert html == '<span class="chat-mention" data-user-id="111">&lt;@Alice&gt;</span>'

    def test_unresolved_mention_shows_id(self, ctx) -> None:
        assert "&lt;@999&gt;</span>" in render_run(UserMention("999"), ctx)

    def test_animated_emoji_uses_gif(self, ctx) -> None:
        html = render_run(CustomEmoji(name="dance", emoji_id="456", animated=True), ctx)

        assert "/emojis/456.gif" in html
        assert 'alt=":dance:"' in html

    def test_timestamp_rendered_in_zone(self, ctx) -> None:
        html = render_run(Timestamp(0, "D"), ctx)

        assert html == '<span class="chat-timestamp">January 1, 1970</span>'

    def test_relative_timestamp(self, ctx) -> None:
        five_minutes_ago = int((NOW - timedelta(minutes=5)).timestamp())

        assert "5 minutes ago" in render_run(Timestamp(five_minutes_ago, "R"), ctx)

    def test_out_of_range_timestamp_falls_back(self, ctx) -> None:
        """An unrepresentable time renders the markup literally."""
        html = render_run(Timestamp(10**20, "f"), ctx)

        assert html == "&lt;t:100000000000000000000:f&gt;"

    def test_raw_url_is_link(self, ctx) -> None:
        html = render_document(build_document("go https://a.io/x"), ctx)

        assert '<a href="https://a.io/x" target="_blank"' in html


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


class TestAttachments:
    """Classification, sizes and layout of attachments."""

    def test_file_sizes(self) -> None:
        assert format_file_size(None) == ""
        assert format_file_size(512) == "512 B"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(2 * 1024 * 1024) == "2.00 MB"

    def test_kind_from_content_type(self) -> None:
        attachment = Attachment(url="https://cdn/x", filename="x", content_type="image/png")

        assert attachment_kind(attachment) == "image"

    def test_kind_from_extension(self) -> None:
        def kind(name: str) -> str:
            return attachment_kind(Attachment(url=f"https://cdn/{name}", filename=name))

        assert kind("clip.mp4?ex=1") == "video"
        assert kind("song.mp3") == "audio"
        assert kind("notes.zip") == "file"

    def test_image_grid_and_file_card(self) -> None:
        html = render_attachments(
            [
                Attachment(url="https://cdn/a.png", filename="a.png"),
                Attachment(url="https://cdn/b.pdf", filename="b.pdf", size=2048),
            ]
        )

        assert "chat-image-grid-1" in html
        assert '<div class="chat-file-icon">PDF</div>' in html
        assert "2.0 KB" in html

    def test_spoiler_image_overlay(self) -> None:
        html = render_attachments(
            [Attachment(url="https://cdn/a.png", filename="a.png", spoiler=True)]
        )

        assert "SPOILER" in html

    def test_no_attachments(self) -> None:
        assert render_attachments([]) == ""


# ---------------------------------------------------------------------------
# Embeds and components
# ---------------------------------------------------------------------------


class TestEmbeds:
    """Rich embed rendering."""

    def test_default_color_and_markup_description(self, ctx) -> None:
        html = render_embed(Embed(title="T", description="**bold**"), ctx)

        assert f"background-color: {DEFAULT_EMBED_COLOR}" in html
        assert "<strong>bold</strong>" in html

    def test_custom_color(self, ctx) -> None:
        assert "background-color: #ff0000" in render_embed(Embed(color=0xFF0000), ctx)

    def test_fields_and_footer_timestamp(self, ctx) -> None:
        embed = Embed(
            fields=[EmbedField(name="Key", value="*v*", inline=True)],
            footer=EmbedFooter(text="foot"),
            timestamp=NOW,
        )

        html = render_embed(embed, ctx)

        assert 'class="chat-embed-field inline"' in html
        assert "<em>v</em>" in html
        assert "foot" in html
        assert "Jan 5, 2024 3:00 PM" in html


class TestComponents:
    """Component rendering."""

    def test_link_button_is_anchor(self, ctx) -> None:
        row = ActionRow(components=[Button(style=5, label="Docs", url="https://x.io")])

        html = render_component(row, ctx)

        assert '<a href="https://x.io"' in html
        assert "Docs</a>" in html

    def test_disabled_button(self, ctx) -> None:
        row = ActionRow(components=[Button(label="No", disabled=True)])

        assert "<button" in render_component(row, ctx)
        assert " disabled>" in render_component(row, ctx)

    def test_container_recurses(self, ctx) -> None:
        container = Container(
            accent_color=0x00FF00,
            components=[TextDisplay(content="**hey**"), Separator(spacing=2)],
        )

        html = render_component(container, ctx)

        assert "background-color: #00ff00" in html
        assert "<strong>hey</strong>" in html
        assert "chat-separator-large" in html


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class TestMessages:
    """Message chrome."""

    def test_group_start_has_header(self, make_message, ctx) -> None:
        html = render_message(_entry(make_message(NOW, "hello")), ctx)

        assert "chat-message-group-start" in html
        assert '<span class="chat-message-author"' in html
        assert "01/05/2024 3:00 PM" in html

    def test_continuation_has_compact_time(self, make_message, ctx) -> None:
        html = render_message(_entry(make_message(NOW, "hello"), group_start=False), ctx)

        assert "chat-message-header" not in html
        assert '<span class="chat-compact-timestamp">3:00 PM</span>' in html

    def test_bot_badge_and_edited_marker(self, make_message, ctx) -> None:
        message = make_message(NOW, "beep", is_bot=True, edited_at=NOW)

        html = render_message(_entry(message), ctx)

        assert '<span class="chat-bot-badge">BOT</span>' in html
        assert "(edited)" in html

    def test_reply_and_interaction(self, make_message, ctx) -> None:
        message = make_message(
            NOW,
            "ok",
            reference=MessageReference(message_id="1", author=User(id="2", username="bo")),
            interaction=Interaction(name="roll", user=User(id="3", username="cy")),
        )

        html = render_message(_entry(message), ctx)

        assert "chat-message-has-reply" in html
        assert "Original message was deleted" in html
        assert '<span class="chat-slash-icon">/</span>roll' in html

    def test_fallback_avatar_uses_initial(self, make_message, ctx) -> None:
        html = render_message(_entry(make_message(NOW)), ctx)

        assert 'class="chat-avatar-fallback"' in html
        assert ">A</div>" in html

    def test_avatar_color_is_stable(self) -> None:
        assert avatar_color("1") == "hsl(49, 70%, 50%)"
        assert avatar_color("123456789") == avatar_color("123456789")


class TestReplyPreview:
    """Reply preview text."""

    def test_long_content_truncated(self, make_message) -> None:
        reference = MessageReference(message_id="1", content="x" * 200)

        preview = reply_preview(make_message(NOW, reference=reference))

        assert preview == "x" * 150 + "..."

    def test_attachment_only(self, make_message) -> None:
        reference = MessageReference(message_id="1", attachments=True)

        assert reply_preview(make_message(NOW, reference=reference)) == "Click to see attachment"

    def test_not_a_reply(self, make_message) -> None:
        assert reply_preview(make_message(NOW)) == ""
