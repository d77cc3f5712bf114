"""HTML fragment serializer for transcripts.

Turns documents, messages and transcript entries into HTML markup.  The
output is a fragment: it carries class names for an external stylesheet
but never the page shell, stylesheet or scripts.

All text and attribute values go through :func:`html.escape`.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from urllib.parse import urlparse

from chat_transcript.dates import (
    format_abbrev_date,
    format_short_date,
    format_time,
    format_timestamp_style,
    to_local,
)
from chat_transcript.markup.document import build_document
from chat_transcript.models.document import (
    BlockNode,
    BlockQuote,
    Bold,
    ChannelMention,
    CodeBlock,
    CustomEmoji,
    Document,
    EveryoneMention,
    Heading,
    InlineCode,
    InlineRun,
    Italic,
    Link,
    Paragraph,
    PlainText,
    RawUrl,
    RoleMention,
    Spoiler,
    Strikethrough,
    Timestamp,
    Underline,
    UserMention,
)
from chat_transcript.models.message import (
    ActionRow,
    Attachment,
    Button,
    CanonicalMessage,
    Component,
    Container,
    Embed,
    FileComponent,
    MediaGallery,
    Section,
    Separator,
    StringSelect,
    TextDisplay,
    Thumbnail,
)
from chat_transcript.models.transcript import DateSeparator, MessageEntry, TranscriptEntry

EMOJI_CDN = "https://cdn.discordapp.com/emojis"
DEFAULT_EMBED_COLOR = "#5865f2"
DEFAULT_AUTHOR_COLOR = "#f2f3f5"
REPLY_PREVIEW_CHARS = 150
LINK_BUTTON_STYLE = 5

_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)(\?.*)?$", re.IGNORECASE)
_VIDEO_RE = re.compile(r"\.(mp4|webm|mov|avi)(\?.*)?$", re.IGNORECASE)
_AUDIO_RE = re.compile(r"\.(mp3|ogg|wav|flac|m4a)(\?.*)?$", re.IGNORECASE)


@dataclass(frozen=True)
class RenderContext:
    """Inputs shared by every render call for one transcript.

    Attributes:
        now: Reference time for relative timestamps.
        tz: Display zone; ``None`` means the system local zone.
        user_map: Mention lookup for markup in embeds and components.
    """

    now: datetime
    tz: tzinfo | None = None
    user_map: Mapping[str, str] = field(default_factory=dict)


def _e(value: object) -> str:
    return html.escape(str(value))


def _link(url: str, inner: str, css: str = "chat-link") -> str:
    return (
        f'<a href="{_e(url)}" target="_blank" rel="noopener noreferrer" '
        f'class="{css}">{inner}</a>'
    )


def _hex_color(value: int) -> str:
    return f"#{value:06x}"


# ---------------------------------------------------------------------------
# Inline runs and documents
# ---------------------------------------------------------------------------


def _render_timestamp(run: Timestamp, ctx: RenderContext) -> str:
    try:
        text = format_timestamp_style(run.unix_seconds, run.style, ctx.now, ctx.tz)
    except (OverflowError, ValueError, OSError):
        # Out of datetime range: show the markup as written.
        return _e(f"<t:{run.unix_seconds}:{run.style}>")
    return f'<span class="chat-timestamp">{_e(text)}</span>'


def render_run(run: InlineRun, ctx: RenderContext) -> str:
    """Serialize a single inline run."""
    if isinstance(run, PlainText):
        return _e(run.text)
    if isinstance(run, Bold):
        return f"<strong>{render_runs(run.children, ctx)}</strong>"
    if isinstance(run, Italic):
        return f"<em>{render_runs(run.children, ctx)}</em>"
    if isinstance(run, Underline):
        return f"<u>{render_runs(run.children, ctx)}</u>"
    if isinstance(run, Strikethrough):
        return f"<del>{render_runs(run.children, ctx)}</del>"
    if isinstance(run, Spoiler):
        return f'<span class="chat-spoiler">{render_runs(run.children, ctx)}</span>'
    if isinstance(run, InlineCode):
        return f'<code class="chat-inline-code">{_e(run.code)}</code>'
    if isinstance(run, Link):
        return _link(run.url, _e(run.label))
    if isinstance(run, RawUrl):
        return _link(run.url, _e(run.url))
    if isinstance(run, CustomEmoji):
        ext = "gif" if run.animated else "webp"
        src = f"{EMOJI_CDN}/{run.emoji_id}.{ext}?size=48&quality=lossless"
        alt = _e(f":{run.name}:")
        return (
            f'<img src="{_e(src)}" alt="{alt}" title="{alt}" '
            f'class="chat-custom-emoji" draggable="false">'
        )
    if isinstance(run, Timestamp):
        return _render_timestamp(run, ctx)
    if isinstance(run, UserMention):
        return (
            f'<span class="chat-mention" data-user-id="{_e(run.user_id)}">'
            f"{_e(f'<@{run.display}>')}</span>"
        )
    if isinstance(run, ChannelMention):
        return (
            f'<span class="chat-mention chat-channel-mention" '
            f'data-channel-id="{_e(run.channel_id)}">#channel</span>'
        )
    if isinstance(run, RoleMention):
        return (
            f'<span class="chat-mention chat-role-mention" '
            f'data-role-id="{_e(run.role_id)}">@role</span>'
        )
    if isinstance(run, EveryoneMention):
        return f'<span class="chat-mention">@{_e(run.kind)}</span>'
    raise TypeError(f"Unknown inline run: {type(run).__name__}")


def render_runs(runs: Iterable[InlineRun], ctx: RenderContext) -> str:
    return "".join(render_run(run, ctx) for run in runs)


def render_block(block: BlockNode, ctx: RenderContext) -> str:
    """Serialize a single block node."""
    if isinstance(block, Paragraph):
        return render_runs(block.runs, ctx)
    if isinstance(block, Heading):
        return (
            f'<div class="chat-heading chat-h{block.level}">'
            f"{render_runs(block.runs, ctx)}</div>"
        )
    if isinstance(block, BlockQuote):
        lines = "<br>".join(render_runs(line, ctx) for line in block.lines)
        return (
            '<div class="chat-blockquote"><div class="chat-blockquote-bar"></div>'
            f'<div class="chat-blockquote-content">{lines}</div></div>'
        )
    if isinstance(block, CodeBlock):
        lang = f' data-language="{_e(block.language)}"' if block.language else ""
        return f'<pre class="chat-code-block"{lang}><code>{_e(block.code)}</code></pre>'
    raise TypeError(f"Unknown block node: {type(block).__name__}")


def render_document(document: Document, ctx: RenderContext) -> str:
    """Serialize a document; adjacent paragraphs are joined by ``<br>``."""
    parts: list[str] = []
    previous: BlockNode | None = None
    for block in document.blocks:
        if isinstance(block, Paragraph) and isinstance(previous, Paragraph):
            parts.append("<br>")
        parts.append(render_block(block, ctx))
        previous = block
    return "".join(parts)


def render_markup(text: str, ctx: RenderContext) -> str:
    """Parse and serialize a markup string (embed text, text displays)."""
    return render_document(build_document(text, ctx.user_map), ctx)


# ---------------------------------------------------------------------------
# Attachments
# ---------------------------------------------------------------------------


def format_file_size(size: int | None) -> str:
    """Human-readable size: ``512 B``, ``1.5 KB``, ``2.00 MB``."""
    if not size:
        return ""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.2f} MB"


def attachment_kind(attachment: Attachment) -> str:
    """Classify an attachment as ``image``, ``video``, ``audio`` or ``file``."""
    content_type = attachment.content_type or ""
    if content_type.startswith("image/") or _IMAGE_RE.search(attachment.url):
        return "image"
    if content_type.startswith("video/") or _VIDEO_RE.search(attachment.url):
        return "video"
    if content_type.startswith("audio/") or _AUDIO_RE.search(attachment.url):
        return "audio"
    return "file"


def _file_extension(filename: str) -> str:
    parts = filename.split(".")
    return parts[-1].upper() if len(parts) > 1 else ""


def _render_file_card(url: str, filename: str, size: int | None, spoiler: bool) -> str:
    css = "chat-file-attachment chat-file-spoiler" if spoiler else "chat-file-attachment"
    size_html = f'<span class="chat-file-size">{_e(format_file_size(size))}</span>'
    return (
        f'<div class="{css}">'
        f'<div class="chat-file-icon">{_e(_file_extension(filename))}</div>'
        f'<div class="chat-file-info">{_link(url, _e(filename), "chat-file-name")}'
        f"{size_html}</div></div>"
    )


def render_attachments(attachments: Sequence[Attachment]) -> str:
    """Serialize attachments grouped as images, videos, audio, then files."""
    by_kind: dict[str, list[Attachment]] = {"image": [], "video": [], "audio": [], "file": []}
    for attachment in attachments:
        by_kind[attachment_kind(attachment)].append(attachment)

    sections: list[str] = []
    images = by_kind["image"]
    if images:
        grid = f"chat-image-grid-{min(len(images), 4)}"
        items = []
        for image in images:
            css = "chat-attachment-image"
            overlay = ""
            if image.spoiler:
                css += " chat-spoiler-image"
                overlay = '<div class="chat-spoiler-overlay">SPOILER</div>'
            img = f'<img src="{_e(image.url)}" alt="{_e(image.filename)}" class="{css}">'
            items.append(_link(image.url, img + overlay, "chat-image-wrapper"))
        sections.append(f'<div class="chat-image-grid {grid}">{"".join(items)}</div>')

    for video in by_kind["video"]:
        sections.append(
            f'<div class="chat-video-wrapper"><video src="{_e(video.url)}" controls '
            f'preload="metadata" class="chat-attachment-video"><source src="{_e(video.url)}" '
            f'type="{_e(video.content_type or "video/mp4")}"></video></div>'
        )

    for audio in by_kind["audio"]:
        size = format_file_size(audio.size)
        size_html = f'<span class="chat-audio-size">{_e(size)}</span>' if size else ""
        sections.append(
            f'<div class="chat-audio-wrapper">'
            f'{_link(audio.url, _e(audio.filename), "chat-audio-filename")}{size_html}'
            f'<audio src="{_e(audio.url)}" controls preload="metadata"></audio></div>'
        )

    for item in by_kind["file"]:
        sections.append(_render_file_card(item.url, item.filename, item.size, item.spoiler))

    if not sections:
        return ""
    return f'<div class="chat-message-attachments">{"".join(sections)}</div>'


# ---------------------------------------------------------------------------
# Embeds
# ---------------------------------------------------------------------------


def render_embed(embed: Embed, ctx: RenderContext) -> str:
    """Serialize one rich embed."""
    color = _hex_color(embed.color) if embed.color else DEFAULT_EMBED_COLOR
    parts: list[str] = []

    if embed.thumbnail and embed.thumbnail.url:
        img = f'<img src="{_e(embed.thumbnail.url)}" alt="Thumbnail">'
        parts.append(f'<div class="chat-embed-thumbnail">{_link(embed.thumbnail.url, img)}</div>')

    if embed.author:
        icon = ""
        if embed.author.icon_url:
            icon = f'<img src="{_e(embed.author.icon_url)}" alt="" class="chat-embed-author-icon">'
        if embed.author.url:
            name = _link(embed.author.url, _e(embed.author.name), "chat-embed-author-name")
        else:
            name = f'<span class="chat-embed-author-name">{_e(embed.author.name)}</span>'
        parts.append(f'<div class="chat-embed-author">{icon}{name}</div>')

    if embed.title:
        title = _link(embed.url, _e(embed.title)) if embed.url else _e(embed.title)
        parts.append(f'<div class="chat-embed-title">{title}</div>')

    if embed.description:
        parts.append(
            f'<div class="chat-embed-description">{render_markup(embed.description, ctx)}</div>'
        )

    if embed.fields:
        fields = []
        for embed_field in embed.fields:
            css = "chat-embed-field inline" if embed_field.inline else "chat-embed-field"
            name = _e(embed_field.name)
            value = render_markup(embed_field.value, ctx)
            fields.append(
                f'<div class="{css}"><div class="chat-embed-field-name">{name}</div>'
                f'<div class="chat-embed-field-value">{value}</div></div>'
            )
        parts.append(f'<div class="chat-embed-fields">{"".join(fields)}</div>')

    if embed.image and embed.image.url:
        img = f'<img src="{_e(embed.image.url)}" alt="Embed image" class="chat-embed-image">'
        parts.append(f'<div class="chat-embed-image-container">{_link(embed.image.url, img)}</div>')

    if embed.video and embed.video.url:
        parts.append(
            f'<div class="chat-embed-video-container"><video src="{_e(embed.video.url)}" '
            f'controls preload="metadata" class="chat-embed-video"></video></div>'
        )

    if embed.footer or embed.timestamp:
        footer: list[str] = []
        if embed.footer and embed.footer.icon_url:
            footer.append(
                f'<img src="{_e(embed.footer.icon_url)}" alt="" class="chat-embed-footer-icon">'
            )
        if embed.footer:
            footer.append(f'<span class="chat-embed-footer-text">{_e(embed.footer.text)}</span>')
        if embed.footer and embed.timestamp:
            footer.append('<span class="chat-embed-footer-separator"> • </span>')
        if embed.timestamp:
            local = to_local(embed.timestamp, ctx.tz)
            stamp = f"{format_abbrev_date(local.date())} {format_time(local)}"
            footer.append(f'<span class="chat-embed-footer-timestamp">{_e(stamp)}</span>')
        parts.append(f'<div class="chat-embed-footer">{"".join(footer)}</div>')

    return (
        f'<div class="chat-embed"><div class="chat-embed-color-bar" '
        f'style="background-color: {color}"></div>'
        f'<div class="chat-embed-content">{"".join(parts)}</div></div>'
    )


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def _render_button(button: Button) -> str:
    css = f"chat-button chat-button-{button.style}"
    emoji = ""
    if button.emoji:
        if button.emoji.id:
            ext = "gif" if button.emoji.animated else "webp"
            src = f"{EMOJI_CDN}/{button.emoji.id}.{ext}?size=20"
            emoji = (
                f'<span class="chat-button-emoji"><img src="{_e(src)}" '
                f'alt="{_e(button.emoji.name or "")}" class="chat-button-emoji-img"></span>'
            )
        else:
            emoji = f'<span class="chat-button-emoji">{_e(button.emoji.name or "")}</span>'
    content = emoji + _e(button.label or "")

    if button.style == LINK_BUTTON_STYLE and button.url:
        return _link(button.url, content, f"{css} chat-button-link")
    disabled = " disabled" if button.disabled else ""
    return f'<button class="{css}"{disabled}>{content}</button>'


def _render_select(select: StringSelect) -> str:
    css = "chat-select disabled" if select.disabled else "chat-select"
    placeholder = select.placeholder or "Make a selection"
    return (
        f'<div class="chat-select-wrapper"><div class="{css}">'
        f'<span class="chat-select-text">{_e(placeholder)}</span></div></div>'
    )


def _render_thumbnail(thumbnail: Thumbnail) -> str:
    css = "chat-thumbnail chat-thumbnail-spoiler" if thumbnail.spoiler else "chat-thumbnail"
    overlay = '<div class="chat-spoiler-overlay-small">SPOILER</div>' if thumbnail.spoiler else ""
    return (
        f'<div class="{css}"><img src="{_e(thumbnail.media.url)}" '
        f'alt="{_e(thumbnail.description or "")}" class="chat-thumbnail-img">{overlay}</div>'
    )


def _filename_from_url(url: str) -> str:
    path = urlparse(url).path or url
    return path.rsplit("/", 1)[-1] or "file"


def render_component(component: Component, ctx: RenderContext) -> str:
    """Serialize one component, recursing into containers."""
    if isinstance(component, ActionRow):
        children = []
        for child in component.components:
            if isinstance(child, Button):
                children.append(_render_button(child))
            elif isinstance(child, StringSelect):
                children.append(_render_select(child))
        return f'<div class="chat-action-row">{"".join(children)}</div>'

    if isinstance(component, TextDisplay):
        return f'<div class="chat-text-display">{render_markup(component.content, ctx)}</div>'

    if isinstance(component, Section):
        texts = "".join(
            f'<div class="chat-section-text-item">{render_markup(td.content, ctx)}</div>'
            for td in component.components
        )
        accessory = ""
        if isinstance(component.accessory, Button):
            accessory = _render_button(component.accessory)
        elif isinstance(component.accessory, Thumbnail):
            accessory = _render_thumbnail(component.accessory)
        if accessory:
            accessory = f'<div class="chat-section-accessory">{accessory}</div>'
        return (
            f'<div class="chat-section"><div class="chat-section-text">{texts}</div>'
            f"{accessory}</div>"
        )

    if isinstance(component, Thumbnail):
        return _render_thumbnail(component)

    if isinstance(component, MediaGallery):
        count = len(component.items)
        grid = f"chat-media-gallery-{count}" if count <= 2 else "chat-media-gallery-multi"
        items = []
        for index, item in enumerate(component.items, start=1):
            css = "chat-media-gallery-item"
            overlay = ""
            if item.spoiler:
                css += " chat-media-gallery-spoiler"
                overlay = '<div class="chat-spoiler-overlay-small">SPOILER</div>'
            alt = item.description or f"Media {index}"
            img = f'<img src="{_e(item.url)}" alt="{_e(alt)}" class="chat-media-gallery-img">'
            items.append(f'<div class="{css}">{_link(item.url, img)}{overlay}</div>')
        return f'<div class="chat-media-gallery {grid}">{"".join(items)}</div>'

    if isinstance(component, FileComponent):
        url = component.file.url
        return _render_file_card(url, _filename_from_url(url), None, component.spoiler)

    if isinstance(component, Separator):
        spacing = "chat-separator-large" if component.spacing == 2 else "chat-separator-small"
        css = "chat-separator" if component.divider else "chat-separator-spacing"
        return f'<div class="{css} {spacing}"></div>'

    if isinstance(component, Container):
        css = "chat-container chat-container-spoiler" if component.spoiler else "chat-container"
        accent = ""
        if component.accent_color:
            accent = (
                f'<div class="chat-container-accent" '
                f'style="background-color: {_hex_color(component.accent_color)}"></div>'
            )
        children = "".join(render_component(child, ctx) for child in component.components)
        overlay = (
            '<div class="chat-container-spoiler-overlay">SPOILER</div>' if component.spoiler else ""
        )
        return (
            f'<div class="{css}">{accent}<div class="chat-container-content">{children}</div>'
            f"{overlay}</div>"
        )

    raise TypeError(f"Unknown component: {type(component).__name__}")


def render_components(components: Sequence[Component], ctx: RenderContext) -> str:
    if not components:
        return ""
    inner = "".join(render_component(c, ctx) for c in components)
    return f'<div class="chat-components">{inner}</div>'


# ---------------------------------------------------------------------------
# Messages and transcript entries
# ---------------------------------------------------------------------------


def avatar_color(user_id: str) -> str:
    """Stable fallback avatar colour derived from the user id."""
    acc = 0
    for char in user_id:
        acc = (ord(char) + ((acc << 5) - acc)) & 0xFFFFFFFF
    # Interpret as signed 32-bit before taking the hue.
    if acc >= 0x80000000:
        acc -= 0x100000000
    return f"hsl({abs(acc) % 360}, 70%, 50%)"


def author_color(message: CanonicalMessage) -> str:
    if message.author_role_color:
        return _hex_color(message.author_role_color)
    return DEFAULT_AUTHOR_COLOR


def reply_preview(message: CanonicalMessage) -> str:
    """Preview text for the message a reply points at."""
    reference = message.reference
    if reference is None:
        return ""
    if reference.content:
        if len(reference.content) > REPLY_PREVIEW_CHARS:
            return reference.content[:REPLY_PREVIEW_CHARS] + "..."
        return reference.content
    if reference.attachments:
        return "Click to see attachment"
    return "Original message was deleted"


def full_timestamp(moment: datetime, tz: tzinfo | None = None) -> str:
    """``01/05/2024 3:04 PM`` in the display zone."""
    local = to_local(moment, tz)
    return f"{format_short_date(local.date())} {format_time(local)}"


def _render_reply(message: CanonicalMessage) -> str:
    reference = message.reference
    author = reference.author if reference else None
    avatar = (
        f'<img src="{_e(author.avatar_url)}" alt="" class="chat-reply-avatar">'
        if author and author.avatar_url
        else '<div class="chat-reply-avatar-fallback"></div>'
    )
    name = author.name if author else "Unknown User"
    return (
        f'<div class="chat-reply-container"><div class="chat-reply-spine"></div>'
        f'<div class="chat-reply-content">{avatar}'
        f'<span class="chat-reply-username">{_e(name)}</span>'
        f'<span class="chat-reply-text">{_e(reply_preview(message))}</span></div></div>'
    )


def _render_interaction(message: CanonicalMessage) -> str:
    interaction = message.interaction
    user = interaction.user if interaction else None
    avatar = (
        f'<img src="{_e(user.avatar_url)}" alt="" class="chat-interaction-avatar">'
        if user and user.avatar_url
        else ""
    )
    name = user.name if user else "Unknown"
    command = ""
    if interaction and interaction.name:
        command = (
            f'<span class="chat-interaction-command"><span class="chat-slash-icon">/</span>'
            f"{_e(interaction.name)}</span>"
        )
    return (
        f'<div class="chat-interaction-container"><div class="chat-interaction-content">'
        f'{avatar}<span class="chat-interaction-username">{_e(name)}</span>'
        f'<span class="chat-interaction-label"> used </span>{command}</div></div>'
    )


def _render_header(entry: MessageEntry, ctx: RenderContext) -> str:
    message = entry.message
    role = (
        f'<span class="chat-message-role">({_e(entry.role_label)})</span>'
        if entry.role_label
        else ""
    )
    bot = '<span class="chat-bot-badge">BOT</span>' if message.is_bot else ""
    return (
        f'<div class="chat-message-header">'
        f'<span class="chat-message-author" style="color: {author_color(message)}">'
        f"{_e(message.author_display_name)}</span>{role}{bot}"
        f'<span class="chat-message-timestamp">'
        f"{_e(full_timestamp(message.created_at, ctx.tz))}</span></div>"
    )


def _render_gutter(entry: MessageEntry, ctx: RenderContext) -> str:
    message = entry.message
    if not entry.is_group_start:
        compact = format_time(to_local(message.created_at, ctx.tz))
        return (
            f'<div class="chat-message-gutter">'
            f'<span class="chat-compact-timestamp">{_e(compact)}</span></div>'
        )
    author = message.author
    if author.avatar_url:
        avatar = (
            f'<img src="{_e(author.avatar_url)}" alt="{_e(author.username)}" class="chat-avatar">'
        )
    else:
        initial = author.username[:1].upper()
        avatar = (
            f'<div class="chat-avatar-fallback" '
            f'style="background-color: {avatar_color(author.id)}">{_e(initial)}</div>'
        )
    return f'<div class="chat-message-gutter"><div class="chat-avatar-wrapper">{avatar}</div></div>'


def render_message(entry: MessageEntry, ctx: RenderContext) -> str:
    """Serialize one message entry with all of its sub-trees."""
    message = entry.message
    css = ["chat-message"]
    if entry.is_group_start:
        css.append("chat-message-group-start")
    if message.reference is not None:
        css.append("chat-message-has-reply")
    if message.interaction is not None:
        css.append("chat-message-has-interaction")

    parts: list[str] = [f'<div class="{" ".join(css)}" data-key="{_e(entry.key)}">']
    if message.reference is not None:
        parts.append(_render_reply(message))
    if message.interaction is not None:
        parts.append(_render_interaction(message))

    parts.append('<div class="chat-message-row">')
    parts.append(_render_gutter(entry, ctx))
    parts.append('<div class="chat-message-content">')
    if entry.is_group_start:
        parts.append(_render_header(entry, ctx))
    if message.content:
        edited = (
            '<span class="chat-message-edited"> (edited)</span>'
            if message.edited_at is not None
            else ""
        )
        parts.append(
            f'<div class="chat-message-text">{render_document(entry.document, ctx)}{edited}</div>'
        )
    parts.append(render_attachments(message.attachments))
    if message.embeds:
        embeds = "".join(render_embed(embed, ctx) for embed in message.embeds)
        parts.append(f'<div class="chat-message-embeds">{embeds}</div>')
    parts.append(render_components(message.components, ctx))
    parts.append("</div></div></div>")
    return "".join(parts)


def render_date_separator(separator: DateSeparator) -> str:
    return (
        f'<div class="chat-date-separator" data-date="{_e(separator.date_key)}">'
        f'<div class="chat-date-separator-line"></div>'
        f'<span class="chat-date-separator-text">{_e(separator.label)}</span>'
        f'<div class="chat-date-separator-line"></div></div>'
    )


def render_entries(entries: Iterable[TranscriptEntry], ctx: RenderContext) -> str:
    """Serialize transcript entries in order."""
    parts: list[str] = []
    for entry in entries:
        if isinstance(entry, DateSeparator):
            parts.append(render_date_separator(entry))
        else:
            parts.append(render_message(entry, ctx))
    return f'<div class="chat-messages">{"".join(parts)}</div>'


def render_footer(text: str) -> str:
    return f'<div class="chat-transcript-footer">{_e(text)}</div>'
