"""Pydantic models for canonical chat messages.

Defines the vendor-neutral message record consumed by the transcript
core, plus the embed and component payloads it carries:

- :class:`CanonicalMessage` -- one chat message (author, content,
  timestamps, reply/interaction pointers, attachments, embeds,
  components).
- :class:`Embed` -- rich embed with author, fields, media and footer.
- :data:`Component` -- discriminated union of interactive and layout
  components, keyed on the integer ``type`` field.

JSON input uses the camelCase names of the export format (``createdAt``,
``avatarURL``, ...) for message-level fields and snake_case for embed and
component payloads.  Models are frozen; the core only reads them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_MESSAGE_CONFIG = ConfigDict(frozen=True, populate_by_name=True)


def _assume_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes so every timestamp is comparable."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Users, replies, interactions, attachments
# ---------------------------------------------------------------------------


class User(BaseModel):
    """Author of a message.

    Attributes:
        id: Snowflake id of the user.
        username: Account username.
        display_name: Server or global display name, if any.
        avatar_url: Avatar image URL, if any.
    """

    model_config = _MESSAGE_CONFIG

    id: str
    username: str
    display_name: str | None = Field(default=None, alias="displayName")
    avatar_url: str | None = Field(default=None, alias="avatarURL")

    @property
    def name(self) -> str:
        """Display name, falling back to the username."""
        return self.display_name or self.username


class MessageReference(BaseModel):
    """Reply pointer to an earlier message."""

    model_config = _MESSAGE_CONFIG

    message_id: str = Field(alias="messageId")
    channel_id: str | None = Field(default=None, alias="channelId")
    guild_id: str | None = Field(default=None, alias="guildId")
    author: User | None = None
    content: str | None = None
    attachments: bool = False


class Interaction(BaseModel):
    """Slash-command (or other application interaction) pointer."""

    model_config = _MESSAGE_CONFIG

    type: Literal[
        "APPLICATION_COMMAND", "MESSAGE_COMPONENT", "AUTOCOMPLETE", "MODAL_SUBMIT"
    ] = "APPLICATION_COMMAND"
    name: str | None = None
    user: User | None = None


class Attachment(BaseModel):
    """File attached to a message.

    Attributes:
        url: Download URL.
        filename: Original file name.
        size: Size in bytes, if known.
        content_type: MIME type such as ``image/png``, if known.
        width: Pixel width for images and videos.
        height: Pixel height for images and videos.
        spoiler: Whether the attachment is hidden behind a spoiler.
    """

    model_config = _MESSAGE_CONFIG

    url: str
    filename: str
    size: int | None = None
    content_type: str | None = Field(default=None, alias="contentType")
    width: int | None = None
    height: int | None = None
    spoiler: bool = False


# ---------------------------------------------------------------------------
# Embeds
# ---------------------------------------------------------------------------


class EmbedFooter(BaseModel):
    model_config = _MESSAGE_CONFIG

    text: str
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedAuthor(BaseModel):
    model_config = _MESSAGE_CONFIG

    name: str
    url: str | None = None
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedMedia(BaseModel):
    """Image, thumbnail or video reference inside an embed."""

    model_config = _MESSAGE_CONFIG

    url: str | None = None
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


class EmbedProvider(BaseModel):
    model_config = _MESSAGE_CONFIG

    name: str | None = None
    url: str | None = None


class EmbedField(BaseModel):
    model_config = _MESSAGE_CONFIG

    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    """Rich embed attached to a message."""

    model_config = _MESSAGE_CONFIG

    title: str | None = None
    type: Literal["rich", "image", "video", "gifv", "article", "link"] | None = None
    description: str | None = None
    url: str | None = None
    timestamp: datetime | None = None
    color: int | None = None
    footer: EmbedFooter | None = None
    image: EmbedMedia | None = None
    thumbnail: EmbedMedia | None = None
    video: EmbedMedia | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: list[EmbedField] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def _naive_as_utc(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class PartialEmoji(BaseModel):
    model_config = _MESSAGE_CONFIG

    id: str | None = None
    name: str | None = None
    animated: bool = False


class Button(BaseModel):
    """Button; style 5 is a link button and carries ``url``."""

    model_config = _MESSAGE_CONFIG

    type: Literal[2] = 2
    style: int = 1
    label: str | None = None
    emoji: PartialEmoji | None = None
    custom_id: str | None = None
    sku_id: str | None = None
    url: str | None = None
    disabled: bool = False


class SelectOption(BaseModel):
    model_config = _MESSAGE_CONFIG

    label: str
    value: str
    description: str | None = None
    emoji: PartialEmoji | None = None
    default: bool = False


class StringSelect(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[3] = 3
    custom_id: str = ""
    options: list[SelectOption] = Field(default_factory=list)
    placeholder: str | None = None
    min_values: int | None = None
    max_values: int | None = None
    disabled: bool = False


ActionRowChild = Annotated[Union[Button, StringSelect], Field(discriminator="type")]


class ActionRow(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[1] = 1
    components: list[ActionRowChild] = Field(default_factory=list)


class TextDisplay(BaseModel):
    """Markup text block; parsed with the same rules as message content."""

    model_config = _MESSAGE_CONFIG

    type: Literal[10] = 10
    content: str = ""


class UnfurledMedia(BaseModel):
    model_config = _MESSAGE_CONFIG

    url: str


class Thumbnail(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[11] = 11
    media: UnfurledMedia
    description: str | None = None
    spoiler: bool = False


SectionAccessory = Annotated[Union[Button, Thumbnail], Field(discriminator="type")]


class Section(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[9] = 9
    components: list[TextDisplay] = Field(default_factory=list)
    accessory: SectionAccessory | None = None


class MediaGalleryItem(BaseModel):
    model_config = _MESSAGE_CONFIG

    url: str
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None
    description: str | None = None
    spoiler: bool = False


class MediaGallery(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[12] = 12
    items: list[MediaGalleryItem] = Field(default_factory=list)


class FileComponent(BaseModel):
    model_config = _MESSAGE_CONFIG

    type: Literal[13] = 13
    file: UnfurledMedia
    spoiler: bool = False


class Separator(BaseModel):
    """Vertical spacing; ``spacing`` is 1 (small) or 2 (large)."""

    model_config = _MESSAGE_CONFIG

    type: Literal[14] = 14
    divider: bool = True
    spacing: Literal[1, 2] = 1


class Container(BaseModel):
    """Group of components with an optional accent colour bar."""

    model_config = _MESSAGE_CONFIG

    type: Literal[17] = 17
    accent_color: int | None = None
    spoiler: bool = False
    components: list[Component] = Field(default_factory=list)


Component = Annotated[
    Union[
        ActionRow,
        TextDisplay,
        Section,
        Thumbnail,
        MediaGallery,
        FileComponent,
        Separator,
        Container,
    ],
    Field(discriminator="type"),
]

Container.model_rebuild()


# ---------------------------------------------------------------------------
# CanonicalMessage
# ---------------------------------------------------------------------------


class CanonicalMessage(BaseModel):
    """A vendor-neutral chat message.

    Attributes:
        author: The user who sent the message.
        content: Raw markup body (may be empty).
        created_at: Creation time.  Messages handed to the grouper must be
            ascending by this field.  Naive values are read as UTC.
        edited_at: Last edit time, or ``None`` if never edited.
        reference: Reply pointer, or ``None``.
        interaction: Slash-command pointer, or ``None``.
        attachments: Attached files.
        embeds: Rich embeds.
        components: Interactive and layout components.
        is_bot: Whether the author is a bot account.
        author_role_color: Colour of the author's top role as a
            ``0xRRGGBB`` integer, or ``None``.
    """

    model_config = _MESSAGE_CONFIG

    author: User
    content: str = ""
    created_at: datetime = Field(alias="createdAt")
    edited_at: datetime | None = Field(default=None, alias="editedAt")
    reference: MessageReference | None = None
    interaction: Interaction | None = None
    attachments: list[Attachment] = Field(default_factory=list)
    embeds: list[Embed] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    is_bot: bool = Field(default=False, alias="isBot")
    author_role_color: int | None = Field(default=None, alias="authorRoleColor")

    @field_validator("created_at", "edited_at")
    @classmethod
    def _naive_as_utc(cls, value: datetime | None) -> datetime | None:
        """Read naive timestamps as UTC; exports may mix both forms."""
        return _assume_utc(value)

    @property
    def author_id(self) -> str:
        return self.author.id

    @property
    def author_display_name(self) -> str:
        return self.author.name
