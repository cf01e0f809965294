"""
Normalized message contracts.

These models describe a message after validation: defaults applied, ids
assigned, unknown keys dropped. Limits are enforced by
``kite_message.core.validation`` before a model is built; the models only
fix the shape.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Discriminator, Field, Tag

from .common import BaseContract, ComponentKind


# =============================================================================
# Embeds
# =============================================================================


class EmbedFooter(BaseContract):
    """Embed footer block."""

    text: str | None = Field(None, description="Footer text")
    icon_url: str | None = Field(None, description="Footer icon image URL")


class EmbedImage(BaseContract):
    """Embed image block."""

    url: str | None = Field(None, description="Image URL")


class EmbedThumbnail(BaseContract):
    """Embed thumbnail block."""

    url: str | None = Field(None, description="Thumbnail URL")


class EmbedAuthor(BaseContract):
    """Embed author block."""

    name: str = Field(..., description="Author name")
    url: str | None = Field(None, description="Link opened when the author name is clicked")
    icon_url: str | None = Field(None, description="Author icon image URL")


class EmbedProvider(BaseContract):
    """Embed provider block."""

    name: str = Field(..., description="Provider name")
    url: str | None = Field(None, description="Provider URL")


class EmbedField(BaseContract):
    """Single name/value field inside an embed."""

    id: int = Field(..., description="Builder-local unique id")
    name: str = Field(..., description="Field name")
    value: str = Field(..., description="Field value")
    inline: bool | None = Field(None, description="Render next to adjacent inline fields")


class Embed(BaseContract):
    """Rich embed block attached to a message."""

    id: int = Field(..., description="Builder-local unique id")
    title: str | None = None
    description: str | None = None
    url: str | None = None
    timestamp: str | None = None
    color: int | None = Field(None, description="RGB color as a 24-bit integer")
    footer: EmbedFooter | None = None
    author: EmbedAuthor | None = None
    provider: EmbedProvider | None = None
    image: EmbedImage | None = None
    thumbnail: EmbedThumbnail | None = None
    fields: list[EmbedField] = Field(default_factory=list)


# =============================================================================
# Components
# =============================================================================


class Emoji(BaseContract):
    """Custom (id) or unicode (name) emoji reference."""

    id: str | None = None
    name: str | None = None
    animated: bool | None = None


class ActionButton(BaseContract):
    """Button with styles 1-4, wired to a flow."""

    id: int
    type: Literal[2] = 2
    style: Literal[1, 2, 3, 4]
    label: str = ""
    emoji: Emoji | None = None
    disabled: bool | None = None
    flow_source_id: str = Field(..., description="Reference to the flow handling clicks")


class LinkButton(BaseContract):
    """Button with style 5, opening a URL."""

    id: int
    type: Literal[2] = 2
    style: Literal[5] = 5
    label: str = ""
    emoji: Emoji | None = None
    url: str
    disabled: bool | None = None


class SelectMenuOption(BaseContract):
    """Option inside a select menu."""

    id: int
    label: str
    description: str | None = None
    emoji: Emoji | None = None


class SelectMenu(BaseContract):
    """String select menu."""

    id: int
    type: Literal[3] = 3
    placeholder: str | None = None
    disabled: bool | None = None
    options: list[SelectMenuOption]
    flow_source_id: str = Field(..., description="Reference to the flow handling selections")


def _is_int_tag(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def component_kind(value: Any) -> str | None:
    """Resolve the union tag of a component from its type and style."""
    if isinstance(value, dict):
        component_type, style = value.get("type"), value.get("style")
    else:
        component_type, style = getattr(value, "type", None), getattr(value, "style", None)

    # Tags are JSON integers only: no bools, no 2.0
    if not _is_int_tag(component_type):
        return None
    if component_type == 3:
        return ComponentKind.SELECT_MENU.value
    if component_type == 2 and _is_int_tag(style):
        if style == 5:
            return ComponentKind.LINK_BUTTON.value
        if style in (1, 2, 3, 4):
            return ComponentKind.BUTTON.value
    return None


Component = Annotated[
    Union[
        Annotated[ActionButton, Tag(ComponentKind.BUTTON.value)],
        Annotated[LinkButton, Tag(ComponentKind.LINK_BUTTON.value)],
        Annotated[SelectMenu, Tag(ComponentKind.SELECT_MENU.value)],
    ],
    Discriminator(component_kind),
]


class ActionRow(BaseContract):
    """Horizontal row of buttons or a single select menu."""

    id: int
    type: Literal[1] = 1
    components: list[Component]


# =============================================================================
# Message
# =============================================================================


class AllowedMentions(BaseContract):
    """Mention controls for the outgoing message."""

    parse: list[Literal["users", "roles", "everyone"]] | None = None
    roles: list[str] | None = None
    users: list[str] | None = None
    replied_user: bool | None = None


class Attachment(BaseContract):
    """Reference to an uploaded asset."""

    asset_id: str


class Message(BaseContract):
    """Normalized webhook message."""

    content: str = ""
    username: str | None = Field(None, description="Webhook username override")
    avatar_url: str | None = Field(None, description="Webhook avatar override")
    tts: bool = False
    attachments: list[Attachment] = Field(default_factory=list)
    embeds: list[Embed] = Field(default_factory=list)
    allowed_mentions: AllowedMentions | None = None
    components: list[ActionRow] = Field(default_factory=list)
    thread_name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict with unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
