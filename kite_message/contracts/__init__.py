"""Contract models for normalized message payloads."""

from .common import BaseContract, ComponentKind
from .message import (
    ActionButton,
    ActionRow,
    AllowedMentions,
    Attachment,
    Component,
    Embed,
    EmbedAuthor,
    EmbedField,
    EmbedFooter,
    EmbedImage,
    EmbedProvider,
    EmbedThumbnail,
    Emoji,
    LinkButton,
    Message,
    SelectMenu,
    SelectMenuOption,
    component_kind,
)

__all__ = [
    "BaseContract",
    "ComponentKind",
    # Message
    "Message",
    "Attachment",
    "AllowedMentions",
    # Embeds
    "Embed",
    "EmbedAuthor",
    "EmbedField",
    "EmbedFooter",
    "EmbedImage",
    "EmbedProvider",
    "EmbedThumbnail",
    # Components
    "ActionRow",
    "ActionButton",
    "LinkButton",
    "SelectMenu",
    "SelectMenuOption",
    "Emoji",
    "Component",
    "component_kind",
]
