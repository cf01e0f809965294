"""Interactive component validation (action rows, buttons, select menus).

Components form a tagged union: ``type`` 2 is a button, ``type`` 3 a select
menu, and buttons are further split by ``style`` (1-4 run a flow, 5 opens
a URL). Tag resolution is shared with the contract models through
``component_kind`` so validation and model parsing agree.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import discord

from kite_message.contracts.common import ComponentKind
from kite_message.contracts.message import component_kind

from . import rules
from .context import ValidationContext, is_int
from .result import Path, ViolationCode

COMPONENT_LIMITS = {
    "components_per_row": 5,
    "button_label": 80,
    "select_options": 25,
    "select_placeholder": 150,
    "option_label": 100,
    "option_description": 100,
}

ACTION_ROW_TYPE = discord.ComponentType.action_row.value
BUTTON_TYPE = discord.ComponentType.button.value
SELECT_MENU_TYPE = discord.ComponentType.select.value

ACTION_BUTTON_STYLES = (
    discord.ButtonStyle.primary.value,
    discord.ButtonStyle.secondary.value,
    discord.ButtonStyle.success.value,
    discord.ButtonStyle.danger.value,
)
LINK_BUTTON_STYLE = discord.ButtonStyle.link.value

EMOJI_IDENTITY_MESSAGE = "Emoji must have either an id or a name"
BUTTON_LABEL_MESSAGE = "Label is required when no emoji is set"
SELECT_MENU_ALONE_MESSAGE = "A select menu must be the only component in its action row"


def validate_emoji(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    emoji = ctx.require_object(data, path)
    if emoji is None:
        return None

    normalized = {
        "id": ctx.string(emoji, "id", path),
        "name": ctx.string(emoji, "name", path),
        "animated": ctx.boolean(emoji, "animated", path),
    }
    if not rules.emoji_has_identity(emoji):
        ctx.add(path, EMOJI_IDENTITY_MESSAGE, ViolationCode.CUSTOM)
    return normalized


def _optional_emoji(data: Mapping[str, Any], ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    value = data.get("emoji")
    return None if value is None else validate_emoji(value, ctx, (*path, "emoji"))


def _button_common(button: Mapping[str, Any], ctx: ValidationContext, path: Path) -> dict[str, Any]:
    normalized = {
        "id": ctx.unique_id(button, path),
        "type": BUTTON_TYPE,
        "style": button.get("style"),
        "label": ctx.string(button, "label", path, max_length=COMPONENT_LIMITS["button_label"]) or "",
        "emoji": _optional_emoji(button, ctx, path),
        "disabled": ctx.boolean(button, "disabled", path),
    }
    if not rules.button_has_label_or_emoji(button):
        ctx.add((*path, "label"), BUTTON_LABEL_MESSAGE, ViolationCode.CUSTOM)
    return normalized


def validate_action_button(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    """Button with style 1-4; clicks are routed to a flow."""
    button = ctx.require_object(data, path)
    if button is None:
        return None

    normalized = _button_common(button, ctx, path)
    normalized["flow_source_id"] = ctx.flow_source_id(button, path)
    return normalized


def validate_link_button(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    """Button with style 5; requires a URL instead of a flow."""
    button = ctx.require_object(data, path)
    if button is None:
        return None

    normalized = _button_common(button, ctx, path)
    normalized["url"] = ctx.url(button, "url", path, required=True)
    return normalized


def validate_select_menu_option(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    option = ctx.require_object(data, path)
    if option is None:
        return None

    return {
        "id": ctx.unique_id(option, path),
        "label": ctx.string(
            option, "label", path, required=True, min_length=1, max_length=COMPONENT_LIMITS["option_label"]
        ),
        "description": ctx.string(
            option,
            "description",
            path,
            min_length=1,
            max_length=COMPONENT_LIMITS["option_description"],
        ),
        "emoji": _optional_emoji(option, ctx, path),
    }


def validate_select_menu(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    menu = ctx.require_object(data, path)
    if menu is None:
        return None

    options = ctx.array(
        menu, "options", path, required=True, min_items=1, max_items=COMPONENT_LIMITS["select_options"]
    )
    return {
        "id": ctx.unique_id(menu, path),
        "type": SELECT_MENU_TYPE,
        "placeholder": ctx.string(
            menu, "placeholder", path, max_length=COMPONENT_LIMITS["select_placeholder"]
        ),
        "disabled": ctx.boolean(menu, "disabled", path),
        "options": [
            validate_select_menu_option(item, ctx, (*path, "options", index))
            for index, item in enumerate(options or [])
        ],
        "flow_source_id": ctx.flow_source_id(menu, path),
    }


_COMPONENT_VALIDATORS: dict[str, Callable[[Any, ValidationContext, Path], dict[str, Any] | None]] = {
    ComponentKind.BUTTON.value: validate_action_button,
    ComponentKind.LINK_BUTTON.value: validate_link_button,
    ComponentKind.SELECT_MENU.value: validate_select_menu,
}


def validate_component(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    """Dispatch a row child to the validator of its variant."""
    component = ctx.require_object(data, path)
    if component is None:
        return None

    kind = component_kind(dict(component))
    if kind is None:
        component_type = component.get("type")
        if component_type == BUTTON_TYPE and is_int(component_type):
            allowed = ", ".join(str(s) for s in (*ACTION_BUTTON_STYLES, LINK_BUTTON_STYLE))
            ctx.add(
                (*path, "style"),
                f"Invalid button style, expected one of {allowed}",
                ViolationCode.INVALID_LITERAL,
            )
        else:
            ctx.add(
                (*path, "type"),
                f"Invalid component type, expected {BUTTON_TYPE} (button) or {SELECT_MENU_TYPE} (select menu)",
                ViolationCode.INVALID_LITERAL,
            )
        return None

    return _COMPONENT_VALIDATORS[kind](component, ctx, path)


def validate_action_row(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    row = ctx.require_object(data, path)
    if row is None:
        return None

    row_type = row.get("type")
    if row_type is not None and (not is_int(row_type) or row_type != ACTION_ROW_TYPE):
        ctx.add(
            (*path, "type"),
            f"Invalid action row type, expected {ACTION_ROW_TYPE}",
            ViolationCode.INVALID_LITERAL,
        )

    children = ctx.array(
        row,
        "components",
        path,
        required=True,
        min_items=1,
        max_items=COMPONENT_LIMITS["components_per_row"],
    )
    components = [
        validate_component(item, ctx, (*path, "components", index))
        for index, item in enumerate(children or [])
    ]

    has_select = any(c is not None and c["type"] == SELECT_MENU_TYPE for c in components)
    if has_select and len(components) > 1:
        ctx.add((*path, "components"), SELECT_MENU_ALONE_MESSAGE, ViolationCode.TOO_BIG)

    return {
        "id": ctx.unique_id(row, path),
        "type": ACTION_ROW_TYPE,
        "components": components,
    }
