"""Embed validation.

Checks embed blocks against the chat platform's embed limits and
normalizes them (ids assigned, ``fields`` defaulted, unknown keys dropped).

Usage:
    from kite_message.core.validation.embed_validator import validate_embed

    normalized = validate_embed(raw_embed, ctx, ("embeds", 0))
    if normalized is None:
        ...  # violations are in ctx.errors
"""

from __future__ import annotations

from typing import Any

import discord

from . import rules
from .context import ValidationContext
from .result import Path, ViolationCode

# Reference: https://discord.com/developers/docs/resources/channel#embed-limits
EMBED_LIMITS = {
    "title": 256,
    "description": 4096,
    "fields": 25,
    "field_name": 256,
    "field_value": 1024,
    "footer_text": 2048,
    "author_name": 256,
    "provider_name": 256,
    "color": 0xFFFFFF,
    "total_chars": 6000,  # Sum of all text fields
}

MISSING_CONTENT_MESSAGE = "Description is required when no other fields are set"


def validate_embed_footer(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    footer = ctx.require_object(data, path)
    if footer is None:
        return None
    return {
        "text": ctx.string(footer, "text", path, max_length=EMBED_LIMITS["footer_text"]),
        "icon_url": ctx.url(footer, "icon_url", path, image=True),
    }


def validate_embed_author(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    author = ctx.require_object(data, path)
    if author is None:
        return None
    return {
        "name": ctx.string(
            author, "name", path, required=True, min_length=1, max_length=EMBED_LIMITS["author_name"]
        ),
        "url": ctx.url(author, "url", path),
        "icon_url": ctx.url(author, "icon_url", path, image=True),
    }


def validate_embed_provider(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    provider = ctx.require_object(data, path)
    if provider is None:
        return None
    return {
        "name": ctx.string(
            provider, "name", path, required=True, min_length=1, max_length=EMBED_LIMITS["provider_name"]
        ),
        "url": ctx.url(provider, "url", path),
    }


def validate_embed_media(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    """Image and thumbnail blocks share the same shape."""
    media = ctx.require_object(data, path)
    if media is None:
        return None
    return {"url": ctx.url(media, "url", path)}


def validate_embed_field(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    embed_field = ctx.require_object(data, path)
    if embed_field is None:
        return None

    value = ctx.string(
        embed_field, "value", path, required=True, min_length=1, max_length=EMBED_LIMITS["field_value"]
    )
    if value is not None:
        ctx.warn_near_limit((*path, "value"), len(value), EMBED_LIMITS["field_value"])

    return {
        "id": ctx.unique_id(embed_field, path),
        "name": ctx.string(
            embed_field, "name", path, required=True, min_length=1, max_length=EMBED_LIMITS["field_name"]
        ),
        "value": value,
        "inline": ctx.boolean(embed_field, "inline", path),
    }


def embed_text_length(embed: dict[str, Any]) -> int:
    """Characters counted toward the platform's per-embed text budget."""
    total = len(embed.get("title") or "") + len(embed.get("description") or "")
    for embed_field in embed.get("fields") or []:
        if embed_field:
            total += len(embed_field.get("name") or "") + len(embed_field.get("value") or "")
    footer = embed.get("footer") or {}
    author = embed.get("author") or {}
    total += len(footer.get("text") or "") + len(author.get("name") or "")
    return total


_BLOCK_VALIDATORS = {
    "footer": validate_embed_footer,
    "author": validate_embed_author,
    "provider": validate_embed_provider,
    "image": validate_embed_media,
    "thumbnail": validate_embed_media,
}


def validate_embed(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    """Validate one embed and return its normalized form.

    Accepts a plain mapping or a ``discord.Embed``. Returns ``None`` when the
    embed is not an object at all; otherwise the normalized dict is returned
    even if violations were recorded, so callers can keep walking.
    """
    if isinstance(data, discord.Embed):
        data = data.to_dict()

    embed = ctx.require_object(data, path)
    if embed is None:
        return None

    title = ctx.string(embed, "title", path, max_length=EMBED_LIMITS["title"])
    description = ctx.string(embed, "description", path, max_length=EMBED_LIMITS["description"])
    if description is not None:
        ctx.warn_near_limit((*path, "description"), len(description), EMBED_LIMITS["description"])

    normalized: dict[str, Any] = {
        "id": ctx.unique_id(embed, path),
        "title": title,
        "description": description,
        "url": ctx.url(embed, "url", path),
        "timestamp": ctx.string(embed, "timestamp", path),
        "color": ctx.integer(embed, "color", path, minimum=0, maximum=EMBED_LIMITS["color"]),
    }

    for key, validator in _BLOCK_VALIDATORS.items():
        block = embed.get(key)
        normalized[key] = None if block is None else validator(block, ctx, (*path, key))

    fields = ctx.array(embed, "fields", path, max_items=EMBED_LIMITS["fields"])
    normalized["fields"] = [
        validate_embed_field(item, ctx, (*path, "fields", index))
        for index, item in enumerate(fields or [])
    ]

    if not rules.embed_has_visible_content(embed):
        ctx.add((*path, "description"), MISSING_CONTENT_MESSAGE, ViolationCode.CUSTOM)

    total_chars = embed_text_length(normalized)
    ctx.total_chars += total_chars
    budget = EMBED_LIMITS["total_chars"]
    if total_chars > budget:
        message = f"Total embed size exceeds limit: {total_chars}/{budget} chars"
        if ctx.settings.strict_embed_total:
            ctx.add(path, message, ViolationCode.TOO_LONG)
        else:
            ctx.warn(f"{'.'.join(str(p) for p in path)}: {message}")
    else:
        ctx.warn_near_limit(path, total_chars, budget)

    return normalized
