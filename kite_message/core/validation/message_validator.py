"""Message payload validation.

Validates a complete message draft (content, webhook identity, embeds,
components) before it is handed to the webhook sender.

Usage:
    from kite_message.core.validation import validate_message_payload

    result = validate_message_payload({"content": "Hello!", "embeds": [...]})
    if not result.is_valid:
        for err in result.errors:
            print(err.field, err.message)
    else:
        payload = result.message.to_payload()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kite_message.config.settings import Settings, get_settings
from kite_message.contracts.message import Message
from kite_message.core.metrics import mark_validation
from kite_message.core.observability import validation_trace
from kite_message.core.utils.unique_id import IdFactory, get_unique_id

from . import rules
from .component_validator import validate_action_row
from .context import ValidationContext
from .embed_validator import validate_embed
from .result import Path, ValidationResult, ViolationCode

# Discord API limits for messages
MESSAGE_LIMITS = {
    "content": 2000,
    "webhook_username": 80,
    "thread_name": 100,
    "attachments": 10,
    "embeds": 10,
    "component_rows": 5,
}

ALLOWED_MENTION_TYPES = ("users", "roles", "everyone")

MISSING_BODY_MESSAGE = "Content is required when no other fields are set"

ROOT: Path = ()


def validate_username(data: Mapping[str, Any], ctx: ValidationContext, path: Path) -> str | None:
    username = ctx.string(data, "username", path, max_length=MESSAGE_LIMITS["webhook_username"])
    if username is None:
        return None

    reasons = rules.username_violations(username)
    for reason in reasons:
        ctx.add((*path, "username"), reason, ViolationCode.RESERVED_USERNAME)
    return None if reasons else username


def validate_attachment(data: Any, ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    attachment = ctx.require_object(data, path)
    if attachment is None:
        return None
    return {"asset_id": ctx.string(attachment, "asset_id", path, required=True)}


def validate_allowed_mentions(data: Mapping[str, Any], ctx: ValidationContext, path: Path) -> dict[str, Any] | None:
    mentions = ctx.optional_object(data, "allowed_mentions", path)
    if mentions is None:
        return None

    mentions_path = (*path, "allowed_mentions")
    parse = ctx.string_list(mentions, "parse", mentions_path)
    for index, item in enumerate(parse or []):
        if item not in ALLOWED_MENTION_TYPES:
            ctx.add(
                (*mentions_path, "parse", index),
                f"Invalid mention type, expected one of {', '.join(ALLOWED_MENTION_TYPES)}",
                ViolationCode.INVALID_LITERAL,
            )

    return {
        "parse": parse,
        "roles": ctx.string_list(mentions, "roles", mentions_path),
        "users": ctx.string_list(mentions, "users", mentions_path),
        "replied_user": ctx.boolean(mentions, "replied_user", mentions_path),
    }


def validate_message(data: Any, ctx: ValidationContext) -> dict[str, Any] | None:
    """Walk a message draft, recording violations in ``ctx``.

    Returns the normalized dict. It is only safe to build a ``Message``
    from it when ``ctx.errors`` is empty.
    """
    message = ctx.require_object(data, ROOT)
    if message is None:
        return None

    content = ctx.string(message, "content", ROOT, max_length=MESSAGE_LIMITS["content"])
    if content is not None:
        ctx.warn_near_limit(("content",), len(content), MESSAGE_LIMITS["content"])
        ctx.total_chars += len(content)

    tts = ctx.boolean(message, "tts", ROOT)

    attachments = ctx.array(message, "attachments", ROOT, max_items=MESSAGE_LIMITS["attachments"])
    embeds = ctx.array(message, "embeds", ROOT, max_items=MESSAGE_LIMITS["embeds"])
    components = ctx.array(message, "components", ROOT, max_items=MESSAGE_LIMITS["component_rows"])

    normalized = {
        "content": content or "",
        "username": validate_username(message, ctx, ROOT),
        "avatar_url": ctx.url(message, "avatar_url", ROOT, image=True),
        "tts": bool(tts),
        "attachments": [
            validate_attachment(item, ctx, ("attachments", index))
            for index, item in enumerate(attachments or [])
        ],
        "embeds": [
            validate_embed(item, ctx, ("embeds", index)) for index, item in enumerate(embeds or [])
        ],
        "allowed_mentions": validate_allowed_mentions(message, ctx, ROOT),
        "components": [
            validate_action_row(item, ctx, ("components", index))
            for index, item in enumerate(components or [])
        ],
        "thread_name": ctx.string(message, "thread_name", ROOT, max_length=MESSAGE_LIMITS["thread_name"]),
    }

    # Only checked on the shape the user sent; a wrongly typed array was
    # already reported above.
    if not rules.message_has_body(
        message.get("content"), message.get("embeds") or [], message.get("components") or []
    ):
        ctx.add(("content",), MISSING_BODY_MESSAGE, ViolationCode.CUSTOM)

    return normalized


class MessageValidator:
    """Validate message drafts and build normalized ``Message`` contracts.

    The id factory supplies ids for embeds, fields and components that do
    not carry one yet. Pass a deterministic factory (see
    ``kite_message.core.utils.unique_id.sequential_ids``) for reproducible
    output.
    """

    def __init__(
        self,
        *,
        id_factory: IdFactory = get_unique_id,
        settings: Settings | None = None,
    ) -> None:
        self.id_factory = id_factory
        self.settings = settings if settings is not None else get_settings()

    @validation_trace(schema="message")
    def validate(self, data: Any) -> ValidationResult:
        """Validate a message draft.

        Args:
            data: Untyped draft (dict decoded from JSON) or a ``Message``

        Returns:
            ValidationResult carrying either the normalized message or the
            full list of violations
        """
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", exclude_none=True)

        ctx = ValidationContext(id_factory=self.id_factory, settings=self.settings)
        normalized = validate_message(data, ctx)

        message: Message | None = None
        if not ctx.errors and normalized is not None:
            try:
                message = Message.model_validate(normalized)
            except PydanticValidationError as e:
                for error in e.errors():
                    ctx.add(tuple(error["loc"]), error["msg"], ViolationCode.INVALID_TYPE)

        result = ctx.to_result()
        result.message = message if result.is_valid else None
        mark_validation(result)
        return result


def validate_message_payload(data: Any, *, settings: Settings | None = None) -> ValidationResult:
    """Validate with the default id generator and global settings."""
    return MessageValidator(settings=settings).validate(data)
