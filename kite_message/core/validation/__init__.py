"""Validation for message-builder payloads and chat platform limits."""

from .component_validator import COMPONENT_LIMITS, validate_action_row, validate_component
from .context import ValidationContext
from .embed_validator import EMBED_LIMITS, validate_embed
from .message_validator import (
    MESSAGE_LIMITS,
    MessageValidator,
    validate_message,
    validate_message_payload,
)
from .result import InvalidMessageError, ValidationResult, Violation, ViolationCode
from .rules import is_valid_image_url, is_valid_url, username_violations

__all__ = [
    # Results
    "ValidationResult",
    "Violation",
    "ViolationCode",
    "InvalidMessageError",
    "ValidationContext",
    # Rules
    "is_valid_url",
    "is_valid_image_url",
    "username_violations",
    # Embed validation
    "EMBED_LIMITS",
    "validate_embed",
    # Component validation
    "COMPONENT_LIMITS",
    "validate_component",
    "validate_action_row",
    # Message validation
    "MESSAGE_LIMITS",
    "MessageValidator",
    "validate_message",
    "validate_message_payload",
]
