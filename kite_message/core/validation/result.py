"""Validation result types.

Violations are reported as data. Only ``ValidationResult.raise_for_errors``
turns them into an exception, for callers that want one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kite_message.contracts import Message

PathItem = str | int
Path = tuple[PathItem, ...]


class ViolationCode:
    """Machine-readable violation codes."""

    INVALID_TYPE = "invalid_type"
    MISSING_FIELD = "missing_field"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LITERAL = "invalid_literal"
    INVALID_URL = "invalid_url"
    INVALID_IMAGE_URL = "invalid_image_url"
    RESERVED_USERNAME = "reserved_username"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Violation:
    """A single field-level violation."""

    path: Path
    message: str
    code: str = ViolationCode.CUSTOM

    @property
    def field(self) -> str:
        """Dotted field path, e.g. ``embeds.0.fields.2.name``."""
        return ".".join(str(part) for part in self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "code": self.code}

    def __str__(self) -> str:
        return f"{self.field or '<root>'}: {self.message}"


@dataclass
class ValidationResult:
    """Result of message validation."""

    is_valid: bool
    errors: list[Violation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    total_chars: int = 0
    message: Message | None = None

    def errors_for(self, field_path: str) -> list[Violation]:
        """Violations reported on exactly ``field_path``."""
        return [err for err in self.errors if err.field == field_path]

    def raise_for_errors(self) -> Message:
        """Return the normalized message or raise ``InvalidMessageError``."""
        if not self.is_valid or self.message is None:
            raise InvalidMessageError(self.errors)
        return self.message

    def __str__(self) -> str:
        """Human-readable validation report."""
        lines = [f"✓ Valid: {self.is_valid}"]
        lines.append(f"📊 Total chars: {self.total_chars}")

        if self.errors:
            lines.append("\n❌ Errors:")
            for err in self.errors:
                lines.append(f"  - {err}")

        if self.warnings:
            lines.append("\n⚠️  Warnings:")
            for warn in self.warnings:
                lines.append(f"  - {warn}")

        return "\n".join(lines)


class InvalidMessageError(ValueError):
    """Raised on request when a payload failed validation."""

    def __init__(self, errors: list[Violation]) -> None:
        self.errors = list(errors)
        summary = "; ".join(str(err) for err in self.errors[:5])
        if len(self.errors) > 5:
            summary += f" (+{len(self.errors) - 5} more)"
        super().__init__(f"Invalid message payload: {summary}")
