"""Shared state and field checkers for one validation run.

A ``ValidationContext`` collects violations and warnings while the
embed, component and message validators walk a payload. Checkers never
raise; they record a violation and return ``None`` instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kite_message.config.settings import Settings
from kite_message.core.utils.unique_id import IdFactory

from . import rules
from .result import Path, ValidationResult, Violation, ViolationCode

_JSON_TYPE_NAMES = {
    "dict": "object",
    "list": "array",
    "tuple": "array",
    "str": "string",
    "int": "integer",
    "float": "number",
    "bool": "boolean",
    "NoneType": "null",
}


def json_type_name(value: Any) -> str:
    name = type(value).__name__
    return _JSON_TYPE_NAMES.get(name, name)


def is_int(value: Any) -> bool:
    """Integers only; ``True``/``False`` are not numbers here."""
    return isinstance(value, int) and not isinstance(value, bool)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


class ValidationContext:
    """Accumulates violations for a single payload."""

    def __init__(self, *, id_factory: IdFactory, settings: Settings) -> None:
        self.id_factory = id_factory
        self.settings = settings
        self.errors: list[Violation] = []
        self.warnings: list[str] = []
        self.total_chars = 0

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def add(self, path: Path, message: str, code: str = ViolationCode.CUSTOM) -> None:
        self.errors.append(Violation(path=path, message=message, code=code))

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def warn_near_limit(self, path: Path, length: int, limit: int) -> None:
        """Warn when a length is within the configured ratio of its limit."""
        if limit * self.settings.near_limit_ratio < length <= limit:
            label = ".".join(str(p) for p in path)
            self.warn(f"{label} near limit: {length}/{limit} chars")

    def to_result(self) -> ValidationResult:
        return ValidationResult(
            is_valid=not self.errors,
            errors=list(self.errors),
            warnings=list(self.warnings),
            total_chars=self.total_chars,
        )

    # ------------------------------------------------------------------
    # Structural checkers
    # ------------------------------------------------------------------

    def require_object(self, value: Any, path: Path) -> Mapping[str, Any] | None:
        if isinstance(value, Mapping):
            return value
        self.add(
            path,
            f"Expected object, received {json_type_name(value)}",
            ViolationCode.INVALID_TYPE,
        )
        return None

    def optional_object(self, data: Mapping[str, Any], key: str, path: Path) -> Mapping[str, Any] | None:
        value = data.get(key)
        if value is None:
            return None
        return self.require_object(value, (*path, key))

    def string(
        self,
        data: Mapping[str, Any],
        key: str,
        path: Path,
        *,
        required: bool = False,
        min_length: int = 0,
        max_length: int | None = None,
    ) -> str | None:
        """Check an optional (or required) string field with length bounds."""
        value = data.get(key)
        field_path = (*path, key)

        if value is None:
            if required:
                self.add(field_path, "Required", ViolationCode.MISSING_FIELD)
            return None

        if not isinstance(value, str):
            self.add(
                field_path,
                f"Expected string, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None

        if len(value) < min_length:
            self.add(
                field_path,
                f"Must be at least {_plural(min_length, 'character')} long",
                ViolationCode.TOO_SHORT,
            )
            return None

        if max_length is not None and len(value) > max_length:
            self.add(
                field_path,
                f"Must be at most {_plural(max_length, 'character')} long",
                ViolationCode.TOO_LONG,
            )
            return None

        return value

    def boolean(self, data: Mapping[str, Any], key: str, path: Path) -> bool | None:
        value = data.get(key)
        if value is None:
            return None
        if not isinstance(value, bool):
            self.add(
                (*path, key),
                f"Expected boolean, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None
        return value

    def integer(
        self,
        data: Mapping[str, Any],
        key: str,
        path: Path,
        *,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> int | None:
        value = data.get(key)
        field_path = (*path, key)
        if value is None:
            return None

        if not is_int(value):
            self.add(
                field_path,
                f"Expected integer, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None

        if minimum is not None and value < minimum:
            self.add(field_path, f"Must be greater than or equal to {minimum}", ViolationCode.TOO_SMALL)
            return None
        if maximum is not None and value > maximum:
            self.add(field_path, f"Must be less than or equal to {maximum}", ViolationCode.TOO_BIG)
            return None
        return value

    def array(
        self,
        data: Mapping[str, Any],
        key: str,
        path: Path,
        *,
        required: bool = False,
        min_items: int = 0,
        max_items: int | None = None,
    ) -> list[Any] | None:
        """Check an array field. A missing optional array becomes ``[]``."""
        value = data.get(key)
        field_path = (*path, key)

        if value is None:
            if required:
                self.add(field_path, "Required", ViolationCode.MISSING_FIELD)
                return None
            return []

        if not isinstance(value, (list, tuple)):
            self.add(
                field_path,
                f"Expected array, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None

        if len(value) < min_items:
            self.add(
                field_path,
                f"Must contain at least {_plural(min_items, 'item')}",
                ViolationCode.TOO_SMALL,
            )
        elif max_items is not None and len(value) > max_items:
            self.add(
                field_path,
                f"Must contain at most {_plural(max_items, 'item')}",
                ViolationCode.TOO_BIG,
            )
        return list(value)

    def string_list(self, data: Mapping[str, Any], key: str, path: Path) -> list[str] | None:
        items = data.get(key)
        if items is None:
            return None
        checked = self.array(data, key, path)
        if checked is None:
            return None

        ok = True
        for index, item in enumerate(checked):
            if not isinstance(item, str):
                self.add(
                    (*path, key, index),
                    f"Expected string, received {json_type_name(item)}",
                    ViolationCode.INVALID_TYPE,
                )
                ok = False
        return checked if ok else None

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def url(
        self,
        data: Mapping[str, Any],
        key: str,
        path: Path,
        *,
        required: bool = False,
        image: bool = False,
    ) -> str | None:
        """String field that must pass the URL (or image URL) check."""
        value = self.string(data, key, path, required=required)
        if value is None:
            return None

        if image:
            if not rules.is_valid_image_url(value, strict=self.settings.strict_image_urls):
                self.add((*path, key), rules.INVALID_IMAGE_URL_MESSAGE, ViolationCode.INVALID_IMAGE_URL)
                return None
        elif not rules.is_valid_url(value):
            self.add((*path, key), rules.INVALID_URL_MESSAGE, ViolationCode.INVALID_URL)
            return None
        return value

    # ------------------------------------------------------------------
    # Generated identifiers
    # ------------------------------------------------------------------

    def unique_id(self, data: Mapping[str, Any], path: Path) -> int | None:
        """Existing integer id, or a fresh one from the id factory."""
        value = data.get("id")
        if value is None:
            return self.id_factory()
        if not is_int(value):
            self.add(
                (*path, "id"),
                f"Expected integer, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None
        return value

    def flow_source_id(self, data: Mapping[str, Any], path: Path) -> str | None:
        value = data.get("flow_source_id")
        if value is None:
            return str(self.id_factory())
        if not isinstance(value, str):
            self.add(
                (*path, "flow_source_id"),
                f"Expected string, received {json_type_name(value)}",
                ViolationCode.INVALID_TYPE,
            )
            return None
        return value
