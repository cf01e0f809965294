"""
Prometheus metrics for message validation.

Counters live in a dedicated registry so importing this module twice (or
from tests) never clashes with the default global registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import CollectorRegistry, Counter, generate_latest

if TYPE_CHECKING:
    from kite_message.core.validation.result import ValidationResult

_registry = CollectorRegistry()

kite_message_validations_total = Counter(
    "kite_message_validations_total",
    "Message validations by outcome",
    labelnames=("outcome",),
    registry=_registry,
)

kite_message_violations_total = Counter(
    "kite_message_violations_total",
    "Validation violations by code",
    labelnames=("code",),
    registry=_registry,
)


def mark_validation(result: ValidationResult) -> None:
    """Record the outcome and violation codes of one validation run."""
    kite_message_validations_total.labels(
        outcome="valid" if result.is_valid else "invalid"
    ).inc()
    for err in result.errors:
        kite_message_violations_total.labels(code=err.code).inc()


def get_registry() -> CollectorRegistry:
    return _registry


def render_latest() -> bytes:
    """Text exposition of all validation metrics."""
    return generate_latest(_registry)
