"""Pytest configuration and shared fixtures for message validation tests."""

from collections.abc import Iterator

import pytest

from kite_message.config.settings import Settings, reset_settings
from kite_message.core.utils.unique_id import sequential_ids
from kite_message.core.validation import MessageValidator


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host environment toggles out of the tests."""
    for name in ("KITE_STRICT_IMAGE_URLS", "KITE_STRICT_EMBED_TOTAL", "KITE_NEAR_LIMIT_RATIO"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def validator(settings: Settings) -> MessageValidator:
    """Validator with deterministic ids starting at 1."""
    return MessageValidator(id_factory=sequential_ids(1), settings=settings)


@pytest.fixture
def link_button() -> dict:
    return {"type": 2, "style": 5, "label": "Docs", "url": "https://example.com/docs"}


@pytest.fixture
def action_button() -> dict:
    return {"type": 2, "style": 1, "label": "Go"}
