"""Unit tests for the standalone validation predicates."""

import pytest

from kite_message.core.validation.rules import (
    USERNAME_RESERVED_MESSAGE,
    USERNAME_SUBSTRING_MESSAGE,
    button_has_label_or_emoji,
    embed_has_visible_content,
    emoji_has_identity,
    is_valid_image_url,
    is_valid_url,
    message_has_body,
    username_violations,
)


class TestUrlRule:
    @pytest.mark.parametrize(
        "value",
        [
            "https://example.com/x.png",
            "http://localhost:3000/hook",
            "https://cdn.discordapp.com/avatars/1/abc.webp?size=128",
            "https://EXAMPLE.COM",
            "https://bücher.example/katalog",
        ],
    )
    def test_accepts_absolute_urls_with_public_host(self, value: str) -> None:
        assert is_valid_url(value)

    @pytest.mark.parametrize(
        "value",
        [
            "not a url",
            "ftp://x",
            "https://192.168.0.1/x",
            "example.com/x.png",
            "mailto:someone@example.com",
            "https://例子.测试/path",
            "https://example.com:99999/x",
            "",
        ],
    )
    def test_rejects_unrecognized_shapes(self, value: str) -> None:
        assert not is_valid_url(value)

    @pytest.mark.parametrize("value", ["{{avatar}}", "{{user.avatar_url}}", "prefix {{x}} suffix"])
    def test_template_placeholder_always_accepted(self, value: str) -> None:
        assert is_valid_url(value)
        assert is_valid_image_url(value)
        assert is_valid_image_url(value, strict=True)

    def test_empty_braces_are_not_a_placeholder(self) -> None:
        assert not is_valid_url("{{}}")


class TestImageUrlRule:
    def test_same_as_url_check_by_default(self) -> None:
        assert is_valid_image_url("https://example.com/avatar")
        assert not is_valid_image_url("ftp://x")

    def test_strict_mode_requires_image_extension(self) -> None:
        assert is_valid_image_url("https://example.com/x.png", strict=True)
        assert is_valid_image_url("https://example.com/x.JPEG?size=64", strict=True)
        assert not is_valid_image_url("https://example.com/x", strict=True)
        assert not is_valid_image_url("https://example.com/x.svg", strict=True)


class TestUsernameRule:
    @pytest.mark.parametrize("value", ["Discord Bot", "clyde", "MyCLYDEhelper", "notdiscordreally"])
    def test_reserved_substrings_rejected(self, value: str) -> None:
        assert username_violations(value) == [USERNAME_SUBSTRING_MESSAGE]

    @pytest.mark.parametrize("value", ["everyone", "here", "Everyone", "HERE"])
    def test_reserved_names_rejected(self, value: str) -> None:
        assert username_violations(value) == [USERNAME_RESERVED_MESSAGE]

    @pytest.mark.parametrize("value", ["CoolBot", "everyone2", "over here", ""])
    def test_other_names_accepted(self, value: str) -> None:
        assert username_violations(value) == []


class TestPresenceRules:
    def test_message_body(self) -> None:
        assert not message_has_body("", [], [])
        assert not message_has_body(None, [], [])
        assert message_has_body("hi", [], [])
        assert message_has_body("", [{}], [])
        assert message_has_body("", [], [{}])

    def test_embed_needs_visible_part(self) -> None:
        assert not embed_has_visible_content({})
        assert not embed_has_visible_content({"description": "", "title": "", "fields": []})
        assert not embed_has_visible_content({"url": "https://example.com", "color": 1})
        assert embed_has_visible_content({"title": "Hi"})
        assert embed_has_visible_content({"footer": {}})
        assert embed_has_visible_content({"fields": [{"name": "a", "value": "b"}]})
        assert embed_has_visible_content({"thumbnail": {"url": "https://example.com/t.png"}})

    def test_button_label_or_emoji(self) -> None:
        assert not button_has_label_or_emoji({"label": ""})
        assert not button_has_label_or_emoji({})
        assert button_has_label_or_emoji({"label": "Go"})
        assert button_has_label_or_emoji({"label": "", "emoji": {"name": "🔥"}})

    def test_emoji_identity(self) -> None:
        assert not emoji_has_identity({})
        assert not emoji_has_identity({"id": "", "name": ""})
        assert emoji_has_identity({"id": "123"})
        assert emoji_has_identity({"name": "🔥"})
