"""Unit tests for embed validation."""

import discord
import pytest

from kite_message.config.settings import Settings
from kite_message.core.utils.unique_id import sequential_ids
from kite_message.core.validation.context import ValidationContext
from kite_message.core.validation.embed_validator import (
    EMBED_LIMITS,
    MISSING_CONTENT_MESSAGE,
    embed_text_length,
    validate_embed,
)
from kite_message.core.validation.result import ViolationCode

PATH = ("embeds", 0)


@pytest.fixture
def ctx(settings: Settings) -> ValidationContext:
    return ValidationContext(id_factory=sequential_ids(100), settings=settings)


def _fields(ctx: ValidationContext) -> list[str]:
    return [err.field for err in ctx.errors]


class TestEmbedPresence:
    def test_embed_without_visible_parts_fails_on_description(self, ctx: ValidationContext) -> None:
        validate_embed({"url": "https://example.com", "color": 0x00FF00}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.description"]
        assert ctx.errors[0].message == MISSING_CONTENT_MESSAGE

    def test_empty_footer_counts_as_visible(self, ctx: ValidationContext) -> None:
        normalized = validate_embed({"footer": {}}, ctx, PATH)

        assert ctx.errors == []
        assert normalized["footer"] == {"text": None, "icon_url": None}

    def test_fields_alone_count(self, ctx: ValidationContext) -> None:
        validate_embed({"fields": [{"name": "K", "value": "V"}]}, ctx, PATH)

        assert ctx.errors == []


class TestEmbedLimits:
    def test_title_limit(self, ctx: ValidationContext) -> None:
        validate_embed({"title": "t" * 257}, ctx, PATH)

        # The title is too long but still "set", so no presence violation
        assert _fields(ctx) == ["embeds.0.title"]
        assert ctx.errors[0].code == ViolationCode.TOO_LONG
        assert ctx.errors[0].message == "Must be at most 256 characters long"

    def test_description_limit(self, ctx: ValidationContext) -> None:
        validate_embed({"description": "d" * EMBED_LIMITS["description"]}, ctx, PATH)
        assert ctx.errors == []

        validate_embed({"description": "d" * 4097}, ctx, PATH)
        assert _fields(ctx) == ["embeds.0.description"]

    def test_field_count_limit(self, ctx: ValidationContext) -> None:
        fields = [{"name": str(i), "value": "v"} for i in range(26)]

        validate_embed({"fields": fields}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.fields"]
        assert ctx.errors[0].code == ViolationCode.TOO_BIG

    def test_field_name_and_value_required(self, ctx: ValidationContext) -> None:
        validate_embed({"title": "T", "fields": [{"value": ""}]}, ctx, PATH)

        by_field = {err.field: err for err in ctx.errors}
        assert by_field["embeds.0.fields.0.name"].code == ViolationCode.MISSING_FIELD
        assert by_field["embeds.0.fields.0.value"].code == ViolationCode.TOO_SHORT

    def test_field_value_limit(self, ctx: ValidationContext) -> None:
        validate_embed({"fields": [{"name": "n", "value": "v" * 1025}]}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.fields.0.value"]

    def test_footer_text_limit(self, ctx: ValidationContext) -> None:
        validate_embed({"footer": {"text": "f" * 2049}}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.footer.text"]

    def test_author_and_provider_need_names(self, ctx: ValidationContext) -> None:
        validate_embed({"author": {"url": "https://example.com"}, "provider": {"name": ""}}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.author.name", "embeds.0.provider.name"]
        assert [err.code for err in ctx.errors] == [ViolationCode.MISSING_FIELD, ViolationCode.TOO_SHORT]

    @pytest.mark.parametrize("color", [0, 0x3498DB, 0xFFFFFF])
    def test_color_in_range(self, ctx: ValidationContext, color: int) -> None:
        normalized = validate_embed({"title": "T", "color": color}, ctx, PATH)

        assert ctx.errors == []
        assert normalized["color"] == color

    @pytest.mark.parametrize(
        "color, code",
        [
            (-1, ViolationCode.TOO_SMALL),
            (0x1000000, ViolationCode.TOO_BIG),
            (True, ViolationCode.INVALID_TYPE),
            ("#ffffff", ViolationCode.INVALID_TYPE),
        ],
    )
    def test_color_rejected(self, ctx: ValidationContext, color: object, code: str) -> None:
        validate_embed({"title": "T", "color": color}, ctx, PATH)

        assert _fields(ctx) == ["embeds.0.color"]
        assert ctx.errors[0].code == code


class TestEmbedUrls:
    def test_invalid_urls_reported_per_block(self, ctx: ValidationContext) -> None:
        validate_embed(
            {
                "title": "T",
                "url": "nope",
                "image": {"url": "ftp://x"},
                "thumbnail": {"url": "https://example.com/t.png"},
                "footer": {"icon_url": "https://10.0.0.1/i.png"},
            },
            ctx,
            PATH,
        )

        assert _fields(ctx) == ["embeds.0.url", "embeds.0.footer.icon_url", "embeds.0.image.url"]
        assert ctx.errors[1].code == ViolationCode.INVALID_IMAGE_URL
        assert ctx.errors[2].code == ViolationCode.INVALID_URL

    def test_placeholders_accepted(self, ctx: ValidationContext) -> None:
        validate_embed(
            {"title": "T", "author": {"name": "A", "icon_url": "{{user.avatar}}"}, "url": "{{link}}"},
            ctx,
            PATH,
        )

        assert ctx.errors == []


class TestEmbedBudget:
    @staticmethod
    def _oversized() -> dict:
        return {
            "title": "t" * 256,
            "description": "d" * 4096,
            "fields": [{"name": "n", "value": "v" * 1024}, {"name": "n", "value": "v" * 1024}],
        }

    def test_text_length_counts_visible_text(self) -> None:
        embed = {
            "title": "ab",
            "description": "cde",
            "fields": [{"name": "f", "value": "gh"}],
            "footer": {"text": "ij"},
            "author": {"name": "k"},
        }

        assert embed_text_length(embed) == 11

    def test_total_over_budget_warns_by_default(self, ctx: ValidationContext) -> None:
        validate_embed(self._oversized(), ctx, PATH)

        assert ctx.errors == []
        assert any("Total embed size exceeds limit" in w for w in ctx.warnings)
        assert ctx.total_chars == 256 + 4096 + 2 * (1 + 1024)

    def test_total_over_budget_rejected_when_strict(self) -> None:
        ctx = ValidationContext(
            id_factory=sequential_ids(),
            settings=Settings(_env_file=None, KITE_STRICT_EMBED_TOTAL=True),
        )

        validate_embed(self._oversized(), ctx, PATH)

        assert _fields(ctx) == ["embeds.0"]
        assert ctx.errors[0].code == ViolationCode.TOO_LONG

    def test_near_limit_warning(self, ctx: ValidationContext) -> None:
        validate_embed({"description": "d" * 3900}, ctx, PATH)

        assert ctx.errors == []
        assert "embeds.0.description near limit: 3900/4096 chars" in ctx.warnings


class TestEmbedNormalization:
    def test_ids_assigned_and_unknown_keys_dropped(self, ctx: ValidationContext) -> None:
        normalized = validate_embed(
            {"type": "rich", "title": "T", "fields": [{"name": "n", "value": "v"}]}, ctx, PATH
        )

        assert normalized["id"] == 100
        assert normalized["fields"][0]["id"] == 101
        assert "type" not in normalized

    def test_existing_ids_kept(self, ctx: ValidationContext) -> None:
        normalized = validate_embed(
            {"id": 7, "title": "T", "fields": [{"id": 8, "name": "n", "value": "v"}]}, ctx, PATH
        )

        assert normalized["id"] == 7
        assert normalized["fields"][0]["id"] == 8

    def test_discord_embed_converted(self, ctx: ValidationContext) -> None:
        embed = discord.Embed(title="Hello", description="World", color=0x5865F2)
        embed.set_footer(text="footer")

        normalized = validate_embed(embed, ctx, PATH)

        assert ctx.errors == []
        assert normalized["title"] == "Hello"
        assert normalized["footer"]["text"] == "footer"

    def test_non_object_embed(self, ctx: ValidationContext) -> None:
        assert validate_embed("embed", ctx, PATH) is None
        assert _fields(ctx) == ["embeds.0"]
