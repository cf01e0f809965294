"""Independent validation predicates.

Every rule here is a pure function over plain values so it can be tested
on its own and reused outside the full message traversal.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit

# Template placeholder such as {{user.avatar}}, resolved at send time.
VARIABLE_RE = re.compile(r"\{\{[^}]+\}\}")

HOSTNAME_RE = re.compile(r"\.[a-zA-Z]{2,}$")

IMAGE_PATH_RE = re.compile(r"\.(png|jpg|jpeg|webp|gif)$", re.IGNORECASE)

RESERVED_USERNAME_SUBSTRINGS = ("clyde", "discord")
RESERVED_USERNAMES = frozenset({"everyone", "here"})

INVALID_URL_MESSAGE = "Invalid URL"
INVALID_IMAGE_URL_MESSAGE = "Invalid image URL"
USERNAME_SUBSTRING_MESSAGE = "Username can't contain 'clyde' or 'discord'"
USERNAME_RESERVED_MESSAGE = "Username can't be 'everyone' or 'here'"


def contains_template_variable(value: str) -> bool:
    return VARIABLE_RE.search(value) is not None


def _url_hostname(value: str) -> str | None:
    """ASCII hostname of an absolute URL, or None if it does not parse."""
    try:
        parts = urlsplit(value.strip())
        hostname = parts.hostname
        parts.port  # out-of-range ports raise here
    except ValueError:
        return None

    if not parts.scheme or not hostname:
        return None
    if any(ch.isspace() for ch in hostname):
        return None

    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return hostname


def _has_public_hostname(value: str) -> bool:
    hostname = _url_hostname(value)
    if hostname is None:
        return False
    return hostname == "localhost" or HOSTNAME_RE.search(hostname) is not None


def is_valid_url(value: str) -> bool:
    """Accept template placeholders or absolute URLs with a plausible host.

    Examples:
        >>> is_valid_url("https://example.com/x.png")
        True
        >>> is_valid_url("{{avatar}}")
        True
        >>> is_valid_url("ftp://x")
        False
    """
    if contains_template_variable(value):
        return True
    return _has_public_hostname(value)


def is_valid_image_url(value: str, *, strict: bool = False) -> bool:
    """URL check for images.

    Without ``strict`` this is the same as ``is_valid_url``. With ``strict``
    the path must also end in a known image extension.
    """
    if contains_template_variable(value):
        return True
    if not _has_public_hostname(value):
        return False
    if not strict:
        return True
    return IMAGE_PATH_RE.search(urlsplit(value.strip()).path) is not None


def username_violations(value: str) -> list[str]:
    """Reasons a webhook username override is refused (empty if allowed)."""
    lowered = value.lower()
    reasons = []
    if any(word in lowered for word in RESERVED_USERNAME_SUBSTRINGS):
        reasons.append(USERNAME_SUBSTRING_MESSAGE)
    if lowered in RESERVED_USERNAMES:
        reasons.append(USERNAME_RESERVED_MESSAGE)
    return reasons


def message_has_body(content: Any, embeds: Sequence[Any], components: Sequence[Any]) -> bool:
    """A message needs content, an embed or a component row.

    Attachments alone are not enough.
    """
    return bool(content) or bool(embeds) or bool(components)


EMBED_TEXT_KEYS = ("description", "title")
EMBED_BLOCK_KEYS = ("author", "provider", "footer", "image", "thumbnail")


def embed_has_visible_content(embed: Mapping[str, Any]) -> bool:
    """True when at least one visually meaningful embed part is set.

    Empty strings do not count; an empty block object (e.g. ``footer: {}``)
    does.
    """
    if any(embed.get(key) for key in EMBED_TEXT_KEYS):
        return True
    if any(embed.get(key) is not None for key in EMBED_BLOCK_KEYS):
        return True
    return bool(embed.get("fields"))


def button_has_label_or_emoji(button: Mapping[str, Any]) -> bool:
    return bool(button.get("label")) or button.get("emoji") is not None


def emoji_has_identity(emoji: Mapping[str, Any]) -> bool:
    return bool(emoji.get("id")) or bool(emoji.get("name"))
