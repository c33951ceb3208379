"""Utility functions for row mapping and URL formatting."""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any, Iterable

EXCERPT_WORDS = 55
AVATAR_SIZES = (24, 48, 96)


def as_text(value: Any) -> str:
    """Return a nullable string column as str ('' for NULL)."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return str(value)


def as_int(value: Any) -> int:
    """Return a nullable integer column as int (0 for NULL)."""
    if value is None or value == "":
        return 0
    return int(value)


def as_datetime(value: Any) -> datetime | None:
    """Return a DATETIME column, or None for NULL and zero dates."""
    if isinstance(value, datetime):
        return value
    return None


def placeholders(values: Iterable) -> str:
    """Return ``%s, %s, ...`` for a parameterized IN list."""
    return ", ".join(["%s"] * len(list(values)))


def generate_excerpt(content: str) -> str:
    """Return the first 55 words of the content."""
    words = content.split(" ")
    if len(words) < EXCERPT_WORDS:
        return content
    return " ".join(words[:EXCERPT_WORDS])


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def avatar_urls(email: str) -> dict[str, str]:
    """Gravatar URLs keyed by pixel size."""
    email_hash = md5_hex(email.strip().lower())
    return {
        str(size): f"https://secure.gravatar.com/avatar/{email_hash}?s={size}&d=mm&r=g"
        for size in AVATAR_SIZES
    }


def render_permalink(
    site_url: str,
    structure: str,
    post_id: int,
    slug: str,
    date: datetime | None,
    author_slug: str = "",
) -> str:
    """Render a post permalink from a permalink structure like ``/%year%/%postname%/``.

    An empty structure yields WordPress's plain ``?p=<id>`` links.
    """
    if not structure:
        return f"{site_url}/?p={post_id}"

    replacements = {
        "%post_id%": str(post_id),
        "%postname%": slug,
        "%author%": author_slug,
    }
    if date is not None:
        replacements.update({
            "%year%": date.strftime("%Y"),
            "%monthnum%": date.strftime("%m"),
            "%day%": date.strftime("%d"),
            "%hour%": date.strftime("%H"),
            "%minute%": date.strftime("%M"),
            "%second%": date.strftime("%S"),
        })

    path = structure
    for tag, value in replacements.items():
        path = path.replace(tag, value)
    return f"{site_url}{path}"
