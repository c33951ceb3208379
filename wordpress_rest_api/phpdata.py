"""Decoding of PHP-serialized values stored in options and post meta.

WordPress stores arrays (sticky post ids, attachment metadata) with PHP's
``serialize()``. Numeric fields come back either as integers or as numeric
strings depending on how they were written, so every numeric read goes
through ``to_int``.
"""

from __future__ import annotations

from typing import Any

import phpserialize

from .config import logger
from .errors import DecodeError
from .models import ImageMeta, ImageSize, MediaDetails

IMAGE_META_FIELDS = tuple(ImageMeta.model_fields)


def unserialize(value: str | bytes) -> Any:
    """Decode a PHP-serialized value.

    PHP arrays are returned as dicts keyed by int or str.

    Raises:
        DecodeError: If the value is not a valid serialized PHP value.
    """
    data = value.encode("utf-8") if isinstance(value, str) else value
    try:
        return phpserialize.loads(data, decode_strings=True)
    except (ValueError, TypeError, EOFError) as e:
        raise DecodeError(f"Invalid serialized value: {e}") from e


def to_int(value: Any) -> int | None:
    """Normalize an int-or-numeric-string field; None when absent or malformed."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_sticky_ids(option_value: str) -> set[int]:
    """Return the post ids held by the serialized ``sticky_posts`` option.

    A malformed value is logged and treated as "no sticky posts".
    """
    if not option_value:
        return set()
    try:
        value = unserialize(option_value)
    except DecodeError as e:
        logger.error("Failed to decode sticky posts option %r: %s", option_value, e)
        return set()

    if not isinstance(value, dict):
        return set()

    ids = set()
    for item in value.values():
        post_id = to_int(item)
        if post_id is not None:
            ids.add(post_id)
    return ids


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _image_meta(raw: Any) -> ImageMeta:
    if not isinstance(raw, dict):
        return ImageMeta()
    return ImageMeta(**{
        name: _as_str(raw[name]) for name in IMAGE_META_FIELDS if name in raw
    })


def upload_url(site_url: str, upload_path: str, *parts: str) -> str:
    return "/".join([site_url, upload_path, *parts])


def parse_attachment_metadata(
    blob: str,
    site_url: str,
    upload_path: str,
    mime_type: str = "",
    full_source_url: str = "",
) -> MediaDetails:
    """Decode ``_wp_attachment_metadata`` into media details.

    Each intermediate size resolves to ``{site}/{upload}/{yyyy}/{mm}/{file}``
    where yyyy/mm are the first two segments of the uploaded file path.
    A ``full`` size is synthesised from the top-level dimensions.

    Raises:
        DecodeError: If the blob is not a serialized PHP array.
    """
    value = unserialize(blob)
    if not isinstance(value, dict):
        raise DecodeError("Attachment metadata is not an array")

    file = _as_str(value.get("file"))
    details = MediaDetails(
        width=to_int(value.get("width")) or 0,
        height=to_int(value.get("height")) or 0,
        file=file,
        image_meta=_image_meta(value.get("image_meta")),
    )

    path_parts = file.split("/")
    directory = path_parts[:2] if len(path_parts) > 2 else path_parts[:-1]

    sizes = {}
    raw_sizes = value.get("sizes")
    if isinstance(raw_sizes, dict):
        for name, raw_size in raw_sizes.items():
            if not isinstance(raw_size, dict):
                continue
            size_file = _as_str(raw_size.get("file"))
            sizes[str(name)] = ImageSize(
                file=size_file,
                width=to_int(raw_size.get("width")) or 0,
                height=to_int(raw_size.get("height")) or 0,
                mime_type=_as_str(raw_size.get("mime-type")),
                source_url=upload_url(site_url, upload_path, *directory, size_file),
            )

    sizes["full"] = ImageSize(
        file=path_parts[-1],
        width=details.width,
        height=details.height,
        mime_type=mime_type,
        source_url=full_source_url or upload_url(site_url, upload_path, file),
    )
    details.sizes = sizes
    return details
