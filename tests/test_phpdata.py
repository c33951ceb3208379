"""Tests for PHP-serialized value decoding."""

import pytest

from wordpress_rest_api.errors import DecodeError
from wordpress_rest_api.phpdata import (
    parse_attachment_metadata,
    parse_sticky_ids,
    to_int,
    unserialize,
)

from conftest import ATTACHMENT_METADATA, STICKY_OPTION

SITE = "http://example.test"
UPLOADS = "wp-content/uploads"


class TestUnserialize:
    """Tests for the phpserialize wrapper."""

    def test_array_becomes_dict(self):
        assert unserialize('a:1:{s:3:"key";s:5:"value";}') == {"key": "value"}

    def test_malformed_raises_decode_error(self):
        with pytest.raises(DecodeError):
            unserialize("not serialized")


class TestToInt:
    """Numeric fields are stored as ints or numeric strings."""

    def test_values(self):
        assert to_int(150) == 150
        assert to_int("768") == 768
        assert to_int(" 12 ") == 12
        assert to_int("abc") is None
        assert to_int(None) is None
        assert to_int([1]) is None


class TestStickyIds:
    """Tests for the sticky_posts option."""

    def test_ids(self):
        assert parse_sticky_ids(STICKY_OPTION) == {2, 5}

    def test_string_ids(self):
        assert parse_sticky_ids('a:1:{i:0;s:1:"9";}') == {9}

    def test_missing_option(self):
        assert parse_sticky_ids("") == set()

    def test_malformed_option_is_empty(self):
        assert parse_sticky_ids("a:2:{i:0;") == set()


class TestAttachmentMetadata:
    """Tests for _wp_attachment_metadata decoding."""

    def test_dimensions_accept_numeric_strings(self):
        details = parse_attachment_metadata(ATTACHMENT_METADATA, SITE, UPLOADS)
        assert details.width == 1024
        assert details.height == 768
        assert details.file == "2024/01/beach.jpeg"

    def test_size_urls_use_year_and_month_of_the_file(self):
        details = parse_attachment_metadata(ATTACHMENT_METADATA, SITE, UPLOADS)
        thumbnail = details.sizes["thumbnail"]
        assert thumbnail.width == 150
        assert thumbnail.height == 150
        assert thumbnail.mime_type == "image/jpeg"
        assert thumbnail.source_url == f"{SITE}/{UPLOADS}/2024/01/beach-150x150.jpeg"

    def test_full_size_is_synthesised(self):
        details = parse_attachment_metadata(
            ATTACHMENT_METADATA, SITE, UPLOADS, mime_type="image/jpeg"
        )
        full = details.sizes["full"]
        assert full.file == "beach.jpeg"
        assert (full.width, full.height) == (1024, 768)
        assert full.source_url == f"{SITE}/{UPLOADS}/2024/01/beach.jpeg"

    def test_image_meta_fields_become_strings(self):
        blob = 'a:1:{s:10:"image_meta";a:2:{s:6:"camera";s:5:"Nikon";s:3:"iso";i:200;}}'
        details = parse_attachment_metadata(blob, SITE, UPLOADS)
        assert details.image_meta.camera == "Nikon"
        assert details.image_meta.iso == "200"
        assert details.image_meta.aperture == ""

    def test_malformed_blob_raises(self):
        with pytest.raises(DecodeError):
            parse_attachment_metadata("not serialized", SITE, UPLOADS)

    def test_non_array_raises(self):
        with pytest.raises(DecodeError):
            parse_attachment_metadata('s:3:"abc";', SITE, UPLOADS)
