"""Tests for helper functions."""

from datetime import datetime

from wordpress_rest_api.utils import (
    as_datetime,
    as_int,
    as_text,
    avatar_urls,
    generate_excerpt,
    md5_hex,
    placeholders,
    render_permalink,
)


class TestRowValues:
    """Tests for nullable column helpers."""

    def test_as_text(self):
        assert as_text(None) == ""
        assert as_text(b"hello") == "hello"
        assert as_text(bytearray(b"world")) == "world"
        assert as_text(12) == "12"

    def test_as_int(self):
        assert as_int(None) == 0
        assert as_int("") == 0
        assert as_int("42") == 42

    def test_as_datetime(self):
        """Zero dates come back from aiomysql as strings and map to None."""
        dt = datetime(2024, 1, 15, 10, 30, 0)
        assert as_datetime(dt) is dt
        assert as_datetime("0000-00-00 00:00:00") is None
        assert as_datetime(None) is None

    def test_placeholders(self):
        assert placeholders([1, 2, 3]) == "%s, %s, %s"
        assert placeholders(("a",)) == "%s"


class TestExcerpt:
    """Tests for excerpt generation."""

    def test_short_content_is_kept(self):
        assert generate_excerpt("one two three") == "one two three"

    def test_long_content_is_cut_at_55_words(self):
        content = " ".join(f"w{i}" for i in range(80))
        excerpt = generate_excerpt(content)
        assert len(excerpt.split(" ")) == 55
        assert excerpt.endswith("w54")


class TestAvatars:
    """Tests for gravatar URLs."""

    def test_sizes_and_hash(self):
        urls = avatar_urls(" Ada@Example.test ")
        email_hash = md5_hex("ada@example.test")
        assert set(urls) == {"24", "48", "96"}
        assert urls["96"] == f"https://secure.gravatar.com/avatar/{email_hash}?s=96&d=mm&r=g"


class TestPermalink:
    """Tests for permalink rendering."""

    def test_postname(self):
        link = render_permalink("http://example.test", "/%postname%/", 1, "hello", None)
        assert link == "http://example.test/hello/"

    def test_date_structure(self):
        date = datetime(2024, 3, 5, 9, 30, 0)
        link = render_permalink(
            "http://example.test", "/%year%/%monthnum%/%day%/%postname%/", 1, "hello", date
        )
        assert link == "http://example.test/2024/03/05/hello/"

    def test_plain_links(self):
        assert render_permalink("http://example.test", "", 7, "x", None) == "http://example.test/?p=7"

    def test_post_id(self):
        link = render_permalink("http://example.test", "/archives/%post_id%", 12, "x", None)
        assert link == "http://example.test/archives/12"
