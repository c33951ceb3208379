"""Canonical REST URLs for content items, terms and their relations.

Everything here is pure string composition: no I/O and no error conditions.
An unknown content type yields an empty plural segment rather than a failure.
"""

from __future__ import annotations

from .config import CATEGORY_TAXONOMY, POST_TYPE, TAG_TAXONOMY
from .models import (
    Curie,
    EmbeddableLink,
    Href,
    RestLink,
    TermLink,
    TermPost,
    VersionLink,
)

CURIES_HREF = "https://api.w.org/{rel}"

PLURALS = {
    "post": "posts",
    "page": "pages",
    "category": "categories",
    "post_tag": "tags",
    "comment": "comments",
}


def plural(content_type: str) -> str:
    """Return the REST collection name of a type ('' when the type is unknown)."""
    return PLURALS.get(content_type, "")


class LinkURL:
    """URL templates for one resource type under an API base URL."""

    def __init__(self, base_url: str, content_type: str):
        self.base_url = base_url
        self.type = content_type

    def about_prefix(self) -> str:
        if self.type in (CATEGORY_TAXONOMY, TAG_TAXONOMY):
            return "taxonomies"
        return "types"

    def self_link(self, id) -> str:
        return f"{self.base_url}/{plural(self.type)}/{id}"

    def collection(self) -> str:
        return f"{self.base_url}/{plural(self.type)}/"

    def about(self) -> str:
        return f"{self.base_url}/{self.about_prefix()}/{self.type}"

    def author(self, user_id: int) -> str:
        return f"{self.base_url}/users/{user_id}"

    def replies(self, id) -> str:
        return f"{self.base_url}/comments?post={id}"

    def featured_media(self, media_id: int) -> str:
        return f"{self.base_url}/media/{media_id}"

    def revisions(self, id) -> str:
        return f"{self.base_url}/{plural(self.type)}/{id}/revisions"

    def attachment(self, id) -> str:
        return f"{self.base_url}/media?parent={id}"

    def categories(self, id) -> str:
        return f"{self.base_url}/categories?post={id}"

    def tags(self, id) -> str:
        return f"{self.base_url}/tags?post={id}"

    def post_type(self, id) -> str:
        """Posts carrying this term, e.g. ``/posts?categories=3``."""
        return f"{self.base_url}/posts?{plural(self.type)}={id}"

    @staticmethod
    def curies() -> str:
        return CURIES_HREF


def predecessor_version(base_url: str, content_type: str, content_id: int, revision_id: int) -> str:
    return f"{base_url}/{plural(content_type)}/{content_id}/revisions/{revision_id}"


def category_link(site_url: str, slug: str) -> str:
    """Front-end archive URL of a category."""
    return f"{site_url}/category/{slug}/"


def tag_link(site_url: str, slug: str) -> str:
    """Front-end archive URL of a tag."""
    return f"{site_url}/tag/{slug}/"


def wp_curie() -> Curie:
    return Curie(name="wp", href=LinkURL.curies(), templated=True)


def content_links(
    base_url: str,
    content_type: str,
    content_id: int,
    author_id: int,
    featured_media: int = 0,
) -> RestLink:
    """Build the ``_links`` envelope of a post or page.

    ``wp:featuredmedia`` is present only for a nonzero featured media id and
    ``wp:term`` only for posts.
    """
    url = LinkURL(base_url, content_type)

    links = RestLink(
        self_link=[Href(href=url.self_link(content_id))],
        collection=[Href(href=url.collection())],
        about=[Href(href=url.about())],
        author=[EmbeddableLink(href=url.author(author_id))],
        replies=[EmbeddableLink(href=url.replies(content_id))],
        version_history=[Href(href=url.revisions(content_id))],
        attachment=[Href(href=url.attachment(content_id))],
        curies=[wp_curie()],
    )

    if featured_media:
        links.featured_media = [EmbeddableLink(href=url.featured_media(featured_media))]

    if content_type == POST_TYPE:
        links.term = [
            TermPost(taxonomy=CATEGORY_TAXONOMY, href=url.categories(content_id)),
            TermPost(taxonomy=TAG_TAXONOMY, href=url.tags(content_id)),
        ]

    return links


def predecessor_link(
    base_url: str, content_type: str, content_id: int, revision_id: int
) -> VersionLink:
    return VersionLink(
        id=revision_id,
        href=predecessor_version(base_url, content_type, content_id, revision_id),
    )


def term_links(taxonomy: str, base_url: str, term_id: int) -> TermLink:
    """Build the ``_links`` envelope of a term of the given taxonomy."""
    url = LinkURL(base_url, taxonomy)
    return TermLink(
        self_link=[Href(href=url.self_link(term_id))],
        collection=[Href(href=url.collection())],
        about=[Href(href=url.about())],
        post_type=[Href(href=url.post_type(term_id))],
        curies=[wp_curie()],
    )
