"""Hyperlink (``_links``) models."""

from __future__ import annotations

from pydantic import Field

from .base import ResponseModel


class Href(ResponseModel):
    href: str


class EmbeddableLink(ResponseModel):
    embeddable: bool = True
    href: str


class VersionLink(ResponseModel):
    """A ``predecessor-version`` entry."""

    id: int
    href: str


class TermPost(ResponseModel):
    """A ``wp:term`` entry pointing at the terms of one taxonomy for a post."""

    taxonomy: str
    embeddable: bool = True
    href: str


class Curie(ResponseModel):
    name: str = "wp"
    href: str
    templated: bool = True


class BaseLink(ResponseModel):
    """Links shared by content items and embedded media."""

    self_link: list[Href] = Field(default_factory=list, alias="self")
    collection: list[Href] = Field(default_factory=list)
    about: list[Href] = Field(default_factory=list)
    author: list[EmbeddableLink] | None = None
    replies: list[EmbeddableLink] | None = None


class RestLink(BaseLink):
    """The full ``_links`` envelope of a post or page."""

    version_history: list[Href] = Field(default_factory=list, alias="version-history")
    predecessor_version: list[VersionLink] | None = Field(
        default=None, alias="predecessor-version"
    )
    featured_media: list[EmbeddableLink] | None = Field(
        default=None, alias="wp:featuredmedia"
    )
    attachment: list[Href] | None = Field(default=None, alias="wp:attachment")
    term: list[TermPost] | None = Field(default=None, alias="wp:term")
    curies: list[Curie] | None = None


class TermLink(ResponseModel):
    """The ``_links`` envelope of an embedded term."""

    self_link: list[Href] = Field(default_factory=list, alias="self")
    collection: list[Href] = Field(default_factory=list)
    about: list[Href] = Field(default_factory=list)
    post_type: list[Href] = Field(default_factory=list, alias="wp:post_type")
    curies: list[Curie] = Field(default_factory=list)


class UserLink(ResponseModel):
    self_link: list[Href] = Field(default_factory=list, alias="self")
    collection: list[Href] = Field(default_factory=list)


class CommentUpLink(EmbeddableLink):
    post_type: str = "post"


class CommentLink(ResponseModel):
    """The ``_links`` envelope of an embedded comment."""

    self_link: list[Href] = Field(default_factory=list, alias="self")
    collection: list[Href] = Field(default_factory=list)
    author: list[EmbeddableLink] | None = None
    up: list[CommentUpLink] = Field(default_factory=list)
    in_reply_to: list[EmbeddableLink] | None = Field(default=None, alias="in-reply-to")
    children: list[Href] | None = None
