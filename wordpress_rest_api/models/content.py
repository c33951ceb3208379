"""Content (post/page) models and the embedded sub-graph."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ContentRendered, Rendered, ResponseModel
from .comment import Comment
from .links import RestLink
from .media import Media
from .term import Term
from .user import User


class Embedded(ResponseModel):
    """The ``_embedded`` sub-graph populated when ``_embed`` is requested."""

    author: list[User] | None = None
    featured_media: list[Media] | None = Field(default=None, alias="wp:featuredmedia")
    # One list per taxonomy, categories first then tags
    term: list[list[Term]] | None = Field(default=None, alias="wp:term")
    replies: list[list[Comment]] | None = None


class ContentBase(ResponseModel):
    """Reduced projection returned for ``context=embed``."""

    id: int
    date: datetime | None = None
    slug: str = ""
    type: str = ""
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    author: int = 0
    excerpt: ContentRendered = Field(default_factory=ContentRendered)
    featured_media: int = 0
    links: RestLink = Field(default_factory=RestLink, alias="_links")
    embedded: Embedded | None = Field(default=None, alias="_embedded")


class Post(ContentBase):
    """A post or page with every field of the ``view`` context."""

    date_gmt: datetime | None = None
    guid: Rendered = Field(default_factory=Rendered)
    modified: datetime | None = None
    modified_gmt: datetime | None = None
    status: str = ""
    content: ContentRendered = Field(default_factory=ContentRendered)
    comment_status: str = ""
    ping_status: str = ""
    meta: list = Field(default_factory=list)

    # View-only fields, filled in by the aggregation service
    template: str | None = None
    format: str | None = None
    sticky: bool | None = None
    categories: list[int] | None = None
    tags: list[int] | None = None

    # Pages only
    menu_order: int | None = None
    parent: int | None = None

    # Attachments only
    mime_type: str | None = None
    media_type: str | None = None

    password: str = Field(default="", exclude=True)

    def as_embed(self) -> ContentBase:
        """Project the item onto the reduced ``context=embed`` shape."""
        fields = {name: getattr(self, name) for name in ContentBase.model_fields}
        return ContentBase(**fields)
