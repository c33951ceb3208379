"""Request models decoded from the query string."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_PER_PAGE, MAX_PER_PAGE, POST_TYPE

OrderBy = Literal[
    "author", "date", "id", "include", "modified", "parent", "relevance", "slug", "title"
]


class GetItemRequest(BaseModel):
    """Input for fetching a single post or page."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int = Field(..., description="Content ID.", ge=0)
    context: str = Field(default="view", description="Scope of the response (view or embed).")
    password: str | None = Field(default=None, description="Post password.")
    embed: bool = Field(default=False, description="Whether `_embed` was requested.")


class ListFilter(BaseModel):
    """Filters applied when querying a collection of content items."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    page: int = Field(default=1, description="Current page of the collection.", ge=1)
    per_page: int = Field(
        default=DEFAULT_PER_PAGE,
        description="Maximum number of items to return.",
        ge=1,
        le=MAX_PER_PAGE,
    )
    offset: int | None = Field(default=None, description="Offset the result set.", ge=0)
    search: str | None = Field(default=None, description="Search term.", max_length=200)
    after: datetime | None = Field(default=None, description="Published after this date.")
    before: datetime | None = Field(default=None, description="Published before this date.")
    author: list[int] = Field(default_factory=list, description="Author IDs to include.")
    author_exclude: list[int] = Field(default_factory=list, description="Author IDs to exclude.")
    include: list[int] = Field(default_factory=list, description="Content IDs to include.")
    exclude: list[int] = Field(default_factory=list, description="Content IDs to exclude.")
    slug: list[str] = Field(default_factory=list, description="Slugs to include.")
    status: str = Field(default="publish", description="Post status.", max_length=20)
    sticky: bool | None = Field(default=None, description="Limit to (or exclude) sticky posts.")
    order: Literal["asc", "desc"] = Field(default="desc", description="Sort direction.")
    order_by: OrderBy = Field(default="date", description="Sort field.")

    # Pages and attachments
    parent: list[int] = Field(default_factory=list, description="Parent IDs to include.")
    parent_exclude: list[int] = Field(default_factory=list, description="Parent IDs to exclude.")
    menu_order: int | None = Field(default=None, description="Menu order (pages).")
    media_type: str | None = Field(default=None, description="Media family (attachments).")
    mime_type: str | None = Field(default=None, description="MIME type (attachments).")

    type: Literal["post", "page", "attachment"] = Field(default=POST_TYPE)

    # Resolved by the service before querying
    sticky_ids: set[int] = Field(default_factory=set)
    term_taxonomy_ids: list[int] = Field(default_factory=list)
    term_taxonomy_ids_exclude: list[int] = Field(default_factory=list)


class ListRequest(ListFilter):
    """Collection request: filters plus taxonomy filters and projection flags."""

    categories: list[int] = Field(default_factory=list, description="Category IDs to include.")
    categories_exclude: list[int] = Field(default_factory=list, description="Category IDs to exclude.")
    tags: list[int] = Field(default_factory=list, description="Tag IDs to include.")
    tags_exclude: list[int] = Field(default_factory=list, description="Tag IDs to exclude.")
    context: str = Field(default="view", description="Scope of the response (view or embed).")
    embed: bool = Field(default=False, description="Whether `_embed` was requested.")

    def to_filter(self) -> ListFilter:
        """Return the plain filter part of the request."""
        return ListFilter(**{name: getattr(self, name) for name in ListFilter.model_fields})
