"""Comment model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ContentRendered, ResponseModel
from .links import CommentLink


class Comment(ResponseModel):
    id: int
    post: int
    parent: int = 0
    author: int = 0
    author_name: str = ""
    author_url: str = ""
    author_avatar_urls: dict[str, str] | None = None
    date: datetime | None = None
    content: ContentRendered = Field(default_factory=ContentRendered)
    link: str = ""
    type: str = "comment"
    links: CommentLink | None = Field(default=None, alias="_links")
