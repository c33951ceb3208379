"""User models: the compact public projection and the internal detail row."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ResponseModel
from .links import UserLink


class User(ResponseModel):
    """Compact user projection embedded as a content item's author."""

    id: int
    name: str = ""
    url: str = ""
    description: str = ""
    link: str = ""
    slug: str = ""
    avatar_urls: dict[str, str] | None = None
    links: UserLink = Field(default_factory=UserLink, alias="_links")


class UserDetail(ResponseModel):
    """Full ``users`` row. Never serialized as-is; see ``User``."""

    id: int
    display_name: str = ""
    nicename: str = ""
    url: str = ""
    description: str = ""
    email: str = ""
    login: str = ""
    registered: datetime | None = None
    status: int = 0
