"""Aggregation services assembling REST content items from the repositories."""

from __future__ import annotations

from ..config import ApiConfig
from ..db import Database
from ..repositories import (
    MySQLContentRepository,
    MySQLSharedRepository,
    MySQLTermRepository,
    MySQLUserRepository,
)
from .content import ContentService
from .page import PageService
from .post import PostService

__all__ = ["ContentService", "PostService", "PageService", "build_services"]


def build_services(database: Database, config: ApiConfig) -> tuple[PostService, PageService]:
    """Wire the MySQL repositories into the post and page services."""
    repositories = (
        MySQLContentRepository(database, config),
        MySQLTermRepository(database, config),
        MySQLUserRepository(database, config),
        MySQLSharedRepository(database, config),
    )
    return PostService(config, *repositories), PageService(config, *repositories)
