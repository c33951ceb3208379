"""Capability protocols implemented by the entity repositories.

Services depend on these protocols only; the aiomysql-backed classes are
injected at construction time (tests inject in-memory fakes).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import (
    Comment,
    ListFilter,
    Post,
    PostTaxonomies,
    TermTaxonomy,
    UserDetail,
)


@runtime_checkable
class ContentRepository(Protocol):
    """Lookups over the ``posts`` and ``comments`` tables."""

    async def post_by_id(self, post_id: int, post_type: str) -> Post:
        """Fetch one content item. Raises NotFound when absent."""
        ...

    async def query_posts(self, list_filter: ListFilter) -> list[int]:
        """Return the ids matching a filter, in result order."""
        ...

    async def posts_by_ids(self, post_type: str, ids: list[int]) -> list[Post]:
        """Fetch full rows for ids, preserving the order of ``ids``."""
        ...

    async def comments_by_post_ids(self, ids: list[int]) -> list[Comment]:
        """Return approved comments of the given content items."""
        ...

    async def predecessor_versions(self, ids: list[int]) -> dict[int, list[int]]:
        """Map content id -> revision ids, newest first."""
        ...


@runtime_checkable
class TermRepository(Protocol):
    """Lookups over ``terms``, ``term_taxonomy`` and ``term_relationships``."""

    async def post_taxonomies(self, ids: list[int]) -> PostTaxonomies:
        ...

    async def term_taxonomies(self, term_ids: list[int], taxonomy: str) -> list[TermTaxonomy]:
        ...


@runtime_checkable
class UserRepository(Protocol):
    """Lookups over ``users`` and ``usermeta``."""

    async def users_by_ids(self, ids: list[int]) -> dict[int, UserDetail]:
        ...


@runtime_checkable
class SharedRepository(Protocol):
    """Lookups over ``options`` and ``postmeta``."""

    async def load_option(self, name: str) -> str:
        ...

    async def post_metas_by_post_ids(self, ids: list[int]) -> dict[int, dict[str, str]]:
        ...
