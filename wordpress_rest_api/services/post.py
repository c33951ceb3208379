"""Post service: sticky posts, taxonomy filters and post-only view fields."""

from __future__ import annotations

from ..config import (
    CATEGORY_TAXONOMY,
    POST_TYPE,
    STANDARD_FORMAT,
    STICKY_POSTS_OPTION,
    TAG_TAXONOMY,
    logger,
)
from ..models import (
    ContentBase,
    GetItemRequest,
    ListFilter,
    ListRequest,
    Post,
    PostTaxonomies,
)
from ..phpdata import parse_sticky_ids
from .content import FORMAT_PREFIX, ContentService


class PostService(ContentService):
    content_type = POST_TYPE

    async def get_post(self, request: GetItemRequest) -> ContentBase:
        return await self.get_item(request)

    async def list_posts(self, request: ListRequest) -> list[ContentBase]:
        return await self.list_items(request)

    async def sticky_ids(self) -> set[int]:
        """Decode the ``sticky_posts`` option; a missing option means no sticky posts."""
        return parse_sticky_ids(await self.shared.load_option(STICKY_POSTS_OPTION))

    async def term_taxonomy_ids(self, term_ids: list[int], taxonomy: str) -> list[int]:
        if not term_ids:
            return []
        rows = await self.terms.term_taxonomies(term_ids, taxonomy)
        return [row.term_taxonomy_id for row in rows]

    async def resolve_filter(self, request: ListRequest) -> ListFilter | None:
        """Resolve category and tag ids to ``term_taxonomy`` ids.

        Returns None when an inclusion filter names no existing term.
        """
        list_filter = request.to_filter()

        included = [
            *await self.term_taxonomy_ids(request.categories, CATEGORY_TAXONOMY),
            *await self.term_taxonomy_ids(request.tags, TAG_TAXONOMY),
        ]
        if (request.categories or request.tags) and not included:
            logger.info("No terms match categories=%s tags=%s", request.categories, request.tags)
            return None

        list_filter.term_taxonomy_ids = included
        list_filter.term_taxonomy_ids_exclude = [
            *await self.term_taxonomy_ids(request.categories_exclude, CATEGORY_TAXONOMY),
            *await self.term_taxonomy_ids(request.tags_exclude, TAG_TAXONOMY),
        ]
        return list_filter

    def view_fields(
        self,
        item: Post,
        meta: dict[str, str],
        taxonomies: PostTaxonomies | None,
        sticky_ids: set[int] | None,
    ) -> None:
        super().view_fields(item, meta, taxonomies, sticky_ids)
        item.sticky = item.id in (sticky_ids or set())

        if taxonomies is not None:
            by_taxonomy = taxonomies.taxonomies.get(item.id, {})
            item.categories = by_taxonomy.get(CATEGORY_TAXONOMY, [])
            item.tags = by_taxonomy.get(TAG_TAXONOMY, [])
            post_format = taxonomies.formats.get(item.id, "")
            item.format = post_format.removeprefix(FORMAT_PREFIX) or STANDARD_FORMAT
