"""Aggregation pipeline shared by the post and page services.

A request runs through the same steps for a single item or a collection:

1. Fetch the primary rows (single lookup, or id query + bulk fetch).
2. Batch-fetch relational context once for all ids: post meta, authors,
   revisions and, when ``_embed`` was requested, terms, comments and
   featured media.
3. Enrich each item: featured media id, link set, predecessor version,
   embedded sub-graph, view-only fields.
4. Project onto the ``embed`` context shape when asked to.

Any repository error aborts the whole request.
"""

from __future__ import annotations

from ..config import (
    ATTACHMENT_TYPE,
    EMBED_CONTEXT,
    PAGE_TEMPLATE_META_KEY,
    POST_TYPE,
    THUMBNAIL_META_KEY,
    ApiConfig,
    logger,
)
from ..errors import InvalidID, NotFound, WordPressAPIError
from ..links import content_links, predecessor_link
from ..models import (
    Comment,
    ContentBase,
    Embedded,
    GetItemRequest,
    ListFilter,
    ListRequest,
    Media,
    Post,
    PostTaxonomies,
    UserDetail,
)
from ..phpdata import to_int
from ..repositories import (
    ContentRepository,
    SharedRepository,
    TermRepository,
    UserRepository,
)
from .embedding import (
    compact_user,
    embedded_comment,
    embedded_terms,
    featured_media,
    parent_ids,
)

FORMAT_PREFIX = "post-format-"


class ContentService:
    """Assemble content items of one type from the injected repositories."""

    content_type = POST_TYPE

    def __init__(
        self,
        config: ApiConfig,
        content: ContentRepository,
        terms: TermRepository,
        users: UserRepository,
        shared: SharedRepository,
    ):
        self.config = config
        self.content = content
        self.terms = terms
        self.users = users
        self.shared = shared

    # ------------------------------------------------------------------
    # Hooks for subclasses
    # ------------------------------------------------------------------

    async def sticky_ids(self) -> set[int] | None:
        """Sticky post ids, or None when the type has no sticky concept."""
        return None

    async def resolve_filter(self, request: ListRequest) -> ListFilter | None:
        """Turn a list request into a repository filter.

        Returns None when the request can not match anything.
        """
        return request.to_filter()

    def view_fields(
        self,
        item: Post,
        meta: dict[str, str],
        taxonomies: PostTaxonomies | None,
        sticky_ids: set[int] | None,
    ) -> None:
        """Fill the fields only present in the ``view`` context."""
        item.template = meta.get(PAGE_TEMPLATE_META_KEY, "")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_item(self, request: GetItemRequest) -> ContentBase:
        """Fetch one item by id.

        Raises:
            InvalidID: If no item of this type has the id.
        """
        try:
            item = await self.content.post_by_id(request.id, self.content_type)
        except NotFound as e:
            raise InvalidID(f"Invalid {self.content_type} ID {request.id}") from e
        except WordPressAPIError as e:
            logger.error("Failed to fetch %s %s: %s", self.content_type, request.id, e)
            raise

        sticky_ids = await self.sticky_ids()
        items = await self.assemble([item], request.context, request.embed, sticky_ids)
        return items[0]

    async def list_items(self, request: ListRequest) -> list[ContentBase]:
        """Fetch the collection matching a list request, in query order."""
        try:
            sticky_ids = await self.sticky_ids()
            list_filter = await self.resolve_filter(request)
            if list_filter is None:
                return []
            list_filter.type = self.content_type
            if sticky_ids is None:
                list_filter.sticky = None
            else:
                list_filter.sticky_ids = sticky_ids

            ids = await self.content.query_posts(list_filter)
            if not ids:
                return []
            items = await self.content.posts_by_ids(self.content_type, ids)
        except WordPressAPIError as e:
            logger.error("Failed to list %s items: %s", self.content_type, e)
            raise

        return await self.assemble(items, request.context, request.embed, sticky_ids)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def assemble(
        self,
        items: list[Post],
        context: str,
        embed: bool,
        sticky_ids: set[int] | None = None,
    ) -> list[ContentBase]:
        """Enrich fetched rows and apply the context projection."""
        ids = [item.id for item in items]

        try:
            metas = await self.shared.post_metas_by_post_ids(ids)
            authors = await self.users.users_by_ids([item.author for item in items])
            revisions = await self.content.predecessor_versions(ids)

            taxonomies = None
            comments: dict[int, list[Comment]] = {}
            media: dict[int, Media] = {}
            if embed:
                taxonomies = await self.terms.post_taxonomies(ids)
                for comment in await self.content.comments_by_post_ids(ids):
                    comments.setdefault(comment.post, []).append(comment)

            for item in items:
                item.featured_media = to_int(
                    metas.get(item.id, {}).get(THUMBNAIL_META_KEY)
                ) or 0

            if embed:
                media = await self.featured_media_by_id(
                    [item.featured_media for item in items if item.featured_media]
                )
        except WordPressAPIError as e:
            logger.error("Failed to load context of %s %s: %s", self.content_type, ids, e)
            raise

        results = []
        for item in items:
            meta = metas.get(item.id, {})
            item.links = content_links(
                self.config.api_base_url,
                item.type,
                item.id,
                item.author,
                item.featured_media,
            )

            item_revisions = revisions.get(item.id)
            if item_revisions:
                item.links.predecessor_version = [
                    predecessor_link(
                        self.config.api_base_url, item.type, item.id, item_revisions[0]
                    )
                ]

            if embed:
                item.embedded = self.embedded(
                    item, authors, comments.get(item.id, []), taxonomies, media
                )

            if context == EMBED_CONTEXT:
                results.append(item.as_embed())
                continue

            self.view_fields(item, meta, taxonomies, sticky_ids)
            results.append(item)

        return results

    async def featured_media_by_id(self, media_ids: list[int]) -> dict[int, Media]:
        """Fetch featured attachments and their meta in one batch each."""
        media_ids = sorted(set(media_ids))
        if not media_ids:
            return {}

        attachments = await self.content.posts_by_ids(ATTACHMENT_TYPE, media_ids)
        metas = await self.shared.post_metas_by_post_ids([a.id for a in attachments])

        media = {
            attachment.id: featured_media(attachment, metas.get(attachment.id, {}), self.config)
            for attachment in attachments
        }
        for missing in set(media_ids) - media.keys():
            logger.warning("Featured media %s not found", missing)
        return media

    def embedded(
        self,
        item: Post,
        authors: dict[int, UserDetail],
        comments: list[Comment],
        taxonomies: PostTaxonomies | None,
        media: dict[int, Media],
    ) -> Embedded:
        embedded = Embedded()

        author = authors.get(item.author)
        if author is not None:
            embedded.author = [compact_user(author, self.config)]

        if comments:
            parents = parent_ids(comments)
            embedded.replies = [
                [embedded_comment(comment, item, parents, self.config) for comment in comments]
            ]

        if taxonomies is not None and item.type == POST_TYPE:
            embedded.term = embedded_terms(taxonomies.terms.get(item.id, []), self.config)

        if item.featured_media in media:
            embedded.featured_media = [media[item.featured_media]]

        return embedded
