"""Post and page tools mirroring the REST routes."""

from __future__ import annotations

import json
from typing import Any

from mcp.server.fastmcp import Context
from pydantic import ValidationError

from ..api.errors import error_envelope
from ..api.params import invalid_parameter
from ..errors import WordPressAPIError
from ..models import GetItemRequest, ListRequest

READ_ONLY = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}


def _service(ctx: Context, name: str):
    return ctx.request_context.lifespan_context[name]


def _error(e: BaseException) -> str:
    return json.dumps(error_envelope(e).model_dump(exclude_none=True), indent=2)


def _item_request(**params: Any) -> GetItemRequest:
    try:
        return GetItemRequest(**{k: v for k, v in params.items() if v is not None})
    except ValidationError as e:
        raise invalid_parameter(e) from e


def _list_request(**params: Any) -> ListRequest:
    try:
        return ListRequest(**{k: v for k, v in params.items() if v is not None})
    except ValidationError as e:
        raise invalid_parameter(e) from e


def register_content_tools(mcp):
    """Register post and page tools with the MCP server."""

    @mcp.tool(name="wp_get_post", annotations={"title": "Get a Post", **READ_ONLY})
    async def wp_get_post(
        post_id: int,
        context: str = "view",
        embed: bool = False,
        ctx: Context = None,
    ) -> str:
        """Get one published post in the WordPress REST API shape.

        Args:
            post_id: Post ID.
            context: ``view`` for every field, ``embed`` for the reduced shape.
            embed: Include the ``_embedded`` author, terms, comments and featured media.

        Returns:
            str: The post as JSON, or a REST error envelope.
        """
        try:
            request = _item_request(id=post_id, context=context, embed=embed)
            item = await _service(ctx, "post_service").get_post(request)
        except WordPressAPIError as e:
            return _error(e)
        return json.dumps(item.to_response(), indent=2)

    @mcp.tool(name="wp_list_posts", annotations={"title": "List Posts", **READ_ONLY})
    async def wp_list_posts(
        page: int = 1,
        per_page: int = 10,
        search: str | None = None,
        after: str | None = None,
        before: str | None = None,
        author: list[int] | None = None,
        author_exclude: list[int] | None = None,
        include: list[int] | None = None,
        exclude: list[int] | None = None,
        slug: list[str] | None = None,
        status: str = "publish",
        sticky: bool | None = None,
        categories: list[int] | None = None,
        categories_exclude: list[int] | None = None,
        tags: list[int] | None = None,
        tags_exclude: list[int] | None = None,
        order: str = "desc",
        order_by: str = "date",
        context: str = "view",
        embed: bool = False,
        ctx: Context = None,
    ) -> str:
        """List posts with the WordPress REST API collection filters.

        Args:
            page: Page of the collection (default 1).
            per_page: Items per page (default 10, max 100).
            search: Match title, excerpt or content.
            after: Only posts published after this ISO 8601 date.
            before: Only posts published before this ISO 8601 date.
            author: Author IDs to include.
            author_exclude: Author IDs to exclude.
            include: Post IDs to include.
            exclude: Post IDs to exclude.
            slug: Slugs to include.
            status: Post status (default publish).
            sticky: True for sticky posts only, False to leave them out.
            categories: Category IDs to include.
            categories_exclude: Category IDs to exclude.
            tags: Tag IDs to include.
            tags_exclude: Tag IDs to exclude.
            order: asc or desc.
            order_by: author, date, id, include, modified, parent, relevance, slug or title.
            context: ``view`` or ``embed``.
            embed: Include the ``_embedded`` sub-graph.

        Returns:
            str: JSON list of posts, or a REST error envelope.
        """
        try:
            request = _list_request(
                page=page,
                per_page=per_page,
                search=search,
                after=after,
                before=before,
                author=author,
                author_exclude=author_exclude,
                include=include,
                exclude=exclude,
                slug=slug,
                status=status,
                sticky=sticky,
                categories=categories,
                categories_exclude=categories_exclude,
                tags=tags,
                tags_exclude=tags_exclude,
                order=order,
                order_by=order_by,
                context=context,
                embed=embed,
            )
            items = await _service(ctx, "post_service").list_posts(request)
        except WordPressAPIError as e:
            return _error(e)
        return json.dumps([item.to_response() for item in items], indent=2)

    @mcp.tool(name="wp_get_page", annotations={"title": "Get a Page", **READ_ONLY})
    async def wp_get_page(
        page_id: int,
        context: str = "view",
        embed: bool = False,
        ctx: Context = None,
    ) -> str:
        """Get one published page in the WordPress REST API shape.

        Args:
            page_id: Page ID.
            context: ``view`` or ``embed``.
            embed: Include the ``_embedded`` sub-graph.

        Returns:
            str: The page as JSON, or a REST error envelope.
        """
        try:
            request = _item_request(id=page_id, context=context, embed=embed)
            item = await _service(ctx, "page_service").get_page(request)
        except WordPressAPIError as e:
            return _error(e)
        return json.dumps(item.to_response(), indent=2)

    @mcp.tool(name="wp_list_pages", annotations={"title": "List Pages", **READ_ONLY})
    async def wp_list_pages(
        page: int = 1,
        per_page: int = 10,
        search: str | None = None,
        include: list[int] | None = None,
        exclude: list[int] | None = None,
        slug: list[str] | None = None,
        parent: list[int] | None = None,
        parent_exclude: list[int] | None = None,
        menu_order: int | None = None,
        status: str = "publish",
        order: str = "desc",
        order_by: str = "date",
        context: str = "view",
        embed: bool = False,
        ctx: Context = None,
    ) -> str:
        """List pages with the WordPress REST API collection filters.

        Args:
            page: Page of the collection (default 1).
            per_page: Items per page (default 10, max 100).
            search: Match title, excerpt or content.
            include: Page IDs to include.
            exclude: Page IDs to exclude.
            slug: Slugs to include.
            parent: Parent page IDs to include.
            parent_exclude: Parent page IDs to exclude.
            menu_order: Exact menu order.
            status: Page status (default publish).
            order: asc or desc.
            order_by: Sort field (see wp_list_posts).
            context: ``view`` or ``embed``.
            embed: Include the ``_embedded`` sub-graph.

        Returns:
            str: JSON list of pages, or a REST error envelope.
        """
        try:
            request = _list_request(
                page=page,
                per_page=per_page,
                search=search,
                include=include,
                exclude=exclude,
                slug=slug,
                parent=parent,
                parent_exclude=parent_exclude,
                menu_order=menu_order,
                status=status,
                order=order,
                order_by=order_by,
                context=context,
                embed=embed,
            )
            items = await _service(ctx, "page_service").list_pages(request)
        except WordPressAPIError as e:
            return _error(e)
        return json.dumps([item.to_response() for item in items], indent=2)
