"""Content repository: posts, pages, attachments, revisions and comments."""

from __future__ import annotations

from typing import Any

from ..config import (
    ATTACHMENT_TYPE,
    PAGE_TYPE,
    REVISION_TYPE,
    ApiConfig,
    logger,
)
from ..db import Database
from ..errors import InvalidParameter, NotFound
from ..models import (
    Comment,
    ContentRendered,
    ListFilter,
    Post,
    Rendered,
    mime_types_for,
)
from ..utils import (
    as_datetime,
    as_int,
    as_text,
    avatar_urls,
    generate_excerpt,
    placeholders,
    render_permalink,
)

POST_COLUMNS = (
    "p.ID, p.post_author, p.post_date, p.post_date_gmt, p.post_content, "
    "p.post_title, p.post_excerpt, p.post_status, p.comment_status, "
    "p.ping_status, p.post_password, p.post_name, p.post_modified, "
    "p.post_modified_gmt, p.guid, p.post_type, p.menu_order, p.post_parent, "
    "p.post_mime_type, u.user_nicename AS author_slug"
)

# Allow-list of order_by values and the column they sort on
ORDER_COLUMNS = {
    "title": "p.post_title",
    "author": "p.post_author",
    "date": "p.post_date",
    "id": "p.ID",
    "modified": "p.post_modified",
    "parent": "p.post_parent",
    "slug": "p.post_name",
}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards in user input."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _in_filter(column: str, values, args: list, negate: bool = False) -> str:
    values = list(values)
    args.extend(values)
    operator = "NOT IN" if negate else "IN"
    return f" AND {column} {operator} ({placeholders(values)})"


def build_filter(config: ApiConfig, params: ListFilter) -> tuple[str, list]:
    """Build the WHERE fragment (starting with `` AND``) and its arguments."""
    sql = ""
    args: list = []

    if params.search:
        search_pattern = f"%{escape_like(params.search)}%"
        sql += (
            " AND ((p.post_title LIKE %s) OR (p.post_excerpt LIKE %s) "
            "OR (p.post_content LIKE %s)) AND (p.post_password = '')"
        )
        args.extend([search_pattern] * 3)

    if params.before is not None:
        sql += " AND (p.post_date < %s)"
        args.append(params.before)

    if params.after is not None:
        sql += " AND (p.post_date > %s)"
        args.append(params.after)

    if params.include:
        sql += _in_filter("p.ID", params.include, args)

    if params.exclude:
        sql += _in_filter("p.ID", params.exclude, args, negate=True)

    if params.slug:
        sql += _in_filter("p.post_name", params.slug, args)

    if params.author:
        sql += _in_filter("p.post_author", params.author, args)

    if params.author_exclude:
        sql += _in_filter("p.post_author", params.author_exclude, args, negate=True)

    if params.sticky is not None:
        if params.sticky_ids:
            sql += _in_filter("p.ID", sorted(params.sticky_ids), args, negate=not params.sticky)
        elif params.sticky:
            # No sticky posts at all
            sql += " AND 1 = 0"

    if params.term_taxonomy_ids:
        sql += _in_filter("tr.term_taxonomy_id", params.term_taxonomy_ids, args)

    if params.term_taxonomy_ids_exclude:
        ids = params.term_taxonomy_ids_exclude
        sql += (
            f" AND (p.ID NOT IN (SELECT object_id FROM `{config.table('term_relationships')}` "
            f"WHERE term_taxonomy_id IN ({placeholders(ids)})))"
        )
        args.extend(ids)

    if params.type == PAGE_TYPE:
        if params.menu_order is not None:
            sql += " AND p.menu_order = %s"
            args.append(params.menu_order)
        if params.parent:
            sql += _in_filter("p.post_parent", params.parent, args)
        if params.parent_exclude:
            sql += _in_filter("p.post_parent", params.parent_exclude, args, negate=True)

    elif params.type == ATTACHMENT_TYPE:
        if params.media_type:
            mime_types = mime_types_for(params.media_type)
            if mime_types:
                sql += _in_filter("p.post_mime_type", mime_types, args)
            else:
                sql += " AND 1 = 0"
        if params.mime_type:
            sql += " AND p.post_mime_type = %s"
            args.append(params.mime_type)
        if params.parent:
            sql += _in_filter("p.post_parent", params.parent, args)

    return sql, args


def resolve_ordering(params: ListFilter) -> tuple[str, str, list]:
    """Return (order expression, direction, arguments) for a filter.

    Raises:
        InvalidParameter: For ``include`` ordering without include ids, or
            ``relevance`` ordering without a search term.
    """
    if params.order_by == "include":
        if not params.include:
            raise InvalidParameter(
                "order_by", "You need to define an include parameter to order by include."
            )
        # Positional order of the include list; direction does not apply
        return f"FIELD(p.ID, {placeholders(params.include)})", "", list(params.include)

    if params.order_by == "relevance":
        if not params.search:
            raise InvalidParameter(
                "order_by", "You need to define a search term to order by relevance."
            )
        return "p.post_title LIKE %s", params.order.upper(), [f"%{escape_like(params.search)}%"]

    return ORDER_COLUMNS[params.order_by], params.order.upper(), []


def build_list_query(config: ApiConfig, params: ListFilter) -> tuple[str, list]:
    """Build the id query for a collection request."""
    order_expression, direction, order_args = resolve_ordering(params)
    sql_filter, args = build_filter(config, params)

    status = params.status
    if params.type == ATTACHMENT_TYPE and status == "publish":
        # Attachments inherit their status from the parent
        status = "inherit"

    join = ""
    if params.term_taxonomy_ids:
        join = (
            f" LEFT JOIN `{config.table('term_relationships')}` tr "
            f"ON (p.ID = tr.object_id)"
        )

    offset = params.offset
    if offset is None:
        offset = (params.page - 1) * params.per_page

    sql = (
        f"SELECT p.ID FROM `{config.table('posts')}` p{join}"
        f" WHERE 1=1{sql_filter}"
        f" AND p.post_type = %s AND p.post_status = %s"
        f" GROUP BY p.ID"
        f" ORDER BY {order_expression} {direction}".rstrip()
        + " LIMIT %s, %s"
    )
    args.extend([params.type, status])
    args.extend(order_args)
    args.extend([offset, params.per_page])
    return sql, args


class MySQLContentRepository:
    """ContentRepository backed by the prefixed ``posts`` and ``comments`` tables."""

    def __init__(self, database: Database, config: ApiConfig):
        self.db = database
        self.config = config

    def author_join(self) -> str:
        """Join the author row for the ``%author%`` permalink tag."""
        return f"LEFT JOIN `{self.config.table('users')}` u ON u.ID = p.post_author"

    def row_to_post(self, row: dict[str, Any]) -> Post:
        """Map a ``posts`` row to a Post, resolving permalink and excerpt."""
        post_id = as_int(row["ID"])
        post_type = as_text(row.get("post_type"))
        slug = as_text(row.get("post_name"))
        date = as_datetime(row.get("post_date"))
        content = as_text(row.get("post_content"))
        excerpt = as_text(row.get("post_excerpt")) or generate_excerpt(content)
        password = as_text(row.get("post_password"))
        guid = as_text(row.get("guid"))

        if post_type == PAGE_TYPE:
            link = f"{self.config.site_url}/{slug}/"
        elif post_type == ATTACHMENT_TYPE:
            link = f"{self.config.site_url}/?attachment_id={post_id}"
        else:
            link = render_permalink(
                self.config.site_url,
                self.config.permalink_structure,
                post_id,
                slug,
                date,
                author_slug=as_text(row.get("author_slug")),
            )

        post = Post(
            id=post_id,
            date=date,
            date_gmt=as_datetime(row.get("post_date_gmt")),
            guid=Rendered(rendered=guid),
            modified=as_datetime(row.get("post_modified")),
            modified_gmt=as_datetime(row.get("post_modified_gmt")),
            slug=slug,
            status=as_text(row.get("post_status")),
            type=post_type,
            link=link,
            title=Rendered(rendered=as_text(row.get("post_title"))),
            content=ContentRendered(rendered=content, protected=bool(password)),
            excerpt=ContentRendered(rendered=excerpt, protected=bool(password)),
            author=as_int(row.get("post_author")),
            comment_status=as_text(row.get("comment_status")),
            ping_status=as_text(row.get("ping_status")),
            password=password,
        )

        if post_type == PAGE_TYPE:
            post.menu_order = as_int(row.get("menu_order"))
            post.parent = as_int(row.get("post_parent"))
        elif post_type == ATTACHMENT_TYPE:
            mime_type = as_text(row.get("post_mime_type"))
            post.mime_type = mime_type
            post.media_type = "image" if "image" in mime_type else "file"

        return post

    async def post_by_id(self, post_id: int, post_type: str) -> Post:
        sql = (
            f"SELECT {POST_COLUMNS} FROM `{self.config.table('posts')}` p "
            f"{self.author_join()} "
            f"WHERE p.ID = %s AND p.post_type = %s"
        )
        row = await self.db.fetch_one(sql, (post_id, post_type))
        if row is None:
            logger.info("No %s found with ID %s", post_type, post_id)
            raise NotFound(f"No {post_type} with ID {post_id}")
        return self.row_to_post(row)

    async def query_posts(self, list_filter: ListFilter) -> list[int]:
        sql, args = build_list_query(self.config, list_filter)
        logger.debug("query_posts SQL: %s args: %s", sql, args)
        rows = await self.db.fetch_all(sql, args)
        return [as_int(row["ID"]) for row in rows]

    async def posts_by_ids(self, post_type: str, ids: list[int]) -> list[Post]:
        if not ids:
            return []
        sql = (
            f"SELECT {POST_COLUMNS} FROM `{self.config.table('posts')}` p "
            f"{self.author_join()} "
            f"WHERE p.ID IN ({placeholders(ids)}) AND p.post_type = %s"
        )
        rows = await self.db.fetch_all(sql, [*ids, post_type])
        posts = {post.id: post for post in map(self.row_to_post, rows)}
        return [posts[post_id] for post_id in ids if post_id in posts]

    async def comments_by_post_ids(self, ids: list[int]) -> list[Comment]:
        if not ids:
            return []
        sql = (
            f"SELECT comment_ID, comment_post_ID, user_id, comment_author, "
            f"comment_author_email, comment_author_url, comment_date, "
            f"comment_content, comment_parent "
            f"FROM `{self.config.table('comments')}` "
            f"WHERE comment_post_ID IN ({placeholders(ids)}) "
            f"AND comment_approved = '1' AND comment_type IN ('', 'comment') "
            f"ORDER BY comment_date DESC, comment_ID DESC"
        )
        rows = await self.db.fetch_all(sql, list(ids))
        return [
            Comment(
                id=as_int(row["comment_ID"]),
                post=as_int(row["comment_post_ID"]),
                parent=as_int(row.get("comment_parent")),
                author=as_int(row.get("user_id")),
                author_name=as_text(row.get("comment_author")),
                author_url=as_text(row.get("comment_author_url")),
                author_avatar_urls=avatar_urls(as_text(row.get("comment_author_email"))),
                date=as_datetime(row.get("comment_date")),
                content=ContentRendered(rendered=as_text(row.get("comment_content"))),
            )
            for row in rows
        ]

    async def predecessor_versions(self, ids: list[int]) -> dict[int, list[int]]:
        if not ids:
            return {}
        sql = (
            f"SELECT post_parent, ID FROM `{self.config.table('posts')}` "
            f"WHERE post_parent IN ({placeholders(ids)}) "
            f"AND post_type = %s AND post_status = 'inherit' "
            f"ORDER BY post_date DESC, ID DESC"
        )
        rows = await self.db.fetch_all(sql, [*ids, REVISION_TYPE])

        # Parent id -> revision ids, latest first
        revisions: dict[int, list[int]] = {}
        for row in rows:
            revisions.setdefault(as_int(row["post_parent"]), []).append(as_int(row["ID"]))
        return revisions
