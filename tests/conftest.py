"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections import Counter
from datetime import datetime

import pytest

from wordpress_rest_api.config import ApiConfig
from wordpress_rest_api.errors import NotFound
from wordpress_rest_api.models import (
    Comment,
    ContentRendered,
    ListFilter,
    Post,
    PostTaxonomies,
    PostTerm,
    Rendered,
    TermTaxonomy,
    UserDetail,
)
from wordpress_rest_api.services import PageService, PostService

API_BASE = "http://example.test/wp-json/wp/v2"

STICKY_OPTION = "a:2:{i:0;i:2;i:1;i:5;}"

ATTACHMENT_METADATA = (
    'a:4:{s:5:"width";i:1024;s:6:"height";s:3:"768";'
    's:4:"file";s:18:"2024/01/beach.jpeg";'
    's:5:"sizes";a:1:{s:9:"thumbnail";a:4:{s:4:"file";s:18:"beach-150x150.jpeg";'
    's:5:"width";i:150;s:6:"height";i:150;s:9:"mime-type";s:10:"image/jpeg";}}}'
)


def make_post(post_id: int, author: int = 1, post_type: str = "post", **fields) -> Post:
    """A published content item as the content repository returns it."""
    slug = fields.pop("slug", f"item-{post_id}")
    return Post(
        id=post_id,
        date=datetime(2024, 1, post_id % 28 + 1, 12, 0, 0),
        slug=slug,
        status=fields.pop("status", "publish"),
        type=post_type,
        link=f"http://example.test/{slug}/",
        title=Rendered(rendered=f"Item {post_id}"),
        content=ContentRendered(rendered=f"Content of item {post_id}"),
        excerpt=ContentRendered(rendered=f"Excerpt of item {post_id}"),
        author=author,
        **fields,
    )


class FakeDatabase:
    """Scripted stand-in for ``Database``: returns queued row lists in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.queries = []

    async def fetch_all(self, sql, params=None):
        self.queries.append((sql, params))
        return self.responses.pop(0) if self.responses else []

    async def fetch_one(self, sql, params=None):
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None


class FakeContentRepository:
    def __init__(self, posts, comments=None, revisions=None):
        self.posts = {post.id: post for post in posts}
        self.comments = comments or []
        self.revisions = revisions or {}
        self.calls = Counter()
        self.filters = []

    async def post_by_id(self, post_id, post_type):
        self.calls["post_by_id"] += 1
        post = self.posts.get(post_id)
        if post is None or post.type != post_type:
            raise NotFound(f"No {post_type} with ID {post_id}")
        return post.model_copy(deep=True)

    async def query_posts(self, list_filter: ListFilter):
        self.calls["query_posts"] += 1
        self.filters.append(list_filter)
        ids = []
        for post in sorted(self.posts.values(), key=lambda p: p.id):
            if post.type != list_filter.type or post.status != list_filter.status:
                continue
            if list_filter.sticky is True and post.id not in list_filter.sticky_ids:
                continue
            if list_filter.sticky is False and post.id in list_filter.sticky_ids:
                continue
            if list_filter.include and post.id not in list_filter.include:
                continue
            ids.append(post.id)
        return ids

    async def posts_by_ids(self, post_type, ids):
        self.calls["posts_by_ids"] += 1
        return [
            self.posts[i].model_copy(deep=True)
            for i in ids
            if i in self.posts and self.posts[i].type == post_type
        ]

    async def comments_by_post_ids(self, ids):
        self.calls["comments_by_post_ids"] += 1
        return [c.model_copy(deep=True) for c in self.comments if c.post in ids]

    async def predecessor_versions(self, ids):
        self.calls["predecessor_versions"] += 1
        return {i: self.revisions[i] for i in ids if i in self.revisions}


class FakeTermRepository:
    def __init__(self, terms=None, formats=None, term_taxonomies=None):
        self.terms = terms or []
        self.formats = formats or {}
        self.rows = term_taxonomies or []
        self.calls = Counter()

    async def post_taxonomies(self, ids):
        self.calls["post_taxonomies"] += 1
        result = PostTaxonomies(formats={i: f for i, f in self.formats.items() if i in ids})
        for term in self.terms:
            if term.object_id not in ids:
                continue
            result.terms.setdefault(term.object_id, []).append(term)
            by_taxonomy = result.taxonomies.setdefault(term.object_id, {})
            by_taxonomy.setdefault(term.taxonomy, []).append(term.term_id)
        return result

    async def term_taxonomies(self, term_ids, taxonomy):
        self.calls["term_taxonomies"] += 1
        return [row for row in self.rows if row.term_id in term_ids and row.taxonomy == taxonomy]


class FakeUserRepository:
    def __init__(self, users):
        self.users = {user.id: user for user in users}
        self.calls = Counter()

    async def users_by_ids(self, ids):
        self.calls["users_by_ids"] += 1
        return {i: self.users[i] for i in set(ids) if i in self.users}


class FakeSharedRepository:
    def __init__(self, options=None, metas=None):
        self.options = options or {}
        self.metas = metas or {}
        self.calls = Counter()

    async def load_option(self, name):
        self.calls["load_option"] += 1
        return self.options.get(name, "")

    async def post_metas_by_post_ids(self, ids):
        self.calls["post_metas_by_post_ids"] += 1
        return {i: dict(self.metas[i]) for i in ids if i in self.metas}


@pytest.fixture
def config():
    """API configuration pointing at a test site."""
    return ApiConfig(
        api_host="http://example.test",
        api_path="wp-json/wp",
        version="v2",
        site_url="http://example.test",
        upload_path="wp-content/uploads",
        table_prefix="wp_",
        permalink_structure="/%postname%/",
    )


@pytest.fixture
def content_repo():
    """Posts 1, 2, 3 and 5, page 7, a draft, and attachments 10 and 11."""
    return FakeContentRepository(
        posts=[
            make_post(1, author=1, slug="hello-world"),
            make_post(2, author=1),
            make_post(3, author=2),
            make_post(5, author=2),
            make_post(6, author=1, status="draft"),
            make_post(7, author=1, post_type="page", menu_order=0, parent=0),
            make_post(
                10,
                author=1,
                post_type="attachment",
                slug="beach",
                status="inherit",
                mime_type="image/jpeg",
                media_type="image",
                guid=Rendered(rendered="http://example.test/wp-content/uploads/2024/01/beach.jpeg"),
            ),
            make_post(
                11,
                author=1,
                post_type="attachment",
                status="inherit",
                mime_type="application/pdf",
                media_type="file",
                guid=Rendered(rendered="http://example.test/wp-content/uploads/manual.pdf"),
            ),
        ],
        comments=[
            Comment(id=100, post=2, parent=0, author=2, author_name="Grace"),
            Comment(id=101, post=2, parent=100, author=0, author_name="Visitor"),
        ],
        revisions={2: [20, 19]},
    )


@pytest.fixture
def term_repo():
    """Post 2 is in category 3 and tag 4, with the gallery format."""
    return FakeTermRepository(
        terms=[
            PostTerm(
                term_id=3, name="News", slug="news", term_taxonomy_id=30,
                taxonomy="category", object_id=2,
            ),
            PostTerm(
                term_id=4, name="Python", slug="python", term_taxonomy_id=40,
                taxonomy="post_tag", object_id=2,
            ),
        ],
        formats={2: "post-format-gallery"},
        term_taxonomies=[
            TermTaxonomy(term_taxonomy_id=30, term_id=3, taxonomy="category"),
            TermTaxonomy(term_taxonomy_id=40, term_id=4, taxonomy="post_tag"),
        ],
    )


@pytest.fixture
def user_repo():
    return FakeUserRepository([
        UserDetail(id=1, display_name="Ada", nicename="ada", email="ada@example.test"),
        UserDetail(id=2, display_name="Grace", nicename="grace", email="grace@example.test"),
    ])


@pytest.fixture
def shared_repo():
    """Sticky posts {2, 5}; post 2 features attachment 10, post 3 a missing attachment."""
    return FakeSharedRepository(
        options={"sticky_posts": STICKY_OPTION},
        metas={
            2: {"_thumbnail_id": "10"},
            3: {"_thumbnail_id": "404"},
            7: {"_wp_page_template": "full-width.php"},
            10: {
                "_wp_attachment_metadata": ATTACHMENT_METADATA,
                "_wp_attachment_image_alt": "A beach",
            },
            11: {"_wp_attachment_metadata": "not serialized"},
        },
    )


@pytest.fixture
def post_service(config, content_repo, term_repo, user_repo, shared_repo):
    return PostService(config, content_repo, term_repo, user_repo, shared_repo)


@pytest.fixture
def page_service(config, content_repo, term_repo, user_repo, shared_repo):
    return PageService(config, content_repo, term_repo, user_repo, shared_repo)


@pytest.fixture
def sample_post_row():
    """A ``posts`` row as aiomysql's DictCursor returns it."""
    return {
        "ID": 1,
        "post_author": 1,
        "post_date": datetime(2024, 3, 5, 9, 30, 0),
        "post_date_gmt": datetime(2024, 3, 5, 8, 30, 0),
        "post_content": "Welcome to WordPress. This is your first post.",
        "post_title": "Hello world!",
        "post_excerpt": "",
        "post_status": "publish",
        "comment_status": "open",
        "ping_status": "open",
        "post_password": "",
        "post_name": "hello-world",
        "post_modified": datetime(2024, 3, 6, 10, 0, 0),
        "post_modified_gmt": None,
        "guid": "http://example.test/?p=1",
        "post_type": "post",
        "menu_order": 0,
        "post_parent": 0,
        "post_mime_type": "",
    }
