"""Tests for the aggregation services."""

import pytest
from conftest import API_BASE

from wordpress_rest_api.errors import InvalidID, InvalidParameter, QueryError
from wordpress_rest_api.models import ContentBase, GetItemRequest, ListRequest, Post

VIEW_ONLY_FIELDS = {"template", "tags", "categories", "format", "sticky"}


class TestGetPost:
    """Tests for single post assembly."""

    @pytest.mark.asyncio
    async def test_links(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=1))

        assert post.id == 1
        assert post.author == 1
        assert [link.href for link in post.links.self_link] == [f"{API_BASE}/posts/1"]
        assert [link.href for link in post.links.collection] == [f"{API_BASE}/posts/"]
        assert post.links.author[0].href == f"{API_BASE}/users/1"

    @pytest.mark.asyncio
    async def test_no_featured_media(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=1))
        assert post.featured_media == 0
        assert post.links.featured_media is None

    @pytest.mark.asyncio
    async def test_featured_media_from_thumbnail_meta(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2))
        assert post.featured_media == 10
        assert [link.href for link in post.links.featured_media] == [f"{API_BASE}/media/10"]

    @pytest.mark.asyncio
    async def test_predecessor_version_is_latest_revision(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2))
        assert len(post.links.predecessor_version) == 1
        assert post.links.predecessor_version[0].id == 20
        assert post.links.predecessor_version[0].href == f"{API_BASE}/posts/2/revisions/20"

    @pytest.mark.asyncio
    async def test_no_predecessor_without_revisions(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=1))
        assert post.links.predecessor_version is None

    @pytest.mark.asyncio
    async def test_unknown_id_is_invalid_id(self, post_service):
        with pytest.raises(InvalidID):
            await post_service.get_post(GetItemRequest(id=999999))

    @pytest.mark.asyncio
    async def test_page_id_is_not_a_post(self, post_service):
        with pytest.raises(InvalidID):
            await post_service.get_post(GetItemRequest(id=7))

    @pytest.mark.asyncio
    async def test_query_errors_propagate(self, post_service, shared_repo):
        async def broken(ids):
            raise QueryError("Database connection error")

        shared_repo.post_metas_by_post_ids = broken
        with pytest.raises(QueryError):
            await post_service.get_post(GetItemRequest(id=1))


class TestViewFields:
    """Tests for fields only present in the view context."""

    @pytest.mark.asyncio
    async def test_sticky_flag(self, post_service):
        sticky = await post_service.get_post(GetItemRequest(id=2))
        regular = await post_service.get_post(GetItemRequest(id=1))
        assert sticky.sticky is True
        assert regular.sticky is False

    @pytest.mark.asyncio
    async def test_taxonomy_fields_need_embed(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2))
        assert post.categories is None
        assert post.tags is None
        assert post.format is None

    @pytest.mark.asyncio
    async def test_taxonomy_fields_with_embed(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        assert post.categories == [3]
        assert post.tags == [4]
        assert post.format == "gallery"

    @pytest.mark.asyncio
    async def test_format_defaults_to_standard(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=1, embed=True))
        assert post.format == "standard"
        assert post.categories == []

    @pytest.mark.asyncio
    async def test_embed_context_omits_view_fields(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, context="embed", embed=True))

        assert type(post) is ContentBase
        data = post.to_response()
        assert VIEW_ONLY_FIELDS.isdisjoint(data)
        assert "content" not in data
        assert data["id"] == 2
        assert "_embedded" in data
        assert "_links" in data


class TestEmbedding:
    """Tests for the embedded sub-graph."""

    @pytest.mark.asyncio
    async def test_no_embedded_graph_by_default(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2))
        assert post.embedded is None
        assert "_embedded" not in post.to_response()

    @pytest.mark.asyncio
    async def test_author(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        author = post.embedded.author[0]
        assert author.id == 1
        assert author.name == "Ada"
        assert author.slug == "ada"
        assert author.link == "http://example.test/author/ada/"
        assert author.links.self_link[0].href == f"{API_BASE}/users/1"
        assert set(author.avatar_urls) == {"24", "48", "96"}

    @pytest.mark.asyncio
    async def test_comment_parent_and_child_links(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        comments = {comment.id: comment for comment in post.embedded.replies[0]}

        parent, reply = comments[100], comments[101]
        assert parent.links.children[0].href == f"{API_BASE}/comments?parent=100"
        assert parent.links.in_reply_to is None
        assert reply.links.in_reply_to[0].href == f"{API_BASE}/comments/100"
        assert reply.links.children is None

    @pytest.mark.asyncio
    async def test_comment_links(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        comments = {comment.id: comment for comment in post.embedded.replies[0]}

        parent, anonymous = comments[100], comments[101]
        assert parent.link == f"{post.link}#comment-100"
        assert parent.links.self_link[0].href == f"{API_BASE}/comments/100"
        assert parent.links.up[0].href == f"{API_BASE}/posts/2"
        assert parent.links.author[0].href == f"{API_BASE}/users/2"
        assert anonymous.links.author is None

    @pytest.mark.asyncio
    async def test_terms_grouped_by_taxonomy(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        categories, tags = post.embedded.term

        assert [term.name for term in categories] == ["News"]
        assert categories[0].link == "http://example.test/category/news/"
        assert categories[0].links.self_link[0].href == f"{API_BASE}/categories/3"
        assert [term.name for term in tags] == ["Python"]
        assert tags[0].link == "http://example.test/tag/python/"
        assert tags[0].links.self_link[0].href == f"{API_BASE}/tags/4"

    @pytest.mark.asyncio
    async def test_featured_media_details(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        media = post.embedded.featured_media[0]

        assert media.id == 10
        assert media.media_type == "image"
        assert media.alt_text == "A beach"
        assert media.source_url == "http://example.test/wp-content/uploads/2024/01/beach.jpeg"
        assert media.media_details.width == 1024
        thumbnail = media.media_details.sizes["thumbnail"]
        assert thumbnail.source_url == (
            "http://example.test/wp-content/uploads/2024/01/beach-150x150.jpeg"
        )

    @pytest.mark.asyncio
    async def test_missing_featured_media_is_skipped(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=3, embed=True))
        assert post.featured_media == 404
        assert post.embedded.featured_media is None
        assert post.embedded.author[0].name == "Grace"

    @pytest.mark.asyncio
    async def test_malformed_media_metadata_degrades(
        self, post_service, shared_repo
    ):
        shared_repo.metas[1] = {"_thumbnail_id": "11"}
        post = await post_service.get_post(GetItemRequest(id=1, embed=True))

        media = post.embedded.featured_media[0]
        assert media.id == 11
        assert media.media_type == "file"
        assert media.media_details.to_response() == {}
        assert media.source_url == "http://example.test/wp-content/uploads/manual.pdf"

    @pytest.mark.asyncio
    async def test_serialized_keys(self, post_service):
        post = await post_service.get_post(GetItemRequest(id=2, embed=True))
        embedded = post.to_response()["_embedded"]
        assert set(embedded) == {"author", "wp:featuredmedia", "wp:term", "replies"}


class TestListPosts:
    """Tests for collection assembly."""

    @pytest.mark.asyncio
    async def test_only_published_posts(self, post_service):
        posts = await post_service.list_posts(ListRequest())
        assert [post.id for post in posts] == [1, 2, 3, 5]
        assert all(isinstance(post, Post) for post in posts)

    @pytest.mark.asyncio
    async def test_batch_lookups_do_not_depend_on_result_size(
        self, post_service, content_repo, user_repo, shared_repo
    ):
        await post_service.list_posts(ListRequest())

        assert user_repo.calls["users_by_ids"] == 1
        assert shared_repo.calls["post_metas_by_post_ids"] == 1
        assert content_repo.calls["predecessor_versions"] == 1
        assert content_repo.calls["post_by_id"] == 0

    @pytest.mark.asyncio
    async def test_embed_fetches_taxonomies_and_comments_once(
        self, post_service, content_repo, term_repo, user_repo
    ):
        posts = await post_service.list_posts(ListRequest(embed=True))

        assert len(posts) == 4
        assert term_repo.calls["post_taxonomies"] == 1
        assert content_repo.calls["comments_by_post_ids"] == 1
        assert user_repo.calls["users_by_ids"] == 1

    @pytest.mark.asyncio
    async def test_no_taxonomy_lookup_without_embed(self, post_service, term_repo):
        await post_service.list_posts(ListRequest())
        assert term_repo.calls["post_taxonomies"] == 0

    @pytest.mark.asyncio
    async def test_empty_result_short_circuits(self, post_service, content_repo, shared_repo):
        posts = await post_service.list_posts(ListRequest(include=[999]))

        assert posts == []
        assert content_repo.calls["posts_by_ids"] == 0
        assert shared_repo.calls["post_metas_by_post_ids"] == 0

    @pytest.mark.asyncio
    async def test_sticky_only(self, post_service):
        posts = await post_service.list_posts(ListRequest(sticky=True))
        assert {post.id for post in posts} <= {2, 5}
        assert all(post.sticky for post in posts)

    @pytest.mark.asyncio
    async def test_sticky_excluded(self, post_service):
        posts = await post_service.list_posts(ListRequest(sticky=False))
        assert [post.id for post in posts] == [1, 3]

    @pytest.mark.asyncio
    async def test_categories_resolve_to_term_taxonomy_ids(self, post_service, content_repo):
        await post_service.list_posts(
            ListRequest(categories=[3], tags_exclude=[4], categories_exclude=[77])
        )

        list_filter = content_repo.filters[0]
        assert list_filter.term_taxonomy_ids == [30]
        assert list_filter.term_taxonomy_ids_exclude == [40]

    @pytest.mark.asyncio
    async def test_unknown_category_matches_nothing(self, post_service, content_repo):
        posts = await post_service.list_posts(ListRequest(categories=[77]))
        assert posts == []
        assert content_repo.calls["query_posts"] == 0

    @pytest.mark.asyncio
    async def test_type_is_forced(self, post_service, content_repo):
        await post_service.list_posts(ListRequest(type="page"))
        assert content_repo.filters[0].type == "post"

    @pytest.mark.asyncio
    async def test_embed_context_for_every_item(self, post_service):
        posts = await post_service.list_posts(ListRequest(context="embed"))
        assert posts
        for post in posts:
            assert VIEW_ONLY_FIELDS.isdisjoint(post.to_response())

    @pytest.mark.asyncio
    async def test_invalid_ordering_propagates(self, post_service, content_repo):
        async def strict_query(list_filter):
            raise InvalidParameter("order_by", "You need to define a search term to order by relevance.")

        content_repo.query_posts = strict_query
        with pytest.raises(InvalidParameter):
            await post_service.list_posts(ListRequest(order_by="relevance"))


class TestPages:
    """Tests for the page service."""

    @pytest.mark.asyncio
    async def test_get_page(self, page_service):
        page = await page_service.get_page(GetItemRequest(id=7))

        assert page.type == "page"
        assert page.template == "full-width.php"
        assert page.links.self_link[0].href == f"{API_BASE}/pages/7"
        assert page.links.term is None
        data = page.to_response()
        assert "sticky" not in data
        assert "format" not in data
        assert data["menu_order"] == 0

    @pytest.mark.asyncio
    async def test_post_id_is_not_a_page(self, page_service):
        with pytest.raises(InvalidID):
            await page_service.get_page(GetItemRequest(id=1))

    @pytest.mark.asyncio
    async def test_list_pages(self, page_service, content_repo, shared_repo):
        pages = await page_service.list_pages(ListRequest(sticky=True))

        assert [page.id for page in pages] == [7]
        assert content_repo.filters[0].type == "page"
        assert content_repo.filters[0].sticky is None
        assert shared_repo.calls["load_option"] == 0

    @pytest.mark.asyncio
    async def test_embedded_page_has_no_terms(self, page_service):
        page = await page_service.get_page(GetItemRequest(id=7, embed=True))
        assert page.embedded.term is None
        assert page.embedded.author[0].id == 1
