"""Builders for the ``_embedded`` sub-graph of a content item.

Each builder is pure: it reshapes already-fetched rows into the embedded
projection and synthesises the related link envelopes.
"""

from __future__ import annotations

from ..config import (
    ATTACHMENT_ALT_KEY,
    ATTACHMENT_METADATA_KEY,
    ATTACHMENT_TYPE,
    CATEGORY_TAXONOMY,
    TAG_TAXONOMY,
    ApiConfig,
    logger,
)
from ..errors import DecodeError
from ..links import LinkURL, category_link, plural, tag_link, term_links
from ..models import (
    BaseLink,
    Comment,
    CommentLink,
    CommentUpLink,
    EmbeddableLink,
    Href,
    Media,
    MediaDetails,
    Post,
    PostTerm,
    Rendered,
    Term,
    User,
    UserDetail,
    UserLink,
)
from ..phpdata import parse_attachment_metadata, upload_url
from ..utils import avatar_urls

# Taxonomies embedded under ``wp:term``, in output order
EMBEDDED_TAXONOMIES = (CATEGORY_TAXONOMY, TAG_TAXONOMY)


def compact_user(user: UserDetail, config: ApiConfig) -> User:
    """Project a user detail row onto the public author shape."""
    base_url = config.api_base_url
    return User(
        id=user.id,
        name=user.display_name,
        url=user.url,
        description=user.description,
        link=f"{config.site_url}/author/{user.nicename}/",
        slug=user.nicename,
        avatar_urls=avatar_urls(user.email),
        links=UserLink(
            self_link=[Href(href=f"{base_url}/users/{user.id}")],
            collection=[Href(href=f"{base_url}/users")],
        ),
    )


def parent_ids(comments: list[Comment]) -> set[int]:
    """Ids that are the parent of at least one comment in the batch."""
    return {comment.parent for comment in comments if comment.parent}


def embedded_comment(
    comment: Comment, post: Post, parents: set[int], config: ApiConfig
) -> Comment:
    """Attach the link, type and ``_links`` of one comment.

    ``parents`` must be computed once for the whole batch (see ``parent_ids``).
    """
    base_url = config.api_base_url
    links = CommentLink(
        self_link=[Href(href=f"{base_url}/comments/{comment.id}")],
        collection=[Href(href=f"{base_url}/comments")],
        up=[
            CommentUpLink(
                href=f"{base_url}/{plural(post.type)}/{comment.post}",
                post_type=post.type,
            )
        ],
    )
    if comment.author:
        links.author = [EmbeddableLink(href=f"{base_url}/users/{comment.author}")]
    if comment.parent:
        links.in_reply_to = [EmbeddableLink(href=f"{base_url}/comments/{comment.parent}")]
    if comment.id in parents:
        links.children = [Href(href=f"{base_url}/comments?parent={comment.id}")]

    return comment.model_copy(
        update={"link": f"{post.link}#comment-{comment.id}", "links": links}
    )


def embedded_term(term: PostTerm, config: ApiConfig) -> Term:
    if term.taxonomy == CATEGORY_TAXONOMY:
        link = category_link(config.site_url, term.slug)
    else:
        link = tag_link(config.site_url, term.slug)
    return Term(
        id=term.term_id,
        link=link,
        name=term.name,
        slug=term.slug,
        taxonomy=term.taxonomy,
        links=term_links(term.taxonomy, config.api_base_url, term.term_id),
    )


def embedded_terms(terms: list[PostTerm], config: ApiConfig) -> list[list[Term]]:
    """Group a content item's terms per taxonomy, categories first then tags."""
    return [
        [embedded_term(term, config) for term in terms if term.taxonomy == taxonomy]
        for taxonomy in EMBEDDED_TAXONOMIES
    ]


def media_details(attachment: Post, meta: dict[str, str], config: ApiConfig) -> MediaDetails:
    """Decode the attachment metadata blob; a malformed or absent blob gives empty details."""
    blob = meta.get(ATTACHMENT_METADATA_KEY, "")
    if not blob:
        return MediaDetails()
    try:
        return parse_attachment_metadata(
            blob,
            config.site_url,
            config.upload_path,
            mime_type=attachment.mime_type or "",
            full_source_url=attachment.guid.rendered,
        )
    except DecodeError as e:
        logger.error("Failed to decode metadata of attachment %s: %s", attachment.id, e)
        return MediaDetails()


def featured_media(attachment: Post, meta: dict[str, str], config: ApiConfig) -> Media:
    """Project an attachment row and its post meta onto the embedded media shape."""
    details = media_details(attachment, meta, config)
    if details.file:
        source_url = upload_url(config.site_url, config.upload_path, details.file)
    else:
        source_url = attachment.guid.rendered

    url = LinkURL(config.api_base_url, ATTACHMENT_TYPE)
    return Media(
        id=attachment.id,
        date=attachment.date,
        slug=attachment.slug,
        link=attachment.link,
        title=attachment.title,
        author=attachment.author,
        caption=Rendered(rendered=attachment.excerpt.rendered),
        alt_text=meta.get(ATTACHMENT_ALT_KEY, ""),
        media_type=attachment.media_type or "file",
        mime_type=attachment.mime_type or "",
        media_details=details,
        source_url=source_url,
        links=BaseLink(
            self_link=[Href(href=url.featured_media(attachment.id))],
            collection=[Href(href=f"{config.api_base_url}/media")],
            about=[Href(href=url.about())],
            author=[EmbeddableLink(href=url.author(attachment.author))],
            replies=[EmbeddableLink(href=url.replies(attachment.id))],
        ),
    )
