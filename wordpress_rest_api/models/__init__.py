"""Pydantic models for REST responses and decoded requests."""

from .base import ContentRendered, Rendered, ResponseModel
from .comment import Comment
from .content import ContentBase, Embedded, Post
from .links import (
    BaseLink,
    CommentLink,
    CommentUpLink,
    Curie,
    EmbeddableLink,
    Href,
    RestLink,
    TermLink,
    TermPost,
    UserLink,
    VersionLink,
)
from .media import ImageMeta, ImageSize, Media, MediaDetails, mime_types_for
from .request import GetItemRequest, ListFilter, ListRequest
from .term import PostTaxonomies, PostTerm, Term, TermTaxonomy
from .user import User, UserDetail

__all__ = [
    # Base
    "ResponseModel",
    "Rendered",
    "ContentRendered",
    # Links
    "Href",
    "EmbeddableLink",
    "VersionLink",
    "TermPost",
    "Curie",
    "BaseLink",
    "RestLink",
    "TermLink",
    "UserLink",
    "CommentUpLink",
    "CommentLink",
    # Content
    "ContentBase",
    "Post",
    "Embedded",
    # Related entities
    "Comment",
    "Media",
    "MediaDetails",
    "ImageMeta",
    "ImageSize",
    "mime_types_for",
    "Term",
    "TermTaxonomy",
    "PostTerm",
    "PostTaxonomies",
    "User",
    "UserDetail",
    # Requests
    "GetItemRequest",
    "ListFilter",
    "ListRequest",
]
