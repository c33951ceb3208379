"""Term and taxonomy models."""

from __future__ import annotations

from pydantic import Field

from .base import ResponseModel
from .links import TermLink


class TermTaxonomy(ResponseModel):
    """A ``term_taxonomy`` row: one term scoped to one taxonomy."""

    term_taxonomy_id: int
    term_id: int
    taxonomy: str
    description: str = ""
    parent: int = 0
    count: int = 0


class Term(ResponseModel):
    """A term as embedded in a post's ``wp:term`` list."""

    id: int
    link: str = ""
    name: str = ""
    slug: str = ""
    taxonomy: str = ""
    links: TermLink | None = Field(default=None, alias="_links")


class PostTerm(ResponseModel):
    """A term joined with its taxonomy row and the content id it is attached to."""

    term_id: int
    name: str = ""
    slug: str = ""
    term_group: int = 0
    term_taxonomy_id: int
    taxonomy: str
    description: str = ""
    parent: int = 0
    count: int = 0
    object_id: int


class PostTaxonomies(ResponseModel):
    """Taxonomy data resolved for a batch of content ids."""

    terms: dict[int, list[PostTerm]] = Field(default_factory=dict)
    # content id -> taxonomy -> term ids
    taxonomies: dict[int, dict[str, list[int]]] = Field(default_factory=dict)
    # content id -> post format term name (e.g. "post-format-gallery")
    formats: dict[int, str] = Field(default_factory=dict)
