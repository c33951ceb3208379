"""Term repository: terms attached to content items and taxonomy id resolution."""

from __future__ import annotations

from ..config import CATEGORY_TAXONOMY, FORMAT_TAXONOMY, TAG_TAXONOMY, ApiConfig
from ..db import Database
from ..models import PostTaxonomies, PostTerm, TermTaxonomy
from ..utils import as_int, as_text, placeholders

POST_TAXONOMIES = (CATEGORY_TAXONOMY, TAG_TAXONOMY, FORMAT_TAXONOMY)


class MySQLTermRepository:
    """TermRepository backed by ``terms``, ``term_taxonomy`` and ``term_relationships``."""

    def __init__(self, database: Database, config: ApiConfig):
        self.db = database
        self.config = config

    async def post_taxonomies(self, ids: list[int]) -> PostTaxonomies:
        """Fetch categories, tags and post formats of many content items at once."""
        result = PostTaxonomies()
        if not ids:
            return result

        sql = (
            f"SELECT t.term_id, t.name, t.slug, t.term_group, "
            f"tt.term_taxonomy_id, tt.taxonomy, tt.description, tt.parent, tt.count, "
            f"tr.object_id "
            f"FROM `{self.config.table('term_relationships')}` tr "
            f"INNER JOIN `{self.config.table('term_taxonomy')}` tt "
            f"ON tr.term_taxonomy_id = tt.term_taxonomy_id "
            f"INNER JOIN `{self.config.table('terms')}` t ON tt.term_id = t.term_id "
            f"WHERE tr.object_id IN ({placeholders(ids)}) "
            f"AND tt.taxonomy IN ({placeholders(POST_TAXONOMIES)}) "
            f"ORDER BY tr.object_id, tt.taxonomy, t.name"
        )
        rows = await self.db.fetch_all(sql, [*ids, *POST_TAXONOMIES])

        for row in rows:
            term = PostTerm(
                term_id=as_int(row["term_id"]),
                name=as_text(row.get("name")),
                slug=as_text(row.get("slug")),
                term_group=as_int(row.get("term_group")),
                term_taxonomy_id=as_int(row["term_taxonomy_id"]),
                taxonomy=as_text(row["taxonomy"]),
                description=as_text(row.get("description")),
                parent=as_int(row.get("parent")),
                count=as_int(row.get("count")),
                object_id=as_int(row["object_id"]),
            )

            if term.taxonomy == FORMAT_TAXONOMY:
                result.formats[term.object_id] = term.slug
                continue

            result.terms.setdefault(term.object_id, []).append(term)
            by_taxonomy = result.taxonomies.setdefault(term.object_id, {})
            by_taxonomy.setdefault(term.taxonomy, []).append(term.term_id)

        return result

    async def term_taxonomies(self, term_ids: list[int], taxonomy: str) -> list[TermTaxonomy]:
        """Resolve term ids of one taxonomy to their ``term_taxonomy`` rows."""
        if not term_ids:
            return []
        sql = (
            f"SELECT term_taxonomy_id, term_id, taxonomy, description, parent, count "
            f"FROM `{self.config.table('term_taxonomy')}` "
            f"WHERE term_id IN ({placeholders(term_ids)}) AND taxonomy = %s"
        )
        rows = await self.db.fetch_all(sql, [*term_ids, taxonomy])
        return [
            TermTaxonomy(
                term_taxonomy_id=as_int(row["term_taxonomy_id"]),
                term_id=as_int(row["term_id"]),
                taxonomy=as_text(row["taxonomy"]),
                description=as_text(row.get("description")),
                parent=as_int(row.get("parent")),
                count=as_int(row.get("count")),
            )
            for row in rows
        ]
