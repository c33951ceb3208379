"""Options and post meta lookups."""

from __future__ import annotations

from ..config import ApiConfig
from ..db import Database
from ..utils import as_int, as_text, placeholders


class MySQLSharedRepository:
    """SharedRepository backed by ``options`` and ``postmeta``."""

    def __init__(self, database: Database, config: ApiConfig):
        self.db = database
        self.config = config

    async def load_option(self, name: str) -> str:
        """Return the raw value of an option, or '' when it is not set."""
        row = await self.db.fetch_one(
            f"SELECT option_value FROM `{self.config.table('options')}` "
            f"WHERE option_name = %s LIMIT 1",
            (name,),
        )
        if row is None:
            return ""
        return as_text(row.get("option_value"))

    async def post_metas_by_post_ids(self, ids: list[int]) -> dict[int, dict[str, str]]:
        """Map post id -> meta key -> value for many posts at once.

        When a key is stored more than once the first row (lowest meta_id) wins.
        """
        if not ids:
            return {}
        rows = await self.db.fetch_all(
            f"SELECT post_id, meta_key, meta_value "
            f"FROM `{self.config.table('postmeta')}` "
            f"WHERE post_id IN ({placeholders(ids)}) ORDER BY meta_id",
            list(ids),
        )
        metas: dict[int, dict[str, str]] = {}
        for row in rows:
            post_meta = metas.setdefault(as_int(row["post_id"]), {})
            post_meta.setdefault(as_text(row["meta_key"]), as_text(row.get("meta_value")))
        return metas
