"""User repository."""

from __future__ import annotations

from typing import Any

from ..config import ApiConfig
from ..db import Database
from ..models import UserDetail
from ..utils import as_datetime, as_int, as_text, placeholders


class MySQLUserRepository:
    """UserRepository backed by ``users`` joined with the ``description`` user meta."""

    def __init__(self, database: Database, config: ApiConfig):
        self.db = database
        self.config = config

    def _select(self, where: str) -> str:
        return (
            f"SELECT u.ID, u.user_login, u.user_nicename, u.user_email, u.user_url, "
            f"u.user_registered, u.user_status, u.display_name, um.meta_value AS description "
            f"FROM `{self.config.table('users')}` u "
            f"LEFT JOIN `{self.config.table('usermeta')}` um "
            f"ON u.ID = um.user_id AND um.meta_key = 'description' "
            f"WHERE {where}"
        )

    @staticmethod
    def row_to_user(row: dict[str, Any]) -> UserDetail:
        return UserDetail(
            id=as_int(row["ID"]),
            display_name=as_text(row.get("display_name")),
            nicename=as_text(row.get("user_nicename")),
            url=as_text(row.get("user_url")),
            description=as_text(row.get("description")),
            email=as_text(row.get("user_email")),
            login=as_text(row.get("user_login")),
            registered=as_datetime(row.get("user_registered")),
            status=as_int(row.get("user_status")),
        )

    async def users_by_ids(self, ids: list[int]) -> dict[int, UserDetail]:
        """Fetch many users in one query; missing ids are simply absent."""
        ids = sorted(set(ids))
        if not ids:
            return {}
        rows = await self.db.fetch_all(self._select(f"u.ID IN ({placeholders(ids)})"), ids)
        users = map(self.row_to_user, rows)
        return {user.id: user for user in users}
