"""Repositories: parameterized SQL over the WordPress schema."""

from .content import MySQLContentRepository, build_list_query
from .protocols import ContentRepository, SharedRepository, TermRepository, UserRepository
from .shared import MySQLSharedRepository
from .term import MySQLTermRepository
from .user import MySQLUserRepository

__all__ = [
    "ContentRepository",
    "TermRepository",
    "UserRepository",
    "SharedRepository",
    "MySQLContentRepository",
    "MySQLTermRepository",
    "MySQLUserRepository",
    "MySQLSharedRepository",
    "build_list_query",
]
