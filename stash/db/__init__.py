"""Database package."""

from stash.db.base import Base, get_db, init_db
from stash.db.tables import Link, Resume, Snippet

__all__ = [
    "Base",
    "get_db",
    "init_db",
    "Link",
    "Snippet",
    "Resume",
]
