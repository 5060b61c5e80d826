"""Database module."""

from reelcache.db.database import (
    create_engine,
    create_session_maker,
    engine,
    init_db,
)

__all__ = [
    "create_engine",
    "create_session_maker",
    "engine",
    "init_db",
]
