"""Favorites store: a persisted list of movies with no freshness policy."""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from reelcache.db import database
from reelcache.db.crud import favorites as crud
from reelcache.models.schemas import FavoriteMovie
from reelcache.utils.events import EventEmitter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FavoritesChange:
    """Emitted after a favorite is added or removed."""

    movie_id: int
    is_favorite: bool


class FavoritesStore:
    """Persisted favorites with a synchronous membership check.

    ``load()`` must be awaited once before ``is_favorite`` reflects the
    persisted list. Every add or remove that changes the table is announced
    on ``changes``.
    """

    def __init__(self, engine: AsyncEngine | None = None) -> None:
        self._engine = engine or database.engine
        self._session_maker = database.create_session_maker(self._engine)
        self._ids: set[int] = set()
        self.changes: EventEmitter[FavoritesChange] = EventEmitter("favorites")

    async def load(self) -> None:
        """Create tables if needed and prime the in-memory id set."""
        await database.init_db(self._engine)
        favorites = await self.get_favorites()
        self._ids = {favorite.id for favorite in favorites}
        logger.debug(f"Loaded {len(self._ids)} favorites")

    async def get_favorites(self) -> list[FavoriteMovie]:
        """Return favorites, most recently added first."""
        async with self._session_maker() as db:
            return await crud.list_favorites(db)

    def is_favorite(self, movie_id: int) -> bool:
        return movie_id in self._ids

    async def add_favorite(self, favorite: FavoriteMovie) -> None:
        """Add ``favorite``; a no-op if its id is already a favorite."""
        if self.is_favorite(favorite.id):
            return
        async with self._session_maker() as db:
            added = await crud.add_favorite(db, favorite)
        # Row may predate this instance when load() was skipped
        self._ids.add(favorite.id)
        if added:
            self.changes.emit(FavoritesChange(favorite.id, True))

    async def remove_favorite(self, movie_id: int) -> None:
        """Remove ``movie_id``; emits only when a row was deleted."""
        async with self._session_maker() as db:
            removed = await crud.remove_favorite(db, movie_id)
        self._ids.discard(movie_id)
        if removed:
            self.changes.emit(FavoritesChange(movie_id, False))

    async def toggle(self, favorite: FavoriteMovie) -> bool:
        """Flip the favorite state of ``favorite.id``.

        Returns:
            True if the movie is a favorite afterwards
        """
        if self.is_favorite(favorite.id):
            await self.remove_favorite(favorite.id)
            return False
        await self.add_favorite(favorite)
        return True
