"""Favorites list controller."""

from reelcache.models.schemas import FavoriteMovie
from reelcache.services.favorites import FavoritesChange, FavoritesStore


class FavoritesController:
    """Keeps the favorites list in sync with the store."""

    def __init__(self, store: FavoritesStore) -> None:
        self.store = store
        self.favorites: list[FavoriteMovie] = []
        self.is_loading = False
        self.is_stale = False
        self._unsubscribe = store.changes.subscribe(self._on_change)

    async def load(self) -> None:
        self.is_loading = True
        try:
            self.favorites = await self.store.get_favorites()
            self.is_stale = False
        finally:
            self.is_loading = False

    async def remove(self, favorite: FavoriteMovie) -> None:
        await self.store.remove_favorite(favorite.id)
        await self.load()

    def _on_change(self, change: FavoritesChange) -> None:
        # Toggled from another screen; reload on next appearance
        self.is_stale = True

    def close(self) -> None:
        self._unsubscribe()
