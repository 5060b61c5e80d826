"""Movie detail controller."""

import logging

from reelcache.controllers.errors import ControllerError
from reelcache.models.schemas import FavoriteMovie, MovieDetail
from reelcache.services.favorites import FavoritesStore
from reelcache.services.repository import OfflineFirstRepository

logger = logging.getLogger(__name__)


class MovieDetailController:
    """Loads one movie's detail and exposes its favorite state."""

    def __init__(
        self,
        movie_id: int,
        repository: OfflineFirstRepository,
        favorites: FavoritesStore | None = None,
    ) -> None:
        self.movie_id = movie_id
        self.repository = repository
        self.favorites = favorites

        self.detail: MovieDetail | None = None
        self.is_loading = False
        self.error: ControllerError | None = None

    async def load(self) -> None:
        """Load the detail; a no-op while a load is already running."""
        if self.is_loading:
            return

        self.is_loading = True
        self.error = None
        try:
            self.detail = await self.repository.get_detail(self.movie_id)
        except Exception as e:
            logger.info(f"Loading detail {self.movie_id} failed: {e}")
            self.detail = None
            self.error = ControllerError.from_exception(e)
        finally:
            self.is_loading = False

    async def retry(self) -> None:
        await self.load()

    @property
    def is_favorite(self) -> bool:
        return self.favorites is not None and self.favorites.is_favorite(self.movie_id)

    async def toggle_favorite(self) -> bool:
        """Flip the favorite state of the loaded movie; True if it is now a favorite."""
        if self.favorites is None or self.detail is None:
            return False
        return await self.favorites.toggle(FavoriteMovie.from_record(self.detail))
