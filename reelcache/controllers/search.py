"""Search session controller: debounced search-as-you-type with pagination.

Only the most recent query may change visible state. Every new query bumps a
generation counter and cancels the previous search and any load-more in
flight; a task checks its generation right before mutating state, so a
superseded response is inert even if it resolves.
"""

import asyncio
import logging

from reelcache.constants import SEARCH_DEBOUNCE_SECONDS
from reelcache.controllers.errors import ControllerError
from reelcache.models.schemas import FavoriteMovie, Movie, MovieSearchResponse
from reelcache.services.connectivity import ConnectivityMonitor
from reelcache.services.favorites import FavoritesChange, FavoritesStore
from reelcache.services.repository import OfflineFirstRepository

logger = logging.getLogger(__name__)


class SearchSessionController:
    """Owns the visible state of one search screen."""

    def __init__(
        self,
        repository: OfflineFirstRepository,
        connectivity: ConnectivityMonitor,
        favorites: FavoritesStore | None = None,
        debounce: float = SEARCH_DEBOUNCE_SECONDS,
    ) -> None:
        self.repository = repository
        self.connectivity = connectivity
        self.favorites = favorites
        self.debounce = debounce

        # Visible state
        self.query: str = ""
        self.movies: list[Movie] = []
        self.is_loading = False
        self.is_loading_more = False
        self.error: ControllerError | None = None
        self.current_page = 0
        self.total_pages = 0
        self.total_results = 0
        self.favorites_version = 0

        self._generation = 0
        self._search_task: asyncio.Task | None = None
        self._load_more_task: asyncio.Task | None = None
        self._unsubscribe = (
            favorites.changes.subscribe(self._on_favorites_changed) if favorites else None
        )

    @property
    def can_load_more(self) -> bool:
        return (
            self.current_page < self.total_pages
            and not self.is_loading
            and not self.is_loading_more
            and self.connectivity.is_connected
        )

    # ==================== Search ====================

    def set_query(self, query: str) -> asyncio.Task | None:
        """Schedule a debounced search for ``query``, superseding any pending one.

        Returns:
            The scheduled task, or None for a blank query (results are cleared)
        """
        self._cancel_tasks()
        self.query = query

        if not query.strip():
            self._reset_results()
            self.error = None
            return None

        self._search_task = asyncio.create_task(
            self._run_search(self._generation, query, self.debounce),
            name=f"search:{query}",
        )
        return self._search_task

    def retry(self) -> asyncio.Task | None:
        """Re-run the current query right away (user-initiated)."""
        if not self.query.strip():
            return None
        self._cancel_tasks()
        self._search_task = asyncio.create_task(
            self._run_search(self._generation, self.query, 0),
            name=f"search:{self.query}",
        )
        return self._search_task

    async def _run_search(self, generation: int, query: str, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        if generation != self._generation:
            return

        self.is_loading = True
        self.error = None
        try:
            response = await self.repository.search(query, 1)
        except Exception as e:
            if generation != self._generation:
                return
            logger.info(f"Search for '{query}' failed: {e}")
            self.error = ControllerError.from_exception(e)
            self._reset_results()
            self.is_loading = False
            return

        if generation != self._generation:
            return
        self._apply(response)
        self.is_loading = False

    # ==================== Pagination ====================

    def load_more(self) -> asyncio.Task | None:
        """Fetch the next page and append it.

        Returns:
            The load task, or None when no more pages can be loaded or a
            load is already in flight
        """
        if not self.can_load_more:
            return None
        if self._load_more_task is not None and not self._load_more_task.done():
            return None

        self.is_loading_more = True
        self.error = None
        self._load_more_task = asyncio.create_task(
            self._run_load_more(self._generation, self.query, self.current_page + 1),
            name=f"load_more:{self.query}",
        )
        return self._load_more_task

    def load_more_if_needed(self, movie: Movie) -> asyncio.Task | None:
        """Trigger ``load_more`` when ``movie`` is the last one shown."""
        if not self.movies or movie.id != self.movies[-1].id:
            return None
        return self.load_more()

    async def _run_load_more(self, generation: int, query: str, page: int) -> None:
        try:
            response = await self.repository.search(query, page)
        except Exception as e:
            if generation != self._generation:
                return
            logger.info(f"Loading page {page} of '{query}' failed: {e}")
            self.error = ControllerError.from_exception(e)
            self.is_loading_more = False
            return

        if generation != self._generation:
            return
        self._apply(response)
        self.is_loading_more = False

    # ==================== State ====================

    def _apply(self, response: MovieSearchResponse) -> None:
        if response.page == 1:
            self.movies = list(response.results)
        else:
            self.movies.extend(response.results)
        self.current_page = response.page
        self.total_pages = response.total_pages
        self.total_results = response.total_results

    def _reset_results(self) -> None:
        self.movies = []
        self.current_page = 0
        self.total_pages = 0
        self.total_results = 0

    def _cancel_tasks(self) -> None:
        self._generation += 1
        for task in (self._search_task, self._load_more_task):
            if task is not None and not task.done():
                task.cancel()
        self._search_task = None
        self._load_more_task = None
        self.is_loading = False
        self.is_loading_more = False

    def clear_search(self) -> None:
        """Cancel everything and return to the empty state."""
        self._cancel_tasks()
        self.query = ""
        self._reset_results()
        self.error = None

    # ==================== Favorites ====================

    def is_favorite(self, movie_id: int) -> bool:
        return self.favorites is not None and self.favorites.is_favorite(movie_id)

    async def toggle_favorite(self, movie: Movie) -> bool:
        """Flip the favorite state of ``movie``; True if it is now a favorite."""
        if self.favorites is None:
            raise RuntimeError("No favorites store configured")
        return await self.favorites.toggle(FavoriteMovie.from_record(movie))

    def _on_favorites_changed(self, change: FavoritesChange) -> None:
        self.favorites_version += 1

    async def close(self) -> None:
        """Unsubscribe from favorites and cancel pending work."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        tasks = [t for t in (self._search_task, self._load_more_task) if t is not None]
        self._cancel_tasks()
        await asyncio.gather(*tasks, return_exceptions=True)
