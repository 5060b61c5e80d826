"""Offline-first repository: stale-while-revalidate over cache and network.

Reads go to the local cache first. A cache hit returns immediately and, when
online, schedules one background refresh that warms the cache for the next
read. A cache miss goes to the network when online and fails with
``NoConnectionError`` when offline, so a cold cache never looks like an empty
result.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from reelcache.constants import BACKGROUND_SHUTDOWN_TIMEOUT, DEFAULT_PAGE_SIZE
from reelcache.models.schemas import Movie, MovieDetail, MovieSearchResponse
from reelcache.services.cache_store import LocalCacheStore, build_page
from reelcache.services.connectivity import ConnectivityMonitor
from reelcache.services.tmdb.errors import CatalogClientError, InvalidRequestError
from reelcache.utils.logging import LogContext
from reelcache.utils.metrics import metrics

logger = logging.getLogger(__name__)

# Local storage failures that degrade to a cache miss
STORAGE_ERRORS = (SQLAlchemyError, OSError)


class RemoteCatalog(Protocol):
    """What the repository needs from the remote catalog client."""

    async def search_movies(self, query: str, page: int = 1) -> MovieSearchResponse: ...

    async def get_movie_detail(self, movie_id: int) -> MovieDetail: ...


class RepositoryError(Exception):
    """Base exception for repository reads."""

    pass


class NoConnectionError(RepositoryError):
    """Nothing cached and no network: there is no data to show."""

    def __init__(self, message: str = "No internet connection and no cached data") -> None:
        super().__init__(message)


class UnderlyingError(RepositoryError):
    """A network-required fetch failed; ``cause`` is the client error."""

    def __init__(self, cause: CatalogClientError) -> None:
        self.cause = cause
        super().__init__(str(cause))


class OfflineFirstRepository:
    """Answers movie searches and detail reads from cache and network.

    Background refreshes are owned by the repository, not by the caller's
    task: cancelling a search does not cancel the refresh it started. Call
    ``aclose()`` to cancel whatever is still pending.
    """

    def __init__(
        self,
        remote: RemoteCatalog,
        cache: LocalCacheStore,
        connectivity: ConnectivityMonitor,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.remote = remote
        self.cache = cache
        self.connectivity = connectivity
        self.page_size = page_size
        self._background: set[asyncio.Task] = set()
        self._closed = False

    # ==================== Search ====================

    async def search(self, query: str | None, page: int = 1) -> MovieSearchResponse:
        """Return page ``page`` of ``query``, cache first.

        Raises:
            NoConnectionError: Nothing cached matches and the device is offline
            UnderlyingError: Nothing cached matches and the network fetch failed,
                or ``page`` is below 1 (cause ``InvalidRequestError``)
        """
        if page < 1:
            raise UnderlyingError(InvalidRequestError(f"Page must be >= 1, got {page}"))

        log = LogContext(logger, query=query or "", page=page)
        cached = await self._cached_matches(query)

        if cached:
            metrics.cache_hits.inc(operation="search")
            log.debug(f"Serving {len(cached)} cached matches")
            response = build_page(cached, page, self.page_size)
            if self.connectivity.is_connected and query and query.strip():
                self._spawn(
                    f"refresh_search:{query}",
                    lambda: self._refresh_search(query),
                )
            return response

        metrics.cache_misses.inc(operation="search")
        if not self.connectivity.is_connected:
            log.info("Cache miss while offline")
            raise NoConnectionError()

        try:
            response = await self.remote.search_movies(query or "", page)
        except CatalogClientError as e:
            metrics.remote_fetches.inc(operation="search", outcome="error")
            log.warning(f"Remote search failed: {e}")
            raise UnderlyingError(e) from e

        metrics.remote_fetches.inc(operation="search", outcome="success")
        await self._store_movies(response.results)
        return response

    async def _cached_matches(self, query: str | None) -> list[Movie]:
        try:
            return await self.cache.find_matching(query)
        except STORAGE_ERRORS as e:
            metrics.storage_errors.inc(operation="search")
            logger.warning(f"Cache read failed, treating as miss: {e}")
            return []

    async def _store_movies(self, movies: list[Movie]) -> None:
        try:
            await self.cache.upsert_movies(movies)
        except STORAGE_ERRORS as e:
            metrics.storage_errors.inc(operation="store_movies")
            logger.warning(f"Failed to cache {len(movies)} movies: {e}")

    async def _refresh_search(self, query: str) -> None:
        response = await self.remote.search_movies(query, 1)
        await self._store_movies(response.results)

    # ==================== Detail ====================

    async def get_detail(self, movie_id: int) -> MovieDetail:
        """Return the detail for ``movie_id``, cache first.

        Raises:
            NoConnectionError: Not cached and the device is offline
            UnderlyingError: Not cached and the network fetch failed
        """
        log = LogContext(logger, movie_id=movie_id)
        cached = await self._cached_detail(movie_id)

        if cached is not None:
            metrics.cache_hits.inc(operation="detail")
            log.debug("Serving cached detail")
            if self.connectivity.is_connected:
                self._spawn(
                    f"refresh_detail:{movie_id}",
                    lambda: self._refresh_detail(movie_id),
                )
            return cached

        metrics.cache_misses.inc(operation="detail")
        if not self.connectivity.is_connected:
            log.info("Detail cache miss while offline")
            raise NoConnectionError()

        try:
            detail = await self.remote.get_movie_detail(movie_id)
        except CatalogClientError as e:
            metrics.remote_fetches.inc(operation="detail", outcome="error")
            log.warning(f"Remote detail fetch failed: {e}")
            raise UnderlyingError(e) from e

        metrics.remote_fetches.inc(operation="detail", outcome="success")
        await self._store_detail(detail)
        return detail

    async def _cached_detail(self, movie_id: int) -> MovieDetail | None:
        try:
            return await self.cache.get_detail(movie_id)
        except STORAGE_ERRORS as e:
            metrics.storage_errors.inc(operation="detail")
            logger.warning(f"Detail cache read failed, treating as miss: {e}")
            return None

    async def _store_detail(self, detail: MovieDetail) -> None:
        try:
            await self.cache.upsert_detail(detail)
        except STORAGE_ERRORS as e:
            metrics.storage_errors.inc(operation="store_detail")
            logger.warning(f"Failed to cache detail {detail.id}: {e}")

    async def _refresh_detail(self, movie_id: int) -> None:
        detail = await self.remote.get_movie_detail(movie_id)
        await self._store_detail(detail)

    # ==================== Background refresh ====================

    def _spawn(self, name: str, refresh: Callable[[], Awaitable[None]]) -> None:
        """Start a fire-and-forget refresh tracked by the repository."""
        if self._closed:
            return
        operation = name.split(":", 1)[0]

        async def run() -> None:
            try:
                await refresh()
            except CatalogClientError as e:
                metrics.background_refreshes.inc(operation=operation, outcome="error")
                logger.warning(f"Background refresh {name} failed: {e}")
            except Exception:
                metrics.background_refreshes.inc(operation=operation, outcome="error")
                logger.exception(f"Background refresh {name} crashed")
            else:
                metrics.background_refreshes.inc(operation=operation, outcome="success")
                logger.debug(f"Background refresh {name} done")

        task = asyncio.create_task(run(), name=name)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    @property
    def pending_refreshes(self) -> int:
        return len(self._background)

    async def wait_for_background_refreshes(self) -> None:
        """Wait until every background refresh started so far has settled."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def aclose(self, timeout: float = BACKGROUND_SHUTDOWN_TIMEOUT) -> None:
        """Stop accepting refreshes and cancel the ones still running."""
        self._closed = True
        tasks = list(self._background)
        if not tasks:
            return
        for task in tasks:
            task.cancel()
        try:
            await asyncio.wait_for(
                asyncio.gather(*tasks, return_exceptions=True),
                timeout=timeout,
            )
        except TimeoutError:
            logger.warning("Background refreshes did not stop in time")
        logger.info(f"Cancelled {len(tasks)} background refreshes")
