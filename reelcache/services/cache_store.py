"""Local cache store: the single persistent copy of catalog data.

Wraps the catalog CRUD functions with session handling and an injectable
clock. Each operation runs in its own short-lived session, so callers never
hold a transaction open across network I/O.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncEngine

from reelcache.constants import DEFAULT_PAGE_SIZE
from reelcache.db import database
from reelcache.db.crud import catalog as crud
from reelcache.models.schemas import Movie, MovieDetail, MovieSearchResponse
from reelcache.utils.expiry import utcnow
from reelcache.utils.pagination import slice_page, total_pages

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class LocalCacheStore:
    """Persistent cache of movies and movie details with a fixed TTL.

    Usage:
        store = LocalCacheStore(engine)
        await store.initialize()

        await store.upsert_movies(response.results)
        movies = await store.find_matching("fight")
    """

    def __init__(
        self,
        engine: AsyncEngine | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self._engine = engine or database.engine
        self._session_maker = database.create_session_maker(self._engine)
        self._clock = clock

    async def initialize(self) -> None:
        """Create tables if needed and sweep expired records."""
        await database.init_db(self._engine)
        movies, details = await self.sweep_expired()
        if movies or details:
            logger.info(f"Cleared {movies} expired movies and {details} expired details")

    async def upsert_movies(self, movies: Sequence[Movie]) -> int:
        """Insert or overwrite ``movies`` and stamp them with the current time."""
        async with self._session_maker() as db:
            written = await crud.upsert_movies(db, movies, self._clock())
        logger.debug(f"Saved {written} movies to cache")
        return written

    async def find_matching(self, query: str | None = None) -> list[Movie]:
        """Return fresh cached movies matching ``query`` by descending popularity.

        An empty or ``None`` query matches every fresh movie.
        """
        async with self._session_maker() as db:
            movies = await crud.find_matching_movies(db, query, self._clock())
        suffix = f" matching '{query}'" if query else ""
        logger.debug(f"Found {len(movies)} cached movies{suffix}")
        return movies

    async def get_page(
        self,
        query: str | None,
        page: int,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> MovieSearchResponse | None:
        """Rebuild page ``page`` of ``query`` from the cache.

        Returns ``None`` when nothing cached matches. A page past the end of a
        non-empty match set is returned with no results.
        """
        movies = await self.find_matching(query)
        if not movies:
            return None
        return build_page(movies, page, page_size)

    async def get_detail(self, movie_id: int) -> MovieDetail | None:
        """Return the fresh cached detail for ``movie_id`` (expired ones are deleted)."""
        async with self._session_maker() as db:
            return await crud.get_movie_detail(db, movie_id, self._clock())

    async def upsert_detail(self, detail: MovieDetail) -> None:
        """Replace the cached detail for ``detail.id``."""
        async with self._session_maker() as db:
            await crud.upsert_movie_detail(db, detail, self._clock())
        logger.debug(f"Saved movie detail to cache: {detail.id}")

    async def sweep_expired(self) -> tuple[int, int]:
        """Delete all expired records. Safe to call any time."""
        async with self._session_maker() as db:
            return await crud.delete_expired(db, self._clock())

    async def clear_all(self) -> tuple[int, int]:
        """Delete every cached movie and detail."""
        async with self._session_maker() as db:
            deleted = await crud.delete_all(db)
        logger.info("Cleared all cache")
        return deleted

    async def stats(self) -> dict[str, int]:
        """Row counts, expired rows included."""
        async with self._session_maker() as db:
            movies, details = await crud.count_rows(db)
        return {"movies": movies, "details": details}


def build_page(
    movies: Sequence[Movie],
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> MovieSearchResponse:
    """Slice an ordered match set into one ``MovieSearchResponse``."""
    return MovieSearchResponse(
        page=page,
        results=slice_page(movies, page, page_size),
        total_pages=total_pages(len(movies), page_size),
        total_results=len(movies),
    )
