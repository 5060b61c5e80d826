"""CRUD operations for cached movies and movie details.

Every function takes the current time explicitly so expiry is evaluated
against one instant per operation. Functions that write commit their own
transaction and roll back on failure.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from reelcache.models.catalog import CachedMovie, CachedMovieDetail
from reelcache.models.schemas import Movie, MovieDetail
from reelcache.utils.expiry import is_expired

logger = logging.getLogger(__name__)

# Rows per INSERT statement (15 bound parameters each)
UPSERT_CHUNK_SIZE = 50


def matches_query(movie: CachedMovie, query: str | None) -> bool:
    """Case-insensitive substring match on title or original title."""
    if not query:
        return True
    needle = query.casefold()
    return needle in (movie.title or "").casefold() or needle in (
        movie.original_title or ""
    ).casefold()


def _upsert_statement(
    model: type[CachedMovie] | type[CachedMovieDetail],
    rows: list[dict[str, Any]],
):
    """INSERT ... ON CONFLICT(id) DO UPDATE, so concurrent writers never race on a new id."""
    stmt = sqlite_insert(model).values(rows)
    return stmt.on_conflict_do_update(
        index_elements=[model.id],
        set_={name: stmt.excluded[name] for name in rows[0] if name != "id"},
    )


async def upsert_movies(
    db: AsyncSession,
    movies: Sequence[Movie],
    now: datetime,
) -> int:
    """Insert or overwrite cached movies, keyed by TMDB id.

    Duplicate ids within ``movies`` collapse to their last occurrence, so the
    batch never produces two rows for one id. Concurrent batches sharing an id
    both succeed; the last one to commit wins.

    Returns:
        Number of distinct rows written
    """
    latest = {movie.id: movie for movie in movies}
    if not latest:
        return 0

    rows = [CachedMovie.values_from_schema(movie, now) for movie in latest.values()]
    try:
        # Chunked to stay under SQLite's bound-parameter limit
        for start in range(0, len(rows), UPSERT_CHUNK_SIZE):
            chunk = rows[start:start + UPSERT_CHUNK_SIZE]
            await db.execute(_upsert_statement(CachedMovie, chunk))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return len(latest)


async def find_matching_movies(
    db: AsyncSession,
    query: str | None,
    now: datetime,
) -> list[Movie]:
    """Return fresh cached movies matching ``query``, most popular first.

    Expired rows encountered during the scan are deleted.
    """
    result = await db.execute(
        select(CachedMovie).order_by(CachedMovie.popularity.desc(), CachedMovie.id.asc())
    )
    rows = result.scalars().all()

    fresh: list[Movie] = []
    expired_ids: list[int] = []
    for row in rows:
        if is_expired(row.cached_at, now):
            expired_ids.append(row.id)
            continue
        if matches_query(row, query):
            fresh.append(row.to_schema())

    if expired_ids:
        try:
            await db.execute(delete(CachedMovie).where(CachedMovie.id.in_(expired_ids)))
            await db.commit()
            logger.debug(f"Reaped {len(expired_ids)} expired movies during scan")
        except Exception:
            await db.rollback()
            raise

    return fresh


async def get_movie_detail(
    db: AsyncSession,
    movie_id: int,
    now: datetime,
) -> MovieDetail | None:
    """Return a fresh cached detail, deleting it instead if it has expired."""
    row = await db.get(CachedMovieDetail, movie_id)
    if row is None:
        return None

    if is_expired(row.cached_at, now):
        try:
            await db.delete(row)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.debug(f"Deleted expired detail for movie {movie_id}")
        return None

    return row.to_schema()


async def upsert_movie_detail(
    db: AsyncSession,
    detail: MovieDetail,
    now: datetime,
) -> None:
    """Replace the cached detail for ``detail.id`` wholesale."""
    try:
        row = CachedMovieDetail.values_from_schema(detail, now)
        await db.execute(_upsert_statement(CachedMovieDetail, [row]))
        await db.commit()
    except Exception:
        await db.rollback()
        raise


async def delete_expired(db: AsyncSession, now: datetime) -> tuple[int, int]:
    """Delete every expired movie and detail.

    Returns:
        Tuple of (movies deleted, details deleted)
    """
    try:
        movie_stamps = await db.execute(select(CachedMovie.id, CachedMovie.cached_at))
        expired_movies = [
            movie_id for movie_id, cached_at in movie_stamps.all() if is_expired(cached_at, now)
        ]
        detail_stamps = await db.execute(
            select(CachedMovieDetail.id, CachedMovieDetail.cached_at)
        )
        expired_details = [
            detail_id for detail_id, cached_at in detail_stamps.all() if is_expired(cached_at, now)
        ]

        if expired_movies:
            await db.execute(delete(CachedMovie).where(CachedMovie.id.in_(expired_movies)))
        if expired_details:
            await db.execute(
                delete(CachedMovieDetail).where(CachedMovieDetail.id.in_(expired_details))
            )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    return len(expired_movies), len(expired_details)


async def delete_all(db: AsyncSession) -> tuple[int, int]:
    """Delete every cached movie and detail.

    Returns:
        Tuple of (movies deleted, details deleted)
    """
    movies, details = await count_rows(db)
    try:
        await db.execute(delete(CachedMovie))
        await db.execute(delete(CachedMovieDetail))
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return movies, details


async def count_rows(db: AsyncSession) -> tuple[int, int]:
    """Return (cached movie rows, cached detail rows), expired ones included."""
    movies = await db.scalar(select(func.count()).select_from(CachedMovie))
    details = await db.scalar(select(func.count()).select_from(CachedMovieDetail))
    return movies or 0, details or 0
