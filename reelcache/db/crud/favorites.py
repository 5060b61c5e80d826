"""CRUD operations for favorite movies."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reelcache.models.favorite import FavoriteMovieRecord
from reelcache.models.schemas import FavoriteMovie


async def list_favorites(db: AsyncSession) -> list[FavoriteMovie]:
    """Return all favorites, most recently added first."""
    result = await db.execute(
        select(FavoriteMovieRecord).order_by(
            FavoriteMovieRecord.added_at.desc(), FavoriteMovieRecord.id.asc()
        )
    )
    return [row.to_schema() for row in result.scalars().all()]


async def add_favorite(db: AsyncSession, favorite: FavoriteMovie) -> bool:
    """Insert a favorite unless its id is already present.

    Returns:
        True if a row was inserted
    """
    if await db.get(FavoriteMovieRecord, favorite.id) is not None:
        return False

    try:
        db.add(FavoriteMovieRecord.from_schema(favorite))
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return True


async def remove_favorite(db: AsyncSession, movie_id: int) -> bool:
    """Delete a favorite by id.

    Returns:
        True if a row was deleted
    """
    row = await db.get(FavoriteMovieRecord, movie_id)
    if row is None:
        return False

    try:
        await db.delete(row)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return True
