"""SQLAlchemy models and pydantic schemas."""

from reelcache.models.base import Base
from reelcache.models.catalog import CachedMovie, CachedMovieDetail
from reelcache.models.favorite import FavoriteMovieRecord
from reelcache.models.schemas import (
    FavoriteMovie,
    Genre,
    Movie,
    MovieDetail,
    MovieSearchResponse,
    ProductionCompany,
)

__all__ = [
    "Base",
    "CachedMovie",
    "CachedMovieDetail",
    "FavoriteMovieRecord",
    "FavoriteMovie",
    "Genre",
    "Movie",
    "MovieDetail",
    "MovieSearchResponse",
    "ProductionCompany",
]
