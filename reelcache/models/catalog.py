"""Cached catalog rows: one row per TMDB id, stamped at write time."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reelcache.models.base import Base
from reelcache.models.schemas import Genre, Movie, MovieDetail, ProductionCompany

# Columns copied verbatim between a schema and its row
_MOVIE_FIELDS = (
    "title",
    "overview",
    "poster_path",
    "backdrop_path",
    "release_date",
    "vote_average",
    "vote_count",
    "popularity",
    "adult",
    "video",
    "original_language",
    "original_title",
)
_DETAIL_FIELDS = _MOVIE_FIELDS + (
    "runtime",
    "budget",
    "revenue",
    "status",
    "tagline",
    "homepage",
)


class CachedMovie(Base):
    """A search result cached for offline reads."""

    __tablename__ = "cached_movies"

    # TMDB id, never generated locally
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    overview: Mapped[str] = mapped_column(Text, default="")
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    release_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vote_average: Mapped[float] = mapped_column(Float, default=0.0)
    vote_count: Mapped[int] = mapped_column(Integer, default=0)
    popularity: Mapped[float] = mapped_column(Float, default=0.0, index=True)
    adult: Mapped[bool] = mapped_column(Boolean, default=False)
    video: Mapped[bool] = mapped_column(Boolean, default=False)
    original_language: Mapped[str] = mapped_column(String(10), default="")
    original_title: Mapped[str] = mapped_column(String(500), default="")
    genre_ids: Mapped[list] = mapped_column(JSON, default=list)
    cached_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    @staticmethod
    def values_from_schema(movie: Movie, cached_at: datetime) -> dict[str, Any]:
        """Column values for an INSERT of ``movie`` stamped at ``cached_at``."""
        values = {name: getattr(movie, name) for name in _MOVIE_FIELDS}
        values.update(id=movie.id, genre_ids=list(movie.genre_ids), cached_at=cached_at)
        return values

    def to_schema(self) -> Movie:
        return Movie(
            id=self.id,
            genre_ids=list(self.genre_ids or []),
            **{name: getattr(self, name) for name in _MOVIE_FIELDS},
        )

    def __repr__(self) -> str:
        return f"<CachedMovie(id={self.id}, title={self.title})>"


class CachedMovieDetail(Base):
    """A full movie detail cached for offline reads."""

    __tablename__ = "cached_movie_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    overview: Mapped[str] = mapped_column(Text, default="")
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    release_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vote_average: Mapped[float] = mapped_column(Float, default=0.0)
    vote_count: Mapped[int] = mapped_column(Integer, default=0)
    popularity: Mapped[float] = mapped_column(Float, default=0.0)
    adult: Mapped[bool] = mapped_column(Boolean, default=False)
    video: Mapped[bool] = mapped_column(Boolean, default=False)
    original_language: Mapped[str] = mapped_column(String(10), default="")
    original_title: Mapped[str] = mapped_column(String(500), default="")
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget: Mapped[int] = mapped_column(BigInteger, default=0)
    revenue: Mapped[int] = mapped_column(BigInteger, default=0)
    status: Mapped[str] = mapped_column(String(50), default="")
    tagline: Mapped[str | None] = mapped_column(Text, nullable=True)
    homepage: Mapped[str | None] = mapped_column(String(500), nullable=True)
    genres: Mapped[list] = mapped_column(JSON, default=list)  # [{id, name}]
    production_companies: Mapped[list] = mapped_column(JSON, default=list)
    cached_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    @staticmethod
    def values_from_schema(detail: MovieDetail, cached_at: datetime) -> dict[str, Any]:
        values = {name: getattr(detail, name) for name in _DETAIL_FIELDS}
        values.update(
            id=detail.id,
            genres=[genre.model_dump() for genre in detail.genres],
            production_companies=[c.model_dump() for c in detail.production_companies],
            cached_at=cached_at,
        )
        return values

    def to_schema(self) -> MovieDetail:
        return MovieDetail(
            id=self.id,
            genres=[Genre(**genre) for genre in self.genres or []],
            production_companies=[
                ProductionCompany(**company) for company in self.production_companies or []
            ],
            **{name: getattr(self, name) for name in _DETAIL_FIELDS},
        )

    def __repr__(self) -> str:
        return f"<CachedMovieDetail(id={self.id}, title={self.title})>"
