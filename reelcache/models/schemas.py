"""Pydantic schemas for catalog records.

Field names follow TMDB's JSON keys so remote payloads validate directly into
these models. They are also the shape the cache store hands back to callers.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reelcache.constants import (
    BACKDROP_SIZE,
    FAVORITE_POSTER_SIZE,
    POSTER_SIZE,
    TMDB_IMAGE_BASE_URL,
)


def image_url(path: str | None, size: str) -> str | None:
    """Build a TMDB image URL from a path fragment like ``/abc.jpg``."""
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


class CatalogRecord(BaseModel):
    """Fields shared by search results and detail records."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: int
    title: str
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: float = 0.0
    adult: bool = False
    video: bool = False
    original_language: str = ""
    original_title: str = ""

    @field_validator("overview", "original_language", "original_title", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return v or ""

    @property
    def poster_url(self) -> str | None:
        return image_url(self.poster_path, POSTER_SIZE)

    @property
    def backdrop_url(self) -> str | None:
        return image_url(self.backdrop_path, BACKDROP_SIZE)

    @property
    def release_year(self) -> str | None:
        if not self.release_date:
            return None
        return self.release_date[:4]


class Movie(CatalogRecord):
    """A search-result-shaped movie (one entry of ``/search/movie``)."""

    genre_ids: list[int] = Field(default_factory=list)


class Genre(BaseModel):
    """Genre entry of a movie detail."""

    id: int
    name: str


class ProductionCompany(BaseModel):
    """Production company entry of a movie detail."""

    id: int
    name: str
    logo_path: str | None = None
    origin_country: str = ""

    @field_validator("origin_country", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        return v or ""


class MovieDetail(CatalogRecord):
    """Full movie record from ``/movie/{id}``."""

    runtime: int | None = None
    budget: int = 0
    revenue: int = 0
    status: str = ""
    tagline: str | None = None
    homepage: str | None = None
    genres: list[Genre] = Field(default_factory=list)
    production_companies: list[ProductionCompany] = Field(default_factory=list)

    @property
    def genre_ids(self) -> list[int]:
        return [genre.id for genre in self.genres]


class MovieSearchResponse(BaseModel):
    """One page of search results, from the network or rebuilt from cache."""

    page: int = Field(ge=1)
    results: list[Movie] = Field(default_factory=list)
    total_pages: int = Field(default=0, ge=0)
    total_results: int = Field(default=0, ge=0)


class FavoriteMovie(BaseModel):
    """A favorited movie with the fields needed to render it offline."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    added_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_record(cls, record: CatalogRecord) -> "FavoriteMovie":
        """Build a favorite from a ``Movie`` or a ``MovieDetail``."""
        return cls(
            id=record.id,
            title=record.title,
            overview=record.overview,
            poster_path=record.poster_path,
            backdrop_path=record.backdrop_path,
            release_date=record.release_date,
            vote_average=record.vote_average,
            vote_count=record.vote_count,
        )

    @property
    def poster_url(self) -> str | None:
        return image_url(self.poster_path, FAVORITE_POSTER_SIZE)
