"""Favorite movies persisted without any expiry."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from reelcache.models.base import Base
from reelcache.models.schemas import FavoriteMovie


class FavoriteMovieRecord(Base):
    """A user favorite, denormalized so it renders with no catalog row."""

    __tablename__ = "favorite_movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    overview: Mapped[str] = mapped_column(Text, default="")
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    release_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vote_average: Mapped[float] = mapped_column(Float, default=0.0)
    vote_count: Mapped[int] = mapped_column(Integer, default=0)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    @classmethod
    def from_schema(cls, favorite: FavoriteMovie) -> "FavoriteMovieRecord":
        return cls(**favorite.model_dump())

    def to_schema(self) -> FavoriteMovie:
        return FavoriteMovie.model_validate(self)

    def __repr__(self) -> str:
        return f"<FavoriteMovieRecord(id={self.id}, title={self.title})>"
