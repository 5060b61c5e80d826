"""Pytest configuration and fixtures."""

import asyncio
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from reelcache.db.database import create_engine
from reelcache.models.schemas import (
    Genre,
    Movie,
    MovieDetail,
    MovieSearchResponse,
    ProductionCompany,
)
from reelcache.services.cache_store import LocalCacheStore
from reelcache.services.connectivity import ConnectivityMonitor
from reelcache.services.favorites import FavoritesStore
from reelcache.services.repository import OfflineFirstRepository
from reelcache.services.tmdb.errors import NotFoundError
from reelcache.utils.metrics import metrics


class FakeClock:
    """Controllable clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeRemoteCatalog:
    """In-memory stand-in for the TMDB client.

    ``search_responses`` maps (query, page) to a response; ``details`` maps ids
    to details. Set ``error`` to make every call raise it, or ``gate`` to make
    every call wait until the event is set.
    """

    def __init__(self) -> None:
        self.search_responses: dict[tuple[str, int], MovieSearchResponse] = {}
        self.details: dict[int, MovieDetail] = {}
        self.search_calls: list[tuple[str, int]] = []
        self.detail_calls: list[int] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error

    async def search_movies(self, query: str, page: int = 1) -> MovieSearchResponse:
        self.search_calls.append((query, page))
        await self._wait()
        response = self.search_responses.get((query, page))
        if response is None:
            return MovieSearchResponse(page=page, results=[], total_pages=0, total_results=0)
        return response

    async def get_movie_detail(self, movie_id: int) -> MovieDetail:
        self.detail_calls.append(movie_id)
        await self._wait()
        if movie_id not in self.details:
            raise NotFoundError()
        return self.details[movie_id]


@pytest.fixture(autouse=True)
def reset_metrics() -> None:
    """Start every test with zeroed counters."""
    metrics.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a throwaway SQLite cache database."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'cache.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def cache_store(engine: AsyncEngine, clock: FakeClock) -> LocalCacheStore:
    store = LocalCacheStore(engine, clock=clock)
    await store.initialize()
    return store


@pytest_asyncio.fixture
async def favorites_store(engine: AsyncEngine) -> FavoritesStore:
    store = FavoritesStore(engine)
    await store.load()
    return store


@pytest.fixture
def connectivity() -> ConnectivityMonitor:
    return ConnectivityMonitor(connected=True)


@pytest.fixture
def remote() -> FakeRemoteCatalog:
    return FakeRemoteCatalog()


@pytest_asyncio.fixture
async def repository(
    remote: FakeRemoteCatalog,
    cache_store: LocalCacheStore,
    connectivity: ConnectivityMonitor,
) -> AsyncGenerator[OfflineFirstRepository, None]:
    repository = OfflineFirstRepository(remote, cache_store, connectivity)
    yield repository
    if remote.gate is not None:
        remote.gate.set()
    await repository.aclose()


@pytest.fixture
def make_movie() -> Callable[..., Movie]:
    """Factory for search-result movies."""

    def factory(movie_id: int, title: str = "", popularity: float = 1.0, **fields: Any) -> Movie:
        return Movie(
            id=movie_id,
            title=title or f"Movie {movie_id}",
            original_title=fields.pop("original_title", title or f"Movie {movie_id}"),
            overview=fields.pop("overview", "An overview"),
            popularity=popularity,
            vote_average=fields.pop("vote_average", 7.5),
            vote_count=fields.pop("vote_count", 100),
            original_language=fields.pop("original_language", "en"),
            genre_ids=fields.pop("genre_ids", [18]),
            **fields,
        )

    return factory


@pytest.fixture
def make_detail() -> Callable[..., MovieDetail]:
    """Factory for movie details."""

    def factory(movie_id: int, title: str = "", **fields: Any) -> MovieDetail:
        return MovieDetail(
            id=movie_id,
            title=title or f"Movie {movie_id}",
            original_title=title or f"Movie {movie_id}",
            overview=fields.pop("overview", "A detailed overview"),
            runtime=fields.pop("runtime", 139),
            budget=fields.pop("budget", 63_000_000),
            revenue=fields.pop("revenue", 100_853_753),
            status=fields.pop("status", "Released"),
            tagline=fields.pop("tagline", "Mischief. Mayhem. Soap."),
            genres=fields.pop("genres", [Genre(id=18, name="Drama")]),
            production_companies=fields.pop(
                "production_companies",
                [
                    ProductionCompany(
                        id=508,
                        name="Regency Enterprises",
                        logo_path="/7cxRWzi4LsVm4Utfpr1hfARNurT.png",
                        origin_country="US",
                    )
                ],
            ),
            **fields,
        )

    return factory
