"""Tests for the favorites store and favorites controller."""

from datetime import UTC, datetime, timedelta

import pytest

from reelcache.controllers import FavoritesController
from reelcache.models.schemas import FavoriteMovie
from reelcache.services.favorites import FavoritesChange, FavoritesStore


def favorite(movie_id: int, minutes_ago: int = 0) -> FavoriteMovie:
    return FavoriteMovie(
        id=movie_id,
        title=f"Movie {movie_id}",
        poster_path=f"/poster{movie_id}.jpg",
        vote_average=7.0,
        added_at=datetime(2026, 1, 1, tzinfo=UTC) - timedelta(minutes=minutes_ago),
    )


class TestFavoritesStore:
    """Tests for FavoritesStore."""

    @pytest.mark.asyncio
    async def test_add_and_list(self, favorites_store: FavoritesStore):
        await favorites_store.add_favorite(favorite(550))

        favorites = await favorites_store.get_favorites()

        assert [f.id for f in favorites] == [550]
        assert favorites[0].poster_url.endswith("/w200/poster550.jpg")
        assert favorites_store.is_favorite(550) is True

    @pytest.mark.asyncio
    async def test_most_recent_first(self, favorites_store: FavoritesStore):
        await favorites_store.add_favorite(favorite(1, minutes_ago=30))
        await favorites_store.add_favorite(favorite(2, minutes_ago=10))
        await favorites_store.add_favorite(favorite(3, minutes_ago=20))

        favorites = await favorites_store.get_favorites()

        assert [f.id for f in favorites] == [2, 3, 1]

    @pytest.mark.asyncio
    async def test_add_existing_is_noop(self, favorites_store: FavoritesStore):
        events: list[FavoritesChange] = []
        favorites_store.changes.subscribe(events.append)

        await favorites_store.add_favorite(favorite(550))
        await favorites_store.add_favorite(favorite(550))

        assert len(await favorites_store.get_favorites()) == 1
        assert events == [FavoritesChange(550, True)]

    @pytest.mark.asyncio
    async def test_remove(self, favorites_store: FavoritesStore):
        events: list[FavoritesChange] = []
        favorites_store.changes.subscribe(events.append)
        await favorites_store.add_favorite(favorite(550))

        await favorites_store.remove_favorite(550)

        assert await favorites_store.get_favorites() == []
        assert favorites_store.is_favorite(550) is False
        assert events[-1] == FavoritesChange(550, False)

    @pytest.mark.asyncio
    async def test_remove_missing_emits_nothing(self, favorites_store: FavoritesStore):
        events: list[FavoritesChange] = []
        favorites_store.changes.subscribe(events.append)

        await favorites_store.remove_favorite(550)

        assert events == []

    @pytest.mark.asyncio
    async def test_add_before_load_when_row_exists(self, engine, favorites_store: FavoritesStore):
        """Test that an unloaded store adding a stored favorite emits nothing."""
        await favorites_store.add_favorite(favorite(550))
        unloaded = FavoritesStore(engine)
        events: list[FavoritesChange] = []
        unloaded.changes.subscribe(events.append)

        await unloaded.add_favorite(favorite(550))

        assert events == []
        assert unloaded.is_favorite(550) is True
        assert len(await unloaded.get_favorites()) == 1

    @pytest.mark.asyncio
    async def test_toggle(self, favorites_store: FavoritesStore):
        assert await favorites_store.toggle(favorite(550)) is True
        assert await favorites_store.toggle(favorite(550)) is False
        assert favorites_store.is_favorite(550) is False

    @pytest.mark.asyncio
    async def test_persisted_across_instances(self, engine, favorites_store: FavoritesStore):
        await favorites_store.add_favorite(favorite(550))

        reopened = FavoritesStore(engine)
        assert reopened.is_favorite(550) is False
        await reopened.load()

        assert reopened.is_favorite(550) is True

    @pytest.mark.asyncio
    async def test_favorites_never_expire(
        self, engine, favorites_store: FavoritesStore, cache_store, clock
    ):
        """Test that sweeping the catalog cache leaves favorites alone."""
        await favorites_store.add_favorite(favorite(550))
        clock.advance(10 * 24 * 3600)

        await cache_store.sweep_expired()
        await cache_store.clear_all()

        assert [f.id for f in await favorites_store.get_favorites()] == [550]

    def test_from_record(self, make_detail):
        detail = make_detail(550, "Fight Club", poster_path="/fc.jpg", vote_average=8.4)

        result = FavoriteMovie.from_record(detail)

        assert result.id == 550
        assert result.title == "Fight Club"
        assert result.poster_path == "/fc.jpg"
        assert result.vote_average == 8.4
        assert result.added_at.tzinfo is not None


class TestFavoritesController:
    """Tests for FavoritesController."""

    @pytest.mark.asyncio
    async def test_load(self, favorites_store: FavoritesStore):
        await favorites_store.add_favorite(favorite(1, minutes_ago=5))
        await favorites_store.add_favorite(favorite(2))
        controller = FavoritesController(favorites_store)

        await controller.load()

        assert [f.id for f in controller.favorites] == [2, 1]
        assert controller.is_loading is False
        assert controller.is_stale is False

    @pytest.mark.asyncio
    async def test_remove_reloads(self, favorites_store: FavoritesStore):
        await favorites_store.add_favorite(favorite(1))
        await favorites_store.add_favorite(favorite(2, minutes_ago=5))
        controller = FavoritesController(favorites_store)
        await controller.load()

        await controller.remove(controller.favorites[0])

        assert [f.id for f in controller.favorites] == [2]
        assert controller.is_stale is False

    @pytest.mark.asyncio
    async def test_marked_stale_by_outside_change(self, favorites_store: FavoritesStore):
        controller = FavoritesController(favorites_store)
        await controller.load()

        await favorites_store.add_favorite(favorite(550))

        assert controller.is_stale is True
        await controller.load()
        assert controller.is_stale is False
        assert [f.id for f in controller.favorites] == [550]

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, favorites_store: FavoritesStore):
        controller = FavoritesController(favorites_store)
        controller.close()

        await favorites_store.add_favorite(favorite(550))

        assert controller.is_stale is False
        assert favorites_store.changes.listener_count == 0
