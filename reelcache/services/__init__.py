"""Services: cache store, remote client, connectivity, favorites, repository."""

from reelcache.services.cache_store import LocalCacheStore
from reelcache.services.connectivity import ConnectivityMonitor, HTTPConnectivityMonitor
from reelcache.services.favorites import FavoritesChange, FavoritesStore
from reelcache.services.repository import (
    NoConnectionError,
    OfflineFirstRepository,
    RepositoryError,
    UnderlyingError,
)
from reelcache.services.tmdb import TMDBClient

__all__ = [
    "ConnectivityMonitor",
    "FavoritesChange",
    "FavoritesStore",
    "HTTPConnectivityMonitor",
    "LocalCacheStore",
    "NoConnectionError",
    "OfflineFirstRepository",
    "RepositoryError",
    "TMDBClient",
    "UnderlyingError",
]
