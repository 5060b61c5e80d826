"""CRUD operations."""

from reelcache.db.crud.catalog import (
    count_rows,
    delete_all,
    delete_expired,
    find_matching_movies,
    get_movie_detail,
    upsert_movie_detail,
    upsert_movies,
)
from reelcache.db.crud.favorites import add_favorite, list_favorites, remove_favorite

__all__ = [
    # Catalog cache
    "count_rows",
    "delete_all",
    "delete_expired",
    "find_matching_movies",
    "get_movie_detail",
    "upsert_movie_detail",
    "upsert_movies",
    # Favorites
    "add_favorite",
    "list_favorites",
    "remove_favorite",
]
