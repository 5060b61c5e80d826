"""Presentation-state controllers."""

from reelcache.controllers.detail import MovieDetailController
from reelcache.controllers.errors import ControllerError, ErrorKind
from reelcache.controllers.favorites import FavoritesController
from reelcache.controllers.search import SearchSessionController

__all__ = [
    "ControllerError",
    "ErrorKind",
    "FavoritesController",
    "MovieDetailController",
    "SearchSessionController",
]
