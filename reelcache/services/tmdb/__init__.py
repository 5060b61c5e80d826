"""Remote catalog client for TMDB."""

from reelcache.services.tmdb.client import TMDBClient
from reelcache.services.tmdb.errors import (
    CatalogClientError,
    DecodingError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)

__all__ = [
    "TMDBClient",
    "CatalogClientError",
    "DecodingError",
    "InvalidRequestError",
    "NetworkError",
    "NotFoundError",
    "ServerError",
    "UnauthorizedError",
]
