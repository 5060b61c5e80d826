"""TMDB API client for movie search and details.

Maps every transport and HTTP outcome to a ``CatalogClientError`` subclass so
callers handle one typed error set.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from reelcache.config import get_settings
from reelcache.constants import TMDB_API_BASE_URL
from reelcache.models.schemas import MovieDetail, MovieSearchResponse
from reelcache.services.tmdb.errors import (
    DecodingError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from reelcache.utils.http_client import get_tmdb_client

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class TMDBClient:
    """Client for the TMDB v3 API.

    Usage:
        client = TMDBClient(access_token="eyJ...")
        page = await client.search_movies("fight", page=1)
        detail = await client.get_movie_detail(550)
    """

    def __init__(
        self,
        access_token: str | None = None,
        language: str | None = None,
        base_url: str = TMDB_API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.access_token = settings.tmdb_access_token if access_token is None else access_token
        self.language = language or settings.tmdb_language
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client

        # Support both API Read Access Token (JWT) and v3 API key
        if self.access_token.startswith("eyJ"):
            self.headers = {
                "Authorization": f"Bearer {self.access_token}",
                "Accept": "application/json",
            }
            self.use_api_key_param = False
        else:
            self.headers = {"Accept": "application/json"}
            self.use_api_key_param = bool(self.access_token)

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client or get_tmdb_client()

    def _build_params(self, params: dict[str, Any]) -> dict[str, Any]:
        """Add language and (for v3 keys) the api_key query parameter."""
        params = {"language": self.language, **params}
        if self.use_api_key_param:
            params["api_key"] = self.access_token
        return params

    async def _get(self, endpoint: str, params: dict[str, Any], model: type[M]) -> M:
        """GET ``endpoint`` and validate the JSON body into ``model``.

        Raises:
            UnauthorizedError: On 401
            NotFoundError: On 404
            ServerError: On any other non-2xx status
            DecodingError: On a 2xx body that does not validate
            NetworkError: On transport failures (including timeouts)
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = await self.http_client.get(
                url,
                params=self._build_params(params),
                headers=self.headers,
            )
        except httpx.InvalidURL as e:
            raise InvalidRequestError(f"Invalid URL: {e}") from e
        except httpx.TransportError as e:
            logger.debug(f"TMDB request to {endpoint} failed: {e}")
            raise NetworkError(e) from e

        if response.status_code == 401:
            raise UnauthorizedError()
        if response.status_code == 404:
            raise NotFoundError()
        if not response.is_success:
            raise ServerError(response.status_code)

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodingError(e) from e

    async def search_movies(self, query: str, page: int = 1) -> MovieSearchResponse:
        """Search movies by title (``GET /search/movie``)."""
        if not query or not query.strip():
            raise InvalidRequestError("Search query must not be blank")
        if page < 1:
            raise InvalidRequestError(f"Page must be >= 1, got {page}")

        return await self._get(
            "/search/movie",
            {"query": query, "page": page, "include_adult": "false"},
            MovieSearchResponse,
        )

    async def get_movie_detail(self, movie_id: int) -> MovieDetail:
        """Fetch full movie details (``GET /movie/{id}``)."""
        return await self._get(f"/movie/{movie_id}", {}, MovieDetail)
