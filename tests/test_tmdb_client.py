"""Tests for the TMDB client."""

import json

import httpx
import pytest

from reelcache.services.tmdb import TMDBClient
from reelcache.services.tmdb.errors import (
    DecodingError,
    InvalidRequestError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)

SEARCH_PAYLOAD = {
    "page": 1,
    "results": [
        {
            "id": 550,
            "title": "Fight Club",
            "original_title": "Fight Club",
            "overview": "A ticking-time-bomb insomniac...",
            "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
            "backdrop_path": None,
            "release_date": "1999-10-15",
            "vote_average": 8.4,
            "vote_count": 27000,
            "popularity": 61.4,
            "adult": False,
            "video": False,
            "original_language": "en",
            "genre_ids": [18],
        }
    ],
    "total_pages": 1,
    "total_results": 1,
}

DETAIL_PAYLOAD = {
    "id": 550,
    "title": "Fight Club",
    "overview": None,
    "runtime": 139,
    "budget": 63000000,
    "revenue": 100853753,
    "status": "Released",
    "backdrop_path": "/hZkgoQYus5vegHoetLkCJzb17zJ.jpg",
    "tagline": "Mischief. Mayhem. Soap.",
    "homepage": "http://www.foxmovies.com/movies/fight-club",
    "genres": [{"id": 18, "name": "Drama"}],
    "production_companies": [
        {"id": 508, "name": "Regency Enterprises", "logo_path": None, "origin_country": "US"}
    ],
    "belongs_to_collection": None,
}


def make_client(handler, access_token="eyJhbGciOiJIUzI1NiJ9.test"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TMDBClient(access_token=access_token, language="en-US", http_client=http_client)


class TestAuthentication:
    """Tests for token handling."""

    @pytest.mark.asyncio
    async def test_jwt_sent_as_bearer(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=SEARCH_PAYLOAD)

        client = make_client(handler)
        await client.search_movies("fight")

        request = seen[0]
        assert request.headers["Authorization"] == "Bearer eyJhbGciOiJIUzI1NiJ9.test"
        assert "api_key" not in request.url.params

    @pytest.mark.asyncio
    async def test_v3_key_sent_as_query_param(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=SEARCH_PAYLOAD)

        client = make_client(handler, access_token="abc123")
        await client.search_movies("fight")

        request = seen[0]
        assert "Authorization" not in request.headers
        assert request.url.params["api_key"] == "abc123"


class TestSearchMovies:
    """Tests for TMDBClient.search_movies."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=SEARCH_PAYLOAD)

        client = make_client(handler)
        await client.search_movies("fight club", page=2)

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/3/search/movie"
        assert request.url.params["query"] == "fight club"
        assert request.url.params["page"] == "2"
        assert request.url.params["include_adult"] == "false"
        assert request.url.params["language"] == "en-US"

    @pytest.mark.asyncio
    async def test_decodes_response(self):
        client = make_client(lambda request: httpx.Response(200, json=SEARCH_PAYLOAD))

        response = await client.search_movies("fight")

        assert response.total_results == 1
        movie = response.results[0]
        assert movie.id == 550
        assert movie.genre_ids == [18]
        assert movie.backdrop_path is None
        assert movie.poster_url == "https://image.tmdb.org/t/p/w500/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg"
        assert movie.backdrop_url is None
        assert movie.release_year == "1999"

    @pytest.mark.asyncio
    async def test_ignores_unknown_fields(self):
        payload = {**SEARCH_PAYLOAD, "unexpected": {"nested": True}}
        client = make_client(lambda request: httpx.Response(200, json=payload))

        response = await client.search_movies("fight")

        assert response.results[0].title == "Fight Club"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   "])
    async def test_blank_query_sends_nothing(self, query):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=SEARCH_PAYLOAD)

        client = make_client(handler)

        with pytest.raises(InvalidRequestError):
            await client.search_movies(query)
        assert calls == []

    @pytest.mark.asyncio
    async def test_page_below_one_rejected(self):
        client = make_client(lambda request: httpx.Response(200, json=SEARCH_PAYLOAD))

        with pytest.raises(InvalidRequestError):
            await client.search_movies("fight", page=0)


class TestGetMovieDetail:
    """Tests for TMDBClient.get_movie_detail."""

    @pytest.mark.asyncio
    async def test_decodes_detail(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=DETAIL_PAYLOAD)

        client = make_client(handler)
        detail = await client.get_movie_detail(550)

        assert seen[0].url.path == "/3/movie/550"
        assert detail.runtime == 139
        assert detail.backdrop_url == "https://image.tmdb.org/t/p/original/hZkgoQYus5vegHoetLkCJzb17zJ.jpg"
        assert detail.poster_url is None
        assert detail.overview == ""
        assert detail.genre_ids == [18]
        assert detail.production_companies[0].origin_country == "US"


class TestErrorMapping:
    """Tests that every failure surfaces as a typed client error."""

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        client = make_client(lambda request: httpx.Response(401, json={"status_code": 7}))

        with pytest.raises(UnauthorizedError):
            await client.search_movies("fight")

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404, json={"status_code": 34}))

        with pytest.raises(NotFoundError):
            await client.get_movie_detail(999999)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 429, 500, 503])
    async def test_other_status_codes(self, status_code):
        client = make_client(lambda request: httpx.Response(status_code))

        with pytest.raises(ServerError) as exc_info:
            await client.search_movies("fight")

        assert exc_info.value.status_code == status_code
        assert str(status_code) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(DecodingError):
            await client.search_movies("fight")

    @pytest.mark.asyncio
    async def test_wrong_shape(self):
        body = json.dumps({"page": 1, "results": [{"title": "missing id"}]})
        client = make_client(lambda request: httpx.Response(200, content=body.encode()))

        with pytest.raises(DecodingError) as exc_info:
            await client.search_movies("fight")

        assert exc_info.value.cause is not None

    @pytest.mark.asyncio
    async def test_connect_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError) as exc_info:
            await client.search_movies("fight")

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(NetworkError):
            await client.get_movie_detail(550)
