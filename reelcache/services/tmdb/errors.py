"""Errors raised by the remote catalog client."""


class CatalogClientError(Exception):
    """Base exception for remote catalog errors."""

    message = "Remote catalog error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidRequestError(CatalogClientError):
    """The request could not be built (blank query, bad page, bad URL)."""

    message = "Invalid request"


class UnauthorizedError(CatalogClientError):
    """The API rejected the credentials (HTTP 401)."""

    message = "Unauthorized - check your TMDB access token"


class NotFoundError(CatalogClientError):
    """The requested resource does not exist (HTTP 404)."""

    message = "Movie not found"


class ServerError(CatalogClientError):
    """Any other non-success HTTP status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Server error with status code: {status_code}")


class DecodingError(CatalogClientError):
    """A success response whose body did not match the expected shape."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class NetworkError(CatalogClientError):
    """Transport failure: DNS, connect, TLS, timeout, reset."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Network error: {cause}")
