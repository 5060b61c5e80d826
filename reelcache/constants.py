"""Application constants - centralized configuration values."""

# =============================================================================
# Cache freshness
# =============================================================================
CACHE_TTL_SECONDS = 3600  # 1 hour, applies to cached movies and details

# =============================================================================
# Pagination
# =============================================================================
DEFAULT_PAGE_SIZE = 20  # Matches TMDB's fixed page size

# =============================================================================
# Search session
# =============================================================================
SEARCH_DEBOUNCE_SECONDS = 0.5

# =============================================================================
# API Timeouts (in seconds)
# =============================================================================
HTTPX_TIMEOUT = 10.0
CONNECTIVITY_PROBE_TIMEOUT = 5.0
BACKGROUND_SHUTDOWN_TIMEOUT = 5.0

# =============================================================================
# External API URLs
# =============================================================================
TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

# Image sizes used for derived URLs
POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"
FAVORITE_POSTER_SIZE = "w200"
