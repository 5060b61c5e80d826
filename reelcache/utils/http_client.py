"""Shared persistent httpx clients for external API calls.

A single pooled client per service avoids a new TCP connection and TLS
handshake for every catalog request.
"""

import httpx

from reelcache.constants import CONNECTIVITY_PROBE_TIMEOUT, HTTPX_TIMEOUT

_POOL_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
    keepalive_expiry=30,
)

_tmdb_client: httpx.AsyncClient | None = None
_probe_client: httpx.AsyncClient | None = None


def get_tmdb_client() -> httpx.AsyncClient:
    """Get persistent httpx client for TMDB API calls."""
    global _tmdb_client
    if _tmdb_client is None:
        _tmdb_client = httpx.AsyncClient(
            timeout=HTTPX_TIMEOUT,
            limits=_POOL_LIMITS,
            http2=False,
        )
    return _tmdb_client


def get_probe_client() -> httpx.AsyncClient:
    """Get persistent httpx client for connectivity probes (short timeout)."""
    global _probe_client
    if _probe_client is None:
        _probe_client = httpx.AsyncClient(
            timeout=CONNECTIVITY_PROBE_TIMEOUT,
            limits=_POOL_LIMITS,
            follow_redirects=True,
        )
    return _probe_client


async def close_all_clients() -> None:
    """Close all persistent httpx clients. Call during shutdown."""
    global _tmdb_client, _probe_client
    if _tmdb_client is not None:
        await _tmdb_client.aclose()
        _tmdb_client = None
    if _probe_client is not None:
        await _probe_client.aclose()
        _probe_client = None
