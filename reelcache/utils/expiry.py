"""Cache freshness predicate shared by every read path and the sweep."""

from datetime import UTC, datetime, timedelta

from reelcache.constants import CACHE_TTL_SECONDS

CACHE_TTL = timedelta(seconds=CACHE_TTL_SECONDS)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes (SQLite drops tzinfo) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_expired(timestamp: datetime, now: datetime, ttl: timedelta = CACHE_TTL) -> bool:
    """Return True when a record stamped at ``timestamp`` is older than ``ttl``.

    The boundary is inclusive of freshness: a record read exactly ``ttl`` after
    it was written is still served.
    """
    return as_utc(now) - as_utc(timestamp) > ttl
