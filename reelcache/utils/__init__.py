"""Utility modules for reelcache."""

from reelcache.utils.events import EventEmitter
from reelcache.utils.expiry import CACHE_TTL, is_expired, utcnow
from reelcache.utils.logging import LogContext, setup_logging
from reelcache.utils.metrics import metrics
from reelcache.utils.pagination import slice_page, total_pages

__all__ = [
    # Events
    "EventEmitter",
    # Expiry
    "CACHE_TTL",
    "is_expired",
    "utcnow",
    # Logging
    "LogContext",
    "setup_logging",
    # Metrics
    "metrics",
    # Pagination
    "slice_page",
    "total_pages",
]
