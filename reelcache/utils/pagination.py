"""Page reconstruction over a flat, already-ordered result set.

The cache stores individual movies, never page boundaries, so "page N" of a
query is always derived by slicing the full matching set.
"""

import math
from collections.abc import Sequence
from typing import TypeVar

from reelcache.constants import DEFAULT_PAGE_SIZE

T = TypeVar("T")


def total_pages(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed for ``total`` items (``ceil(total / page_size)``)."""
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(total / page_size) if total > 0 else 0


def page_bounds(page: int, page_size: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """Return the ``[start, end)`` slice indices for a 1-based page number."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    start = (page - 1) * page_size
    return start, start + page_size


def slice_page(items: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """Return the items of ``page``; an empty list when the page is past the end."""
    start, end = page_bounds(page, page_size)
    if start >= len(items):
        return []
    return list(items[start:min(end, len(items))])
