"""In-process counters for cache and refresh observability."""

from collections import defaultdict
from dataclasses import dataclass, field


@dataclass
class Counter:
    """Simple counter metric."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    _values: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        """Increment the counter."""
        label_values = tuple(labels.get(l, "") for l in self.labels)
        self._values[label_values] += amount

    def get(self, **labels: str) -> float:
        """Get counter value."""
        label_values = tuple(labels.get(l, "") for l in self.labels)
        return self._values[label_values]

    def reset(self) -> None:
        self._values.clear()


class CacheMetrics:
    """Counters for the offline-first repository."""

    def __init__(self) -> None:
        self.cache_hits = Counter(
            "reelcache_cache_hits_total",
            "Reads answered from the local cache",
            labels=("operation",),
        )
        self.cache_misses = Counter(
            "reelcache_cache_misses_total",
            "Reads that found nothing usable in the local cache",
            labels=("operation",),
        )
        self.remote_fetches = Counter(
            "reelcache_remote_fetches_total",
            "Foreground remote catalog fetches",
            labels=("operation", "outcome"),
        )
        self.background_refreshes = Counter(
            "reelcache_background_refreshes_total",
            "Background cache refreshes",
            labels=("operation", "outcome"),
        )
        self.storage_errors = Counter(
            "reelcache_storage_errors_total",
            "Local cache failures degraded to a miss or ignored",
            labels=("operation",),
        )

    @property
    def counters(self) -> tuple[Counter, ...]:
        return (
            self.cache_hits,
            self.cache_misses,
            self.remote_fetches,
            self.background_refreshes,
            self.storage_errors,
        )

    def snapshot(self) -> dict[str, dict[tuple, float]]:
        """Return a plain copy of every counter's values."""
        return {c.name: dict(c._values) for c in self.counters}

    def reset(self) -> None:
        for counter in self.counters:
            counter.reset()


# Global metrics instance
metrics = CacheMetrics()
