"""Hit/miss statistics and cost savings for the semantic cache."""

import threading
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time read of CacheStats."""

    hits: int
    misses: int
    total_savings: float
    last_event: str | None
    avg_response_time: float
    avg_cached_response_time: float

    @property
    def total_queries(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Hit rate in percent, rounded to one decimal."""
        return _hit_rate(self.hits, self.misses)


def _hit_rate(hits: int, misses: int) -> float:
    total = hits + misses
    if total == 0:
        return 0.0
    return round(hits / total * 100, 1)


def _average(samples: list[float]) -> float:
    if not samples:
        return 0.0
    return round(sum(samples) / len(samples), 2)


class CacheStats:
    """
    Thread-safe counters for cache performance monitoring.

    Tracks hits, misses, cumulative cost savings, the kind of the last
    event, and response-time samples for both the uncached (miss) and
    cached (hit) paths. Times are in milliseconds.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._total_savings = 0.0
        self._last_event: str | None = None
        self._response_times: list[float] = []
        self._cached_response_times: list[float] = []

    def record_hit(self, saved_cost: float = 0.0, response_time: float | None = None) -> None:
        """Record a cache hit."""
        with self._lock:
            self._hits += 1
            self._total_savings += saved_cost
            self._last_event = "hit"
            if response_time is not None:
                self._cached_response_times.append(response_time)

    def record_miss(self, response_time: float | None = None) -> None:
        """Record a cache miss."""
        with self._lock:
            self._misses += 1
            self._last_event = "miss"
            if response_time is not None:
                self._response_times.append(response_time)

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    @property
    def total_savings(self) -> float:
        with self._lock:
            return self._total_savings

    @property
    def last_event(self) -> str | None:
        with self._lock:
            return self._last_event

    @property
    def total_queries(self) -> int:
        with self._lock:
            return self._hits + self._misses

    @property
    def hit_rate(self) -> float:
        """Hit rate in percent, rounded to one decimal (0.0 before any query)."""
        with self._lock:
            return _hit_rate(self._hits, self._misses)

    @property
    def avg_response_time(self) -> float:
        with self._lock:
            return _average(self._response_times)

    @property
    def avg_cached_response_time(self) -> float:
        with self._lock:
            return _average(self._cached_response_times)

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(
                hits=self._hits,
                misses=self._misses,
                total_savings=self._total_savings,
                last_event=self._last_event,
                avg_response_time=_average(self._response_times),
                avg_cached_response_time=_average(self._cached_response_times),
            )

    def to_dict(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with counters, hit_rate (percent), savings and
            average response times in milliseconds
        """
        snap = self.snapshot()
        return {
            "hits": snap.hits,
            "misses": snap.misses,
            "total_queries": snap.total_queries,
            "hit_rate": snap.hit_rate,
            "savings": f"${snap.total_savings:.2f}",
            "total_savings": snap.total_savings,
            "last_event": snap.last_event,
            "last_hit": snap.last_event == "hit",
            "avg_response_time_ms": snap.avg_response_time,
            "avg_cached_response_time_ms": snap.avg_cached_response_time,
        }

    def report(self) -> str:
        """Render a human-readable multi-line summary."""
        with self._lock:
            lines = [
                f"Total queries: {self._hits + self._misses}",
                f"Cache hits: {self._hits}",
                f"Cache misses: {self._misses}",
                f"Hit rate: {_hit_rate(self._hits, self._misses)}%",
                f"Total savings: ${self._total_savings:.2f}",
            ]
            if self._response_times:
                lines.append(f"Avg API response time: {_average(self._response_times)}ms")
            if self._cached_response_times:
                lines.append(
                    f"Avg cached response time: {_average(self._cached_response_times)}ms"
                )
            return "\n".join(lines)

    def reset(self) -> None:
        """Reset all statistics."""
        with self._lock:
            self._hits = 0
            self._misses = 0
            self._total_savings = 0.0
            self._last_event = None
            self._response_times = []
            self._cached_response_times = []
