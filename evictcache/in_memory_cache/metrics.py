"""Hit/miss/eviction accounting for in-memory caches."""

from dataclasses import dataclass

from prometheus_client import Counter

# Prometheus metrics
CACHE_HITS = Counter('evictcache_hits_total', 'Total cache hits', ['policy'])
CACHE_MISSES = Counter('evictcache_misses_total', 'Total cache misses', ['policy'])
CACHE_EVICTIONS = Counter('evictcache_evictions_total', 'Total capacity evictions', ['policy'])


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time snapshot of a cache's counters."""
    hits: int
    misses: int
    evictions: int
    size: int
    capacity: int

    @property
    def hit_ratio(self) -> float:
        """Fraction of lookups that were hits, 0.0 before any lookup."""
        lookups = self.hits + self.misses
        if lookups == 0:
            return 0.0
        return self.hits / lookups


class CacheCounters:
    """Per-cache counters, mirrored to Prometheus when enabled."""

    __slots__ = ("hits", "misses", "evictions", "_hits_metric", "_misses_metric", "_evictions_metric")

    def __init__(self, policy: str, enable_metrics: bool):
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        if enable_metrics:
            self._hits_metric = CACHE_HITS.labels(policy=policy)
            self._misses_metric = CACHE_MISSES.labels(policy=policy)
            self._evictions_metric = CACHE_EVICTIONS.labels(policy=policy)
        else:
            self._hits_metric = None
            self._misses_metric = None
            self._evictions_metric = None

    def record_hit(self) -> None:
        self.hits += 1
        if self._hits_metric is not None:
            self._hits_metric.inc()

    def record_miss(self) -> None:
        self.misses += 1
        if self._misses_metric is not None:
            self._misses_metric.inc()

    def record_eviction(self) -> None:
        self.evictions += 1
        if self._evictions_metric is not None:
            self._evictions_metric.inc()

