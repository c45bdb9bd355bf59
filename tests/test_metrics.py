from prometheus_client import REGISTRY

from evictcache.in_memory_cache import LFUCache, LRUCache


def sample(name, policy):
    return REGISTRY.get_sample_value(name, {"policy": policy}) or 0.0


def test_enabled_metrics_are_exported():
    before_hits = sample("evictcache_hits_total", "LRU")
    before_misses = sample("evictcache_misses_total", "LRU")
    before_evictions = sample("evictcache_evictions_total", "LRU")

    cache = LRUCache(1, enable_metrics=True)
    cache.put(1, "a")
    cache.get(1)
    cache.get(2)
    cache.put(2, "b")

    assert sample("evictcache_hits_total", "LRU") == before_hits + 1
    assert sample("evictcache_misses_total", "LRU") == before_misses + 1
    assert sample("evictcache_evictions_total", "LRU") == before_evictions + 1


def test_disabled_metrics_only_count_locally():
    before = sample("evictcache_hits_total", "LFU")

    cache = LFUCache(2, enable_metrics=False)
    cache.put(1, "a")
    cache.get(1)

    assert sample("evictcache_hits_total", "LFU") == before
    assert cache.stats().hits == 1


def test_hit_ratio_before_any_lookup():
    assert LRUCache(1, enable_metrics=False).stats().hit_ratio == 0.0
