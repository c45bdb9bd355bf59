"""Shared fixtures for the cache test suite."""

import pytest

from evictcache.in_memory_cache import EvictionPolicy, create_cache, reset_in_memory_cache


@pytest.fixture(params=[EvictionPolicy.LRU, EvictionPolicy.LFU], ids=["lru", "lfu"])
def policy(request):
    return request.param


@pytest.fixture
def make_cache(policy):
    """Build a cache of the parametrized policy with Prometheus mirroring off."""
    def _make(capacity):
        return create_cache(policy, capacity, enable_metrics=False)
    return _make


@pytest.fixture(autouse=True)
def fresh_singleton():
    reset_in_memory_cache()
    yield
    reset_in_memory_cache()
