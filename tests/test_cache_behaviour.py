"""Behaviour shared by every eviction policy."""

import random
from collections import OrderedDict

import pytest

from evictcache.in_memory_cache import (
    CacheError,
    CacheInvariantError,
    EvictionPolicy,
    InvalidCapacityError,
    LFUCache,
    LRUCache
)
from evictcache.in_memory_cache.exceptions import ensure


class ReferenceLRU:
    """Straightforward OrderedDict model used as an oracle."""

    def __init__(self, capacity):
        self.capacity = capacity
        self.data = OrderedDict()

    def get(self, key):
        if key not in self.data:
            return None
        self.data.move_to_end(key)
        return self.data[key]

    def put(self, key, value):
        if self.capacity == 0:
            return
        if key in self.data:
            self.data[key] = value
            self.data.move_to_end(key)
            return
        if len(self.data) >= self.capacity:
            self.data.popitem(last=False)
        self.data[key] = value


class ReferenceLFU:
    """Linear-scan LFU model: lowest (frequency, last touch) loses."""

    def __init__(self, capacity):
        self.capacity = capacity
        self.data = {}
        self.frequency = {}
        self.touched = {}
        self.clock = 0

    def _touch(self, key):
        self.clock += 1
        self.frequency[key] += 1
        self.touched[key] = self.clock

    def get(self, key):
        if key not in self.data:
            return None
        self._touch(key)
        return self.data[key]

    def put(self, key, value):
        if self.capacity == 0:
            return
        if key in self.data:
            self.data[key] = value
            self._touch(key)
            return
        if len(self.data) >= self.capacity:
            victim = min(self.data, key=lambda k: (self.frequency[k], self.touched[k]))
            del self.data[victim]
            del self.frequency[victim]
            del self.touched[victim]
        self.clock += 1
        self.data[key] = value
        self.frequency[key] = 1
        self.touched[key] = self.clock


REFERENCE_MODELS = {
    EvictionPolicy.LRU: ReferenceLRU,
    EvictionPolicy.LFU: ReferenceLFU,
}


@pytest.mark.parametrize("capacity", [-1, -100, 2.5, "10", None, True])
@pytest.mark.parametrize("cache_class", [LRUCache, LFUCache])
def test_invalid_capacity_is_rejected(cache_class, capacity):
    with pytest.raises(InvalidCapacityError) as exc_info:
        cache_class(capacity, enable_metrics=False)
    assert exc_info.value.capacity == capacity


def test_invalid_capacity_is_a_value_error():
    with pytest.raises(ValueError):
        LRUCache(-1)


def test_zero_capacity_drops_inserts(make_cache):
    cache = make_cache(0)
    cache.put(1, "a")

    assert cache.get(1) is None
    assert len(cache) == 0
    assert cache.keys() == []
    cache.check_invariants()


def test_miss_returns_default(make_cache):
    cache = make_cache(2)
    assert cache.get("absent") is None
    assert cache.get("absent", "fallback") == "fallback"


def test_none_values_are_cached(make_cache):
    cache = make_cache(2)
    cache.put("k", None)

    assert "k" in cache
    assert cache.get("k", "fallback") is None


def test_capacity_one(make_cache):
    cache = make_cache(1)
    cache.put(1, "a")
    cache.put(2, "b")

    assert cache.get(1) is None
    assert cache.get(2) == "b"
    cache.check_invariants()


def test_inserting_past_capacity_evicts_first_key(make_cache):
    cache = make_cache(5)
    for key in range(6):
        cache.put(key, key * 10)

    assert 0 not in cache
    assert cache.size() == 5
    assert cache.stats().evictions == 1


def test_stats_track_hits_and_misses(make_cache):
    cache = make_cache(2)
    cache.put(1, "a")
    cache.get(1)
    cache.get(1)
    cache.get(2)
    cache.peek(1)

    stats = cache.stats()
    assert stats.hits == 2
    assert stats.misses == 1
    assert stats.size == 1
    assert stats.capacity == 2
    assert stats.hit_ratio == pytest.approx(2 / 3)


def test_policy_and_repr(make_cache, policy):
    cache = make_cache(3)
    assert cache.policy == policy
    assert cache.capacity == 3
    assert repr(cache).endswith("(capacity=3, size=0)")


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
@pytest.mark.parametrize("capacity", [1, 2, 5, 16])
def test_matches_reference_model(make_cache, policy, capacity, seed):
    rng = random.Random(seed)
    cache = make_cache(capacity)
    reference = REFERENCE_MODELS[policy](capacity)

    for step in range(2000):
        key = rng.randrange(capacity * 3)
        if rng.random() < 0.5:
            assert cache.get(key) == reference.get(key), f"step {step}: get({key})"
        else:
            cache.put(key, step)
            reference.put(key, step)

        assert cache.size() <= capacity
        assert set(cache.keys()) == set(reference.data)

    cache.check_invariants()


@pytest.mark.parametrize("seed", [7, 11])
def test_invariants_hold_after_every_call(make_cache, seed):
    rng = random.Random(seed)
    cache = make_cache(6)

    for step in range(600):
        key = rng.randrange(15)
        roll = rng.random()
        if roll < 0.45:
            cache.get(key)
        elif roll < 0.9:
            cache.put(key, step)
        elif roll < 0.98:
            cache.invalidate(key)
        else:
            cache.clear()
        cache.check_invariants()


def test_corrupted_lru_state_is_reported():
    cache = LRUCache(2, enable_metrics=False)
    cache.put(1, "a")
    cache._entries["ghost"] = "b"

    with pytest.raises(CacheInvariantError, match="sizes differ"):
        cache.check_invariants()


def test_stale_min_frequency_is_reported():
    cache = LFUCache(2, enable_metrics=False)
    cache.put(1, "a")
    cache._index._min_frequency = 7

    with pytest.raises(CacheInvariantError, match="min_frequency is stale"):
        cache.check_invariants()


def test_ensure_raises_without_assert_statements():
    assert ensure(True, "unused") is None
    with pytest.raises(CacheInvariantError, match="broken") as exc_info:
        ensure(False, "broken")
    assert isinstance(exc_info.value, CacheError)
