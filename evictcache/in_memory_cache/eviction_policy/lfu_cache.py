"""LFU (Least Frequently Used) cache implementation."""

from typing import Dict, Hashable, Iterator, List, Optional

from evictcache.in_memory_cache.base import BaseCache, EvictionIndex
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.exceptions import ensure
from evictcache.in_memory_cache.node_arena import KeyList, NodeArena


class LFUIndex(EvictionIndex):
    """
    Frequency buckets with recency order inside each bucket.

    Every key has an access count starting at 1. Keys sharing a count live in
    one bucket, oldest first, so the front of the min_frequency bucket is
    both the least frequently used key and, among ties, the one touched
    longest ago. All buckets share a single node arena.
    """

    def __init__(self):
        self._arena = NodeArena()
        self._key_frequency: Dict[Hashable, int] = {}
        self._handles: Dict[Hashable, int] = {}
        # Frequency buckets: frequency -> KeyList, only non-empty buckets are kept
        self._frequency_buckets: Dict[int, KeyList] = {}
        self._min_frequency: Optional[int] = None

    @property
    def min_frequency(self) -> Optional[int]:
        return self._min_frequency

    def frequency(self, key: Hashable) -> Optional[int]:
        return self._key_frequency.get(key)

    def record_access(self, key: Hashable) -> None:
        """
        Move a key one frequency bucket up.

        Args:
            key: A key already held by the index
        """
        frequency = self._key_frequency[key]
        self._detach(key, frequency)
        if frequency not in self._frequency_buckets and frequency == self._min_frequency:
            self._min_frequency = frequency + 1

        frequency += 1
        self._key_frequency[key] = frequency
        self._attach(key, frequency)

    def insert_fresh(self, key: Hashable) -> None:
        self._key_frequency[key] = 1
        self._attach(key, 1)
        # Frequency 1 is always the floor
        self._min_frequency = 1

    def eviction_candidate(self) -> Optional[Hashable]:
        if self._min_frequency is None:
            return None
        bucket = self._frequency_buckets[self._min_frequency]
        return self._arena.key(bucket.front())

    def evict(self) -> Hashable:
        """
        Remove the oldest key of the min_frequency bucket.

        When that bucket empties the cursor is left unset; the insert_fresh()
        call that always follows an eviction resets it to 1.
        """
        frequency = self._min_frequency
        key = self._arena.key(self._frequency_buckets[frequency].front())
        self._detach(key, frequency)
        del self._key_frequency[key]
        if frequency not in self._frequency_buckets:
            self._min_frequency = None
        return key

    def remove(self, key: Hashable) -> None:
        """
        Remove an arbitrary key.

        If the key was the last one at min_frequency the cursor is recomputed
        from the remaining buckets, which costs one pass over the distinct
        frequencies.
        """
        frequency = self._key_frequency.pop(key)
        self._detach(key, frequency)
        if frequency == self._min_frequency and frequency not in self._frequency_buckets:
            if self._frequency_buckets:
                self._min_frequency = min(self._frequency_buckets)
            else:
                self._min_frequency = None

    def clear(self) -> None:
        self._arena = NodeArena()
        self._key_frequency.clear()
        self._handles.clear()
        self._frequency_buckets.clear()
        self._min_frequency = None

    def keys(self) -> Iterator[Hashable]:
        for frequency in sorted(self._frequency_buckets):
            yield from self._frequency_buckets[frequency]

    def _attach(self, key: Hashable, frequency: int) -> None:
        """Append a key to the most recent end of a frequency bucket."""
        bucket = self._frequency_buckets.get(frequency)
        if bucket is None:
            bucket = KeyList(self._arena)
            self._frequency_buckets[frequency] = bucket
        self._handles[key] = bucket.push_back(key)

    def _detach(self, key: Hashable, frequency: int) -> None:
        """Unlink a key from its bucket, dropping the bucket if it empties."""
        bucket = self._frequency_buckets[frequency]
        bucket.remove(self._handles.pop(key))
        if bucket.is_empty():
            bucket.discard()
            del self._frequency_buckets[frequency]

    def check_invariants(self, expected_keys: List[Hashable]) -> None:
        seen = []
        for frequency, bucket in self._frequency_buckets.items():
            ensure(not bucket.is_empty(), f"empty bucket kept for frequency {frequency}")
            for key in bucket:
                ensure(self._key_frequency.get(key) == frequency, f"{key!r} sits in the wrong bucket")
                seen.append(key)

        ensure(len(set(seen)) == len(seen), "key linked more than once")
        ensure(set(seen) == set(self._key_frequency), "frequency map out of sync with buckets")
        ensure(set(seen) == set(self._handles), "handle table out of sync with buckets")
        ensure(set(seen) == set(expected_keys), "index keys differ from stored keys")
        ensure(all(frequency >= 1 for frequency in self._key_frequency.values()), "frequency below 1")

        if self._frequency_buckets:
            ensure(self._min_frequency == min(self._frequency_buckets), "min_frequency is stale")
        else:
            ensure(self._min_frequency is None, "min_frequency set on an empty index")

        # two sentinels per bucket plus one node per key
        ensure(len(self._arena) == len(seen) + 2 * len(self._frequency_buckets), "arena holds orphaned nodes")

    def __len__(self) -> int:
        return len(self._key_frequency)


class LFUCache(BaseCache):
    """
    LFU (Least Frequently Used) cache implementation.

    Uses a hash map for O(1) key lookup and frequency buckets with
    doubly linked lists to maintain frequency order for O(1) eviction.
    Ties on frequency are broken by recency: the key touched longest ago
    at the lowest frequency goes first.
    """

    policy = EvictionPolicy.LFU

    def _create_index(self) -> LFUIndex:
        return LFUIndex()

    def frequency(self, key: Hashable) -> Optional[int]:
        """
        Get the access count of a cached key without touching it.

        Returns:
            The key's frequency, or None if it is not cached
        """
        return self._index.frequency(key)
