"""Thread-safe wrapper around a single in-memory cache."""

import threading
from typing import Any, Hashable, List, Optional

from evictcache.in_memory_cache.base import BaseCache
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.metrics import CacheStats


class SynchronizedCache:
    """
    Serializes every call on a wrapped cache behind one re-entrant lock.

    The lock is held for the whole call, so no caller can observe the entry
    store and eviction index halfway through an update.
    """

    def __init__(self, cache: BaseCache):
        self._cache = cache
        self._lock = threading.RLock()

    @property
    def wrapped(self) -> BaseCache:
        """The underlying, unsynchronized cache."""
        return self._cache

    @property
    def lock(self):
        """Hold this to run several calls as one atomic step."""
        return self._lock

    @property
    def policy(self) -> EvictionPolicy:
        return self._cache.policy

    @property
    def capacity(self) -> int:
        return self._cache.capacity

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._cache.get(key, default)

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._cache.put(key, value)

    def peek(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            return self._cache.peek(key, default)

    def invalidate(self, key: Hashable) -> bool:
        with self._lock:
            return self._cache.invalidate(key)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def keys(self) -> List[Hashable]:
        with self._lock:
            return self._cache.keys()

    def size(self) -> int:
        with self._lock:
            return self._cache.size()

    def stats(self) -> CacheStats:
        with self._lock:
            return self._cache.stats()

    def frequency(self, key: Hashable) -> Optional[int]:
        """
        Get a key's access count from an LFU cache.

        Raises:
            AttributeError: If the wrapped cache does not track frequencies
        """
        with self._lock:
            return self._cache.frequency(key)

    def check_invariants(self) -> None:
        with self._lock:
            self._cache.check_invariants()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __repr__(self) -> str:
        return f"SynchronizedCache({self._cache!r})"
