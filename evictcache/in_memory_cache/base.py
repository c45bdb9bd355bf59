"""Base cache interface for in-memory cache implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterator, List, Optional

import structlog

from evictcache.config import settings
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.exceptions import InvalidCapacityError, ensure
from evictcache.in_memory_cache.metrics import CacheCounters, CacheStats

logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)


class EvictionIndex(ABC):
    """
    Ordering structure that decides which key a full cache gives up.

    An index only tracks keys. Values live in the owning cache's entry store.
    """

    @abstractmethod
    def record_access(self, key: Hashable) -> None:
        """Note a hit or an overwrite of a key already in the index."""
        pass

    @abstractmethod
    def insert_fresh(self, key: Hashable) -> None:
        """Add a key that is not yet in the index at its freshest position."""
        pass

    @abstractmethod
    def eviction_candidate(self) -> Optional[Hashable]:
        """
        Get the key that would be evicted next.

        Returns:
            The next victim, or None if the index is empty
        """
        pass

    @abstractmethod
    def evict(self) -> Hashable:
        """
        Remove and return the eviction candidate.

        Only called by the owning cache right before insert_fresh().
        """
        pass

    @abstractmethod
    def remove(self, key: Hashable) -> None:
        """Remove an arbitrary key from the index."""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def keys(self) -> Iterator[Hashable]:
        """Iterate keys in eviction order, next victim first."""
        pass

    @abstractmethod
    def check_invariants(self, expected_keys: List[Hashable]) -> None:
        """
        Verify the index structure against the cache's stored keys.

        Raises:
            CacheInvariantError: If any structural invariant is broken
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class BaseCache(ABC):
    """
    Capacity-bounded key/value cache backed by a single eviction index.

    Not thread-safe. Wrap it in SynchronizedCache when it is shared
    between threads.
    """

    policy: EvictionPolicy

    def __init__(self, capacity: int, enable_metrics: Optional[bool] = None):
        """
        Initialize the cache.

        Args:
            capacity: Maximum number of keys the cache can hold. A capacity of 0
                      gives a cache that silently drops every insert.
            enable_metrics: Mirror hit/miss/eviction counts to Prometheus;
                            defaults to settings.enable_metrics

        Raises:
            InvalidCapacityError: If capacity is not a non-negative integer
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise InvalidCapacityError(capacity)

        if enable_metrics is None:
            enable_metrics = settings.enable_metrics

        self._capacity = capacity
        self._entries: Dict[Hashable, Any] = {}
        self._index = self._create_index()
        self._counters = CacheCounters(self.policy.value, enable_metrics)

        logger.info(
            "Created in-memory cache",
            policy=self.policy.value,
            capacity=capacity,
            metrics_enabled=enable_metrics
        )

    @abstractmethod
    def _create_index(self) -> EvictionIndex:
        """Build the eviction index for this policy."""
        pass

    def get(self, key: Hashable, default: Any = None) -> Any:
        """
        Get a value from the cache by key.

        A hit counts as an access for the eviction policy.

        Args:
            key: The key to look up
            default: Returned when the key is not cached

        Returns:
            The value associated with the key, or default if not found
        """
        try:
            value = self._entries[key]
        except KeyError:
            self._counters.record_miss()
            return default

        self._index.record_access(key)
        self._counters.record_hit()
        return value

    def put(self, key: Hashable, value: Any) -> None:
        """
        Set a key-value pair in the cache.

        Overwriting an existing key counts as an access. Inserting a new key
        into a full cache evicts the policy's candidate first.

        Args:
            key: The key to store
            value: The value to store
        """
        if key in self._entries:
            self._entries[key] = value
            self._index.record_access(key)
            return

        if self._capacity == 0:
            return

        if len(self._entries) >= self._capacity:
            victim = self._index.evict()
            del self._entries[victim]
            self._counters.record_eviction()

        self._entries[key] = value
        self._index.insert_fresh(key)

    def peek(self, key: Hashable, default: Any = None) -> Any:
        """Get a value without counting it as an access."""
        return self._entries.get(key, default)

    def invalidate(self, key: Hashable) -> bool:
        """
        Remove a key from the cache.

        Args:
            key: The key to remove

        Returns:
            True if the key was present
        """
        if key not in self._entries:
            return False

        self._index.remove(key)
        del self._entries[key]
        logger.debug("Invalidated cache key", policy=self.policy.value, key=key)
        return True

    def clear(self) -> None:
        """Clear all entries from the cache."""
        self._entries.clear()
        self._index.clear()
        logger.debug("Cleared cache", policy=self.policy.value)

    def keys(self) -> List[Hashable]:
        """Get the cached keys in eviction order, next victim first."""
        return list(self._index.keys())

    def size(self) -> int:
        """
        Get the current number of keys in the cache.

        Returns:
            The number of keys currently in the cache
        """
        return len(self._entries)

    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._counters.hits,
            misses=self._counters.misses,
            evictions=self._counters.evictions,
            size=len(self._entries),
            capacity=self._capacity
        )

    def check_invariants(self) -> None:
        """
        Verify capacity and index consistency.

        Raises:
            CacheInvariantError: If the cache state is inconsistent
        """
        ensure(len(self._entries) <= self._capacity, "size exceeds capacity")
        ensure(len(self._index) == len(self._entries), "index and entry store sizes differ")
        self._index.check_invariants(list(self._entries))

    @property
    def capacity(self) -> int:
        """Get the maximum number of keys the cache can hold."""
        return self._capacity

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self._entries)})"
