"""LRU (Least Recently Used) cache implementation."""

from typing import Dict, Hashable, Iterator, List, Optional

from evictcache.in_memory_cache.base import BaseCache, EvictionIndex
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.exceptions import ensure
from evictcache.in_memory_cache.node_arena import KeyList, NodeArena


class LRUIndex(EvictionIndex):
    """
    Recency order kept in an arena-backed doubly linked list.

    The head of the list is the most recently used key and the tail the least
    recently used. A key -> handle table gives O(1) relocation.
    """

    def __init__(self):
        self._arena = NodeArena()
        self._order = KeyList(self._arena)
        self._handles: Dict[Hashable, int] = {}

    def record_access(self, key: Hashable) -> None:
        # Move to head (most recently used)
        self._order.move_to_front(self._handles[key])

    def insert_fresh(self, key: Hashable) -> None:
        self._handles[key] = self._order.push_front(key)

    def eviction_candidate(self) -> Optional[Hashable]:
        tail = self._order.back()
        if tail is None:
            return None
        return self._arena.key(tail)

    def evict(self) -> Hashable:
        """Remove the least recently used key (tail of the list)."""
        key = self._order.remove(self._order.back())
        del self._handles[key]
        return key

    def remove(self, key: Hashable) -> None:
        self._order.remove(self._handles.pop(key))

    def clear(self) -> None:
        self._arena = NodeArena()
        self._order = KeyList(self._arena)
        self._handles.clear()

    def keys(self) -> Iterator[Hashable]:
        return reversed(self._order)

    def check_invariants(self, expected_keys: List[Hashable]) -> None:
        ordered = list(self._order)
        ensure(len(ordered) == len(self._order), "list length does not match node count")
        ensure(len(set(ordered)) == len(ordered), "key linked more than once")
        ensure(set(ordered) == set(self._handles), "handle table out of sync with list")
        ensure(set(ordered) == set(expected_keys), "index keys differ from stored keys")
        for key, handle in self._handles.items():
            ensure(self._arena.key(handle) == key, f"stale handle for {key!r}")
        # head and tail sentinels plus one node per key
        ensure(len(self._arena) == len(ordered) + 2, "arena holds orphaned nodes")

    def __len__(self) -> int:
        return len(self._handles)


class LRUCache(BaseCache):
    """
    LRU (Least Recently Used) cache implementation.

    Uses a hash map for O(1) key lookup and a doubly linked list
    to maintain access order for O(1) eviction.
    """

    policy = EvictionPolicy.LRU

    def _create_index(self) -> LRUIndex:
        return LRUIndex()
