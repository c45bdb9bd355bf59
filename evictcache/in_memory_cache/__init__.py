"""In-memory cache service with support for multiple eviction policies."""

from evictcache.in_memory_cache.cache_factory import (
    create_cache,
    get_in_memory_cache,
    normalize_policy,
    reset_in_memory_cache
)
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.base import BaseCache, EvictionIndex
from evictcache.in_memory_cache.eviction_policy.lru_cache import LRUCache, LRUIndex
from evictcache.in_memory_cache.eviction_policy.lfu_cache import LFUCache, LFUIndex
from evictcache.in_memory_cache.metrics import CacheStats
from evictcache.in_memory_cache.node_arena import KeyList, NodeArena
from evictcache.in_memory_cache.synchronized import SynchronizedCache
from evictcache.in_memory_cache.exceptions import (
    CacheError,
    CacheInvariantError,
    InvalidCapacityError,
    InvalidEvictionPolicyError
)

__all__ = [
    "create_cache",
    "get_in_memory_cache",
    "normalize_policy",
    "reset_in_memory_cache",
    "EvictionPolicy",
    "BaseCache",
    "EvictionIndex",
    "LRUCache",
    "LRUIndex",
    "LFUCache",
    "LFUIndex",
    "CacheStats",
    "KeyList",
    "NodeArena",
    "SynchronizedCache",
    "CacheError",
    "CacheInvariantError",
    "InvalidCapacityError",
    "InvalidEvictionPolicyError",
]
