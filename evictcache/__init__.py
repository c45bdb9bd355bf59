"""Capacity-bounded in-process key/value cache with LRU and LFU eviction."""

import logging

from evictcache.in_memory_cache import (
    BaseCache,
    CacheError,
    CacheInvariantError,
    CacheStats,
    EvictionPolicy,
    InvalidCapacityError,
    InvalidEvictionPolicyError,
    LFUCache,
    LRUCache,
    SynchronizedCache,
    create_cache,
    get_in_memory_cache,
    reset_in_memory_cache
)
from evictcache.logging_config import configure_logging

__version__ = "1.0.0"

# Silent until the embedding application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BaseCache",
    "CacheError",
    "CacheInvariantError",
    "CacheStats",
    "EvictionPolicy",
    "InvalidCapacityError",
    "InvalidEvictionPolicyError",
    "LFUCache",
    "LRUCache",
    "SynchronizedCache",
    "configure_logging",
    "create_cache",
    "get_in_memory_cache",
    "reset_in_memory_cache",
]
