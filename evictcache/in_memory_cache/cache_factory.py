"""Factory for creating cache instances based on eviction policy."""

from typing import Union, Optional
import logging
import threading

import structlog

from evictcache.config import settings
from evictcache.in_memory_cache.eviction_policy.eviction_policy import EvictionPolicy
from evictcache.in_memory_cache.eviction_policy.lru_cache import LRUCache
from evictcache.in_memory_cache.eviction_policy.lfu_cache import LFUCache
from evictcache.in_memory_cache.base import BaseCache
from evictcache.in_memory_cache.exceptions import InvalidEvictionPolicyError
from evictcache.in_memory_cache.synchronized import SynchronizedCache

logger = structlog.wrap_logger(logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger)

# Singleton cache instance
_cache_instance: Optional[SynchronizedCache] = None
_cache_lock = threading.Lock()


def normalize_policy(eviction_policy: Union[EvictionPolicy, str]) -> EvictionPolicy:
    """
    Turn a policy name or enum member into an EvictionPolicy.

    Raises:
        InvalidEvictionPolicyError: If the policy is not supported
    """
    if isinstance(eviction_policy, EvictionPolicy):
        return eviction_policy
    if isinstance(eviction_policy, str):
        try:
            return EvictionPolicy(eviction_policy.strip().upper())
        except ValueError:
            raise InvalidEvictionPolicyError(eviction_policy) from None
    raise InvalidEvictionPolicyError(eviction_policy)


def create_cache(
    eviction_policy: Union[EvictionPolicy, str],
    capacity: int,
    enable_metrics: Optional[bool] = None
) -> BaseCache:
    """
    Create a cache instance based on the specified eviction policy.

    Args:
        eviction_policy: The eviction policy to use (LRU or LFU)
        capacity: Maximum number of keys the cache can hold
        enable_metrics: Mirror counters to Prometheus; defaults to settings.enable_metrics

    Returns:
        A cache instance implementing the BaseCache interface

    Raises:
        InvalidEvictionPolicyError: If the eviction policy is not supported
        InvalidCapacityError: If capacity is invalid
    """
    eviction_policy = normalize_policy(eviction_policy)

    if eviction_policy == EvictionPolicy.LRU:
        return LRUCache(capacity, enable_metrics=enable_metrics)
    return LFUCache(capacity, enable_metrics=enable_metrics)


def get_in_memory_cache(
    eviction_policy: Optional[Union[EvictionPolicy, str]] = None,
    capacity: Optional[int] = None
) -> SynchronizedCache:
    """
    Get the singleton in-memory cache instance.

    On first call, initializes the cache with the provided parameters.
    On subsequent calls, returns the same instance (parameters are ignored).
    The instance is wrapped in SynchronizedCache so it can be shared between threads.

    Args:
        eviction_policy: Optional eviction policy to use (LRU or LFU).
                        Defaults to settings.default_eviction_policy on first call.
        capacity: Optional maximum number of keys the cache can hold.
                  Defaults to settings.default_capacity on first call.

    Returns:
        The singleton synchronized cache

    Raises:
        InvalidEvictionPolicyError: If the eviction policy is not supported (only on first call)
        InvalidCapacityError: If capacity is invalid (only on first call)

    Example:
        # First call - initializes from settings
        cache = get_in_memory_cache()

        # First call - initializes with custom parameters
        cache = get_in_memory_cache(EvictionPolicy.LFU, 500)

        # Subsequent calls - returns same instance, parameters ignored
        cache2 = get_in_memory_cache(EvictionPolicy.LRU, 2000)  # Same instance as cache
    """
    global _cache_instance

    # Double-checked locking pattern for thread-safe singleton
    if _cache_instance is None:
        with _cache_lock:
            if _cache_instance is None:
                if eviction_policy is None:
                    eviction_policy = settings.default_eviction_policy
                if capacity is None:
                    capacity = settings.default_capacity

                _cache_instance = SynchronizedCache(create_cache(eviction_policy, capacity))
                logger.info(
                    "Initialized shared in-memory cache",
                    policy=_cache_instance.policy.value,
                    capacity=_cache_instance.capacity
                )

    return _cache_instance


def reset_in_memory_cache() -> None:
    """Drop the singleton so the next get_in_memory_cache() call builds a new one."""
    global _cache_instance

    with _cache_lock:
        _cache_instance = None
