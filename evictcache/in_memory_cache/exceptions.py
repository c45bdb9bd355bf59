"""Custom exceptions for in-memory cache operations."""

from typing import Any


class CacheError(Exception):
    """Base class for errors raised by the in-memory cache."""


class InvalidEvictionPolicyError(CacheError, ValueError):
    """Raised when an invalid eviction policy is provided."""
    
    def __init__(self, policy: Any):
        self.policy = policy
        super().__init__(f"Invalid eviction policy: {policy}. Supported policies: LRU, LFU")


class InvalidCapacityError(CacheError, ValueError):
    """Raised when a cache is constructed with an unusable capacity."""
    
    def __init__(self, capacity: Any):
        self.capacity = capacity
        super().__init__(f"Invalid capacity: {capacity!r}. Must be a non-negative integer")


class CacheInvariantError(CacheError, AssertionError):
    """Raised by check_invariants() when a cache's internal structures disagree."""


def ensure(condition: bool, message: str) -> None:
    """
    Raise CacheInvariantError unless condition holds.
    
    Unlike an assert statement this still runs under python -O.
    """
    if not condition:
        raise CacheInvariantError(message)
