"""
Abstract cache interface for lib.cache, dood!

This module defines the generic CacheInterface that all cache implementations
must follow. It provides a consistent API for different cache backends
while maintaining type safety through Python generics, dood!
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional

from .types import K, V


class CacheInterface(ABC, Generic[K, V]):
    """
    Generic cache interface for any key-value storage, dood!

    All time-dependent operations accept an optional ``now`` timestamp
    (seconds since epoch). When omitted, the implementation uses its own
    clock. Passing ``now`` explicitly makes TTL behaviour deterministic,
    which the weather orchestrator tests rely on.

    Type Parameters:
        K: The key type (converted to string by a KeyGenerator)
        V: The value type (any type)

    Example:
        >>> cache = DictCache[str, dict](keyGenerator=StringKeyGenerator(), defaultTtl=900)
        >>> await cache.set("current-51.5--0.12", {"temp": 12.3})
        >>> data = await cache.get("current-51.5--0.12")
        >>> stats = cache.getStats()
    """

    @abstractmethod
    async def get(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> Optional[V]:
        """
        Get cached value by key, dood!

        Returns None if the key is not found or the cached value has expired.
        An expired entry is removed from the cache as a side effect.

        Args:
            key: The cache key to retrieve
            ttl: Optional TTL override in seconds. Negative means "never expires".
            now: Optional current timestamp, defaults to the cache clock

        Returns:
            Optional[V]: The cached value if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def set(self, key: K, value: V, now: Optional[float] = None) -> bool:
        """
        Store value in cache, dood!

        Replaces any existing entry for the same key and records ``now``
        as its insertion time.

        Args:
            key: The cache key to store the value under
            value: The value to cache
            now: Optional insertion timestamp, defaults to the cache clock

        Returns:
            bool: True if the value was successfully stored, False otherwise
        """
        pass

    @abstractmethod
    def isValid(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> bool:
        """
        Check whether a fresh entry exists for key without touching it, dood!

        Unlike get() this never evicts anything and does not update recency.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """
        Clear all cached data, dood!

        This operation is synchronous and should complete immediately.
        """
        pass

    @abstractmethod
    def getStats(self) -> Dict[str, Any]:
        """
        Get cache statistics, dood!

        Common keys are ``entries``, ``maxSize`` and ``defaultTtl``; the
        exact set depends on the implementation.

        Returns:
            Dict[str, Any]: Dictionary containing cache statistics
        """
        pass
