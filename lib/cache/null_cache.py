"""
Null cache implementation for lib.cache, dood!

This module provides a no-op cache implementation that implements the
CacheInterface but doesn't actually cache anything. Useful for testing
scenarios where caching is not needed or should be disabled, dood!
"""

from typing import Any, Dict, Optional

from .interface import CacheInterface
from .types import K, V


class NullCache(CacheInterface[K, V]):
    """No-op cache that never stores anything, dood!

    Useful for:
    - Testing without cache side effects
    - Disabling cache in production
    - Benchmarking cache impact
    """

    async def get(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> Optional[V]:
        """Always return None (cache miss), dood!"""
        return None

    async def set(self, key: K, value: V, now: Optional[float] = None) -> bool:
        """Do nothing (don't cache), but pretend to succeed, dood!"""
        return True

    def isValid(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> bool:
        return False

    def clear(self) -> None:
        pass

    def getStats(self) -> Dict[str, Any]:
        """
        Return cache statistics indicating cache is disabled, dood!

        Returns:
            Dict[str, Any]: Dictionary with cache disabled indicator
        """
        return {"enabled": False, "entries": 0}
