"""
Dictionary-based cache implementation for lib.cache, dood!

Entries are kept in insertion/recency order so the least recently used one
can be dropped when the cache is full. Expired entries are not swept in the
background: an entry older than its TTL is logically absent and is removed
by the read that notices it.
"""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from .interface import CacheInterface
from .types import Clock, K, KeyGenerator, V

logger = logging.getLogger(__name__)


class DictCache(CacheInterface[K, V]):
    """Thread-safe in-memory cache with TTL expiration and LRU eviction, dood!

    All mutations happen under a single RLock, so a read that evicts an
    expired entry can never interleave with a concurrent write and corrupt
    the entry count. None of the public coroutines await while holding the
    lock.

    Example:
        >>> cache = DictCache[str, dict](keyGenerator=StringKeyGenerator(), defaultTtl=900, maxSize=50)
        >>> await cache.set("forecast-51.5--0.12", payload)
        >>> cache.isValid("forecast-51.5--0.12")
        True
    """

    def __init__(
        self,
        keyGenerator: KeyGenerator[K],
        defaultTtl: int = 3600,
        maxSize: int = 1000,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize cache, dood!

        Args:
            keyGenerator: Converts keys of type K into strings
            defaultTtl: Default TTL in seconds, negative means entries never expire
            maxSize: Maximum number of entries kept at once
            clock: Time source used when no explicit ``now`` is given (default: time.time)

        Raises:
            ValueError: If maxSize is not positive
        """
        if maxSize <= 0:
            raise ValueError("maxSize must be positive, dood!")

        self._keyGenerator = keyGenerator
        self._defaultTtl = defaultTtl
        self._maxSize = maxSize
        self._clock: Clock = clock if clock is not None else time.time
        self._entries: "OrderedDict[str, Tuple[V, float]]" = OrderedDict()
        self._lock = threading.RLock()

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _isExpired(self, insertedAt: float, now: float, ttl: Optional[int]) -> bool:
        """Check if an entry inserted at insertedAt is stale at now"""
        effectiveTtl = self._defaultTtl if ttl is None else ttl
        if effectiveTtl < 0:
            return False
        return now - insertedAt > effectiveTtl

    async def get(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> Optional[V]:
        try:
            cacheKey = self._keyGenerator.generateKey(key)
            currentTime = self._now(now)

            with self._lock:
                entry = self._entries.get(cacheKey)
                if entry is None:
                    logger.debug(f"Cache miss for key: {cacheKey}")
                    return None

                value, insertedAt = entry
                if self._isExpired(insertedAt, currentTime, ttl):
                    del self._entries[cacheKey]
                    logger.debug(f"Removed expired entry: {cacheKey}")
                    return None

                self._entries.move_to_end(cacheKey)
                logger.debug(f"Cache hit for key: {cacheKey}")
                return value
        except Exception as e:
            logger.error(f"Failed to get cache entry {key}: {e}")
            return None

    async def set(self, key: K, value: V, now: Optional[float] = None) -> bool:
        try:
            cacheKey = self._keyGenerator.generateKey(key)
            insertedAt = self._now(now)

            with self._lock:
                self._entries.pop(cacheKey, None)
                while len(self._entries) >= self._maxSize:
                    evictedKey, _ = self._entries.popitem(last=False)
                    logger.debug(f"Evicted least recently used entry: {evictedKey}")
                self._entries[cacheKey] = (value, insertedAt)

            logger.debug(f"Stored data for key: {cacheKey}")
            return True
        except Exception as e:
            logger.error(f"Failed to set cache entry {key}: {e}")
            return False

    def isValid(self, key: K, ttl: Optional[int] = None, now: Optional[float] = None) -> bool:
        try:
            cacheKey = self._keyGenerator.generateKey(key)
        except Exception as e:
            logger.error(f"Failed to generate cache key for {key}: {e}")
            return False

        currentTime = self._now(now)
        with self._lock:
            entry = self._entries.get(cacheKey)
            if entry is None:
                return False
            return not self._isExpired(entry[1], currentTime, ttl)

    def getInsertedAt(self, key: K) -> Optional[float]:
        """Return insertion timestamp of the entry for key (expired or not), dood!"""
        cacheKey = self._keyGenerator.generateKey(key)
        with self._lock:
            entry = self._entries.get(cacheKey)
            return entry[1] if entry is not None else None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cleared all cache data")

    def getStats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "maxSize": self._maxSize,
                "defaultTtl": self._defaultTtl,
                "threadSafe": True,
            }
