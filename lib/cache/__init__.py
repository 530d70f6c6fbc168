"""
lib.cache - Generic cache library, dood!

Core Components:
- CacheInterface: Abstract base class for all cache implementations
- KeyGenerator: Protocol for generating cache keys from objects
- DictCache: Thread-safe dictionary cache with TTL expiration and LRU eviction
- NullCache: No-op cache for testing and debugging

Example Usage:
    >>> from lib.cache import DictCache, StringKeyGenerator
    >>>
    >>> cache = DictCache[str, dict](
    ...     keyGenerator=StringKeyGenerator(),
    ...     defaultTtl=900,
    ...     maxSize=50
    ... )
    >>> await cache.set("current-51.5--0.12", {"temp": 12.3})
    >>> data = await cache.get("current-51.5--0.12")
"""

from .dict_cache import DictCache
from .interface import CacheInterface
from .key_generator import StringKeyGenerator
from .null_cache import NullCache
from .types import Clock, K, KeyGenerator, T, V

__all__ = [
    # Core types
    "KeyGenerator",
    "Clock",
    "K",
    "V",
    "T",
    # Interfaces
    "CacheInterface",
    # Implementations
    "DictCache",
    "NullCache",
    # Key generators
    "StringKeyGenerator",
]
