"""
Core type definitions and protocols for lib.cache, dood!
"""

from typing import Callable, Protocol, TypeVar

# Type variables for generic cache operations, dood!
K = TypeVar("K")  # Key type
V = TypeVar("V")  # Value type
T = TypeVar("T", contravariant=True)  # Generic object type for key generators

Clock = Callable[[], float]
"""Returns current time in seconds since epoch"""


class KeyGenerator(Protocol[T]):
    """
    Protocol for generating cache keys from objects, dood!

    Implementations must be deterministic: the same object always yields
    the same key, and objects describing different resources must never
    share a key.

    Example:
        >>> class StringKeyGenerator(KeyGenerator[str]):
        ...     def generateKey(self, obj: str) -> str:
        ...         return obj
    """

    def generateKey(self, obj: T) -> str:
        """
        Generate string cache key from object, dood!

        Args:
            obj: The object to convert to a cache key

        Returns:
            str: A string representation suitable for use as a cache key
        """
        ...
