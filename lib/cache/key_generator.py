"""
Built-in key generator implementations for lib.cache, dood!

Resource-specific generators live next to the resources they describe
(see lib.openweathermap.endpoints.EndpointKeyGenerator).
"""

from .types import KeyGenerator


class StringKeyGenerator(KeyGenerator[str]):
    """
    Pass-through key generator for string keys, dood!

    Example:
        >>> generator = StringKeyGenerator()
        >>> generator.generateKey("current-51.5--0.12")
        'current-51.5--0.12'

    Note:
        This generator validates that the input is actually a string.
        If you pass a non-string value, it will raise a TypeError, dood!
    """

    def generateKey(self, obj: str) -> str:
        """
        Generate cache key from string input, dood!

        Raises:
            TypeError: If obj is not a string
        """
        if not isinstance(obj, str):
            raise TypeError(f"StringKeyGenerator expects string input, got {type(obj).__name__}, dood!")

        return obj
