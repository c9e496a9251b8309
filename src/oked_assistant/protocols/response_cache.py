"""Response cache protocol.

Defines the interface for any backend that stores response payloads
under a string key with a time-based expiry.

Implementations:
- In-process dictionary (default)
- Redis
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseCache(Protocol):
    """Protocol for response cache backends.

    Expiry is time based only: there is no size-based eviction.

    Example:
        ```python
        cache: ResponseCache = InMemoryResponseCache()
        cache: ResponseCache = RedisResponseCache.create()
        ```
    """

    @property
    def ttl(self) -> int:
        """Default lifetime of an entry in seconds."""
        ...

    def get(self, key: str) -> dict[str, Any] | None:
        """Fetch a live entry.

        Args:
            key: The cache key

        Returns:
            The stored payload, or None if absent or expired
        """
        ...

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None:
        """Store a payload.

        Args:
            key: The cache key
            value: JSON-serializable payload
            ttl: Lifetime in seconds from now. Defaults to the cache TTL.
        """
        ...

    def count_all(self) -> int:
        """Count live entries.

        Returns:
            Number of entries that have not expired
        """
        ...

    def clear_all(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries deleted
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
