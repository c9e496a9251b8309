"""In-process implementation of ResponseCache.

Entries live in a plain dict for the lifetime of the process. Each entry
expires independently, TTL seconds after insertion. Reads and writes are
single dict operations, so no locking is needed on the event loop.
"""

import time
from collections.abc import Callable
from typing import Any

from oked_assistant.config import settings
from oked_assistant.entities import CacheEntryEntity


class InMemoryResponseCache:
    """Dict-backed cache with per-entry expiry.

    This class satisfies the ResponseCache protocol through structural
    typing - no explicit inheritance needed.

    There is no size bound: entries are only dropped when they expire.
    """

    def __init__(
        self,
        ttl: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Default entry lifetime in seconds. Defaults to settings.
            clock: Monotonic time source, replaceable in tests.
        """
        self._ttl = ttl or settings.cache_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}

    @classmethod
    def create(cls, ttl: int | None = None) -> "InMemoryResponseCache":
        """Factory method to create InMemoryResponseCache with defaults.

        Args:
            ttl: Entry TTL in seconds. If None, uses settings.

        Returns:
            Configured InMemoryResponseCache
        """
        return cls(ttl=ttl)

    @property
    def ttl(self) -> int:
        return self._ttl

    def get(self, key: str) -> dict[str, Any] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None:
        expires_at = self._clock() + (ttl or self._ttl)
        self._entries[key] = CacheEntryEntity(value=value, expires_at=expires_at)

    def count_all(self) -> int:
        self._purge_expired()
        return len(self._entries)

    def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def health_check(self) -> bool:
        return True

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            del self._entries[key]
