"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached response payload.

    Attributes:
        value: The cached response payload (JSON-serializable)
        expires_at: Monotonic clock reading after which the entry is stale
    """

    value: dict[str, Any]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
