"""Redis implementation of ResponseCache.

Lets several serverless instances share one cache. Payloads are stored as
JSON strings under ``<prefix>:<key>`` and expire through Redis ``EX``.
"""

import json
from typing import Any

import redis

from oked_assistant.config import get_redis_client, settings


class RedisResponseCache:
    """Redis-backed cache.

    This class satisfies the ResponseCache protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the Redis cache.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Namespace for every key.
            ttl: Default entry lifetime in seconds.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> "RedisResponseCache":
        """Factory method to create RedisResponseCache with defaults.

        Args:
            key_prefix: Key namespace. If None, uses settings.
            ttl: Entry TTL in seconds. If None, uses settings.

        Returns:
            Configured RedisResponseCache
        """
        return cls(key_prefix=key_prefix, ttl=ttl)

    @property
    def ttl(self) -> int:
        return self._ttl

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> dict[str, Any] | None:
        raw = self._client.get(self._key(key))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None:
        self._client.set(
            self._key(key),
            json.dumps(value, ensure_ascii=False),
            ex=ttl or self._ttl,
        )

    def count_all(self) -> int:
        count = 0
        for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    def clear_all(self) -> int:
        count = 0
        for key in self._client.scan_iter(match=f"{self._prefix}:*"):
            if self._client.delete(key):
                count += 1
        return count

    def health_check(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
