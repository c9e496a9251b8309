import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Provider
    anthropic_api_key: str | None = os.getenv("ANTHROPIC_API_KEY") or None
    anthropic_base_url: str = os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com")
    anthropic_version: str = os.getenv("ANTHROPIC_VERSION", "2023-06-01")
    provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "30"))

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")  # or "redis"
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "oked_assistant")

    # Redis (only used when CACHE_BACKEND=redis)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # HTTP surface
    frontend_url: str | None = os.getenv("FRONTEND_URL") or None
    environment: str = os.getenv("ENVIRONMENT", "development")
    rate_limit_window: int = int(os.getenv("RATE_LIMIT_WINDOW", "900"))  # 15 minutes
    rate_limit_max: int = int(os.getenv("RATE_LIMIT_MAX", "100"))
    max_body_bytes: int = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    @property
    def is_provider_configured(self) -> bool:
        """Check if a provider credential is present.

        Returns:
            True if ANTHROPIC_API_KEY is set, False otherwise
        """
        return bool(self.anthropic_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in ("memory", "redis"):
            raise ValueError(f"CACHE_BACKEND must be 'memory' or 'redis', got {self.cache_backend!r}")

        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.rate_limit_window <= 0 or self.rate_limit_max <= 0:
            raise ValueError("RATE_LIMIT_WINDOW and RATE_LIMIT_MAX must be positive")

        if self.provider_timeout <= 0:
            raise ValueError("PROVIDER_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )


def configure_logging(config: Settings | None = None) -> None:
    """Configure root logging once from LOG_LEVEL."""
    config = config or settings
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
