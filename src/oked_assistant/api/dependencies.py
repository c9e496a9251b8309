"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - An AppContext is built explicitly by create_app and stored in app.state
    - Dependency functions retrieve handlers from request.app.state.context
    - No module-level singletons, so every app built in tests is isolated
"""

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from oked_assistant.api.middleware import FixedWindowRateLimiter
from oked_assistant.config import Settings, get_redis_client
from oked_assistant.handlers import CatalogueHandler, ChatHandler, HealthHandler
from oked_assistant.protocols import CompletionProvider, ResponseCache
from oked_assistant.repositories import AnthropicProvider, InMemoryResponseCache, RedisResponseCache
from oked_assistant.services import CatalogueService, CompletionService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a request handler needs, built once per app."""

    settings: Settings
    cache: ResponseCache
    provider: CompletionProvider | None
    rate_limiter: FixedWindowRateLimiter
    chat_handler: ChatHandler
    catalogue_handler: CatalogueHandler
    health_handler: HealthHandler
    started_at: float = field(default_factory=time.monotonic)


def build_cache(settings: Settings) -> ResponseCache:
    """Create the cache backend selected by CACHE_BACKEND."""
    if settings.cache_backend == "redis":
        return RedisResponseCache(
            redis_client=get_redis_client(settings),
            key_prefix=settings.cache_key_prefix,
            ttl=settings.cache_ttl,
        )
    return InMemoryResponseCache(ttl=settings.cache_ttl)


def build_context(
    settings: Settings,
    provider: CompletionProvider | None = None,
    cache: ResponseCache | None = None,
) -> AppContext:
    """Wire repositories, services and handlers.

    Args:
        settings: Application settings
        provider: LLM provider. If None, an AnthropicProvider is created when
            ANTHROPIC_API_KEY is set; otherwise the app runs offline.
        cache: Cache backend. If None, built from settings.

    Returns:
        The assembled AppContext
    """
    cache = cache or build_cache(settings)
    if provider is None and settings.is_provider_configured:
        provider = AnthropicProvider.create(settings)

    completion_service = CompletionService.create(cache=cache, provider=provider)
    catalogue_service = CatalogueService.create(cache=cache)
    started_at = time.monotonic()

    return AppContext(
        settings=settings,
        cache=cache,
        provider=provider,
        rate_limiter=FixedWindowRateLimiter(
            window_seconds=settings.rate_limit_window,
            max_requests=settings.rate_limit_max,
        ),
        chat_handler=ChatHandler(completion_service=completion_service),
        catalogue_handler=CatalogueHandler(catalogue_service=catalogue_service),
        health_handler=HealthHandler(
            cache=cache,
            provider_configured=provider is not None,
            environment=settings.environment,
            started_at=started_at,
        ),
        started_at=started_at,
    )


def get_context(request: Request) -> AppContext:
    """Dependency injection for AppContext from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The AppContext instance from app.state

    Raises:
        RuntimeError: If the context is not initialized
    """
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("AppContext not initialized. Use create_app().")
    return context


def get_chat_handler(request: Request) -> ChatHandler:
    return get_context(request).chat_handler


def get_catalogue_handler(request: Request) -> CatalogueHandler:
    return get_context(request).catalogue_handler


def get_health_handler(request: Request) -> HealthHandler:
    return get_context(request).health_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Logs the startup configuration and closes the provider's HTTP client
    on shutdown.
    """
    context: AppContext = app.state.context
    logger.info("Starting OKED Assistant API (environment=%s)", context.settings.environment)
    logger.info("Cache backend: %s, TTL: %ss", context.settings.cache_backend, context.cache.ttl)
    if context.provider is None:
        logger.warning("ANTHROPIC_API_KEY not set, chat requests use offline answers")
    else:
        logger.info("Provider: %s", context.provider.name)
    if not context.cache.health_check():
        logger.warning("Cache backend is not reachable")

    yield

    if context.provider is not None:
        await context.provider.close()
    logger.info("OKED Assistant API shut down")


# Type aliases for cleaner dependency injection
ChatHandlerDep = Annotated[ChatHandler, Depends(get_chat_handler)]
CatalogueHandlerDep = Annotated[CatalogueHandler, Depends(get_catalogue_handler)]
HealthHandlerDep = Annotated[HealthHandler, Depends(get_health_handler)]
