"""OKED Assistant - OKED classification chat API with an offline fallback.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (ResponseCache, CompletionProvider)
    - repositories: Cache backends and the Anthropic provider client
    - services: Validation, completion dispatch, fallback answers, catalogue
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from oked_assistant.repositories import InMemoryResponseCache
    from oked_assistant.services import CompletionService, validate_chat_request

    service = CompletionService.create(cache=InMemoryResponseCache.create())
    payload = await service.complete(validate_chat_request(body))
    ```

For HTTP API:
    ```python
    from oked_assistant.api.app import app, create_app
    ```
"""

from oked_assistant.config import get_redis_client, settings
from oked_assistant.entities import ChatMessage, ChatRequest, OkedSection, ProviderCompletion
from oked_assistant.errors import (
    OkedAssistantError,
    ProviderBadRequestError,
    PayloadTooLargeError,
    ProviderError,
    RateLimitError,
    StatisticsUnavailableError,
    ValidationError,
)
from oked_assistant.protocols import CompletionProvider, ResponseCache
from oked_assistant.repositories import AnthropicProvider, InMemoryResponseCache, RedisResponseCache
from oked_assistant.services import CatalogueService, CompletionService, generate_fallback, validate_chat_request

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CompletionProvider",
    "ResponseCache",
    # Services (business logic)
    "CatalogueService",
    "CompletionService",
    "generate_fallback",
    "validate_chat_request",
    # Repositories (data access)
    "AnthropicProvider",
    "InMemoryResponseCache",
    "RedisResponseCache",
    # Entities (domain models)
    "ChatMessage",
    "ChatRequest",
    "OkedSection",
    "ProviderCompletion",
    # Errors
    "OkedAssistantError",
    "ValidationError",
    "StatisticsUnavailableError",
    "PayloadTooLargeError",
    "ProviderError",
    "RateLimitError",
    "ProviderBadRequestError",
]
