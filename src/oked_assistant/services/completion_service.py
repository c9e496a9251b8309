"""Completion service for the chat endpoint.

Orchestrates a validated ChatRequest through the cache, the offline
fallback and the provider.
"""

import logging
from typing import Any

from oked_assistant.dto import CompletionResult
from oked_assistant.entities import ChatMessage, ChatRequest
from oked_assistant.errors import ProviderError
from oked_assistant.prompts import build_enhanced_prompt
from oked_assistant.protocols import CompletionProvider, ResponseCache
from oked_assistant.services.fallback import generate_fallback

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 4000
TEMPERATURE = 0.3


class CompletionService:
    """Chat completion dispatcher.

    Flow per request:
    1. Cached payload for the request key -> return it
    2. No provider configured -> offline keyword answer
    3. Enhanced call: OKED context + first user message as one prompt
    4. If that fails: basic call with the original messages
    5. If that fails too: the ProviderError propagates

    Every produced payload is cached before it is returned.

    Example:
        ```python
        service = CompletionService.create(
            cache=InMemoryResponseCache.create(),
            provider=AnthropicProvider.create(),
        )
        payload = await service.complete(validate_chat_request(body))
        ```
    """

    def __init__(
        self,
        cache: ResponseCache,
        provider: CompletionProvider | None = None,
    ) -> None:
        """Initialize the completion service.

        Args:
            cache: Response cache backend (required).
            provider: LLM provider. None means offline mode.
        """
        self._cache = cache
        self._provider = provider

    @classmethod
    def create(
        cls,
        cache: ResponseCache,
        provider: CompletionProvider | None = None,
    ) -> "CompletionService":
        """Factory method to create CompletionService.

        Args:
            cache: Response cache backend (required).
            provider: LLM provider, or None for offline mode.

        Returns:
            Configured CompletionService
        """
        return cls(cache=cache, provider=provider)

    async def complete(self, request: ChatRequest) -> dict[str, Any]:
        """Produce the response payload for a validated request.

        Args:
            request: The validated chat request

        Returns:
            CompletionResult or FallbackResult payload

        Raises:
            ProviderError: If both provider attempts fail
        """
        cached = self._cache.get(request.cache_key)
        if cached is not None:
            return cached

        user_query = request.user_message.content

        if self._provider is None:
            logger.warning("Anthropic API key not configured, returning fallback response")
            payload = generate_fallback(user_query)
            self._cache.set(request.cache_key, payload)
            return payload

        try:
            payload = await self._complete_enhanced(request, user_query)
        except ProviderError as enhanced_error:
            logger.warning(
                "Enhanced completion failed, using basic fallback: %s",
                enhanced_error.message,
            )
            payload = await self._complete_basic(request)

        self._cache.set(request.cache_key, payload)
        return payload

    async def _complete_enhanced(self, request: ChatRequest, user_query: str) -> dict[str, Any]:
        """Single synthetic prompt carrying the OKED context."""
        logger.info("Processing query with OKED context: %r", user_query)
        prompt = ChatMessage(role="user", content=build_enhanced_prompt(user_query))
        completion = await self._provider.complete(
            [prompt],
            model=request.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
        )
        return CompletionResult(
            content=completion.text,
            usage=completion.usage,
            enhanced=True,
            query_type="claude_intelligence",
            original_query=user_query,
        ).to_payload()

    async def _complete_basic(self, request: ChatRequest) -> dict[str, Any]:
        """Original conversation, sent verbatim."""
        completion = await self._provider.complete(
            request.messages,
            model=request.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
        )
        return CompletionResult(
            content=completion.text,
            usage=completion.usage,
            enhanced=False,
            query_type="fallback",
        ).to_payload()

    @property
    def is_provider_configured(self) -> bool:
        return self._provider is not None

    @property
    def cache(self) -> ResponseCache:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def provider(self) -> CompletionProvider | None:
        """Get the underlying provider (for testing)."""
        return self._provider
