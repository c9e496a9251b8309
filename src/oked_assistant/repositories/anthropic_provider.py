"""Anthropic Messages API provider.

Calls ``POST {base_url}/v1/messages`` over httpx and maps the response to a
ProviderCompletion. HTTP failures are translated into the ProviderError
hierarchy so the service layer never sees httpx types.

Status mapping:
- 429 -> RateLimitError
- 400 -> ProviderBadRequestError
- other 4xx/5xx, transport errors, malformed bodies -> ProviderError
"""

from collections.abc import Sequence
from typing import Any

import httpx

from oked_assistant.config import Settings, settings
from oked_assistant.entities import ChatMessage, ProviderCompletion
from oked_assistant.errors import ProviderBadRequestError, ProviderError, RateLimitError


class AnthropicProvider:
    """Anthropic implementation of CompletionProvider protocol.

    This class satisfies the CompletionProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = AnthropicProvider.create()
        completion = await provider.complete(
            [ChatMessage(role="user", content="Hello")],
            model="claude-3-haiku-20240307",
            max_tokens=256,
            temperature=0.3,
        )
        print(completion.text)
        ```
    """

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Anthropic provider.

        Args:
            api_key: Anthropic API key (required).
            base_url: API base URL. Defaults to settings.anthropic_base_url.
            api_version: Value of the anthropic-version header.
            timeout: Request timeout in seconds.
            client: Preconfigured async client (tests inject a mock transport).
        """
        self._api_key = api_key
        self._base_url = (base_url or settings.anthropic_base_url).rstrip("/")
        self._api_version = api_version or settings.anthropic_version
        self._timeout = timeout or settings.provider_timeout
        self._client = client

    @classmethod
    def create(cls, config: Settings | None = None) -> "AnthropicProvider":
        """Factory method to create AnthropicProvider from settings.

        Args:
            config: Settings to read credentials from. If None, uses globals.

        Returns:
            Configured AnthropicProvider

        Raises:
            ValueError: If no API key is configured
        """
        config = config or settings
        if not config.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set")
        return cls(
            api_key=config.anthropic_api_key,
            base_url=config.anthropic_base_url,
            api_version=config.anthropic_version,
            timeout=config.provider_timeout,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ProviderCompletion:
        """Generate a completion with the Messages API.

        Args:
            messages: Conversation to send, in order
            model: Anthropic model identifier
            max_tokens: Upper bound on generated tokens
            temperature: Sampling temperature

        Returns:
            ProviderCompletion with the first text block and usage

        Raises:
            RateLimitError: On HTTP 429
            ProviderBadRequestError: On HTTP 400
            ProviderError: On any other failure
        """
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [m.to_payload() for m in messages],
        }
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self._api_version,
            "content-type": "application/json",
        }

        try:
            response = await self.client.post(
                f"{self._base_url}/v1/messages",
                json=payload,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"Anthropic API request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError("Anthropic rate limit", http_status=429)
        if response.status_code == 400:
            raise ProviderBadRequestError(
                f"Anthropic rejected the request: {response.text}",
                http_status=400,
            )
        if response.status_code >= 400:
            raise ProviderError(
                f"Anthropic API error {response.status_code}: {response.text}",
                http_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Anthropic returned a non-JSON body: {e}") from e
        return self._parse_response(data, model)

    @staticmethod
    def _parse_response(data: Any, model: str) -> ProviderCompletion:
        """Take the text of the first content block."""
        try:
            text = data["content"][0]["text"]
            if not isinstance(text, str):
                raise TypeError(f"text block is {type(text).__name__}")
            return ProviderCompletion(
                text=text,
                model=data.get("model") or model,
                usage=data.get("usage") or {},
            )
        except (AttributeError, TypeError, KeyError, IndexError) as e:
            raise ProviderError(f"Unexpected response format: {data}") from e

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
