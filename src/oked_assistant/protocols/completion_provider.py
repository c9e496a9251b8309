"""Completion provider protocol.

Defines the interface for the remote LLM completion service. The call is
opaque: a list of role/content messages and a model go in, generated text
and usage metadata come out.

Failures must be raised as ``ProviderError`` subclasses:
- RateLimitError for provider rate limits
- ProviderBadRequestError for provider-reported bad requests
- ProviderError for anything else
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from oked_assistant.entities import ChatMessage, ProviderCompletion


@runtime_checkable
class CompletionProvider(Protocol):
    """Protocol for LLM completion services."""

    @property
    def name(self) -> str:
        """Provider name, used in logs."""
        ...

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ProviderCompletion:
        """Generate a completion.

        Args:
            messages: Conversation to send, in order
            model: Provider model identifier
            max_tokens: Upper bound on generated tokens
            temperature: Sampling temperature

        Returns:
            ProviderCompletion with text and usage

        Raises:
            ProviderError: If the call fails
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
