"""Repository layer for data access.

This layer abstracts external dependencies (cache backends, the LLM
provider API) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (in-memory → Redis)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from oked_assistant.protocols import CompletionProvider, ResponseCache

from .anthropic_provider import AnthropicProvider
from .memory_cache import InMemoryResponseCache
from .redis_cache import RedisResponseCache

__all__ = [
    "CompletionProvider",
    "ResponseCache",
    "AnthropicProvider",
    "InMemoryResponseCache",
    "RedisResponseCache",
]
