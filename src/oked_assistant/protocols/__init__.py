"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, Anthropic → a test double)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .completion_provider import CompletionProvider
from .response_cache import ResponseCache

__all__ = [
    "CompletionProvider",
    "ResponseCache",
]
