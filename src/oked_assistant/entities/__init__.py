"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .chat import ChatMessage, ChatRequest
from .completion import ProviderCompletion
from .section import OkedSection

__all__ = [
    "CacheEntryEntity",
    "ChatMessage",
    "ChatRequest",
    "OkedSection",
    "ProviderCompletion",
]
