"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .catalogue_service import CatalogueService
from .completion_service import CompletionService
from .fallback import generate_fallback
from .validation import validate_chat_request

__all__ = [
    "CatalogueService",
    "CompletionService",
    "generate_fallback",
    "validate_chat_request",
]
