"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for response serialization and OpenAPI documentation.

Internal domain logic should use entities from the entities package.
"""

from .responses import (
    CompletionResult,
    ErrorResponse,
    FallbackResult,
    HealthCheckResponse,
    SectionItem,
    SectionsResponse,
)

__all__ = [
    "CompletionResult",
    "ErrorResponse",
    "FallbackResult",
    "HealthCheckResponse",
    "SectionItem",
    "SectionsResponse",
]
