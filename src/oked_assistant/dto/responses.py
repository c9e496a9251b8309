"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompletionResult(BaseModel):
    """Response DTO for a provider-backed completion.

    Serialized with camelCase aliases (``queryType``, ``originalQuery``)
    to match the frontend contract.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(..., description="Generated text")
    usage: dict[str, Any] = Field(default_factory=dict, description="Provider token accounting")
    enhanced: bool = Field(..., description="Whether the OKED context prompt was used")
    query_type: str = Field(..., alias="queryType", description="claude_intelligence or fallback")
    original_query: str | None = Field(
        None,
        alias="originalQuery",
        description="The user query the enhanced prompt was built from",
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class FallbackResult(BaseModel):
    """Response DTO for the offline keyword fallback."""

    content: str = Field(..., description="JSON-encoded canned answer")
    fallback: bool = Field(True, description="Always true for offline answers")
    enhanced: bool = Field(False, description="Always false for offline answers")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump()


class SectionItem(BaseModel):
    """Single OKED section (in data array)."""

    code: str = Field(..., description="Section letter A-U")
    name: str = Field(..., description="Section name")
    description: str = Field(..., description="Short description")


class SectionsResponse(BaseModel):
    """Response DTO for the OKED sections list."""

    data: list[SectionItem] = Field(default_factory=list)
    cached: bool = Field(False, description="Kept for frontend compatibility; always false")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Always 'OK' while the process serves requests")
    message: str = Field(..., description="Human-readable status")
    timestamp: str = Field(..., description="Current time, ISO 8601 UTC")
    cache_keys: int = Field(..., description="Live cache entries", ge=0)
    uptime: float = Field(..., description="Process uptime in seconds", ge=0.0)
    anthropic_configured: bool = Field(..., description="Whether the provider is configured")
    environment: str = Field(..., description="Deployment environment name")


class ErrorResponse(BaseModel):
    """Response DTO for every error status."""

    error: str = Field(..., description="Client-safe error message")
