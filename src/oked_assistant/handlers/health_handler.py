"""HTTP handler for the health check."""

import time
from datetime import datetime, timezone

from oked_assistant.dto import HealthCheckResponse
from oked_assistant.protocols import ResponseCache


class HealthHandler:
    """HTTP handler for GET /health.

    Reports process uptime, live cache entries and whether a provider
    is configured. Never calls the provider.
    """

    def __init__(
        self,
        cache: ResponseCache,
        provider_configured: bool,
        environment: str,
        started_at: float | None = None,
    ) -> None:
        self._cache = cache
        self._provider_configured = provider_configured
        self._environment = environment
        self._started_at = started_at if started_at is not None else time.monotonic()

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with status and diagnostics
        """
        return HealthCheckResponse(
            status="OK",
            message="OKED Catalogue Backend is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
            cache_keys=self._cache.count_all(),
            uptime=time.monotonic() - self._started_at,
            anthropic_configured=self._provider_configured,
            environment=self._environment,
        )
