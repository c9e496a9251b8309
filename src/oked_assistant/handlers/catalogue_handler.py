"""HTTP handlers for OKED catalogue endpoints."""

from typing import Any

from oked_assistant.services import CatalogueService


class CatalogueHandler:
    """HTTP handlers for /api/oked/sections and /api/statistics/{code}."""

    def __init__(self, catalogue_service: CatalogueService) -> None:
        self._catalogue = catalogue_service

    async def list_sections(self) -> dict[str, Any]:
        """Handle GET /api/oked/sections requests."""
        return self._catalogue.list_sections()

    async def get_statistics(self, oked_code: str) -> dict[str, Any]:
        """Handle GET /api/statistics/{oked_code} requests.

        Raises:
            ValidationError: If the code is malformed (400)
            StatisticsUnavailableError: Until statistics are integrated (501)
        """
        return self._catalogue.get_statistics(oked_code)
