"""Catalogue service for OKED reference data.

Serves the static OKED sections table and the statistics-by-code stub.
Neither touches a live data source.
"""

import re
from typing import Any

from oked_assistant.dto import SectionsResponse
from oked_assistant.entities import OkedSection
from oked_assistant.errors import StatisticsUnavailableError, ValidationError
from oked_assistant.protocols import ResponseCache

SECTIONS_CACHE_KEY = "oked_sections"
STATISTICS_CACHE_PREFIX = "stats_"

# A single section letter A-U, or a numeric code of 1-5 digits.
OKED_CODE_PATTERN = re.compile(r"[A-U]|[0-9]{1,5}")

OKED_SECTIONS = (
    OkedSection("A", "Agriculture, forestry and fishing", "Section A - Agriculture"),
    OkedSection("B", "Mining and quarrying", "Section B - Mining"),
    OkedSection("C", "Manufacturing", "Section C - Manufacturing"),
    OkedSection("F", "Construction", "Section F - Construction"),
    OkedSection("G", "Wholesale and retail trade", "Section G - Trade"),
    OkedSection("I", "Accommodation and food service activities", "Section I - Hospitality"),
    OkedSection("J", "Information and communication", "Section J - IT & Communications"),
    OkedSection(
        "M",
        "Professional, scientific and technical activities",
        "Section M - Professional Services",
    ),
)


def is_valid_oked_code(code: str) -> bool:
    return bool(code) and OKED_CODE_PATTERN.fullmatch(code) is not None


class CatalogueService:
    """OKED reference data service.

    Example:
        ```python
        catalogue = CatalogueService.create(cache=InMemoryResponseCache.create())
        sections = catalogue.list_sections()
        ```
    """

    def __init__(self, cache: ResponseCache) -> None:
        """Initialize the catalogue service.

        Args:
            cache: Response cache backend (required).
        """
        self._cache = cache

    @classmethod
    def create(cls, cache: ResponseCache) -> "CatalogueService":
        """Factory method to create CatalogueService.

        Args:
            cache: Response cache backend (required).

        Returns:
            Configured CatalogueService
        """
        return cls(cache=cache)

    def list_sections(self) -> dict[str, Any]:
        """Return the fixed sections table, memoized in the cache.

        Returns:
            SectionsResponse payload with 8 sections
        """
        cached = self._cache.get(SECTIONS_CACHE_KEY)
        if cached is not None:
            return cached

        payload = SectionsResponse(
            data=[section.to_dict() for section in OKED_SECTIONS],
            cached=False,
        ).model_dump()
        self._cache.set(SECTIONS_CACHE_KEY, payload)
        return payload

    def get_statistics(self, oked_code: str) -> dict[str, Any]:
        """Look up statistics for an OKED code.

        Only a previously cached payload can be served; there is no live
        statistics source yet.

        Args:
            oked_code: Section letter or numeric code

        Returns:
            Cached statistics payload

        Raises:
            ValidationError: If the code is malformed
            StatisticsUnavailableError: If nothing is cached for the code
        """
        if not is_valid_oked_code(oked_code):
            raise ValidationError("Invalid OKED code format")

        cached = self._cache.get(f"{STATISTICS_CACHE_PREFIX}{oked_code}")
        if cached is not None:
            return cached

        # TODO: Integrate stat.gov.kz as the statistics source (kazdatahelp/oked-catalogue-assistant#6).
        raise StatisticsUnavailableError()
