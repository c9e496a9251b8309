"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .catalogue_handler import CatalogueHandler
from .chat_handler import ChatHandler
from .health_handler import HealthHandler

__all__ = [
    "CatalogueHandler",
    "ChatHandler",
    "HealthHandler",
]
