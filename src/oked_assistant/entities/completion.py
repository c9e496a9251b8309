"""Provider completion domain entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ProviderCompletion:
    """Result of a single provider call.

    Attributes:
        text: Generated text of the first content block
        usage: Token accounting as reported by the provider
        model: Model that produced the completion
    """

    text: str
    model: str
    usage: dict[str, Any] = field(default_factory=dict)
