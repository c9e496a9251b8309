"""OKED section domain entity."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class OkedSection:
    """Top-level OKED section (letter A-U)."""

    code: str
    name: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
