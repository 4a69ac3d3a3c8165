"""Base entity class for all domain entities."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class BaseEntity:
    """Base class for all entities."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def row(self, columns: Sequence[str]) -> list[Any]:
        """Field values in column order, for binding as SQL parameters."""
        return [getattr(self, column) for column in columns]
