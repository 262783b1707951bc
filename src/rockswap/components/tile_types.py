from dataclasses import dataclass
from typing import Dict, List, Tuple

@dataclass(slots=True)
class TileTypes:
    """Canonical tile kind definitions stored on a single entity.

    Kinds are ordinals into ``types`` in insertion order; the board only ever
    stores the ordinal. Labels and colours are for callers that present tiles.
    """
    types: Dict[str, Tuple[int, int, int]]

    def __post_init__(self) -> None:
        if not self.types:
            raise ValueError("At least one tile type is required")

    @property
    def kinds(self) -> int:
        return len(self.types)

    def labels(self) -> List[str]:
        return list(self.types.keys())

    def label_for(self, kind: int) -> str:
        labels = self.labels()
        if not 0 <= kind < len(labels):
            raise KeyError(f"Unknown tile kind {kind}")
        return labels[kind]

    def kind_for(self, label: str) -> int:
        try:
            return self.labels().index(label)
        except ValueError:
            raise KeyError(f"Unknown tile type {label!r}") from None

    def color_for(self, kind: int) -> Tuple[int, int, int]:
        return self.types[self.label_for(kind)]

    def register_type(self, label: str, color: Tuple[int, int, int]) -> int:
        """Add (or recolour) a type and return its ordinal."""
        self.types[label] = color
        return self.kind_for(label)
