from enum import Enum
from typing import Tuple, Union


class EmptyCell(Enum):
    """Marker for a board cell that currently holds no tile.

    Kept distinct from ``None``, which board reads return for coordinates
    outside the grid.
    """
    EMPTY = "empty"

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = EmptyCell.EMPTY

Cell = Union[int, EmptyCell]
Position = Tuple[int, int]


def is_kind(value) -> bool:
    """True for a tile kind ordinal (a non-negative int, bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
