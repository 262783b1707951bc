from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence

from rockswap.components.tile import EMPTY, Cell, Position, is_kind


@dataclass(slots=True)
class Board:
    """Fixed-size grid of cells addressed by (row, col).

    Row 0 is the top of the board; gravity pulls tiles towards ``rows - 1``.
    Reads outside the grid return ``None`` and writes outside the grid are
    ignored, so callers can probe neighbours near the edges freely.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"Board dimensions must be non-negative, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]
            return
        if len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise ValueError("Board cells do not match the declared dimensions")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[Cell]]], *, kinds: int | None = None) -> "Board":
        """Build a board from nested sequences; ``None`` and ``EMPTY`` both mean empty."""
        grid: List[List[Cell]] = []
        for row in rows:
            out_row: List[Cell] = []
            for value in row:
                if value is None or value is EMPTY:
                    out_row.append(EMPTY)
                    continue
                if not is_kind(value) or (kinds is not None and value >= kinds):
                    raise ValueError(f"Invalid tile kind {value!r}")
                out_row.append(value)
            grid.append(out_row)
        if any(len(row) != len(grid[0]) for row in grid):
            raise ValueError("Board rows must all have the same length")
        return cls(rows=len(grid), cols=len(grid[0]) if grid else 0, cells=grid)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Optional[Cell]:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def set(self, row: int, col: int, value: Cell) -> None:
        if not self.in_bounds(row, col):
            return
        if value is not EMPTY and not is_kind(value):
            raise ValueError(f"Invalid cell value {value!r}")
        self.cells[row][col] = value

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is EMPTY

    def positions(self) -> Iterator[Position]:
        """Yield every coordinate in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.cells[pos[0]][pos[1]] is EMPTY]

    def snapshot(self) -> List[List[Cell]]:
        return [list(row) for row in self.cells]

    def copy(self) -> "Board":
        return Board(rows=self.rows, cols=self.cols, cells=self.snapshot())

    def restore(self, cells: Iterable[Sequence[Cell]]) -> None:
        """Overwrite every cell from a snapshot of the same shape."""
        grid = [list(row) for row in cells]
        if len(grid) != self.rows or any(len(row) != self.cols for row in grid):
            raise ValueError("Snapshot shape does not match the board")
        self.cells = grid

    def __str__(self) -> str:
        return "\n".join(
            " ".join("." if value is EMPTY else str(value) for value in row)
            for row in self.cells
        )
