from __future__ import annotations

from dataclasses import dataclass
from typing import List

from rockswap.components.board import Board
from rockswap.components.tile import EMPTY, Position


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    kind: int


def collapse(board: Board) -> List[GravityMove]:
    """Let tiles fall: per column, pack non-empty cells to the bottom in their
    top-to-bottom order and leave EMPTY above them.

    Returns the moves performed so a presentation layer can animate the fall.
    """
    moves: List[GravityMove] = []
    cells = board.cells
    for col in range(board.cols):
        write = board.rows - 1
        for row in range(board.rows - 1, -1, -1):
            value = cells[row][col]
            if value is EMPTY:
                continue
            if write != row:
                cells[write][col] = value
                cells[row][col] = EMPTY
                moves.append(GravityMove(source=(row, col), target=(write, col), kind=value))
            write -= 1
        for row in range(write, -1, -1):
            cells[row][col] = EMPTY
    return moves
