from __future__ import annotations

import random
from typing import List

from rockswap.components.board import Board
from rockswap.components.tile import EMPTY, Position
from rockswap.constants import REFILL_MAX_RETRIES
from rockswap.systems.board_ops import choose_kind


def refill(board: Board, kinds: int, rng: random.Random) -> List[Position]:
    """Fill every EMPTY cell in row-major order and return the filled coordinates.

    Uses the same run-avoidance as board creation with a smaller retry budget;
    a run that slips through is simply cleared by the next cascade pass.
    """
    if kinds < 1:
        raise ValueError(f"At least one tile kind is required, got {kinds}")
    spawned: List[Position] = []
    for row, col in board.positions():
        if board.cells[row][col] is not EMPTY:
            continue
        board.cells[row][col] = choose_kind(board, row, col, kinds, rng, REFILL_MAX_RETRIES)
        spawned.append((row, col))
    return spawned
