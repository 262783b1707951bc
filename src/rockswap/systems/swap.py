from __future__ import annotations

import logging
from typing import List, Tuple

from esper import World

from rockswap.components.board import Board
from rockswap.components.tile import Position, is_kind
from rockswap.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_FINALIZE
from rockswap.systems.board_ops import get_board, get_game_state
from rockswap.systems.match import has_matches

logger = logging.getLogger(__name__)


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def _swappable(board: Board, a: Position, b: Position) -> bool:
    if not (board.in_bounds(*a) and board.in_bounds(*b)):
        return False
    if not is_adjacent(a, b):
        return False
    return is_kind(board.get(*a)) and is_kind(board.get(*b))


def try_swap(board: Board, r1: int, c1: int, r2: int, c2: int) -> bool:
    """Exchange two adjacent tiles, keeping the swap only if the board then has a match.

    Any match anywhere on the board counts, not only one through the swapped
    cells. A rejected or malformed request leaves the board exactly as it was.
    """
    a, b = (r1, c1), (r2, c2)
    if not _swappable(board, a, b):
        logger.debug("swap %s <-> %s rejected: not a legal pair", a, b)
        return False
    first = board.cells[r1][c1]
    second = board.cells[r2][c2]
    board.cells[r1][c1], board.cells[r2][c2] = second, first
    if has_matches(board):
        return True
    board.cells[r1][c1], board.cells[r2][c2] = first, second
    logger.debug("swap %s <-> %s rejected: no match", a, b)
    return False


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps ``try_swap`` would accept, without changing the board."""
    swaps: List[Tuple[Position, Position]] = []
    for row, col in board.positions():
        for other in ((row, col + 1), (row + 1, col)):
            if not _swappable(board, (row, col), other):
                continue
            if try_swap(board, row, col, *other):
                # Undo the committed swap; we only wanted the verdict.
                board.cells[row][col], board.cells[other[0]][other[1]] = (
                    board.cells[other[0]][other[1]],
                    board.cells[row][col],
                )
                swaps.append(((row, col), other))
    return swaps


class SwapSystem:
    """Turns swap requests into committed or rejected swaps on the world's board."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        state = get_game_state(self.world)
        if state.cascade_active:
            return
        board = get_board(self.world)
        if not try_swap(board, src[0], src[1], dst[0], dst[1]):
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            return
        state.moves += 1
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)
