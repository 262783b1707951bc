from __future__ import annotations

import random

from esper import World

from rockswap.components.board import Board
from rockswap.components.game_state import GameState
from rockswap.components.scoring import ScoringConfig
from rockswap.components.tile_type_registry import TileTypeRegistry
from rockswap.components.tile_types import TileTypes
from rockswap.constants import CREATE_MAX_RETRIES


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_board_entity(world: World) -> int:
    for entity, _ in world.get_component(Board):
        return entity
    raise RuntimeError("Board not found")


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_scoring(world: World) -> ScoringConfig:
    for _, scoring in world.get_component(ScoringConfig):
        return scoring
    raise RuntimeError("ScoringConfig not found")


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found")


def world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if candidate is not None and hasattr(candidate, "randrange"):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng


def make_empty(rows: int, cols: int) -> Board:
    """Create a board with every cell EMPTY."""
    return Board(rows=rows, cols=cols)


def completes_run(board: Board, row: int, col: int, kind: int) -> bool:
    """True if placing ``kind`` at (row, col) finishes a run of three with the
    two cells to its left or the two cells above it.

    Cells right of and below the target are not consulted; generation walks in
    row-major order so those are not placed yet.
    """
    left1 = board.get(row, col - 1)
    left2 = board.get(row, col - 2)
    if left1 == kind and left2 == kind:
        return True
    up1 = board.get(row - 1, col)
    up2 = board.get(row - 2, col)
    return up1 == kind and up2 == kind


def choose_kind(board: Board, row: int, col: int, kinds: int, rng: random.Random, max_retries: int) -> int:
    """Draw a kind for (row, col), re-drawing up to ``max_retries`` times to
    avoid an immediate run. The final draw is accepted even if it still makes one.
    """
    kind = rng.randrange(kinds)
    retries = 0
    while retries < max_retries and completes_run(board, row, col, kind):
        kind = rng.randrange(kinds)
        retries += 1
    return kind


def create_board(rows: int, cols: int, kinds: int, rng: random.Random) -> Board:
    """Fill a fresh rows x cols board in row-major order.

    Starting runs are avoided on a best-effort basis only, see ``choose_kind``.
    """
    if kinds < 1:
        raise ValueError(f"At least one tile kind is required, got {kinds}")
    board = make_empty(rows, cols)
    for row, col in board.positions():
        board.set(row, col, choose_kind(board, row, col, kinds, rng, CREATE_MAX_RETRIES))
    return board


def replace_board(world: World, board: Board) -> Board:
    """Swap the world's Board component for ``board`` (used on restart)."""
    world.add_component(get_board_entity(world), board)
    return board
