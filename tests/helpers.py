from __future__ import annotations

from typing import Iterable, List

from rockswap.components.board import Board
from rockswap.components.tile import EMPTY

E = EMPTY


class ScriptedRng:
    """Deterministic stand-in for random.Random that replays a fixed draw sequence."""

    def __init__(self, values: Iterable[int]):
        self.values: List[int] = list(values)
        self.draws = 0

    def randrange(self, n: int) -> int:
        assert self.values, f"ScriptedRng exhausted after {self.draws} draws"
        value = self.values.pop(0)
        assert 0 <= value < n, f"scripted value {value} outside range({n})"
        self.draws += 1
        return value


class CountingRng:
    """Always draws kind 0 and counts how many draws were requested."""

    def __init__(self):
        self.draws = 0

    def randrange(self, n: int) -> int:
        self.draws += 1
        return 0


def cascade_fixture() -> Board:
    """5x3 board whose row-2 triple, once cleared, drops column 0 into a run of four."""
    return Board.from_rows([
        [1, 2, 3],
        [1, 4, 5],
        [0, 0, 0],
        [1, 6, 7],
        [1, 8, 2],
    ])


# Refill draws for cascade_fixture: row 0 after the first pass, then column 0 rows 0-3.
CASCADE_FIXTURE_DRAWS = [5, 6, 7, 0, 1, 0, 1]


def swap_fixture() -> Board:
    """4x4 board with no runs; swapping (0,2)<->(0,3) completes 0,0,0 on row 0."""
    return Board.from_rows([
        [0, 0, 1, 0],
        [1, 2, 3, 4],
        [2, 3, 4, 5],
        [3, 4, 5, 1],
    ])


def assert_valid(board: Board, kinds: int) -> None:
    assert len(board.cells) == board.rows
    for row in board.cells:
        assert len(row) == board.cols
        for value in row:
            assert value is EMPTY or 0 <= value < kinds, f"bad cell value {value!r}"


def build_session(board: Board | None = None, *, seed: int = 0, store=None):
    """Wire a world with every game system; optionally install ``board`` as the live board."""
    import random

    from rockswap.events.bus import EventBus
    from rockswap.systems.board import BoardSystem
    from rockswap.systems.board_ops import replace_board
    from rockswap.systems.match_resolution import MatchResolutionSystem
    from rockswap.systems.score_system import ScoreSystem
    from rockswap.systems.swap import SwapSystem
    from rockswap.world import create_world

    bus = EventBus()
    world = create_world(rng=random.Random(seed))
    board_system = BoardSystem(world, bus, 4, 4)
    SwapSystem(world, bus)
    resolution = MatchResolutionSystem(world, bus)
    ScoreSystem(world, bus, store=store)
    if board is not None:
        replace_board(world, board)
    return bus, world, board_system, resolution
