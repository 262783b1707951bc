import random

import pytest

from rockswap.components.board import Board
from rockswap.components.scoring import ScoringConfig
from rockswap.components.tile_types import TileTypes
from rockswap.constants import DEFAULT_TILE_TYPES, GRID_COLS, GRID_ROWS
from rockswap.events.bus import EventBus
from rockswap.systems.board import BoardSystem
from rockswap.systems.board_ops import get_board, get_game_state, get_scoring, get_tile_registry, world_rng
from rockswap.world import create_world
from esper import World

from tests.helpers import CountingRng


def test_world_registers_defaults():
    world = create_world()
    registry = get_tile_registry(world)
    assert registry.kinds == len(DEFAULT_TILE_TYPES)
    assert get_scoring(world).per_cell == 10
    state = get_game_state(world)
    assert state.score == 0 and state.moves == 0 and state.max_passes == 80


def test_world_accepts_configuration():
    rng = random.Random(5)
    scoring = ScoringConfig(per_cell=3)
    world = create_world(tile_types={'a': (0, 0, 0), 'b': (1, 1, 1), 'c': (2, 2, 2)}, scoring=scoring, rng=rng,
                         max_passes=7)
    assert world.random is rng
    assert get_tile_registry(world).labels() == ['a', 'b', 'c']
    assert get_scoring(world) is scoring
    assert get_game_state(world).max_passes == 7


def test_board_component_exists():
    bus = EventBus(); world = create_world()
    BoardSystem(world, bus, 6, 7)
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7
    assert comp.empty_positions() == []


def test_board_system_defaults_to_grid_constants():
    bus = EventBus(); world = create_world(rng=random.Random(0))
    BoardSystem(world, bus)
    board = get_board(world)
    assert (board.rows, board.cols) == (GRID_ROWS, GRID_COLS)


def test_missing_board_raises():
    with pytest.raises(RuntimeError):
        get_board(World())


def test_tile_types_lookup():
    types = TileTypes(types=dict(DEFAULT_TILE_TYPES))
    assert types.label_for(0) == 'gray'
    assert types.kind_for('blue') == 4
    assert types.color_for(5) == (216, 216, 133)
    with pytest.raises(KeyError):
        types.label_for(6)
    with pytest.raises(KeyError):
        types.kind_for('pink')
    assert types.register_type('pink', (255, 0, 255)) == 6
    assert types.kinds == 7


def test_tile_types_require_at_least_one():
    with pytest.raises(ValueError):
        TileTypes(types={})


def test_world_keeps_injected_rng_stub():
    rng = CountingRng()
    bus = EventBus(); world = create_world(rng=rng)
    assert world_rng(world) is rng
    BoardSystem(world, bus, 2, 2)
    assert rng.draws == 4
    assert get_board(world).snapshot() == [[0, 0], [0, 0]]
