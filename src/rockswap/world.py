import random
from typing import Dict, Optional, Tuple

from esper import World

from rockswap.components.game_state import GameState
from rockswap.components.scoring import ScoringConfig, default_scoring
from rockswap.components.tile_type_registry import TileTypeRegistry
from rockswap.components.tile_types import TileTypes
from rockswap.constants import DEFAULT_TILE_TYPES, MAX_CASCADE_PASSES


def create_world(
    *,
    tile_types: Optional[Dict[str, Tuple[int, int, int]]] = None,
    scoring: Optional[ScoringConfig] = None,
    rng: Optional[random.Random] = None,
    max_passes: int = MAX_CASCADE_PASSES,
) -> World:
    """Build the session world: game state, tile registry and scoring rules.

    The board entity itself is created by BoardSystem so the grid size stays a
    per-session choice.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(GameState(max_passes=max_passes))

    # Single registry entity with canonical kinds, in ordinal order.
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(types=dict(tile_types or DEFAULT_TILE_TYPES)),
    )
    world.create_entity(scoring if scoring is not None else default_scoring())
    return world
