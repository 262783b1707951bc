"""Headless entry point for the RockSwap engine.

Sets up the ECS world, event bus and systems, then plays a handful of random
legal swaps and prints the board and score after each one.
"""
import logging
import random
import sys

from rockswap.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_CASCADE_HALTED, EVENT_BOARD_CHANGED
from rockswap.systems.board import BoardSystem
from rockswap.systems.board_ops import get_board, get_game_state
from rockswap.systems.match_resolution import MatchResolutionSystem
from rockswap.systems.score_system import ScoreSystem
from rockswap.systems.swap import SwapSystem, find_valid_swaps
from rockswap.world import create_world


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    moves = int(argv[0]) if argv else 10
    seed = int(argv[1]) if len(argv) > 1 else None
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rng = random.Random(seed)
    event_bus = EventBus()
    world = create_world(rng=rng)
    BoardSystem(world, event_bus)
    SwapSystem(world, event_bus)
    MatchResolutionSystem(world, event_bus)
    ScoreSystem(world, event_bus)
    event_bus.subscribe(EVENT_CASCADE_HALTED, lambda s, **k: print(f"cascade halted after {k['passes']} passes"))

    # Clear any run that slipped into the starting board.
    event_bus.emit(EVENT_BOARD_CHANGED, reason='init')
    state = get_game_state(world)
    for _ in range(moves):
        swaps = find_valid_swaps(get_board(world))
        if not swaps:
            print("no legal swaps left")
            break
        src, dst = rng.choice(swaps)
        event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
        print(f"swap {src} <-> {dst}: score={state.score} high={state.high_score} moves={state.moves}")
    print(get_board(world))
    return 0


if __name__ == "__main__":
    sys.exit(main())
