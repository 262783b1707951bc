from typing import Optional

from esper import World

from rockswap.events.bus import EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_BOARD_CHANGED, EVENT_SCORE_CHANGED
from rockswap.systems.board_ops import get_board, get_game_state, get_scoring, get_tile_registry, world_rng
from rockswap.systems.cascade import CascadeResolver, PassCallback, ResolutionResult


class MatchResolutionSystem:
    """Resolves cascades after committed swaps and other board changes, banking the score."""

    def __init__(self, world: World, event_bus: EventBus, pass_callback: Optional[PassCallback] = None):
        self.world = world
        self.event_bus = event_bus
        self.pass_callback = pass_callback
        state = get_game_state(world)
        self.resolver = CascadeResolver(
            get_tile_registry(world).kinds,
            world_rng(world),
            max_passes=state.max_passes,
            event_bus=event_bus,
        )
        self.last_result: Optional[ResolutionResult] = None
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def on_swap_finalize(self, sender, **kwargs):
        self.resolve_board()

    def on_board_changed(self, sender, **kwargs):
        self.resolve_board()

    def resolve_board(self) -> Optional[ResolutionResult]:
        state = get_game_state(self.world)
        if state.cascade_active or self.resolver.in_progress:
            return None
        # Types may have been registered since construction.
        self.resolver.kinds = get_tile_registry(self.world).kinds
        state.cascade_active = True
        try:
            result = self.resolver.resolve(get_board(self.world), get_scoring(self.world), self.pass_callback)
        finally:
            state.cascade_active = False
        self.last_result = result
        if result.total_score:
            state.score += result.total_score
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=result.total_score)
        return result
