"""Cascade resolution: match -> score -> clear -> collapse -> refill, until stable.

Each pass is worth its base points times the chain multiplier, which starts at
1 and grows by one per completed pass. A pass ceiling stops runaway cascades;
hitting it is reported but the board is left as it is, still valid.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

from rockswap.components.board import Board
from rockswap.components.resolution_state import ResolutionState
from rockswap.components.scoring import ScoringConfig, default_scoring
from rockswap.components.tile import Position
from rockswap.constants import MAX_CASCADE_PASSES
from rockswap.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                                 EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE,
                                 EVENT_CASCADE_HALTED)
from rockswap.systems.collapse import collapse
from rockswap.systems.match import find_matches
from rockswap.systems.refill import refill
from rockswap.systems.scoring import clear_and_score

logger = logging.getLogger(__name__)

PassCallback = Callable[[FrozenSet[Position]], None]


@dataclass(slots=True)
class ResolutionResult:
    total_score: float = 0
    passes_run: int = 0
    halted_by_limit: bool = False
    rejected: bool = False


class CascadeResolver:
    """Runs cascades against a board; one resolution at a time per resolver.

    ``pass_callback`` and bus subscribers are notified between steps but cannot
    change the outcome: the same rng yields the same board states with or
    without them.
    """

    def __init__(
        self,
        kinds: int,
        rng: random.Random,
        *,
        max_passes: int = MAX_CASCADE_PASSES,
        event_bus: Optional[EventBus] = None,
    ):
        self.kinds = kinds
        self.rng = rng
        self.max_passes = max_passes
        self.event_bus = event_bus
        self.state: Optional[ResolutionState] = None

    @property
    def in_progress(self) -> bool:
        return self.state is not None and self.state.in_progress

    def resolve(
        self,
        board: Board,
        scoring: Optional[ScoringConfig] = None,
        pass_callback: Optional[PassCallback] = None,
    ) -> ResolutionResult:
        if self.in_progress:
            logger.debug("resolve ignored: a cascade is already resolving")
            return ResolutionResult(rejected=True)
        rules = scoring if scoring is not None else default_scoring()
        state = ResolutionState(in_progress=True)
        self.state = state
        halted = False
        try:
            while True:
                matches = find_matches(board)
                if not matches:
                    break
                if state.pass_count >= self.max_passes:
                    halted = True
                    break
                self._run_pass(board, rules, state, matches, pass_callback)
        finally:
            state.in_progress = False
            self.state = None

        if halted:
            logger.warning("cascade hit max_passes=%d; stopping with matches still on the board", self.max_passes)
            self._emit(EVENT_CASCADE_HALTED, passes=state.pass_count, max_passes=self.max_passes)
        if state.pass_count or halted:
            self._emit(EVENT_CASCADE_COMPLETE, depth=state.pass_count, total_score=state.total_score, halted=halted)
        return ResolutionResult(
            total_score=state.total_score,
            passes_run=state.pass_count,
            halted_by_limit=halted,
        )

    def _run_pass(
        self,
        board: Board,
        rules: ScoringConfig,
        state: ResolutionState,
        matches: FrozenSet[Position],
        pass_callback: Optional[PassCallback],
    ) -> None:
        depth = state.pass_count + 1
        positions = sorted(matches)
        self._emit(EVENT_MATCH_FOUND, positions=positions, size=len(positions), depth=depth)
        if pass_callback is not None:
            pass_callback(matches)

        kinds_before = [(r, c, board.cells[r][c]) for r, c in positions]
        base_points = clear_and_score(board, positions, scoring=rules)
        gained = base_points * state.chain
        state.total_score += gained
        logger.debug(
            "pass=%d matches=%d base_points=%s chain=%d gained=%s",
            depth, len(positions), base_points, state.chain, gained,
        )
        self._emit(EVENT_MATCH_CLEARED, positions=positions, types=kinds_before, points=gained, depth=depth)

        moves = collapse(board)
        self._emit(EVENT_GRAVITY_APPLIED, moves=moves, depth=depth)
        new_tiles = refill(board, self.kinds, self.rng)
        self._emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles, depth=depth)
        self._emit(EVENT_CASCADE_STEP, depth=depth, positions=positions, points=gained)

        state.pass_count += 1
        state.chain += 1

    def _emit(self, name: str, **payload) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(name, **payload)


def resolve(
    board: Board,
    scoring: Optional[ScoringConfig] = None,
    pass_callback: Optional[PassCallback] = None,
    *,
    kinds: int,
    rng: random.Random,
    max_passes: int = MAX_CASCADE_PASSES,
) -> ResolutionResult:
    """Resolve ``board`` with a throwaway resolver."""
    return CascadeResolver(kinds, rng, max_passes=max_passes).resolve(board, scoring, pass_callback)
