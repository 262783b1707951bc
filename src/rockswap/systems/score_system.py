"""High-score tracking on top of the running session score.

Where the best score is kept is up to the caller: anything with ``load``,
``save`` and ``clear`` works. Unreadable or nonsensical stored values count as
zero rather than failing the game.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

from esper import World

from rockswap.components.scoring import as_number
from rockswap.events.bus import EventBus, EVENT_SCORE_CHANGED, EVENT_HIGH_SCORE_CHANGED, EVENT_HIGH_SCORE_CLEAR_REQUEST
from rockswap.systems.board_ops import get_game_state

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self) -> object:
        ...

    def save(self, value: int) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryHighScoreStore:
    def __init__(self, value: object = 0):
        self.value = value

    def load(self) -> object:
        return self.value

    def save(self, value: int) -> None:
        self.value = value

    def clear(self) -> None:
        self.value = 0


def load_high_score(store: HighScoreStore) -> int:
    try:
        raw = store.load()
    except (OSError, ValueError) as exc:
        logger.warning("high score unavailable, using 0: %s", exc)
        return 0
    value = as_number(raw)
    if value is None or value < 0:
        return 0
    return value


class ScoreSystem:
    def __init__(self, world: World, event_bus: EventBus, store: Optional[HighScoreStore] = None):
        self.world = world
        self.event_bus = event_bus
        self.store = store if store is not None else InMemoryHighScoreStore()
        get_game_state(world).high_score = load_high_score(self.store)
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self.on_score_changed)
        self.event_bus.subscribe(EVENT_HIGH_SCORE_CLEAR_REQUEST, self.on_clear_request)

    def on_score_changed(self, sender, **kwargs):
        state = get_game_state(self.world)
        score = kwargs.get('score', state.score)
        previous = state.high_score
        if score <= previous:
            return
        state.high_score = score
        try:
            self.store.save(score)
        except OSError as exc:
            logger.warning("could not persist high score %s: %s", score, exc)
        self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=score, previous=previous)

    def on_clear_request(self, sender, **kwargs):
        state = get_game_state(self.world)
        previous = state.high_score
        try:
            self.store.clear()
        except OSError as exc:
            logger.warning("could not clear stored high score: %s", exc)
        state.high_score = 0
        self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=0, previous=previous)
