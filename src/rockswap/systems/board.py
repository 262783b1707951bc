from typing import Optional, Tuple

from esper import World

from rockswap.components.board import Board
from rockswap.constants import GRID_COLS, GRID_ROWS
from rockswap.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                 EVENT_TILE_SWAP_REQUEST, EVENT_RESTART_REQUEST, EVENT_GAME_RESTARTED,
                                 EVENT_BOARD_CHANGED)
from rockswap.systems.board_ops import create_board, get_game_state, get_tile_registry, replace_board, world_rng
from rockswap.systems.swap import is_adjacent


class BoardSystem:
    """Owns the board entity and the two-click swap selection.

    First click selects a tile, a click on an adjacent tile requests the swap,
    a click elsewhere moves the selection and clicking the selected tile again
    drops it. Clicks are ignored while a cascade is resolving.
    """

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        self.world = world
        self.event_bus = event_bus
        self.rows = rows
        self.cols = cols
        self.board_entity = self.world.create_entity(self._new_board())
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_restart)

    def _new_board(self) -> Board:
        registry = get_tile_registry(self.world)
        return create_board(self.rows, self.cols, registry.kinds, world_rng(self.world))

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if get_game_state(self.world).cascade_active:
            return
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        if not board.in_bounds(row, col):
            return
        if self.selected is None:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif self.selected == (row, col):
            self._deselect(reason='same_tile')
        elif is_adjacent(self.selected, (row, col)):
            src = self.selected
            self.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=(row, col))
        else:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def _deselect(self, reason: str):
        prev = self.selected
        if prev is None:
            return
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])

    def on_restart(self, sender, **kwargs):
        state = get_game_state(self.world)
        if state.cascade_active:
            return
        self._deselect(reason='restart')
        replace_board(self.world, self._new_board())
        state.score = 0
        state.moves = 0
        self.event_bus.emit(EVENT_GAME_RESTARTED, rows=self.rows, cols=self.cols)
        # Creation tolerates the odd starting run; let resolution clear it.
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='restart')
