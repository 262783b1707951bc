from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody holds a reference to alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_FINALIZE = "tile_swap_finalize"    # payload: src=(r,c), dst=(r,c)


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,kind),...], points=int, depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...], depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...], points=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, total_score=int, halted=bool
EVENT_CASCADE_HALTED = "cascade_halted"            # payload: passes=int, max_passes=int
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str


# ============================================================================
# SCORE & SESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"                      # payload: score=int, delta=int
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"            # payload: high_score=int, previous=int
EVENT_HIGH_SCORE_CLEAR_REQUEST = "high_score_clear_request"  # payload: None
EVENT_RESTART_REQUEST = "restart_request"                  # payload: None
EVENT_GAME_RESTARTED = "game_restarted"                    # payload: rows=int, cols=int
