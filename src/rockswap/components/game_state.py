"""Game session resource: running score, moves made and best score seen."""
from dataclasses import dataclass

from rockswap.constants import MAX_CASCADE_PASSES


@dataclass
class GameState:
    """Singleton component storing the active session's counters."""
    score: int = 0
    moves: int = 0
    high_score: int = 0
    max_passes: int = MAX_CASCADE_PASSES
    # Set while a cascade is resolving; input systems ignore requests meanwhile.
    cascade_active: bool = False
