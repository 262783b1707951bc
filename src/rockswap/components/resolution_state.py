from dataclasses import dataclass


@dataclass(slots=True)
class ResolutionState:
    """Transient state of one cascade resolution.

    Created when a resolution starts and dropped when it finishes, so it never
    outlives a single cycle.
    """

    in_progress: bool = False
    pass_count: int = 0
    chain: int = 1
    total_score: int = 0
