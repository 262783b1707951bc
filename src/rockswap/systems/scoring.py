"""Clearing matched cells and turning them into points.

Points are ``per_cell * size + bonus(size)`` where ``bonus`` adds the exact-size
bonus and the bonus of the highest at-least threshold the size reaches. With
``groups`` every group is priced on its own size; otherwise the whole call is
priced once on the number of cells it actually cleared.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Optional, Tuple

from rockswap.components.board import Board
from rockswap.components.scoring import ScoringBonuses, ScoringConfig, clean_table, default_scoring
from rockswap.components.tile import EMPTY, Position

ClearedEntry = Tuple[int, int, int]


def _is_mask(target) -> bool:
    if not isinstance(target, Sequence) or not target:
        return False
    first = target[0]
    return isinstance(first, Sequence) and all(isinstance(value, bool) for value in first)


def _as_position(item) -> Optional[Position]:
    if not isinstance(item, Sequence) or len(item) != 2:
        return None
    row, col = item
    if isinstance(row, bool) or isinstance(col, bool):
        return None
    if not isinstance(row, int) or not isinstance(col, int):
        return None
    return row, col


def dedupe_cells(cells: Iterable) -> List[Position]:
    """Unique (row, col) pairs in first-seen order; malformed entries are skipped."""
    seen: set[Position] = set()
    out: List[Position] = []
    for item in cells:
        pos = _as_position(item)
        if pos is None or pos in seen:
            continue
        seen.add(pos)
        out.append(pos)
    return out


def cells_from_mask(board: Board, mask: Sequence[Sequence[bool]]) -> List[Position]:
    out: List[Position] = []
    for r in range(min(len(mask), board.rows)):
        mask_row = mask[r]
        for c in range(min(len(mask_row), board.cols)):
            if mask_row[c] is True:
                out.append((r, c))
    return out


def compute_bonus(size: int, bonuses: Optional[ScoringBonuses]) -> float:
    if bonuses is None:
        return 0
    total = 0
    exact = clean_table(bonuses.exact)
    total += exact.get(size, 0)
    best = 0
    at_least = clean_table(bonuses.at_least)
    for threshold in sorted(at_least):
        if size < threshold:
            break
        best = at_least[threshold]
    return total + best


def clear_cells(board: Board, targets: Iterable[Position]) -> List[ClearedEntry]:
    """Set each in-bounds occupied target to EMPTY; return (row, col, kind) of those cleared."""
    cleared: List[ClearedEntry] = []
    for row, col in targets:
        if not board.in_bounds(row, col) or board.is_empty(row, col):
            continue
        cleared.append((row, col, board.cells[row][col]))
        board.cells[row][col] = EMPTY
    return cleared


def price(size: int, scoring: ScoringConfig) -> float:
    return size * scoring.effective_per_cell + compute_bonus(size, scoring.bonuses)


def clear_and_score(
    board: Board,
    target,
    *,
    groups: Optional[Iterable[Iterable[Position]]] = None,
    scoring: Optional[ScoringConfig] = None,
) -> float:
    """Clear ``target`` (coordinates or a boolean mask) and return the points earned.

    Already-empty and out-of-bounds targets are ignored. Clearing happens once
    whichever way the points are counted.
    """
    rules = scoring if scoring is not None else default_scoring()
    if not isinstance(target, Sequence) and not isinstance(target, (set, frozenset)):
        target = list(target)
    targets = cells_from_mask(board, target) if _is_mask(target) else dedupe_cells(target)
    cleared = clear_cells(board, targets)

    group_list = list(groups) if groups is not None else []
    if group_list:
        sizes = [len(dedupe_cells(group)) for group in group_list]
        return sum(price(size, rules) for size in sizes if size > 0)
    return price(len(cleared), rules)


def describe_scoring(scoring: ScoringConfig) -> str:
    """One-line summary of the rules, e.g. for a score tooltip."""
    exact = clean_table(scoring.bonuses.exact)
    at_least = clean_table(scoring.bonuses.at_least)
    exact_text = ", ".join(f"for {size}: {exact[size]} pts" for size in sorted(exact)) or "none"
    at_least_text = " | ".join(f"{size}+ cells: +{at_least[size]} pts" for size in sorted(at_least)) or "none"
    return f"Scoring: {scoring.effective_per_cell} pts/cell; bonus {exact_text}; {at_least_text}."
