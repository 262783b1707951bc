"""Run detection over a board.

A match is a maximal horizontal or vertical run of at least three cells holding
the same kind. EMPTY cells end a run and never start one.
"""
from __future__ import annotations

from typing import FrozenSet, List, Set

from rockswap.components.board import Board
from rockswap.components.tile import EMPTY, Position
from rockswap.constants import MIN_RUN_LENGTH

Mask = List[List[bool]]


def make_mask(rows: int, cols: int) -> Mask:
    return [[False] * cols for _ in range(rows)]


def find_runs(board: Board) -> List[List[Position]]:
    """Every maximal run of MIN_RUN_LENGTH or more, rows first then columns."""
    runs: List[List[Position]] = []
    # Horizontal runs
    for r in range(board.rows):
        run: List[Position] = []
        last = EMPTY
        for c in range(board.cols):
            value = board.cells[r][c]
            if value is not EMPTY and value == last:
                run.append((r, c))
                continue
            if len(run) >= MIN_RUN_LENGTH:
                runs.append(run)
            run = [(r, c)] if value is not EMPTY else []
            last = value
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
    # Vertical runs
    for c in range(board.cols):
        run = []
        last = EMPTY
        for r in range(board.rows):
            value = board.cells[r][c]
            if value is not EMPTY and value == last:
                run.append((r, c))
                continue
            if len(run) >= MIN_RUN_LENGTH:
                runs.append(run)
            run = [(r, c)] if value is not EMPTY else []
            last = value
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
    return runs


def find_matches_mask(board: Board) -> Mask:
    mask = make_mask(board.rows, board.cols)
    for run in find_runs(board):
        for r, c in run:
            mask[r][c] = True
    return mask


def find_matches(board: Board) -> FrozenSet[Position]:
    """Coordinates of every matched cell; a cell in two runs appears once."""
    return frozenset(pos for run in find_runs(board) for pos in run)


def has_any(mask: Mask) -> bool:
    return any(any(row) for row in mask)


def has_matches(board: Board) -> bool:
    return bool(find_runs(board))


def combine_masks(a: Mask, b: Mask) -> Mask:
    """Cell-wise OR of two masks; the result covers the larger of the two shapes."""
    rows = max(len(a), len(b))
    cols = max((len(row) for row in (*a, *b)), default=0)
    out = make_mask(rows, cols)
    for r in range(rows):
        row_a = a[r] if r < len(a) else []
        row_b = b[r] if r < len(b) else []
        for c in range(cols):
            out[r][c] = (c < len(row_a) and row_a[c] is True) or (c < len(row_b) and row_b[c] is True)
    return out


def find_match_groups(board: Board) -> List[List[Position]]:
    """Runs grouped into match events; runs that share a cell (L/T shapes) merge."""
    groups = [set(run) for run in find_runs(board)]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop(0)
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return [sorted(group) for group in merged]
