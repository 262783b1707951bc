import math

from rockswap.components.board import Board
from rockswap.components.scoring import ScoringBonuses, ScoringConfig, default_scoring
from rockswap.components.tile import EMPTY
from rockswap.systems.scoring import clear_and_score, compute_bonus, dedupe_cells, describe_scoring


def _rules():
    return ScoringConfig(per_cell=10, bonuses=ScoringBonuses(exact={4: 5}, at_least={6: 25}))


def _row_board(cols=7):
    return Board.from_rows([[c % 3 for c in range(cols)]])


def test_exact_bonus_for_four():
    board = _row_board()
    assert clear_and_score(board, [(0, c) for c in range(4)], scoring=_rules()) == 45


def test_at_least_bonus_for_six():
    board = _row_board()
    assert clear_and_score(board, [(0, c) for c in range(6)], scoring=_rules()) == 85


def test_at_least_bonus_for_seven():
    board = _row_board()
    assert clear_and_score(board, [(0, c) for c in range(7)], scoring=_rules()) == 95


def test_cleared_cells_become_empty():
    board = _row_board()
    clear_and_score(board, [(0, 1), (0, 2), (0, 3)], scoring=_rules())
    assert [board.get(0, c) for c in range(7)] == [0, EMPTY, EMPTY, EMPTY, 1, 2, 0]


def test_duplicates_and_already_empty_targets_do_not_count():
    board = _row_board()
    first = clear_and_score(board, [(0, 0), (0, 0), (0, 1), (0, 2)], scoring=_rules())
    assert first == 30
    assert clear_and_score(board, [(0, 0), (0, 1), (0, 2)], scoring=_rules()) == 0


def test_out_of_bounds_targets_ignored():
    board = _row_board()
    before = board.snapshot()
    assert clear_and_score(board, [(-1, 0), (0, 7), (3, 3)], scoring=_rules()) == 0
    assert board.snapshot() == before


def test_mask_target():
    board = Board.from_rows([[0, 1, 2], [2, 1, 0]])
    mask = [[True, False, True], [False, True, False]]
    assert clear_and_score(board, mask, scoring=_rules()) == 30
    assert board.snapshot() == [[EMPTY, 1, EMPTY], [2, EMPTY, 0]]


def test_group_mode_scores_each_group():
    board = _row_board()
    groups = [[(0, 0), (0, 1), (0, 2)], [(0, 3), (0, 4), (0, 5), (0, 6), (0, 6)]]
    targets = [pos for group in groups for pos in group]
    points = clear_and_score(board, targets, groups=groups, scoring=_rules())
    assert points == (30 + 0) + (40 + 5)
    assert board.empty_positions() == [(0, c) for c in range(7)]


def test_empty_groups_fall_back_to_total():
    board = _row_board()
    assert clear_and_score(board, [(0, c) for c in range(4)], groups=[], scoring=_rules()) == 45


def test_exact_and_at_least_are_additive():
    bonuses = ScoringBonuses(exact={6: 7}, at_least={3: 1, 6: 25, 9: 100})
    assert compute_bonus(6, bonuses) == 32
    assert compute_bonus(8, bonuses) == 25
    assert compute_bonus(2, bonuses) == 0
    assert compute_bonus(4, None) == 0


def test_malformed_config_uses_safe_defaults():
    board = _row_board()
    rules = ScoringConfig(
        per_cell=math.nan,
        bonuses=ScoringBonuses(exact={'4': 'x', 3: math.inf}, at_least={'abc': 5, 5: None}),
    )
    assert clear_and_score(board, [(0, 0), (0, 1), (0, 2)], scoring=rules) == 30


def test_default_rules_apply_without_config():
    board = _row_board()
    assert clear_and_score(board, [(0, c) for c in range(5)]) == 50 + 15


def test_from_mapping_accepts_loose_data():
    rules = ScoringConfig.from_mapping({
        "perCell": 12,
        "bonuses": {"exact": {"4": 5, "four": 9}, "atLeast": {"6": 25, "7": "lots"}},
    })
    assert rules.per_cell == 12
    assert rules.bonuses.exact == {4: 5}
    assert rules.bonuses.at_least == {6: 25}


def test_from_mapping_defaults():
    rules = ScoringConfig.from_mapping(None)
    assert rules.per_cell == 10
    assert rules.bonuses.exact == {} and rules.bonuses.at_least == {}
    assert ScoringConfig.from_mapping({"per_cell": float("inf")}).per_cell == 10
    assert ScoringConfig.from_mapping({"per_cell": -4}).per_cell == 10
    assert ScoringConfig.from_mapping({"perCell": "12"}).per_cell == 10


def test_dedupe_skips_malformed_entries():
    assert dedupe_cells([(0, 1), (0, 1), (1,), "ab", (1.5, 2), (True, 0), [2, 3]]) == [(0, 1), (2, 3)]


def test_describe_default_scoring():
    assert describe_scoring(default_scoring()) == (
        "Scoring: 10 pts/cell; bonus for 3: 0 pts, for 4: 5 pts, for 5: 15 pts; 6+ cells: +25 pts."
    )


def test_numeric_strings_are_not_prices():
    board = _row_board()
    rules = ScoringConfig(per_cell=10, bonuses=ScoringBonuses(exact={4: "500"}, at_least={3: "7"}))
    assert clear_and_score(board, [(0, c) for c in range(4)], scoring=rules) == 40

    board = _row_board()
    assert clear_and_score(board, [(0, 0), (0, 1), (0, 2)], scoring=ScoringConfig(per_cell="3")) == 30


def test_total_mode_prices_zero_cleared_cells():
    board = Board.from_rows([[0, 1, 2]])
    rules = ScoringConfig(per_cell=10, bonuses=ScoringBonuses(exact={0: 5}, at_least={0: 3}))
    assert clear_and_score(board, [], scoring=rules) == 8
    assert clear_and_score(board, [(0, 0)], groups=[[]], scoring=rules) == 0
