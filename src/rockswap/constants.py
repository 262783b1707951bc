GRID_ROWS = 8
GRID_COLS = 8

# Runs shorter than this never clear.
MIN_RUN_LENGTH = 3

# Re-draw budgets for the "avoid an immediate run" policy. After the budget is
# spent the last draw is accepted as-is, so a rare starting/refill match is possible.
CREATE_MAX_RETRIES = 12
REFILL_MAX_RETRIES = 10

# Safety fuse for runaway cascades.
MAX_CASCADE_PASSES = 80

DEFAULT_PER_CELL = 10

# Rock kinds in ordinal order: label -> RGB used by presentation layers.
DEFAULT_TILE_TYPES = {
    'gray':   (132, 134, 134),
    'green':  (153, 187, 119),   # #9b7
    'orange': (187, 153, 119),   # #b97
    'purple': (170, 119, 153),   # #a79
    'blue':   (119, 170, 187),   # #7ab
    'yellow': (216, 216, 133),
}
