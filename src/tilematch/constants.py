DEFAULT_ROWS = 8
DEFAULT_COLS = 8

# Scoring defaults (see config.ScoreConfig)
MATCH_BASE_SCORE = 60
CHAIN_MULTIPLIER = 1.5
SPECIAL_BONUS = {
    "none": 0,
    "line_clear_h": 80,
    "line_clear_v": 80,
    "area_clear": 100,
    "color_clear": 200,
    "scatter": 120,
}
OBSTACLE_BONUS = {
    "ice_1": 20,
    "ice_2": 40,
    "ice_3": 60,
    "chain": 30,
    "box_1": 50,
    "box_2": 100,
    "box_3": 150,
    "stone": 40,
    "honey": 80,
    "chocolate": 100,
    "carpet": 20,
}

# Logical barrier durations in seconds. Advanced only by tick events.
SWAP_DURATION = 0.15
REVERT_DURATION = 0.15
FALL_DURATION = 0.25

# Retry bounds
INITIAL_MATCH_MAX_ATTEMPTS = 100
SHUFFLE_MAX_ATTEMPTS = 120

# Safety cap for GameSession.settle(); a cascade always finishes far sooner.
SETTLE_MAX_TICKS = 10_000
SETTLE_TICK_DT = 1 / 60

EXTRA_MOVES_AMOUNT = 5

# Pointer travel (px) between press and release that counts as a swipe
SWIPE_MIN_DISTANCE = 30

# Star thresholds on moves_left / move budget
THREE_STAR_RATIO = 0.5
TWO_STAR_RATIO = 0.25

# Demo window geometry
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 720
TILE_SIZE = 64
BOTTOM_MARGIN = 20
TOP_MARGIN = 80
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.85
