from enum import Enum


class BoosterType(Enum):
    HAMMER = "hammer"
    EXTRA_MOVES = "extra_moves"
    SHUFFLE = "shuffle"
