from __future__ import annotations

import math
from typing import Iterable

from tilematch.components.match import Match
from tilematch.components.piece import ObstacleType
from tilematch.config import ScoreConfig
from tilematch.constants import THREE_STAR_RATIO, TWO_STAR_RATIO


def score_for_match(match: Match, depth: int, config: ScoreConfig) -> int:
    base = match.length * config.match_base + config.special_bonus.get(match.special_generated.value, 0)
    return math.floor(base * config.chain_multiplier ** depth)


def score_for_matches(matches: Iterable[Match], depth: int, config: ScoreConfig) -> int:
    return sum(score_for_match(match, depth, config) for match in matches)


def obstacle_bonus(obstacle: ObstacleType, config: ScoreConfig) -> int:
    return config.obstacle_bonus.get(obstacle.value, 0)


def compute_stars(moves_left: int, move_budget: int) -> int:
    if move_budget <= 0:
        return 1
    ratio = moves_left / move_budget
    if ratio >= THREE_STAR_RATIO:
        return 3
    if ratio >= TWO_STAR_RATIO:
        return 2
    return 1
