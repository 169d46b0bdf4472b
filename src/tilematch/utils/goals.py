from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from tilematch.components.goal import Goal, GoalTracker, GoalType
from tilematch.components.piece import ObstacleType, Piece
from tilematch.config import LevelConfig


def create_goals(level: LevelConfig) -> List[Goal]:
    return [Goal(goal_type=spec.goal_type, target=spec.target, required=spec.required) for spec in level.goals]


def record_collected(tracker: GoalTracker, pieces: Iterable[Piece]) -> List[Goal]:
    """Advance collect goals by one per matched piece of the target colour."""
    counts = Counter(piece.piece_type.value for piece in pieces)
    changed: List[Goal] = []
    for goal in tracker.goals:
        if goal.goal_type is not GoalType.COLLECT:
            continue
        if goal.advance(counts.get(goal.target, 0)):
            changed.append(goal)
    return changed


def record_score(tracker: GoalTracker, score: int) -> List[Goal]:
    changed: List[Goal] = []
    for goal in tracker.goals:
        if goal.goal_type is not GoalType.SCORE:
            continue
        if goal.advance(score - goal.current):
            changed.append(goal)
    return changed


def record_obstacle_layers(tracker: GoalTracker, obstacle: ObstacleType, layers: int = 1) -> List[Goal]:
    """Credit destroyed layers to goals whose target shares the obstacle's family."""
    changed: List[Goal] = []
    for goal in tracker.goals:
        if goal.goal_type is not GoalType.DESTROY_OBSTACLE:
            continue
        if ObstacleType(goal.target).family != obstacle.family:
            continue
        if goal.advance(layers):
            changed.append(goal)
    return changed


def goals_complete(tracker: GoalTracker) -> bool:
    return all(goal.complete for goal in tracker.goals)
