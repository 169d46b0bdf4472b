from dataclasses import dataclass, field
from enum import Enum
from typing import List


class GoalType(Enum):
    SCORE = "score"
    COLLECT = "collect"
    DESTROY_OBSTACLE = "destroy_obstacle"
    DROP_ITEM = "drop_item"


@dataclass(slots=True)
class Goal:
    """Progress toward one level target.

    ``target`` is a piece type value for collect goals, an obstacle type value
    for destroy goals and ``"score"`` for score goals.
    """
    goal_type: GoalType
    target: str
    required: int
    current: int = 0

    @property
    def complete(self) -> bool:
        return self.current >= self.required

    def advance(self, amount: int) -> bool:
        """Add progress clamped to ``required``. Returns True if it changed."""
        if amount <= 0:
            return False
        updated = min(self.required, self.current + amount)
        if updated == self.current:
            return False
        self.current = updated
        return True


@dataclass(slots=True)
class GoalTracker:
    goals: List[Goal] = field(default_factory=list)
