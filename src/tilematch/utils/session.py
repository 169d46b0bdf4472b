from __future__ import annotations

from esper import World

from tilematch.components.goal import GoalTracker
from tilematch.components.session import Session


def get_session(world: World) -> Session:
    for _, session in world.get_component(Session):
        return session
    raise RuntimeError("Session not found")


def get_goal_tracker(world: World) -> GoalTracker:
    for _, tracker in world.get_component(GoalTracker):
        return tracker
    raise RuntimeError("GoalTracker not found")
