import random

from esper import World

from tilematch.components.game_state import GameState, GameStatus
from tilematch.components.goal import GoalTracker
from tilematch.components.session import Session
from tilematch.config import LevelConfig, ScoreConfig
from tilematch.utils.goals import create_goals


def create_world(
    level: LevelConfig,
    *,
    rng: random.Random | None = None,
    score_config: ScoreConfig | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Single session entity holding lifecycle, counters and goals.
    world.create_entity(
        GameState(status=GameStatus.LOADING),
        Session(level=level, score_config=score_config or ScoreConfig(), moves_remaining=level.moves),
        GoalTracker(goals=create_goals(level)),
    )
    return world
