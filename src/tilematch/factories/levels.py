from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Sequence

from tilematch.components.goal import GoalType
from tilematch.components.piece import ObstacleType, PieceType
from tilematch.config import GoalSpec, LevelConfig, ObstaclePlacement, load_level_config

R, B, G, Y, P, O = (
    PieceType.RED,
    PieceType.BLUE,
    PieceType.GREEN,
    PieceType.YELLOW,
    PieceType.PURPLE,
    PieceType.ORANGE,
)


def _placements(obstacle: ObstacleType, cells: Iterable[tuple[int, int]]) -> List[ObstaclePlacement]:
    return [ObstaclePlacement(row, col, obstacle) for row, col in cells]


_LEVEL_SPECS: Mapping[int, LevelConfig] = {
    # Tutorial: reach a score.
    1: LevelConfig(
        level_id=1,
        rows=8,
        cols=8,
        moves=25,
        goals=(GoalSpec(GoalType.SCORE, "score", 1000),),
        palette=(R, B, G, Y, P),
    ),
    # Collect two colours.
    2: LevelConfig(
        level_id=2,
        rows=8,
        cols=8,
        moves=20,
        goals=(
            GoalSpec(GoalType.COLLECT, R.value, 30),
            GoalSpec(GoalType.COLLECT, B.value, 30),
        ),
        palette=(R, B, G, Y),
    ),
    # Twenty iced pieces in the lower middle of the board.
    3: LevelConfig(
        level_id=3,
        rows=8,
        cols=8,
        moves=30,
        goals=(GoalSpec(GoalType.DESTROY_OBSTACLE, ObstacleType.ICE_1.value, 20),),
        palette=(R, B, G, Y, P),
        obstacles=tuple(
            _placements(ObstacleType.ICE_1, [(row, col) for row in range(3, 8) for col in range(2, 6)])
        ),
    ),
    # Octagonal board; spawners default to the top of each column.
    4: LevelConfig(
        level_id=4,
        rows=9,
        cols=9,
        moves=35,
        goals=(
            GoalSpec(GoalType.SCORE, "score", 5000),
            GoalSpec(GoalType.COLLECT, G.value, 50),
        ),
        palette=(R, B, G, Y, P, O),
        layout=(
            "..xxxxx..",
            ".xxxxxxx.",
            "xxxxxxxxx",
            "xxxxxxxxx",
            "xxxxxxxxx",
            "xxxxxxxxx",
            "xxxxxxxxx",
            ".xxxxxxx.",
            "..xxxxx..",
        ),
    ),
    # Boxes count per layer: ten single boxes plus a double and a triple.
    5: LevelConfig(
        level_id=5,
        rows=9,
        cols=9,
        moves=40,
        goals=(
            GoalSpec(GoalType.COLLECT, R.value, 100),
            GoalSpec(GoalType.DESTROY_OBSTACLE, ObstacleType.BOX_1.value, 15),
        ),
        palette=(R, B, G, Y, P, O),
        obstacles=tuple(
            _placements(ObstacleType.BOX_1, [(4, c) for c in range(9) if c != 4] + [(8, 3), (8, 5)])
            + _placements(ObstacleType.BOX_2, [(4, 4)])
            + _placements(ObstacleType.ICE_2, [(5, 4)])
            + _placements(ObstacleType.CHAIN, [(6, 3), (6, 5)])
            + _placements(ObstacleType.BOX_3, [(7, 4)])
        ),
    ),
}


def all_levels() -> Sequence[LevelConfig]:
    return [_LEVEL_SPECS[level_id] for level_id in sorted(_LEVEL_SPECS)]


def get_level(level_id: int) -> LevelConfig | None:
    return _LEVEL_SPECS.get(level_id)


def load_levels(directory: Path | str) -> List[LevelConfig]:
    """Load every ``*.json`` level in a directory, ordered by level id."""
    levels = [load_level_config(path) for path in sorted(Path(directory).glob("*.json"))]
    return sorted(levels, key=lambda level: level.level_id)
