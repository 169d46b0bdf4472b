"""Immutable level and scoring configuration.

Levels are plain frozen dataclasses so the engine can share one instance across
restarts. ``LevelConfig.from_dict`` accepts the JSON shape used by level files::

    {
        "id": 3, "rows": 8, "cols": 8, "moves": 30,
        "palette": ["red", "blue", "green", "yellow", "purple"],
        "goals": [{"type": "destroy_obstacle", "target": "ice_1", "count": 20}],
        "layout": ["xxxxxxxx", ...],           # optional, '.' marks a hole
        "spawners": [[0, 0], [0, 1]],          # optional
        "obstacles": [{"row": 3, "col": 3, "type": "ice_1"}],
        "collectibles": [{"row": 0, "col": 4, "type": "apple"}]
    }
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from tilematch.components.goal import GoalType
from tilematch.components.piece import CollectibleType, ObstacleType, PieceType
from tilematch.constants import CHAIN_MULTIPLIER, MATCH_BASE_SCORE, OBSTACLE_BONUS, SPECIAL_BONUS

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

PLAYABLE_MARK = "x"
HOLE_MARK = "."

DEFAULT_PALETTE: Tuple[PieceType, ...] = (
    PieceType.RED,
    PieceType.BLUE,
    PieceType.GREEN,
    PieceType.YELLOW,
    PieceType.PURPLE,
)


class LevelConfigError(ValueError):
    """Raised when level content is malformed."""


@dataclass(frozen=True)
class ScoreConfig:
    match_base: int = MATCH_BASE_SCORE
    chain_multiplier: float = CHAIN_MULTIPLIER
    special_bonus: Mapping[str, int] = field(default_factory=lambda: dict(SPECIAL_BONUS))
    obstacle_bonus: Mapping[str, int] = field(default_factory=lambda: dict(OBSTACLE_BONUS))


@dataclass(frozen=True)
class GoalSpec:
    goal_type: GoalType
    target: str
    required: int


@dataclass(frozen=True)
class ObstaclePlacement:
    row: int
    col: int
    obstacle: ObstacleType


@dataclass(frozen=True)
class CollectiblePlacement:
    row: int
    col: int
    collectible: CollectibleType


@dataclass(frozen=True)
class LevelConfig:
    level_id: int
    rows: int
    cols: int
    moves: int
    goals: Tuple[GoalSpec, ...] = ()
    palette: Tuple[PieceType, ...] = DEFAULT_PALETTE
    layout: Optional[Tuple[str, ...]] = None
    spawners: Tuple[Position, ...] = ()
    obstacles: Tuple[ObstaclePlacement, ...] = ()
    collectibles: Tuple[CollectiblePlacement, ...] = ()

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise LevelConfigError(f"level {self.level_id}: board must be at least 1x1")
        if self.moves < 0:
            raise LevelConfigError(f"level {self.level_id}: negative move budget")
        if not self.palette:
            raise LevelConfigError(f"level {self.level_id}: palette is empty")
        if PieceType.EMPTY in self.palette:
            raise LevelConfigError(f"level {self.level_id}: 'empty' cannot be spawned")
        if self.layout is not None:
            if len(self.layout) != self.rows or any(len(line) != self.cols for line in self.layout):
                raise LevelConfigError(f"level {self.level_id}: layout does not match {self.rows}x{self.cols}")
            if any(ch not in (PLAYABLE_MARK, HOLE_MARK) for line in self.layout for ch in line):
                raise LevelConfigError(f"level {self.level_id}: layout may only use 'x' and '.'")
        for spec in self.goals:
            if spec.required <= 0:
                raise LevelConfigError(f"level {self.level_id}: goal {spec.target} needs a positive count")
            if spec.goal_type is GoalType.COLLECT:
                self._require_enum(PieceType, spec.target)
            elif spec.goal_type is GoalType.DESTROY_OBSTACLE:
                self._require_enum(ObstacleType, spec.target)
        for row, col in self.spawners:
            self._require_playable(row, col, "spawner")
        for placement in self.obstacles:
            self._require_playable(placement.row, placement.col, "obstacle")
        for placement in self.collectibles:
            self._require_playable(placement.row, placement.col, "collectible")

    def _require_enum(self, enum_cls, value: str):
        try:
            enum_cls(value)
        except ValueError as exc:
            raise LevelConfigError(f"level {self.level_id}: unknown goal target {value!r}") from exc

    def _require_playable(self, row: int, col: int, what: str):
        if not self.is_playable(row, col):
            raise LevelConfigError(f"level {self.level_id}: {what} at {(row, col)} is not on a playable cell")

    def is_playable(self, row: int, col: int) -> bool:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            return False
        if self.layout is None:
            return True
        return self.layout[row][col] == PLAYABLE_MARK

    def spawner_positions(self) -> FrozenSet[Position]:
        """Declared spawners, or the topmost playable cell of each column."""
        if self.spawners:
            return frozenset(self.spawners)
        tops = set()
        for col in range(self.cols):
            for row in range(self.rows):
                if self.is_playable(row, col):
                    tops.add((row, col))
                    break
        return frozenset(tops)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LevelConfig":
        try:
            goals = tuple(
                GoalSpec(
                    goal_type=GoalType(entry["type"]),
                    target=str(entry.get("target", "score")),
                    required=int(entry["count"]),
                )
                for entry in data.get("goals", ())
            )
            palette = tuple(PieceType(name) for name in data.get("palette", [p.value for p in DEFAULT_PALETTE]))
            layout = data.get("layout")
            obstacles = tuple(
                ObstaclePlacement(int(entry["row"]), int(entry["col"]), ObstacleType(entry["type"]))
                for entry in data.get("obstacles", ())
            )
            collectibles = tuple(
                CollectiblePlacement(int(entry["row"]), int(entry["col"]), CollectibleType(entry["type"]))
                for entry in data.get("collectibles", ())
            )
            return cls(
                level_id=int(data["id"]),
                rows=int(data["rows"]),
                cols=int(data["cols"]),
                moves=int(data["moves"]),
                goals=goals,
                palette=palette,
                layout=tuple(layout) if layout is not None else None,
                spawners=tuple((int(r), int(c)) for r, c in data.get("spawners", ())),
                obstacles=obstacles,
                collectibles=collectibles,
            )
        except LevelConfigError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise LevelConfigError(f"invalid level definition: {exc}") from exc


def load_level_config(path: Path | str) -> LevelConfig:
    """Read a single level from a JSON file."""
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            data: Dict[str, Any] = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise LevelConfigError(f"cannot read level file {file_path}: {exc}") from exc
    level = LevelConfig.from_dict(data)
    logger.debug("Loaded level %s from %s", level.level_id, file_path)
    return level
