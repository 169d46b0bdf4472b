from dataclasses import dataclass
from typing import Optional, Tuple

from tilematch.config import LevelConfig, ScoreConfig


@dataclass(slots=True)
class Session:
    """Per-play counters stored on the session entity."""
    level: LevelConfig
    score_config: ScoreConfig
    score: int = 0
    moves_remaining: int = 0
    cascade_depth: int = 0
    selected: Optional[Tuple[int, int]] = None
