"""Public facade wiring the world, the event bus and the resolution systems."""
from __future__ import annotations

import dataclasses
import random
from typing import Callable, List, Optional, Tuple

from tilematch.components.board import Board
from tilematch.components.booster import BoosterType
from tilematch.components.game_state import BUSY_STATES, GameStatus
from tilematch.components.goal import Goal
from tilematch.config import LevelConfig, ScoreConfig
from tilematch.constants import SETTLE_MAX_TICKS, SETTLE_TICK_DT
from tilematch.events.bus import EVENT_TICK, EventBus
from tilematch.systems.animation import AnimationSystem
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import board_snapshot
from tilematch.systems.booster_system import BoosterSystem
from tilematch.systems.game_flow_system import GameFlowSystem
from tilematch.systems.match_detection import find_possible_swaps
from tilematch.systems.match_resolution import MatchResolutionSystem
from tilematch.utils.game_state import get_game_status
from tilematch.utils.session import get_goal_tracker, get_session
from tilematch.world import create_world

Position = Tuple[int, int]


class GameSession:
    """One play of one level.

    Construction builds the board and leaves the session in ``loading``;
    ``start`` initializes it (if needed) and begins play. Barriers only
    advance through ``tick``/``settle`` or ``tick`` events on the bus.
    """

    def __init__(
        self,
        level: LevelConfig,
        *,
        rng: random.Random | None = None,
        score_config: ScoreConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.event_bus = event_bus or EventBus()
        self.world = create_world(level, rng=rng, score_config=score_config)
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.booster_system = BoosterSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, self.board_system)

    def on(self, name: str, fn: Callable) -> None:
        self.event_bus.subscribe(name, fn)

    # Lifecycle -------------------------------------------------------------
    def initialize(self) -> bool:
        return self.game_flow_system.initialize()

    def start(self) -> bool:
        if self.state == GameStatus.LOADING:
            self.initialize()
        return self.game_flow_system.start()

    def pause(self) -> bool:
        return self.game_flow_system.pause()

    def resume(self) -> bool:
        return self.game_flow_system.resume()

    def restart(self) -> bool:
        return self.game_flow_system.restart()

    # Input -----------------------------------------------------------------
    def select_piece(self, row: int, col: int) -> bool:
        return self.board_system.select_piece(row, col)

    def swipe(self, row: int, col: int, direction: str) -> bool:
        return self.board_system.swipe(row, col, direction)

    def use_booster(self, booster: BoosterType | str, row: int | None = None, col: int | None = None) -> bool:
        return self.booster_system.use(booster, row, col)

    # Driving ---------------------------------------------------------------
    def tick(self, dt: float = SETTLE_TICK_DT) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def settle(self, max_ticks: int = SETTLE_MAX_TICKS) -> bool:
        """Tick until the engine is no longer busy. Returns False if it never settled."""
        for _ in range(max_ticks):
            if self.state not in BUSY_STATES:
                return True
            self.tick(SETTLE_TICK_DT)
        return self.state not in BUSY_STATES

    # Read accessors --------------------------------------------------------
    @property
    def level(self) -> LevelConfig:
        return get_session(self.world).level

    @property
    def state(self) -> Optional[GameStatus]:
        return get_game_status(self.world)

    @property
    def score(self) -> int:
        return get_session(self.world).score

    @property
    def moves_remaining(self) -> int:
        return get_session(self.world).moves_remaining

    @property
    def selected(self) -> Optional[Position]:
        return get_session(self.world).selected

    @property
    def goals(self) -> List[Goal]:
        return [dataclasses.replace(goal) for goal in get_goal_tracker(self.world).goals]

    @property
    def board(self) -> Board:
        """The live board. Mutating it outside the engine is for tests and tools only."""
        return self.board_system.board

    def board_snapshot(self):
        return board_snapshot(self.board)

    def possible_swaps(self) -> List[Tuple[Position, Position]]:
        return find_possible_swaps(self.board)
