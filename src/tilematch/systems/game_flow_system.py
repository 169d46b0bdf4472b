"""Lifecycle coordinator: start, pause, restart and end-of-turn evaluation."""
from __future__ import annotations

import logging

from esper import World

from tilematch.components.game_state import BUSY_STATES, GameStatus
from tilematch.events.bus import (
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_GAME_LOST,
    EVENT_GAME_WON,
    EVENT_INITIALIZED,
    EVENT_NEEDS_SHUFFLE,
    EVENT_PAUSED,
    EVENT_RESUMED,
    EVENT_STARTED,
    EventBus,
)
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_fill import shuffle_board
from tilematch.systems.board_ops import get_board
from tilematch.systems.match_detection import find_possible_swaps
from tilematch.utils.game_state import get_game_status, set_game_state
from tilematch.utils.goals import create_goals, goals_complete
from tilematch.utils.scoring import compute_stars
from tilematch.utils.session import get_goal_tracker, get_session

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Central coordinator for the session lifecycle."""

    def __init__(self, world: World, event_bus: EventBus, board_system: BoardSystem) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)

    def initialize(self) -> bool:
        if get_game_status(self.world) != GameStatus.LOADING:
            return False
        set_game_state(self.world, self.event_bus, GameStatus.READY)
        session = get_session(self.world)
        level = session.level
        self.event_bus.emit(
            EVENT_INITIALIZED,
            level_id=level.level_id,
            rows=level.rows,
            cols=level.cols,
            moves=session.moves_remaining,
        )
        return True

    def start(self) -> bool:
        if get_game_status(self.world) != GameStatus.READY:
            return False
        set_game_state(self.world, self.event_bus, GameStatus.PLAYING)
        self.event_bus.emit(EVENT_STARTED)
        logger.info("Level %s started", get_session(self.world).level.level_id)
        return True

    def pause(self) -> bool:
        if get_game_status(self.world) != GameStatus.PLAYING:
            return False
        set_game_state(self.world, self.event_bus, GameStatus.PAUSED)
        self.event_bus.emit(EVENT_PAUSED)
        return True

    def resume(self) -> bool:
        if get_game_status(self.world) != GameStatus.PAUSED:
            return False
        set_game_state(self.world, self.event_bus, GameStatus.PLAYING)
        self.event_bus.emit(EVENT_RESUMED)
        return True

    def restart(self) -> bool:
        """Rebuild the board and counters for the same level, then play again."""
        status = get_game_status(self.world)
        if status is None or status in BUSY_STATES or status == GameStatus.LOADING:
            return False
        set_game_state(self.world, self.event_bus, GameStatus.LOADING)
        session = get_session(self.world)
        session.score = 0
        session.moves_remaining = session.level.moves
        session.cascade_depth = 0
        session.selected = None
        get_goal_tracker(self.world).goals = create_goals(session.level)
        self.board_system.reset_board()
        logger.info("Level %s restarted", session.level.level_id)
        self.initialize()
        return self.start()

    def _on_cascade_complete(self, sender, **kwargs):
        if get_game_status(self.world) != GameStatus.CHECKING:
            return
        session = get_session(self.world)
        if goals_complete(get_goal_tracker(self.world)):
            stars = compute_stars(session.moves_remaining, session.level.moves)
            set_game_state(self.world, self.event_bus, GameStatus.WIN)
            logger.info("Level %s won: score=%d stars=%d", session.level.level_id, session.score, stars)
            self.event_bus.emit(
                EVENT_GAME_WON, score=session.score, stars=stars, moves_left=session.moves_remaining,
            )
            return
        if session.moves_remaining <= 0:
            set_game_state(self.world, self.event_bus, GameStatus.LOSE)
            logger.info("Level %s lost: score=%d", session.level.level_id, session.score)
            self.event_bus.emit(EVENT_GAME_LOST, score=session.score)
            return
        board = get_board(self.world)
        if not find_possible_swaps(board):
            self.event_bus.emit(EVENT_NEEDS_SHUFFLE)
            resolved = shuffle_board(board, session.level.palette, self.world.random)
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason='deadlock', resolved=resolved)
        set_game_state(self.world, self.event_bus, GameStatus.PLAYING)
