"""Game state resource describing the session lifecycle."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet


class GameStatus(Enum):
    LOADING = "loading"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    ANIMATING = "animating"
    CHECKING = "checking"
    WIN = "win"
    LOSE = "lose"


# Transient states during which input, boosters and lifecycle calls are refused.
BUSY_STATES: FrozenSet[GameStatus] = frozenset({GameStatus.ANIMATING, GameStatus.CHECKING})
TERMINAL_STATES: FrozenSet[GameStatus] = frozenset({GameStatus.WIN, GameStatus.LOSE})

TRANSITIONS: Dict[GameStatus, FrozenSet[GameStatus]] = {
    GameStatus.LOADING: frozenset({GameStatus.READY}),
    GameStatus.READY: frozenset({GameStatus.PLAYING, GameStatus.LOADING}),
    GameStatus.PLAYING: frozenset({GameStatus.PAUSED, GameStatus.ANIMATING, GameStatus.LOADING}),
    GameStatus.PAUSED: frozenset({GameStatus.PLAYING, GameStatus.LOADING}),
    GameStatus.ANIMATING: frozenset({GameStatus.CHECKING, GameStatus.PLAYING}),
    GameStatus.CHECKING: frozenset({
        GameStatus.ANIMATING, GameStatus.PLAYING, GameStatus.WIN, GameStatus.LOSE,
    }),
    GameStatus.WIN: frozenset({GameStatus.LOADING}),
    GameStatus.LOSE: frozenset({GameStatus.LOADING}),
}


@dataclass
class GameState:
    """Singleton component storing the current lifecycle status."""
    status: GameStatus = GameStatus.LOADING
