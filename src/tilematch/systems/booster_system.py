from __future__ import annotations

import logging

from esper import World

from tilematch.components.booster import BoosterType
from tilematch.components.game_state import GameStatus
from tilematch.constants import EXTRA_MOVES_AMOUNT
from tilematch.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_SHUFFLED,
    EVENT_BOOSTER_REQUEST,
    EVENT_BOOSTER_USED,
    EVENT_PIECE_DESELECTED,
)
from tilematch.systems.board_fill import shuffle_board
from tilematch.systems.board_ops import get_board, piece_at, remove_pieces
from tilematch.utils.game_state import get_game_status
from tilematch.utils.session import get_session

logger = logging.getLogger(__name__)


class BoosterSystem:
    """Side-channel board and session mutations, allowed only while playing."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BOOSTER_REQUEST, self.on_booster_request)

    def on_booster_request(self, sender, **kwargs):
        booster = kwargs.get('booster')
        if booster is None:
            return
        self.use(booster, kwargs.get('row'), kwargs.get('col'))

    def use(self, booster: BoosterType | str, row: int | None = None, col: int | None = None) -> bool:
        try:
            booster = BoosterType(booster)
        except ValueError:
            logger.debug("Unknown booster %r", booster)
            return False
        if get_game_status(self.world) != GameStatus.PLAYING:
            logger.debug("Booster %s rejected outside play", booster.value)
            return False
        if booster is BoosterType.HAMMER:
            return self._hammer(row, col)
        if booster is BoosterType.EXTRA_MOVES:
            session = get_session(self.world)
            session.moves_remaining += EXTRA_MOVES_AMOUNT
            self.event_bus.emit(
                EVENT_BOOSTER_USED,
                booster=booster,
                moves_added=EXTRA_MOVES_AMOUNT,
                moves_remaining=session.moves_remaining,
            )
            return True
        return self._shuffle()

    def _hammer(self, row: int | None, col: int | None) -> bool:
        if row is None or col is None:
            return False
        board = get_board(self.world)
        if piece_at(board, row, col) is None:
            return False
        session = get_session(self.world)
        if session.selected is not None:
            selected = session.selected
            session.selected = None
            self.event_bus.emit(EVENT_PIECE_DESELECTED, row=selected[0], col=selected[1], reason='booster')
        remove_pieces(board, [(row, col)])
        self.event_bus.emit(EVENT_BOOSTER_USED, booster=BoosterType.HAMMER, row=row, col=col)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='hammer', positions=[(row, col)])
        return True

    def _shuffle(self) -> bool:
        session = get_session(self.world)
        resolved = shuffle_board(get_board(self.world), session.level.palette, self.world.random)
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason='booster', resolved=resolved)
        self.event_bus.emit(EVENT_BOOSTER_USED, booster=BoosterType.SHUFFLE, resolved=resolved)
        return True
