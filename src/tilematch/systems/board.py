import logging
from typing import Optional, Tuple

from esper import World

from tilematch.components.board import Board
from tilematch.components.game_state import GameStatus
from tilematch.events.bus import (
    EventBus,
    EVENT_PIECE_DESELECTED,
    EVENT_PIECE_SELECTED,
    EVENT_SWAP_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWIPE,
)
from tilematch.systems.board_fill import generate_board
from tilematch.systems.board_ops import is_adjacent, piece_at
from tilematch.utils.game_state import get_game_status
from tilematch.utils.session import get_session

logger = logging.getLogger(__name__)

DIRECTIONS = {
    'up': (-1, 0),
    'down': (1, 0),
    'left': (0, -1),
    'right': (0, 1),
}


class BoardSystem:
    """Owns the board entity and turns taps/swipes into swap requests."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity()
        self.reset_board()
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWIPE, self.on_tile_swipe)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def reset_board(self):
        """Replace the board with a freshly generated one (ids restart at 1)."""
        session = get_session(self.world)
        board = generate_board(session.level, self.world.random)
        self.world.add_component(self.board_entity, board)
        logger.debug("Generated %dx%d board for level %s", board.rows, board.cols, session.level.level_id)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_piece(row, col)

    def on_tile_swipe(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        direction = kwargs.get('direction')
        if row is None or col is None or direction is None:
            return
        self.swipe(row, col, direction)

    def select_piece(self, row: int, col: int) -> bool:
        if get_game_status(self.world) != GameStatus.PLAYING:
            return False
        if piece_at(self.board, row, col) is None:
            return False
        session = get_session(self.world)
        selected = session.selected
        if selected is None:
            session.selected = (row, col)
            self.event_bus.emit(EVENT_PIECE_SELECTED, row=row, col=col)
        elif selected == (row, col):
            self._clear_selection('toggle')
        elif is_adjacent(selected[0], selected[1], row, col):
            self._clear_selection('swap')
            self.event_bus.emit(EVENT_SWAP_REQUEST, src=selected, dst=(row, col))
        else:
            session.selected = (row, col)
            self.event_bus.emit(EVENT_PIECE_SELECTED, row=row, col=col)
        return True

    def swipe(self, row: int, col: int, direction: str) -> bool:
        if get_game_status(self.world) != GameStatus.PLAYING:
            return False
        delta = DIRECTIONS.get(direction)
        if delta is None:
            return False
        dst = (row + delta[0], col + delta[1])
        if piece_at(self.board, row, col) is None or piece_at(self.board, *dst) is None:
            return False
        self._clear_selection('swipe')
        self.event_bus.emit(EVENT_SWAP_REQUEST, src=(row, col), dst=dst)
        return True

    def _clear_selection(self, reason: str):
        session = get_session(self.world)
        selected: Optional[Tuple[int, int]] = session.selected
        if selected is None:
            return
        session.selected = None
        self.event_bus.emit(EVENT_PIECE_DESELECTED, row=selected[0], col=selected[1], reason=reason)
