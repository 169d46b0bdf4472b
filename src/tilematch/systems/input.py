import math
from typing import Optional, Tuple

from esper import World

from tilematch.components.booster import BoosterType
from tilematch.constants import SWIPE_MIN_DISTANCE
from tilematch.events.bus import (
    EventBus,
    EVENT_BOOSTER_REQUEST,
    EVENT_BOOSTER_USED,
    EVENT_MOUSE_PRESS,
    EVENT_MOUSE_RELEASE,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWIPE,
)
from tilematch.systems.board_ops import get_board
from tilematch.ui.layout import cell_at_point, compute_board_geometry

LEFT_BUTTON = 1


class InputSystem:
    """Turns window pointer events into taps, swipes and targeted boosters.

    A press only records where the pointer went down. On release, a drag longer
    than ``SWIPE_MIN_DISTANCE`` pixels becomes a ``tile_swipe`` from the pressed
    cell and anything shorter is a tap on it. While a booster is armed, a tap
    becomes a ``booster_request`` and never reaches the board as a click.
    """

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.press_start: Optional[Tuple[float, float]] = None
        self.armed_booster: Optional[BoosterType] = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_RELEASE, self.on_mouse_release)
        self.event_bus.subscribe(EVENT_BOOSTER_USED, self.on_booster_used)

    def arm_booster(self, booster: Optional[BoosterType]):
        self.armed_booster = booster

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        # Only the left button drives selection.
        if kwargs.get('button', LEFT_BUTTON) != LEFT_BUTTON:
            return
        self.press_start = (x, y)

    def on_mouse_release(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if kwargs.get('button', LEFT_BUTTON) != LEFT_BUTTON:
            return
        start = self.press_start
        self.press_start = None
        if start is None:
            return
        cell = self._cell_at(*start)
        if cell is None:
            return
        dx = x - start[0]
        dy = y - start[1]
        if math.hypot(dx, dy) > SWIPE_MIN_DISTANCE:
            # Dragging with a booster armed cancels the gesture.
            if self.armed_booster is None:
                self.event_bus.emit(EVENT_TILE_SWIPE, row=cell[0], col=cell[1], direction=self._direction(dx, dy))
            return
        if self.armed_booster is not None:
            self.event_bus.emit(EVENT_BOOSTER_REQUEST, booster=self.armed_booster, row=cell[0], col=cell[1])
            return
        self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])

    def on_booster_used(self, sender, **kwargs):
        if kwargs.get('booster') is self.armed_booster:
            self.armed_booster = None

    def _cell_at(self, x: float, y: float):
        board = get_board(self.world)
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        return cell_at_point(x, y, geometry, board.rows, board.cols)

    @staticmethod
    def _direction(dx: float, dy: float) -> str:
        # Window y grows upwards while board rows grow downwards.
        if abs(dx) > abs(dy):
            return 'right' if dx > 0 else 'left'
        return 'up' if dy > 0 else 'down'
