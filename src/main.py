"""Entry point for the tilematch demo window.

Sets up the game session, presentation systems and the Arcade window.

Keys: P pause/resume, R restart, E extra moves, S shuffle, H toggle hammer,
1-5 switch level.
"""
import logging
import sys

import arcade
from arcade import Window, run

from tilematch.components.booster import BoosterType
from tilematch.components.game_state import GameStatus
from tilematch.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from tilematch.engine import GameSession
from tilematch.events.bus import EVENT_MOUSE_PRESS, EVENT_MOUSE_RELEASE, EVENT_TICK
from tilematch.factories.levels import get_level
from tilematch.systems.input import InputSystem
from tilematch.systems.render import RenderSystem

logger = logging.getLogger(__name__)

LEVEL_KEYS = {
    arcade.key.KEY_1: 1,
    arcade.key.KEY_2: 2,
    arcade.key.KEY_3: 3,
    arcade.key.KEY_4: 4,
    arcade.key.KEY_5: 5,
}


class TilematchWindow(Window):
    def __init__(self, level_id: int = 1):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Tilematch")
        self.set_update_rate(1/60)
        self.background_color = arcade.color.BLACK
        self.load_level(level_id)

    def load_level(self, level_id: int):
        level = get_level(level_id)
        if level is None:
            logger.warning("Unknown level %s", level_id)
            return
        self.session = GameSession(level)
        self.event_bus = self.session.event_bus
        self.render_system = RenderSystem(self.session.world, self.event_bus, self)
        self.input_system = InputSystem(self.session.world, self.event_bus, self)
        self.session.start()

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_RELEASE, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        session = self.session
        if symbol == arcade.key.P:
            if session.state == GameStatus.PAUSED:
                session.resume()
            else:
                session.pause()
        elif symbol == arcade.key.R:
            self.input_system.arm_booster(None)
            session.restart()
        elif symbol == arcade.key.E:
            session.use_booster(BoosterType.EXTRA_MOVES)
        elif symbol == arcade.key.S:
            session.use_booster(BoosterType.SHUFFLE)
        elif symbol == arcade.key.H:
            armed = self.input_system.armed_booster
            self.input_system.arm_booster(None if armed is BoosterType.HAMMER else BoosterType.HAMMER)
        elif symbol in LEVEL_KEYS:
            self.load_level(LEVEL_KEYS[symbol])


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    level_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    window = TilematchWindow(level_id)
    run()

if __name__ == "__main__":
    main()
