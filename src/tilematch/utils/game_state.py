from __future__ import annotations

import logging

from esper import World

from tilematch.components.game_state import GameState, GameStatus, TRANSITIONS
from tilematch.events.bus import EVENT_STATE_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def get_game_status(world: World) -> GameStatus | None:
    state = get_game_state(world)
    return state.status if state is not None else None


def set_game_state(world: World, event_bus: EventBus, status: GameStatus) -> bool:
    """Move the lifecycle to ``status`` if the transition table allows it.

    Returns True when the state now equals ``status``. Disallowed transitions
    leave the state untouched and return False.
    """
    state = get_game_state(world)
    if state is None:
        state_entity = world.create_entity()
        state = GameState()
        world.add_component(state_entity, state)
    previous = state.status
    if previous == status:
        return True
    if status not in TRANSITIONS[previous]:
        logger.debug("Rejected state transition %s -> %s", previous.value, status.value)
        return False
    state.status = status
    event_bus.emit(EVENT_STATE_CHANGED, previous=previous, new=status)
    return True
