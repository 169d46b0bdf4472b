from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of otherwise unreferenced systems alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_MOUSE_RELEASE = "mouse_release"              # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SWIPE = "tile_swipe"                    # payload: row, col, direction=str
EVENT_PIECE_SELECTED = "piece_selected"            # payload: row, col
EVENT_PIECE_DESELECTED = "piece_deselected"        # payload: row, col, reason=str


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"                # payload: src=(r,c), dst=(r,c)
EVENT_SWAP_STARTED = "swap_started"                # payload: src=(r,c), dst=(r,c)
EVENT_SWAP_REVERTED = "swap_reverted"              # payload: src=(r,c), dst=(r,c)
EVENT_MOVE_MADE = "move_made"                      # payload: moves_remaining=int
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=list[Match], chain=int, positions=[(r,c),...]
EVENT_PIECES_FALLEN = "pieces_fallen"              # payload: count=int, pieces=list[Piece]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, reason=str
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str, resolved=bool
EVENT_NEEDS_SHUFFLE = "needs_shuffle"              # payload: none
EVENT_OBSTACLE_DAMAGED = "obstacle_damaged"        # payload: row, col, previous=ObstacleType, remaining=ObstacleType
EVENT_OBSTACLE_CLEARED = "obstacle_cleared"        # payload: row, col, obstacle=ObstacleType


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list, duration=float
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list


# ============================================================================
# SCORE & GOALS
# ============================================================================
EVENT_SCORE_UPDATED = "score_updated"              # payload: score=int, added=int, depth=int, reason=str
EVENT_GOAL_UPDATED = "goal_updated"                # payload: goal=Goal (copy)


# ============================================================================
# BOOSTERS
# ============================================================================
EVENT_BOOSTER_REQUEST = "booster_request"          # payload: booster=BoosterType, row=int|None, col=int|None
EVENT_BOOSTER_USED = "booster_used"                # payload: booster=BoosterType, plus booster-specific keys


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_STATE_CHANGED = "state_changed"              # payload: previous=GameStatus, new=GameStatus
EVENT_INITIALIZED = "initialized"                  # payload: level_id, rows, cols, moves
EVENT_STARTED = "started"                          # payload: none
EVENT_PAUSED = "paused"                            # payload: none
EVENT_RESUMED = "resumed"                          # payload: none
EVENT_GAME_WON = "game_won"                        # payload: score, stars, moves_left
EVENT_GAME_LOST = "game_lost"                      # payload: score
