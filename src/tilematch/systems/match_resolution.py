import dataclasses
import logging
from typing import List, Optional, Tuple

from esper import World

from tilematch.components.game_state import GameStatus
from tilematch.components.goal import Goal
from tilematch.components.match import Match
from tilematch.components.piece import PieceView, SpecialPieceType
from tilematch.constants import FALL_DURATION, REVERT_DURATION, SWAP_DURATION
from tilematch.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_BOARD_CHANGED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GOAL_UPDATED,
    EVENT_MATCH_FOUND,
    EVENT_MOVE_MADE,
    EVENT_OBSTACLE_CLEARED,
    EVENT_OBSTACLE_DAMAGED,
    EVENT_PIECES_FALLEN,
    EVENT_SCORE_UPDATED,
    EVENT_SWAP_REQUEST,
    EVENT_SWAP_REVERTED,
    EVENT_SWAP_STARTED,
)
from tilematch.systems.board_ops import (
    collapse_and_refill,
    get_board,
    is_adjacent,
    remove_pieces,
    settle_pieces,
    swap_pieces,
)
from tilematch.systems.match_detection import find_all_matches
from tilematch.systems.obstacles import damage_adjacent_obstacles
from tilematch.utils.game_state import get_game_status, set_game_state
from tilematch.utils.goals import record_collected, record_obstacle_layers, record_score
from tilematch.utils.scoring import obstacle_bonus, score_for_matches
from tilematch.utils.session import get_goal_tracker, get_session

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class MatchResolutionSystem:
    """Runs a turn: swap, validate, then cascade until the board is quiet.

    Each wait (swap, revert, fall) is an ``animation_start`` barrier; the next
    step runs when the matching ``animation_complete`` arrives.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.pending_swap: Optional[Tuple[Position, Position]] = None
        self._reason = 'swap'
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        if get_game_status(self.world) != GameStatus.PLAYING:
            return
        if not is_adjacent(src[0], src[1], dst[0], dst[1]):
            return
        board = get_board(self.world)
        if not swap_pieces(board, src[0], src[1], dst[0], dst[1]):
            logger.debug("Swap %s -> %s rejected", src, dst)
            return
        set_game_state(self.world, self.event_bus, GameStatus.ANIMATING)
        self.pending_swap = (src, dst)
        self._reason = 'swap'
        self.event_bus.emit(EVENT_SWAP_STARTED, src=src, dst=dst)
        self.event_bus.emit(EVENT_ANIMATION_START, kind='swap', items=[src, dst], duration=SWAP_DURATION)

    def on_board_changed(self, sender, **kwargs):
        # Side-channel removals (hammer) settle through the same fall/cascade path.
        if get_game_status(self.world) != GameStatus.PLAYING:
            return
        get_session(self.world).cascade_depth = 0
        self._reason = kwargs.get('reason', 'board_changed')
        self._start_fall()

    def on_animation_complete(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if kind == 'swap':
            self._after_swap()
        elif kind == 'revert':
            self._after_revert()
        elif kind == 'fall':
            self._after_fall()

    def _after_swap(self):
        if self.pending_swap is None:
            return
        board = get_board(self.world)
        settle_pieces(board)
        set_game_state(self.world, self.event_bus, GameStatus.CHECKING)
        matches = find_all_matches(board)
        src, dst = self.pending_swap
        if not matches:
            swap_pieces(board, dst[0], dst[1], src[0], src[1])
            set_game_state(self.world, self.event_bus, GameStatus.ANIMATING)
            self.event_bus.emit(EVENT_ANIMATION_START, kind='revert', items=[src, dst], duration=REVERT_DURATION)
            return
        self.pending_swap = None
        session = get_session(self.world)
        session.moves_remaining -= 1
        self.event_bus.emit(EVENT_MOVE_MADE, moves_remaining=session.moves_remaining)
        session.cascade_depth = 0
        self._resolve_pass(matches)

    def _after_revert(self):
        if self.pending_swap is None:
            return
        settle_pieces(get_board(self.world))
        src, dst = self.pending_swap
        self.pending_swap = None
        set_game_state(self.world, self.event_bus, GameStatus.PLAYING)
        self.event_bus.emit(EVENT_SWAP_REVERTED, src=src, dst=dst)

    def _after_fall(self):
        board = get_board(self.world)
        settle_pieces(board)
        set_game_state(self.world, self.event_bus, GameStatus.CHECKING)
        matches = find_all_matches(board)
        if matches:
            self._resolve_pass(matches)
            return
        depth = get_session(self.world).cascade_depth
        logger.debug("Cascade finished at depth %d (%s)", depth, self._reason)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, reason=self._reason)

    def _resolve_pass(self, matches: List[Match]):
        board = get_board(self.world)
        session = get_session(self.world)
        tracker = get_goal_tracker(self.world)
        session.cascade_depth += 1
        depth = session.cascade_depth

        unique = {}
        for match in matches:
            for piece in match.pieces:
                unique.setdefault(piece.position, piece)
        matched_positions = sorted(unique)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=matched_positions)

        added = score_for_matches(matches, depth, session.score_config)
        session.score += added
        self.event_bus.emit(EVENT_SCORE_UPDATED, score=session.score, added=added, depth=depth, reason='match')
        changed: List[Goal] = record_collected(tracker, unique.values())

        keep = set()
        for match in matches:
            if match.special_generated is SpecialPieceType.NONE:
                continue
            middle = match.middle_piece
            middle.special = match.special_generated
            keep.add(middle.position)
        to_remove = [pos for pos in matched_positions if pos not in keep]
        self.event_bus.emit(EVENT_MATCH_FOUND, matches=matches, chain=depth, positions=to_remove)

        bonus = 0
        for hit in damage_adjacent_obstacles(board, to_remove):
            bonus += obstacle_bonus(hit.previous, session.score_config)
            changed.extend(record_obstacle_layers(tracker, hit.previous))
            self.event_bus.emit(
                EVENT_OBSTACLE_DAMAGED, row=hit.row, col=hit.col, previous=hit.previous, remaining=hit.remaining,
            )
            if hit.cleared:
                self.event_bus.emit(EVENT_OBSTACLE_CLEARED, row=hit.row, col=hit.col, obstacle=hit.previous)
        if bonus:
            session.score += bonus
            self.event_bus.emit(EVENT_SCORE_UPDATED, score=session.score, added=bonus, depth=depth, reason='obstacle')
        changed.extend(record_score(tracker, session.score))

        for goal in tracker.goals:
            if any(goal is c for c in changed):
                self.event_bus.emit(EVENT_GOAL_UPDATED, goal=dataclasses.replace(goal))

        remove_pieces(board, to_remove)
        logger.debug("Cascade pass %d removed %d pieces (+%d)", depth, len(to_remove), added + bonus)
        self._start_fall()

    def _start_fall(self):
        board = get_board(self.world)
        session = get_session(self.world)
        set_game_state(self.world, self.event_bus, GameStatus.ANIMATING)
        moved = collapse_and_refill(board, session.level.palette, self.world.random)
        self.event_bus.emit(
            EVENT_PIECES_FALLEN, count=len(moved), pieces=[PieceView.from_piece(p) for p in moved],
        )
        self.event_bus.emit(
            EVENT_ANIMATION_START, kind='fall', items=[p.position for p in moved], duration=FALL_DURATION,
        )
