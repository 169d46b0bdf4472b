from tilematch.components.game_state import GameStatus
from tilematch.components.piece import SpecialPieceType
from tilematch.events.bus import (
    EVENT_MATCH_FOUND,
    EVENT_MOVE_MADE,
    EVENT_SCORE_UPDATED,
    EVENT_SWAP_REVERTED,
    EVENT_SWAP_STARTED,
)
from tests.helpers import base_rows, drive_ticks, ids_of, make_level, record, started_session, types_of


def _simple_rows():
    rows = base_rows()
    rows[0] = "RRGRBGRB"
    return rows


def test_simple_three_match_scores_and_consumes_move():
    session = started_session(make_level(moves=10), _simple_rows())
    events = record(session, EVENT_SWAP_STARTED, EVENT_MOVE_MADE, EVENT_SCORE_UPDATED)
    session.select_piece(0, 2)
    session.select_piece(0, 3)
    assert session.state == GameStatus.ANIMATING
    assert session.settle()
    names = [name for name, _ in events]
    assert names[:3] == [EVENT_SWAP_STARTED, EVENT_MOVE_MADE, EVENT_SCORE_UPDATED]
    assert events[1][1]["moves_remaining"] == 9
    first_score = events[2][1]
    assert first_score["added"] == 270
    assert first_score["depth"] == 1
    assert session.moves_remaining == 9
    assert session.score >= 270
    assert session.state == GameStatus.PLAYING


def test_no_match_swap_reverts_without_move():
    session = started_session(make_level(moves=10), _simple_rows())
    before_types = types_of(session.board)
    before_ids = ids_of(session.board)
    events = record(session, EVENT_SWAP_STARTED, EVENT_SWAP_REVERTED, EVENT_MOVE_MADE, EVENT_SCORE_UPDATED)
    assert session.swipe(0, 1, 'right')
    assert session.settle()
    assert [name for name, _ in events] == [EVENT_SWAP_STARTED, EVENT_SWAP_REVERTED]
    assert events[1][1] == {"src": (0, 1), "dst": (0, 2)}
    assert session.moves_remaining == 10
    assert session.score == 0
    assert types_of(session.board) == before_types
    assert ids_of(session.board) == before_ids
    assert session.state == GameStatus.PLAYING


def test_swap_waits_for_barrier_ticks():
    session = started_session(make_level(moves=10), _simple_rows())
    session.swipe(0, 2, 'right')
    assert session.state == GameStatus.ANIMATING
    assert session.moves_remaining == 10
    drive_ticks(session.event_bus, count=1, dt=0.01)
    assert session.moves_remaining == 10
    assert session.settle()
    assert session.moves_remaining == 9


def test_four_match_keeps_special_at_middle():
    rows = base_rows()
    rows[0] = "RRGRBGRB"
    rows[1] = "GRRGRBGR"
    session = started_session(make_level(moves=10), rows)
    seen = {}

    def on_match(sender, **kwargs):
        match = kwargs["matches"][0]
        seen["special"] = match.special_generated
        seen["middle"] = match.middle_piece.position
        seen["middle_special"] = match.middle_piece.special
        seen["positions"] = kwargs["positions"]

    session.on(EVENT_MATCH_FOUND, on_match)
    session.swipe(0, 2, 'down')
    assert session.settle()
    assert seen["special"] is SpecialPieceType.LINE_CLEAR_V
    assert seen["middle"] == (0, 2)
    assert seen["middle_special"] is SpecialPieceType.LINE_CLEAR_V
    assert (0, 2) not in seen["positions"]
    assert sorted(seen["positions"]) == [(0, 0), (0, 1), (0, 3)]


def test_swipe_rejects_bad_direction_and_edges():
    session = started_session(make_level(), _simple_rows())
    assert not session.swipe(0, 0, 'diagonal')
    assert not session.swipe(0, 0, 'up')
    assert not session.swipe(0, 7, 'right')
    assert session.state == GameStatus.PLAYING


def test_input_ignored_while_busy():
    session = started_session(make_level(moves=10), _simple_rows())
    session.swipe(0, 2, 'right')
    assert session.state == GameStatus.ANIMATING
    assert not session.select_piece(5, 5)
    assert not session.swipe(5, 5, 'left')
    assert not session.pause()
    assert not session.use_booster('extra_moves')
    assert not session.restart()
    assert session.settle()
