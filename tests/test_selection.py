from tilematch.components.game_state import GameStatus
from tilematch.events.bus import (
    EVENT_PIECE_DESELECTED,
    EVENT_PIECE_SELECTED,
    EVENT_SWAP_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_SWIPE,
)
from tilematch.systems.board_ops import remove_pieces
from tests.helpers import base_rows, make_level, record, started_session

SELECTION_EVENTS = (EVENT_PIECE_SELECTED, EVENT_PIECE_DESELECTED, EVENT_SWAP_REQUEST)


def test_select_then_toggle_off():
    session = started_session(make_level(), base_rows())
    events = record(session, *SELECTION_EVENTS)
    assert session.select_piece(2, 3)
    assert session.selected == (2, 3)
    assert session.select_piece(2, 3)
    assert session.selected is None
    assert events == [
        (EVENT_PIECE_SELECTED, {"row": 2, "col": 3}),
        (EVENT_PIECE_DESELECTED, {"row": 2, "col": 3, "reason": "toggle"}),
    ]


def test_non_adjacent_click_moves_selection():
    session = started_session(make_level(), base_rows())
    events = record(session, *SELECTION_EVENTS)
    session.select_piece(0, 0)
    session.select_piece(5, 5)
    assert session.selected == (5, 5)
    assert [name for name, _ in events] == [EVENT_PIECE_SELECTED, EVENT_PIECE_SELECTED]


def test_adjacent_click_requests_swap():
    session = started_session(make_level(), base_rows())
    events = record(session, *SELECTION_EVENTS)
    session.select_piece(0, 0)
    session.select_piece(0, 1)
    assert session.selected is None
    assert events[1:] == [
        (EVENT_PIECE_DESELECTED, {"row": 0, "col": 0, "reason": "swap"}),
        (EVENT_SWAP_REQUEST, {"src": (0, 0), "dst": (0, 1)}),
    ]
    # No match on this board, so the swap is animating towards a revert.
    assert session.state == GameStatus.ANIMATING


def test_empty_and_out_of_bounds_cells_ignored():
    session = started_session(make_level(), base_rows())
    remove_pieces(session.board, [(3, 3)])
    events = record(session, *SELECTION_EVENTS)
    assert not session.select_piece(3, 3)
    assert not session.select_piece(-1, 0)
    assert not session.select_piece(0, 8)
    assert session.selected is None
    assert events == []


def test_selection_ignored_outside_playing():
    session = started_session(make_level(), base_rows())
    session.pause()
    assert not session.select_piece(1, 1)
    assert not session.swipe(1, 1, 'left')
    assert session.selected is None


def test_swipe_clears_selection_and_requests_swap():
    session = started_session(make_level(), base_rows())
    session.select_piece(6, 6)
    events = record(session, *SELECTION_EVENTS)
    assert session.swipe(4, 4, 'up')
    assert events == [
        (EVENT_PIECE_DESELECTED, {"row": 6, "col": 6, "reason": "swipe"}),
        (EVENT_SWAP_REQUEST, {"src": (4, 4), "dst": (3, 4)}),
    ]


def test_swipe_rejects_edges_and_unknown_directions():
    session = started_session(make_level(), base_rows())
    assert not session.swipe(0, 0, 'up')
    assert not session.swipe(7, 7, 'right')
    assert not session.swipe(3, 3, 'sideways')
    assert session.state == GameStatus.PLAYING


def test_tile_events_route_to_board_system():
    session = started_session(make_level(), base_rows())
    session.event_bus.emit(EVENT_TILE_CLICK, row=1, col=2)
    assert session.selected == (1, 2)
    events = record(session, EVENT_SWAP_REQUEST)
    session.event_bus.emit(EVENT_TILE_SWIPE, row=5, col=5, direction='down')
    assert events == [(EVENT_SWAP_REQUEST, {"src": (5, 5), "dst": (6, 5)})]
