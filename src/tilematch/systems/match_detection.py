"""Run detection over the board.

Everything here is read-only over Board State except ``find_possible_swaps``,
which exchanges pairs in place and restores them before returning.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from tilematch.components.board import Board
from tilematch.components.match import Match, MatchShape
from tilematch.components.piece import Piece, SpecialPieceType
from tilematch.systems.board_ops import exchange_pieces, piece_at

Position = Tuple[int, int]

MIN_RUN = 3


def _special_for_run(length: int, shape: MatchShape) -> SpecialPieceType:
    if length >= 5:
        return SpecialPieceType.COLOR_CLEAR
    if length == 4:
        # The special clears the line the run does not lie along.
        if shape is MatchShape.HORIZONTAL:
            return SpecialPieceType.LINE_CLEAR_V
        return SpecialPieceType.LINE_CLEAR_H
    return SpecialPieceType.NONE


def _scan_line(board: Board, coords: Iterable[Position]) -> List[List[Piece]]:
    runs: List[List[Piece]] = []
    run: List[Piece] = []
    for row, col in coords:
        piece = piece_at(board, row, col)
        if piece is not None and piece.matchable and run and run[-1].piece_type == piece.piece_type:
            run.append(piece)
            continue
        if len(run) >= MIN_RUN:
            runs.append(run)
        run = [piece] if piece is not None and piece.matchable else []
    if len(run) >= MIN_RUN:
        runs.append(run)
    return runs


def _unique_pieces(*groups: Sequence[Piece]) -> List[Piece]:
    seen = set()
    unique: List[Piece] = []
    for group in groups:
        for piece in group:
            if piece.position in seen:
                continue
            seen.add(piece.position)
            unique.append(piece)
    return unique


def _is_interior(pieces: Sequence[Piece], point: Position) -> bool:
    positions = [p.position for p in pieces]
    return point in positions[1:-1]


def _merge(first: Sequence[Piece], second: Sequence[Piece], point: Position) -> Match:
    shape = MatchShape.T_SHAPE if _is_interior(first, point) or _is_interior(second, point) else MatchShape.L_SHAPE
    return Match(pieces=_unique_pieces(first, second), shape=shape, special_generated=SpecialPieceType.SCATTER)


def find_all_matches(board: Board) -> List[Match]:
    """Detect every run of three or more and combine crossing runs into L/T shapes.

    Raw runs are listed horizontals first (row by row), then verticals (column
    by column). Each run joins at most one merge; earlier runs pick first.
    """
    raw: List[Match] = []
    for row in range(board.rows):
        for run in _scan_line(board, ((row, col) for col in range(board.cols))):
            raw.append(Match(pieces=run, shape=MatchShape.HORIZONTAL))
    for col in range(board.cols):
        for run in _scan_line(board, ((row, col) for row in range(board.rows))):
            raw.append(Match(pieces=run, shape=MatchShape.VERTICAL))

    used = [False] * len(raw)
    results: List[Match] = []
    for i, first in enumerate(raw):
        if used[i]:
            continue
        merged = None
        for j in range(i + 1, len(raw)):
            second = raw[j]
            if used[j] or second.shape is first.shape:
                continue
            if second.piece_type is not first.piece_type:
                continue
            shared = set(first.positions) & set(second.positions)
            if len(shared) != 1:
                continue
            merged = _merge(first.pieces, second.pieces, shared.pop())
            used[j] = True
            break
        used[i] = True
        if merged is not None:
            results.append(merged)
        else:
            first.special_generated = _special_for_run(first.length, first.shape)
            results.append(first)
    return results


def _run_through(board: Board, row: int, col: int, d_row: int, d_col: int) -> List[Piece]:
    center = piece_at(board, row, col)
    if center is None or not center.matchable:
        return []
    before: List[Piece] = []
    r, c = row - d_row, col - d_col
    while True:
        piece = piece_at(board, r, c)
        if piece is None or not piece.matchable or piece.piece_type is not center.piece_type:
            break
        before.append(piece)
        r, c = r - d_row, c - d_col
    after: List[Piece] = []
    r, c = row + d_row, col + d_col
    while True:
        piece = piece_at(board, r, c)
        if piece is None or not piece.matchable or piece.piece_type is not center.piece_type:
            break
        after.append(piece)
        r, c = r + d_row, c + d_col
    return list(reversed(before)) + [center] + after


def check_match_at(board: Board, row: int, col: int) -> Optional[Match]:
    """Return the match passing through (row, col), if any."""
    horizontal = _run_through(board, row, col, 0, 1)
    vertical = _run_through(board, row, col, 1, 0)
    h_ok = len(horizontal) >= MIN_RUN
    v_ok = len(vertical) >= MIN_RUN
    if h_ok and v_ok:
        return _merge(horizontal, vertical, (row, col))
    if h_ok:
        return Match(horizontal, MatchShape.HORIZONTAL, _special_for_run(len(horizontal), MatchShape.HORIZONTAL))
    if v_ok:
        return Match(vertical, MatchShape.VERTICAL, _special_for_run(len(vertical), MatchShape.VERTICAL))
    return None


def _swappable(board: Board, row: int, col: int) -> bool:
    piece = piece_at(board, row, col)
    return piece is not None and piece.matchable


def find_possible_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """List adjacent swaps that would create at least one match.

    Each candidate pair (right and down neighbours only) is exchanged, probed
    at both endpoints and exchanged back, so the board is unchanged on return.
    """
    swaps: List[Tuple[Position, Position]] = []
    for row in range(board.rows):
        for col in range(board.cols):
            if not _swappable(board, row, col):
                continue
            for d_row, d_col in ((0, 1), (1, 0)):
                other = (row + d_row, col + d_col)
                if not _swappable(board, *other):
                    continue
                exchange_pieces(board, (row, col), other)
                try:
                    creates_match = (
                        check_match_at(board, row, col) is not None
                        or check_match_at(board, *other) is not None
                    )
                finally:
                    exchange_pieces(board, (row, col), other)
                if creates_match:
                    swaps.append(((row, col), other))
    return swaps


def has_matches(board: Board) -> bool:
    return bool(find_all_matches(board))
