from __future__ import annotations

import random
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from esper import World

from tilematch.components.board import Board, Cell
from tilematch.components.piece import ObstacleType, Piece, PieceType, PieceView
from tilematch.config import LevelConfig

Position = Tuple[int, int]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def build_board(level: LevelConfig) -> Board:
    """Create an empty board with playability and spawners taken from the level."""
    spawners = level.spawner_positions()
    board = Board(rows=level.rows, cols=level.cols)
    for row in range(level.rows):
        for col in range(level.cols):
            playable = level.is_playable(row, col)
            board.cells[(row, col)] = Cell(
                row=row,
                col=col,
                playable=playable,
                spawner=playable and (row, col) in spawners,
            )
    return board


def piece_at(board: Board, row: int, col: int) -> Optional[Piece]:
    cell = board.cells.get((row, col))
    if cell is None or not cell.playable:
        return None
    return cell.piece


def set_piece(board: Board, row: int, col: int, piece: Optional[Piece]) -> None:
    cell = board.cells[(row, col)]
    cell.piece = piece
    if piece is not None:
        piece.row = row
        piece.col = col


def create_piece(board: Board, row: int, col: int, piece_type: PieceType) -> Piece:
    piece = Piece(piece_id=board.allocate_piece_id(), piece_type=piece_type, row=row, col=col)
    set_piece(board, row, col, piece)
    return piece


def iter_pieces(board: Board) -> Iterator[Piece]:
    """Yield every piece in row-major order."""
    for row in range(board.rows):
        for col in range(board.cols):
            piece = piece_at(board, row, col)
            if piece is not None:
                yield piece


def is_adjacent(r1: int, c1: int, r2: int, c2: int) -> bool:
    return abs(r1 - r2) + abs(c1 - c2) == 1


def exchange_pieces(board: Board, src: Position, dst: Position) -> None:
    """Exchange two cells' contents without touching presentation bookkeeping."""
    a = board.cells[src].piece
    b = board.cells[dst].piece
    set_piece(board, src[0], src[1], b)
    set_piece(board, dst[0], dst[1], a)


def swap_pieces(board: Board, r1: int, c1: int, r2: int, c2: int) -> bool:
    """Swap two pieces. Rejects missing pieces and obstacle-bearing pieces."""
    a = piece_at(board, r1, c1)
    b = piece_at(board, r2, c2)
    if a is None or b is None:
        return False
    if a.obstacle is not ObstacleType.NONE or b.obstacle is not ObstacleType.NONE:
        return False
    exchange_pieces(board, (r1, c1), (r2, c2))
    for piece in (a, b):
        piece.target = piece.position
        piece.moving = True
    return True


def remove_pieces(board: Board, coords: Iterable[Position]) -> List[Piece]:
    removed: List[Piece] = []
    for row, col in coords:
        piece = piece_at(board, row, col)
        if piece is None:
            continue
        board.cells[(row, col)].piece = None
        removed.append(piece)
    return removed


def collapse_and_refill(board: Board, palette: Sequence[PieceType], rng: random.Random) -> List[Piece]:
    """Apply gravity per column, then spawn new pieces into reachable empty cells.

    Surviving pieces keep their relative order and settle into the lowest
    playable cells; holes are skipped over. A cell is refilled only when a
    spawner sits in the same column at or above it. Returns every piece that
    moved or was created.
    """
    changed: List[Piece] = []
    for col in range(board.cols):
        playable_rows = [row for row in range(board.rows) if board.cells[(row, col)].playable]
        if not playable_rows:
            continue
        survivors = [board.cells[(row, col)].piece for row in playable_rows]
        survivors = [piece for piece in survivors if piece is not None]
        empty_count = len(playable_rows) - len(survivors)
        for row in playable_rows:
            board.cells[(row, col)].piece = None
        for piece, row in zip(survivors, playable_rows[empty_count:]):
            moved = piece.row != row
            set_piece(board, row, col, piece)
            if moved:
                piece.target = (row, col)
                piece.moving = True
                changed.append(piece)
        spawner_rows = [row for row in playable_rows if board.cells[(row, col)].spawner]
        if not spawner_rows:
            continue
        first_spawner = min(spawner_rows)
        for row in playable_rows[:empty_count]:
            if row < first_spawner:
                continue
            piece = create_piece(board, row, col, rng.choice(list(palette)))
            piece.target = (row, col)
            piece.moving = True
            changed.append(piece)
    return changed


def settle_pieces(board: Board) -> None:
    """Clear presentation motion flags once a barrier has completed."""
    for piece in iter_pieces(board):
        piece.moving = False
        piece.target = None


def board_snapshot(board: Board) -> Tuple[Tuple[Optional[PieceView], ...], ...]:
    """Immutable row-major view of the board for presentation."""
    rows = []
    for row in range(board.rows):
        line = []
        for col in range(board.cols):
            piece = piece_at(board, row, col)
            line.append(PieceView.from_piece(piece) if piece is not None else None)
        rows.append(tuple(line))
    return tuple(rows)
