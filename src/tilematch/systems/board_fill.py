from __future__ import annotations

import logging
import random
from typing import List, Sequence

from tilematch.components.board import Board
from tilematch.components.piece import ObstacleType, Piece, PieceType
from tilematch.config import LevelConfig
from tilematch.constants import INITIAL_MATCH_MAX_ATTEMPTS, SHUFFLE_MAX_ATTEMPTS
from tilematch.systems.board_ops import build_board, create_piece, iter_pieces, piece_at, set_piece
from tilematch.systems.match_detection import find_all_matches, find_possible_swaps

logger = logging.getLogger(__name__)


def _excluded_type(board: Board, first: tuple[int, int], second: tuple[int, int]) -> PieceType | None:
    a = piece_at(board, *first)
    b = piece_at(board, *second)
    if a is None or b is None:
        return None
    if a.piece_type == b.piece_type:
        return a.piece_type
    return None


def _pick_type(board: Board, row: int, col: int, palette: Sequence[PieceType], rng: random.Random) -> PieceType:
    excluded = {
        _excluded_type(board, (row, col - 1), (row, col - 2)),
        _excluded_type(board, (row - 1, col), (row - 2, col)),
    }
    choices = [t for t in palette if t not in excluded]
    return rng.choice(choices or list(palette))


def fill_board(board: Board, palette: Sequence[PieceType], rng: random.Random) -> None:
    """Fill every playable cell in row-major order.

    A colour is skipped when the two cells to the left, or the two cells
    above, already share it. If that leaves nothing, any colour is used.
    """
    for row in range(board.rows):
        for col in range(board.cols):
            if board.cells[(row, col)].playable:
                create_piece(board, row, col, _pick_type(board, row, col, palette, rng))


def apply_level_overlays(board: Board, level: LevelConfig) -> None:
    """Attach the level's obstacle and collectible placements to the filled pieces."""
    for placement in level.obstacles:
        piece = piece_at(board, placement.row, placement.col)
        if piece is not None:
            piece.obstacle = placement.obstacle
    for placement in level.collectibles:
        piece = piece_at(board, placement.row, placement.col)
        if piece is not None:
            piece.collectible = placement.collectible


def eliminate_initial_matches(
    board: Board,
    palette: Sequence[PieceType],
    rng: random.Random,
    *,
    max_attempts: int = INITIAL_MATCH_MAX_ATTEMPTS,
) -> bool:
    """Recolour matched pieces until the board has no matches.

    Returns False when ``max_attempts`` passes were not enough; the board is
    then kept as it is.
    """
    for _ in range(max_attempts):
        matches = find_all_matches(board)
        if not matches:
            return True
        for match in matches:
            for piece in match.pieces:
                others = [t for t in palette if t != piece.piece_type]
                if others:
                    piece.piece_type = rng.choice(others)
    if not find_all_matches(board):
        return True
    logger.warning("Initial board still has matches after %d attempts; keeping it", max_attempts)
    return False


def generate_board(level: LevelConfig, rng: random.Random) -> Board:
    """Build, fill and decorate a fresh board for ``level``.

    A board that comes out match-free but without a legal swap is reshuffled
    before it is handed out.
    """
    board = build_board(level)
    fill_board(board, level.palette, rng)
    apply_level_overlays(board, level)
    eliminate_initial_matches(board, level.palette, rng)
    if not find_possible_swaps(board):
        logger.debug("Level %s generated without a legal swap; reshuffling", level.level_id)
        shuffle_board(board, level.palette, rng)
    return board


def _is_playable_layout(board: Board) -> bool:
    return not find_all_matches(board) and bool(find_possible_swaps(board))


def shuffle_board(
    board: Board,
    palette: Sequence[PieceType],
    rng: random.Random,
    *,
    max_attempts: int = SHUFFLE_MAX_ATTEMPTS,
) -> bool:
    """Rearrange free pieces until the board has a move and no matches.

    Obstacle-bearing pieces stay where they are. First the existing pieces are
    permuted over the free cells; if no permutation works the free pieces are
    recoloured in row-major order, skipping colours that would complete a run
    to the left or above. Returns False if both attempts run out, leaving the
    last arrangement in place.
    """
    free_cells = [
        piece.position for piece in iter_pieces(board) if piece.obstacle is ObstacleType.NONE
    ]
    pieces: List[Piece] = [piece_at(board, row, col) for row, col in free_cells]
    if not pieces:
        return False
    for _ in range(max_attempts):
        rng.shuffle(pieces)
        for (row, col), piece in zip(free_cells, pieces):
            set_piece(board, row, col, piece)
        if _is_playable_layout(board):
            return True
    for _ in range(max_attempts):
        for row, col in free_cells:
            piece_at(board, row, col).piece_type = _pick_type(board, row, col, palette, rng)
        if _is_playable_layout(board):
            return True
    logger.warning("Could not find a playable arrangement after %d attempts; keeping board", max_attempts)
    return False
