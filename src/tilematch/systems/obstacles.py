from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from tilematch.components.board import Board
from tilematch.components.piece import ObstacleType
from tilematch.systems.board_ops import piece_at

Position = Tuple[int, int]

_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(slots=True)
class ObstacleHit:
    row: int
    col: int
    previous: ObstacleType
    remaining: ObstacleType

    @property
    def cleared(self) -> bool:
        return self.remaining is ObstacleType.NONE


def damage_adjacent_obstacles(board: Board, removed: Iterable[Position]) -> List[ObstacleHit]:
    """Strip one layer from every obstacle orthogonally next to a removed cell.

    An obstacle next to several removed cells still loses a single layer.
    Hits are returned in row-major order.
    """
    removed_set: Set[Position] = set(removed)
    targets: Set[Position] = set()
    for row, col in removed_set:
        for d_row, d_col in _NEIGHBOURS:
            pos = (row + d_row, col + d_col)
            if pos in removed_set:
                continue
            piece = piece_at(board, *pos)
            if piece is not None and piece.obstacle is not ObstacleType.NONE:
                targets.add(pos)
    hits: List[ObstacleHit] = []
    for row, col in sorted(targets):
        piece = piece_at(board, row, col)
        previous = piece.obstacle
        piece.obstacle = previous.weakened()
        hits.append(ObstacleHit(row=row, col=col, previous=previous, remaining=piece.obstacle))
    return hits
