from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from tilematch.components.piece import Piece, PieceType, SpecialPieceType


class MatchShape(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    L_SHAPE = "l_shape"
    T_SHAPE = "t_shape"


@dataclass(slots=True)
class Match:
    """A run (or merged pair of runs) of same-typed pieces, length >= 3."""
    pieces: List[Piece]
    shape: MatchShape
    special_generated: SpecialPieceType = SpecialPieceType.NONE

    @property
    def length(self) -> int:
        return len(self.pieces)

    @property
    def piece_type(self) -> PieceType:
        return self.pieces[0].piece_type

    @property
    def positions(self) -> List[Tuple[int, int]]:
        return [p.position for p in self.pieces]

    @property
    def middle_piece(self) -> Piece:
        return self.pieces[len(self.pieces) // 2]
