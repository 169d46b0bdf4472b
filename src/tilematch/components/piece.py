from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class PieceType(Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    ORANGE = "orange"
    EMPTY = "empty"


class SpecialPieceType(Enum):
    NONE = "none"
    LINE_CLEAR_H = "line_clear_h"
    LINE_CLEAR_V = "line_clear_v"
    AREA_CLEAR = "area_clear"
    COLOR_CLEAR = "color_clear"
    SCATTER = "scatter"


class ObstacleType(Enum):
    NONE = "none"
    ICE_1 = "ice_1"
    ICE_2 = "ice_2"
    ICE_3 = "ice_3"
    CHAIN = "chain"
    BOX_1 = "box_1"
    BOX_2 = "box_2"
    BOX_3 = "box_3"
    STONE = "stone"
    HONEY = "honey"
    CHOCOLATE = "chocolate"
    CARPET = "carpet"

    @property
    def family(self) -> str:
        """Obstacle family name; layered types share one (``ice_2`` -> ``ice``)."""
        return self.value.split("_")[0]

    @property
    def layers(self) -> int:
        if self is ObstacleType.NONE:
            return 0
        _, _, suffix = self.value.partition("_")
        return int(suffix) if suffix.isdigit() else 1

    def weakened(self) -> "ObstacleType":
        """Return the overlay left after one layer is removed."""
        if self.layers <= 1:
            return ObstacleType.NONE
        return ObstacleType(f"{self.family}_{self.layers - 1}")


class CollectibleType(Enum):
    APPLE = "apple"
    ORANGE = "orange"
    LEMON = "lemon"
    ACORN = "acorn"
    FLOWER = "flower"
    GNOME = "gnome"


@dataclass(slots=True)
class Piece:
    """A single board piece.

    ``row``/``col`` mirror the owning cell. ``target`` and ``moving`` are
    presentation bookkeeping only; no rule reads them.
    """
    piece_id: int
    piece_type: PieceType
    row: int
    col: int
    special: SpecialPieceType = SpecialPieceType.NONE
    obstacle: ObstacleType = ObstacleType.NONE
    collectible: Optional[CollectibleType] = None
    target: Optional[Tuple[int, int]] = None
    moving: bool = False

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    @property
    def matchable(self) -> bool:
        return self.piece_type is not PieceType.EMPTY and self.obstacle is ObstacleType.NONE


@dataclass(frozen=True, slots=True)
class PieceView:
    """Read-only copy of a piece handed to presentation code."""
    piece_id: int
    piece_type: PieceType
    row: int
    col: int
    special: SpecialPieceType
    obstacle: ObstacleType
    collectible: Optional[CollectibleType]
    moving: bool

    @classmethod
    def from_piece(cls, piece: Piece) -> "PieceView":
        return cls(
            piece_id=piece.piece_id,
            piece_type=piece.piece_type,
            row=piece.row,
            col=piece.col,
            special=piece.special,
            obstacle=piece.obstacle,
            collectible=piece.collectible,
            moving=piece.moving,
        )
