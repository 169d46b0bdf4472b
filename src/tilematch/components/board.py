from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from tilematch.components.piece import Piece

Position = Tuple[int, int]


@dataclass(slots=True)
class Cell:
    row: int
    col: int
    playable: bool = True
    spawner: bool = False
    piece: Optional[Piece] = None


@dataclass(slots=True)
class Board:
    """Authoritative grid. Every in-bounds coordinate has exactly one Cell."""
    rows: int
    cols: int
    cells: Dict[Position, Cell] = field(default_factory=dict)
    # Piece ids are unique per board instance.
    next_piece_id: int = 1

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self.cells.get((row, col))

    def allocate_piece_id(self) -> int:
        piece_id = self.next_piece_id
        self.next_piece_id += 1
        return piece_id
