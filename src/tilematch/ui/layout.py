from typing import Optional, Tuple

from tilematch.constants import BOARD_MAX_HEIGHT_PCT, BOARD_MAX_WIDTH_PCT, BOTTOM_MARGIN, TOP_MARGIN


def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (tile_size, start_x, start_y) for a rows x cols board.

    Shared by RenderSystem and InputSystem so clicks land on the drawn cells.
    (start_x, start_y) is the bottom-left corner of the board.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - TOP_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 20:
        tile_size = 20
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_at_point(x: float, y: float, geometry, rows: int, cols: int) -> Optional[Tuple[int, int]]:
    """Map a window point to (row, col); row 0 is the top row."""
    tile_size, start_x, start_y = geometry
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < cols and 0 <= row_from_bottom < rows):
        return None
    return rows - 1 - row_from_bottom, col


def cell_origin(row: int, col: int, geometry, rows: int) -> Tuple[float, float]:
    """Bottom-left corner of a cell in window coordinates."""
    tile_size, start_x, start_y = geometry
    return start_x + col * tile_size, start_y + (rows - 1 - row) * tile_size
