import arcade
from esper import World

from tilematch.components.piece import ObstacleType, PieceType, SpecialPieceType
from tilematch.events.bus import EventBus, EVENT_PIECE_DESELECTED, EVENT_PIECE_SELECTED, EVENT_STARTED
from tilematch.systems.board_ops import board_snapshot, get_board
from tilematch.ui.layout import cell_origin, compute_board_geometry
from tilematch.utils.game_state import get_game_status
from tilematch.utils.session import get_goal_tracker, get_session

PADDING = 4

PIECE_COLORS = {
    PieceType.RED: (214, 64, 69),
    PieceType.BLUE: (66, 112, 214),
    PieceType.GREEN: (76, 175, 80),
    PieceType.YELLOW: (240, 200, 60),
    PieceType.PURPLE: (150, 90, 200),
    PieceType.ORANGE: (240, 140, 50),
    PieceType.EMPTY: (60, 60, 60),
}

SPECIAL_LABELS = {
    SpecialPieceType.LINE_CLEAR_H: "=",
    SpecialPieceType.LINE_CLEAR_V: "|",
    SpecialPieceType.AREA_CLEAR: "*",
    SpecialPieceType.COLOR_CLEAR: "@",
    SpecialPieceType.SCATTER: "+",
}

OBSTACLE_FAMILY_COLORS = {
    "ice": (200, 235, 255),
    "box": (150, 100, 60),
    "chain": (140, 140, 140),
    "stone": (110, 110, 110),
    "honey": (230, 170, 40),
    "chocolate": (100, 60, 30),
    "carpet": (200, 60, 120),
}


class RenderSystem:
    """Draws the board and HUD from read-only snapshots."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.selected = None
        self.event_bus.subscribe(EVENT_PIECE_SELECTED, self.on_piece_selected)
        self.event_bus.subscribe(EVENT_PIECE_DESELECTED, self.on_piece_deselected)
        self.event_bus.subscribe(EVENT_STARTED, self.on_started)

    def on_piece_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_piece_deselected(self, sender, **kwargs):
        if self.selected == (kwargs.get('row'), kwargs.get('col')):
            self.selected = None

    def on_started(self, sender, **kwargs):
        self.selected = None

    def process(self):
        board = get_board(self.world)
        geometry = compute_board_geometry(self.window.width, self.window.height, board.rows, board.cols)
        tile_size = geometry[0]
        for (row, col), cell in board.cells.items():
            if not cell.playable:
                continue
            left, bottom = cell_origin(row, col, geometry, board.rows)
            arcade.draw_lbwh_rectangle_filled(left + 1, bottom + 1, tile_size - 2, tile_size - 2, (35, 45, 40))
        for line in board_snapshot(board):
            for view in line:
                if view is None:
                    continue
                self._draw_piece(view, geometry, board.rows)
        if self.selected is not None:
            left, bottom = cell_origin(self.selected[0], self.selected[1], geometry, board.rows)
            arcade.draw_lbwh_rectangle_outline(left, bottom, tile_size, tile_size, arcade.color.WHITE, 3)
        self._draw_hud()

    def _draw_piece(self, view, geometry, rows: int):
        tile_size = geometry[0]
        left, bottom = cell_origin(view.row, view.col, geometry, rows)
        cx = left + tile_size / 2
        cy = bottom + tile_size / 2
        radius = tile_size / 2 - PADDING
        arcade.draw_circle_filled(cx, cy, radius, PIECE_COLORS[view.piece_type])
        label = SPECIAL_LABELS.get(view.special)
        if label:
            arcade.draw_text(label, cx, cy, arcade.color.WHITE, tile_size * 0.35,
                             anchor_x="center", anchor_y="center", bold=True)
        if view.obstacle is not ObstacleType.NONE:
            overlay = OBSTACLE_FAMILY_COLORS.get(view.obstacle.family, (255, 255, 255))
            for layer in range(view.obstacle.layers):
                inset = PADDING + layer * 3
                arcade.draw_lbwh_rectangle_outline(
                    left + inset, bottom + inset, tile_size - 2 * inset, tile_size - 2 * inset, overlay, 2,
                )

    def _draw_hud(self):
        session = get_session(self.world)
        status = get_game_status(self.world)
        top = self.window.height - 28
        arcade.draw_text(
            f"Level {session.level.level_id}   Score {session.score}   Moves {session.moves_remaining}",
            16, top, arcade.color.WHITE, 16,
        )
        goals = "   ".join(
            f"{goal.target} {goal.current}/{goal.required}" for goal in get_goal_tracker(self.world).goals
        )
        arcade.draw_text(goals, 16, top - 24, arcade.color.LIGHT_GRAY, 13)
        if status is not None:
            arcade.draw_text(status.value.upper(), self.window.width - 16, top, arcade.color.YELLOW, 16,
                             anchor_x="right")
