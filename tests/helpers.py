from __future__ import annotations

import random
from typing import Iterable, Sequence

from tilematch.components.board import Board
from tilematch.components.goal import GoalType
from tilematch.components.piece import ObstacleType, PieceType, SpecialPieceType
from tilematch.config import GoalSpec, LevelConfig
from tilematch.engine import GameSession
from tilematch.events.bus import EVENT_TICK, EventBus
from tilematch.systems.board_ops import build_board, create_piece, piece_at, remove_pieces

LETTERS = {
    'R': PieceType.RED,
    'G': PieceType.GREEN,
    'B': PieceType.BLUE,
    'Y': PieceType.YELLOW,
    'P': PieceType.PURPLE,
    'O': PieceType.ORANGE,
}


class CyclingRandom(random.Random):
    """Deterministic rng whose choice() walks the sequence in order."""

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self._counter = 0

    def choice(self, seq):
        item = seq[self._counter % len(seq)]
        self._counter += 1
        return item


def base_rows(rows: int = 8, cols: int = 8, letters: str = "RGB") -> list[str]:
    """Match-free pattern: letters[(r + 2c) % 3]."""
    return [''.join(letters[(r + 2 * c) % 3] for c in range(cols)) for r in range(rows)]


def make_level(
    rows: int = 8,
    cols: int = 8,
    *,
    moves: int = 20,
    goals: Sequence[GoalSpec] | None = None,
    palette: str = "RGB",
    layout: Sequence[str] | None = None,
    spawners: Iterable[tuple[int, int]] = (),
    level_id: int = 99,
) -> LevelConfig:
    if goals is None:
        goals = (GoalSpec(GoalType.SCORE, "score", 1_000_000),)
    return LevelConfig(
        level_id=level_id,
        rows=rows,
        cols=cols,
        moves=moves,
        goals=tuple(goals),
        palette=tuple(LETTERS[ch] for ch in palette),
        layout=tuple(layout) if layout is not None else None,
        spawners=tuple(spawners),
    )


def paint(board: Board, rows: Sequence[str]) -> None:
    """Overwrite piece types from letter rows. '-' empties a cell, '.' skips it."""
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch == '.':
                continue
            if ch == '-':
                remove_pieces(board, [(r, c)])
                continue
            piece = piece_at(board, r, c)
            if piece is None:
                piece = create_piece(board, r, c, LETTERS[ch])
            piece.piece_type = LETTERS[ch]
            piece.special = SpecialPieceType.NONE
            piece.obstacle = ObstacleType.NONE


def board_from_rows(rows: Sequence[str], *, layout: Sequence[str] | None = None, spawners=()) -> Board:
    level = make_level(len(rows), len(rows[0]), layout=layout, spawners=spawners, palette="RGBYPO")
    board = build_board(level)
    paint(board, rows)
    return board


def types_of(board: Board) -> list[str]:
    inverse = {v: k for k, v in LETTERS.items()}
    out = []
    for r in range(board.rows):
        line = ''
        for c in range(board.cols):
            piece = piece_at(board, r, c)
            line += '-' if piece is None else inverse[piece.piece_type]
        out.append(line)
    return out


def ids_of(board: Board) -> dict[tuple[int, int], int]:
    return {pos: cell.piece.piece_id for pos, cell in board.cells.items() if cell.piece is not None}


def started_session(level: LevelConfig, rows: Sequence[str] | None = None, *, seed: int = 0, cycling: bool = False):
    session = GameSession(level, rng=random.Random(seed))
    if rows is not None:
        paint(session.board, rows)
    if cycling:
        session.world.random = CyclingRandom()
    session.start()
    return session


def record(bus_or_session, *names: str) -> list[tuple[str, dict]]:
    """Subscribe to the given events and collect (name, payload) tuples in order."""
    bus = getattr(bus_or_session, 'event_bus', bus_or_session)
    events: list[tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **kw: events.append((_name, kw)))
    return events


def drive_ticks(bus: EventBus, count: int = 240, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
