"""Level file persistence (``.rsh``).

A level holds the vehicle count on its first line, then five lines per
vehicle::

    2          <- number of vehicles
    car        <- type (car / truck)
    red        <- color
    h          <- orientation (h / v)
    3          <- row, 1-based
    1          <- column, 1-based
    truck
    yellow
    v
    1
    5

Several levels may follow each other in one file. Rows and columns are
1-based on disk and 0-based on the board.
"""

from __future__ import annotations

import logging
from pathlib import Path

from backend.models.board import DEFAULT_HEIGHT, DEFAULT_WIDTH, Board
from backend.models.errors import LevelFormatError

logger = logging.getLogger(__name__)

LEVEL_SUFFIX = ".rsh"


class _Lines:
    """Cursor over the lines of a level file, tracking 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._lines = text.splitlines()
        self.pos = 0

    def skip_blank(self) -> None:
        while self.pos < len(self._lines) and not self._lines[self.pos].strip():
            self.pos += 1

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self._lines)

    def next(self, what: str) -> str:
        if self.exhausted:
            raise LevelFormatError(f"unexpected end of file, expected {what}", self.pos + 1)
        line = self._lines[self.pos].strip()
        self.pos += 1
        return line

    def next_int(self, what: str, minimum: int) -> int:
        raw = self.next(what)
        try:
            value = int(raw)
        except ValueError:
            raise LevelFormatError(f"{what} must be an integer, got {raw!r}", self.pos) from None
        if value < minimum:
            raise LevelFormatError(f"{what} must be at least {minimum}, got {value}", self.pos)
        return value


def parse_levels(
    text: str, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
) -> list[Board]:
    """Parse every level in *text* into a board.

    Raises :class:`LevelFormatError` for layout problems; vehicle placement
    errors (overlaps, off-board cells…) propagate from :class:`Board`.
    """
    lines = _Lines(text)
    boards: list[Board] = []
    lines.skip_blank()
    while not lines.exhausted:
        count = lines.next_int("vehicle count", minimum=0)
        board = Board(width, height)
        for _ in range(count):
            vehicle_type = lines.next("vehicle type")
            color = lines.next("vehicle color")
            orientation = lines.next("orientation")
            row = lines.next_int("row", minimum=1)
            col = lines.next_int("column", minimum=1)
            board.add_vehicle(vehicle_type, color, orientation, col - 1, row - 1)
        boards.append(board)
        lines.skip_blank()
    return boards


def load_levels(
    path: Path, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
) -> list[Board]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise LevelFormatError(f"{path} is not UTF-8 text") from None
    boards = parse_levels(text, width, height)
    logger.info("Loaded %d level(s) from %s", len(boards), path)
    return boards


def load_level(
    path: Path, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
) -> Board:
    """Load the first level of *path* (the way a saved game is reopened)."""
    boards = load_levels(path, width, height)
    if not boards:
        raise LevelFormatError(f"{path} holds no level")
    return boards[0]


def dump_board(board: Board) -> str:
    lines = [str(len(board))]
    for vehicle in board.vehicles:
        lines += [
            vehicle.type.value,
            vehicle.color,
            vehicle.orientation.value,
            str(vehicle.y + 1),
            str(vehicle.x + 1),
        ]
    return "\n".join(lines) + "\n"


def save_board(board: Board, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_board(board), encoding="utf-8")
    logger.info("Saved %d vehicle(s) to %s", len(board), path)
