"""Core gameplay logic — applies slides and replays solver output."""

from __future__ import annotations

from collections.abc import Iterable

from backend.engine.gamestate import GameState
from backend.models.board import Board
from backend.models.errors import InvalidMoveDescriptor
from backend.models.vehicle import Direction, Move, Vehicle, parse_direction


class GamePlay:
    """Orchestrates a single game session over a live board."""

    def __init__(self, board: Board) -> None:
        self.state = GameState(board)

    @property
    def board(self) -> Board:
        return self.state.board

    # -- movement -------------------------------------------------------------

    def move(self, vehicle: Vehicle | str | int, direction: Direction | str, n: int) -> bool:
        """Slide a vehicle, given as object, color or id.

        Returns True if the move was legal and applied. Illegal moves and
        unknown vehicles leave the board untouched and return False.
        """
        target = self._resolve(vehicle)
        if target is None:
            return False
        try:
            direction = parse_direction(direction)
        except InvalidMoveDescriptor:
            return False
        if not self.board.can_move(target, direction, n):
            return False

        self.board.move(target, direction, n)
        self.state.record_move(str(Move(target.color, target.id, direction, n)))
        return True

    def apply(self, move: Move | str) -> bool:
        """Apply a solver descriptor such as ``"red (01) right 4"``.

        The color must match the vehicle holding that id, otherwise the
        descriptor belongs to another board and False is returned.
        """
        if isinstance(move, str):
            try:
                move = Move.parse(move)
            except InvalidMoveDescriptor:
                return False
        target = self._resolve(move.vehicle_id)
        if target is None or target.color.casefold() != move.color.casefold():
            return False
        return self.move(target, move.direction, move.distance)

    def replay(self, moves: Iterable[Move | str]) -> int:
        """Apply *moves* in order, stopping at the first one that fails.

        Returns how many moves were applied.
        """
        applied = 0
        for move in moves:
            if not self.apply(move):
                break
            applied += 1
        return applied

    def restart(self) -> None:
        self.state.reset()

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    # -- helpers --------------------------------------------------------------

    def _resolve(self, vehicle: Vehicle | str | int) -> Vehicle | None:
        board = self.board
        if isinstance(vehicle, Vehicle):
            return vehicle if board.owns(vehicle) else None
        if isinstance(vehicle, int):
            if 1 <= vehicle <= len(board):
                return board.vehicle_at_index(vehicle - 1)
            return None
        return board.vehicle_by_color(vehicle)
