"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board


class GameState:
    """Holds the live board, its starting layout, move counter and elapsed time."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.start_state: str = board.encode()
        self.moves: int = 0
        self.history: list[str] = []
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def record_move(self, descriptor: str) -> None:
        self.moves += 1
        self.history.append(descriptor)

    def reset(self) -> None:
        """Restore the starting layout and zero the counter and clock."""
        self.board.apply_state(self.start_state)
        self.moves = 0
        self.history.clear()
        self._elapsed_banked = 0.0
        self._start_time = time.time()
        self._running = True

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
