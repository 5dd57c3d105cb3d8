"""Rush Hour solver — exhaustive breadth-first search over board states.

A *slide* of any length is a single edge, so the shortest path found is
the solution with the fewest slides, not the fewest cells travelled.
Neighbors are generated in a fixed order (vehicle id, then right/down
before left/up, then increasing distance), which makes the reported
solution deterministic when several optimal ones exist.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from backend.engine.gamesolver.path import reconstruct_path, reconstruct_states
from backend.models.board import Board
from backend.models.state import BoardState
from backend.models.vehicle import Direction, Move, Orientation, vehicle_cells

logger = logging.getLogger(__name__)

_SWEEPS: dict[Orientation, tuple[Direction, Direction]] = {
    Orientation.HORIZONTAL: (Direction.RIGHT, Direction.LEFT),
    Orientation.VERTICAL: (Direction.DOWN, Direction.UP),
}


# -- search inputs and outputs ------------------------------------------------


@dataclass(frozen=True)
class VehicleShape:
    """The parts of a vehicle that never change during a search."""

    id: int
    color: str
    orientation: Orientation
    length: int


@dataclass(frozen=True)
class SearchRoster:
    """Immutable snapshot of a board taken before searching.

    Holds the board size, the static attributes of each vehicle and the
    starting positions, so the search never reads the live board.
    """

    width: int
    height: int
    shapes: tuple[VehicleShape, ...]
    initial: BoardState

    @classmethod
    def from_board(cls, board: Board) -> SearchRoster:
        shapes = tuple(
            VehicleShape(v.id, v.color, v.orientation, v.length) for v in board.vehicles
        )
        return cls(board.width, board.height, shapes, board.state())

    @property
    def exit_column(self) -> int:
        return self.width - 2

    def fits(self, state: BoardState) -> bool:
        """True if every vehicle lies on the board and no two share a cell."""
        if len(state.positions) != len(self.shapes):
            return False
        occupied: set[tuple[int, int]] = set()
        for shape, (x, y) in zip(self.shapes, state.positions):
            for cx, cy in vehicle_cells(shape.orientation, shape.length, x, y):
                if not (0 <= cx < self.width and 0 <= cy < self.height):
                    return False
                if (cx, cy) in occupied:
                    return False
                occupied.add((cx, cy))
        return True


@dataclass
class SolveResult:
    """Outcome of one search.

    ``parents`` maps every discovered state key to the key it was first
    reached from (``None`` for the initial state); ``directions`` maps it
    to the descriptor of that move.
    """

    solved: bool
    initial_state: str
    winning_state: str | None = None
    parents: dict[str, str | None] = field(default_factory=dict)
    directions: dict[str, str] = field(default_factory=dict)
    explored: int = 0

    @property
    def moves(self) -> list[str]:
        if not self.solved or self.winning_state is None:
            return []
        return reconstruct_path(self.parents, self.directions, self.winning_state)

    @property
    def states(self) -> list[str]:
        """State key after each move of :attr:`moves`."""
        if not self.solved or self.winning_state is None:
            return []
        return reconstruct_states(self.parents, self.winning_state)

    @property
    def move_count(self) -> int:
        return len(self.moves)


# -- BFS ----------------------------------------------------------------------


class _Search:
    """Queue and bookkeeping of a single search; never shared between calls."""

    def __init__(self, roster: SearchRoster) -> None:
        self.roster = roster
        self.queue: deque[BoardState] = deque()
        self.parents: dict[str, str | None] = {}
        self.directions: dict[str, str] = {}
        self.explored = 0

    def run(self) -> SolveResult:
        roster = self.roster
        initial = roster.initial.key()
        self.parents[initial] = None
        self.queue.append(roster.initial)

        while self.queue:
            state = self.queue.popleft()
            self.explored += 1
            parent_key = state.key()
            for index, shape in enumerate(roster.shapes):
                x, y = state.positions[index]
                for direction in _SWEEPS[shape.orientation]:
                    dx, dy = direction.delta
                    n = 1
                    while True:
                        neighbor = state.with_position(index, x + dx * n, y + dy * n)
                        if not roster.fits(neighbor):
                            break
                        key = neighbor.key()
                        is_new = key not in self.parents
                        if is_new:
                            self.parents[key] = parent_key
                            self.directions[key] = str(
                                Move(shape.color, shape.id, direction, n)
                            )
                            self.queue.append(neighbor)
                        if (
                            shape.id == 1
                            and direction is Direction.RIGHT
                            and x + n == roster.exit_column
                        ):
                            return self._result(initial, winning_state=key)
                        n += 1

        return self._result(initial, winning_state=None)

    def _result(self, initial: str, winning_state: str | None) -> SolveResult:
        return SolveResult(
            solved=winning_state is not None,
            initial_state=initial,
            winning_state=winning_state,
            parents=self.parents,
            directions=self.directions,
            explored=self.explored,
        )


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(board: Board) -> SolveResult:
        """Find the fewest slides that bring the red car to the exit.

        The board is only read while taking a snapshot; the caller may
        keep using it while the search runs elsewhere. An unsolvable
        board is an ordinary result with ``solved=False``.
        """
        return Solver.solve_snapshot(SearchRoster.from_board(board))

    @staticmethod
    def solve_snapshot(roster: SearchRoster) -> SolveResult:
        initial = roster.initial.key()
        if roster.shapes and roster.initial.positions[0][0] == roster.exit_column:
            return SolveResult(
                solved=True,
                initial_state=initial,
                winning_state=initial,
                parents={initial: None},
            )

        logger.debug(
            "Searching %d×%d board with %d vehicles from %s",
            roster.width, roster.height, len(roster.shapes), initial,
        )
        result = _Search(roster).run()
        if result.solved:
            logger.info(
                "Solved in %d moves (%d states explored)",
                result.move_count, result.explored,
            )
        else:
            logger.info("Board is unsolvable (%d states explored)", result.explored)
        return result

    @staticmethod
    def hint(board: Board) -> Move | None:
        """Return the first move of an optimal solution, or ``None`` if solved / unsolvable."""
        if board.is_solved():
            return None
        moves = Solver.solve(board).moves
        return Move.parse(moves[0]) if moves else None

    @staticmethod
    def is_solvable(board: Board) -> bool:
        return Solver.solve(board).solved
