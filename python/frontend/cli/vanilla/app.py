"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes) to report the optimal solution of
every level in the given files, in the plain board layout::

     -- -- -- -- -- --
    |  |  |  |  |02|  |
    |  |  |  |  |02|  |
    |01|01|  |  |  |
     -- -- -- -- -- --
"""

from __future__ import annotations

from pathlib import Path

from backend.engine.gamesolver import SolveResult, Solver
from backend.models.board import EXIT_ROW, Board
from backend.models.errors import RushHourError
from backend.models.levelfile import load_levels


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_R = "\033[0m"       # reset


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> str:
    """Return the board as text, one two-digit id per occupied cell.

    The right edge of the exit row is left open.
    """
    sep = " " + " ".join(["--"] * board.width)
    lines: list[str] = [sep]
    for y in range(board.height):
        cells: list[str] = []
        for x in range(board.width):
            vehicle = board.vehicle_at(x, y)
            if vehicle is None:
                cells.append("  ")
            elif vehicle.id == 1:
                cells.append(f"{_RED}{vehicle.label}{_R}")
            else:
                cells.append(vehicle.label)
        right = "" if y == EXIT_ROW else "|"
        lines.append("|" + "|".join(cells) + right)
    lines.append(sep)
    return "\n".join(lines)


def _render_key(board: Board) -> str:
    return ", ".join(f"{v.label}={v.color}" for v in board.vehicles)


# -- reports ------------------------------------------------------------------


def _report_unsolvable(board: Board) -> None:
    print("::Initial Board::")
    print(_render_board(board))
    print(f"Key: {_render_key(board)}")
    print(f"{_Y}--THE GIVEN BOARD IS UNSOLVABLE--{_R}")
    print()


def _report_solution(board: Board, result: SolveResult, show_boards: bool) -> None:
    print("::Initial Board::")
    print(_render_board(board))
    print(f"Key: {_render_key(board)}")

    moves = result.moves
    states = result.states
    print(f"\n{_C}::Solution::{_R}")
    print(f"Number of Moves: {_G}{len(moves)}{_R}")
    for i, (move, state) in enumerate(zip(moves, states)):
        print(f"Move {move}")
        if show_boards:
            if i == len(moves) - 1:
                print(f"{_G}::Winning Board::{_R}")
            print(_render_board(board.decode(state)))

    if not show_boards:
        print(f"\n{_G}::Winning Board::{_R}")
        print(_render_board(board.decode(result.winning_state or result.initial_state)))
    print()


def _solve_file(path: Path, width: int, height: int, show_boards: bool) -> bool:
    print(f"{_DIM}--{path}--{_R}")
    try:
        boards = load_levels(path, width, height)
    except OSError as exc:
        print(f"{_RED}--Error: cannot read level file--{_R}\n{exc}\n")
        return False
    except RushHourError as exc:
        print(f"{_RED}--Error: invalid level file--{_R}\n{exc}\n")
        return False

    for board in boards:
        result = Solver.solve(board)
        if result.solved:
            _report_solution(board, result, show_boards)
        else:
            _report_unsolvable(board)
    return True


# -- public entry point -------------------------------------------------------


def run(
    levels: list[Path], width: int, height: int, show_boards: bool = False
) -> int:
    """Solve every level in *levels* and print the reports. Returns the exit code."""
    ok = True
    for path in levels:
        ok = _solve_file(path, width, height, show_boards) and ok
    return 0 if ok else 1
