"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
backend as the vanilla CLI. Each vehicle is drawn in its own color when
Rich knows the color name.
"""

from __future__ import annotations

from pathlib import Path

import rich.box
from rich.align import Align
from rich.color import Color, ColorParseError
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gamesolver import SolveResult, Solver
from backend.models.board import EXIT_ROW, Board
from backend.models.errors import RushHourError
from backend.models.levelfile import load_levels
from backend.models.vehicle import Vehicle

console = Console()


# -- board rendering ----------------------------------------------------------


def _style_for(vehicle: Vehicle) -> str:
    try:
        Color.parse(vehicle.color.replace(" ", "_").lower())
    except ColorParseError:
        return "bold white"
    return f"bold {vehicle.color.replace(' ', '_').lower()}"


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the board; ``→`` marks the exit."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.width):
        table.add_column(width=2, justify="center")
    table.add_column(width=1, justify="left")

    for y in range(board.height):
        cells: list[str] = []
        for x in range(board.width):
            vehicle = board.vehicle_at(x, y)
            if vehicle is None:
                cells.append("[dim]·[/dim]")
            else:
                style = _style_for(vehicle)
                cells.append(f"[{style}]{vehicle.label}[/{style}]")
        cells.append("[bold green]→[/bold green]" if y == EXIT_ROW else "")
        table.add_row(*cells)

    return table


def _render_key(board: Board) -> Text:
    key = Text("Key: ", style="dim")
    for i, vehicle in enumerate(board.vehicles):
        if i:
            key.append(", ", style="dim")
        key.append(f"{vehicle.label}=", style="dim")
        key.append(vehicle.color, style=_style_for(vehicle))
    return key


# -- reports ------------------------------------------------------------------


def _board_panel(board: Board, title: str, border_style: str) -> Panel:
    return Panel(
        Align.center(_render_board(board)),
        title=title,
        border_style=border_style,
        padding=(1, 2),
    )


def _report_unsolvable(board: Board, title: str) -> None:
    console.print(Align.center(_board_panel(board, f"[bold]{title}[/bold]", "red")))
    console.print(Align.center(_render_key(board)))
    console.print(Align.center(Text("--THE GIVEN BOARD IS UNSOLVABLE--", style="bold red")))
    console.print()


def _report_solution(
    board: Board, title: str, result: SolveResult, show_boards: bool
) -> None:
    console.print(Align.center(_board_panel(board, f"[bold]{title}[/bold]", "bright_blue")))
    console.print(Align.center(_render_key(board)))

    moves = result.moves
    moves_table = Table(
        title=f"Solution — {len(moves)} moves",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    moves_table.add_column("#", justify="right", style="dim", width=3)
    moves_table.add_column("Move", style="yellow")
    for i, move in enumerate(moves, 1):
        moves_table.add_row(str(i), move)
    console.print(Align.center(moves_table))

    if show_boards:
        for i, (move, state) in enumerate(zip(moves, result.states), 1):
            panel = _board_panel(
                board.decode(state),
                f"[cyan]Move {i}/{len(moves)}[/cyan]  [dim]{move}[/dim]",
                "cyan",
            )
            console.print(Align.center(panel))

    winning = board.decode(result.winning_state or result.initial_state)
    console.print(
        Align.center(_board_panel(winning, "[bold green]Winning Board[/bold green]", "bold green"))
    )
    console.print()


def _report_error(path: Path, heading: str, exc: Exception) -> None:
    body = Group(Text(str(path), style="dim"), Text(str(exc)))
    console.print(Align.center(Panel(body, title=f"[bold red]{heading}[/bold red]", border_style="red")))


def _solve_file(path: Path, width: int, height: int, show_boards: bool) -> bool:
    try:
        boards = load_levels(path, width, height)
    except OSError as exc:
        _report_error(path, "Cannot read level file", exc)
        return False
    except RushHourError as exc:
        _report_error(path, "Invalid level file", exc)
        return False

    for n, board in enumerate(boards, 1):
        title = f"{path.name}  #{n}" if len(boards) > 1 else path.name
        with console.status(f"Solving {title}…"):
            result = Solver.solve(board)
        if result.solved:
            _report_solution(board, title, result, show_boards)
        else:
            _report_unsolvable(board, title)
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
