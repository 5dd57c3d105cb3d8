#!/usr/bin/env python3
"""Rush Hour solver.

Usage::

    python main.py                          # solve every level in levels/
    python main.py levels/beginner.rsh      # solve the levels of one file
    python main.py -f vanilla -b my.rsh     # plain output, board after each move
    python main.py -v my.rsh                # with debug logging
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import List, Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent  # rush-hour/
LEVELS_DIR = PROJECT_ROOT / "levels"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.board import DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_DIMENSION  # noqa: E402
from backend.models.levelfile import LEVEL_SUFFIX  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def _default_levels() -> list[Path]:
    if not LEVELS_DIR.is_dir():
        return []
    return sorted(LEVELS_DIR.glob(f"*{LEVEL_SUFFIX}"))


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    levels: Optional[List[Path]] = typer.Argument(
        None,
        help=f"Level files to solve. Omit to solve every {LEVEL_SUFFIX} file in levels/.",
    ),
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Console frontend used for the reports.",
    ),
    boards: bool = typer.Option(
        False, "-b", "--boards",
        help="Draw the board after every move of the solution.",
    ),
    width: int = typer.Option(
        DEFAULT_WIDTH, "-W", "--width",
        min=1, max=MAX_DIMENSION,
        help="Board width.",
    ),
    height: int = typer.Option(
        DEFAULT_HEIGHT, "-H", "--height",
        min=1, max=MAX_DIMENSION,
        help="Board height.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log search progress.",
    ),
) -> None:
    """Find the minimum-move solution of Rush Hour levels."""
    _configure_logging(verbose)

    paths = list(levels) if levels else _default_levels()
    if not paths:
        typer.echo(f"No level files given and none found in {LEVELS_DIR}.", err=True)
        raise typer.Exit(code=2)

    mod = importlib.import_module(_RUNNERS[frontend])
    code = mod.run(paths, width=width, height=height, show_boards=boards)
    if code:
        raise typer.Exit(code=code)


if __name__ == "__main__":
    app()
