"""Command line interface.

    nqueens 8
    nqueens 4 --square --board
    nqueens 12 --first

Placements are printed to stdout one per line; logs and errors go to stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .errors import InvalidArgumentError, ProfileNotFoundError
from .export.text import render_board, render_placement
from .models.board import SolveMode
from .profiles.loader import load_profile, parse_profile
from .solver.backtracking import PlacementSolver, PlacementSolverConfig
from .solver.parallel import solve_parallel
from .solver.symmetry import fundamental_solutions

logger = logging.getLogger(__name__)

app = typer.Typer(help="Enumerate non-attacking queen placements on an N x N board.")


def _fail(message: str) -> None:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


def _parse_board_size(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise InvalidArgumentError(f"Board size must be an integer, got '{value}'") from None
    if n <= 0:
        raise InvalidArgumentError(f"Board size must be at least 1, got {n}")
    return n


# Negative sizes such as "-1" must reach the argument instead of being parsed as options
@app.command(context_settings={"ignore_unknown_options": True})
def main(
    n: str = typer.Argument(..., help="Board size N (positive integer)"),
    square: bool = typer.Option(False, "--square", help="Solve the N-Queens-square variant"),
    region_size: Optional[int] = typer.Option(
        None, "--region-size", help="Sub-square side for --square (default from profile)"
    ),
    first: bool = typer.Option(False, "--first", help="Print only the first solution"),
    unique: bool = typer.Option(False, "--unique", help="One solution per rotation/reflection class"),
    board: bool = typer.Option(False, "--board", help="Draw each board under its placement"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Solver profile name"),
    profile_file: Optional[Path] = typer.Option(
        None,
        "--profile-file",
        exists=True,
        dir_okay=False,
        help="Read solver settings from a YAML profile file",
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", help="Search first-row branches in parallel with this many processes"
    ),
    max_time: Optional[float] = typer.Option(None, "--max-time", help="Search time limit in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log search progress to stderr"),
):
    """Print every solution's placement sequence, one per line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    override: dict = {}
    if square:
        override["mode"] = SolveMode.SQUARE.value
    if region_size is not None:
        override["region_size"] = region_size
    if first:
        override["max_solutions"] = 1
    if unique:
        override["unique_only"] = True
    if workers is not None:
        override["parallel"] = True
        override["max_workers"] = workers
    if max_time is not None:
        override["max_time_seconds"] = max_time

    try:
        size = _parse_board_size(n)
        if profile_file is not None:
            _, settings = parse_profile(profile_file.read_text(encoding="utf-8"))
            if override:
                settings = settings.with_overrides(override)
        else:
            settings = load_profile(profile or ("square" if square else "classic"), override=override or None)
        config = PlacementSolverConfig(
            max_solutions=settings.max_solutions,
            max_time_seconds=settings.max_time_seconds,
        )
        if settings.parallel:
            result = solve_parallel(
                size,
                mode=settings.mode,
                region_size=settings.region_size,
                config=config,
                max_workers=settings.max_workers,
            )
        else:
            result = PlacementSolver(
                size, mode=settings.mode, region_size=settings.region_size, config=config
            ).solve()
    except (InvalidArgumentError, ProfileNotFoundError, ValidationError) as e:
        _fail(str(e))

    solutions = result.solutions
    if settings.unique_only:
        solutions = fundamental_solutions(solutions)

    for solution in solutions:
        typer.echo(render_placement(solution))
        if board:
            typer.echo(render_board(solution))
            typer.echo("")

    logger.info(f"{len(solutions)} solutions, status={result.status}")
    if result.status in ("timeout", "cancelled"):
        typer.echo(f"warning: search stopped early ({result.status})", err=True)


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
