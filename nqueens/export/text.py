"""Plain-text board rendering."""

from typing import Iterable

from ..models.board import Solution

QUEEN = "Q"
EMPTY = "."


def render_board(solution: Solution, queen: str = QUEEN, empty: str = EMPTY) -> str:
    """Render a placement as an N-line text board, row 0 first."""
    lines = []
    for col in solution.placement:
        cells = [empty] * solution.size
        cells[col] = queen
        lines.append(" ".join(cells))
    return "\n".join(lines)


def render_placement(solution: Solution) -> str:
    """Render a placement sequence, e.g. ``[1, 3, 0, 2]``."""
    return str(solution.as_list())


def render_solutions(solutions: Iterable[Solution], boards: bool = False) -> str:
    """Render solutions one per line, optionally followed by their boards."""
    blocks = []
    for solution in solutions:
        if boards:
            blocks.append(f"{render_placement(solution)}\n{render_board(solution)}\n")
        else:
            blocks.append(render_placement(solution))
    return "\n".join(blocks)
