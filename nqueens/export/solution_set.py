"""JSON export of solution sets (contract version 1.0.0)."""

import json
import logging
from pathlib import Path
from typing import Any

from ..models.board import Solution, SolveMode
from ..models.solution_set import SolutionSet

logger = logging.getLogger(__name__)


def to_solution_set(
    solutions: list[Solution],
    size: int,
    mode: SolveMode = SolveMode.CLASSIC,
    region_size: int | None = None,
) -> SolutionSet:
    """Build the export model for an ordered list of solutions."""
    return SolutionSet(
        size=size,
        mode=mode,
        region_size=region_size if mode is SolveMode.SQUARE else None,
        count=len(solutions),
        solutions=[s.as_list() for s in solutions],
    )


def solutions_to_dict(
    solutions: list[Solution],
    size: int,
    mode: SolveMode = SolveMode.CLASSIC,
    region_size: int | None = None,
) -> dict[str, Any]:
    """Export solutions as a JSON-serializable dict."""
    return to_solution_set(solutions, size, mode, region_size).model_dump(mode="json")


def save_solutions(
    solutions: list[Solution],
    path: str | Path,
    size: int,
    mode: SolveMode = SolveMode.CLASSIC,
    region_size: int | None = None,
) -> Path:
    """Write solutions to a JSON file."""
    path = Path(path)
    data = solutions_to_dict(solutions, size, mode, region_size)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Saved {len(solutions)} solutions to {path}")
    return path
