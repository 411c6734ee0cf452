"""Main placement pipeline.

Orchestrates a search from request to solutions:
1. Resolve the solver profile and request overrides
2. Run the selected backend (sequential, parallel or CP-SAT)
3. Reduce to fundamental solutions if requested
4. Collect statistics
"""

import asyncio
import logging
import time
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from .models.board import Solution, SolveMode
from .models.profile import SolverProfile
from .profiles.loader import load_profile, parse_profile
from .solver.backtracking import (
    STATUS_COMPLETE,
    STATUS_LIMIT,
    PlacementSolver,
    PlacementSolverConfig,
    SolverResult,
)
from .solver.cpsat_placer import CpSatConfig, CpSatPlacementSolver
from .solver.parallel import solve_parallel
from .solver.symmetry import fundamental_solutions
from .tools.nqueens_tools import SolveRequest

logger = logging.getLogger(__name__)


# Progress callback type
ProgressCallback = Callable[[str, float], None]


def resolve_profile(request: SolveRequest) -> SolverProfile:
    """Build the effective profile: inline YAML or a bundled name, then overrides."""
    override = request.options.to_override()
    if request.first_only:
        override["max_solutions"] = 1

    if request.profile_yaml is None:
        return load_profile(request.profile, override=override or None)

    _, profile = parse_profile(request.profile_yaml)
    return profile.with_overrides(override) if override else profile


def run_search(
    n: int,
    profile: SolverProfile,
    backend: str = "backtracking",
) -> SolverResult:
    """Run one search synchronously with the given profile."""
    if backend == "cpsat":
        result = CpSatPlacementSolver(
            n,
            mode=profile.mode,
            region_size=profile.region_size,
            config=CpSatConfig(max_time_seconds=profile.max_time_seconds),
        ).solve()
        if profile.max_solutions is not None and len(result.solutions) > profile.max_solutions:
            result.solutions = result.solutions[:profile.max_solutions]
            if result.status == STATUS_COMPLETE:
                result.status = STATUS_LIMIT
        return result

    config = PlacementSolverConfig(
        max_solutions=profile.max_solutions,
        max_time_seconds=profile.max_time_seconds,
    )
    if profile.parallel:
        return solve_parallel(
            n,
            mode=profile.mode,
            region_size=profile.region_size,
            config=config,
            max_workers=profile.max_workers,
        )
    return PlacementSolver(
        n, mode=profile.mode, region_size=profile.region_size, config=config
    ).solve()


async def solve_placements(
    request: SolveRequest,
    progress_callback: Optional[ProgressCallback] = None,
) -> Tuple[List[Solution], Dict[str, Any]]:
    """Main pipeline: run a placement search from a request.

    Args:
        request: SolveRequest with board size, profile and overrides
        progress_callback: Optional callback for progress updates (message, percent)

    Returns:
        Tuple of (solutions, statistics)

    Raises:
        InvalidArgumentError: If the board size or options are invalid
        ProfileNotFoundError: If the profile does not exist
    """
    job_id = str(uuid.uuid4())[:8]
    stats: Dict[str, Any] = {"job_id": job_id}
    start_time = time.time()

    def report_progress(message: str, percent: float):
        if progress_callback:
            progress_callback(message, percent)
        logger.info(f"[{job_id}] {message} ({percent:.0f}%)")

    # PHASE 1: Resolve configuration
    report_progress("Resolving profile...", 5)
    profile = resolve_profile(request)
    stats["profile"] = "inline" if request.profile_yaml is not None else request.profile
    stats["mode"] = profile.mode.value
    stats["size"] = request.n
    if profile.mode is SolveMode.SQUARE:
        stats["region_size"] = profile.region_size

    # PHASE 2: Search (CPU-bound, keep the event loop free)
    report_progress(f"Searching {request.n}x{request.n} board ({request.backend})...", 20)
    result = await asyncio.to_thread(run_search, request.n, profile, request.backend)
    solutions = result.solutions

    stats["status"] = result.status
    stats["backend"] = result.statistics.get("backend", request.backend)
    stats["total_found"] = len(solutions)
    stats["nodes_visited"] = result.nodes_visited
    stats["solve_time_seconds"] = round(result.solve_time_seconds, 4)

    # PHASE 3: Symmetry reduction
    if profile.unique_only and solutions:
        report_progress("Reducing to fundamental solutions...", 80)
        solutions = fundamental_solutions(solutions)
        stats["fundamental_solutions"] = len(solutions)

    stats["num_solutions"] = len(solutions)
    stats["total_time_seconds"] = round(time.time() - start_time, 4)
    report_progress(f"Done: {len(solutions)} solutions", 100)

    return solutions, stats
