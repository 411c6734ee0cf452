"""Parallel search over first-row columns.

Each of the N top-level branches (row 0 fixed to one column) runs as an
independent task with its own board. Results land in an append-only
SolutionCollector tagged by the fixed column and are sorted on that tag
before returning, so the output order matches a sequential search. When a
branch times out or is cancelled, the result ends with that branch's partial
list and later branches are dropped.
"""

import logging
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Optional

from ..errors import InvalidArgumentError, require_board_size
from ..models.board import Solution, SolveMode
from .backtracking import (
    STATUS_CANCELLED,
    STATUS_COMPLETE,
    STATUS_LIMIT,
    STATUS_TIMEOUT,
    PlacementSolver,
    PlacementSolverConfig,
    SolverResult,
)
from .constraints import (
    DEFAULT_REGION_SIZE,
    CallablePredicate,
    Predicate,
    as_predicate,
    coerce_mode,
    predicate_for_mode,
)
from .solution_pool import SolutionCollector

logger = logging.getLogger(__name__)

_INTERRUPTED = (STATUS_TIMEOUT, STATUS_CANCELLED)


def _solve_branch(
    n: int,
    first_col: int,
    predicate,
    max_solutions: Optional[int],
    deadline: Optional[float],
    cancel_event=None,
) -> tuple[int, list[tuple[int, ...]], str, int]:
    """Solve one top-level branch (module level so process pools can pickle it).

    Returns:
        (first_col, placements, status, nodes_visited)
    """
    max_time = None
    if deadline is not None:
        max_time = deadline - time.time()
        if max_time <= 0:
            return first_col, [], STATUS_TIMEOUT, 0

    solver = PlacementSolver(
        n,
        predicate=predicate,
        config=PlacementSolverConfig(
            max_solutions=max_solutions,
            max_time_seconds=max_time,
            cancel_event=cancel_event,
        ),
    )
    result = solver.solve(prefix=(first_col,))
    return first_col, [s.placement for s in result.solutions], result.status, result.nodes_visited


def _first_interrupted(statuses: dict[int, str]) -> Optional[int]:
    """Lowest branch that stopped on timeout or cancellation, if any."""
    interrupted = [col for col, status in statuses.items() if status in _INTERRUPTED]
    return min(interrupted) if interrupted else None


def _merge_status(
    statuses: dict[int, str],
    kept: int,
    max_solutions: Optional[int],
    cutoff: Optional[int],
) -> str:
    """Combine branch statuses the way a sequential search would report them.

    Args:
        statuses: Status per first-row column
        kept: Placements in branches up to and including the cutoff
        max_solutions: Requested limit
        cutoff: First interrupted branch (None if none)
    """
    if max_solutions is not None and kept >= max_solutions:
        more_remain = (
            kept > max_solutions
            or cutoff is not None
            or any(
                status == STATUS_LIMIT
                for col, status in statuses.items()
                if cutoff is None or col <= cutoff
            )
        )
        return STATUS_LIMIT if more_remain else STATUS_COMPLETE
    if cutoff is not None:
        return statuses[cutoff]
    return STATUS_COMPLETE


def solve_parallel(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    predicate: Predicate | None = None,
    region_size: int = DEFAULT_REGION_SIZE,
    config: PlacementSolverConfig | None = None,
    max_workers: int | None = None,
    use_processes: bool | None = None,
) -> SolverResult:
    """Solve with one task per first-row column.

    Args:
        n: Board size
        mode: Constraint-set variant
        predicate: Extra rule replacing the mode's built-in predicate
        region_size: Sub-square side for square mode
        config: max_solutions / max_time_seconds / cancel_event
        max_workers: Executor worker count (None = executor default)
        use_processes: Process pool instead of threads; None picks processes
            unless a plain callable predicate was supplied (it may not pickle)

    Returns:
        SolverResult in the same order as the sequential solver
    """
    n = require_board_size(n)
    mode = coerce_mode(mode)
    config = config or PlacementSolverConfig()
    if max_workers is not None and max_workers < 1:
        raise InvalidArgumentError(f"max_workers must be at least 1, got {max_workers}")

    branch_predicate = as_predicate(predicate) or predicate_for_mode(mode, region_size)
    if use_processes is None:
        use_processes = not isinstance(branch_predicate, CallablePredicate)

    deadline = None
    if config.max_time_seconds is not None:
        deadline = time.time() + config.max_time_seconds

    # threading.Event does not cross process boundaries
    cancel_event = None if use_processes else config.cancel_event

    executor_cls: type[Executor] = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
    logger.info(
        f"Parallel search: n={n}, mode={mode.value}, branches={n}, "
        f"executor={executor_cls.__name__}, workers={max_workers or 'auto'}"
    )

    start_time = time.time()
    statuses: dict[int, str] = {}
    nodes_visited = 0

    with SolutionCollector() as collector:
        with executor_cls(max_workers=max_workers) as executor:
            futures = [
                executor.submit(
                    _solve_branch,
                    n,
                    first_col,
                    branch_predicate,
                    config.max_solutions,
                    deadline,
                    cancel_event,
                )
                for first_col in range(n)
            ]
            for future in as_completed(futures):
                first_col, placements, status, nodes = future.result()
                collector.extend(placements, branch=first_col)
                statuses[first_col] = status
                nodes_visited += nodes
                logger.debug(
                    f"Branch {first_col} finished: status={status}, solutions={len(placements)}"
                )

        # Output ends with the first interrupted branch so it stays a prefix
        # of the sequential order
        cutoff = _first_interrupted(statuses)
        kept = collector.ordered(through_branch=cutoff)

    found = kept if config.max_solutions is None else kept[:config.max_solutions]
    status = _merge_status(statuses, len(kept), config.max_solutions, cutoff)
    if cutoff is not None:
        logger.info(f"Branch {cutoff} stopped early ({statuses[cutoff]}); later branches dropped")

    solve_time = time.time() - start_time
    logger.info(
        f"Parallel search finished: status={status}, solutions={len(found)}, "
        f"time={solve_time:.3f}s"
    )

    return SolverResult(
        status=status,
        solutions=[Solution(size=n, placement=p) for p in found],
        size=n,
        mode=mode,
        solve_time_seconds=solve_time,
        nodes_visited=nodes_visited,
        statistics={
            "backend": "parallel",
            "constraint": branch_predicate.describe(),
            "branches": n,
            "executor": executor_cls.__name__,
        },
    )
