"""Depth-first backtracking placement solver.

Rows are filled top to bottom and columns are tried left to right, so
solutions come out in lexicographic order of their placement sequences.
Column and diagonal conflicts are checked in O(1) through three occupancy
sets; an optional predicate adds extra rules (see constraints.py).
"""

import logging
import threading
import time
from contextlib import closing
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from ..errors import InvalidArgumentError, require_board_size
from ..models.board import Solution, SolveMode
from .constraints import (
    DEFAULT_REGION_SIZE,
    ConstraintPredicate,
    Predicate,
    as_predicate,
    coerce_mode,
    predicate_for_mode,
)
from .solution_pool import SolutionCollector

logger = logging.getLogger(__name__)

STATUS_COMPLETE = "complete"
STATUS_LIMIT = "limit"
STATUS_TIMEOUT = "timeout"
STATUS_CANCELLED = "cancelled"


@dataclass
class PlacementSolverConfig:
    """Configuration for the placement solver."""

    # Stop after this many solutions (None = enumerate all)
    max_solutions: Optional[int] = None

    # Wall-clock limit in seconds (None = unbounded)
    max_time_seconds: Optional[float] = None

    # Set from another thread to stop the search at the next row descent
    cancel_event: Optional[threading.Event] = None


@dataclass
class SolverResult:
    """Result from the placement solver."""

    status: str  # "complete", "limit", "timeout", "cancelled"
    solutions: list[Solution]
    size: int
    mode: SolveMode
    solve_time_seconds: float
    nodes_visited: int = 0
    statistics: dict[str, Any] = field(default_factory=dict)

    @property
    def num_solutions_found(self) -> int:
        return len(self.solutions)

    @property
    def placements(self) -> list[list[int]]:
        """Solutions as plain lists, in order."""
        return [s.as_list() for s in self.solutions]


class PlacementSolver:
    """Backtracking solver for one board size and constraint set.

    Each call to ``iter_placements``/``solve`` owns its working board and
    occupancy sets; nothing is shared between calls, so one instance can be
    reused and gives identical output every time.
    """

    def __init__(
        self,
        n: int,
        mode: SolveMode | str = SolveMode.CLASSIC,
        predicate: Predicate | None = None,
        region_size: int = DEFAULT_REGION_SIZE,
        config: PlacementSolverConfig | None = None,
    ):
        """Initialize solver.

        Args:
            n: Board size (must be a positive integer)
            mode: Constraint-set variant
            predicate: Extra rule replacing the mode's built-in predicate
            region_size: Sub-square side for square mode
            config: Solver configuration

        Raises:
            InvalidArgumentError: If n, mode or region_size is invalid
        """
        self.n = require_board_size(n)
        self.mode = coerce_mode(mode)
        self.predicate: ConstraintPredicate = (
            as_predicate(predicate) or predicate_for_mode(self.mode, region_size)
        )
        self.config = config or PlacementSolverConfig()

        if self.config.max_solutions is not None and self.config.max_solutions < 1:
            raise InvalidArgumentError(
                f"max_solutions must be at least 1, got {self.config.max_solutions}"
            )

        self.nodes_visited = 0
        self.stop_reason: str | None = None
        self._deadline: float | None = None

    def _start(self) -> None:
        self.nodes_visited = 0
        self.stop_reason = None
        if self.config.max_time_seconds is not None:
            self._deadline = time.monotonic() + self.config.max_time_seconds
        else:
            self._deadline = None

    def _interrupted(self) -> bool:
        """Check cancellation and the time limit (called at each row descent)."""
        if self.stop_reason is not None:
            return True
        cancel = self.config.cancel_event
        if cancel is not None and cancel.is_set():
            self.stop_reason = STATUS_CANCELLED
        elif self._deadline is not None and time.monotonic() >= self._deadline:
            self.stop_reason = STATUS_TIMEOUT
        return self.stop_reason is not None

    def iter_placements(self, prefix: Sequence[int] = ()) -> Iterator[tuple[int, ...]]:
        """Yield complete placements extending ``prefix`` in lexicographic order.

        Args:
            prefix: Columns already fixed for the first rows

        Yields:
            Placement tuples; nothing if the prefix itself is invalid
        """
        self._start()

        board: list[int] = []
        cols: set[int] = set()
        diag_down: set[int] = set()  # row - col
        diag_up: set[int] = set()    # row + col

        for row, col in enumerate(prefix):
            if (
                not 0 <= col < self.n
                or col in cols
                or (row - col) in diag_down
                or (row + col) in diag_up
                or not self.predicate(board, row, col)
            ):
                logger.debug(f"Prefix {list(prefix)} rejected at row {row}")
                return
            board.append(col)
            cols.add(col)
            diag_down.add(row - col)
            diag_up.add(row + col)

        yield from self._search(board, cols, diag_down, diag_up)

    def _search(
        self,
        board: list[int],
        cols: set[int],
        diag_down: set[int],
        diag_up: set[int],
    ) -> Iterator[tuple[int, ...]]:
        row = len(board)
        if row == self.n:
            yield tuple(board)
            return

        if self._interrupted():
            return

        for col in range(self.n):
            self.nodes_visited += 1
            if col in cols or (row - col) in diag_down or (row + col) in diag_up:
                continue
            if not self.predicate(board, row, col):
                continue

            board.append(col)
            cols.add(col)
            diag_down.add(row - col)
            diag_up.add(row + col)
            try:
                yield from self._search(board, cols, diag_down, diag_up)
            finally:
                # Backtrack (also runs when the consumer closes the generator)
                board.pop()
                cols.discard(col)
                diag_down.discard(row - col)
                diag_up.discard(row + col)

            if self.stop_reason is not None:
                return

    def iter_solutions(self, prefix: Sequence[int] = ()) -> Iterator[Solution]:
        """Yield Solution objects lazily, in lexicographic order."""
        for placement in self.iter_placements(prefix):
            yield Solution(size=self.n, placement=placement)

    def solve(self, prefix: Sequence[int] = ()) -> SolverResult:
        """Run the search.

        Status is "limit" only when max_solutions placements were kept and
        the search did not run to exhaustion; if the board has exactly
        max_solutions solutions the status is "complete". Deciding this
        takes one extra step of search past the last kept solution.

        Args:
            prefix: Columns already fixed for the first rows

        Returns:
            SolverResult with ordered solutions and statistics
        """
        start_time = time.time()
        max_solutions = self.config.max_solutions

        with SolutionCollector(max_solutions=max_solutions) as collector:
            with closing(self.iter_placements(prefix)) as placements:
                for placement in placements:
                    if collector.is_full:
                        # A solution beyond the limit exists
                        self.stop_reason = STATUS_LIMIT
                        break
                    collector.add(placement)
            # Interrupted while looking past a full collector: the request was still met
            if collector.is_full and self.stop_reason is not None:
                self.stop_reason = STATUS_LIMIT
            found = collector.ordered()

        solve_time = time.time() - start_time
        status = self.stop_reason or STATUS_COMPLETE

        logger.info(
            f"Solver finished: n={self.n}, mode={self.mode.value}, status={status}, "
            f"solutions={len(found)}, nodes={self.nodes_visited}, time={solve_time:.3f}s"
        )

        return SolverResult(
            status=status,
            solutions=[Solution(size=self.n, placement=p) for p in found],
            size=self.n,
            mode=self.mode,
            solve_time_seconds=solve_time,
            nodes_visited=self.nodes_visited,
            statistics={
                "backend": "backtracking",
                "constraint": self.predicate.describe(),
                "prefix": list(prefix),
            },
        )


def iter_solutions(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    predicate: Predicate | None = None,
    region_size: int = DEFAULT_REGION_SIZE,
) -> Iterator[Solution]:
    """Lazily enumerate solutions in lexicographic order.

    Arguments are validated immediately, before the first item is requested.
    """
    solver = PlacementSolver(n, mode=mode, predicate=predicate, region_size=region_size)
    return solver.iter_solutions()


def solve(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    predicate: Predicate | None = None,
    region_size: int = DEFAULT_REGION_SIZE,
    config: PlacementSolverConfig | None = None,
) -> list[Solution]:
    """Find all solutions (or up to config.max_solutions) in lexicographic order.

    Returns an empty list when the board has no solution.

    Raises:
        InvalidArgumentError: If n is not a positive integer
    """
    solver = PlacementSolver(
        n, mode=mode, predicate=predicate, region_size=region_size, config=config
    )
    return solver.solve().solutions


def solve_first(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    predicate: Predicate | None = None,
    region_size: int = DEFAULT_REGION_SIZE,
) -> Solution | None:
    """Find the lexicographically first solution, or None if there is none."""
    solver = PlacementSolver(
        n,
        mode=mode,
        predicate=predicate,
        region_size=region_size,
        config=PlacementSolverConfig(max_solutions=1),
    )
    solutions = solver.solve().solutions
    return solutions[0] if solutions else None


def count_solutions(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    predicate: Predicate | None = None,
    region_size: int = DEFAULT_REGION_SIZE,
) -> int:
    """Count solutions without materializing Solution objects."""
    solver = PlacementSolver(n, mode=mode, predicate=predicate, region_size=region_size)
    return sum(1 for _ in solver.iter_placements())
