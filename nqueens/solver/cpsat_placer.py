"""OR-Tools CP-SAT cross-check backend.

Builds the same constraint set as the backtracking solver as a CP-SAT model
and enumerates every solution. CP-SAT reports solutions in no particular
order, so they are sorted into lexicographic order before returning; the
result can be compared one-to-one with the backtracking output.

Model:
- One integer variable per row holding the queen's column
- AllDifferent over columns, over col + row and over col - row
- Square mode: block index col // k per row, AllDifferent within each band
  of k rows (at most one queen per k x k sub-square)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from ortools.sat.python import cp_model

from ..errors import require_board_size
from ..models.board import Solution, SolveMode
from .backtracking import STATUS_COMPLETE, STATUS_TIMEOUT, SolverResult
from .constraints import DEFAULT_REGION_SIZE, coerce_mode, predicate_for_mode

logger = logging.getLogger(__name__)


@dataclass
class CpSatConfig:
    """Configuration for the CP-SAT backend."""

    # Time limit in seconds (None = unbounded)
    max_time_seconds: Optional[float] = None

    # Random seed for reproducibility
    seed: int = 42

    # Extra CP-SAT parameters applied verbatim (name -> value)
    parameters: dict = field(default_factory=dict)


class PlacementCollector(cp_model.CpSolverSolutionCallback):
    """Collects every placement CP-SAT reports."""

    def __init__(self, queens: list[cp_model.IntVar]):
        super().__init__()
        self._queens = queens
        self._placements: list[tuple[int, ...]] = []

    def on_solution_callback(self):
        """Called when a new solution is found."""
        self._placements.append(tuple(self.value(q) for q in self._queens))

    def get_placements(self) -> list[tuple[int, ...]]:
        """Get collected placements in lexicographic order."""
        return sorted(self._placements)

    @property
    def solution_count(self) -> int:
        return len(self._placements)


class CpSatPlacementSolver:
    """Enumerate queen placements with OR-Tools CP-SAT."""

    def __init__(
        self,
        n: int,
        mode: SolveMode | str = SolveMode.CLASSIC,
        region_size: int = DEFAULT_REGION_SIZE,
        config: CpSatConfig | None = None,
    ):
        """Initialize solver.

        Args:
            n: Board size
            mode: Constraint-set variant
            region_size: Sub-square side for square mode
            config: Backend configuration

        Raises:
            InvalidArgumentError: If n, mode or region_size is invalid
        """
        self.n = require_board_size(n)
        self.mode = coerce_mode(mode)
        # Validates region_size the same way the backtracking solver does
        self.predicate = predicate_for_mode(self.mode, region_size)
        self.region_size = region_size
        self.config = config or CpSatConfig()

        self.model = cp_model.CpModel()
        self.queens: list[cp_model.IntVar] = []

        self._build_model()

    def _build_model(self):
        """Build the CP-SAT model with all constraints."""
        n = self.n
        self.queens = [self.model.new_int_var(0, n - 1, f"q_{row}") for row in range(n)]

        self.model.add_all_different(self.queens)
        self.model.add_all_different(self.queens[row] + row for row in range(n))
        self.model.add_all_different(self.queens[row] - row for row in range(n))

        if self.mode is SolveMode.SQUARE and self.region_size > 1:
            self._add_sub_square_constraints()

        logger.debug(f"Built CP-SAT model: n={n}, mode={self.mode.value}")

    def _add_sub_square_constraints(self):
        k = self.region_size
        n = self.n
        block_cols = []
        for row in range(n):
            block = self.model.new_int_var(0, (n - 1) // k, f"block_{row}")
            self.model.add_division_equality(block, self.queens[row], k)
            block_cols.append(block)

        for band_start in range(0, n, k):
            band = block_cols[band_start:band_start + k]
            if len(band) > 1:
                self.model.add_all_different(band)

    def solve(self) -> SolverResult:
        """Enumerate all solutions.

        Returns:
            SolverResult with solutions in lexicographic order
        """
        solver = cp_model.CpSolver()
        solver.parameters.enumerate_all_solutions = True
        solver.parameters.random_seed = self.config.seed
        if self.config.max_time_seconds is not None:
            solver.parameters.max_time_in_seconds = self.config.max_time_seconds
        for name, value in self.config.parameters.items():
            setattr(solver.parameters, name, value)

        collector = PlacementCollector(self.queens)

        start_time = time.time()
        status = solver.solve(self.model, collector)
        solve_time = time.time() - start_time

        if status == cp_model.MODEL_INVALID:
            raise RuntimeError(f"CP-SAT rejected the model: {self.model.validate()}")

        # OPTIMAL/INFEASIBLE mean the enumeration ran to the end
        if status in (cp_model.OPTIMAL, cp_model.INFEASIBLE):
            status_str = STATUS_COMPLETE
        else:
            status_str = STATUS_TIMEOUT

        placements = collector.get_placements()

        logger.info(
            f"CP-SAT finished: n={self.n}, mode={self.mode.value}, status={status_str}, "
            f"solutions={len(placements)}, time={solve_time:.3f}s"
        )

        return SolverResult(
            status=status_str,
            solutions=[Solution(size=self.n, placement=p) for p in placements],
            size=self.n,
            mode=self.mode,
            solve_time_seconds=solve_time,
            nodes_visited=solver.num_branches,
            statistics={
                "backend": "cpsat",
                "constraint": self.predicate.describe(),
                "cpsat_status": solver.status_name(status),
                "branches": solver.num_branches,
                "conflicts": solver.num_conflicts,
                "wall_time": solver.wall_time,
            },
        )


def solve_cpsat(
    n: int,
    mode: SolveMode | str = SolveMode.CLASSIC,
    region_size: int = DEFAULT_REGION_SIZE,
    max_time_seconds: float | None = None,
) -> list[Solution]:
    """Convenience wrapper returning only the ordered solutions."""
    config = CpSatConfig(max_time_seconds=max_time_seconds)
    return CpSatPlacementSolver(n, mode=mode, region_size=region_size, config=config).solve().solutions
