"""Backtracking placement solver with parallel and CP-SAT backends."""

from .backtracking import (
    PlacementSolver,
    PlacementSolverConfig,
    SolverResult,
    count_solutions,
    iter_solutions,
    solve,
    solve_first,
)
from .constraints import (
    CallablePredicate,
    ConstraintPredicate,
    NoExtraConstraint,
    Predicate,
    SubSquareConstraint,
    find_violations,
    is_valid_placement,
    predicate_for_mode,
    queens_attack,
)
from .cpsat_placer import CpSatConfig, CpSatPlacementSolver, solve_cpsat
from .parallel import solve_parallel
from .solution_pool import SolutionCollector
from .symmetry import (
    SymmetryClass,
    canonical_form,
    dihedral_images,
    fundamental_solutions,
    group_by_symmetry,
)

__all__ = [
    # Main solver
    "PlacementSolver",
    "PlacementSolverConfig",
    "SolverResult",
    "solve",
    "solve_first",
    "iter_solutions",
    "count_solutions",
    # Constraints
    "Predicate",
    "ConstraintPredicate",
    "NoExtraConstraint",
    "SubSquareConstraint",
    "CallablePredicate",
    "predicate_for_mode",
    "find_violations",
    "is_valid_placement",
    "queens_attack",
    # Other backends
    "solve_parallel",
    "CpSatPlacementSolver",
    "CpSatConfig",
    "solve_cpsat",
    # Solution collection
    "SolutionCollector",
    # Symmetry
    "SymmetryClass",
    "canonical_form",
    "dihedral_images",
    "fundamental_solutions",
    "group_by_symmetry",
]
