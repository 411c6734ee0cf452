"""Constraint predicates for queen placement.

The backtracking solver always enforces the classic rules (one queen per
column and per diagonal) through its own occupancy sets. A predicate adds
further restrictions on top of them and is consulted for every candidate
cell that survives the classic checks.

A predicate is any callable ``(board, row, col) -> bool`` where ``board`` is
the partial placement for rows ``0..row-1``.
"""

import logging
from typing import Callable, Sequence

from ..errors import InvalidArgumentError
from ..models.board import SolveMode

logger = logging.getLogger(__name__)

Predicate = Callable[[Sequence[int], int, int], bool]

DEFAULT_REGION_SIZE = 3


class ConstraintPredicate:
    """Base class for named, picklable placement predicates."""

    name = "custom"

    def __call__(self, board: Sequence[int], row: int, col: int) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        """Human-readable summary of the extra rule."""
        return self.name


class NoExtraConstraint(ConstraintPredicate):
    """Classic N-Queens: nothing beyond columns and diagonals."""

    name = "classic"

    def __call__(self, board: Sequence[int], row: int, col: int) -> bool:
        return True

    def describe(self) -> str:
        return "no shared column or diagonal"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoExtraConstraint)

    def __hash__(self) -> int:
        return hash(self.name)


class SubSquareConstraint(ConstraintPredicate):
    """Square variant: at most one queen per region_size x region_size sub-square.

    Sub-squares tile the board from the top-left corner; when region_size
    does not divide N the last band of rows/columns forms partial tiles.
    Queens in adjacent rows are already at least two columns apart, so
    region_size 1 and 2 add nothing to the classic rules.
    """

    name = "square"

    def __init__(self, region_size: int = DEFAULT_REGION_SIZE):
        if isinstance(region_size, bool) or not isinstance(region_size, int) or region_size < 1:
            raise InvalidArgumentError(
                f"Region size must be a positive integer, got {region_size!r}"
            )
        self.region_size = region_size

    def __call__(self, board: Sequence[int], row: int, col: int) -> bool:
        k = self.region_size
        block_col = col // k
        # Only rows in the same band of k rows can share the sub-square
        for other_row in range((row // k) * k, row):
            if board[other_row] // k == block_col:
                return False
        return True

    def describe(self) -> str:
        return (
            f"no shared column or diagonal, at most one queen per "
            f"{self.region_size}x{self.region_size} sub-square"
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SubSquareConstraint) and other.region_size == self.region_size

    def __hash__(self) -> int:
        return hash((self.name, self.region_size))

    def __repr__(self) -> str:
        return f"SubSquareConstraint(region_size={self.region_size})"


class CallablePredicate(ConstraintPredicate):
    """Adapter giving an arbitrary callable the predicate interface."""

    def __init__(self, func: Predicate, name: str | None = None):
        self.func = func
        self.name = name or getattr(func, "__name__", "custom")

    def __call__(self, board: Sequence[int], row: int, col: int) -> bool:
        return bool(self.func(board, row, col))


def coerce_mode(mode: SolveMode | str) -> SolveMode:
    """Convert a mode name to SolveMode.

    Raises:
        InvalidArgumentError: If the name is not a known mode
    """
    if isinstance(mode, SolveMode):
        return mode
    try:
        return SolveMode(str(mode).lower())
    except ValueError:
        valid = ", ".join(m.value for m in SolveMode)
        raise InvalidArgumentError(f"Unknown mode '{mode}'. Expected one of: {valid}") from None


def predicate_for_mode(
    mode: SolveMode | str,
    region_size: int = DEFAULT_REGION_SIZE,
) -> ConstraintPredicate:
    """Get the built-in predicate for a solve mode."""
    mode = coerce_mode(mode)
    if mode is SolveMode.SQUARE:
        return SubSquareConstraint(region_size)
    return NoExtraConstraint()


def as_predicate(predicate: Predicate | None) -> ConstraintPredicate | None:
    """Wrap a plain callable; pass predicates and None through."""
    if predicate is None or isinstance(predicate, ConstraintPredicate):
        return predicate
    if not callable(predicate):
        raise InvalidArgumentError(f"Predicate must be callable, got {type(predicate).__name__}")
    return CallablePredicate(predicate)


def queens_attack(row1: int, col1: int, row2: int, col2: int) -> bool:
    """Check whether two queens share a row, column or diagonal."""
    return (
        row1 == row2
        or col1 == col2
        or abs(row1 - row2) == abs(col1 - col2)
    )


def find_violations(
    placement: Sequence[int],
    size: int,
    predicate: Predicate | None = None,
) -> list[str]:
    """List every constraint a full placement violates.

    Args:
        placement: Column index per row
        size: Board size N
        predicate: Extra rule to check on top of the classic constraints

    Returns:
        Human-readable violation messages (empty if the placement is valid)
    """
    violations = []

    if len(placement) != size:
        violations.append(f"expected {size} rows, got {len(placement)}")

    for row, col in enumerate(placement):
        if not 0 <= col < size:
            violations.append(f"row {row}: column {col} is off the board")

    for i in range(len(placement)):
        for j in range(i + 1, len(placement)):
            if placement[i] == placement[j]:
                violations.append(f"rows {i} and {j} share column {placement[i]}")
            elif abs(i - j) == abs(placement[i] - placement[j]):
                violations.append(f"rows {i} and {j} share a diagonal")

    if predicate is not None:
        for row, col in enumerate(placement):
            if not predicate(placement[:row], row, col):
                violations.append(f"row {row}: column {col} rejected by {getattr(predicate, 'name', 'predicate')} rule")

    return violations


def is_valid_placement(
    placement: Sequence[int],
    size: int,
    predicate: Predicate | None = None,
) -> bool:
    """Check a full placement against the classic rules and an extra predicate."""
    return not find_violations(placement, size, predicate)
