"""Board symmetry and fundamental-solution filtering.

Two placements are equivalent when one maps onto the other under one of
the eight symmetries of the square (four rotations, each optionally
mirrored). Grouping by the canonical form (the lexicographically smallest
image) reduces e.g. the 92 solutions of the 8x8 board to 12.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

from ..models.board import Solution

logger = logging.getLogger(__name__)


def dihedral_images(solution: Solution) -> list[Solution]:
    """Get the images of a solution under all eight board symmetries.

    The list starts with the solution itself and may contain duplicates
    for symmetric placements.
    """
    matrix = solution.to_matrix()
    images = []
    for mirrored in (matrix, np.fliplr(matrix)):
        for turns in range(4):
            images.append(Solution.from_matrix(np.rot90(mirrored, turns)))
    return images


def canonical_form(solution: Solution) -> tuple[int, ...]:
    """Get the lexicographically smallest placement among the solution's images."""
    return min(image.placement for image in dihedral_images(solution))


def symmetry_order(solution: Solution) -> int:
    """Number of distinct images (8, 4 or 2 for N > 1)."""
    return len({image.placement for image in dihedral_images(solution)})


@dataclass
class SymmetryClass:
    """Solutions sharing one canonical form."""

    canonical: tuple[int, ...]
    representative: Solution
    members: list[Solution] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)


def group_by_symmetry(solutions: Iterable[Solution]) -> list[SymmetryClass]:
    """Group solutions by canonical form.

    Classes are ordered by first appearance; each representative is the
    first member encountered, so input order is preserved.
    """
    classes: dict[tuple[int, ...], SymmetryClass] = {}
    for solution in solutions:
        key = canonical_form(solution)
        if key not in classes:
            classes[key] = SymmetryClass(canonical=key, representative=solution)
        classes[key].members.append(solution)
    return list(classes.values())


def fundamental_solutions(solutions: Iterable[Solution]) -> list[Solution]:
    """Keep one solution per symmetry class, in input order."""
    solutions = list(solutions)
    classes = group_by_symmetry(solutions)
    logger.debug(f"Symmetry reduction: {len(solutions)} solutions -> {len(classes)} classes")
    return [c.representative for c in classes]
