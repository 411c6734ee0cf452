"""Tests for symmetry classes and fundamental solutions."""

import pytest

from nqueens.models.board import Solution
from nqueens.solver.backtracking import solve
from nqueens.solver.constraints import is_valid_placement
from nqueens.solver.symmetry import (
    canonical_form,
    dihedral_images,
    fundamental_solutions,
    group_by_symmetry,
    symmetry_order,
)

# Fundamental solution counts for N = 1..8
FUNDAMENTAL_COUNTS = {1: 1, 2: 0, 3: 0, 4: 1, 5: 2, 6: 1, 7: 6, 8: 12}


@pytest.fixture
def eight_queens():
    """All 92 solutions of the 8x8 board."""
    return solve(8)


class TestDihedralImages:
    """Test board symmetry images."""

    def test_eight_images(self, eight_queens):
        """Every solution has eight images, all of them valid."""
        for solution in eight_queens[:10]:
            images = dihedral_images(solution)
            assert len(images) == 8
            assert images[0] == solution
            for image in images:
                assert is_valid_placement(image.placement, 8)

    def test_images_are_solutions(self, eight_queens):
        """Images of a solution are themselves in the solution list."""
        known = set(eight_queens)
        for image in dihedral_images(eight_queens[0]):
            assert image in known

    def test_rotationally_symmetric_solution(self):
        """The 4x4 solutions map onto each other, giving order 2."""
        solution = Solution(size=4, placement=(1, 3, 0, 2))
        assert symmetry_order(solution) == 2
        assert {i.placement for i in dihedral_images(solution)} == {(1, 3, 0, 2), (2, 0, 3, 1)}

    def test_canonical_form_is_shared(self):
        """Equivalent solutions share one canonical form."""
        a = Solution(size=4, placement=(1, 3, 0, 2))
        b = Solution(size=4, placement=(2, 0, 3, 1))
        assert canonical_form(a) == canonical_form(b) == (1, 3, 0, 2)


class TestFundamentalSolutions:
    """Test reduction to one solution per symmetry class."""

    @pytest.mark.parametrize("n,expected", sorted(FUNDAMENTAL_COUNTS.items()))
    def test_known_counts(self, n, expected):
        """Fundamental counts match the known sequence."""
        assert len(fundamental_solutions(solve(n))) == expected

    def test_keeps_input_order(self, eight_queens):
        """Representatives are the first members, in input order."""
        fundamental = fundamental_solutions(eight_queens)
        assert fundamental[0] == eight_queens[0]
        positions = [eight_queens.index(s) for s in fundamental]
        assert positions == sorted(positions)

    def test_classes_partition_solutions(self, eight_queens):
        """Symmetry classes cover every solution exactly once."""
        classes = group_by_symmetry(eight_queens)
        assert sum(c.size for c in classes) == 92
        assert sorted(c.size for c in classes) == [4] + [8] * 11

    def test_empty_input(self):
        """Empty in, empty out."""
        assert fundamental_solutions([]) == []
