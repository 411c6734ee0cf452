"""Integration tests for the placement pipeline.

Tests the full pipeline from request to solutions and statistics.
"""

import pytest
from pydantic import ValidationError

from nqueens.errors import InvalidArgumentError, ProfileNotFoundError
from nqueens.models.board import SolveMode
from nqueens.pipeline import resolve_profile, solve_placements
from nqueens.solver.backtracking import solve
from nqueens.tools.nqueens_tools import SolveOptions, SolveRequest


@pytest.fixture
def eight_request():
    """Classic 8x8 request."""
    return SolveRequest(n=8)


@pytest.fixture
def square_request():
    """Square 9x9 request."""
    return SolveRequest(n=9, profile="square")


class TestResolveProfile:
    """Test request-to-profile resolution."""

    def test_options_override_profile(self):
        """Set options override the profile, unset ones do not."""
        request = SolveRequest(
            n=8, profile="square", options=SolveOptions(region_size=4, max_workers=2)
        )
        profile = resolve_profile(request)
        assert profile.mode is SolveMode.SQUARE
        assert profile.region_size == 4
        assert profile.max_workers == 2
        assert profile.parallel is False

    def test_inline_profile_with_overrides(self):
        """Options still override an inline profile."""
        request = SolveRequest(
            n=8,
            profile_yaml="# Custom\nmode: square\nunique_only: true\n",
            options=SolveOptions(region_size=4),
        )
        profile = resolve_profile(request)
        assert profile.mode is SolveMode.SQUARE
        assert profile.unique_only is True
        assert profile.region_size == 4

    def test_first_only(self):
        """first_only limits the search to one solution."""
        assert resolve_profile(SolveRequest(n=8, first_only=True)).max_solutions == 1


class TestSolvePlacements:
    """Test the async pipeline."""

    @pytest.mark.asyncio
    async def test_classic_eight(self, eight_request):
        """All 92 solutions in order, with statistics."""
        solutions, stats = await solve_placements(eight_request)

        assert solutions == solve(8)
        assert stats["status"] == "complete"
        assert stats["backend"] == "backtracking"
        assert stats["num_solutions"] == 92
        assert stats["mode"] == "classic"
        assert "region_size" not in stats
        assert len(stats["job_id"]) == 8

    @pytest.mark.asyncio
    async def test_square(self, square_request):
        """Square profile solves the square variant."""
        solutions, stats = await solve_placements(square_request)

        assert solutions == solve(9, SolveMode.SQUARE)
        assert stats["mode"] == "square"
        assert stats["region_size"] == 3

    @pytest.mark.asyncio
    async def test_unique_only(self):
        """Fundamental profile keeps 12 of 92."""
        solutions, stats = await solve_placements(SolveRequest(n=8, profile="fundamental"))

        assert len(solutions) == 12
        assert stats["total_found"] == 92
        assert stats["fundamental_solutions"] == 12

    @pytest.mark.asyncio
    async def test_first_only(self):
        """first_only returns the lexicographically first solution."""
        solutions, stats = await solve_placements(SolveRequest(n=8, first_only=True))

        assert [s.as_list() for s in solutions] == [[0, 4, 7, 5, 2, 6, 1, 3]]
        assert stats["status"] == "limit"

    @pytest.mark.asyncio
    async def test_parallel(self):
        """Parallel option gives the sequential order."""
        request = SolveRequest(n=7, options=SolveOptions(parallel=True, max_workers=2))
        solutions, stats = await solve_placements(request)

        assert solutions == solve(7)
        assert stats["backend"] == "parallel"

    @pytest.mark.asyncio
    async def test_cpsat_backend(self):
        """CP-SAT backend agrees with backtracking."""
        solutions, stats = await solve_placements(SolveRequest(n=6, backend="cpsat"))

        assert solutions == solve(6)
        assert stats["backend"] == "cpsat"

    @pytest.mark.asyncio
    async def test_cpsat_backend_respects_limit(self):
        """max_solutions truncates the sorted CP-SAT result."""
        request = SolveRequest(n=8, backend="cpsat", options=SolveOptions(max_solutions=5))
        solutions, stats = await solve_placements(request)

        assert solutions == solve(8)[:5]
        assert stats["status"] == "limit"

    @pytest.mark.asyncio
    async def test_cpsat_backend_limit_equal_to_count(self):
        """A CP-SAT limit matching the true count reports complete."""
        request = SolveRequest(n=8, backend="cpsat", options=SolveOptions(max_solutions=92))
        solutions, stats = await solve_placements(request)

        assert len(solutions) == 92
        assert stats["status"] == "complete"

    @pytest.mark.asyncio
    async def test_inline_profile(self):
        """Inline profile YAML replaces the named profile."""
        request = SolveRequest(n=4, profile_yaml="mode: square\nregion_size: 2\n")
        solutions, stats = await solve_placements(request)

        assert [s.placement for s in solutions] == [(1, 3, 0, 2), (2, 0, 3, 1)]
        assert stats["profile"] == "inline"
        assert stats["region_size"] == 2

    @pytest.mark.asyncio
    async def test_invalid_inline_profile(self):
        """Broken inline profiles raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            await solve_placements(SolveRequest(n=4, profile_yaml="mode: hexagonal\n"))

    @pytest.mark.asyncio
    async def test_no_solution(self):
        """Unsolvable boards complete with zero solutions."""
        solutions, stats = await solve_placements(SolveRequest(n=3))

        assert solutions == []
        assert stats["status"] == "complete"
        assert stats["num_solutions"] == 0

    @pytest.mark.asyncio
    async def test_progress_callback(self):
        """Progress is reported from start to finish."""
        updates = []
        await solve_placements(SolveRequest(n=4), lambda msg, pct: updates.append(pct))

        assert updates[0] < updates[-1]
        assert updates[-1] == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("n", [0, -1])
    async def test_invalid_size(self, n):
        """Invalid board sizes raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            await solve_placements(SolveRequest(n=n))

    @pytest.mark.asyncio
    async def test_unknown_profile(self):
        """Unknown profiles raise ProfileNotFoundError."""
        with pytest.raises(ProfileNotFoundError):
            await solve_placements(SolveRequest(n=4, profile="missing"))


class TestSolveRequest:
    """Test request validation."""

    def test_unknown_backend(self):
        """Backend must be one of the known names."""
        with pytest.raises(ValidationError):
            SolveRequest(n=4, backend="quantum")

    def test_options_to_override(self):
        """Only explicitly set options become overrides."""
        options = SolveOptions(mode="square", max_solutions=3)
        assert options.to_override() == {"mode": "square", "max_solutions": 3}
