"""Tests for parallel first-row search and the solution collector."""

import threading
import time

import pytest

from nqueens.errors import InvalidArgumentError
from nqueens.models.board import SolveMode
from nqueens.solver.backtracking import PlacementSolverConfig, solve
from nqueens.solver.parallel import solve_parallel
from nqueens.solver.solution_pool import SolutionCollector


class TestSolveParallel:
    """Test that parallel search reproduces the sequential order."""

    @pytest.mark.parametrize("n", range(1, 9))
    def test_threads_match_sequential(self, n):
        """Thread pool output equals sequential output, order included."""
        result = solve_parallel(n, use_processes=False, max_workers=4)
        assert result.solutions == solve(n)
        assert result.status == "complete"
        assert result.statistics["executor"] == "ThreadPoolExecutor"

    def test_processes_match_sequential(self):
        """Process pool output equals sequential output."""
        result = solve_parallel(8, use_processes=True, max_workers=2)
        assert result.solutions == solve(8)
        assert result.statistics["executor"] == "ProcessPoolExecutor"

    def test_square_mode(self):
        """Square mode ships its predicate to the workers."""
        result = solve_parallel(9, mode=SolveMode.SQUARE, max_workers=2)
        assert result.solutions == solve(9, SolveMode.SQUARE)

    @pytest.mark.parametrize("limit", [1, 3, 10])
    def test_max_solutions_keeps_sequential_prefix(self, limit):
        """Truncation happens after branch order is restored."""
        config = PlacementSolverConfig(max_solutions=limit)
        result = solve_parallel(8, config=config, use_processes=False)
        assert result.solutions == solve(8)[:limit]
        assert result.status == "limit"

    def test_limit_equal_to_count_is_complete(self):
        """A limit matching the true count reports an exhausted search."""
        config = PlacementSolverConfig(max_solutions=92)
        result = solve_parallel(8, config=config, use_processes=False)
        assert len(result.solutions) == 92
        assert result.status == "complete"

    def test_slow_first_branch_keeps_sequential_prefix(self):
        """A branch cut short by the time limit ends the merged output."""

        def slow_left_column(board, row, col):
            if board and board[0] == 0:
                time.sleep(0.01)
            return True

        config = PlacementSolverConfig(max_time_seconds=0.3)
        result = solve_parallel(
            8, predicate=slow_left_column, config=config, max_workers=8, use_processes=False
        )

        assert result.status == "timeout"
        full = solve(8)
        assert result.solutions == full[:len(result.solutions)]
        assert all(s.placement[0] == 0 for s in result.solutions)

    def test_cancelled_branch_keeps_sequential_prefix(self):
        """Cancelling mid-search never leaves a gap in the order."""
        event = threading.Event()
        calls = {"count": 0}
        lock = threading.Lock()

        def cancel_later(board, row, col):
            with lock:
                calls["count"] += 1
                if calls["count"] == 400:
                    event.set()
            return True

        config = PlacementSolverConfig(cancel_event=event)
        result = solve_parallel(8, predicate=cancel_later, config=config, max_workers=3)

        assert result.status == "cancelled"
        assert result.solutions == solve(8)[:len(result.solutions)]

    def test_callable_predicate_uses_threads(self):
        """Plain callables may not pickle, so threads are picked automatically."""

        def not_first_column(board, row, col):
            return col != 0

        result = solve_parallel(6, predicate=not_first_column)
        assert result.statistics["executor"] == "ThreadPoolExecutor"
        assert result.solutions == solve(6, predicate=not_first_column)

    def test_cancelled_before_start(self):
        """A set cancel event stops every branch."""
        event = threading.Event()
        event.set()
        config = PlacementSolverConfig(cancel_event=event)
        result = solve_parallel(8, config=config, use_processes=False)
        assert result.status == "cancelled"
        assert result.solutions == []

    def test_unsolvable_board(self):
        """No solutions is a complete, empty result."""
        result = solve_parallel(3, use_processes=False)
        assert result.solutions == []
        assert result.status == "complete"

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_size(self, n):
        """Board size is validated before any worker starts."""
        with pytest.raises(InvalidArgumentError):
            solve_parallel(n)

    def test_invalid_worker_count(self):
        """max_workers must be positive."""
        with pytest.raises(InvalidArgumentError):
            solve_parallel(4, max_workers=0)


class TestSolutionCollector:
    """Test the append-only collector."""

    def test_ordered_sorts_by_branch_stably(self):
        """Branches are sorted, order within a branch is kept."""
        with SolutionCollector() as collector:
            collector.extend([(2, 0), (2, 1)], branch=2)
            collector.extend([(0, 5), (0, 3)], branch=0)
            collector.add((1, 1), branch=1)
            assert collector.ordered() == [(0, 5), (0, 3), (1, 1), (2, 0), (2, 1)]
            assert collector.ordered(limit=2) == [(0, 5), (0, 3)]

    def test_ordered_through_branch(self):
        """Branches after the cut-off branch are dropped."""
        with SolutionCollector() as collector:
            collector.add((2, 0), branch=2)
            collector.add((0, 1), branch=0)
            collector.add((1, 1), branch=1)
            assert collector.ordered(through_branch=1) == [(0, 1), (1, 1)]
            assert collector.ordered(through_branch=0, limit=5) == [(0, 1)]

    def test_add_respects_max_solutions(self):
        """add() drops placements once full."""
        with SolutionCollector(max_solutions=2) as collector:
            assert collector.add([0, 1])
            assert collector.add([1, 0])
            assert collector.is_full
            assert not collector.add([2, 2])
            assert len(collector) == 2

    def test_copies_placements(self):
        """Placements are captured by value."""
        board = [1, 3, 0, 2]
        with SolutionCollector() as collector:
            collector.add(board)
            board.pop()
            assert collector.ordered() == [(1, 3, 0, 2)]

    def test_released_on_exit(self):
        """The buffer is cleared and closed when the block exits."""
        with SolutionCollector() as collector:
            collector.add((0,))
        assert len(collector) == 0
        with pytest.raises(RuntimeError):
            collector.add((0,))

    def test_released_on_error(self):
        """The buffer is also cleared when the block raises."""
        with pytest.raises(InvalidArgumentError):
            with SolutionCollector() as collector:
                collector.add((0,))
                raise InvalidArgumentError("bad size")
        assert len(collector) == 0

    def test_clear(self):
        """clear() empties the buffer without closing it."""
        collector = SolutionCollector()
        collector.add((0,))
        collector.clear()
        assert len(collector) == 0
        collector.add((0,))
        assert len(collector) == 1
