"""Solution collection for backtracking and parallel search."""

import logging
import threading
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Placement = Tuple[int, ...]


class SolutionCollector:
    """Append-only buffer of placements, tagged by search branch.

    Parallel search tags each placement with the fixed first-row column of
    the branch that produced it; ``ordered()`` sorts on that tag (stable) so
    the merged list keeps the lexicographic order of a sequential search.

    Use as a context manager to release the buffer on every exit path:

        with SolutionCollector() as collector:
            collector.add(placement)
            placements = collector.ordered()
    """

    def __init__(self, max_solutions: Optional[int] = None):
        """Initialize collector.

        Args:
            max_solutions: Maximum placements to keep (None = unbounded)
        """
        self.max_solutions = max_solutions

        self._entries: List[Tuple[int, Placement]] = []
        self._lock = threading.Lock()
        self._closed = False

    def add(self, placement: Placement, branch: int = 0) -> bool:
        """Append a placement.

        Args:
            placement: Complete placement (copied into a tuple)
            branch: Ordering key of the producing branch

        Returns:
            False if the collector is full and the placement was dropped
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("SolutionCollector is closed")
            if self.max_solutions is not None and len(self._entries) >= self.max_solutions:
                return False
            self._entries.append((branch, tuple(placement)))
            return True

    def extend(self, placements: Iterable[Placement], branch: int = 0) -> int:
        """Append every placement of one branch.

        max_solutions is not applied here: branches finish in any order, so
        callers truncate after sorting with ordered(limit).
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("SolutionCollector is closed")
            entries = [(branch, tuple(p)) for p in placements]
            self._entries.extend(entries)
            return len(entries)

    @property
    def is_full(self) -> bool:
        """Check whether max_solutions has been reached."""
        return self.max_solutions is not None and len(self._entries) >= self.max_solutions

    def ordered(
        self,
        limit: Optional[int] = None,
        through_branch: Optional[int] = None,
    ) -> List[Placement]:
        """Get placements sorted by branch, preserving order within a branch.

        Args:
            limit: Keep at most this many placements
            through_branch: Drop placements of branches after this one
        """
        with self._lock:
            entries = sorted(self._entries, key=lambda e: e[0])
        if through_branch is not None:
            entries = [e for e in entries if e[0] <= through_branch]
        placements = [p for _, p in entries]
        if limit is not None:
            placements = placements[:limit]
        return placements

    def clear(self) -> None:
        """Drop all buffered placements."""
        with self._lock:
            self._entries = []

    def __enter__(self) -> "SolutionCollector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        with self._lock:
            self._entries = []
            self._closed = True
        if exc_type is not None:
            logger.debug(f"Collector released after {exc_type.__name__}")

    def __len__(self) -> int:
        return len(self._entries)
