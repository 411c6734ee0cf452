"""Pydantic models for nqueens."""

from .board import Solution, SolveMode
from .profile import SolverProfile
from .solution_set import CONTRACT_VERSION, SolutionSet

__all__ = [
    # Board
    "Solution",
    "SolveMode",
    # Configuration
    "SolverProfile",
    # Export contract
    "SolutionSet",
    "CONTRACT_VERSION",
]
