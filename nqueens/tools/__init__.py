"""MCP tool schemas."""

from .nqueens_tools import (
    SolutionSummary,
    SolveOptions,
    SolveRequest,
    SolveResponse,
)

__all__ = [
    "SolveRequest",
    "SolveOptions",
    "SolveResponse",
    "SolutionSummary",
]
