"""N-Queens MCP Server - Enumerate non-attacking queen placements.

This package provides:
- Backtracking placement solver for the classic and square puzzle variants
- OR-Tools CP-SAT cross-check backend
- Symmetry reduction to fundamental solutions
- CLI and MCP tools for solving and exporting boards

Core functionality can be imported without MCP server dependencies:
    from nqueens.solver import solve, PlacementSolver
    from nqueens.pipeline import solve_placements

To get the MCP server instance:
    from nqueens import get_mcp
    mcp = get_mcp()
"""

__version__ = "0.1.0"


def get_mcp():
    """Get the MCP server instance (lazy import to avoid coupling).

    Returns:
        FastMCP: The configured MCP server instance.
    """
    from .server import mcp
    return mcp


def get_pipeline():
    """Get the pipeline module for direct use."""
    from . import pipeline
    return pipeline


def get_solver():
    """Get the solver module for direct use."""
    from . import solver
    return solver


__all__ = ["get_mcp", "get_pipeline", "get_solver", "__version__"]
