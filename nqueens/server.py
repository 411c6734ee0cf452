"""FastMCP server for N-Queens placement search.

Exposes MCP tools for solving boards, paging through stored solutions and
exporting them as JSON, text or SVG.
"""

import asyncio
import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from .errors import InvalidArgumentError, ProfileNotFoundError
from .export.solution_set import solutions_to_dict
from .export.svg import export_comparison_svg, export_solution_to_svg
from .export.text import render_board, render_solutions
from .models.board import Solution, SolveMode
from .pipeline import solve_placements
from .profiles.loader import list_profiles, parse_profile
from .tools.nqueens_tools import SolutionSummary, SolveOptions, SolveRequest, SolveResponse

# stdio servers must NOT log to stdout as it interferes with JSON-RPC
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

mcp = FastMCP(
    name="nqueens_mcp",
    instructions="Enumerate non-attacking queen placements for classic and square N-Queens. "
    "Use nqueens_solve to run a search, nqueens_list_solutions to paginate through results, "
    "and nqueens_export to download them as JSON, text or SVG.",
)

# In-memory storage for jobs and solutions
_jobs: dict[str, dict[str, Any]] = {}
_solutions: dict[str, Solution] = {}

EXPORT_FORMATS = ["json", "text", "svg"]


def _error(message: str) -> dict[str, Any]:
    return {"isError": True, "error": message}


def _summary(solution_id: str, rank: int, solution: Solution, include_board: bool) -> SolutionSummary:
    return SolutionSummary(
        id=solution_id,
        rank=rank,
        placement=solution.as_list(),
        board=render_board(solution).splitlines() if include_board else None,
    )


@mcp.tool(
    annotations={
        "readOnlyHint": False,  # Stores solutions for later paging/export
        "destructiveHint": False,
        "idempotentHint": True,  # Search is deterministic
        "openWorldHint": False,
    }
)
async def nqueens_solve(
    n: int,
    profile: str = "classic",
    profile_yaml: str | None = None,
    mode: str | None = None,
    region_size: int | None = None,
    max_solutions: int | None = None,
    max_time_seconds: float | None = None,
    first_only: bool = False,
    unique_only: bool | None = None,
    parallel: bool | None = None,
    backend: str = "backtracking",
    include_boards: bool = False,
    preview_limit: int = 20,
) -> dict[str, Any]:
    """Find non-attacking queen placements on an N x N board.

    Args:
        n: Board size (positive integer)
        profile: Solver profile name (see nqueens_list_profiles)
        profile_yaml: Inline profile YAML, used instead of the named profile
        mode: "classic" or "square" (overrides the profile)
        region_size: Sub-square side for square mode
        max_solutions: Stop after this many solutions
        max_time_seconds: Wall-clock search limit
        first_only: Return only the lexicographically first solution
        unique_only: Keep one solution per rotation/reflection class
        parallel: Split the search over first-row columns
        backend: "backtracking" or "cpsat"
        include_boards: Include text boards in the preview
        preview_limit: Number of solutions returned inline (all are stored)

    Returns:
        Dict with job_id, status, num_solutions, a solution preview and statistics
    """
    try:
        request = SolveRequest(
            n=n,
            profile=profile,
            profile_yaml=profile_yaml,
            options=SolveOptions(
                mode=mode,
                region_size=region_size,
                max_solutions=max_solutions,
                max_time_seconds=max_time_seconds,
                unique_only=unique_only,
                parallel=parallel,
            ),
            first_only=first_only,
            backend=backend,
        )
        solutions, stats = await solve_placements(request)
    except (InvalidArgumentError, ProfileNotFoundError, ValidationError) as e:
        return _error(str(e))
    except Exception as e:
        logger.exception("Placement search failed")
        return _error(f"Search failed: {e}")

    job_id = stats["job_id"]
    solution_ids = []
    for rank, solution in enumerate(solutions):
        solution_id = f"{job_id}-{rank}"
        _solutions[solution_id] = solution
        solution_ids.append(solution_id)

    _jobs[job_id] = {
        "status": stats["status"],
        "stats": stats,
        "solution_ids": solution_ids,
        "size": request.n,
        "mode": stats["mode"],
        "region_size": stats.get("region_size"),
    }

    preview = [
        _summary(sid, rank, _solutions[sid], include_boards)
        for rank, sid in enumerate(solution_ids[:max(preview_limit, 0)])
    ]
    response = SolveResponse(
        job_id=job_id,
        status=stats["status"],
        size=request.n,
        mode=SolveMode(stats["mode"]),
        num_solutions=len(solutions),
        solutions=preview,
        statistics=stats,
    )
    return response.model_dump(mode="json")


@mcp.tool(annotations={"readOnlyHint": True, "openWorldHint": False})
async def nqueens_list_solutions(
    job_id: str,
    limit: int = 50,
    offset: int = 0,
    include_boards: bool = False,
) -> dict[str, Any]:
    """Page through the solutions of a job in lexicographic order.

    Args:
        job_id: Job identifier from nqueens_solve
        limit: Page size (1-500)
        offset: Index of the first solution in the page

    Returns:
        Dict with total, offset, limit, has_more and the page of solutions
    """
    job = _jobs.get(job_id)
    if job is None:
        return _error(f"Job not found: {job_id}")

    limit = max(1, min(limit, 500))
    offset = max(0, offset)
    ids = job["solution_ids"]
    page = ids[offset:offset + limit]

    return {
        "job_id": job_id,
        "total": len(ids),
        "offset": offset,
        "limit": limit,
        "has_more": offset + len(page) < len(ids),
        "solutions": [
            _summary(sid, offset + i, _solutions[sid], include_boards).model_dump()
            for i, sid in enumerate(page)
        ],
    }


@mcp.tool(annotations={"readOnlyHint": True, "openWorldHint": False})
async def nqueens_get_solution(solution_id: str) -> dict[str, Any]:
    """Get one stored solution with its text board.

    Args:
        solution_id: Solution identifier ("<job_id>-<rank>")

    Returns:
        Dict with placement and board lines
    """
    solution = _solutions.get(solution_id)
    if solution is None:
        return _error(f"Solution not found: {solution_id}")
    rank = int(solution_id.rsplit("-", 1)[1])
    return _summary(solution_id, rank, solution, include_board=True).model_dump()


@mcp.tool(annotations={"readOnlyHint": True, "openWorldHint": False})
async def nqueens_export(job_id: str, format: str = "json") -> dict[str, Any]:
    """Export all solutions of a job.

    Args:
        job_id: Job identifier from nqueens_solve
        format: "json" (versioned solution set), "text" or "svg" (comparison grid)

    Returns:
        Dict with format and content
    """
    job = _jobs.get(job_id)
    if job is None:
        return _error(f"Job not found: {job_id}")
    if format not in EXPORT_FORMATS:
        return _error(f"Unsupported format '{format}'. Expected one of: {', '.join(EXPORT_FORMATS)}")

    solutions = [_solutions[sid] for sid in job["solution_ids"]]
    mode = SolveMode(job["mode"])

    if format == "json":
        content: Any = solutions_to_dict(solutions, job["size"], mode, job.get("region_size"))
    elif format == "text":
        content = render_solutions(solutions, boards=True)
    elif len(solutions) == 1:
        content = export_solution_to_svg(solutions[0], region_size=job.get("region_size"))
    else:
        content = export_comparison_svg(solutions, region_size=job.get("region_size"))

    return {"job_id": job_id, "format": format, "content": content}


@mcp.tool(annotations={"readOnlyHint": True, "openWorldHint": False})
async def nqueens_list_profiles() -> dict[str, Any]:
    """List the available solver profiles.

    Returns:
        Dict with profiles array (name, description, mode, changed settings)
    """
    return {"profiles": list_profiles()}


@mcp.tool(annotations={"readOnlyHint": True, "openWorldHint": False})
async def nqueens_check_profile(profile_yaml: str) -> dict[str, Any]:
    """Check an inline profile before passing it to nqueens_solve.

    Args:
        profile_yaml: Profile YAML (a mapping of solver settings)

    Returns:
        Dict with the description and the full resolved settings
    """
    try:
        description, profile = parse_profile(profile_yaml)
    except InvalidArgumentError as e:
        return _error(str(e))

    return {
        "valid": True,
        "description": description,
        "profile": profile.model_dump(mode="json"),
        "changed_settings": profile.changed_settings(),
    }


def run_server():
    """Run the MCP server (stdio transport)."""
    asyncio.run(mcp.run_stdio_async())


def main():
    """Main entry point (MCP stdio transport)."""
    run_server()


if __name__ == "__main__":
    main()
