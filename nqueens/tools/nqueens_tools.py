"""MCP tool request/response schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from ..models.board import SolveMode


class SolveOptions(BaseModel):
    """Per-request overrides applied on top of the selected profile."""

    mode: SolveMode | None = Field(
        default=None,
        description="Constraint-set variant (overrides the profile)",
    )
    region_size: int | None = Field(
        default=None,
        ge=1,
        description="Sub-square side for square mode",
    )
    max_solutions: int | None = Field(
        default=None,
        ge=1,
        description="Stop after this many solutions",
    )
    max_time_seconds: float | None = Field(
        default=None,
        gt=0,
        le=3600.0,
        description="Wall-clock search limit in seconds",
    )
    parallel: bool | None = Field(
        default=None,
        description="Fan the search out over first-row columns",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Worker count for parallel search",
    )
    unique_only: bool | None = Field(
        default=None,
        description="Keep one solution per rotation/reflection class",
    )

    def to_override(self) -> dict[str, Any]:
        """Profile override dict holding only the fields that were set."""
        return self.model_dump(mode="json", exclude_none=True)


class SolveRequest(BaseModel):
    """Complete request for a placement search."""

    # Not bounded here: the solver raises InvalidArgumentError for n <= 0
    n: int = Field(..., description="Board size N")
    profile: str = Field(default="classic", description="Solver profile name")
    profile_yaml: str | None = Field(
        default=None,
        description="Inline profile YAML used instead of the named profile",
    )
    options: SolveOptions = Field(
        default_factory=SolveOptions,
        description="Overrides applied to the profile",
    )
    first_only: bool = Field(
        default=False,
        description="Return only the lexicographically first solution",
    )
    backend: Literal["backtracking", "cpsat"] = Field(
        default="backtracking",
        description="Search backend",
    )


class SolutionSummary(BaseModel):
    """Summary of one solution in a response."""

    id: str = Field(..., description="Solution identifier")
    rank: int = Field(..., ge=0, description="Position in lexicographic order")
    placement: list[int] = Field(..., description="Column per row")
    board: list[str] | None = Field(default=None, description="Text rendering, one line per row")


class SolveResponse(BaseModel):
    """Response from a placement search."""

    job_id: str = Field(..., description="Job identifier")
    status: str = Field(..., description="complete, limit, timeout or cancelled")
    size: int = Field(..., description="Board size N")
    mode: SolveMode = Field(..., description="Constraint-set variant")
    num_solutions: int = Field(..., ge=0, description="Solutions returned")
    solutions: list[SolutionSummary] = Field(default_factory=list)
    statistics: dict[str, Any] = Field(default_factory=dict)
