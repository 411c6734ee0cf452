"""Solver profile configuration."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .board import SolveMode


class SolverProfile(BaseModel):
    """Named solver configuration loaded from a YAML profile.

    Every field is a flat scalar, so request-time overrides simply replace
    values. Unknown keys are rejected so a misspelt override fails loudly.
    """

    model_config = ConfigDict(extra="forbid")

    mode: SolveMode = Field(default=SolveMode.CLASSIC, description="Constraint-set variant")
    region_size: int = Field(
        default=3,
        ge=1,
        description="Side of the sub-squares that may hold at most one queen (square mode)",
    )
    max_solutions: Optional[int] = Field(
        default=None, ge=1, description="Stop after this many solutions (None = all)"
    )
    max_time_seconds: Optional[float] = Field(
        default=None, gt=0, description="Wall-clock search limit (None = unbounded)"
    )
    parallel: bool = Field(
        default=False, description="Fan the search out over first-row columns"
    )
    max_workers: Optional[int] = Field(
        default=None, ge=1, description="Worker count for parallel search (None = executor default)"
    )
    unique_only: bool = Field(
        default=False, description="Keep only one solution per rotation/reflection class"
    )

    def with_overrides(self, override: dict[str, Any]) -> "SolverProfile":
        """Return a copy with the given fields replaced (shallow override).

        A None value is stored as None, which resets the optional limits
        (max_solutions, max_time_seconds, max_workers) to unbounded.

        Raises:
            pydantic.ValidationError: If a key is unknown or a value is invalid
        """
        return SolverProfile.model_validate({**self.model_dump(), **override})

    def changed_settings(self) -> dict[str, Any]:
        """Fields that differ from the defaults, JSON-ready."""
        return self.model_dump(mode="json", exclude_defaults=True)
