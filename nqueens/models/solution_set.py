"""Versioned solution-set export model."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

from .board import SolveMode

CONTRACT_VERSION = "1.0.0"


class SolutionSet(BaseModel):
    """Serializable set of placements for one board size and mode."""

    contract_version: str = Field(default=CONTRACT_VERSION, description="Export format version")
    size: int = Field(..., ge=1, description="Board size N")
    mode: SolveMode = Field(default=SolveMode.CLASSIC, description="Constraint-set variant")
    region_size: int | None = Field(
        default=None, ge=1, description="Sub-square side for square mode"
    )
    count: int = Field(..., ge=0, description="Number of solutions in the set")
    solutions: list[list[int]] = Field(default_factory=list, description="Placements in order")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Export timestamp (UTC)",
    )

    @model_validator(mode="after")
    def validate_count(self) -> "SolutionSet":
        """Check the declared count matches the solutions list."""
        if self.count != len(self.solutions):
            raise ValueError(
                f"Declared count {self.count} does not match {len(self.solutions)} solutions"
            )
        return self
