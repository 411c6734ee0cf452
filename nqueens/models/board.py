"""Board and solution models."""

from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


class SolveMode(str, Enum):
    """Constraint-set variant of the placement puzzle."""

    CLASSIC = "classic"
    SQUARE = "square"


class Solution(BaseModel):
    """A complete, valid queen placement.

    ``placement[row]`` is the column of the queen in ``row``. Solutions are
    frozen: they are captured by value when the search reaches the last row
    and never change afterwards.
    """

    model_config = ConfigDict(frozen=True)

    size: int = Field(..., ge=1, description="Board size N")
    placement: tuple[int, ...] = Field(
        ..., description="Column index of the queen in each row"
    )

    @model_validator(mode="after")
    def validate_placement(self) -> "Solution":
        """Check the placement covers every row with an on-board column."""
        if len(self.placement) != self.size:
            raise ValueError(
                f"Placement has {len(self.placement)} rows, expected {self.size}"
            )
        for row, col in enumerate(self.placement):
            if not 0 <= col < self.size:
                raise ValueError(f"Column {col} in row {row} is off the board")
        return self

    def as_list(self) -> list[int]:
        """Get the placement as a plain list."""
        return list(self.placement)

    def cells(self) -> list[tuple[int, int]]:
        """Get occupied (row, col) cells in row order."""
        return list(enumerate(self.placement))

    def to_matrix(self) -> np.ndarray:
        """Get the board as an N x N 0/1 matrix (rows top to bottom)."""
        matrix = np.zeros((self.size, self.size), dtype=np.int8)
        matrix[np.arange(self.size), list(self.placement)] = 1
        return matrix

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "Solution":
        """Build a solution from a 0/1 matrix with exactly one queen per row."""
        rows, cols = np.nonzero(matrix)
        if len(rows) != matrix.shape[0] or len(set(rows.tolist())) != len(rows):
            raise ValueError("Matrix must hold exactly one queen per row")
        order = np.argsort(rows)
        return cls(size=matrix.shape[0], placement=tuple(int(c) for c in cols[order]))

    def __str__(self) -> str:
        return str(self.as_list())
