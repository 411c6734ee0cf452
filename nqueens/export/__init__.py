"""Export utilities for solutions."""

from .solution_set import save_solutions, solutions_to_dict, to_solution_set
from .svg import export_comparison_svg, export_solution_to_svg
from .text import render_board, render_placement, render_solutions

__all__ = [
    "to_solution_set",
    "solutions_to_dict",
    "save_solutions",
    "export_solution_to_svg",
    "export_comparison_svg",
    "render_board",
    "render_placement",
    "render_solutions",
]
