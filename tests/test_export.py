"""Tests for text, JSON and SVG exports."""

import json

from nqueens.export.solution_set import save_solutions, to_solution_set
from nqueens.export.svg import export_comparison_svg, export_solution_to_svg
from nqueens.export.text import render_board, render_placement, render_solutions
from nqueens.models.board import Solution, SolveMode
from nqueens.solver.backtracking import solve


def _four():
    return Solution(size=4, placement=(1, 3, 0, 2))


class TestTextExport:
    """Test plain-text rendering."""

    def test_render_placement(self):
        """Placements print as lists."""
        assert render_placement(_four()) == "[1, 3, 0, 2]"

    def test_render_board(self):
        """Boards print row 0 first."""
        assert render_board(_four()).splitlines() == [
            ". Q . .",
            ". . . Q",
            "Q . . .",
            ". . Q .",
        ]

    def test_render_solutions(self):
        """One placement per line."""
        assert render_solutions(solve(4)) == "[1, 3, 0, 2]\n[2, 0, 3, 1]"

    def test_render_solutions_with_boards(self):
        """Boards follow their placements."""
        text = render_solutions(solve(4), boards=True)
        assert text.startswith("[1, 3, 0, 2]\n. Q . .")
        assert text.count("Q") == 8


class TestJsonExport:
    """Test solution-set export."""

    def test_region_size_only_for_square(self):
        """Classic exports carry no region size."""
        assert to_solution_set(solve(4), 4, SolveMode.CLASSIC, 3).region_size is None
        assert to_solution_set([], 4, SolveMode.SQUARE, 3).region_size == 3

    def test_save_solutions(self, tmp_path):
        """Saved file holds the versioned set."""
        path = save_solutions(solve(6), tmp_path / "six.json", 6)
        data = json.loads(path.read_text())
        assert data["contract_version"] == "1.0.0"
        assert data["size"] == 6
        assert data["mode"] == "classic"
        assert data["count"] == 4
        assert data["solutions"][0] == [1, 3, 5, 0, 2, 4]


class TestSvgExport:
    """Test SVG board diagrams."""

    def test_single_board(self):
        """One circle per queen, one square per cell."""
        svg = export_solution_to_svg(_four())
        assert svg.startswith("<svg")
        assert svg.rstrip().endswith("</svg>")
        assert svg.count('class="queen"') == 4
        assert 'id="q_0_1"' in svg
        assert svg.count("<rect") == 16

    def test_region_outlines(self):
        """Sub-square outlines are drawn, partial tiles included."""
        solution = solve(8)[0]
        svg = export_solution_to_svg(solution, region_size=3)
        assert svg.count('class="region"') == 9

    def test_title_and_styles(self):
        """Titles and style overrides are applied."""
        svg = export_solution_to_svg(
            _four(), title="Four", styles={"queen": {"fill": "#ff0000"}}
        )
        assert ">Four</text>" in svg
        assert 'fill="#ff0000"' in svg

    def test_comparison_grid(self):
        """Grid holds one group per solution."""
        svg = export_comparison_svg(solve(6), cols=2)
        assert svg.count('class="queen"') == 24
        assert "Solution 4" in svg

    def test_empty_grid(self):
        """No solutions gives an empty drawing."""
        assert 'width="0"' in export_comparison_svg([])
