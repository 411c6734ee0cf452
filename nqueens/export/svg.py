"""SVG export for board previews.

Generates SVG chessboard diagrams of placements without requiring a
browser-based viewer.
"""

import logging

from ..models.board import Solution

logger = logging.getLogger(__name__)

# Default SVG styling
DEFAULT_STYLES = {
    "light_square": {
        "fill": "#f0d9b5",
    },
    "dark_square": {
        "fill": "#b58863",
    },
    "queen": {
        "fill": "#222222",
        "stroke": "#ffffff",
        "stroke_width": 1.5,
    },
    "region": {
        "stroke": "#2266cc",
        "stroke_width": 2,
        "stroke_dasharray": "5,3",
    },
    "label": {
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "fill": "#333333",
        "text_anchor": "middle",
    },
}


def _merge_styles(styles: dict | None) -> dict:
    merged_styles = {**DEFAULT_STYLES}
    if styles:
        for key, value in styles.items():
            if key in merged_styles:
                merged_styles[key] = {**merged_styles[key], **value}
            else:
                merged_styles[key] = value
    return merged_styles


def export_solution_to_svg(
    solution: Solution,
    cell_size: int = 40,
    region_size: int | None = None,
    title: str | None = None,
    styles: dict | None = None,
) -> str:
    """Export a placement to an SVG chessboard.

    Args:
        solution: Placement to draw
        cell_size: Side of one board square in pixels
        region_size: Draw sub-square outlines of this size (square mode)
        title: Optional caption drawn above the board
        styles: Optional style overrides

    Returns:
        SVG string
    """
    merged_styles = _merge_styles(styles)
    n = solution.size
    board_px = n * cell_size
    top = 24 if title else 0

    svg_parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" ',
        f'width="{board_px}" height="{board_px + top}" ',
        f'viewBox="0 0 {board_px} {board_px + top}">',
        "",
        "<!-- N-Queens Generated SVG -->",
        f"<!-- Placement: {solution.as_list()} -->",
        "",
    ]

    if title:
        label = merged_styles["label"]
        svg_parts.append(
            f'<text x="{board_px / 2}" y="16" font-family="{label["font_family"]}" '
            f'font-size="{label["font_size"]}" fill="{label["fill"]}" '
            f'text-anchor="{label["text_anchor"]}">{title}</text>'
        )

    svg_parts.append(f'<g transform="translate(0, {top})">')

    # Squares
    for row in range(n):
        for col in range(n):
            key = "light_square" if (row + col) % 2 == 0 else "dark_square"
            svg_parts.append(
                f'<rect x="{col * cell_size}" y="{row * cell_size}" '
                f'width="{cell_size}" height="{cell_size}" '
                f'fill="{merged_styles[key]["fill"]}"/>'
            )

    # Sub-square outlines
    if region_size and region_size > 1:
        region = merged_styles["region"]
        for start in range(0, n, region_size):
            for other in range(0, n, region_size):
                w = min(region_size, n - other) * cell_size
                h = min(region_size, n - start) * cell_size
                svg_parts.append(
                    f'<rect class="region" x="{other * cell_size}" y="{start * cell_size}" '
                    f'width="{w}" height="{h}" fill="none" '
                    f'stroke="{region["stroke"]}" stroke-width="{region["stroke_width"]}" '
                    f'stroke-dasharray="{region["stroke_dasharray"]}"/>'
                )

    # Queens
    queen = merged_styles["queen"]
    radius = cell_size * 0.35
    for row, col in solution.cells():
        cx = col * cell_size + cell_size / 2
        cy = row * cell_size + cell_size / 2
        svg_parts.append(
            f'<circle class="queen" id="q_{row}_{col}" cx="{cx}" cy="{cy}" r="{radius}" '
            f'fill="{queen["fill"]}" stroke="{queen["stroke"]}" '
            f'stroke-width="{queen["stroke_width"]}"/>'
        )

    svg_parts.append("</g>")
    svg_parts.append("</svg>")

    return "\n".join(svg_parts)


def export_comparison_svg(
    solutions: list[Solution],
    cols: int = 4,
    cell_size: int = 20,
    region_size: int | None = None,
) -> str:
    """Export multiple placements as a comparison grid SVG.

    Args:
        solutions: Placements to compare (same board size)
        cols: Number of boards per grid row
        cell_size: Side of one board square in pixels
        region_size: Draw sub-square outlines of this size

    Returns:
        SVG string with grid layout
    """
    if not solutions:
        return '<svg xmlns="http://www.w3.org/2000/svg" width="0" height="0"></svg>'

    board_px = solutions[0].size * cell_size
    tile_w = board_px + 20
    tile_h = board_px + 44
    rows = (len(solutions) + cols - 1) // cols
    grid_cols = min(cols, len(solutions))

    svg_parts = [
        '<svg xmlns="http://www.w3.org/2000/svg" ',
        f'width="{grid_cols * tile_w}" height="{rows * tile_h}">',
        "",
        "<!-- N-Queens Solution Comparison Grid -->",
        "",
    ]

    for i, solution in enumerate(solutions):
        x_offset = (i % cols) * tile_w + 10
        y_offset = (i // cols) * tile_h + 10

        sub_svg = export_solution_to_svg(
            solution,
            cell_size=cell_size,
            region_size=region_size,
            title=f"Solution {i + 1}",
        )
        # Strip the outer svg element, keep the drawing
        inner = sub_svg.split(">", 1)[1].rsplit("</svg>", 1)[0]
        svg_parts.append(f'<g transform="translate({x_offset}, {y_offset})">')
        svg_parts.append(inner)
        svg_parts.append("</g>")

    svg_parts.append("</svg>")
    logger.debug(f"Rendered comparison grid of {len(solutions)} boards")
    return "\n".join(svg_parts)
