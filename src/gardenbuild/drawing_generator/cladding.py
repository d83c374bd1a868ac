"""
Cladding pattern generator.

Fills a wall rectangle with the base colour of its cladding material and a
clipped hatch of board lines. Hatch direction depends on the face:

    front face   timber -> diagonal (40 degrees)
                 composite -> horizontal
                 steel -> vertical
    side face    always vertical
"""

from __future__ import annotations

import math

import numpy as np

from ..configuration.catalog import CladdingCategory
from .svg import fmt, line, rect

HATCH_ANGLE = 40.0

CLADDING_STYLES: dict[CladdingCategory, dict] = {
    CladdingCategory.TIMBER: {"fill": "#B87A4B", "line": "#8B5E30", "spacing": 100},
    CladdingCategory.COMPOSITE: {"fill": "#8B7355", "line": "#6B5545", "spacing": 150},
    CladdingCategory.STEEL: {"fill": "#383E42", "line": "#2C3134", "spacing": 200},
}


def _category(category: CladdingCategory | str) -> CladdingCategory:
    return category if isinstance(category, CladdingCategory) else CladdingCategory(category)


def cladding_fill(category: CladdingCategory | str) -> str:
    """Base colour for a cladding category."""
    return CLADDING_STYLES[_category(category)]["fill"]


def hatch_direction(category: CladdingCategory | str, orientation: str) -> str:
    """Return "diagonal", "horizontal" or "vertical" for a face."""
    category = _category(category)
    if orientation != "front":
        return "vertical"
    if category == CladdingCategory.TIMBER:
        return "diagonal"
    if category == CladdingCategory.COMPOSITE:
        return "horizontal"
    return "vertical"


def _hatch_lines(x: float, y: float, w: float, h: float, direction: str,
                 spacing: float) -> list[tuple[float, float, float, float]]:
    if direction == "vertical":
        return [(float(lx), y, float(lx), y + h) for lx in np.arange(x + spacing, x + w, spacing)]
    if direction == "horizontal":
        return [(x, float(ly), x + w, float(ly)) for ly in np.arange(y + spacing, y + h, spacing)]

    # Diagonal: lines rising left to right at HATCH_ANGLE, spaced along their normal
    angle = math.radians(HATCH_ANGLE)
    dx, dy = math.cos(angle), -math.sin(angle)
    nx, ny = math.sin(angle), math.cos(angle)
    corners = [(x, y), (x + w, y), (x, y + h), (x + w, y + h)]
    projections = [cx * nx + cy * ny for cx, cy in corners]
    half = math.hypot(w, h)
    centre = (x + w / 2) * dx + (y + h / 2) * dy

    lines = []
    for c in np.arange(min(projections) + spacing, max(projections), spacing):
        ox, oy = c * nx, c * ny
        t0, t1 = centre - half, centre + half
        lines.append((ox + dx * t0, oy + dy * t0, ox + dx * t1, oy + dy * t1))
    return lines


def cladding_pattern(
    category: CladdingCategory | str,
    x: float,
    y: float,
    width: float,
    height: float,
    orientation: str,
    clip_id: str,
) -> str:
    """
    Draw a cladding-filled rectangle.

    Args:
        category: Cladding material category
        x, y, width, height: Wall rectangle (mm)
        orientation: "front" or "side"
        clip_id: Document-unique id for the clip path; supplied by the caller
            so output is deterministic

    Returns:
        SVG fragment: clip path, base fill and clipped hatch group
    """
    category = _category(category)
    style = CLADDING_STYLES[category]
    width = max(width, 0)
    height = max(height, 0)
    direction = hatch_direction(category, orientation)

    hatch = [
        line(x1, y1, x2, y2, stroke=style["line"], stroke_width=2)
        for x1, y1, x2, y2 in _hatch_lines(x, y, width, height, direction, style["spacing"])
    ]

    return "\n".join([
        f'<clipPath id="{clip_id}"><rect x="{fmt(x)}" y="{fmt(y)}" '
        f'width="{fmt(width)}" height="{fmt(height)}"/></clipPath>',
        rect(x, y, width, height, fill=style["fill"],
             class_=f"cladding cladding-{category.value}", data_hatch=direction),
        f'<g clip-path="url(#{clip_id})">',
        *hatch,
        "</g>",
    ])
