"""
Dimension annotator for building drawings.

Draws linear dimensions in a view's local millimetres:
- Two extension ticks from the measured edges
- A dimension line offset from the edges by a fixed clearance
- Terminators at both ends (open chevrons by default)
- The label centred on the line, or below it for plan widths

The label is always the configured value formatted as ``"{value}mm"``;
it is never re-derived from drawn geometry.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DIMENSION_CHEVRON_MAX,
    DIMENSION_COLOR,
    DIMENSION_EXTENSION_GAP,
    DIMENSION_EXTENSION_OVERSHOOT,
    DIMENSION_FONT_SIZE,
    DIMENSION_LABEL_ABOVE,
    DIMENSION_LABEL_BELOW,
    DIMENSION_OFFSET,
    EXTENSION_COLOR,
    FONT_FAMILY,
)
from .svg import fmt, line, polygon, polyline

ELEVATION_HEIGHT_OFFSET = -350


@dataclass
class DimensionStyle:
    """
    Dimension styling configuration.

    Provides line weights, terminator style and label placement for
    architectural dimensions.
    """
    # Line styling
    line_stroke_width: float = 3
    line_color: str = DIMENSION_COLOR
    extension_stroke_width: float = 1.5
    extension_color: str = EXTENSION_COLOR
    extension_line_gap: float = DIMENSION_EXTENSION_GAP
    extension_line_overshoot: float = DIMENSION_EXTENSION_OVERSHOOT

    # Terminators
    arrow_style: str = "chevron"  # "chevron", "filled", "tick"
    arrow_max: float = DIMENSION_CHEVRON_MAX

    # Text styling
    font_family: str = FONT_FAMILY
    font_size: float = DIMENSION_FONT_SIZE
    label_above: float = DIMENSION_LABEL_ABOVE
    label_below: float = DIMENSION_LABEL_BELOW


DEFAULT_STYLE = DimensionStyle()


def format_dimension(value: float) -> str:
    """Label for a configured length, e.g. ``4000 -> "4000mm"``."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}mm"


def _render_arrow_svg(
    x: float,
    y: float,
    direction: str,
    size: float,
    style: DimensionStyle,
) -> str:
    """
    Render a terminator with its tip at (x, y).

    Args:
        x, y: Terminator tip position
        direction: "left", "right", "up" or "down" (where the tip points)
        size: Terminator length along the dimension line
        style: DimensionStyle configuration
    """
    directions = {
        "left": (-1, 0),
        "right": (1, 0),
        "up": (0, -1),
        "down": (0, 1),
    }
    dx, dy = directions.get(direction, (1, 0))
    px, py = -dy, dx
    half = size / 2

    base_x = x - dx * size
    base_y = y - dy * size
    b1 = (base_x + px * half, base_y + py * half)
    b2 = (base_x - px * half, base_y - py * half)

    if style.arrow_style == "filled":
        return polygon([(x, y), b1, b2], fill=style.line_color)
    if style.arrow_style == "tick":
        tick = size * 0.5
        return line(x - tick, y + tick, x + tick, y - tick,
                    stroke=style.line_color, stroke_width=style.line_stroke_width)
    return polyline([b1, (x, y), b2], stroke=style.line_color,
                    stroke_width=style.line_stroke_width, stroke_linejoin="miter")


def horizontal_dimension(
    x1: float,
    x2: float,
    y: float,
    value: float,
    offset: float = DIMENSION_OFFSET,
    label_below: bool = False,
    style: DimensionStyle | None = None,
) -> str:
    """
    Dimension a horizontal span measured at edge height ``y``.

    Args:
        x1, x2: Measured edges
        y: Edge the extension lines start from
        value: Configured length shown in the label
        offset: Distance from ``y`` to the dimension line (positive = below)
        label_below: Put the label under the line instead of above it
        style: DimensionStyle configuration
    """
    style = style or DEFAULT_STYLE
    if x1 > x2:
        x1, x2 = x2, x1
    sign = 1 if offset >= 0 else -1
    dim_y = y + offset
    gap = style.extension_line_gap * sign
    overshoot = style.extension_line_overshoot * sign
    size = min(style.arrow_max, (x2 - x1) * 0.05)
    label = format_dimension(value)
    label_y = dim_y + style.label_below if label_below else dim_y - style.label_above

    parts = [
        f'<g class="dimension dimension-horizontal" data-value="{label}">',
        line(x1, y + gap, x1, dim_y + overshoot,
             stroke=style.extension_color, stroke_width=style.extension_stroke_width),
        line(x2, y + gap, x2, dim_y + overshoot,
             stroke=style.extension_color, stroke_width=style.extension_stroke_width),
        line(x1, dim_y, x2, dim_y, stroke=style.line_color, stroke_width=style.line_stroke_width),
        _render_arrow_svg(x1, dim_y, "left", size, style),
        _render_arrow_svg(x2, dim_y, "right", size, style),
        f'<text class="dimension-label" x="{fmt((x1 + x2) / 2)}" y="{fmt(label_y)}" '
        f'text-anchor="middle" font-family="{style.font_family}" '
        f'font-size="{fmt(style.font_size)}" fill="{style.line_color}">{label}</text>',
        "</g>",
    ]
    return "\n".join(parts)


def vertical_dimension(
    y1: float,
    y2: float,
    x: float,
    value: float,
    offset: float = ELEVATION_HEIGHT_OFFSET,
    style: DimensionStyle | None = None,
) -> str:
    """
    Dimension a vertical span measured at edge ``x``.

    The label is rotated to read bottom-to-top on the outer side of the line.

    Args:
        y1, y2: Measured edges
        x: Edge the extension lines start from
        value: Configured length shown in the label
        offset: Distance from ``x`` to the dimension line (negative = left)
        style: DimensionStyle configuration
    """
    style = style or DEFAULT_STYLE
    if y1 > y2:
        y1, y2 = y2, y1
    sign = 1 if offset >= 0 else -1
    dim_x = x + offset
    gap = style.extension_line_gap * sign
    overshoot = style.extension_line_overshoot * sign
    size = max(60, min(style.arrow_max, (y2 - y1) * 0.05))
    size = min(size, (y2 - y1) / 2)
    label = format_dimension(value)
    text_x = dim_x + sign * (style.label_above + 15)
    text_y = (y1 + y2) / 2

    parts = [
        f'<g class="dimension dimension-vertical" data-value="{label}">',
        line(x + gap, y1, dim_x + overshoot, y1,
             stroke=style.extension_color, stroke_width=style.extension_stroke_width),
        line(x + gap, y2, dim_x + overshoot, y2,
             stroke=style.extension_color, stroke_width=style.extension_stroke_width),
        line(dim_x, y1, dim_x, y2, stroke=style.line_color, stroke_width=style.line_stroke_width),
        _render_arrow_svg(dim_x, y1, "up", size, style),
        _render_arrow_svg(dim_x, y2, "down", size, style),
        f'<text class="dimension-label" x="{fmt(text_x)}" y="{fmt(text_y)}" '
        f'text-anchor="middle" font-family="{style.font_family}" '
        f'font-size="{fmt(style.font_size)}" fill="{style.line_color}" '
        f'transform="rotate(-90 {fmt(text_x)} {fmt(text_y)})">{label}</text>',
        "</g>",
    ]
    return "\n".join(parts)
