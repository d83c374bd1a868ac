"""
Sheet annotations: external fixtures, free-text labels and drawing notes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    ANTHRACITE,
    ANTHRACITE_DARK,
    ANTHRACITE_LIGHT,
    LABEL_COLOR,
    NOTES_FONT_SIZE,
    NOTES_LINE_HEIGHT,
    NOTES_GAP,
    PAPER_COLOR,
)
from .svg import drag_marker, fmt, line, path, polygon, rect, text

if TYPE_CHECKING:
    from ..configuration import DrawingLabel
    from .layout_engine import LayoutPlan

ARROW_HEAD_LENGTH = 80
ARROW_HEAD_WIDTH = 40
ARROW_HANDLE_RADIUS = 45
LABEL_PADDING = 60


# =============================================================================
# EXTERNAL FIXTURES
# =============================================================================

def wall_light(x: float, y: float, width: float, height: float) -> str:
    """Cylindrical up/down wall light with warm light cones above and below."""
    cx = x + width / 2
    spread = 120
    cone = 100
    parts = [
        path(f"M {fmt(cx - 20)} {fmt(y)} L {fmt(cx - cone / 2)} {fmt(y - spread)} "
             f"L {fmt(cx + cone / 2)} {fmt(y - spread)} L {fmt(cx + 20)} {fmt(y)} Z",
             stroke="none", fill="#FFF3D4", opacity="0.4"),
        path(f"M {fmt(cx - 20)} {fmt(y + height)} L {fmt(cx - cone / 2)} {fmt(y + height + spread)} "
             f"L {fmt(cx + cone / 2)} {fmt(y + height + spread)} L {fmt(cx + 20)} {fmt(y + height)} Z",
             stroke="none", fill="#FFF3D4", opacity="0.4"),
        rect(x, y, width, height, fill=ANTHRACITE, stroke=ANTHRACITE_DARK, stroke_width=2,
             rx=fmt(width / 2)),
        rect(x + width * 0.15, y + 10, width * 0.25, height - 20, fill=ANTHRACITE_LIGHT,
             opacity="0.3", rx=8),
        f'<ellipse cx="{fmt(cx)}" cy="{fmt(y + 8)}" rx="{fmt(width / 2 - 5)}" ry="8" fill="#888888"/>',
        f'<ellipse cx="{fmt(cx)}" cy="{fmt(y + height - 8)}" rx="{fmt(width / 2 - 5)}" ry="8" fill="#888888"/>',
    ]
    return "\n".join(parts)


def external_socket(x: float, y: float, width: float, height: float) -> str:
    """Weatherproof socket box with a UK three-pin face."""
    face = min(width, height) * 0.4
    fx = x + (width - face) / 2
    fy = y + (height - face) / 2
    pin_w, pin_h = face * 0.13, face * 0.3
    parts = [
        rect(x, y, width, height, fill=PAPER_COLOR, stroke="#999999", stroke_width=2, rx=6),
        rect(x + 10, y + 10, width - 20, height - 20, fill="#E8E8E8", stroke="#AAAAAA",
             stroke_width=1.5, rx=4),
        rect(fx, fy, face, face, fill=PAPER_COLOR, stroke="#777777", stroke_width=1, rx=2),
        rect(fx + face / 2 - pin_w / 2, fy + face * 0.17, pin_w, pin_h, fill="#333333"),
        rect(fx + face * 0.25, fy + face * 0.58, pin_w, pin_h, fill="#333333"),
        rect(fx + face * 0.75 - pin_w, fy + face * 0.58, pin_w, pin_h, fill="#333333"),
    ]
    return "\n".join(parts)


FEATURE_RENDERERS = {
    "wallLight": wall_light,
    "socket": external_socket,
}


# =============================================================================
# DRAWING LABELS
# =============================================================================

def _arrow(x1: float, y1: float, x2: float, y2: float) -> str:
    """Leader line from the label box to (x2, y2) with a filled head."""
    dx, dy = x2 - x1, y2 - y1
    length = (dx * dx + dy * dy) ** 0.5
    if length < 1e-6:
        return ""
    ux, uy = dx / length, dy / length
    bx, by = x2 - ux * ARROW_HEAD_LENGTH, y2 - uy * ARROW_HEAD_LENGTH
    px, py = -uy * ARROW_HEAD_WIDTH / 2, ux * ARROW_HEAD_WIDTH / 2
    return "\n".join([
        line(x1, y1, bx, by, stroke=LABEL_COLOR, stroke_width=6),
        polygon([(x2, y2), (bx + px, by + py), (bx - px, by - py)], fill=LABEL_COLOR),
    ])


def render_drawing_label(label: "DrawingLabel", layout: "LayoutPlan") -> str:
    """
    Render a free-text label in sheet mm.

    The text box and the arrow tip each carry their own drag marker.
    """
    size = label.font_size
    box_w = len(label.text) * size * 0.6 + 2 * LABEL_PADDING
    box_h = size + 2 * LABEL_PADDING * 0.75
    box_x = label.x - box_w / 2
    box_y = label.y - box_h / 2

    parts = []
    if label.has_arrow:
        parts.append(_arrow(label.x, label.y, label.arrow_x, label.arrow_y))

    bbox = (*layout.sheet_to_document(box_x, box_y),
            *layout.sheet_to_document(box_x + box_w, box_y + box_h))
    parts.append(f'<g class="drawing-label"{drag_marker("label", label.id, "sheet", bbox)}>')
    parts.append(rect(box_x, box_y, box_w, box_h, fill="#FFFFFF", stroke=LABEL_COLOR, stroke_width=6))
    parts.append(text(label.x, label.y + size * 0.35, label.text, size, fill=LABEL_COLOR, bold=True))
    parts.append("</g>")

    if label.has_arrow:
        r = ARROW_HANDLE_RADIUS
        tip = (*layout.sheet_to_document(label.arrow_x - r, label.arrow_y - r),
               *layout.sheet_to_document(label.arrow_x + r, label.arrow_y + r))
        parts.append(
            f'<circle class="label-arrow-handle" cx="{fmt(label.arrow_x)}" cy="{fmt(label.arrow_y)}" '
            f'r="{r}" fill="{LABEL_COLOR}" fill-opacity="0.15"'
            f'{drag_marker("label-arrow", label.id, "sheet", tip)}/>'
        )
    return "\n".join(parts)


# =============================================================================
# DRAWING NOTES
# =============================================================================

def render_notes(lines: tuple[str, ...], x: float, y: float) -> str:
    """Notes heading and wrapped lines, left aligned at (x, y) in sheet mm."""
    if not lines:
        return ""
    top = y + NOTES_GAP + NOTES_LINE_HEIGHT * 0.8
    parts = ['<g id="drawing-notes">',
             text(x, top, "Notes:", NOTES_FONT_SIZE, anchor="start", fill="#444444", bold=True)]
    for i, note in enumerate(lines, start=1):
        parts.append(text(x, top + i * NOTES_LINE_HEIGHT, note, NOTES_FONT_SIZE,
                          anchor="start", fill="#555555"))
    parts.append("</g>")
    return "\n".join(parts)
