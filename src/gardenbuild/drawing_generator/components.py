"""
Component geometry library.

Pure functions that draw the elevation geometry (frame, glazing, hardware)
of each door/window category. Every generator takes
``(x, y, width, height, handle_side=None, **options)`` in mm and returns a
:class:`ComponentGeometry` holding the SVG and the horizontal segments
(frames, leaves, dividers) the width was split into.

The segments always tile ``[x, x + width]`` exactly: leaf widths are
computed with numpy and the final leaf absorbs any floating point
remainder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from ..configuration.catalog import CatalogEntry, CladdingCategory, ComponentCategory
from .cladding import cladding_fill
from .constants import (
    FRAME_COLOR,
    FRAME_HIGHLIGHT,
    FRAME_SHADOW,
    GLASS_COLOR,
    GLASS_REFLECT,
    HANDLE_COLOR,
)
from .svg import group, line, polyline, rect

MIN_SPAN = 1.0


@dataclass(frozen=True)
class ComponentGeometry:
    """
    Vector geometry of one placed component.

    Attributes:
        svg: Self-contained SVG fragment
        segments: (start_x, width) of each horizontal sub-element, left to right
    """

    svg: str
    segments: tuple[tuple[float, float], ...]

    @property
    def total_width(self) -> float:
        return float(np.sum([w for _, w in self.segments]))


# =============================================================================
# SHARED HELPERS
# =============================================================================

def subdivide(x: float, width: float, frame: float, divider: float,
              count: int) -> tuple[tuple[float, float], ...]:
    """
    Split a span into frame | leaf | divider | leaf | ... | frame.

    Args:
        x: Left edge of the span
        width: Span width (clamped to a minimum of 1mm)
        frame: Outer frame thickness on each side (at most a quarter of the span)
        divider: Width between leaves
        count: Number of equal leaves (at least 1)

    Returns:
        (start, width) tuples whose widths sum to ``width``
    """
    width = max(float(width), MIN_SPAN)
    count = max(1, int(count))
    frame = min(max(frame, 0.0), width / 4)
    inner = width - 2 * frame
    divider = min(max(divider, 0.0), inner / (2 * count)) if count > 1 else 0.0
    leaf = (inner - divider * (count - 1)) / count

    widths = np.empty(2 * count + 1)
    widths[0] = frame
    widths[-1] = frame
    widths[1:-1:2] = leaf
    widths[2:-1:2] = divider
    # Final leaf absorbs accumulated floating point error
    widths[-2] += width - widths.sum()

    starts = x + np.concatenate(([0.0], np.cumsum(widths)[:-1]))
    return tuple((float(s), float(w)) for s, w in zip(starts, widths))


def _leaves(segments: tuple[tuple[float, float], ...]) -> list[tuple[float, float]]:
    return list(segments[1:-1:2])


def _frame_profile(x: float, y: float, w: float, h: float, t: float) -> list[str]:
    """Anthracite frame with a highlight edge and a shadowed reveal."""
    return [
        rect(x, y, w, h, fill=FRAME_COLOR),
        rect(x + 3, y + 3, w - 6, h - 6, fill=FRAME_HIGHLIGHT),
        rect(x + t - 3, y + t - 3, w - 2 * t + 6, h - 2 * t + 6, fill=FRAME_SHADOW),
    ]


def _glass(x: float, y: float, w: float, h: float) -> list[str]:
    """Glazing panel with a diagonal reflection streak."""
    if w <= 0 or h <= 0:
        return []
    streak = min(w, h) * 0.35
    return [
        rect(x, y, w, h, fill=GLASS_COLOR, class_="glass"),
        line(x + w * 0.15, y + streak, x + w * 0.15 + streak, y,
             stroke=GLASS_REFLECT, stroke_width=2, opacity="0.6"),
        rect(x, y, w, h, stroke=FRAME_SHADOW, stroke_width=0.5),
    ]


def _handle(x: float, y: float, w: float, h: float) -> list[str]:
    return [
        rect(x, y, w, h, fill=HANDLE_COLOR, rx=3, class_="handle"),
        line(x + w / 2, y + 10, x + w / 2, y + h - 10, stroke="#A0A0A0", stroke_width=2),
    ]


def _clamped(width: float, height: float) -> tuple[float, float]:
    return max(float(width), MIN_SPAN), max(float(height), MIN_SPAN)


# =============================================================================
# DOORS
# =============================================================================

def sliding_door(x: float, y: float, width: float, height: float,
                 handle_side: str | None = None, **options) -> ComponentGeometry:
    """Two-sash sliding door with a centre interlock and a pull handle."""
    w, h = _clamped(width, height)
    outer_t = min(max(35, w * 0.028), h / 4)
    sash_t = max(22, w * 0.018)
    interlock = max(14, w * 0.012)
    segments = subdivide(x, w, outer_t, interlock, 2)
    outer_t = segments[0][1]
    oy, oh = y + outer_t, h - 2 * outer_t

    parts = _frame_profile(x, y, w, h, outer_t)
    for sx, sw in _leaves(segments):
        t = min(sash_t, sw / 4, oh / 4)
        parts.append(rect(sx, oy, sw, oh, fill=FRAME_COLOR, class_="leaf"))
        parts.append(rect(sx + 2, oy + 2, sw - 4, oh - 4, fill=FRAME_HIGHLIGHT))
        parts.extend(_glass(sx + t, oy + t, sw - 2 * t, oh - 2 * t))

    ix, iw = segments[2]
    parts.append(rect(ix, oy, iw, oh, fill=FRAME_COLOR, class_="interlock"))
    parts.append(line(ix + iw / 2, oy, ix + iw / 2, oy + oh, stroke=FRAME_SHADOW, stroke_width=0.8))

    handle_w, handle_h = 24, 120
    left_leaf, right_leaf = _leaves(segments)
    if handle_side == "left":
        hx = left_leaf[0] + min(sash_t, left_leaf[1] / 4) / 2 - handle_w / 2
    else:
        hx = right_leaf[0] + right_leaf[1] - min(sash_t, right_leaf[1] / 4) / 2 - handle_w / 2
    parts.extend(_handle(hx, oy + oh / 2 - handle_h / 2, handle_w, handle_h))

    track_h = max(5, outer_t * 0.1)
    parts.append(rect(segments[1][0], oy + oh - track_h, w - 2 * outer_t, track_h, fill=FRAME_COLOR))
    return ComponentGeometry(svg=group(parts, class_="sliding-door"), segments=segments)


def bifold_door(x: float, y: float, width: float, height: float,
                handle_side: str | None = None, leaves: int = 3, **options) -> ComponentGeometry:
    """Folding door with ``leaves`` equal glazed leaves and fold arrows."""
    w, h = _clamped(width, height)
    outer_t = min(max(30, w * 0.022), h / 4)
    div_w = max(12, w * 0.010)
    segments = subdivide(x, w, outer_t, div_w, leaves)
    outer_t = segments[0][1]
    ly, lh = y + outer_t, h - 2 * outer_t

    parts = _frame_profile(x, y, w, h, outer_t)
    for i, (sx, sw) in enumerate(segments[1:-1]):
        if i % 2:
            parts.append(rect(sx, ly, sw, lh, fill=FRAME_COLOR, class_="divider"))
            continue
        leaf_t = min(max(18, sw * 0.04), sw / 4, lh / 4)
        parts.append(rect(sx, ly, sw, lh, fill=FRAME_COLOR, class_="leaf"))
        parts.append(rect(sx + 2, ly + 2, sw - 4, lh - 4, fill=FRAME_HIGHLIGHT))
        parts.extend(_glass(sx + leaf_t, ly + leaf_t, sw - 2 * leaf_t, lh - 2 * leaf_t))

    fold_y = y + h - max(60, h * 0.035)
    mid_x = x + w / 2
    fs = max(18, w * 0.015)
    parts.append(polyline([(mid_x - fs * 3, fold_y), (mid_x - fs, fold_y - fs), (mid_x - fs, fold_y + fs)],
                          stroke="#AAAAAA", stroke_width=2))
    parts.append(polyline([(mid_x + fs * 3, fold_y), (mid_x + fs, fold_y - fs), (mid_x + fs, fold_y + fs)],
                          stroke="#AAAAAA", stroke_width=2))
    return ComponentGeometry(svg=group(parts, class_="bifold-door"), segments=segments)


def single_door(x: float, y: float, width: float, height: float,
                handle_side: str | None = None, **options) -> ComponentGeometry:
    """Single glazed door in a deep frame."""
    w, h = _clamped(width, height)
    frame_t = min(max(70, w * 0.10), h / 4)
    segments = subdivide(x, w, frame_t, 0, 1)
    frame_t = segments[0][1]
    inset = max(3, w * 0.005)

    parts = _frame_profile(x, y, w, h, frame_t)
    gap = frame_t + inset
    parts.extend(_glass(x + gap, y + gap, w - 2 * gap, h - 2 * gap))

    handle_w, handle_h = 26, 130
    if handle_side == "left":
        hx = x + frame_t / 2 - handle_w / 2
    else:
        hx = x + w - frame_t / 2 - handle_w / 2
    parts.extend(_handle(hx, y + h / 2 - handle_h / 2, handle_w, handle_h))
    return ComponentGeometry(svg=group(parts, class_="single-door"), segments=segments)


def secret_cladded_door(x: float, y: float, width: float, height: float,
                        handle_side: str | None = None,
                        cladding: CladdingCategory | str = CladdingCategory.STEEL,
                        **options) -> ComponentGeometry:
    """Door finished in the wall cladding, shown by a dashed outline only."""
    w, h = _clamped(width, height)
    inset = min(10, w / 4, h / 4)
    parts = [
        rect(x, y, w, h, fill=cladding_fill(cladding)),
        rect(x + inset, y + inset, w - 2 * inset, h - 2 * inset,
             stroke="#555555", stroke_width=3, stroke_dasharray="15,8"),
        rect(x + w - min(60, w / 2), y + h * 0.45, min(30, w / 4), 80,
             fill="#444444", stroke="#333333", stroke_width=1, rx=4),
    ]
    return ComponentGeometry(svg=group(parts, class_="cladded-door"), segments=((float(x), w),))


# =============================================================================
# WINDOWS
# =============================================================================

def fixed_window(x: float, y: float, width: float, height: float,
                 handle_side: str | None = None, **options) -> ComponentGeometry:
    w, h = _clamped(width, height)
    t = min(max(55, w * 0.09), h / 4)
    segments = subdivide(x, w, t, 0, 1)
    t = segments[0][1]
    parts = _frame_profile(x, y, w, h, t)
    parts.extend(_glass(x + t, y + t, w - 2 * t, h - 2 * t))
    return ComponentGeometry(svg=group(parts, class_="fixed-window"), segments=segments)


def opener_window(x: float, y: float, width: float, height: float,
                  handle_side: str | None = None, **options) -> ComponentGeometry:
    """
    Window with a top-hung opener above a transom.

    The opener band is 18% of the inner height; the top rail is heavier
    than the rest of the frame.
    """
    w, h = _clamped(width, height)
    t = min(max(55, w * 0.09), h / 4)
    segments = subdivide(x, w, t, 0, 1)
    t = segments[0][1]
    t_top = min(max(70, t * 1.3), w / 4, h / 4)
    inner_h = max(h - t - t_top, 0)
    opener_h = inner_h * 0.18
    transom_h = min(max(20, t * 0.6), inner_h - opener_h)

    parts = _frame_profile(x, y, w, h, t)
    parts.extend(_glass(x + t_top, y + t_top, w - 2 * t_top, opener_h))
    parts.append(rect(x + t_top, y + t_top, w - 2 * t_top, opener_h,
                      stroke=FRAME_SHADOW, stroke_width=2, class_="opener"))

    transom_y = y + t_top + opener_h
    parts.append(rect(x + t - 4, transom_y, w - 2 * t + 8, transom_h, fill=FRAME_COLOR, class_="transom"))
    parts.append(rect(x + t - 2, transom_y + 2, w - 2 * t + 4, transom_h - 4, fill=FRAME_HIGHLIGHT))

    main_y = transom_y + transom_h
    parts.extend(_glass(x + t, main_y, w - 2 * t, h - t_top - opener_h - transom_h - t))
    return ComponentGeometry(svg=group(parts, class_="opener-window"), segments=segments)


def slot_window(x: float, y: float, width: float, height: float,
                handle_side: str | None = None, **options) -> ComponentGeometry:
    w, h = _clamped(width, height)
    t = min(max(45, w * 0.08), h / 4)
    segments = subdivide(x, w, t, 0, 1)
    t = segments[0][1]
    parts = _frame_profile(x, y, w, h, t)
    parts.extend(_glass(x + t, y + t, w - 2 * t, h - 2 * t))
    return ComponentGeometry(svg=group(parts, class_="slot-window"), segments=segments)


# =============================================================================
# DISPATCH
# =============================================================================

GeometryGenerator = Callable[..., ComponentGeometry]

GEOMETRY_BY_CATEGORY: dict[ComponentCategory, GeometryGenerator] = {
    ComponentCategory.SLIDING: sliding_door,
    ComponentCategory.BIFOLD: bifold_door,
    ComponentCategory.SINGLE: single_door,
    ComponentCategory.CLADDED: secret_cladded_door,
    ComponentCategory.FIXED: fixed_window,
    ComponentCategory.OPENER: opener_window,
    ComponentCategory.SLOT: slot_window,
    ComponentCategory.STANDARD: opener_window,
}


def geometry_for(category: ComponentCategory) -> GeometryGenerator:
    """Return the geometry generator for a component category."""
    return GEOMETRY_BY_CATEGORY[category]


def render_component(
    entry: CatalogEntry,
    x: float,
    y: float,
    width: float,
    handle_side: str | None = None,
    cladding: CladdingCategory | None = None,
) -> ComponentGeometry:
    """
    Draw a catalog component at (x, y) with the given width.

    Options are passed only where the entry's category uses them: leaf
    count for folding doors, handle side for entries that support it, and
    the wall cladding for cladded doors.
    """
    options: dict = {}
    if entry.category == ComponentCategory.BIFOLD:
        options["leaves"] = entry.leaves
    if entry.category == ComponentCategory.CLADDED and cladding is not None:
        options["cladding"] = cladding
    side = getattr(handle_side, "value", handle_side) if entry.supports_handle_side else None
    return geometry_for(entry.category)(x, y, width, entry.height, side, **options)

