"""
SVG element helpers.

Elements are built as plain strings. Numbers are written with at most two
decimals so identical inputs always give identical documents.
"""

from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from .constants import FONT_FAMILY, VISIBLE_COLOR


def fmt(value: float) -> str:
    """Format a coordinate: two decimals, trailing zeros stripped."""
    text = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _attrs(attrs: dict) -> str:
    """Render keyword attributes; ``stroke_width`` becomes ``stroke-width``."""
    parts = []
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        if isinstance(value, float):
            value = fmt(value)
        parts.append(f"{name}={quoteattr(str(value))}")
    return (" " + " ".join(parts)) if parts else ""


def line(x1: float, y1: float, x2: float, y2: float,
         stroke: str = VISIBLE_COLOR, stroke_width: float = 3, **attrs) -> str:
    return (f'<line x1="{fmt(x1)}" y1="{fmt(y1)}" x2="{fmt(x2)}" y2="{fmt(y2)}" '
            f'stroke="{stroke}" stroke-width="{fmt(stroke_width)}"{_attrs(attrs)}/>')


def rect(x: float, y: float, width: float, height: float,
         fill: str = "none", stroke: str | None = None, stroke_width: float | None = None,
         **attrs) -> str:
    stroke_str = f' stroke="{stroke}" stroke-width="{fmt(stroke_width or 1)}"' if stroke else ""
    return (f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(max(width, 0))}" '
            f'height="{fmt(max(height, 0))}" fill="{fill}"{stroke_str}{_attrs(attrs)}/>')


def circle(cx: float, cy: float, r: float, fill: str = "none",
           stroke: str | None = None, stroke_width: float | None = None, **attrs) -> str:
    stroke_str = f' stroke="{stroke}" stroke-width="{fmt(stroke_width or 1)}"' if stroke else ""
    return (f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}" '
            f'fill="{fill}"{stroke_str}{_attrs(attrs)}/>')


def polyline(points: list[tuple[float, float]], stroke: str = VISIBLE_COLOR,
             stroke_width: float = 3, fill: str = "none", **attrs) -> str:
    pts = " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)
    return (f'<polyline points="{pts}" fill="{fill}" stroke="{stroke}" '
            f'stroke-width="{fmt(stroke_width)}"{_attrs(attrs)}/>')


def polygon(points: list[tuple[float, float]], fill: str = VISIBLE_COLOR, **attrs) -> str:
    pts = " ".join(f"{fmt(x)},{fmt(y)}" for x, y in points)
    return f'<polygon points="{pts}" fill="{fill}"{_attrs(attrs)}/>'


def path(d: str, stroke: str = VISIBLE_COLOR, stroke_width: float = 2,
         fill: str = "none", **attrs) -> str:
    return (f'<path d="{d}" fill="{fill}" stroke="{stroke}" '
            f'stroke-width="{fmt(stroke_width)}"{_attrs(attrs)}/>')


def text(x: float, y: float, content: str, font_size: float,
         anchor: str = "middle", fill: str = "#222222", bold: bool = False,
         italic: bool = False, **attrs) -> str:
    style = ""
    if bold:
        style += ' font-weight="bold"'
    if italic:
        style += ' font-style="italic"'
    return (f'<text x="{fmt(x)}" y="{fmt(y)}" text-anchor="{anchor}" '
            f'font-family="{FONT_FAMILY}" font-size="{fmt(font_size)}" '
            f'fill="{fill}"{style}{_attrs(attrs)}>{escape(content)}</text>')


def drag_marker(kind: str, entity_id: str, view: str,
                bbox: tuple[float, float, float, float]) -> str:
    """
    Machine-readable attributes for a draggable element.

    ``bbox`` is (left, top, right, bottom) in drawing units.
    """
    box = ",".join(fmt(v) for v in bbox)
    return (f' data-kind="{kind}" data-id={quoteattr(entity_id)} '
            f'data-view="{view}" data-bbox="{box}"')


def group(content: str | list[str], **attrs) -> str:
    """Wrap content in a ``<g>`` element."""
    body = "\n".join(content) if isinstance(content, list) else content
    return f"<g{_attrs(attrs)}>\n{body}\n</g>"
