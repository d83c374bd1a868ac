"""
Drag markers embedded in the drawing.

Every draggable element of a rendered drawing carries four attributes:

    data-kind   entity class (component, plan-component, feature, ac-unit,
                label, label-arrow)
    data-id     configuration entity id
    data-view   view the element belongs to (front, left, right, plan, sheet)
    data-bbox   "left,top,right,bottom" in document units

This module reads them back out of the SVG and answers "what is under this
point?".
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

DRAG_KINDS = ("component", "plan-component", "feature", "ac-unit", "label", "label-arrow")


@dataclass(frozen=True)
class DragMarker:
    """A draggable element found in the document."""

    kind: str
    entity_id: str
    view: str
    bbox: tuple[float, float, float, float]

    def contains(self, doc_x: float, doc_y: float) -> bool:
        left, top, right, bottom = self.bbox
        return left <= doc_x <= right and top <= doc_y <= bottom

    @property
    def center(self) -> tuple[float, float]:
        left, top, right, bottom = self.bbox
        return ((left + right) / 2, (top + bottom) / 2)


def _parse_bbox(value: str) -> tuple[float, float, float, float] | None:
    try:
        left, top, right, bottom = (float(v) for v in value.split(","))
    except ValueError:
        return None
    return (min(left, right), min(top, bottom), max(left, right), max(top, bottom))


def parse_markers(svg: str) -> list[DragMarker]:
    """
    Collect drag markers in document order.

    Elements with an unknown kind or a malformed bounding box are ignored.
    """
    root = ET.fromstring(svg)
    markers = []
    for element in root.iter():
        kind = element.get("data-kind")
        if kind not in DRAG_KINDS:
            continue
        bbox = _parse_bbox(element.get("data-bbox", ""))
        entity_id = element.get("data-id")
        if bbox is None or not entity_id:
            continue
        markers.append(DragMarker(kind=kind, entity_id=entity_id,
                                  view=element.get("data-view", ""), bbox=bbox))
    return markers


def hit_test(markers: list[DragMarker], doc_x: float, doc_y: float) -> DragMarker | None:
    """Topmost marker under the point; later markers are drawn on top."""
    for marker in reversed(markers):
        if marker.contains(doc_x, doc_y):
            return marker
    return None
