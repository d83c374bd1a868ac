"""
Screen to model coordinate mapping.

Three coordinate spaces are involved:

    screen px    pointer positions reported by the host UI
    document     the SVG's declared coordinate space (viewBox units)
    model mm     a view's local millimetres (or sheet mm for labels)

The pixel to document ratio comes from the document's declared size and
the size it is currently rendered at, so any zoom level maps correctly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..drawing_generator.layout_engine import ELEVATION_VIEWS
from .markers import DragMarker, hit_test, parse_markers

if TYPE_CHECKING:
    from ..drawing_generator.layout_engine import LayoutPlan

SHEET_VIEW = "sheet"


@dataclass(frozen=True)
class ScreenViewport:
    """On-screen rectangle (px) the document is rendered into."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Viewport size must be positive")


class CoordinateMapper:
    """
    Converts pointer positions into document and model coordinates.

    Attributes:
        layout: Layout plan the document was rendered with
        viewport: Where the document is displayed
        markers: Drag markers of the displayed document
    """

    def __init__(
        self,
        layout: "LayoutPlan",
        viewport: ScreenViewport,
        markers: list[DragMarker] | None = None,
    ):
        self.layout = layout
        self.viewport = viewport
        self.markers = list(markers or [])

    @classmethod
    def from_svg(cls, svg: str, layout: "LayoutPlan", viewport: ScreenViewport) -> "CoordinateMapper":
        """Build a mapper for a rendered document."""
        return cls(layout, viewport, parse_markers(svg))

    # -------------------------------------------------------------------------
    # Ratios
    # -------------------------------------------------------------------------

    def document_units_per_pixel(self) -> tuple[float, float]:
        """Document units covered by one screen pixel along x and y."""
        return (
            self.layout.document_width / self.viewport.width,
            self.layout.document_height / self.viewport.height,
        )

    def mm_per_pixel(self) -> tuple[float, float]:
        """Real millimetres covered by one screen pixel along x and y."""
        units_x, units_y = self.document_units_per_pixel()
        return (units_x / self.layout.scale, units_y / self.layout.scale)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def screen_to_document(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        units_x, units_y = self.document_units_per_pixel()
        return (
            (screen_x - self.viewport.left) * units_x,
            (screen_y - self.viewport.top) * units_y,
        )

    def screen_to_model(self, view: str, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Pointer position in ``view``'s local mm; ``"sheet"`` gives sheet mm."""
        doc_x, doc_y = self.screen_to_document(screen_x, screen_y)
        if view == SHEET_VIEW:
            return self.layout.document_to_sheet(doc_x, doc_y)
        return self.layout.to_model(view, doc_x, doc_y)

    def pixels_to_mm(self, dx: float, dy: float) -> tuple[float, float]:
        """Convert a pointer displacement into a model displacement."""
        ratio_x, ratio_y = self.mm_per_pixel()
        return (dx * ratio_x, dy * ratio_y)

    def marker_at(self, screen_x: float, screen_y: float) -> DragMarker | None:
        """Draggable element under the pointer, if any."""
        return hit_test(self.markers, *self.screen_to_document(screen_x, screen_y))

    def view_at(self, screen_x: float, screen_y: float, views=ELEVATION_VIEWS) -> str | None:
        """Name of the view whose reserved area lies under the pointer."""
        regions = [
            DragMarker("view", name, name, (area.left, area.top, area.right, area.bottom))
            for name, area in self.layout.view_areas.items()
            if name in views
        ]
        hit = hit_test(regions, *self.screen_to_document(screen_x, screen_y))
        return hit.view if hit else None
