"""
Elevation renderer.

One algorithm draws all three vertical faces. Each view is drawn in its own
local millimetres (y grows downwards, y=0 is the top of the roof trim and
y=height is ground level) and placed on the sheet by the shared
:class:`LayoutPlan`.

Side views are mirrored so that the front of the building is the edge next
to the front elevation's reader:

    left elevation:  rear at x=0, front at x=depth, canopy to the right
    right elevation: front at x=0, rear at x=depth, canopy to the left

Drawing order: fascia band, cladding, base trim, corner posts, edge lines,
gutter, canopy/decking, placed components, external features, dimensions.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..configuration.catalog import CladdingCategory
from ..configuration.schema import CornerTreatment, Wall, default_sill_height
from ..constants import (
    BASE_TRIM_HEIGHT,
    CANOPY_DEPTH,
    CANOPY_POST_WIDTH,
    CANOPY_TRIM_WIDTH,
    CORNER_POST_WIDTH,
    DECKING_HEIGHT,
    DOWNPIPE_HEIGHT_RATIO,
    DOWNPIPE_INSET,
    DOWNPIPE_WIDTH,
    FASCIA_OVERHANG,
    GUTTER_HEIGHT,
    ROOF_ZONE,
    TOP_TRIM_HEIGHT,
)
from ..exceptions import DrawingWarning
from .annotations import FEATURE_RENDERERS
from .cladding import cladding_pattern
from .components import render_component
from .constants import (
    ANTHRACITE,
    ANTHRACITE_DARK,
    DECKING_COLOR,
    DECKING_LINE,
    HIDDEN_COLOR,
    VIEW_TITLE_FONT_SIZE,
    VIEW_TITLE_OFFSET,
    VISIBLE_COLOR,
)
from .dimensions import horizontal_dimension, vertical_dimension
from .svg import drag_marker, group, line, rect, text

if TYPE_CHECKING:
    from ..configuration import BuildingConfiguration, Catalog
    from .layout_engine import LayoutPlan

ELEVATION_TITLES = {
    "front": "Front Elevation",
    "left": "Left Elevation",
    "right": "Right Elevation",
}

DIMENSION_CLEARANCE = 30


@dataclass(frozen=True)
class ComponentPlacement:
    """Where a component or feature was drawn, in the view's local mm."""

    id: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    category: str = ""


def resolve_cladding(configuration: "BuildingConfiguration", catalog: "Catalog",
                     wall: str) -> CladdingCategory:
    """Cladding category of a wall; unknown keys fall back to timber with a warning."""
    key = configuration.cladding.for_wall(wall)
    category = catalog.cladding_category(key)
    if category is None:
        warnings.warn(
            f"Unknown cladding '{key}' on {wall} wall; drawing it as timber.",
            DrawingWarning,
            stacklevel=2,
        )
        return CladdingCategory.TIMBER
    return category


class ElevationRenderer:
    """
    Renders one elevation (front, left or right) as an SVG group.

    Attributes:
        placements: Components and features drawn by the last ``render()``
    """

    def __init__(
        self,
        configuration: "BuildingConfiguration",
        catalog: "Catalog",
        layout: "LayoutPlan",
        side: str,
    ):
        if side not in ELEVATION_TITLES:
            raise ValueError(f"Unknown elevation '{side}'")
        self.configuration = configuration
        self.catalog = catalog
        self.layout = layout
        self.side = side
        self.view = layout.view(side)
        self.placements: list[ComponentPlacement] = []

    # -------------------------------------------------------------------------
    # Geometry helpers
    # -------------------------------------------------------------------------

    @property
    def span(self) -> float:
        """Length of the wall drawn in this view."""
        cfg = self.configuration
        return cfg.width if self.side == "front" else cfg.depth

    @property
    def front_x(self) -> float | None:
        """Local x of the building's front edge on a side view."""
        if self.side == "left":
            return self.span
        if self.side == "right":
            return 0.0
        return None

    @property
    def canopy_range(self) -> tuple[float, float] | None:
        """Local x range of the canopy projection on a side view."""
        if self.side == "front" or not self.configuration.has_canopy:
            return None
        if self.side == "left":
            return (self.span, self.span + CANOPY_DEPTH)
        return (-CANOPY_DEPTH, 0.0)

    def _roof_range(self) -> tuple[float, float]:
        left, right = -FASCIA_OVERHANG, self.span + FASCIA_OVERHANG
        canopy = self.canopy_range
        if canopy:
            left = min(left, canopy[0] - FASCIA_OVERHANG)
            right = max(right, canopy[1] + FASCIA_OVERHANG)
        return left, right

    def _marker(self, kind: str, entity_id: str, x: float, y: float, w: float, h: float) -> str:
        bbox = (*self.view.to_document(x, y), *self.view.to_document(x + w, y + h))
        return drag_marker(kind, entity_id, self.side, bbox)

    # -------------------------------------------------------------------------
    # Parts
    # -------------------------------------------------------------------------

    def _fascia(self) -> list[str]:
        left, right = self._roof_range()
        return [
            rect(left, 0, right - left, TOP_TRIM_HEIGHT, fill=ANTHRACITE_DARK, class_="top-trim"),
            rect(left, TOP_TRIM_HEIGHT, right - left, ROOF_ZONE - TOP_TRIM_HEIGHT,
                 fill=ANTHRACITE, class_="fascia"),
        ]

    def _wall(self) -> list[str]:
        cfg = self.configuration
        category = resolve_cladding(cfg, self.catalog, self.side)
        orientation = "front" if self.side == "front" else "side"
        wall_h = cfg.height - ROOF_ZONE - BASE_TRIM_HEIGHT
        return [
            cladding_pattern(category, 0, ROOF_ZONE, self.span, wall_h, orientation,
                             clip_id=f"clad-{self.side}-wall"),
            rect(0, cfg.height - BASE_TRIM_HEIGHT, self.span, BASE_TRIM_HEIGHT,
                 fill=ANTHRACITE, class_="base-trim"),
        ]

    def _corner_posts(self) -> list[str]:
        """Signature corner strips; a closed corner wraps and has no strip."""
        cfg = self.configuration
        if not cfg.is_signature:
            return []
        post_h = cfg.height - ROOF_ZONE - BASE_TRIM_HEIGHT
        ends: list[tuple[float, CornerTreatment | None]]
        if self.side == "front":
            ends = [(0.0, cfg.corner_left), (self.span - CORNER_POST_WIDTH, cfg.corner_right)]
        elif self.side == "left":
            ends = [(0.0, None), (self.span - CORNER_POST_WIDTH, cfg.corner_left)]
        else:
            ends = [(0.0, cfg.corner_right), (self.span - CORNER_POST_WIDTH, None)]
        return [
            rect(x, ROOF_ZONE, CORNER_POST_WIDTH, post_h, fill=ANTHRACITE, class_="corner-post")
            for x, corner in ends
            if corner != CornerTreatment.CLOSED
        ]

    def _edges(self) -> list[str]:
        """
        Outline of the wall.

        On a side view the edge shared with the front elevation is omitted
        when that corner is closed.
        """
        cfg = self.configuration
        top, bottom = ROOF_ZONE, cfg.height
        parts = [
            line(0, bottom, self.span, bottom, stroke=VISIBLE_COLOR, stroke_width=4, class_="edge edge-base"),
        ]
        if self.side == "front":
            parts.append(line(0, top, 0, bottom, stroke_width=4, class_="edge edge-left"))
            parts.append(line(self.span, top, self.span, bottom, stroke_width=4, class_="edge edge-right"))
            return parts

        corner = cfg.corner(self.side)
        rear_x = 0.0 if self.side == "left" else self.span
        parts.append(line(rear_x, top, rear_x, bottom, stroke_width=4, class_="edge edge-rear"))
        if corner == CornerTreatment.OPEN:
            parts.append(line(self.front_x, top, self.front_x, bottom, stroke_width=4,
                              class_="edge edge-front"))
        return parts

    def _gutter(self) -> list[str]:
        """Gutter under the fascia; downpipes only at the two outer front corners."""
        cfg = self.configuration
        left, right = self._roof_range()
        parts = [rect(left, ROOF_ZONE, right - left, GUTTER_HEIGHT, fill=ANTHRACITE_DARK, class_="gutter")]
        if self.side == "front":
            pipe_h = cfg.height * DOWNPIPE_HEIGHT_RATIO
            for x in (left + DOWNPIPE_INSET, right - DOWNPIPE_INSET - DOWNPIPE_WIDTH):
                parts.append(rect(x, ROOF_ZONE + GUTTER_HEIGHT, DOWNPIPE_WIDTH, pipe_h,
                                  fill=ANTHRACITE_DARK, class_="downpipe"))
        return parts

    @property
    def canopy_outer_x(self) -> float | None:
        """Local x of the canopy's outer (far) end on a side view."""
        canopy = self.canopy_range
        if canopy is None:
            return None
        return canopy[1] if self.side == "left" else canopy[0]

    def _canopy(self) -> list[str]:
        """
        Side screen of the canopy.

        Closed corner: clad panel continuous with the wall, an edge line and a
        post at the outer end only. Open corner: dashed outline plus a trim
        strip against the building's front edge.
        """
        canopy = self.canopy_range
        if canopy is None:
            return []
        cfg = self.configuration
        x0, x1 = canopy
        outer = self.canopy_outer_x
        screen_h = cfg.height - ROOF_ZONE
        post_h = screen_h - BASE_TRIM_HEIGHT
        if cfg.corner(self.side) == CornerTreatment.CLOSED:
            category = resolve_cladding(cfg, self.catalog, self.side)
            post_x = outer - CANOPY_POST_WIDTH if self.side == "left" else outer
            return [
                '<g class="canopy canopy-screen-closed">',
                cladding_pattern(category, x0, ROOF_ZONE, x1 - x0, post_h,
                                 "side", clip_id=f"clad-{self.side}-canopy"),
                rect(x0, cfg.height - BASE_TRIM_HEIGHT, x1 - x0, BASE_TRIM_HEIGHT, fill=ANTHRACITE),
                rect(post_x, ROOF_ZONE, CANOPY_POST_WIDTH, post_h, fill=ANTHRACITE, class_="canopy-post"),
                line(outer, ROOF_ZONE, outer, cfg.height, stroke_width=3, class_="edge edge-canopy-outer"),
                "</g>",
            ]
        trim_x = self.front_x - CANOPY_TRIM_WIDTH if self.side == "left" else self.front_x
        return [
            rect(x0, ROOF_ZONE, x1 - x0, screen_h, stroke=HIDDEN_COLOR, stroke_width=3,
                 stroke_dasharray="40,25", class_="canopy canopy-screen-open"),
            rect(trim_x, ROOF_ZONE, CANOPY_TRIM_WIDTH, post_h, fill=ANTHRACITE, class_="canopy-trim"),
        ]

    def _decking_range(self) -> tuple[float, float]:
        """
        Local x range of the decking band.

        With a canopy, a closed corner carries the decking along the whole
        fascia while an open corner decks only the canopy projection.
        """
        canopy = self.canopy_range
        if canopy is None:
            return -FASCIA_OVERHANG, self.span + FASCIA_OVERHANG
        if self.configuration.corner(self.side) == CornerTreatment.CLOSED:
            return self._roof_range()
        return canopy

    def _decking(self) -> list[str]:
        cfg = self.configuration
        if not cfg.has_decking:
            return []
        left, right = self._decking_range()
        y = cfg.height
        parts = [rect(left, y, right - left, DECKING_HEIGHT, fill=DECKING_COLOR, class_="decking")]
        parts.append(line(left, y + DECKING_HEIGHT / 2, right, y + DECKING_HEIGHT / 2,
                          stroke=DECKING_LINE, stroke_width=2))
        outer = self.canopy_outer_x
        if outer is not None and cfg.corner(self.side) == CornerTreatment.OPEN:
            parts.append(line(outer, y, outer, y + DECKING_HEIGHT, stroke=DECKING_LINE,
                              stroke_width=1, class_="decking-edge"))
        return parts

    def _components(self) -> list[str]:
        cfg = self.configuration
        wall = Wall(self.side)
        cladding = None
        parts = []
        for comp in cfg.components_on(wall):
            entry = self.catalog.component(comp.type)
            if entry is None:
                warnings.warn(
                    f"Component '{comp.id}' has unknown type '{comp.type}'; skipped in {self.side} elevation.",
                    DrawingWarning,
                    stacklevel=2,
                )
                continue
            width = comp.effective_width(entry)
            if entry.movable_vertically:
                sill = comp.vertical_offset
                if sill is None:
                    sill = default_sill_height(entry, cfg.height)
                y = cfg.height - sill - entry.height
            else:
                y = cfg.height - entry.height
            if cladding is None:
                cladding = resolve_cladding(cfg, self.catalog, self.side)

            geometry = render_component(entry, comp.position, y, width, comp.handle_side, cladding)
            marker = self._marker("component", comp.id, comp.position, y, width, entry.height)
            parts.append(f'<g class="component component-{entry.category.value}"{marker}>')
            parts.append(geometry.svg)
            parts.append("</g>")
            self.placements.append(ComponentPlacement(
                id=comp.id, kind="component", x=comp.position, y=y, width=width, height=entry.height,
                category=entry.category.value,
            ))
        return parts

    def _features(self) -> list[str]:
        if self.side != "front":
            return []
        cfg = self.configuration
        parts = []
        for feat in cfg.external_features:
            spec = self.catalog.feature(feat.type)
            renderer = FEATURE_RENDERERS.get(feat.type)
            if spec is None or renderer is None:
                warnings.warn(
                    f"External feature '{feat.id}' has unknown type '{feat.type}'; skipped.",
                    DrawingWarning,
                    stacklevel=2,
                )
                continue
            y = cfg.height - feat.y - spec.height
            marker = self._marker("feature", feat.id, feat.x, y, spec.width, spec.height)
            parts.append(f'<g class="feature feature-{feat.type}"{marker}>')
            parts.append(renderer(feat.x, y, spec.width, spec.height))
            parts.append("</g>")
            self.placements.append(ComponentPlacement(
                id=feat.id, kind="feature", x=feat.x, y=y, width=spec.width, height=spec.height,
                category=feat.type,
            ))
        return parts

    def _annotations(self) -> list[str]:
        cfg = self.configuration
        deck = DECKING_HEIGHT if cfg.has_decking else 0
        parts = [
            text(self.span / 2, -VIEW_TITLE_OFFSET, ELEVATION_TITLES[self.side],
                 VIEW_TITLE_FONT_SIZE, bold=True, class_="view-title"),
            horizontal_dimension(0, self.span, cfg.height + deck + DIMENSION_CLEARANCE, self.span),
        ]
        if self.side == "front":
            parts.append(vertical_dimension(0, cfg.height, -FASCIA_OVERHANG, cfg.height))
        return parts

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def render(self) -> str:
        """Render the elevation as a transformed SVG group."""
        self.placements = []
        parts = (
            self._fascia()
            + self._wall()
            + self._corner_posts()
            + self._edges()
            + self._gutter()
            + self._canopy()
            + self._decking()
            + self._components()
            + self._features()
            + self._annotations()
        )
        return group(parts, id=f"view-{self.side}", class_="view elevation",
                     transform=self.view.svg_transform())
