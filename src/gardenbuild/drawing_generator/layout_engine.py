"""
Layout engine for the composite building drawing.

This module provides the LayoutPlanner class which handles:
- Reserving an area for every view (three elevations, plan, title block)
- Arranging the views on one sheet without overlap
- Choosing the single scale shared by every view
- Wrapping the drawing notes under the title block

Everything is planned in real-world millimetres on a composite "sheet";
the chosen scale then maps sheet mm to drawing units. The resulting
:class:`LayoutPlan` is computed once per render and handed to every view
renderer and to the coordinate mapper.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import CANOPY_DEPTH, DECKING_HEIGHT
from .constants import (
    BOUNDARY_REAR_PAD,
    BOUNDARY_SIDE_PAD,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DIM_SPACE,
    ELEVATION_FRONT_EXTENSION,
    ELEVATION_REAR_EXTENSION,
    LABEL_SPACE,
    MAX_SCALE,
    NOTES_CHAR_WIDTH_RATIO,
    NOTES_FONT_SIZE,
    NOTES_GAP,
    NOTES_LINE_HEIGHT,
    PLAN_FOOTER_SPACE,
    PLAN_RIGHT_SPACE,
    PLAN_SIDE_SPACE,
    SHEET_MARGIN,
    TITLE_BLOCK_MIN_HEIGHT,
    TITLE_BLOCK_MIN_WIDTH,
    VIEW_GAP,
)
from .svg import fmt
from .view_area import ViewArea

if TYPE_CHECKING:
    from ..configuration import BuildingConfiguration

ELEVATION_VIEWS = ("front", "left", "right")
VIEW_NAMES = ELEVATION_VIEWS + ("plan", "title")

AC_CLEARANCE = 50


@dataclass(frozen=True)
class ViewPlacement:
    """
    Where one view sits on the sheet.

    Attributes:
        name: View name ("front", "left", "right", "plan", "title")
        origin_x: Sheet x (mm) of the view's local origin
        origin_y: Sheet y (mm) of the view's local origin
        extent: Area reserved for the view in its own local mm
        scale: Drawing units per mm (shared by all views)
    """

    name: str
    origin_x: float
    origin_y: float
    extent: ViewArea
    scale: float

    @property
    def sheet_area(self) -> ViewArea:
        """Reserved area in sheet mm."""
        return ViewArea(
            x=self.origin_x + self.extent.x,
            y=self.origin_y + self.extent.y,
            width=self.extent.width,
            height=self.extent.height,
        )

    @property
    def area(self) -> ViewArea:
        """Reserved area in drawing units."""
        return self.sheet_area.scaled(self.scale)

    @property
    def document_origin(self) -> tuple[float, float]:
        return (self.origin_x * self.scale, self.origin_y * self.scale)

    def to_document(self, x: float, y: float) -> tuple[float, float]:
        """Local view mm -> drawing units."""
        return ((self.origin_x + x) * self.scale, (self.origin_y + y) * self.scale)

    def to_local(self, doc_x: float, doc_y: float) -> tuple[float, float]:
        """Drawing units -> local view mm."""
        return (doc_x / self.scale - self.origin_x, doc_y / self.scale - self.origin_y)

    def svg_transform(self) -> str:
        ox, oy = self.document_origin
        return f"translate({fmt(ox)},{fmt(oy)}) scale({self.scale:.6g})"


@dataclass(frozen=True)
class LayoutPlan:
    """
    Immutable result of layout planning.

    Attributes:
        scale: Drawing units per mm, identical for every view
        sheet_width_mm: Composite sheet width in real mm
        sheet_height_mm: Composite sheet height in real mm
        views: Placement of each view by name
        title_width: Title block width (mm)
        title_height: Title block height (mm), excluding notes
        notes_lines: Wrapped drawing notes (empty when there are none)
    """

    scale: float
    sheet_width_mm: float
    sheet_height_mm: float
    views: dict[str, ViewPlacement] = field(default_factory=dict)
    title_width: float = TITLE_BLOCK_MIN_WIDTH
    title_height: float = TITLE_BLOCK_MIN_HEIGHT
    notes_lines: tuple[str, ...] = ()

    @property
    def document_width(self) -> float:
        return self.sheet_width_mm * self.scale

    @property
    def document_height(self) -> float:
        return self.sheet_height_mm * self.scale

    @property
    def view_areas(self) -> dict[str, ViewArea]:
        """Reserved area of every view in drawing units."""
        return {name: view.area for name, view in self.views.items()}

    def view(self, name: str) -> ViewPlacement:
        return self.views[name]

    def to_document(self, view: str, x: float, y: float) -> tuple[float, float]:
        return self.views[view].to_document(x, y)

    def to_model(self, view: str, doc_x: float, doc_y: float) -> tuple[float, float]:
        return self.views[view].to_local(doc_x, doc_y)

    def sheet_to_document(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.scale, y * self.scale)

    def document_to_sheet(self, doc_x: float, doc_y: float) -> tuple[float, float]:
        return (doc_x / self.scale, doc_y / self.scale)

    def overlap_report(self) -> list[tuple[str, str]]:
        """
        Get every pair of views whose reserved areas overlap.

        Returns:
            List of (view1_name, view2_name) tuples; empty for a valid plan
        """
        overlaps = []
        names = list(self.views)
        for i, name1 in enumerate(names):
            for name2 in names[i + 1:]:
                if self.views[name1].sheet_area.overlaps(self.views[name2].sheet_area):
                    overlaps.append((name1, name2))
        return overlaps


def floor_significant(value: float, digits: int = 6) -> float:
    """Round a positive value down to ``digits`` significant figures; never exceeds ``value``."""
    factor = 10.0 ** (digits - 1 - math.floor(math.log10(value)))
    steps = math.floor(value * factor)
    if steps / factor > value:
        steps -= 1
    return steps / factor


def wrap_notes(notes: str, width: float,
               font_size: float = NOTES_FONT_SIZE) -> list[str]:
    """Greedy word wrap of the drawing notes to fit ``width`` mm."""
    words = notes.split()
    if not words:
        return []
    max_chars = max(1, int(width // (font_size * NOTES_CHAR_WIDTH_RATIO)))
    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_chars and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def boundary_padding(configuration: "BuildingConfiguration") -> tuple[float, float, float]:
    """Extra room (left, right, rear) around the plan for boundary lines."""
    boundary = configuration.boundary
    left = boundary.offset("left")
    right = boundary.offset("right")
    rear = boundary.offset("rear")
    return (
        left + BOUNDARY_SIDE_PAD if left else 0,
        right + BOUNDARY_SIDE_PAD if right else 0,
        rear + BOUNDARY_REAR_PAD if rear else 0,
    )


class LayoutPlanner:
    """
    Computes the composite layout for a configuration.

    Views are arranged as:

        FRONT   LEFT   RIGHT
        PLAN    TITLE BLOCK
                NOTES

    The plan sits directly under the front elevation with the same local
    origin x, and all three elevations share one ground line.
    """

    def __init__(
        self,
        configuration: "BuildingConfiguration",
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
        max_scale: float = MAX_SCALE,
    ):
        """
        Initialize the layout planner.

        Args:
            configuration: Building to lay out
            canvas_width: Width of the bounded canvas (drawing units)
            canvas_height: Height of the bounded canvas (drawing units)
            max_scale: Upper limit on drawing units per mm
        """
        if canvas_width <= 0 or canvas_height <= 0 or max_scale <= 0:
            raise ValueError("Canvas size and maximum scale must be positive")
        self.configuration = configuration
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.max_scale = max_scale

    # -------------------------------------------------------------------------
    # Boundary padding
    # -------------------------------------------------------------------------

    def boundary_padding(self) -> tuple[float, float, float]:
        """Extra room (left, right, rear) around the plan for boundary lines."""
        return boundary_padding(self.configuration)

    # -------------------------------------------------------------------------
    # View extents (local mm)
    # -------------------------------------------------------------------------

    def elevation_extent(self, side: str) -> ViewArea:
        """Reserved area of an elevation in its local mm."""
        cfg = self.configuration
        deck = DECKING_HEIGHT if cfg.has_decking else 0
        top = -LABEL_SPACE
        bottom = cfg.height + deck + DIM_SPACE
        front_ext = ELEVATION_FRONT_EXTENSION + (CANOPY_DEPTH if cfg.has_canopy else 0)

        if side == "front":
            return ViewArea.from_bounds(-DIM_SPACE, top, cfg.width + ELEVATION_FRONT_EXTENSION, bottom)
        if side == "left":
            # Rear at x=0, front (and canopy) to the right
            return ViewArea.from_bounds(-ELEVATION_REAR_EXTENSION, top, cfg.depth + front_ext, bottom)
        if side == "right":
            # Front (and canopy) at x<=0, rear at x=depth
            return ViewArea.from_bounds(-front_ext, top, cfg.depth + ELEVATION_REAR_EXTENSION, bottom)
        raise ValueError(f"Unknown elevation '{side}'")

    def plan_extent(self) -> ViewArea:
        """Reserved area of the plan view in its local mm."""
        cfg = self.configuration
        pad_left, pad_right, pad_rear = self.boundary_padding()
        canopy = CANOPY_DEPTH if cfg.has_canopy else 0

        left = -(pad_left + PLAN_SIDE_SPACE)
        right = cfg.width + pad_right + PLAN_RIGHT_SPACE
        top = -(pad_rear + LABEL_SPACE)
        bottom = cfg.depth + canopy + PLAN_FOOTER_SPACE

        for unit in cfg.ac_units:
            w, h = unit.footprint
            left = min(left, unit.x - AC_CLEARANCE)
            top = min(top, unit.y - AC_CLEARANCE)
            right = max(right, unit.x + w + AC_CLEARANCE)
            bottom = max(bottom, unit.y + h + AC_CLEARANCE)

        return ViewArea.from_bounds(left, top, right, bottom)

    def title_block_size(self) -> tuple[float, float]:
        """(width, height) of the title block; height follows the plan depth."""
        cfg = self.configuration
        canopy = CANOPY_DEPTH + 300 if cfg.has_canopy else 0
        width = max(TITLE_BLOCK_MIN_WIDTH, cfg.depth * 2 + 1000)
        height = max(TITLE_BLOCK_MIN_HEIGHT, cfg.depth + canopy + 600)
        return (width, height)

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def plan(self) -> LayoutPlan:
        """Compute the layout plan."""
        front = self.elevation_extent("front")
        left = self.elevation_extent("left")
        right = self.elevation_extent("right")
        plan = self.plan_extent()

        title_w, title_h = self.title_block_size()
        notes = wrap_notes(self.configuration.customer.notes, title_w)
        notes_h = NOTES_GAP + (len(notes) + 1) * NOTES_LINE_HEIGHT if notes else 0
        title = ViewArea(x=0, y=0, width=title_w, height=title_h + notes_h)

        # Front and plan share their local origin x
        origin_x = SHEET_MARGIN + max(-front.left, -plan.left)
        row_y = SHEET_MARGIN - min(front.top, left.top, right.top)

        left_x = origin_x + front.right + VIEW_GAP - left.left
        right_x = left_x + left.right + VIEW_GAP - right.left
        row_bottom = row_y + max(front.bottom, left.bottom, right.bottom)

        plan_y = row_bottom + VIEW_GAP - plan.top
        title_x = origin_x + plan.right + VIEW_GAP
        title_y = plan_y

        sheet_width = max(
            right_x + right.right,
            title_x + title.right,
            origin_x + plan.right,
        ) + SHEET_MARGIN
        sheet_height = max(
            row_bottom,
            plan_y + plan.bottom,
            title_y + title.bottom,
        ) + SHEET_MARGIN

        fit = min(self.canvas_width / sheet_width, self.canvas_height / sheet_height)
        # Six significant figures, the precision written into the document
        scale = min(floor_significant(fit), self.max_scale)

        origins = {
            "front": (origin_x, row_y, front),
            "left": (left_x, row_y, left),
            "right": (right_x, row_y, right),
            "plan": (origin_x, plan_y, plan),
            "title": (title_x, title_y, title),
        }
        views = {
            name: ViewPlacement(name=name, origin_x=ox, origin_y=oy, extent=extent, scale=scale)
            for name, (ox, oy, extent) in origins.items()
        }

        return LayoutPlan(
            scale=scale,
            sheet_width_mm=sheet_width,
            sheet_height_mm=sheet_height,
            views=views,
            title_width=title_w,
            title_height=title_h,
            notes_lines=tuple(notes),
        )
