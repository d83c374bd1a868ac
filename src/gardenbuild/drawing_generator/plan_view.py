"""
Plan renderer.

Draws the top-down footprint in local mm: x runs along the width (left to
right as seen from the front), y runs from the rear wall (y=0) to the front
wall (y=depth). The canopy projection, when present, occupies
``[depth, depth + 400]``.

Side-wall openings use the depth axis so they line up with their
elevations: the left elevation measures from the rear, the right elevation
from the front.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ..configuration.schema import (
    ACPlacement,
    Corner,
    CornerPartition,
    CornerTreatment,
    DoorDirection,
    DoorWall,
    HingeEnd,
    StraightPartition,
    SwingSide,
    Wall,
)
from ..constants import (
    CANOPY_DEPTH,
    PARTITION_DOOR_WIDTH,
    PARTITION_THICKNESS,
    SPOTLIGHT_SPACING,
    WALL_THICKNESS,
)
from ..exceptions import DrawingWarning
from .constants import (
    ANTHRACITE,
    ANTHRACITE_LIGHT,
    BOUNDARY_FONT_SIZE,
    BOUNDARY_TICK,
    CAPTION_FONT_SIZE,
    DIMENSION_SIDE_OFFSET,
    HIDDEN_COLOR,
    LABEL_COLOR,
    PAPER_COLOR,
    ROOM_LABEL_FONT_SIZE,
    SOFFIT_COLOR,
    VIEW_TITLE_FONT_SIZE,
    VIEW_TITLE_OFFSET,
    VISIBLE_COLOR,
    WALL_FILL,
)
from .dimensions import horizontal_dimension, vertical_dimension
from .elevation import ComponentPlacement
from .layout_engine import boundary_padding
from .svg import circle, drag_marker, fmt, group, line, path, rect, text

if TYPE_CHECKING:
    from ..configuration import ACUnit, BuildingConfiguration, Catalog
    from .layout_engine import LayoutPlan

ROOM_DOOR_WIDTH = 800
SPOTLIGHT_OUTER_RADIUS = 42
SPOTLIGHT_INNER_RADIUS = 24
WIDTH_DIMENSION_CLEARANCE = 80
WIDTH_DIMENSION_OFFSET = 450
CAPTION_OFFSET = 980
BOUNDARY_LABEL_GAP = 60
BOUNDARY_DASH = "60,40"


# =============================================================================
# DOOR SWING
# =============================================================================

# Sweep flag for a hinge at the start of the opening, keyed by
# (wall orientation, swing direction). An end hinge mirrors the arc.
SWEEP_FLAGS = {
    (DoorWall.HORIZONTAL, "down"): 1,
    (DoorWall.HORIZONTAL, "up"): 0,
    (DoorWall.VERTICAL, "right"): 0,
    (DoorWall.VERTICAL, "left"): 1,
}


@dataclass(frozen=True)
class DoorSwing:
    """
    Quarter-circle swing of a hinged door in plan.

    Attributes:
        hinge: Arc centre (hinge point)
        closed: Leaf tip when the door is shut (on the wall line)
        opened: Leaf tip when the door is fully open (perpendicular to the wall)
        radius: Arc radius, equal to the door width
        sweep: SVG arc sweep flag
    """

    hinge: tuple[float, float]
    closed: tuple[float, float]
    opened: tuple[float, float]
    radius: float
    sweep: int

    @property
    def sweep_angle(self) -> float:
        """Angle between the closed and open leaf, in degrees."""
        a = np.subtract(self.closed, self.hinge)
        b = np.subtract(self.opened, self.hinge)
        cos = float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))
        return math.degrees(math.acos(max(-1.0, min(1.0, cos))))

    @property
    def arc_path(self) -> str:
        r = fmt(self.radius)
        return (f"M {fmt(self.closed[0])} {fmt(self.closed[1])} "
                f"A {r} {r} 0 0 {self.sweep} {fmt(self.opened[0])} {fmt(self.opened[1])}")

    def svg(self, dashed: bool = False) -> str:
        dash = {"stroke_dasharray": "10,6"} if dashed else {}
        return "\n".join([
            line(*self.hinge, *self.opened, stroke="#222222", stroke_width=3, class_="door-leaf"),
            path(self.arc_path, stroke="#222222", stroke_width=2, class_="door-swing", **dash),
        ])


def door_swing(
    x: float,
    y: float,
    width: float,
    wall: DoorWall | str,
    swing: str,
    hinge_at_end: bool = False,
) -> DoorSwing:
    """
    Build the swing of a door whose opening starts at (x, y).

    Args:
        x, y: Start of the opening on the wall face the door swings towards
        width: Door width; also the arc radius
        wall: Orientation of the wall the door sits in
        swing: "down" or "up" for a horizontal wall, "right" or "left" for
            a vertical wall
        hinge_at_end: Hinge at the far end of the opening instead of the start

    Returns:
        DoorSwing with a 90 degree arc centred on the hinge
    """
    wall = DoorWall(wall)
    if (wall, swing) not in SWEEP_FLAGS:
        raise ValueError(f"Door in a {wall.value} wall cannot swing {swing}")
    width = max(width, 1.0)

    if wall == DoorWall.HORIZONTAL:
        hinge = (x + width, y) if hinge_at_end else (x, y)
        closed = (x, y) if hinge_at_end else (x + width, y)
        step = width if swing == "down" else -width
        opened = (hinge[0], y + step)
    else:
        hinge = (x, y + width) if hinge_at_end else (x, y)
        closed = (x, y) if hinge_at_end else (x, y + width)
        step = width if swing == "right" else -width
        opened = (x + step, hinge[1])

    sweep = SWEEP_FLAGS[(wall, swing)] ^ int(hinge_at_end)
    return DoorSwing(hinge=hinge, closed=closed, opened=opened, radius=width, sweep=sweep)


def _door_in_wall(wall_x: float, wall_y: float, wall_w: float, wall_h: float,
                  orientation: DoorWall, offset: float, door_w: float, swing: str,
                  hinge_at_end: bool = False, dashed: bool = False) -> list[str]:
    """Clear an opening in a partition rectangle and draw its swing."""
    if orientation == DoorWall.HORIZONTAL:
        gap = rect(wall_x + offset, wall_y, door_w, wall_h, fill=PAPER_COLOR)
        face_y = wall_y + wall_h if swing == "down" else wall_y
        swing_geom = door_swing(wall_x + offset, face_y, door_w, orientation, swing, hinge_at_end)
    else:
        gap = rect(wall_x, wall_y + offset, wall_w, door_w, fill=PAPER_COLOR)
        face_x = wall_x + wall_w if swing == "right" else wall_x
        swing_geom = door_swing(face_x, wall_y + offset, door_w, orientation, swing, hinge_at_end)
    return [gap, swing_geom.svg(dashed=dashed)]


# =============================================================================
# SPOTLIGHTS
# =============================================================================

def spotlight_count(width: float) -> int:
    """One soffit spotlight per whole metre of building width."""
    return int(width // SPOTLIGHT_SPACING)


def spotlight_positions(width: float) -> list[float]:
    """Evenly spaced spotlight x positions across the canopy."""
    n = spotlight_count(width)
    spacing = width / (n + 1)
    return [spacing * (i + 1) for i in range(n)]


# =============================================================================
# RENDERER
# =============================================================================

class PlanRenderer:
    """
    Renders the plan view as an SVG group.

    Attributes:
        placements: Openings and AC units drawn by the last ``render()``
    """

    def __init__(
        self,
        configuration: "BuildingConfiguration",
        catalog: "Catalog",
        layout: "LayoutPlan",
    ):
        self.configuration = configuration
        self.catalog = catalog
        self.layout = layout
        self.view = layout.view("plan")
        self.placements: list[ComponentPlacement] = []

    def _marker(self, kind: str, entity_id: str, x: float, y: float, w: float, h: float) -> str:
        bbox = (*self.view.to_document(x, y), *self.view.to_document(x + w, y + h))
        return drag_marker(kind, entity_id, "plan", bbox)

    # -------------------------------------------------------------------------
    # Footprint
    # -------------------------------------------------------------------------

    def _footprint(self) -> list[str]:
        cfg = self.configuration
        wt = WALL_THICKNESS
        return [
            rect(0, 0, cfg.width, cfg.depth, fill=WALL_FILL, stroke=VISIBLE_COLOR,
                 stroke_width=4, class_="footprint-outer"),
            rect(wt, wt, cfg.width - 2 * wt, cfg.depth - 2 * wt, fill=PAPER_COLOR,
                 stroke=VISIBLE_COLOR, stroke_width=2, class_="footprint-inner"),
        ]

    def opening_rect(self, wall: Wall, plan_position: float,
                     width: float) -> tuple[float, float, float, float]:
        """(x, y, w, h) of an opening cut through ``wall``."""
        cfg = self.configuration
        wt = WALL_THICKNESS
        if wall == Wall.FRONT:
            return (plan_position, cfg.depth - wt, width, wt)
        if wall == Wall.REAR:
            return (plan_position, 0.0, width, wt)
        if wall == Wall.LEFT:
            return (0.0, plan_position, wt, width)
        return (cfg.width - wt, cfg.depth - plan_position - width, wt, width)

    def _openings(self) -> list[str]:
        cfg = self.configuration
        parts = []
        for comp in cfg.components:
            entry = self.catalog.component(comp.type)
            if entry is None:
                warnings.warn(
                    f"Component '{comp.id}' has unknown type '{comp.type}'; skipped in plan view.",
                    DrawingWarning,
                    stacklevel=2,
                )
                continue
            width = comp.effective_width(entry)
            x, y, w, h = self.opening_rect(comp.wall, comp.resolved_plan_position, width)
            weight = 2.5 if entry.category.has_mullion else 1.5

            parts.append(f'<g class="plan-component opening-{entry.category.value}"'
                         f'{self._marker("plan-component", comp.id, x, y, w, h)}>')
            parts.append(rect(x, y, w, h, fill=PAPER_COLOR))
            if comp.wall.runs_along_width:
                for frac in (0.3, 0.7):
                    parts.append(line(x, y + h * frac, x + w, y + h * frac,
                                      stroke=ANTHRACITE, stroke_width=weight))
                if entry.category.has_mullion:
                    parts.append(line(x + w / 2, y + h * 0.15, x + w / 2, y + h * 0.85,
                                      stroke=ANTHRACITE_LIGHT, stroke_width=1.5, class_="mullion"))
            else:
                for frac in (0.3, 0.7):
                    parts.append(line(x + w * frac, y, x + w * frac, y + h,
                                      stroke=ANTHRACITE, stroke_width=weight))
                if entry.category.has_mullion:
                    parts.append(line(x + w * 0.15, y + h / 2, x + w * 0.85, y + h / 2,
                                      stroke=ANTHRACITE_LIGHT, stroke_width=1.5, class_="mullion"))
            parts.append("</g>")
            self.placements.append(ComponentPlacement(
                id=comp.id, kind="plan-component", x=x, y=y, width=w, height=h,
                category=entry.category.value,
            ))
        return parts

    # -------------------------------------------------------------------------
    # Rooms and partitions
    # -------------------------------------------------------------------------

    def _rooms(self) -> list[str]:
        cfg = self.configuration
        wt = WALL_THICKNESS
        parts = []
        acc = 0.0
        for index, room in enumerate(cfg.rooms):
            start = acc
            acc += room.width
            label_x = start + room.width / 2 + room.label_offset_x
            label_y = cfg.depth / 2 + room.label_offset_y
            parts.append(text(label_x, label_y, room.label, ROOM_LABEL_FONT_SIZE,
                              fill="#444444", bold=True, class_="room-label"))
            if index == len(cfg.rooms) - 1:
                break
            divider_x = min(max(acc, wt), cfg.width - 2 * wt)
            inner = cfg.depth - 2 * wt
            parts.append(rect(divider_x, wt, wt, inner, fill=WALL_FILL, stroke="#555555",
                              stroke_width=2, class_="room-divider"))
            door_w = min(ROOM_DOOR_WIDTH, inner)
            offset = (inner - door_w) * 0.45
            parts.extend(_door_in_wall(divider_x, wt, wt, inner, DoorWall.VERTICAL,
                                       offset, door_w, "right", dashed=True))
            acc += wt
        return parts

    def _straight_partition(self, partition: StraightPartition) -> list[str]:
        cfg = self.configuration
        wt = WALL_THICKNESS
        t = PARTITION_THICKNESS
        wall_x = partition.position - t / 2
        wall_y = wt
        wall_h = cfg.depth - 2 * wt
        parts = [rect(wall_x, wall_y, t, wall_h, fill=WALL_FILL, stroke="#444444",
                      stroke_width=2, class_="partition partition-straight")]

        if partition.has_door:
            door_w = min(PARTITION_DOOR_WIDTH, wall_h)
            offset = (wall_h - door_w) * partition.door_position
            swing = "right" if partition.door_swing == SwingSide.RIGHT else "left"
            parts.extend(_door_in_wall(wall_x, wall_y, t, wall_h, DoorWall.VERTICAL, offset,
                                       door_w, swing, partition.door_hinge == HingeEnd.END))

        for label, x in ((partition.left_label, (wt + wall_x) / 2),
                         (partition.right_label, (wall_x + t + cfg.width - wt) / 2)):
            if label:
                parts.append(text(x, cfg.depth / 2, label, ROOM_LABEL_FONT_SIZE,
                                  fill="#444444", bold=True, class_="room-label"))
        return parts

    def _corner_partition(self, partition: CornerPartition) -> list[str]:
        """
        L-shaped walls enclosing a room in one corner.

        The horizontal wall closes the room towards the building centre
        in depth, the vertical wall closes it in width.
        """
        cfg = self.configuration
        wt = WALL_THICKNESS
        t = PARTITION_THICKNESS
        room_w = min(partition.width, cfg.width - 2 * wt - t)
        room_d = min(partition.depth, cfg.depth - 2 * wt - t)
        at_rear = partition.corner in (Corner.REAR_LEFT, Corner.REAR_RIGHT)
        at_left = partition.corner in (Corner.REAR_LEFT, Corner.FRONT_LEFT)

        room_x = wt if at_left else cfg.width - wt - room_w
        room_y = wt if at_rear else cfg.depth - wt - room_d

        # Horizontal wall spans the room width plus the corner where the walls meet
        h_y = room_y + room_d if at_rear else room_y - t
        h_x = room_x if at_left else room_x - t
        h_len = room_w + t
        # Vertical wall spans the room depth
        v_x = room_x + room_w if at_left else room_x - t
        v_y = room_y
        v_len = room_d

        parts = [
            rect(h_x, h_y, h_len, t, fill=WALL_FILL, stroke="#444444", stroke_width=2,
                 class_="partition partition-corner"),
            rect(v_x, v_y, t, v_len, fill=WALL_FILL, stroke="#444444", stroke_width=2,
                 class_="partition partition-corner"),
        ]

        inward = partition.door_direction == DoorDirection.INWARD
        if partition.door_wall == DoorWall.HORIZONTAL:
            run = room_w
            door_w = min(PARTITION_DOOR_WIDTH, run)
            into_room = "up" if at_rear else "down"
            away = "down" if at_rear else "up"
            offset = (run - door_w) * partition.door_position + (0 if at_left else t)
            parts.extend(_door_in_wall(h_x, h_y, h_len, t, DoorWall.HORIZONTAL, offset, door_w,
                                       into_room if inward else away))
        else:
            run = room_d
            door_w = min(PARTITION_DOOR_WIDTH, run)
            into_room = "left" if at_left else "right"
            away = "right" if at_left else "left"
            offset = (run - door_w) * partition.door_position
            parts.extend(_door_in_wall(v_x, v_y, t, v_len, DoorWall.VERTICAL, offset, door_w,
                                       into_room if inward else away))

        parts.append(text(room_x + room_w / 2, room_y + room_d / 2, partition.label,
                          ROOM_LABEL_FONT_SIZE * 0.8, fill="#444444", bold=True, class_="room-label"))
        return parts

    def _partition(self) -> list[str]:
        partition = self.configuration.partition
        if isinstance(partition, StraightPartition):
            return self._straight_partition(partition)
        if isinstance(partition, CornerPartition):
            return self._corner_partition(partition)
        return []

    # -------------------------------------------------------------------------
    # Canopy
    # -------------------------------------------------------------------------

    def _canopy(self) -> list[str]:
        cfg = self.configuration
        if not cfg.has_canopy:
            return []
        wt = WALL_THICKNESS
        d = cfg.depth
        parts = [
            '<g class="canopy">',
            rect(0, d, cfg.width, CANOPY_DEPTH, fill=SOFFIT_COLOR, stroke=HIDDEN_COLOR,
                 stroke_width=3, stroke_dasharray="40,25", class_="canopy-outline"),
        ]
        if cfg.corner_left == CornerTreatment.CLOSED:
            parts.append(rect(0, d, wt, CANOPY_DEPTH, fill=WALL_FILL, stroke=VISIBLE_COLOR,
                              stroke_width=2, class_="canopy-screen canopy-screen-left"))
        if cfg.corner_right == CornerTreatment.CLOSED:
            parts.append(rect(cfg.width - wt, d, wt, CANOPY_DEPTH, fill=WALL_FILL,
                              stroke=VISIBLE_COLOR, stroke_width=2,
                              class_="canopy-screen canopy-screen-right"))

        cy = d + CANOPY_DEPTH / 2
        for x in spotlight_positions(cfg.width):
            parts.append('<g class="spotlight">')
            parts.append(circle(x, cy, SPOTLIGHT_OUTER_RADIUS, fill="#FFFFFF", stroke="#666666",
                                stroke_width=2))
            parts.append(circle(x, cy, SPOTLIGHT_INNER_RADIUS, fill="#FFF3D4"))
            parts.append("</g>")
        parts.append("</g>")
        return parts

    # -------------------------------------------------------------------------
    # Boundaries
    # -------------------------------------------------------------------------

    def _boundaries(self) -> list[str]:
        """
        Dashed site boundary lines with distance labels.

        Side lines start at the rear boundary when one is stated, so the
        three lines form one connected outline.
        """
        cfg = self.configuration
        left = cfg.boundary.offset("left")
        right = cfg.boundary.offset("right")
        rear = cfg.boundary.offset("rear")
        if not (left or right or rear):
            return []

        canopy = CANOPY_DEPTH if cfg.has_canopy else 0
        start_y = -rear if rear else 0.0
        end_y = cfg.depth + canopy
        style = {"stroke": LABEL_COLOR, "stroke_width": 3, "stroke_dasharray": BOUNDARY_DASH}
        tick = BOUNDARY_TICK / 2
        parts = ['<g class="boundaries">']
        caption_at: tuple[float, float, str] | None = None

        if rear:
            x0 = -left if left else 0.0
            x1 = cfg.width + right if right else cfg.width
            parts.append('<g class="boundary boundary-rear">')
            parts.append(line(x0, -rear, x1, -rear, **style))
            parts.append(line(cfg.width / 2, -rear - tick, cfg.width / 2, -rear + tick,
                              stroke=LABEL_COLOR, stroke_width=3))
            parts.append(line(cfg.width / 2, -rear, cfg.width / 2, 0, stroke=LABEL_COLOR,
                              stroke_width=1.5, class_="boundary-offset"))
            parts.append(text(cfg.width / 2, -rear - BOUNDARY_LABEL_GAP, f"{fmt(rear)}mm",
                              BOUNDARY_FONT_SIZE, fill=LABEL_COLOR, class_="boundary-label"))
            parts.append("</g>")
            caption_at = (x0 + BOUNDARY_LABEL_GAP, -rear - BOUNDARY_LABEL_GAP, "start")

        for side, offset, edge_x in (("left", left, 0.0), ("right", right, cfg.width)):
            if not offset:
                continue
            bx = -offset if side == "left" else cfg.width + offset
            mid_y = (start_y + end_y) / 2
            label_x = bx - BOUNDARY_LABEL_GAP if side == "left" else bx + BOUNDARY_LABEL_GAP
            parts.append(f'<g class="boundary boundary-{side}">')
            parts.append(line(bx, start_y, bx, end_y, **style))
            parts.append(line(bx - tick, mid_y, bx + tick, mid_y, stroke=LABEL_COLOR, stroke_width=3))
            parts.append(line(bx, mid_y, edge_x, mid_y, stroke=LABEL_COLOR, stroke_width=1.5,
                              class_="boundary-offset"))
            parts.append(text(label_x, mid_y, f"{fmt(offset)}mm", BOUNDARY_FONT_SIZE,
                              fill=LABEL_COLOR, class_="boundary-label",
                              transform=f"rotate(-90 {fmt(label_x)} {fmt(mid_y)})"))
            parts.append("</g>")
            if caption_at is None:
                anchor = "start" if side == "left" else "end"
                caption_at = (bx, end_y + BOUNDARY_LABEL_GAP * 2, anchor)

        cx, cy, anchor = caption_at
        parts.append(text(cx, cy, "Approximate boundary", BOUNDARY_FONT_SIZE, anchor=anchor,
                          fill=LABEL_COLOR, italic=True, class_="boundary-caption"))
        parts.append("</g>")
        return parts

    # -------------------------------------------------------------------------
    # AC units
    # -------------------------------------------------------------------------

    def _ac_unit(self, unit: "ACUnit") -> list[str]:
        w, h = unit.footprint
        x, y = unit.x, unit.y
        internal = unit.placement == ACPlacement.INTERNAL
        parts = [
            f'<g class="ac-unit ac-{unit.placement.value}"{self._marker("ac-unit", unit.id, x, y, w, h)}>',
            rect(x, y, w, h, fill="#FFFFFF" if internal else "#E6E6E6", stroke=VISIBLE_COLOR,
                 stroke_width=2, rx=12),
        ]
        if internal:
            long_axis_horizontal = w >= h
            count = 5
            for i in range(1, count + 1):
                if long_axis_horizontal:
                    gy = y + h * i / (count + 1)
                    parts.append(line(x + w * 0.1, gy, x + w * 0.9, gy, stroke="#999999",
                                      stroke_width=1.5, class_="ac-grille"))
                else:
                    gx = x + w * i / (count + 1)
                    parts.append(line(gx, y + h * 0.1, gx, y + h * 0.9, stroke="#999999",
                                      stroke_width=1.5, class_="ac-grille"))
            label = "AC (Int)"
        else:
            r = min(w, h) * 0.35
            parts.append(circle(x + w / 2, y + h / 2, r, stroke="#666666", stroke_width=2,
                                class_="ac-fan"))
            parts.append(circle(x + w / 2, y + h / 2, r * 0.2, fill="#666666"))
            label = "AC (Ext)"
        size = min(90, h * 0.3, w * 0.15)
        parts.append(text(x + w / 2, y - 20, label, size, fill="#333333", class_="ac-label"))
        parts.append("</g>")
        self.placements.append(ComponentPlacement(
            id=unit.id, kind="ac-unit", x=x, y=y, width=w, height=h, category=unit.placement.value,
        ))
        return parts

    def _ac_units(self) -> list[str]:
        parts = []
        for unit in self.configuration.ac_units:
            parts.extend(self._ac_unit(unit))
        return parts

    # -------------------------------------------------------------------------
    # Annotations
    # -------------------------------------------------------------------------

    def caption(self) -> str | None:
        """Text describing the canopy band, or None without a canopy."""
        cfg = self.configuration
        if not cfg.has_canopy:
            return None
        feature = "canopy and decking" if cfg.has_decking else "canopy"
        n = spotlight_count(cfg.width)
        lights = "spotlight" if n == 1 else "spotlights"
        return f"Integrated {feature} feature ({CANOPY_DEPTH}mm) with {n} {lights}"

    def _annotations(self) -> list[str]:
        cfg = self.configuration
        pad_left, _, pad_rear = boundary_padding(cfg)
        canopy = CANOPY_DEPTH if cfg.has_canopy else 0
        parts = [
            text(cfg.width / 2, -(pad_rear + VIEW_TITLE_OFFSET), "Plan View",
                 VIEW_TITLE_FONT_SIZE, bold=True, class_="view-title"),
            horizontal_dimension(0, cfg.width, cfg.depth + canopy + WIDTH_DIMENSION_CLEARANCE,
                                 cfg.width, offset=WIDTH_DIMENSION_OFFSET, label_below=True),
            vertical_dimension(0, cfg.depth, -pad_left, cfg.depth, offset=DIMENSION_SIDE_OFFSET),
        ]
        caption = self.caption()
        if caption:
            parts.append(text(cfg.width / 2, cfg.depth + canopy + CAPTION_OFFSET, caption,
                              CAPTION_FONT_SIZE, fill="#555555", italic=True, class_="plan-caption"))
        return parts

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def render(self) -> str:
        """Render the plan view as a transformed SVG group."""
        self.placements = []
        parts = (
            self._footprint()
            + self._rooms()
            + self._partition()
            + self._openings()
            + self._canopy()
            + self._boundaries()
            + self._ac_units()
            + self._annotations()
        )
        return group(parts, id="view-plan", class_="view plan",
                     transform=self.view.svg_transform())
