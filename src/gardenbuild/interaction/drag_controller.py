"""
Drag controller.

Turns pointer events into snapped, clamped edits of the building
configuration. One gesture at a time moves through:

    idle --pointer_down on a marker--> pending
    pending --moved past threshold--> active   (live updates begin)
    pending/active --pointer_up or pointer_leave--> idle

Movement is always measured from the pointer-down position, so repeated
moves within one gesture never accumulate snapping error.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..configuration.schema import (
    ACPlacement,
    PlacedComponent,
    Wall,
    clamp_to_grid,
    default_sill_height,
)
from ..constants import AC_EXTERNAL_MARGIN, WALL_THICKNESS

if TYPE_CHECKING:
    from ..configuration import BuildingConfiguration, Catalog
    from .coordinate_mapper import CoordinateMapper
    from .markers import DragMarker

DEFAULT_THRESHOLD = 3.0


class GestureState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    ACTIVE = "active"


@dataclass
class DragSession:
    """
    State of the gesture in progress.

    Attributes:
        state: Gesture state
        marker: Element grabbed at pointer-down
        start_x: Pointer x (px) at pointer-down
        start_y: Pointer y (px) at pointer-down
        start_values: Entity values captured at pointer-down
        mm_per_pixel: Millimetres per pixel along x and y, captured at pointer-down
    """

    state: GestureState = GestureState.IDLE
    marker: "DragMarker | None" = None
    start_x: float = 0.0
    start_y: float = 0.0
    start_values: dict[str, float] = field(default_factory=dict)
    mm_per_pixel: tuple[float, float] = (1.0, 1.0)

    def reset(self) -> None:
        self.state = GestureState.IDLE
        self.marker = None
        self.start_x = 0.0
        self.start_y = 0.0
        self.start_values = {}
        self.mm_per_pixel = (1.0, 1.0)


class DragController:
    """
    Applies drag gestures to a building configuration.

    The controller is the only writer of the configuration while a gesture
    is active. Pointer methods never raise; they return True when the event
    was consumed (pointer_down, pointer_up) or changed the configuration
    (pointer_move).
    """

    def __init__(
        self,
        configuration: "BuildingConfiguration",
        catalog: "Catalog",
        mapper: "CoordinateMapper",
        session: DragSession | None = None,
        threshold: float = DEFAULT_THRESHOLD,
    ):
        self.configuration = configuration
        self.catalog = catalog
        self.mapper = mapper
        self.session = session if session is not None else DragSession()
        self.threshold = threshold

    @property
    def state(self) -> GestureState:
        return self.session.state

    # -------------------------------------------------------------------------
    # Entity access
    # -------------------------------------------------------------------------

    def _capture(self, marker: "DragMarker") -> dict[str, float] | None:
        """Current stored values of the entity behind ``marker``."""
        cfg = self.configuration
        kind = marker.kind
        if kind in ("component", "plan-component"):
            comp = cfg.component(marker.entity_id)
            entry = self.catalog.component(comp.type) if comp else None
            if entry is None:
                return None
            if kind == "plan-component":
                return {"plan_position": comp.resolved_plan_position}
            values = {"position": comp.position}
            if entry.movable_vertically:
                sill = comp.vertical_offset
                values["vertical_offset"] = (
                    sill if sill is not None else default_sill_height(entry, cfg.height)
                )
            return values
        if kind == "feature":
            feat = cfg.feature(marker.entity_id)
            if feat is None or self.catalog.feature(feat.type) is None:
                return None
            return {"x": feat.x}
        if kind == "ac-unit":
            unit = cfg.ac_unit(marker.entity_id)
            return {"x": unit.x, "y": unit.y} if unit else None
        if kind == "label":
            label = cfg.label(marker.entity_id)
            return {"x": label.x, "y": label.y} if label else None
        if kind == "label-arrow":
            label = cfg.label(marker.entity_id)
            if label is None or not label.has_arrow:
                return None
            return {"x": label.arrow_x, "y": label.arrow_y}
        return None

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def _move_component(self, entity_id: str, start: dict, dx: float, dy: float) -> bool:
        cfg = self.configuration
        comp = cfg.component(entity_id)
        entry = self.catalog.component(comp.type)
        changed = self._set(comp, "position",
                            clamp_to_grid(start["position"] + dx, 0, cfg.position_limit(comp, entry)))
        if "vertical_offset" in start:
            # Screen y grows downwards, sill height grows upwards
            sill = clamp_to_grid(start["vertical_offset"] - dy, 0, cfg.sill_limit(entry))
            changed = self._set(comp, "vertical_offset", sill) or changed
        return changed

    def _move_plan_component(self, entity_id: str, start: dict, dx: float, dy: float) -> bool:
        cfg = self.configuration
        comp = cfg.component(entity_id)
        entry = self.catalog.component(comp.type)
        if comp.wall.runs_along_width:
            delta = dx
        elif comp.wall == Wall.LEFT:
            delta = dy
        else:
            # Right wall positions run from the front, against plan y
            delta = -dy
        value = clamp_to_grid(start["plan_position"] + delta, 0, cfg.position_limit(comp, entry))
        return self._set(comp, "plan_position", value)

    def _move_feature(self, entity_id: str, start: dict, dx: float, dy: float) -> bool:
        cfg = self.configuration
        feat = cfg.feature(entity_id)
        spec = self.catalog.feature(feat.type)
        return self._set(feat, "x", clamp_to_grid(start["x"] + dx, 0, cfg.width - spec.width))

    def _move_ac_unit(self, entity_id: str, start: dict, dx: float, dy: float) -> bool:
        cfg = self.configuration
        unit = cfg.ac_unit(entity_id)
        w, h = unit.footprint
        if unit.placement == ACPlacement.INTERNAL:
            wt = WALL_THICKNESS
            x_range = (wt, cfg.width - wt - w)
            y_range = (wt, cfg.depth - wt - h)
        else:
            m = AC_EXTERNAL_MARGIN
            x_range = (-m, cfg.width + m - w)
            y_range = (-m, cfg.depth + m - h)
        changed = self._set(unit, "x", clamp_to_grid(start["x"] + dx, *x_range))
        return self._set(unit, "y", clamp_to_grid(start["y"] + dy, *y_range)) or changed

    def _move_label(self, entity_id: str, start: dict, dx: float, dy: float,
                    attrs: tuple[str, str]) -> bool:
        label = self.configuration.label(entity_id)
        layout = self.mapper.layout
        x = clamp_to_grid(start["x"] + dx, 0, layout.sheet_width_mm)
        y = clamp_to_grid(start["y"] + dy, 0, layout.sheet_height_mm)
        changed = self._set(label, attrs[0], x)
        return self._set(label, attrs[1], y) or changed

    @staticmethod
    def _set(entity, attr: str, value) -> bool:
        if getattr(entity, attr) == value:
            return False
        setattr(entity, attr, value)
        return True

    def _apply(self, dx_px: float, dy_px: float) -> bool:
        session = self.session
        marker = session.marker
        ratio_x, ratio_y = session.mm_per_pixel
        dx = dx_px * ratio_x
        dy = dy_px * ratio_y
        start = session.start_values
        if marker.kind == "component":
            return self._move_component(marker.entity_id, start, dx, dy)
        if marker.kind == "plan-component":
            return self._move_plan_component(marker.entity_id, start, dx, dy)
        if marker.kind == "feature":
            return self._move_feature(marker.entity_id, start, dx, dy)
        if marker.kind == "ac-unit":
            return self._move_ac_unit(marker.entity_id, start, dx, dy)
        if marker.kind == "label":
            return self._move_label(marker.entity_id, start, dx, dy, ("x", "y"))
        return self._move_label(marker.entity_id, start, dx, dy, ("arrow_x", "arrow_y"))

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def pointer_down(self, screen_x: float, screen_y: float) -> bool:
        """Start a gesture on the element under the pointer."""
        session = self.session
        if session.state != GestureState.IDLE:
            return False
        marker = self.mapper.marker_at(screen_x, screen_y)
        if marker is None:
            return False
        values = self._capture(marker)
        if values is None:
            return False

        session.state = GestureState.PENDING
        session.marker = marker
        session.start_x = screen_x
        session.start_y = screen_y
        session.start_values = values
        session.mm_per_pixel = self.mapper.mm_per_pixel()
        return True

    def pointer_move(self, screen_x: float, screen_y: float) -> bool:
        """Update the grabbed entity; returns True when the configuration changed."""
        session = self.session
        if session.state == GestureState.IDLE:
            return False
        dx = screen_x - session.start_x
        dy = screen_y - session.start_y
        if session.state == GestureState.PENDING:
            if math.hypot(dx, dy) < self.threshold:
                return False
            session.state = GestureState.ACTIVE
        if self._capture(session.marker) is None:
            # Entity removed mid-gesture
            session.reset()
            return False
        return self._apply(dx, dy)

    def pointer_up(self) -> bool:
        """End the gesture; returns True if one was in progress."""
        in_progress = self.session.state != GestureState.IDLE
        self.session.reset()
        return in_progress

    def pointer_leave(self) -> bool:
        """Leaving the tracking surface ends the gesture like a release."""
        return self.pointer_up()

    # -------------------------------------------------------------------------
    # Palette drops
    # -------------------------------------------------------------------------

    def drop_component(self, catalog_key: str, screen_x: float,
                       screen_y: float) -> PlacedComponent | None:
        """
        Place a new catalog component where it was dropped.

        The drop point becomes the component's left edge on the wall of the
        elevation under the pointer, snapped and clamped so the component
        fits the wall. Returns the new component, or None when the drop is
        ignored.
        """
        if self.session.state != GestureState.IDLE:
            return None
        entry = self.catalog.component(catalog_key)
        if entry is None:
            return None
        view = self.mapper.view_at(screen_x, screen_y)
        if view is None:
            return None

        cfg = self.configuration
        wall = Wall(view)
        local_x, _ = self.mapper.screen_to_model(view, screen_x, screen_y)
        position = clamp_to_grid(local_x, 0, cfg.wall_length(wall) - entry.width)
        return cfg.add_component(PlacedComponent(type=catalog_key, wall=wall, position=position))
