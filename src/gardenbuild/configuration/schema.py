"""
Configuration schema for garden building drawings.

This module defines the dataclasses that make up a building configuration.
The configuration can be:
- Created from a tier template (``BuildingConfiguration.template``)
- Loaded from / saved to YAML
- Mutated by the drag controller during interactive editing

Loading validates and fills every default once, so drawing code can assume a
complete, typed structure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

import yaml

from ..constants import ROOF_ZONE, SLOT_WINDOW_TOP_GAP, SNAP_GRID
from ..exceptions import ConfigurationError
from .catalog import ComponentCategory

if TYPE_CHECKING:
    from .catalog import Catalog, CatalogEntry


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Tier(str, Enum):
    CLASSIC = "classic"
    SIGNATURE = "signature"


class Wall(str, Enum):
    FRONT = "front"
    LEFT = "left"
    RIGHT = "right"
    REAR = "rear"

    @property
    def runs_along_width(self) -> bool:
        return self in (Wall.FRONT, Wall.REAR)


class CornerTreatment(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class HandleSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class ACPlacement(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


class SwingSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class HingeEnd(str, Enum):
    START = "start"
    END = "end"


class Corner(str, Enum):
    REAR_LEFT = "rear-left"
    REAR_RIGHT = "rear-right"
    FRONT_LEFT = "front-left"
    FRONT_RIGHT = "front-right"


class DoorWall(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class DoorDirection(str, Enum):
    INWARD = "inward"
    OUTWARD = "outward"


def _enum(enum_cls, value, what: str):
    """Coerce a YAML string to an enum member."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"Invalid {what} '{value}' (expected one of: {allowed})") from None


def _number(value, what: str, positive: bool = False):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{what} must be a number, got {value!r}") from None
    if positive and value <= 0:
        raise ConfigurationError(f"{what} must be greater than zero, got {value}")
    return value


def _optional_number(value, what: str):
    return None if value is None else _number(value, what)


# =============================================================================
# GRID SNAPPING
# =============================================================================

def snap_to_grid(value: float, grid: int = SNAP_GRID) -> int:
    """Round to the nearest grid line (halves round up)."""
    return int(math.floor(value / grid + 0.5)) * grid


def clamp_to_grid(value: float, lower: float, upper: float, grid: int = SNAP_GRID) -> int:
    """
    Snap ``value`` to the grid and clamp it to ``[lower, upper]``.

    The bounds are first tightened to the nearest grid lines inside the
    range, so the result is always on the grid. When the range holds no
    grid line the lower bound wins.
    """
    lo = int(math.ceil(lower / grid)) * grid
    hi = int(math.floor(upper / grid)) * grid
    if hi < lo:
        return lo
    return min(max(snap_to_grid(value, grid), lo), hi)


def default_sill_height(entry: "CatalogEntry", building_height: float) -> float:
    """
    Height above ground of a vertically movable component with no stored offset.

    Slot windows sit just under the fascia; other movable windows are centred
    in the clad wall zone.
    """
    if entry.category == ComponentCategory.SLOT:
        return building_height - ROOF_ZONE - SLOT_WINDOW_TOP_GAP - entry.height
    return (building_height - ROOF_ZONE - entry.height) / 2


# =============================================================================
# ENTITIES
# =============================================================================

@dataclass
class CladdingSelection:
    """Cladding catalog key for each side of the building."""

    front: str = "cedar"
    left: str = "steel-anthracite"
    right: str = "steel-anthracite"
    rear: str = "steel-anthracite"

    def for_wall(self, wall: Wall | str) -> str:
        return getattr(self, _enum(Wall, wall, "wall").value)


@dataclass
class Room:
    """
    A room along the building width, left to right.

    Attributes:
        label: Text drawn at the room centre on the plan
        width: Room width (mm). Rooms are separated by divider walls.
        label_offset_x: Horizontal nudge of the label from the room centre
        label_offset_y: Vertical nudge of the label from the room centre
    """

    label: str = "Room"
    width: float = 0.0
    label_offset_x: float = 0.0
    label_offset_y: float = 0.0

    def __post_init__(self):
        self.width = _number(self.width, "room width")
        self.label_offset_x = _number(self.label_offset_x, "room label offset")
        self.label_offset_y = _number(self.label_offset_y, "room label offset")


@dataclass
class PlacedComponent:
    """
    A door or window placed on one wall.

    Attributes:
        id: Unique identifier
        type: Catalog type key
        wall: Wall the component sits in
        position: Offset along the wall (mm) from the left end as seen in
            that wall's elevation
        vertical_offset: Sill height above ground (mm). Only honoured for
            catalog entries marked ``movable_vertically``.
        custom_width: Overrides the catalog width
        handle_side: Handle side for types that support it
        plan_position: Independent offset used by the plan view. Falls back
            to ``position`` when unset.
    """

    id: str = ""
    type: str = ""
    wall: Wall = Wall.FRONT
    position: float = 0
    vertical_offset: float | None = None
    custom_width: float | None = None
    handle_side: HandleSide = HandleSide.RIGHT
    plan_position: float | None = None

    def __post_init__(self):
        self.wall = _enum(Wall, self.wall, "wall")
        self.handle_side = _enum(HandleSide, self.handle_side, "handle side")
        self.position = _number(self.position, f"position of '{self.id}'")
        self.vertical_offset = _optional_number(self.vertical_offset, "vertical offset")
        self.custom_width = _optional_number(self.custom_width, "custom width")
        if self.custom_width is not None and self.custom_width <= 0:
            raise ConfigurationError(f"custom width of '{self.id}' must be positive")
        self.plan_position = _optional_number(self.plan_position, "plan position")

    def effective_width(self, entry: "CatalogEntry") -> float:
        return self.custom_width if self.custom_width is not None else entry.width

    @property
    def resolved_plan_position(self) -> float:
        return self.plan_position if self.plan_position is not None else self.position


@dataclass
class ExternalFeature:
    """A wall light or socket on the front elevation."""

    id: str = ""
    type: str = "wallLight"
    x: float = 0
    y: float = 1200

    def __post_init__(self):
        self.x = _number(self.x, "feature x")
        self.y = _number(self.y, "feature y")


@dataclass
class ACUnit:
    """
    An air-conditioning unit in plan space.

    ``x``/``y`` locate the unit's top-left corner relative to the plan origin
    (outer rear-left corner of the footprint).
    """

    id: str = ""
    placement: ACPlacement = ACPlacement.INTERNAL
    x: float = 300
    y: float = 300
    width: float = 800
    height: float = 400
    rotated: bool = False

    def __post_init__(self):
        self.placement = _enum(ACPlacement, self.placement, "AC placement")
        self.x = _number(self.x, "AC x")
        self.y = _number(self.y, "AC y")
        self.width = _number(self.width, "AC width", positive=True)
        self.height = _number(self.height, "AC height", positive=True)
        self.rotated = bool(self.rotated)

    @property
    def footprint(self) -> tuple[float, float]:
        """(width, height) as drawn on the plan."""
        if self.rotated:
            return (self.height, self.width)
        return (self.width, self.height)


@dataclass
class StraightPartition:
    """
    A full-depth interior wall.

    Attributes:
        position: Centre line of the wall, mm from the left outer wall
        has_door: Whether the partition has a door
        door_position: Door location as a fraction (0..1) of the free run
        door_swing: Room the door swings into
        door_hinge: Hinge at the rear (start) or front (end) jamb
    """

    kind: ClassVar[str] = "straight"

    position: float | None = None
    has_door: bool = True
    door_position: float = 0.5
    door_swing: SwingSide = SwingSide.RIGHT
    door_hinge: HingeEnd = HingeEnd.START
    left_label: str = ""
    right_label: str = ""

    def __post_init__(self):
        self.position = _optional_number(self.position, "partition position")
        self.door_position = min(max(_number(self.door_position, "door position"), 0.0), 1.0)
        self.door_swing = _enum(SwingSide, self.door_swing, "door swing")
        self.door_hinge = _enum(HingeEnd, self.door_hinge, "door hinge")


@dataclass
class CornerPartition:
    """An L-shaped room walled off in one corner of the building."""

    kind: ClassVar[str] = "corner"

    corner: Corner = Corner.REAR_LEFT
    width: float = 2000
    depth: float = 1500
    door_wall: DoorWall = DoorWall.HORIZONTAL
    door_position: float = 0.5
    door_direction: DoorDirection = DoorDirection.INWARD
    label: str = "Storage"

    def __post_init__(self):
        self.corner = _enum(Corner, self.corner, "partition corner")
        self.width = _number(self.width, "partition width", positive=True)
        self.depth = _number(self.depth, "partition depth", positive=True)
        self.door_wall = _enum(DoorWall, self.door_wall, "partition door wall")
        self.door_position = min(max(_number(self.door_position, "door position"), 0.0), 1.0)
        self.door_direction = _enum(DoorDirection, self.door_direction, "door direction")


@dataclass
class DrawingLabel:
    """
    Free text placed on the sheet, optionally with an arrow.

    Coordinates are sheet millimetres. The arrow tip is independent of the
    text anchor.
    """

    id: str = ""
    text: str = ""
    x: float = 0
    y: float = 0
    arrow_x: float | None = None
    arrow_y: float | None = None
    font_size: float = 140

    def __post_init__(self):
        self.x = _number(self.x, "label x")
        self.y = _number(self.y, "label y")
        self.arrow_x = _optional_number(self.arrow_x, "label arrow x")
        self.arrow_y = _optional_number(self.arrow_y, "label arrow y")
        self.font_size = _number(self.font_size, "label font size", positive=True)

    @property
    def has_arrow(self) -> bool:
        return self.arrow_x is not None and self.arrow_y is not None


@dataclass
class Boundary:
    """Distances (mm) from the building to the site boundary. 0 means absent."""

    left: float = 0
    right: float = 0
    rear: float = 0
    show: bool = False

    def __post_init__(self):
        self.left = max(0, _number(self.left, "left boundary"))
        self.right = max(0, _number(self.right, "right boundary"))
        self.rear = max(0, _number(self.rear, "rear boundary"))

    def offset(self, side: str) -> float:
        """Offset for ``side`` if boundaries are shown, else 0."""
        return getattr(self, side) if self.show else 0


@dataclass
class CustomerInfo:
    """Title block text."""

    name: str = ""
    address: str = ""
    date: str | None = None
    use_case: str = ""
    title: str = "Garden Building"
    drawing_number: str = "GOB-001"
    notes: str = ""


# =============================================================================
# BUILDING CONFIGURATION
# =============================================================================

def _partition_from(value) -> StraightPartition | CornerPartition | None:
    if value is None or isinstance(value, (StraightPartition, CornerPartition)):
        return value
    if not isinstance(value, dict):
        raise ConfigurationError(f"partition must be a mapping, got {value!r}")
    data = dict(value)
    kind = data.pop("kind", "corner" if "corner" in data else "straight")
    if kind == StraightPartition.kind:
        return _build(StraightPartition, data, "partition")
    if kind == CornerPartition.kind:
        return _build(CornerPartition, data, "partition")
    raise ConfigurationError(f"Invalid partition kind '{kind}' (expected straight or corner)")


def _build(cls, data, what: str):
    """Instantiate a dataclass from a YAML mapping, rejecting unknown keys."""
    if isinstance(data, cls):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(f"{what} must be a mapping, got {data!r}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown {what} field(s): {', '.join(sorted(unknown))}")
    return cls(**data)


def _plain(value):
    """Convert dataclasses/enums into YAML-friendly builtins."""
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


@dataclass
class BuildingConfiguration:
    """
    Complete description of one garden building.

    This is the single source of truth for drawings: renderers only read it
    and the drag controller is its only writer during a gesture.

    Attributes:
        width: External width (mm)
        depth: External depth (mm)
        height: Overall height (mm)
        tier: Product line
        cladding: Cladding key per side
        corner_left: Treatment of the front-left corner
        corner_right: Treatment of the front-right corner
        canopy_enabled: Canopy requested (signature tier only)
        decking_enabled: Decking requested (signature tier only)
        rooms: Rooms left to right
        partition: Optional straight or corner partition
        components: Placed doors and windows
        external_features: Wall lights and sockets on the front wall
        ac_units: Air-conditioning units
        labels: Free text sheet labels
        boundary: Site boundary offsets
        customer: Title block information
    """

    width: float = 4000
    depth: float = 3000
    height: float = 2500
    tier: Tier = Tier.CLASSIC
    cladding: CladdingSelection = field(default_factory=CladdingSelection)
    corner_left: CornerTreatment = CornerTreatment.OPEN
    corner_right: CornerTreatment = CornerTreatment.OPEN
    canopy_enabled: bool = True
    decking_enabled: bool = True
    rooms: list[Room] = field(default_factory=list)
    partition: StraightPartition | CornerPartition | None = None
    components: list[PlacedComponent] = field(default_factory=list)
    external_features: list[ExternalFeature] = field(default_factory=list)
    ac_units: list[ACUnit] = field(default_factory=list)
    labels: list[DrawingLabel] = field(default_factory=list)
    boundary: Boundary = field(default_factory=Boundary)
    customer: CustomerInfo = field(default_factory=CustomerInfo)

    def __post_init__(self):
        self.width = _number(self.width, "width", positive=True)
        self.depth = _number(self.depth, "depth", positive=True)
        self.height = _number(self.height, "height", positive=True)
        self.tier = _enum(Tier, self.tier, "tier")
        self.corner_left = _enum(CornerTreatment, self.corner_left, "left corner treatment")
        self.corner_right = _enum(CornerTreatment, self.corner_right, "right corner treatment")
        self.canopy_enabled = bool(self.canopy_enabled)
        self.decking_enabled = bool(self.decking_enabled)

        # Handle nested mappings and lists of mappings from YAML
        self.cladding = _build(CladdingSelection, self.cladding or {}, "cladding")
        self.boundary = _build(Boundary, self.boundary or {}, "boundary")
        self.customer = _build(CustomerInfo, self.customer or {}, "customer")
        self.rooms = [_build(Room, r, "room") for r in self.rooms or []]
        self.components = [_build(PlacedComponent, c, "component") for c in self.components or []]
        self.external_features = [
            _build(ExternalFeature, f, "external feature") for f in self.external_features or []
        ]
        self.ac_units = [_build(ACUnit, a, "AC unit") for a in self.ac_units or []]
        self.labels = [_build(DrawingLabel, lb, "label") for lb in self.labels or []]
        self.partition = _partition_from(self.partition)

        if isinstance(self.partition, StraightPartition) and self.partition.position is None:
            self.partition.position = self.width / 2

        self._assign_ids("component", self.components)
        self._assign_ids("feature", self.external_features)
        self._assign_ids("ac", self.ac_units)
        self._assign_ids("label", self.labels)

    @staticmethod
    def _assign_ids(prefix: str, items: list) -> None:
        seen: set[str] = set()
        for index, item in enumerate(items, start=1):
            if not item.id:
                item.id = f"{prefix}-{index}"
            if item.id in seen:
                raise ConfigurationError(f"Duplicate {prefix} id '{item.id}'")
            seen.add(item.id)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def is_signature(self) -> bool:
        return self.tier == Tier.SIGNATURE

    @property
    def has_canopy(self) -> bool:
        """Canopy projection exists only for signature buildings with the canopy on."""
        return self.is_signature and self.canopy_enabled

    @property
    def has_decking(self) -> bool:
        return self.is_signature and self.decking_enabled

    def wall_length(self, wall: Wall | str) -> float:
        wall = _enum(Wall, wall, "wall")
        return self.width if wall.runs_along_width else self.depth

    def corner(self, side: str) -> CornerTreatment:
        return self.corner_left if side == "left" else self.corner_right

    def component(self, component_id: str) -> PlacedComponent | None:
        return next((c for c in self.components if c.id == component_id), None)

    def feature(self, feature_id: str) -> ExternalFeature | None:
        return next((f for f in self.external_features if f.id == feature_id), None)

    def ac_unit(self, unit_id: str) -> ACUnit | None:
        return next((a for a in self.ac_units if a.id == unit_id), None)

    def label(self, label_id: str) -> DrawingLabel | None:
        return next((lb for lb in self.labels if lb.id == label_id), None)

    def add_component(self, component: PlacedComponent) -> PlacedComponent:
        """
        Append a placed component, giving it the next free ``component-N`` id
        when it has none.
        """
        taken = {c.id for c in self.components}
        if not component.id:
            n = len(self.components) + 1
            while f"component-{n}" in taken:
                n += 1
            component.id = f"component-{n}"
        elif component.id in taken:
            raise ConfigurationError(f"Duplicate component id '{component.id}'")
        self.components.append(component)
        return component

    def remove_component(self, component_id: str) -> bool:
        """Delete a placed component; returns False if no component has that id."""
        before = len(self.components)
        self.components = [c for c in self.components if c.id != component_id]
        return len(self.components) != before

    def components_on(self, wall: Wall | str) -> list[PlacedComponent]:
        wall = _enum(Wall, wall, "wall")
        return [c for c in self.components if c.wall == wall]

    def position_limit(self, component: PlacedComponent, entry: "CatalogEntry") -> float:
        """Largest legal position for ``component`` on its wall."""
        return self.wall_length(component.wall) - component.effective_width(entry)

    def sill_limit(self, entry: "CatalogEntry") -> float:
        """Highest sill for a vertically movable component (head meets the fascia)."""
        return self.height - ROOF_ZONE - entry.height

    # -------------------------------------------------------------------------
    # Normalisation
    # -------------------------------------------------------------------------

    def normalise(self, catalog: "Catalog") -> list[str]:
        """
        Snap and clamp every stored position to its wall.

        Applied once at load boundaries. Components and features whose type
        is unknown to the catalog are left untouched; the drawing skips them.

        Returns:
            Human-readable description of each value that changed
        """
        changes: list[str] = []

        def update(obj, attr: str, value, label: str) -> None:
            old = getattr(obj, attr)
            if old != value:
                changes.append(f"{label}: {attr} {old} -> {value}")
                setattr(obj, attr, value)

        for comp in self.components:
            entry = catalog.component(comp.type)
            if entry is None:
                continue
            limit = self.position_limit(comp, entry)
            update(comp, "position", clamp_to_grid(comp.position, 0, limit), comp.id)
            if comp.plan_position is not None:
                update(comp, "plan_position", clamp_to_grid(comp.plan_position, 0, limit), comp.id)
            if entry.movable_vertically and comp.vertical_offset is not None:
                update(
                    comp, "vertical_offset",
                    clamp_to_grid(comp.vertical_offset, 0, self.sill_limit(entry)), comp.id,
                )

        for feat in self.external_features:
            spec = catalog.feature(feat.type)
            if spec is None:
                continue
            update(feat, "x", clamp_to_grid(feat.x, 0, self.width - spec.width), feat.id)

        return changes

    # -------------------------------------------------------------------------
    # Construction / serialization
    # -------------------------------------------------------------------------

    @classmethod
    def template(cls, tier: Tier | str = Tier.CLASSIC, catalog: "Catalog | None" = None) -> "BuildingConfiguration":
        """Default configuration for a new design of the given tier."""
        tier = _enum(Tier, tier, "tier")
        cladding = CladdingSelection()
        if catalog is not None:
            defaults = catalog.default_cladding_for(tier)
            if defaults:
                cladding = CladdingSelection(**defaults)
        config = cls(tier=tier, cladding=cladding)
        config.rooms = [Room(label="Main Room", width=config.width)]
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BuildingConfiguration":
        if data is None:
            data = {}
        return _build(cls, data, "building")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary suitable for YAML serialization."""
        data = _plain(self)
        if self.partition is not None:
            data["partition"] = {"kind": self.partition.kind, **_plain(self.partition)}
        return data

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "BuildingConfiguration":
        """Load a building configuration from a YAML file."""
        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"{yaml_path} is not valid YAML: {e}") from e
        return cls.from_dict(data or {})

    def to_yaml(self, yaml_path: str | Path) -> None:
        """Save the building configuration to a YAML file."""
        with open(yaml_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_configuration(
    yaml_path: str | Path, catalog: "Catalog"
) -> tuple[BuildingConfiguration, list[str]]:
    """Load a configuration and normalise it against ``catalog``."""
    config = BuildingConfiguration.from_yaml(yaml_path)
    changes = config.normalise(catalog)
    return config, changes
