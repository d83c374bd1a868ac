"""
Component and cladding catalog.

The catalog is static reference data loaded once, normally from the packaged
``data/catalog.yaml``. It maps:

- door/window type keys to size, category and behaviour flags
- external feature type keys to their drawn size
- cladding keys to a label and a material category
- tier to its default cladding per side
- the internal-dimension deduction table used in the title block

Every component entry declares an explicit ``category``. The category is
resolved to :class:`ComponentCategory` here, at load time, so drawing code
dispatches on the enum and never inspects type-key text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import CatalogError

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.yaml"


class ComponentCategory(str, Enum):
    """Closed set of door/window categories."""

    SLIDING = "sliding"
    BIFOLD = "bifold"
    SINGLE = "single"
    CLADDED = "cladded"
    FIXED = "fixed"
    OPENER = "opener"
    SLOT = "slot"
    STANDARD = "standard"

    @property
    def has_mullion(self) -> bool:
        """Plan symbol carries a centre mullion (sliding and folding openings)."""
        return self in (ComponentCategory.SLIDING, ComponentCategory.BIFOLD)


class CladdingCategory(str, Enum):
    TIMBER = "timber"
    COMPOSITE = "composite"
    STEEL = "steel"


def _resolve_enum(enum_cls, value, what: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise CatalogError(f"Unknown {what} '{value}' (expected one of: {allowed})") from None


@dataclass
class CatalogEntry:
    """
    A door or window type.

    Attributes:
        key: Catalog type key (e.g. "sliding-door-2500")
        label: Human-readable name
        width: Default opening width (mm)
        height: Opening height (mm)
        category: Geometry category
        leaves: Leaf count for folding doors
        movable_vertically: Vertical offset may be stored and dragged
        supports_handle_side: Handle side is meaningful for this type
    """

    key: str
    label: str
    width: float
    height: float
    category: ComponentCategory
    leaves: int = 3
    movable_vertically: bool = False
    supports_handle_side: bool = False

    def __post_init__(self):
        self.category = _resolve_enum(ComponentCategory, self.category, "component category")
        if self.width <= 0 or self.height <= 0:
            raise CatalogError(f"Component '{self.key}' must have positive width and height")
        self.leaves = max(1, int(self.leaves))


@dataclass
class FeatureEntry:
    """An external fixture type (wall light, socket)."""

    key: str
    label: str
    width: float
    height: float


@dataclass
class CladdingEntry:
    key: str
    label: str
    category: CladdingCategory

    def __post_init__(self):
        self.category = _resolve_enum(CladdingCategory, self.category, "cladding category")


@dataclass
class InternalReductions:
    """
    Business-rule table converting external to internal dimensions.

    The deductions are stated by the manufacturer; they are not derived from
    wall build-ups.
    """

    width: float = 300
    depth: dict[str, float] = field(default_factory=lambda: {"classic": 300, "signature": 700})
    height_bands: list[tuple[float, float]] = field(
        default_factory=lambda: [(2500, 350), (2750, 450)]
    )
    height_default: float = 550

    def __post_init__(self):
        # YAML gives a list of {max_height, reduction} mappings
        bands = []
        for band in self.height_bands:
            if isinstance(band, dict):
                bands.append((float(band["max_height"]), float(band["reduction"])))
            else:
                bands.append((float(band[0]), float(band[1])))
        self.height_bands = sorted(bands)

    def internal_dimensions(
        self, width: float, depth: float, height: float, tier: str
    ) -> tuple[float, float, float]:
        """Return (width, depth, height) of the usable interior."""
        tier_key = getattr(tier, "value", tier)
        depth_reduction = self.depth.get(tier_key, max(self.depth.values(), default=0))
        height_reduction = self.height_default
        for max_height, reduction in self.height_bands:
            if height <= max_height:
                height_reduction = reduction
                break
        return (
            width - self.width,
            depth - depth_reduction,
            height - height_reduction,
        )


@dataclass
class Catalog:
    """
    Static reference data for drawing composition.

    Lookups return ``None`` for unknown keys; callers decide how to degrade.
    """

    components: dict[str, CatalogEntry] = field(default_factory=dict)
    features: dict[str, FeatureEntry] = field(default_factory=dict)
    cladding: dict[str, CladdingEntry] = field(default_factory=dict)
    default_cladding: dict[str, dict[str, str]] = field(default_factory=dict)
    internal_reductions: InternalReductions = field(default_factory=InternalReductions)

    def component(self, key: str) -> CatalogEntry | None:
        return self.components.get(key)

    def feature(self, key: str) -> FeatureEntry | None:
        return self.features.get(key)

    def cladding_category(self, key: str) -> CladdingCategory | None:
        entry = self.cladding.get(key)
        return entry.category if entry else None

    def cladding_label(self, key: str) -> str:
        entry = self.cladding.get(key)
        return entry.label if entry else key

    def default_cladding_for(self, tier: str) -> dict[str, str]:
        tier_key = getattr(tier, "value", tier)
        return dict(self.default_cladding.get(tier_key, {}))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Catalog":
        """Build a catalog from the mapping loaded out of a catalog YAML file."""
        if not isinstance(data, dict):
            raise CatalogError("Catalog root must be a mapping")
        try:
            components = {
                key: CatalogEntry(key=key, **spec)
                for key, spec in (data.get("components") or {}).items()
            }
            features = {
                key: FeatureEntry(key=key, **spec)
                for key, spec in (data.get("features") or {}).items()
            }
            cladding = {
                key: CladdingEntry(key=key, **spec)
                for key, spec in (data.get("cladding") or {}).items()
            }
            reductions = InternalReductions(**(data.get("internal_reductions") or {}))
        except TypeError as exc:
            raise CatalogError(f"Malformed catalog entry: {exc}") from exc

        return cls(
            components=components,
            features=features,
            cladding=cladding,
            default_cladding=dict(data.get("default_cladding") or {}),
            internal_reductions=reductions,
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Catalog":
        """Load a catalog from a YAML file."""
        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise CatalogError(f"{yaml_path} is not valid YAML: {e}") from e
        return cls.from_dict(data or {})

    @classmethod
    def default(cls) -> "Catalog":
        """Load the catalog shipped with the package."""
        return cls.from_yaml(DEFAULT_CATALOG_PATH)
