"""
Building configuration and catalog.

Usage:
    from gardenbuild.configuration import BuildingConfiguration, Catalog

    catalog = Catalog.default()
    config = BuildingConfiguration.from_yaml("building.yaml")
    config.normalise(catalog)
"""

from .catalog import (
    Catalog,
    CatalogEntry,
    CladdingCategory,
    CladdingEntry,
    ComponentCategory,
    FeatureEntry,
    InternalReductions,
)
from .schema import (
    ACPlacement,
    ACUnit,
    Boundary,
    BuildingConfiguration,
    CladdingSelection,
    Corner,
    CornerPartition,
    CornerTreatment,
    CustomerInfo,
    DoorDirection,
    DoorWall,
    DrawingLabel,
    ExternalFeature,
    HandleSide,
    HingeEnd,
    PlacedComponent,
    Room,
    StraightPartition,
    SwingSide,
    Tier,
    Wall,
    clamp_to_grid,
    default_sill_height,
    load_configuration,
    snap_to_grid,
)

__all__ = [
    # Catalog
    'Catalog',
    'CatalogEntry',
    'CladdingCategory',
    'CladdingEntry',
    'ComponentCategory',
    'FeatureEntry',
    'InternalReductions',
    # Configuration
    'ACPlacement',
    'ACUnit',
    'Boundary',
    'BuildingConfiguration',
    'CladdingSelection',
    'Corner',
    'CornerPartition',
    'CornerTreatment',
    'CustomerInfo',
    'DoorDirection',
    'DoorWall',
    'DrawingLabel',
    'ExternalFeature',
    'HandleSide',
    'HingeEnd',
    'PlacedComponent',
    'Room',
    'StraightPartition',
    'SwingSide',
    'Tier',
    'Wall',
    # Functions
    'clamp_to_grid',
    'default_sill_height',
    'load_configuration',
    'snap_to_grid',
]
