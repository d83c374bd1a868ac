"""
Drawing Generator Module

Composes parametric drawings of modular garden buildings from a building
configuration and the component catalog.

Features:
- Front, left and right elevations with cladding, trims and placed components
- Plan view with openings, partitions, door swings, canopy and boundaries
- Title block and drawing notes
- One shared scale computed by the layout planner
- Machine-readable drag markers on every movable element

Usage:
    from gardenbuild.configuration import BuildingConfiguration, Catalog
    from gardenbuild.drawing_generator import BuildingDrawing

    catalog = Catalog.default()
    config = BuildingConfiguration.template("signature", catalog)
    drawing = BuildingDrawing(config, catalog)
    drawing.generate()
    drawing.export_svg("building.svg")
"""

from .cladding import cladding_pattern, hatch_direction
from .components import ComponentGeometry, geometry_for, render_component, subdivide
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, MAX_SCALE
from .dimensions import DimensionStyle, format_dimension, horizontal_dimension, vertical_dimension
from .drawing import BuildingDrawing, render_drawing
from .elevation import ComponentPlacement, ElevationRenderer
from .layout_engine import LayoutPlan, LayoutPlanner, ViewPlacement
from .plan_view import DoorSwing, PlanRenderer, door_swing, spotlight_count, spotlight_positions
from .title_block import TitleBlock, TitleBlockInfo
from .view_area import ViewArea

__all__ = [
    # Main classes
    'BuildingDrawing',
    'LayoutPlanner',
    'LayoutPlan',
    'ViewPlacement',
    'ViewArea',
    'ElevationRenderer',
    'PlanRenderer',
    'TitleBlock',
    'TitleBlockInfo',
    # Geometry
    'ComponentGeometry',
    'ComponentPlacement',
    'DimensionStyle',
    'DoorSwing',
    # Functions
    'cladding_pattern',
    'door_swing',
    'format_dimension',
    'geometry_for',
    'hatch_direction',
    'horizontal_dimension',
    'render_component',
    'render_drawing',
    'spotlight_count',
    'spotlight_positions',
    'subdivide',
    'vertical_dimension',
    # Constants
    'CANVAS_HEIGHT',
    'CANVAS_WIDTH',
    'MAX_SCALE',
]
