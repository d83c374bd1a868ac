"""
Interactive editing of rendered drawings.

Usage:
    mapper = CoordinateMapper.from_svg(svg, drawing.layout, ScreenViewport(0, 0, 1400, 1000))
    controller = DragController(config, catalog, mapper)
    controller.pointer_down(x, y)
    controller.pointer_move(x + 40, y)
    controller.pointer_up()
"""

from .coordinate_mapper import CoordinateMapper, ScreenViewport
from .drag_controller import DragController, DragSession, GestureState
from .markers import DragMarker, hit_test, parse_markers

__all__ = [
    'CoordinateMapper',
    'DragController',
    'DragMarker',
    'DragSession',
    'GestureState',
    'ScreenViewport',
    'hit_test',
    'parse_markers',
]
