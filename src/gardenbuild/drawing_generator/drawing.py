"""
Composite building drawing.

Generates one SVG document holding the front, left and right elevations,
the plan view, the title block, drawing notes and free-text labels, all at
the single scale chosen by the layout planner.

Draggable elements carry ``data-kind``, ``data-id``, ``data-view`` and
``data-bbox`` attributes (bounding box in document units) so an
interactive client can map pointer events back to configuration entities.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from .annotations import render_drawing_label, render_notes
from .constants import (
    BORDER_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    HIDDEN_COLOR,
    MAX_SCALE,
    VISIBLE_COLOR,
    VISIBLE_STROKE_WIDTH,
)
from .elevation import ComponentPlacement, ElevationRenderer
from .layout_engine import ELEVATION_VIEWS, LayoutPlan, LayoutPlanner
from .plan_view import PlanRenderer
from .svg import fmt, group
from .title_block import TitleBlock, TitleBlockInfo

if TYPE_CHECKING:
    from ..configuration import BuildingConfiguration, Catalog


class BuildingDrawing:
    """
    Composes the complete drawing for one building configuration.

    ``generate()`` is a pure function of the configuration and catalog: the
    layout is planned afresh on every call and no render state is kept
    between calls, so the same configuration always yields the same
    document.
    """

    def __init__(
        self,
        configuration: "BuildingConfiguration",
        catalog: "Catalog",
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
        max_scale: float = MAX_SCALE,
        today: date | None = None,
    ):
        """
        Initialize the drawing.

        Args:
            configuration: Building to draw (read only)
            catalog: Component, feature and cladding reference data
            canvas_width: Width of the bounded canvas (drawing units)
            canvas_height: Height of the bounded canvas (drawing units)
            max_scale: Upper limit on drawing units per mm
            today: Date shown in the title block when the customer has none
        """
        self.configuration = configuration
        self.catalog = catalog
        self.today = today
        self._planner = LayoutPlanner(configuration, canvas_width, canvas_height, max_scale)
        self.placements: dict[str, list[ComponentPlacement]] = {}

    @property
    def layout(self) -> LayoutPlan:
        """Layout plan for the configuration as it is now."""
        return self._planner.plan()

    # -------------------------------------------------------------------------
    # Parts
    # -------------------------------------------------------------------------

    def _create_title_block(self, layout: LayoutPlan) -> str:
        view = layout.view("title")
        info = TitleBlockInfo.from_configuration(self.configuration, self.catalog, self.today)
        block = TitleBlock(info=info, width=layout.title_width, height=layout.title_height)
        parts = [block.generate_svg()]
        notes = render_notes(layout.notes_lines, 0, layout.title_height)
        if notes:
            parts.append(notes)
        return group(parts, id="view-title", class_="view title", transform=view.svg_transform())

    def _create_labels(self, layout: LayoutPlan) -> str:
        labels = [render_drawing_label(label, layout) for label in self.configuration.labels]
        return group(labels, id="drawing-labels", transform=f"scale({layout.scale:.6g})")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def generate(self) -> str:
        """Generate the complete drawing as SVG."""
        layout = self.layout
        doc_w = fmt(layout.document_width)
        doc_h = fmt(layout.document_height)

        svg_header = f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     width="{doc_w}" height="{doc_h}"
     viewBox="0 0 {doc_w} {doc_h}" data-scale="{layout.scale:.6g}">

    <defs>
        <style>
            .visible {{ stroke: {VISIBLE_COLOR}; stroke-width: {VISIBLE_STROKE_WIDTH}; fill: none; }}
            .hidden {{ stroke: {HIDDEN_COLOR}; stroke-dasharray: 40,25; fill: none; }}
            [data-kind] {{ cursor: grab; }}
        </style>
    </defs>

    <!-- Background -->
    <rect x="0" y="0" width="{doc_w}" height="{doc_h}" fill="white" stroke="{BORDER_COLOR}" stroke-width="1"/>
'''

        self.placements = {}
        svg_content = []

        # Elevations share one ground line along the top row
        for side in ELEVATION_VIEWS:
            renderer = ElevationRenderer(self.configuration, self.catalog, layout, side)
            svg_content.append(renderer.render())
            self.placements[side] = renderer.placements

        plan = PlanRenderer(self.configuration, self.catalog, layout)
        svg_content.append(plan.render())
        self.placements["plan"] = plan.placements

        svg_content.append(self._create_title_block(layout))

        # Labels go last so they render on top of every view
        svg_content.append(self._create_labels(layout))

        svg_footer = '''
</svg>'''

        return svg_header + '\n'.join(svg_content) + svg_footer

    def export_svg(self, filepath: str | Path) -> Path:
        """Export the drawing of the current configuration as SVG file."""
        content = self.generate()

        filepath = Path(filepath)
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(content)
        return filepath


def render_drawing(
    configuration: "BuildingConfiguration",
    catalog: "Catalog",
    canvas_width: float = CANVAS_WIDTH,
    canvas_height: float = CANVAS_HEIGHT,
    max_scale: float = MAX_SCALE,
    today: date | None = None,
) -> str:
    """Render a configuration to an SVG string."""
    return BuildingDrawing(configuration, catalog, canvas_width, canvas_height, max_scale,
                           today).generate()
