"""
Tests for the layout planner.

Every view must get its own area on the sheet at one shared scale, and
the arrangement must follow the building's proportions.
"""

import pytest

from gardenbuild.configuration import BuildingConfiguration
from gardenbuild.drawing_generator.constants import CANVAS_HEIGHT, CANVAS_WIDTH, MAX_SCALE
from gardenbuild.drawing_generator.layout_engine import LayoutPlanner, floor_significant, wrap_notes
from gardenbuild.drawing_generator.view_area import ViewArea

CONFIGS = [
    {},
    {"width": 2000, "depth": 2000, "height": 2200},
    {"width": 9000, "depth": 4500, "height": 3000, "tier": "signature"},
    {"width": 6000, "depth": 3000, "tier": "signature", "canopy_enabled": False},
    {
        "width": 5000, "depth": 3500, "tier": "signature",
        "boundary": {"left": 1200, "right": 800, "rear": 1500, "show": True},
    },
    {
        "width": 4000, "depth": 3000,
        "ac_units": [
            {"placement": "external", "x": -1000, "y": -1000},
            {"placement": "external", "x": 4600, "y": 3800},
        ],
    },
    {"customer": {"notes": "Planning permission to be confirmed. " * 12}},
]


def plan_for(data: dict):
    return LayoutPlanner(BuildingConfiguration.from_dict(data)).plan()


class TestLayoutInvariants:
    """Properties that hold for every configuration."""

    @pytest.mark.parametrize("data", CONFIGS)
    def test_no_overlapping_views(self, data):
        layout = plan_for(data)
        assert set(layout.views) == {"front", "left", "right", "plan", "title"}
        assert layout.overlap_report() == []

    @pytest.mark.parametrize("data", CONFIGS)
    def test_single_scale_within_canvas(self, data):
        layout = plan_for(data)
        assert 0 < layout.scale <= MAX_SCALE
        assert all(view.scale == layout.scale for view in layout.views.values())
        assert layout.document_width <= CANVAS_WIDTH * (1 + 1e-5)
        assert layout.document_height <= CANVAS_HEIGHT * (1 + 1e-5)

    @pytest.mark.parametrize("data", CONFIGS)
    def test_views_inside_sheet(self, data):
        layout = plan_for(data)
        sheet = ViewArea(0, 0, layout.sheet_width_mm, layout.sheet_height_mm)
        for view in layout.views.values():
            area = view.sheet_area
            assert sheet.contains(area.left, area.top)
            assert sheet.contains(area.right, area.bottom)

    @pytest.mark.parametrize("data", CONFIGS)
    def test_elevations_share_ground_line(self, data):
        layout = plan_for(data)
        origins = {layout.view(side).origin_y for side in ("front", "left", "right")}
        assert len(origins) == 1

    @pytest.mark.parametrize("data", CONFIGS)
    def test_plan_below_front_elevation(self, data):
        layout = plan_for(data)
        front, plan = layout.view("front"), layout.view("plan")
        assert plan.origin_x == front.origin_x
        assert plan.sheet_area.top >= front.sheet_area.bottom

    @pytest.mark.parametrize("data", CONFIGS)
    def test_title_right_of_plan(self, data):
        layout = plan_for(data)
        plan, title = layout.view("plan"), layout.view("title")
        assert title.sheet_area.left >= plan.sheet_area.right
        assert title.origin_y == plan.origin_y

    def test_elevation_row_order(self):
        layout = plan_for({})
        front, left, right = (layout.view(s).sheet_area for s in ("front", "left", "right"))
        assert front.right <= left.left
        assert left.right <= right.left


class TestScale:
    """Tests for scale selection."""

    def test_small_building_hits_max_scale(self):
        layout = LayoutPlanner(BuildingConfiguration.from_dict({}),
                               canvas_width=100000, canvas_height=100000).plan()
        assert layout.scale == MAX_SCALE

    @pytest.mark.parametrize("data", CONFIGS)
    def test_scale_rounded_down_to_fit(self, data):
        layout = plan_for(data)
        fit = min(CANVAS_WIDTH / layout.sheet_width_mm, CANVAS_HEIGHT / layout.sheet_height_mm)
        assert layout.scale <= fit
        assert float(f"{layout.scale:.6g}") == layout.scale

    def test_larger_building_scales_down(self):
        small = plan_for({"width": 3000})
        large = plan_for({"width": 9000})
        assert large.scale < small.scale

    @pytest.mark.parametrize(
        "kwargs",
        [{"canvas_width": 0}, {"canvas_height": -5}, {"max_scale": 0}],
    )
    def test_invalid_canvas_rejected(self, kwargs):
        with pytest.raises(ValueError):
            LayoutPlanner(BuildingConfiguration.from_dict({}), **kwargs)

    @pytest.mark.parametrize(
        "value,expected",
        [(0.0832467891, 0.0832467), (0.125, 0.125), (1.9999999, 1.99999), (250.0, 250.0)],
    )
    def test_floor_significant(self, value, expected):
        assert floor_significant(value) == pytest.approx(expected, rel=1e-12)
        assert floor_significant(value) <= value


class TestViewExtents:
    """Tests for the areas reserved per view."""

    def test_canopy_widens_side_elevations(self):
        classic = LayoutPlanner(BuildingConfiguration.from_dict({"tier": "classic"}))
        signature = LayoutPlanner(BuildingConfiguration.from_dict({"tier": "signature"}))
        assert signature.elevation_extent("left").right - classic.elevation_extent("left").right == 400
        assert classic.elevation_extent("right").left - signature.elevation_extent("right").left == 400

    def test_boundary_pads_plan(self):
        planner = LayoutPlanner(BuildingConfiguration.from_dict({
            "boundary": {"left": 1000, "rear": 500, "show": True},
        }))
        assert planner.boundary_padding() == (1300, 0, 700)
        extent = planner.plan_extent()
        assert extent.left == -(1300 + 700)
        assert extent.top == -(700 + 350)

    def test_hidden_boundary_reserves_nothing(self):
        planner = LayoutPlanner(BuildingConfiguration.from_dict({
            "boundary": {"left": 1000, "rear": 500, "show": False},
        }))
        assert planner.boundary_padding() == (0, 0, 0)

    def test_external_ac_unit_extends_plan(self):
        planner = LayoutPlanner(BuildingConfiguration.from_dict({
            "ac_units": [{"placement": "external", "x": 4800, "y": 0, "width": 800, "height": 400}],
        }))
        assert planner.plan_extent().right == 4800 + 800 + 50

    @pytest.mark.parametrize(
        "depth,expected_height",
        [(2000, 2800), (3000, 3600), (5000, 5600)],
    )
    def test_title_block_follows_plan_depth(self, depth, expected_height):
        planner = LayoutPlanner(BuildingConfiguration.from_dict({"depth": depth}))
        width, height = planner.title_block_size()
        assert height == expected_height
        assert width == max(4000, 2 * depth + 1000)


class TestCoordinateConversion:
    """Tests for local mm <-> document unit conversion."""

    @pytest.mark.parametrize("view", ["front", "left", "right", "plan"])
    def test_round_trip(self, view):
        layout = plan_for({"tier": "signature"})
        doc = layout.to_document(view, 700, 1250)
        assert layout.to_model(view, *doc) == pytest.approx((700, 1250))

    def test_document_size_follows_scale(self):
        layout = plan_for({})
        assert layout.document_width == pytest.approx(layout.sheet_width_mm * layout.scale)
        assert layout.sheet_to_document(1000, 2000) == pytest.approx(
            (1000 * layout.scale, 2000 * layout.scale)
        )

    def test_view_areas_in_document_units(self):
        layout = plan_for({"tier": "signature"})
        areas = layout.view_areas
        assert set(areas) == {"front", "left", "right", "plan", "title"}
        front = layout.view("front")
        assert areas["front"].left == pytest.approx(front.sheet_area.left * layout.scale)
        assert areas["front"].width == pytest.approx(front.extent.width * layout.scale)


class TestNotes:
    """Tests for drawing notes wrapping."""

    def test_empty_notes(self):
        assert wrap_notes("", 4000) == []
        assert plan_for({}).notes_lines == ()

    def test_lines_fit_width(self):
        notes = "The building will be positioned on a level concrete base " * 6
        lines = wrap_notes(notes, 2400, font_size=120)
        max_chars = 2400 // 60
        assert len(lines) > 1
        assert all(len(line) <= max_chars for line in lines)
        assert " ".join(lines) == " ".join(notes.split())

    def test_notes_extend_title_area(self):
        without = plan_for({})
        with_notes = plan_for({"customer": {"notes": "Base by others. " * 30}})
        assert with_notes.view("title").extent.height > without.view("title").extent.height
        assert with_notes.title_height == without.title_height
