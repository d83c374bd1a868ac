"""
Tests for the component geometry library.
"""

import xml.etree.ElementTree as ET

import pytest

from gardenbuild.configuration import ComponentCategory
from gardenbuild.configuration.catalog import CladdingCategory
from gardenbuild.drawing_generator.components import (
    GEOMETRY_BY_CATEGORY,
    bifold_door,
    geometry_for,
    opener_window,
    render_component,
    secret_cladded_door,
    sliding_door,
    subdivide,
)
from gardenbuild.drawing_generator.cladding import cladding_fill


def assert_tiles(segments, x, width):
    """Segments are contiguous and cover [x, x + width]."""
    assert segments[0][0] == pytest.approx(x)
    for (s1, w1), (s2, _) in zip(segments, segments[1:]):
        assert s1 + w1 == pytest.approx(s2, abs=1e-9)
    assert sum(w for _, w in segments) == pytest.approx(width, abs=1e-9)
    assert all(w >= 0 for _, w in segments)


class TestSubdivide:
    """Tests for splitting a span into frames, leaves and dividers."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 5])
    @pytest.mark.parametrize("width", [800, 1234.567, 3500, 4500])
    def test_segments_tile_width(self, width, count):
        segments = subdivide(100, width, 35, 12, count)
        assert len(segments) == 2 * count + 1
        assert_tiles(segments, 100, width)

    def test_equal_leaves(self):
        segments = subdivide(0, 3500, 30, 12, 4)
        leaves = [w for _, w in segments[1:-1:2]]
        assert leaves == pytest.approx([leaves[0]] * 4, abs=1e-9)

    def test_frame_limited_to_quarter_of_span(self):
        segments = subdivide(0, 100, 80, 0, 1)
        assert segments[0][1] == 25
        assert_tiles(segments, 0, 100)

    @pytest.mark.parametrize("width", [0, -50])
    def test_degenerate_width_clamped(self, width):
        segments = subdivide(0, width, 35, 12, 2)
        assert_tiles(segments, 0, 1.0)


class TestGenerators:
    """Tests for the per-category generators."""

    @pytest.mark.parametrize("category", list(GEOMETRY_BY_CATEGORY))
    def test_every_category_has_a_generator(self, category):
        geometry = geometry_for(category)(250, 100, 1500, 2000, "right")
        ET.fromstring(geometry.svg)
        assert geometry.total_width == pytest.approx(1500)
        assert_tiles(geometry.segments, 250, 1500)

    @pytest.mark.parametrize("generator", list(dict.fromkeys(GEOMETRY_BY_CATEGORY.values())))
    def test_zero_size_is_drawn_at_minimum(self, generator):
        geometry = generator(0, 0, 0, 0)
        ET.fromstring(geometry.svg)
        assert geometry.total_width == pytest.approx(1.0)

    def test_sliding_door_has_two_leaves_and_interlock(self):
        geometry = sliding_door(0, 0, 2500, 2110)
        root = ET.fromstring(geometry.svg)
        classes = [e.get("class") for e in root.iter()]
        assert classes.count("leaf") == 2
        assert classes.count("interlock") == 1
        assert classes.count("handle") == 1

    def test_sliding_door_handle_side(self):
        def handle_x(side):
            root = ET.fromstring(sliding_door(0, 0, 2500, 2110, side).svg)
            return next(float(e.get("x")) for e in root.iter() if e.get("class") == "handle")

        assert handle_x("left") < 1250 < handle_x("right")

    @pytest.mark.parametrize("leaves", [3, 4, 5])
    def test_bifold_leaf_count(self, leaves):
        geometry = bifold_door(0, 0, 3500, 2110, leaves=leaves)
        root = ET.fromstring(geometry.svg)
        classes = [e.get("class") for e in root.iter()]
        assert classes.count("leaf") == leaves
        assert classes.count("divider") == leaves - 1
        assert len(geometry.segments) == 2 * leaves + 1

    def test_opener_window_has_transom(self):
        root = ET.fromstring(opener_window(0, 0, 900, 2110).svg)
        classes = [e.get("class") for e in root.iter()]
        assert "transom" in classes
        assert "opener" in classes

    def test_cladded_door_uses_wall_cladding(self):
        geometry = secret_cladded_door(0, 0, 900, 2110, cladding=CladdingCategory.TIMBER)
        assert cladding_fill(CladdingCategory.TIMBER) in geometry.svg
        assert geometry.segments == ((0.0, 900.0),)
        assert 'stroke-dasharray="15,8"' in geometry.svg


class TestRenderComponent:
    """Tests for drawing catalog entries."""

    def test_bifold_leaves_from_catalog(self, catalog):
        geometry = render_component(catalog.component("bifold-4500"), 0, 0, 4500)
        assert len(geometry.segments) == 11

    def test_cladded_door_receives_cladding(self, catalog):
        geometry = render_component(
            catalog.component("single-cladded-door"), 0, 0, 900,
            cladding=CladdingCategory.COMPOSITE,
        )
        assert cladding_fill(CladdingCategory.COMPOSITE) in geometry.svg

    def test_handle_side_ignored_when_unsupported(self, catalog):
        entry = catalog.component("window-fixed-full")
        assert entry.category is ComponentCategory.FIXED
        left = render_component(entry, 0, 0, entry.width, handle_side="left")
        right = render_component(entry, 0, 0, entry.width, handle_side="right")
        assert left.svg == right.svg

    def test_uses_catalog_height(self, catalog):
        entry = catalog.component("slot-window")
        root = ET.fromstring(render_component(entry, 0, 600, entry.width).svg)
        outer = next(e for e in root.iter() if e.tag == "rect")
        assert float(outer.get("height")) == 400
        assert float(outer.get("y")) == 600
