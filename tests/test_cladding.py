"""
Tests for the cladding pattern generator.
"""

import xml.etree.ElementTree as ET

import pytest

from gardenbuild.configuration.catalog import CladdingCategory
from gardenbuild.drawing_generator.cladding import (
    cladding_fill,
    cladding_pattern,
    hatch_direction,
)


def parse(fragment: str) -> ET.Element:
    return ET.fromstring(f"<g>{fragment}</g>")


class TestHatchDirection:
    """Tests for the face/material hatch rules."""

    @pytest.mark.parametrize(
        "category,expected",
        [
            (CladdingCategory.TIMBER, "diagonal"),
            (CladdingCategory.COMPOSITE, "horizontal"),
            (CladdingCategory.STEEL, "vertical"),
        ],
    )
    def test_front_face(self, category, expected):
        assert hatch_direction(category, "front") == expected

    @pytest.mark.parametrize("category", list(CladdingCategory))
    def test_side_face_always_vertical(self, category):
        assert hatch_direction(category, "side") == "vertical"

    def test_accepts_plain_strings(self):
        assert hatch_direction("timber", "front") == "diagonal"


class TestCladdingPattern:
    """Tests for the generated fragment."""

    def test_clip_path_uses_given_id(self):
        root = parse(cladding_pattern(CladdingCategory.STEEL, 0, 0, 4000, 2100, "front", "clad-front-wall"))
        clip = root.find("clipPath")
        assert clip.get("id") == "clad-front-wall"
        clipped = [g for g in root.iter("g") if g.get("clip-path")]
        assert clipped[0].get("clip-path") == "url(#clad-front-wall)"

    def test_base_fill_and_hatch_marker(self):
        root = parse(cladding_pattern(CladdingCategory.COMPOSITE, 0, 0, 4000, 2100, "front", "c"))
        base = next(r for r in root.iter("rect") if "cladding" in (r.get("class") or ""))
        assert base.get("fill") == cladding_fill(CladdingCategory.COMPOSITE)
        assert base.get("data-hatch") == "horizontal"
        assert base.get("class") == "cladding cladding-composite"

    def test_vertical_lines_span_full_height(self):
        root = parse(cladding_pattern(CladdingCategory.STEEL, 0, 0, 1000, 2000, "side", "c"))
        lines = list(root.iter("line"))
        assert len(lines) == 4  # every 200mm, excluding the edges
        for el in lines:
            assert el.get("x1") == el.get("x2")
            assert (el.get("y1"), el.get("y2")) == ("0", "2000")

    def test_horizontal_lines(self):
        root = parse(cladding_pattern(CladdingCategory.COMPOSITE, 0, 0, 1000, 600, "front", "c"))
        lines = list(root.iter("line"))
        assert len(lines) == 3
        assert all(el.get("y1") == el.get("y2") for el in lines)

    def test_diagonal_lines_rise_left_to_right(self):
        root = parse(cladding_pattern(CladdingCategory.TIMBER, 0, 0, 2000, 1000, "front", "c"))
        lines = list(root.iter("line"))
        assert lines
        for el in lines:
            x1, y1, x2, y2 = (float(el.get(k)) for k in ("x1", "y1", "x2", "y2"))
            assert x2 > x1
            assert y2 < y1

    def test_deterministic(self):
        args = (CladdingCategory.TIMBER, 10, 20, 3000, 2100, "front", "clad")
        assert cladding_pattern(*args) == cladding_pattern(*args)

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            cladding_fill("brick")
