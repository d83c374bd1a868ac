"""
End-to-end tests for the composite drawing.
"""

import xml.etree.ElementTree as ET
from datetime import date

import numpy as np
import pytest

from gardenbuild.configuration import BuildingConfiguration
from gardenbuild.drawing_generator import BuildingDrawing, render_drawing
from gardenbuild.drawing_generator.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from gardenbuild.drawing_generator.svg import fmt

from conftest import find_id, local_tag, render, with_class


class TestDocument:
    """Tests for the document envelope."""

    def test_root_dimensions_follow_layout(self, classic_config, catalog):
        svg, root = render(classic_config, catalog)
        layout = BuildingDrawing(classic_config, catalog).layout
        assert local_tag(root) == "svg"
        assert root.get("width") == fmt(layout.document_width)
        assert root.get("height") == fmt(layout.document_height)
        assert root.get("viewBox") == f"0 0 {fmt(layout.document_width)} {fmt(layout.document_height)}"
        assert root.get("data-scale") == f"{layout.scale:.6g}"
        assert float(root.get("width")) <= CANVAS_WIDTH + 0.01
        assert float(root.get("height")) <= CANVAS_HEIGHT + 0.01

    def test_every_view_present(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        for view_id in ("view-front", "view-left", "view-right", "view-plan", "view-title",
                        "title-block", "drawing-labels"):
            find_id(root, view_id)

    def test_deterministic(self, signature_config, catalog):
        drawing = BuildingDrawing(signature_config, catalog)
        assert drawing.generate() == drawing.generate()
        assert render_drawing(signature_config, catalog) == drawing.generate()

    def test_placements_by_view(self, classic_config, catalog):
        drawing = BuildingDrawing(classic_config, catalog)
        drawing.generate()
        assert set(drawing.placements) == {"front", "left", "right", "plan"}
        assert [p.id for p in drawing.placements["front"]] == ["door-1"]
        assert [p.id for p in drawing.placements["plan"]] == ["door-1"]

    def test_export_svg(self, classic_config, catalog, tmp_path):
        drawing = BuildingDrawing(classic_config, catalog)
        path = drawing.export_svg(tmp_path / "building.svg")
        assert path.exists()
        assert path.read_text(encoding="utf-8") == drawing.generate()


class TestClassicBuilding:
    """4000 x 3000 x 2500 classic building with one sliding door."""

    def test_door_marker_bbox(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        layout = BuildingDrawing(classic_config, catalog).layout
        front = layout.view("front")

        markers = [e for e in root.iter() if e.get("data-kind") == "component"]
        assert len(markers) == 1
        door = markers[0]
        expected = (*front.to_document(700, 2500 - 2110), *front.to_document(3200, 2500))
        assert door.get("data-bbox") == ",".join(fmt(v) for v in expected)
        assert door.get("data-id") == "door-1"

    def test_width_dimension(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        front = find_id(root, "view-front")
        values = {g.get("data-value") for g in with_class(front, "dimension")}
        assert "4000mm" in values

    def test_no_canopy_anywhere(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        assert with_class(root, "canopy") == []
        assert with_class(root, "spotlight") == []

    def test_title_block_content(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        block = find_id(root, "title-block")

        def text_of(cls):
            return [e.text for e in with_class(block, cls)]

        assert text_of("title-client") == ["A. Client"]
        assert text_of("title-address") == ["@ 1 Garden Lane"]
        assert text_of("title-date") == ["January 2026"]
        assert text_of("title-scale") == ["1:50 @ A3"]
        assert text_of("title-spec") == [
            "4.0m x 3.0m x 2.5m",
            "Classic Range",
            "Western Red Cedar front cladding",
            "Internal: 3700 x 2700 x 2150mm",
        ]

    def test_title_date_without_customer_date(self, classic_config, catalog):
        classic_config.customer.date = None

        def title_date(**kwargs):
            root = ET.fromstring(BuildingDrawing(classic_config, catalog, **kwargs).generate())
            return [e.text for e in with_class(root, "title-date")]

        assert title_date() == [None]
        assert title_date(today=date(2026, 3, 5)) == ["March 2026"]
        svg = render_drawing(classic_config, catalog, today=date(2026, 3, 5))
        assert svg == render_drawing(classic_config, catalog, today=date(2026, 3, 5))

    def test_customer_date_wins(self, classic_config, catalog):
        root = ET.fromstring(BuildingDrawing(classic_config, catalog, today=date(2026, 3, 5)).generate())
        assert [e.text for e in with_class(root, "title-date")] == ["January 2026"]


class TestSignatureBuilding:
    """6000 x 3000 signature building with canopy."""

    def test_six_evenly_spaced_spotlights(self, signature_config, catalog):
        _, root = render(signature_config, catalog)
        plan = find_id(root, "view-plan")
        spots = with_class(plan, "spotlight")
        assert len(spots) == 6
        xs = [float(next(iter(g)).get("cx")) for g in spots]
        assert np.diff(xs) == pytest.approx([6000 / 7] * 5, abs=0.01)

    def test_canopy_on_sides_not_front(self, signature_config, catalog):
        _, root = render(signature_config, catalog)
        assert with_class(find_id(root, "view-front"), "canopy") == []
        assert with_class(find_id(root, "view-left"), "canopy")
        assert with_class(find_id(root, "view-right"), "canopy")
        assert with_class(find_id(root, "view-plan"), "canopy")


class TestLabelsAndNotes:

    def test_label_with_arrow_has_two_markers(self, catalog):
        config = BuildingConfiguration.from_dict({
            "labels": [{"id": "tree", "text": "Existing tree", "x": 2000, "y": 1500,
                        "arrow_x": 2600, "arrow_y": 2200}],
        })
        _, root = render(config, catalog)
        labels = find_id(root, "drawing-labels")
        markers = [e for e in labels.iter() if e.get("data-kind")]
        assert sorted(e.get("data-kind") for e in markers) == ["label", "label-arrow"]
        assert {e.get("data-view") for e in markers} == {"sheet"}
        assert {e.get("data-id") for e in markers} == {"tree"}

    def test_label_without_arrow(self, catalog):
        config = BuildingConfiguration.from_dict({"labels": [{"text": "Patio", "x": 500, "y": 500}]})
        _, root = render(config, catalog)
        markers = [e for e in find_id(root, "drawing-labels").iter() if e.get("data-kind")]
        assert [e.get("data-kind") for e in markers] == ["label"]

    def test_notes_under_title_block(self, catalog):
        config = BuildingConfiguration.from_dict({
            "customer": {"notes": "Customer to provide level base. Electrics by others."},
        })
        _, root = render(config, catalog)
        title = find_id(root, "view-title")
        notes = find_id(title, "drawing-notes")
        texts = [local_tag(e) == "text" and e.text for e in notes]
        assert texts[0] == "Notes:"
        assert "Customer to provide level base." in " ".join(t for t in texts[1:] if t)

    def test_no_notes_group_without_notes(self, classic_config, catalog):
        _, root = render(classic_config, catalog)
        assert not [e for e in root.iter() if e.get("id") == "drawing-notes"]
