"""Shared fixtures for gardenbuild tests."""

import xml.etree.ElementTree as ET

import pytest

from gardenbuild.configuration import BuildingConfiguration, Catalog
from gardenbuild.drawing_generator import BuildingDrawing


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    return Catalog.default()


@pytest.fixture
def classic_config() -> BuildingConfiguration:
    """4000 x 3000 x 2500 classic building with one 2500mm sliding door."""
    return BuildingConfiguration.from_dict({
        "width": 4000,
        "depth": 3000,
        "height": 2500,
        "tier": "classic",
        "components": [
            {"id": "door-1", "type": "sliding-door-2500", "wall": "front", "position": 700},
        ],
        "customer": {"name": "A. Client", "address": "1 Garden Lane", "date": "January 2026"},
    })


@pytest.fixture
def signature_config() -> BuildingConfiguration:
    """6000 x 3000 x 2500 signature building with the canopy enabled."""
    return BuildingConfiguration.from_dict({
        "width": 6000,
        "depth": 3000,
        "height": 2500,
        "tier": "signature",
        "canopy_enabled": True,
        "cladding": {"front": "composite-grey"},
        "customer": {"date": "January 2026"},
    })


def render(config: BuildingConfiguration, catalog: Catalog) -> tuple[str, ET.Element]:
    """Render a configuration and parse the document."""
    svg = BuildingDrawing(config, catalog).generate()
    return svg, ET.fromstring(svg)


def find_id(root: ET.Element, element_id: str) -> ET.Element:
    for element in root.iter():
        if element.get("id") == element_id:
            return element
    raise AssertionError(f"No element with id '{element_id}'")


def with_class(root: ET.Element, cls: str) -> list[ET.Element]:
    """Every element under ``root`` whose class list contains ``cls``."""
    return [e for e in root.iter() if cls in (e.get("class") or "").split()]


def local_tag(element: ET.Element) -> str:
    return element.tag.rsplit("}", 1)[-1]
