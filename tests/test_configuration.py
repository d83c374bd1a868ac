"""
Tests for the building configuration schema.

Covers YAML coercion, validation at the load boundary, grid snapping and
the normalisation applied when a configuration is loaded.
"""

import pytest

from gardenbuild.configuration import (
    ACPlacement,
    BuildingConfiguration,
    CornerPartition,
    HandleSide,
    StraightPartition,
    Tier,
    Wall,
    clamp_to_grid,
    default_sill_height,
    load_configuration,
    snap_to_grid,
)
from gardenbuild.exceptions import ConfigurationError


class TestGridSnapping:
    """Tests for the 50mm snapping grid."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, 0),
            (24, 0),
            (25, 50),
            (724, 700),
            (725, 750),
            (-26, -50),
            (1500, 1500),
        ],
    )
    def test_snap_to_grid(self, value, expected):
        assert snap_to_grid(value) == expected

    def test_clamp_to_upper_bound(self):
        assert clamp_to_grid(1530, 0, 1500) == 1500

    def test_clamp_tightens_bounds_to_grid(self):
        # 1480 is not on the grid; the largest legal grid value is 1450
        assert clamp_to_grid(1490, 0, 1480) == 1450

    def test_clamp_to_lower_bound(self):
        assert clamp_to_grid(-300, 0, 1500) == 0

    def test_clamp_empty_range_returns_lower(self):
        # Component wider than its wall
        assert clamp_to_grid(200, 0, -500) == 0

    @pytest.mark.parametrize("value", [-1234.5, 0.1, 333, 987.6, 4321])
    def test_result_always_on_grid(self, value):
        result = clamp_to_grid(value, 0, 3000)
        assert result % 50 == 0
        assert 0 <= result <= 3000


class TestConfigurationLoading:
    """Tests for from_dict coercion and validation."""

    def test_defaults(self):
        config = BuildingConfiguration.from_dict({})
        assert config.width == 4000
        assert config.depth == 3000
        assert config.tier == Tier.CLASSIC
        assert config.components == []

    def test_nested_mappings_are_coerced(self):
        config = BuildingConfiguration.from_dict({
            "tier": "signature",
            "components": [
                {"type": "sliding-door-2500", "wall": "left", "position": 100, "handle_side": "left"},
            ],
            "ac_units": [{"placement": "external", "x": 100, "y": 200}],
            "partition": {"kind": "straight", "has_door": True},
        })
        comp = config.components[0]
        assert comp.wall == Wall.LEFT
        assert comp.handle_side == HandleSide.LEFT
        assert config.ac_units[0].placement == ACPlacement.EXTERNAL
        assert isinstance(config.partition, StraightPartition)

    def test_ids_are_assigned(self):
        config = BuildingConfiguration.from_dict({
            "components": [{"type": "slot-window"}, {"type": "slot-window"}],
            "external_features": [{"type": "socket"}],
            "ac_units": [{}],
            "labels": [{"text": "Shed"}],
        })
        assert [c.id for c in config.components] == ["component-1", "component-2"]
        assert config.external_features[0].id == "feature-1"
        assert config.ac_units[0].id == "ac-1"
        assert config.labels[0].id == "label-1"

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            BuildingConfiguration.from_dict({
                "components": [
                    {"id": "a", "type": "slot-window"},
                    {"id": "a", "type": "slot-window"},
                ],
            })

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown"):
            BuildingConfiguration.from_dict({"colour": "green"})

    def test_invalid_enum_rejected(self):
        with pytest.raises(ConfigurationError, match="tier"):
            BuildingConfiguration.from_dict({"tier": "deluxe"})

    @pytest.mark.parametrize("field", ["width", "depth", "height"])
    def test_non_positive_dimension_rejected(self, field):
        with pytest.raises(ConfigurationError):
            BuildingConfiguration.from_dict({field: 0})

    def test_straight_partition_defaults_to_centre(self):
        config = BuildingConfiguration.from_dict({"width": 5000, "partition": {"kind": "straight"}})
        assert config.partition.position == 2500

    def test_corner_partition_inferred_from_keys(self):
        config = BuildingConfiguration.from_dict({"partition": {"corner": "front-right"}})
        assert isinstance(config.partition, CornerPartition)

    def test_door_position_is_clamped_to_fraction(self):
        config = BuildingConfiguration.from_dict({"partition": {"kind": "straight", "door_position": 3}})
        assert config.partition.door_position == 1.0


class TestDerivedValues:
    """Tests for canopy availability and wall lengths."""

    @pytest.mark.parametrize(
        "tier,enabled,expected",
        [
            ("classic", True, False),
            ("classic", False, False),
            ("signature", True, True),
            ("signature", False, False),
        ],
    )
    def test_has_canopy(self, tier, enabled, expected):
        config = BuildingConfiguration.from_dict({"tier": tier, "canopy_enabled": enabled})
        assert config.has_canopy is expected

    def test_wall_length(self):
        config = BuildingConfiguration.from_dict({"width": 5000, "depth": 3500})
        assert config.wall_length("front") == 5000
        assert config.wall_length("rear") == 5000
        assert config.wall_length("left") == 3500
        assert config.wall_length("right") == 3500

    def test_default_sill_heights(self, catalog):
        assert default_sill_height(catalog.component("slot-window"), 2500) == 1625
        assert default_sill_height(catalog.component("window-standard"), 2500) == 562.5


class TestNormalisation:
    """Tests for load-time snapping and clamping."""

    def test_positions_snapped_and_clamped(self, catalog):
        config = BuildingConfiguration.from_dict({
            "components": [
                {"id": "a", "type": "sliding-door-2500", "wall": "front", "position": 712},
                {"id": "b", "type": "sliding-door-2500", "wall": "front", "position": 3000},
                {"id": "c", "type": "single-glazed-door", "wall": "left", "position": -40},
            ],
        })
        changes = config.normalise(catalog)

        assert config.component("a").position == 700
        assert config.component("b").position == 1500
        assert config.component("c").position == 0
        assert len(changes) == 3

    @pytest.mark.parametrize("position", [-800, 13, 777, 1499, 2600])
    def test_position_invariant(self, catalog, position):
        config = BuildingConfiguration.from_dict({
            "components": [{"type": "sliding-door-2500", "wall": "front", "position": position}],
        })
        config.normalise(catalog)
        comp = config.components[0]
        entry = catalog.component(comp.type)
        assert comp.position >= 0
        assert comp.position + comp.effective_width(entry) <= config.wall_length(comp.wall)
        assert comp.position % 50 == 0

    def test_unknown_type_left_untouched(self, catalog):
        config = BuildingConfiguration.from_dict({
            "components": [{"type": "garage-door", "position": 13}],
        })
        assert config.normalise(catalog) == []
        assert config.components[0].position == 13

    def test_vertical_offset_clamped(self, catalog):
        config = BuildingConfiguration.from_dict({
            "components": [{"type": "window-standard", "position": 0, "vertical_offset": 5000}],
        })
        config.normalise(catalog)
        # Head meets the fascia: 2500 - 375 - 1000
        assert config.components[0].vertical_offset == 1100

    def test_wide_component_clamps_to_zero(self, catalog):
        config = BuildingConfiguration.from_dict({
            "width": 3000,
            "components": [{"type": "bifold-4500", "position": 400}],
        })
        config.normalise(catalog)
        assert config.components[0].position == 0


class TestSerialization:
    """Tests for YAML round trips and templates."""

    def test_yaml_round_trip(self, tmp_path, classic_config):
        classic_config.partition = StraightPartition(position=1800, left_label="Office")
        path = tmp_path / "building.yaml"
        classic_config.to_yaml(path)

        loaded = BuildingConfiguration.from_yaml(path)
        assert loaded.to_dict() == classic_config.to_dict()
        assert isinstance(loaded.partition, StraightPartition)
        assert loaded.partition.left_label == "Office"

    def test_to_dict_uses_plain_values(self, classic_config):
        data = classic_config.to_dict()
        assert data["tier"] == "classic"
        assert data["components"][0]["wall"] == "front"

    def test_template_uses_tier_cladding(self, catalog):
        config = BuildingConfiguration.template("signature", catalog)
        assert config.tier == Tier.SIGNATURE
        assert config.cladding.front == "composite-grey"
        assert config.cladding.left == "steel-anthracite"
        assert len(config.rooms) == 1
        assert config.rooms[0].width == config.width

    def test_load_configuration_normalises(self, tmp_path, catalog):
        path = tmp_path / "building.yaml"
        path.write_text(
            "width: 4000\n"
            "components:\n"
            "  - type: sliding-door-2500\n"
            "    position: 733\n"
        )
        config, changes = load_configuration(path, catalog)
        assert config.components[0].position == 750
        assert changes


class TestInternalDimensions:
    """Tests for the internal dimension business rules."""

    @pytest.mark.parametrize(
        "tier,height,expected",
        [
            ("classic", 2500, (3700, 2700, 2150)),
            ("signature", 2500, (3700, 2300, 2150)),
            ("classic", 2600, (3700, 2700, 2150)),
            ("classic", 3000, (3700, 2700, 2450)),
        ],
    )
    def test_reductions(self, catalog, tier, height, expected):
        dims = catalog.internal_reductions.internal_dimensions(4000, 3000, height, tier)
        assert dims == expected
