"""
Tests for the command-line interface.
"""

import pytest
from click.testing import CliRunner

from gardenbuild import __version__
from gardenbuild.cli import cli
from gardenbuild.configuration import BuildingConfiguration, Tier


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "building.yaml"
    path.write_text(
        "width: 4000\n"
        "depth: 3000\n"
        "components:\n"
        "  - id: door-1\n"
        "    type: sliding-door-2500\n"
        "    position: 733\n"
    )
    return path


class TestTemplate:

    @pytest.mark.parametrize("tier", ["classic", "signature"])
    def test_writes_loadable_configuration(self, runner, tmp_path, tier):
        path = tmp_path / "template.yaml"
        result = runner.invoke(cli, ["template", "--tier", tier, "-o", str(path)])
        assert result.exit_code == 0, result.output
        assert "Configuration saved to" in result.output
        assert BuildingConfiguration.from_yaml(path).tier == Tier(tier)

    def test_rejects_unknown_tier(self, runner, tmp_path):
        result = runner.invoke(cli, ["template", "--tier", "deluxe", "-o", str(tmp_path / "x.yaml")])
        assert result.exit_code != 0


class TestValidate:

    def test_template_is_valid(self, runner, tmp_path):
        path = tmp_path / "template.yaml"
        runner.invoke(cli, ["template", "-o", str(path)])
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 0, result.output
        assert "Configuration is valid." in result.output

    def test_reports_adjustments(self, runner, config_file):
        result = runner.invoke(cli, ["validate", str(config_file)])
        assert result.exit_code == 0
        assert "Adjusted door-1: position 733" in result.output

    def test_unknown_component_type(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("components:\n  - id: g\n    type: garage-door\n")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "unknown type 'garage-door'" in result.output

    def test_unknown_cladding(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("cladding:\n  front: brick\n")
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Unknown cladding 'brick' on front wall" in result.output

    @pytest.mark.parametrize("content", ["tier: deluxe\n", "width: [1, 2\n", "- just\n- a list\n"])
    def test_invalid_configuration(self, runner, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        result = runner.invoke(cli, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Error loading config" in result.output

    def test_malformed_catalog(self, runner, config_file, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("components: [\n")
        result = runner.invoke(cli, ["validate", str(config_file), "--catalog", str(catalog)])
        assert result.exit_code == 1
        assert "Error loading catalog" in result.output


class TestRender:

    def test_writes_svg(self, runner, config_file, tmp_path):
        output = tmp_path / "drawing.svg"
        result = runner.invoke(cli, ["render", str(config_file), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8").startswith("<?xml")
        assert "Adjusted door-1: position 733 -> 750" in result.output
        assert "Scale:" in result.output
        assert f"Drawing saved to: {output}" in result.output

    def test_default_output_path(self, runner, config_file):
        result = runner.invoke(cli, ["render", str(config_file)])
        assert result.exit_code == 0, result.output
        assert config_file.with_suffix(".svg").exists()

    def test_skipped_entities_reported(self, runner, tmp_path):
        path = tmp_path / "building.yaml"
        path.write_text("components:\n  - id: g\n    type: garage-door\n")
        result = runner.invoke(cli, ["render", str(path), "-o", str(tmp_path / "out.svg")])
        assert result.exit_code == 0, result.output
        assert "Warning: Component 'g' has unknown type 'garage-door'" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
