"""
Command-line interface for gardenbuild.

This module provides commands for working with building configurations:
- render: Compose the drawing of a configuration and write it as SVG
- validate: Check a configuration against the catalog
- template: Write the default configuration for a tier

Usage:
    gardenbuild template --tier signature -o building.yaml
    gardenbuild validate building.yaml
    gardenbuild render building.yaml -o building.svg
"""

import warnings
from datetime import date
from pathlib import Path

import click

from . import __version__
from .configuration import BuildingConfiguration, Catalog, Tier, load_configuration
from .drawing_generator import BuildingDrawing
from .exceptions import CatalogError, ConfigurationError, DrawingWarning


def _load_catalog(catalog_file: Path | None) -> Catalog:
    try:
        return Catalog.from_yaml(catalog_file) if catalog_file else Catalog.default()
    except CatalogError as e:
        click.echo(f"Error loading catalog: {e}", err=True)
        raise SystemExit(1) from None


def _load(config_file: Path, catalog: Catalog) -> tuple[BuildingConfiguration, list[str]]:
    try:
        return load_configuration(config_file, catalog)
    except ConfigurationError as e:
        click.echo(f"Error loading config: {e}", err=True)
        raise SystemExit(1) from None


catalog_option = click.option(
    "--catalog", "catalog_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Catalog YAML file (default: packaged catalog).",
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """gardenbuild - parametric drawings for modular garden buildings."""
    pass


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output SVG path (default: CONFIG_FILE with an .svg suffix).",
)
@catalog_option
def render(config_file: Path, output: Path | None, catalog_file: Path | None):
    """
    Render a building configuration to an SVG drawing.

    Positions are snapped to the 50mm grid and clamped to their walls
    before drawing.

    Example:
        gardenbuild render building.yaml -o building.svg
    """
    catalog = _load_catalog(catalog_file)
    config, changes = _load(config_file, catalog)
    for change in changes:
        click.echo(f"Adjusted {change}")

    output = output or config_file.with_suffix(".svg")
    drawing = BuildingDrawing(config, catalog, today=date.today())
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", DrawingWarning)
        drawing.export_svg(output)
    for w in caught:
        click.echo(f"Warning: {w.message}", err=True)

    click.echo(f"Scale: {drawing.layout.scale:.6g} units/mm")
    click.echo(f"Drawing saved to: {output}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@catalog_option
def validate(config_file: Path, catalog_file: Path | None):
    """
    Validate a building configuration.

    Reports unknown component and feature types and any position the
    load-time normalisation had to change.
    """
    click.echo(f"\nValidating: {config_file}")
    click.echo("-" * 50)

    catalog = _load_catalog(catalog_file)
    config, changes = _load(config_file, catalog)

    errors = []
    for comp in config.components:
        if catalog.component(comp.type) is None:
            errors.append(f"Component '{comp.id}' has unknown type '{comp.type}'")
    for feat in config.external_features:
        if catalog.feature(feat.type) is None:
            errors.append(f"Feature '{feat.id}' has unknown type '{feat.type}'")
    for wall in ("front", "left", "right", "rear"):
        key = config.cladding.for_wall(wall)
        if catalog.cladding_category(key) is None:
            errors.append(f"Unknown cladding '{key}' on {wall} wall")

    if errors:
        click.echo("\nErrors:")
        for e in errors:
            click.echo(f"  - {e}")

    if changes:
        click.echo("\nWarnings:")
        for change in changes:
            click.echo(f"  - Adjusted {change}")

    if errors:
        raise SystemExit(1)
    click.echo("Configuration is valid.")


@cli.command()
@click.option(
    "--tier",
    type=click.Choice([t.value for t in Tier]),
    default=Tier.CLASSIC.value,
    show_default=True,
    help="Product line.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output YAML file path.",
)
@catalog_option
def template(tier: str, output: Path, catalog_file: Path | None):
    """Write the default configuration for a new design."""
    catalog = _load_catalog(catalog_file)
    config = BuildingConfiguration.template(tier, catalog)
    config.to_yaml(output)
    click.echo(f"Configuration saved to: {output}")


if __name__ == "__main__":
    cli()
