"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from metamodel.config import MetamodelConfig, load_config
from metamodel.core.errors import MetamodelError


def load_cli_config(**overrides: Any) -> MetamodelConfig:
    """Load configuration for the current directory, applying CLI overrides.

    Raises:
        click.ClickException: If a config file or an override is invalid
    """
    sections = {name: values for name, values in overrides.items() if values}
    try:
        return load_config(Path.cwd(), **sections)
    except MetamodelError as e:
        raise click.ClickException(e.message) from e


def drop_unset(**options: Any) -> dict[str, Any]:
    """Keep only options the user actually passed."""
    return {key: value for key, value in options.items() if value is not None}
