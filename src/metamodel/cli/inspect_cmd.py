"""metamodel inspect command - show extracted fields without writing files."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from metamodel.cli.utils import drop_unset, load_cli_config
from metamodel.core.errors import MetamodelError
from metamodel.emission import table_name_for
from metamodel.extraction import extract_file


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-t", "--tag", help="Struct tag to read field names from (default: json).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def inspect_command(source: Path, tag: str | None, as_json: bool) -> None:
    """Show the tagged fields extracted from SOURCE."""
    config = load_cli_config(generation=drop_unset(tag=tag))

    try:
        result = extract_file(source, config.generation.tag, grammar=config.grammar)
    except MetamodelError as e:
        raise click.ClickException(e.message) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    console = Console()
    console.print(
        f"Package [bold]{result.package_name}[/bold] -> [bold]{result.namespace}[/bold]"
        f" ({result.tag} tags)"
    )
    for type_meta in result.types:
        table_name = table_name_for(type_meta.type_name, config.generation.table_name)
        table = Table(
            title=f"{type_meta.type_name} ({table_name})",
            title_justify="left",
        )
        table.add_column("Field", style="cyan")
        table.add_column("Name")
        table.add_column("Declared in", style="dim")
        for field in type_meta.fields:
            table.add_row(field.field_name, field.tag_name, field.declaring_type)
        console.print(table)
