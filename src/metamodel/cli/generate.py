"""metamodel generate command - write metamodel files for a Go source."""

from pathlib import Path

import click
from rich.console import Console

from metamodel.cli.utils import drop_unset, load_cli_config
from metamodel.core.errors import MetamodelError
from metamodel.emission import generate


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-d",
    "--destination",
    help="Output file, or a directory when it ends with a path separator.",
)
@click.option("-p", "--package-name", help="Package name for generated files (suffixed with _).")
@click.option("-t", "--tag", help="Struct tag to read field names from (default: json).")
@click.option("--table-name", help="Table name for every struct in the file.")
@click.option("--no-format", is_flag=True, help="Do not run gofmt on generated files.")
def generate_command(
    source: Path,
    destination: str | None,
    package_name: str | None,
    tag: str | None,
    table_name: str | None,
    no_format: bool,
) -> None:
    """Generate field handles for the tagged structs in SOURCE.

    Writes SOURCE_metamodel.go plus the shared helper files
    (common, gorm and mongo operators) next to it unless --destination
    says otherwise.
    """
    overrides = drop_unset(tag=tag, package_name=package_name, table_name=table_name)
    if no_format:
        overrides["gofmt"] = False
    config = load_cli_config(generation=overrides)

    try:
        report = generate(
            source,
            destination=destination,
            generation=config.generation,
            grammar=config.grammar,
        )
    except MetamodelError as e:
        raise click.ClickException(e.message) from e

    console = Console(stderr=True)
    console.print(
        f"[green]Generated[/green] {len(report.result.types)} type(s) "
        f"in package [bold]{report.package_name}[/bold]"
    )
    for path in report.written:
        console.print(f"  [cyan]•[/cyan] {path}")
