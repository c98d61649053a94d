"""Metamodel CLI - metamodel command."""

import click

from metamodel.cli.generate import generate_command
from metamodel.cli.inspect_cmd import inspect_command
from metamodel.cli.utils import load_cli_config
from metamodel.core.logging import configure_logging, get_logger, set_run_id

log = get_logger(__name__)


@click.group()
@click.version_option(version="0.1.0", prog_name="metamodel")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Metamodel - typed field handles for tagged Go structs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging_config = load_cli_config().logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    run_id = set_run_id()
    log.debug("cli.start", command=ctx.invoked_subcommand, run_id=run_id)


cli.add_command(generate_command, name="generate")
cli.add_command(inspect_command, name="inspect")


if __name__ == "__main__":
    cli()
