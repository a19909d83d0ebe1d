"""Root CLI group for valgen with global flags and command registration."""

from __future__ import annotations

import click

from valgen import __version__
from valgen.commands import register_commands
from valgen.commands._base import ValgenGroup
from valgen.commands._context import AppContext
from valgen.config.logging import bind_command
from valgen.config.settings import ValgenSettings


@click.group(
    cls=ValgenGroup,
    invoke_without_command=True,
    examples="""\
  valgen generate -t User models.py
  valgen explain "required;min=1"
  valgen messages --locale es""",
)
@click.version_option(version=__version__, prog_name="valgen")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """valgen — validation code generator for annotated record types."""
    ctx.ensure_object(dict)
    settings = ValgenSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    bind_command(ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
