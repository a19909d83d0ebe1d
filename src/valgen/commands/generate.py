"""Command: generate a validation module for annotated record types."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from valgen.commands._base import ValgenCommand, locale_option

if TYPE_CHECKING:
    from valgen.commands._context import AppContext


def _split_types(_ctx: click.Context, _param: click.Parameter, value: str) -> list[str]:
    names = [name.strip() for name in value.split(",") if name.strip()]
    if not names:
        raise click.BadParameter("at least one type name is required")
    return names


@click.command(
    cls=ValgenCommand,
    examples="""\
  valgen generate -t User models.py
  valgen generate -t User,Address src/models/
  valgen generate -t User -o - models.py > user_schema.py
  valgen generate -t User --locale es -o schemas/user.py models.py
  valgen --json generate -t User models.py""",
)
@click.option(
    "-t",
    "--type",
    "type_names",
    required=True,
    callback=_split_types,
    help="Comma-separated list of type names.",
)
@click.option(
    "-o",
    "--output",
    default=None,
    help="Output file (default <type>_schema.py beside the source; '-' for stdout).",
)
@locale_option
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.pass_obj
def generate(
    app: AppContext,
    type_names: list[str],
    output: str | None,
    locale: str | None,
    paths: tuple[Path, ...],
) -> None:
    """Generate validation code for TYPE_NAMES found in PATHS (default: current directory)."""
    from valgen.services.generate import STDOUT, GenerateService

    result = GenerateService(app.settings).generate(
        type_names,
        list(paths) or [Path(".")],
        output=output,
        locale=locale,
    )
    if output == STDOUT:
        app.emit_source(result)
    else:
        app.emit(result)
