"""Command: list message templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valgen.commands._base import ValgenCommand, locale_option

if TYPE_CHECKING:
    from valgen.commands._context import AppContext


@click.command(
    cls=ValgenCommand,
    examples="""\
  valgen messages
  valgen messages --locale es
  valgen --json messages""",
)
@locale_option
@click.pass_obj
def messages(app: AppContext, locale: str | None) -> None:
    """List the message templates of a locale."""
    from valgen.services.explain import ExplainService

    app.emit(ExplainService(app.settings).messages(locale=locale))
