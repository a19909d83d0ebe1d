"""Command: show how a rule annotation parses."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from valgen.commands._base import ValgenCommand, locale_option
from valgen.domain.types import TypeClass

if TYPE_CHECKING:
    from valgen.commands._context import AppContext


@click.command(
    cls=ValgenCommand,
    examples="""\
  valgen explain "required;min=1"
  valgen explain "required;between=3,20" --type string --field Name
  valgen explain "required_if:Role=admin" --field Email
  valgen --json explain "email" --type string""",
)
@click.argument("tag")
@click.option(
    "--type",
    "type_class",
    type=click.Choice([t.value for t in TypeClass]),
    default=TypeClass.SIGNED.value,
    show_default=True,
    help="Type classification of the annotated field.",
)
@click.option("--field", "field_name", default="Field", show_default=True, help="Field name.")
@locale_option
@click.pass_obj
def explain(
    app: AppContext,
    tag: str,
    type_class: str,
    field_name: str,
    locale: str | None,
) -> None:
    """Classify each rule in TAG and preview its failure message."""
    from valgen.services.explain import ExplainService

    app.emit(
        ExplainService(app.settings).explain(
            tag, type_class=TypeClass(type_class), field=field_name, locale=locale
        )
    )
