"""Module renderer — fixed scaffolding around generated validators.

The scaffold (rule-kind classes, message table, message formatter) is
emitted once per output module, followed by the generator's validators
and schema classes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from jinja2 import Environment

MODULE_TEMPLATE = "module.py.j2"


def render_module(
    env: Environment,
    *,
    source: str,
    locale: str,
    type_names: Sequence[str],
    rule_names: Sequence[str],
    messages: Mapping[str, str],
    validators: Sequence[str],
    schemas: Sequence[str],
) -> str:
    """Render one complete generated module.

    ``rule_names`` drives import bookkeeping: ``re`` is only imported when a
    pattern rule is present.
    """
    template = env.get_template(MODULE_TEMPLATE)
    return template.render(
        source=source or "<memory>",
        locale=locale,
        type_names=list(type_names),
        rule_names=set(rule_names),
        messages=dict(messages),
        validators=list(validators),
        schemas=list(schemas),
    )
