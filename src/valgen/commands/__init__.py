"""Subcommand modules for valgen.

Provides register_commands() which uses deferred imports to keep
``valgen --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from valgen.commands.explain import explain
    from valgen.commands.generate import generate
    from valgen.commands.messages import messages

    cli.add_command(generate)
    cli.add_command(explain)
    cli.add_command(messages)
