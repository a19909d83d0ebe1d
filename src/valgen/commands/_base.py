"""Custom Click base classes and shared options for valgen commands.

ValgenCommand and ValgenGroup accept an ``examples`` parameter. When
``--examples`` is passed, the command prints usage examples and exits;
``--help`` stays concise and only points at the flag.

``locale_option`` is the ``--locale`` flag shared by every command that
renders failure messages.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

EXAMPLES_HINT = "Run with --examples for usage examples."


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


def _normalize_locale(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> str | None:
    if value is None:
        return None
    locale = value.strip()
    if not locale:
        raise click.BadParameter("locale must not be empty")
    return locale


def locale_option[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Apply the ``--locale`` flag; ``None`` defers to ``[generate] locale``."""
    return click.option(
        "--locale",
        default=None,
        callback=_normalize_locale,
        help="Message locale (default from config, 'en').",
    )(func)


class ValgenCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        if examples and not kwargs.get("epilog"):
            kwargs["epilog"] = EXAMPLES_HINT
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class ValgenGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = ValgenCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = ValgenCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        if examples and not kwargs.get("epilog"):
            kwargs["epilog"] = EXAMPLES_HINT
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
