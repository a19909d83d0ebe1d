"""Rich Console factory and theme for valgen output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VALGEN_THEME = Theme(
    {
        "val.ok": "bold green",
        "val.error": "bold red",
        "val.warning": "bold yellow",
        "val.op": "bold cyan",
        "val.key": "dim",
        "val.path": "dim",
        "val.func": "bold blue",
        "val.kind.presence": "green",
        "val.kind.value_constraint": "blue",
        "val.kind.range": "magenta",
        "val.kind.conditional": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VALGEN_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a rule kind."""
    return f"val.kind.{kind}" if kind else ""
