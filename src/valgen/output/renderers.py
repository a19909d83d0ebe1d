"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from valgen.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from valgen.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "generate" and "output" in result.data:
        return str(result.data["output"])

    # For table results, return one key per line
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(_extract_key(item) for item in items if _extract_key(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    """Extract the identifying key from a dict item (function or rule name)."""
    if isinstance(item, dict):
        for key in ("function", "rule"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="val.ok")
    op = Text(f"  {result.op}", style="val.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="val.key")
    if key in ("output", "path"):
        v = Text(str(value), style="val.path")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="val.error")
    op = Text(f"  {result.op}", style="val.op")
    sep = Text(" — ")
    console.print(Text.assemble(label, op, sep, msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Generated module: destination, types, and counts; validator list when verbose."""
    d = result.data
    _status_line(console, result)
    if "output" in d:
        _field(console, "output", d["output"])
    _field(console, "types", ", ".join(d.get("types", [])))
    _field(console, "locale", d.get("locale", ""))
    _field(console, "rules", d.get("rules", 0))
    validators = d.get("validators", [])
    _field(console, "validators", len(validators))
    if verbose:
        for name in validators:
            console.print(Text(f"    {name}", style="val.func"))
        _render_meta(console, result)


def _render_explain(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """One row per rule token: classification, function, and message."""
    d = result.data
    _status_line(console, result)
    _field(console, "field", f"{d.get('field', '')} ({d.get('type', '')})")

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Function", style="val.func", no_wrap=True)
    table.add_column("Operands")
    if verbose:
        table.add_column("Token", style="dim", no_wrap=True)
    table.add_column("Message")

    for item in d.get("items", []):
        kind = item.get("kind", "")
        row = [
            Text(item.get("name", "")),
            Text(kind, style=style_for_kind(kind)),
            Text(item.get("function", "")),
            Text(_operands(item)),
        ]
        if verbose:
            row.append(Text(item.get("token", "")))
        row.append(Text(item.get("message", "")))
        table.add_row(*row)

    console.print(table)


def _operands(item: dict[str, Any]) -> str:
    parts: list[str] = []
    if item.get("field2"):
        parts.append(f"field2={item['field2']}")
    for key in ("cond1", "cond2"):
        if item.get(key) is not None:
            parts.append(f"{key}={item[key]!r}")
    return " ".join(parts)


def _render_messages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """The locale's templates, one row per rule."""
    d = result.data
    _status_line(console, result)
    _field(console, "locale", d.get("locale", ""))
    if verbose:
        _field(console, "available", ", ".join(d.get("locales", [])))

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Template")
    for item in d.get("items", []):
        table.add_row(Text(item.get("rule", "")), Text(item.get("template", "")))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "generate": _render_generate,
    "explain": _render_explain,
    "messages": _render_messages,
}
