"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by the ``result.op`` prefix in
:func:`render_result`. Unknown ops fall through to a generic key-value
renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from ppectl.config.models import DisplayConfig
from ppectl.domain.types import PLURALS, EntityKind
from ppectl.output.console import create_console, get_output
from ppectl.output.formatters import format_row

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from ppectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    display: DisplayConfig | None = None,
    verbose: bool = False,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    display = display or DisplayConfig()

    if result.ok:
        prefix = result.op.split("_", 1)[0]
        renderer = _OP_RENDERERS.get(prefix, _render_generic)
        renderer(result, console, display, verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        if not items:
            return f"EMPTY: {result.op}"
        return "\n".join(str(item.get("id", "")) for item in items)

    if result.status:
        return f"{result.status.upper()}: {result.op}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "ppe.ok"), (f"  {result.op}", "ppe.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if key == "id" or key.endswith("_id"):
        style = "ppe.id"
    elif key == "index":
        style = "ppe.index"
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "ppe.key"), (str(value), style)))


def _record_line(console: Console, row: dict[str, Any], display: DisplayConfig) -> None:
    """Print ``{index} - {fixed-width record}``."""
    index = Text(f"{row['index']}", style="ppe.index")
    console.print(index, Text(f"- {format_row(row, display)}"), soft_wrap=True)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text.assemble(
        ("ERROR", "ppe.error"),
        (f"  {result.op}", "ppe.op"),
        (f" [{err.code}]" if err else "", "ppe.key"),
        f" — {msg}",
    )
    console.print(line, soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Success renderers ─────────────────────────────────────────────────


def _render_list(
    result: ServiceResult, console: Console, display: DisplayConfig, verbose: bool
) -> None:
    """``list_*``: one line per record, or the empty-store message."""
    if result.data.get("empty", True):
        noun = PLURALS[EntityKind(result.data["kind"])]
        console.print(Text(f"No {noun} registered.", style="ppe.empty"))
        return
    for row in result.data.get("items", []):
        _record_line(console, row, display)
    _render_warnings(console, result, verbose)


def _render_record(
    result: ServiceResult, console: Console, display: DisplayConfig, verbose: bool
) -> None:
    """``get_*``: a single record line."""
    _record_line(console, result.data, display)
    if verbose:
        _field(console, "id", result.data.get("id"))
    _render_warnings(console, result, verbose)


def _render_mutation(
    result: ServiceResult, console: Console, display: DisplayConfig, verbose: bool
) -> None:
    """``register_*``/``update_*``: status, identity, then the record line."""
    _status_line(console, result)
    _field(console, "id", result.data.get("id"))
    _field(console, "index", result.data.get("index"))
    changed = result.data.get("fields_changed")
    if changed is not None:
        _field(console, "fields_changed", ", ".join(changed) or "none")
    if "kind" in result.data:
        _record_line(console, result.data, display)
    _render_warnings(console, result, verbose)


def _render_removal(
    result: ServiceResult, console: Console, display: DisplayConfig, verbose: bool
) -> None:
    """``remove_*``: removed and declined are reported distinctly."""
    if result.status == "declined":
        console.print(Text.assemble(("DECLINED", "ppe.declined"), (f"  {result.op}", "ppe.op")))
        console.print(Text(f"  {result.data.get('id')} was not removed."))
        return
    _status_line(console, result)
    for key in ("status", "id", "index"):
        _field(console, key, result.data.get(key))
    _render_warnings(console, result, verbose)


def _render_generic(
    result: ServiceResult, console: Console, display: DisplayConfig, verbose: bool
) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    _render_warnings(console, result, verbose)


def _render_warnings(console: Console, result: ServiceResult, verbose: bool) -> None:
    """Warnings render inline only in verbose mode; the CLI routes them to stderr."""
    if not verbose:
        return
    for warning in result.warnings:
        console.print(Text("WARNING", style="ppe.warning"), Text(warning), soft_wrap=True)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console, DisplayConfig, bool], None]] = {
    "list": _render_list,
    "get": _render_record,
    "register": _render_mutation,
    "update": _render_mutation,
    "remove": _render_removal,
}
