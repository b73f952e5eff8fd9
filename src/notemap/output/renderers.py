"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from notemap.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from notemap.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
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
    endpoint = result.data.get("endpoint")
    if endpoint:
        return str(endpoint)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="nm.ok"), Text(f"  {result.op}", style="nm.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    console.print(Text(f"  {key}: ", style="nm.key"), Text(str(value), style=style), sep="", soft_wrap=True)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="nm.error"), Text(f"  {result.op}", style="nm.op"), " — ", Text(msg))
    if verbose and err and err.detail:
        for key, value in err.detail.items():
            _field(console, key, value)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_rewrite(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    rewritten = data.get("rewritten", [])
    skipped = data.get("skipped", [])

    if rewritten or skipped:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Field", style="nm.field")
        table.add_column("Status")
        for label in rewritten:
            table.add_row(label, Text("rewritten", style="nm.ok"))
        for label in skipped:
            table.add_row(label, Text("unchanged", style="nm.warning"))
        console.print(table)
    else:
        console.print(Text("  no short-form references found", style="nm.key"))

    if data.get("projection_name_removed"):
        _field(console, "projection", "name removed")
    if verbose:
        _field(console, "sprite", data.get("sprite"))


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "source", data.get("source"))
    if data.get("url"):
        _field(console, "url", data["url"], style="nm.url")
    rewritten = data.get("rewritten") or []
    _field(console, "rewritten", len(rewritten))
    if verbose:
        for label in rewritten:
            console.print(Text(f"    {label}", style="nm.field"))


def _render_classify(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "reference", data.get("reference"))
    kind = data.get("kind")
    _field(console, "kind", kind or "none (pass-through)", style=style_for_kind(kind))
    if data.get("endpoint"):
        _field(console, "endpoint", data["endpoint"], style="nm.url")
    elif not data.get("proprietary"):
        _field(console, "endpoint", "not a mapbox: reference")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "rewrite_style": _render_rewrite,
    "resolve_style": _render_resolve,
    "classify_reference": _render_classify,
}
