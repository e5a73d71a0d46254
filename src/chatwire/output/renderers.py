"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from chatwire.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from chatwire.services.result import ServiceResult

_PREVIEW_WIDTH = 60


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, indent: int = 2) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, indent=indent)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "encode":
        return json.dumps(result.data.get("payload", {}), separators=(",", ":"))
    if result.op == "check" and result.data.get("issues"):
        return "\n".join(f"{i['path']}: {i['kind']}" for i in result.data["issues"])
    if result.op == "schemas":
        return "\n".join(item["name"] for item in result.data.get("items", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _preview(value: Any) -> str:
    """Compact JSON preview of a wire value, truncated for table cells."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if len(text) > _PREVIEW_WIDTH:
        return text[: _PREVIEW_WIDTH - 1] + "…"
    return text


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="cw.ok")
    op = Text(f"  {result.op}", style="cw.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="cw.key")
    style = "cw.schema" if key == "schema" else ""
    console.print(k, Text(str(value), style=style), sep="")


def _issue_table(issues: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Path", style="cw.path", no_wrap=True)
    table.add_column("Kind", style="cw.kind")
    table.add_column("Message")
    for issue in issues:
        table.add_row(
            Text(issue.get("path") or "<root>"),
            Text(issue.get("kind", "")),
            Text(issue.get("message", "")),
        )
    return table


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    line = f"{prefix}[{style}]{duration:>9.3f}ms[/{style}]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="cw.error")
    op = Text(f"  {result.op}", style="cw.op")
    console.print(label, op, Text(f": {msg}"), sep="")
    if err is None:
        return

    issues = err.issues
    if issues:
        console.print(_issue_table(issues))
    elif verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_decode(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    """Field-by-field presence table for a decoded payload."""
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Field", no_wrap=True)
    table.add_column("State")
    table.add_column("Value")
    for row in data.get("fields", []):
        state = row.get("state", "")
        value = Text(_preview(row.get("value")) if state == "value" else "")
        table.add_row(row.get("wire_name", ""), Text(state, style=style_for_state(state)), value)
    console.print(table)

    unknown = data.get("unknown_fields") or []
    if unknown:
        _field(console, "unknown_fields", ", ".join(unknown))
    if verbose:
        _render_meta(console, result)


def _render_encode(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    """The canonical payload itself, so human output stays pipeable."""
    payload = result.data.get("payload", {})
    console.out(json.dumps(payload, indent=indent or None, ensure_ascii=False), highlight=False)
    if verbose:
        _render_meta(console, result)


def _render_check(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("schema", ""))
    _field(console, "valid", "yes" if data.get("valid") else "no")
    _field(console, "issues", data.get("count", 0))
    if data.get("issues"):
        console.print(_issue_table(data["issues"]))
    if verbose:
        _render_meta(console, result)


def _render_schemas(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Schema", style="cw.schema", no_wrap=True)
    table.add_column("Events")
    table.add_column("Fields", justify="right")
    if verbose:
        table.add_column("Description", style="dim")
    for item in result.data.get("items", []):
        row = [item["name"], ", ".join(item.get("events", [])), str(item.get("fields", 0))]
        if verbose:
            row.append(item.get("description", ""))
        table.add_row(*row)
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_schema(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "schema", data.get("name", ""))
    if data.get("events"):
        _field(console, "events", ", ".join(data["events"]))
    if data.get("description"):
        _field(console, "description", data["description"])

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Wire name", style="cw.path", no_wrap=True)
    table.add_column("Type")
    table.add_column("Presence")
    table.add_column("Notes", style="dim")
    for spec in data.get("fields", []):
        notes = "deprecated" if spec.get("deprecated") else ""
        table.add_row(spec["wire_name"], spec["type"], spec["presence"], notes)
    console.print(table)

    for alias in data.get("aliases", []):
        _field(console, "alias", f"{alias['legacy']} -> {alias['current']}")
    if verbose:
        _render_meta(console, result)


def _render_generic(
    result: ServiceResult, console: Console, *, verbose: bool = False, indent: int = 2
) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        shown = _preview(value) if isinstance(value, (dict, list)) else value
        _field(console, key, shown)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS = {
    "decode": _render_decode,
    "encode": _render_encode,
    "check": _render_check,
    "schemas": _render_schemas,
    "schema": _render_schema,
}
