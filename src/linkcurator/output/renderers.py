"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

User content (link text, paths, prompts) is always wrapped in
:class:`rich.text.Text` so brackets in note names are never parsed as
console markup.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linkcurator.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from linkcurator.services.result import ServiceResult

EMPTY_VAULT_MESSAGE = "No unresolved links found."
NO_MATCHES_MESSAGE = "No links match your search."
FOLDER_HEADING = "📂 {name} ({count})"


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
    """Render minimal output for ``--quiet`` mode: one link text per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = _flat_items(result.data)
    if items or result.op in ("scan", "list_links"):
        return "\n".join(str(item.get("link_text", "")) for item in items)
    if result.op == "prompt":
        return str(result.data.get("prompt", ""))
    if result.op == "templates":
        return "\n".join(str(t.get("name", "")) for t in result.data.get("items", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _flat_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Link items from either a flat ``items`` list or folder ``groups``."""
    groups = data.get("groups")
    if isinstance(groups, list):
        return [item for group in groups for item in group.get("items", [])]
    items = data.get("items")
    if isinstance(items, list) and items and "link_text" in items[0]:
        return items
    return []


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lc.ok")
    op = Text(f"  {result.op}", style="lc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    line = Text(f"  {key}: ", style="lc.key")
    if key.endswith("path"):
        line.append(str(value), style="lc.path")
    elif key in ("link_text", "template"):
        line.append(str(value), style="lc.link")
    else:
        line.append(str(value))
    console.print(line)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")

    annotations = span_data.get("annotations") or {}
    if annotations:
        extras = ", ".join(f"{ak}={av}" for ak, av in annotations.items())
        line.append(f"  ({extras})")

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _link_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table of unresolved links.

    Only the first referencing note is listed unless *verbose*.
    """
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Link", style="lc.link")
    table.add_column("Refs", style="lc.freq", justify="right")
    table.add_column("Referenced in", style="lc.path")

    for item in items:
        sources = [str(s) for s in item.get("source_files", [])]
        if verbose or len(sources) <= 1:
            where = "\n".join(sources)
        else:
            where = f"{sources[0]} (+{len(sources) - 1} more)"
        table.add_row(
            Text(str(item.get("link_text", ""))),
            str(item.get("frequency", "")),
            Text(where),
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lc.error")
    op = Text(f"  {result.op}", style="lc.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Link renderers ────────────────────────────────────────────────────


def _render_scan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render scan summary, plus the registry in discovery order when verbose."""
    d = result.data
    count = d.get("count", 0)
    _status_line(console, result)
    _field(console, "documents", d.get("documents", 0))
    _field(console, "unresolved_links", count)
    _field(console, "unresolved_references", d.get("unresolved_references", 0))
    if d.get("skipped"):
        _field(console, "skipped", d["skipped"])
    console.print(f"\nScan complete. Found {count} unresolved links.")

    if verbose:
        if d.get("items"):
            console.print()
            console.print(_link_table(d["items"], verbose=True))
        _render_meta(console, result)


def _render_links(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_links as one table, or one table per folder group."""
    d = result.data
    if not d.get("count"):
        console.print(EMPTY_VAULT_MESSAGE if not d.get("total") else NO_MATCHES_MESSAGE)
        return

    groups = d.get("groups")
    if groups is not None:
        for i, group in enumerate(groups):
            if i:
                console.print()
            heading = FOLDER_HEADING.format(name=group.get("label", ""), count=group.get("count"))
            console.print(Text(heading, style="lc.folder"))
            console.print(_link_table(group.get("items", []), verbose=verbose))
    else:
        console.print(_link_table(d.get("items", []), verbose=verbose))

    summary = f"\n{d['count']} of {d.get('total', d['count'])} unresolved links"
    if d.get("query"):
        summary += f' matching "{d["query"]}"'
    console.print(Text(summary))
    if verbose:
        _render_meta(console, result)


# ── Prompt renderers ──────────────────────────────────────────────────


def _render_templates(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render configured prompt templates as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=verbose, pad_edge=False, expand=False)
    table.add_column("Name", style="lc.template")
    table.add_column("Default", justify="center")
    table.add_column("Placeholders", style="dim")
    table.add_column("Prompt")
    for item in items:
        prompt = str(item.get("prompt", ""))
        if not verbose and len(prompt) > 60:
            prompt = prompt[:57] + "..."
        table.add_row(
            Text(str(item.get("name", ""))),
            "*" if item.get("default") else "",
            Text(", ".join(item.get("placeholders", []))),
            Text(prompt),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} templates")


def _render_prompt(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a rendered prompt in a panel."""
    d = result.data
    title = Text(f"{d.get('link_text', '?')} — {d.get('template', '?')}")
    console.print(Panel(Text(str(d.get("prompt", ""))), title=title, expand=False))
    _field(console, "note_path", d.get("note_path", ""))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "scan": _render_scan,
    "list_links": _render_links,
    "templates": _render_templates,
    "prompt": _render_prompt,
}
