"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from display_icc.output.console import create_console, get_output, style_for_color_space

if TYPE_CHECKING:
    from rich.console import Console

    from display_icc.services.result import ServiceResult


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

    if result.op == "list_displays":
        return "\n".join(str(d.get("id", "")) for d in result.data.get("displays", []))
    if result.op == "export_profile":
        return str(result.data.get("path", ""))
    if result.op == "display_info":
        profile = result.data.get("profile") or {}
        return str(profile.get("name", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="icc.ok")
    op = Text(f"  {result.op}", style="icc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="icc.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="icc.id")
    elif key in ("path", "file"):
        v = Text(str(value), style="icc.path")
    elif key in ("name", "profile", "display"):
        v = Text(str(value), style="icc.name")
    elif key == "color_space":
        v = Text(str(value), style=style_for_color_space(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


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
            console.print(f"    {k}: {v}")


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

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"

    backend = span_data.get("backend")
    if backend:
        line += f" via {backend}"
    outcome = span_data.get("outcome")
    if outcome:
        outcome_style = "green" if outcome == "ok" else "red"
        line += f"  [{outcome_style}]{outcome}[/{outcome_style}]"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _header_value(value: Any) -> str:
    if value is None:
        return "—"
    # Quoted so trailing spaces in signatures ("RGB ") stay visible.
    if isinstance(value, str):
        return repr(value)
    return str(value)


def _header_table(header: dict[str, Any]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Field", style="icc.key", no_wrap=True)
    table.add_column("Value")
    for key, value in header.items():
        table.add_row(key, _header_value(value))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="icc.error")
    op = Text(f"  {result.op}", style="icc.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_display_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one display with its profile, and the ICC header when present."""
    d = result.data
    display = d.get("display", {})
    profile = d.get("profile", {})

    _status_line(console, result)
    _field(console, "display", display.get("name", ""))
    _field(console, "display_id", display.get("id", ""))
    _field(console, "primary", "yes" if display.get("is_primary") else "no")
    _field(console, "profile", profile.get("name", ""))
    if profile.get("description"):
        _field(console, "description", profile["description"])
    if profile.get("file_path"):
        _field(console, "file", profile["file_path"])
    _field(console, "color_space", profile.get("color_space", "Unknown"))

    if "icc_size" in d:
        _field(console, "icc_size", f"{d['icc_size']} bytes")
    if d.get("header"):
        console.print()
        console.print(_header_table(d["header"]))

    if verbose:
        _render_meta(console, result)


def _render_display_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render every display as a table row."""
    displays = result.data.get("displays", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="icc.id", no_wrap=True)
    table.add_column("Name", style="icc.name")
    table.add_column("Primary", style="icc.primary")
    table.add_column("Profile")
    table.add_column("Color Space")
    if verbose:
        table.add_column("File", style="icc.path")

    for item in displays:
        profile = item.get("profile")
        if profile:
            profile_cell = Text(str(profile.get("name", "")))
            space = str(profile.get("color_space", ""))
            space_cell = Text(space, style=style_for_color_space(space))
            file_cell = str(profile.get("file_path") or "")
        elif item.get("error"):
            profile_cell = Text(str(item["error"]), style="icc.error")
            space_cell = Text("")
            file_cell = ""
        else:
            profile_cell = Text("no profile", style="dim")
            space_cell = Text("")
            file_cell = ""

        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            "*" if item.get("is_primary") else "",
            profile_cell,
            space_cell,
        ]
        if verbose:
            row.append(file_cell)
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(displays))} displays")
    if verbose:
        _render_meta(console, result)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "display", d.get("display", {}).get("name", ""))
    _field(console, "profile", d.get("profile", ""))
    _field(console, "path", d.get("path", ""))
    _field(console, "bytes", d.get("bytes", 0))
    if verbose:
        _render_meta(console, result)


def _render_header(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "source", d.get("source", ""))
    _field(console, "size", f"{d.get('size', 0)} bytes")
    if "valid" in d:
        _field(console, "valid", "yes" if d["valid"] else "no")
    console.print()
    console.print(_header_table(d.get("header", {})))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "display_info": _render_display_info,
    "list_displays": _render_display_list,
    "export_profile": _render_export,
    "icc_header": _render_header,
}
