"""Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO); the caller
gets plain text back. Renderers are dispatched by ``result.op``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from chartlower.output.console import create_console, get_output, style_for_scale

if TYPE_CHECKING:
    from rich.console import Console

    from chartlower.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


def _compact(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cl.ok"), Text(f"  {result.op}", style="cl.op"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="cl.key"), Text(_compact(value)))
    if verbose and result.meta:
        console.print(Text(f"  meta: {_compact(result.meta)}", style="dim"))


def _render_compile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)

    scales = Table(title="scales", show_edge=False)
    scales.add_column("name", style="cl.name")
    scales.add_column("type")
    scales.add_column("domain")
    for scale in result.data.get("scales", []):
        scale_type = str(scale.get("type", ""))
        scales.add_row(
            scale["name"],
            Text(scale_type, style=style_for_scale(scale_type)),
            Text(_compact(scale.get("domain"))),
        )
    console.print(scales)

    datasets = Table(title="data", show_edge=False)
    datasets.add_column("name", style="cl.name")
    datasets.add_column("transforms")
    for dataset in result.data.get("data", []):
        exprs = [t.get("expr") or t["type"] for t in dataset.get("transform", [])]
        datasets.add_row(dataset["name"], Text("\n".join(exprs)))
    console.print(datasets)

    if verbose and result.meta:
        console.print(Text(f"  meta: {_compact(result.meta)}", style="dim"))


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = result.error.code if result.error else "UNKNOWN"
    console.print(Text("ERROR", style="cl.error"), Text(f"  {result.op} [{code}]", style="cl.op"))
    console.print(f"  {msg}")


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "compile": _render_compile,
}
