"""Command: lower a chart spec file to scale and data blocks."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from chartlower.commands._base import ChartCommand

if TYPE_CHECKING:
    from chartlower.commands._context import AppContext


@click.command(
    "compile",
    cls=ChartCommand,
    examples="""\
  chartlower compile bar.json
  chartlower --json compile facet.json
  chartlower compile bar.json --output lowered.json""",
)
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the lowered scales and data as JSON to this file.",
)
@click.pass_obj
def compile_cmd(app: AppContext, spec_file: Path, output_file: Path | None) -> None:
    """Compile scales and layout data for SPEC_FILE (JSON)."""
    from chartlower.services.compile import CompileService
    from chartlower.services.result import ServiceResult

    try:
        spec = json.loads(spec_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        app.emit(ServiceResult.failure("compile", "INVALID_JSON", f"{spec_file}: {exc}"))
        return

    result = CompileService(app.settings.compile_config).compile(spec)
    if result.ok and output_file is not None:
        output_file.write_text(json.dumps(result.data, indent=2), encoding="utf-8")
    app.emit(result)
