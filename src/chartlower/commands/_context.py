"""Per-invocation state handed from the root group to each command.

The root group builds one :class:`AppContext` from the resolved
settings; commands receive it through ``@click.pass_obj`` and hand
their ServiceResult to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chartlower.config.logging import configure_logging
from chartlower.output.formatters import OutputSettings, format_result
from chartlower.services.telemetry import set_tracing

if TYPE_CHECKING:
    from chartlower.config.settings import ChartSettings
    from chartlower.services.result import ServiceResult


class AppContext:
    """Settings plus the output policy derived from them."""

    def __init__(self, settings: ChartSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        # Pass breakdowns only end up in results of verbose runs.
        set_tracing(settings.verbose)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits with status 1.

        Warnings of a successful human-readable run are echoed to stderr
        so stdout stays pipeable; JSON output already carries them.
        """
        rendered = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)

        click.echo(rendered)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
