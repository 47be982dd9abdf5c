"""Click command class that can print worked examples on request.

``chartlower compile --examples`` prints sample invocations and exits,
so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


class ChartCommand(click.Command):
    """A command with an optional block of example invocations."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params = super().get_params(ctx)
        if not self.examples:
            return params
        flag = click.Option(
            ["--examples"],
            is_flag=True,
            is_eager=True,
            expose_value=False,
            callback=self._print_examples,
            help="Show usage examples.",
        )
        return [*params, flag]

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit()
