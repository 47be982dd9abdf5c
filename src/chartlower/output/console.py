"""Rich Console factory and theme for chartlower output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHART_THEME = Theme(
    {
        "cl.ok": "bold green",
        "cl.error": "bold red",
        "cl.warning": "bold yellow",
        "cl.op": "bold cyan",
        "cl.key": "dim",
        "cl.name": "bold blue",
        "cl.scale.ordinal": "magenta",
        "cl.scale.linear": "green",
        "cl.scale.time": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CHART_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_scale(scale_type: str) -> str:
    """Return the Rich style name for a scale type."""
    if scale_type in ("ordinal", "linear", "time"):
        return f"cl.scale.{scale_type}"
    return ""
