"""Subcommand modules for chartlower.

Provides register_commands() which uses deferred imports to keep
``chartlower --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from chartlower.commands.compile import compile_cmd

    cli.add_command(compile_cmd)
