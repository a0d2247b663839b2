"""Subcommand modules for display-icc.

Provides register_commands() which uses deferred imports to keep
``display-icc --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from display_icc.commands.export import export
    from display_icc.commands.header import header
    from display_icc.commands.info import info
    from display_icc.commands.list_cmd import list_cmd

    cli.add_command(info)
    cli.add_command(list_cmd)
    cli.add_command(export)
    cli.add_command(header)
