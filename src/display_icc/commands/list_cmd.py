"""Command: every display with its profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from display_icc.commands._base import IccCommand

if TYPE_CHECKING:
    from display_icc.commands._context import AppContext


@click.command(
    "list",
    cls=IccCommand,
    examples="""\
  display-icc list
  display-icc -q list
  display-icc --no-fallback list
  display-icc --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List connected displays and their ICC profiles."""
    app.emit(app.service("list_displays").list_displays())
