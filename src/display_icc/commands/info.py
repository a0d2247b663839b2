"""Command: profile of a single display."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from display_icc.commands._base import IccCommand

if TYPE_CHECKING:
    from display_icc.commands._context import AppContext


@click.command(
    cls=IccCommand,
    examples="""\
  display-icc info
  display-icc info --display secondary
  display-icc -v info
  display-icc --json info""",
)
@click.option("-d", "--display", "display_id", default=None, help="Display id (default: primary).")
@click.pass_obj
def info(app: AppContext, display_id: str | None) -> None:
    """Show the ICC profile assigned to a display."""
    svc = app.service("display_info")
    app.emit(svc.display_info(display_id, include_header=app.settings.verbose))
