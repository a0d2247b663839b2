"""Command: write a display's ICC profile to disk."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from display_icc.commands._base import IccCommand

if TYPE_CHECKING:
    from display_icc.commands._context import AppContext


@click.command(
    cls=IccCommand,
    examples="""\
  display-icc export -o display.icc
  display-icc export -o ~/profiles/external.icc --display monitor_1
  display-icc -q export -o display.icc""",
)
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination file for the raw profile bytes.",
)
@click.option("-d", "--display", "display_id", default=None, help="Display id (default: primary).")
@click.pass_obj
def export(app: AppContext, output: Path, display_id: str | None) -> None:
    """Export the raw ICC profile of a display."""
    svc = app.service("export_profile")
    app.emit(svc.export_profile(output.expanduser(), display_id))
