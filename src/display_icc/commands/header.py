"""Command: decode the 128-byte ICC header."""

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
  display-icc header
  display-icc header --display secondary
  display-icc header --file /usr/share/color/icc/sRGB.icc
  display-icc header --file profile.icc --validate""",
)
@click.option("-d", "--display", "display_id", default=None, help="Display id (default: primary).")
@click.option(
    "-f",
    "--file",
    "file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read the header from a local profile instead of a display.",
)
@click.option("--validate", is_flag=True, help="Also check the header for structural consistency.")
@click.pass_obj
def header(app: AppContext, display_id: str | None, file: Path | None, validate: bool) -> None:
    """Show the parsed ICC header of a display profile or a file."""
    if file is not None and display_id is not None:
        raise click.UsageError("--display and --file are mutually exclusive.")

    from display_icc.services.profile import ProfileService
    from display_icc.services.provider import ProfileProvider

    # A local file needs no backends.
    svc = ProfileService(ProfileProvider([])) if file is not None else app.service("icc_header")
    app.emit(svc.icc_header(display_id=display_id, file=file, validate=validate))
