"""Root CLI group for display-icc with global flags and command registration."""

from __future__ import annotations

import click

from display_icc import __version__
from display_icc.commands import register_commands
from display_icc.commands._context import AppContext
from display_icc.config.settings import DisplayIccSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="display-icc")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with ICC header and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--no-fallback", is_flag=True, help="Fail on the first backend error.")
@click.option("--prefer-command", is_flag=True, help="Skip the D-Bus channel; query via colormgr.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    no_fallback: bool,
    prefer_command: bool,
) -> None:
    """display-icc — query ICC color profiles of connected displays."""
    ctx.ensure_object(dict)
    settings = DisplayIccSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_fallback=no_fallback,
        prefer_command=prefer_command,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
