"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy provider construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from display_icc.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from display_icc.config.settings import DisplayIccSettings
    from display_icc.services.profile import ProfileService
    from display_icc.services.provider import ProfileProvider
    from display_icc.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The provider is built
    on first use so ``--help`` and ``--version`` never probe the host's
    color-management services.
    """

    def __init__(self, settings: DisplayIccSettings) -> None:
        self.settings = settings
        self._provider: ProfileProvider | None = None

        from display_icc.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from display_icc.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def provider(self) -> ProfileProvider:
        """The profile provider for this host (created lazily on first access)."""
        if self._provider is None:
            from display_icc import api

            self._provider = api.create_provider(
                self.settings.profile_config,
                backends_config=self.settings.backends,
                load_plugins=self.settings.plugins.enabled,
            )
        return self._provider

    def service(self, op: str) -> ProfileService:
        """A ProfileService over the lazy provider.

        When no provider can be built for the host (unsupported platform),
        the failure is emitted as the result of *op* and the command exits.
        """
        from display_icc.domain.errors import ProfileError
        from display_icc.services.profile import ProfileService, error_result

        try:
            provider = self.provider
        except ProfileError as exc:
            self.emit(error_result(op, exc))
            raise
        return ProfileService(provider)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
