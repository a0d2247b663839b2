"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``DISPLAY_ICC_*`` prefix
  3. TOML file    — ``display_icc.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`display_icc.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from display_icc.config.discovery import find_config
from display_icc.config.models import (
    BackendsConfig,
    PluginsConfig,
    ProfileConfig,
    ResolutionConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``display_icc.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DisplayIccSettings(BaseSettings):
    """Unified settings for the display-icc CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    CLI's :class:`AppContext`.

    Attributes:
        config_path: The TOML file in effect, or None when none was found.
        no_fallback: ``--no-fallback``; forces ``fallback_enabled`` off.
        prefer_command: ``--prefer-command``; forces
            ``prefer_secondary_channel`` off.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DISPLAY_ICC_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_fallback: bool = False
    prefer_command: bool = False

    # --- TOML sections ---
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    backends: BackendsConfig = Field(default_factory=BackendsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def profile_config(self) -> ProfileConfig:
        """The engine policy: TOML/env ``[resolution]`` narrowed by CLI flags."""
        return ProfileConfig(
            prefer_secondary_channel=(
                self.resolution.prefer_secondary_channel and not self.prefer_command
            ),
            fallback_enabled=self.resolution.fallback_enabled and not self.no_fallback,
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> DisplayIccSettings:
        """Construct settings from CLI invocation.

        Discovers ``display_icc.toml`` via walk-up from *start_dir* (or uses
        the explicit *config_path*) and merges CLI flags as highest-priority
        overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start_dir)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
