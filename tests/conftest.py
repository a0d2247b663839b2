"""Shared pytest fixtures and test helpers for display-icc tests."""

from __future__ import annotations

import logging
import struct
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from display_icc.backends.static import StaticBackend
from display_icc.domain.icc import build_header
from display_icc.services.provider import ProfileProvider
from display_icc.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """``-v`` turns telemetry on for the rest of the thread; turn it back off."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the root handler and levels installed by configure_logging()."""
    root = logging.getLogger()
    original_level = root.level
    levels = {name: logging.getLogger(name).level for name in ("display_icc", "display_icc_plugins")}
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(original_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def icc_profile() -> bytes:
    """A 256-byte monitor profile with every header field populated."""
    data = bytearray(
        build_header(
            profile_size=3144,
            preferred_cmm="lcms",
            version=0x04300000,
            device_class="mntr",
            data_color_space="RGB ",
            connection_space="XYZ ",
        )
    )
    data[24:36] = struct.pack(">6H", 2024, 1, 15, 10, 30, 0)
    data[40:44] = b"APPL"
    data[44:48] = (1).to_bytes(4, "big")
    data[48:52] = b"SAMS"
    data[52:56] = b"ABCD"
    return bytes(data) + b"\x00" * 128


@pytest.fixture
def static_backend() -> StaticBackend:
    """Two displays: ``primary`` (sRGB) and ``secondary`` (Display P3)."""
    return StaticBackend.with_test_data()


@pytest.fixture
def provider(static_backend: StaticBackend) -> ProfileProvider:
    return ProfileProvider([static_backend])


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no config env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_config")``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DISPLAY_ICC_CONFIG", raising=False)
    for var in (
        "DISPLAY_ICC_RESOLUTION__FALLBACK_ENABLED",
        "DISPLAY_ICC_RESOLUTION__PREFER_SECONDARY_CHANNEL",
        "DISPLAY_ICC_JSON_OUTPUT",
        "DISPLAY_ICC_QUIET",
        "DISPLAY_ICC_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def static_host(
    static_backend: StaticBackend,
    monkeypatch: pytest.MonkeyPatch,
    _isolated_config: None,
) -> StaticBackend:
    """Make the CLI resolve against ``static_backend`` instead of the real host.

    The provider keeps the ProfileConfig the CLI derives from its flags.
    """
    import display_icc.api

    def fake_create_provider(config=None, **_kwargs) -> ProfileProvider:  # noqa: ANN001
        return ProfileProvider([static_backend], config)

    monkeypatch.setattr(display_icc.api, "create_provider", fake_create_provider)
    return static_backend
