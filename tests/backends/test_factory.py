"""Tests for per-platform backend chains."""

from __future__ import annotations

from pathlib import Path

from display_icc.backends.builtin import BuiltinBackend
from display_icc.backends.colord_dbus import ColordDbusBackend
from display_icc.backends.colormgr import ColormgrBackend
from display_icc.backends.factory import describe_platform
from display_icc.backends.filesystem import FilesystemBackend
from display_icc.backends.quartz import QuartzBackend
from display_icc.backends.static import StaticBackend
from display_icc.backends.windows import ColorDirectoryBackend, GdiBackend, RegistryBackend
from display_icc.config.models import BackendsConfig
from display_icc.domain.types import Platform


def _types(backends: list) -> list[type]:  # noqa: ANN001
    return [type(b) for b in backends]


class TestDescribePlatform:
    def test_linux_chain(self) -> None:
        chain = describe_platform(Platform.LINUX).chain()
        assert _types(chain) == [ColordDbusBackend, ColormgrBackend, FilesystemBackend]
        assert chain[0].preferred is True

    def test_linux_without_dbus(self) -> None:
        chain = describe_platform(Platform.LINUX, BackendsConfig(dbus_enabled=False)).chain()
        assert _types(chain) == [ColormgrBackend, FilesystemBackend]

    def test_linux_extra_profile_dirs(self, tmp_path: Path) -> None:
        descriptor = describe_platform(Platform.LINUX, BackendsConfig(profile_dirs=[tmp_path]))
        (fs,) = descriptor.fallbacks
        assert fs.directories[-1] == tmp_path

    def test_windows_chain(self) -> None:
        chain = describe_platform(Platform.WINDOWS).chain()
        assert _types(chain) == [GdiBackend, RegistryBackend, ColorDirectoryBackend, BuiltinBackend]

    def test_macos_chain(self) -> None:
        chain = describe_platform(Platform.MACOS).chain()
        assert _types(chain) == [QuartzBackend, BuiltinBackend]

    def test_plugins_before_fallbacks(self) -> None:
        plugin = StaticBackend("plugin")
        chain = describe_platform(Platform.MACOS).chain([plugin])
        assert chain[1] is plugin
        assert isinstance(chain[-1], BuiltinBackend)
