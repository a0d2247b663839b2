"""Tests for PluginManager — discovery, registration, and backend collection."""

from __future__ import annotations

import logging

import pytest

from display_icc.backends.base import Backend
from display_icc.backends.static import StaticBackend
from display_icc.domain.types import Platform
from display_icc.plugins import hookimpl
from display_icc.plugins.manager import PluginManager


class _LinuxOnlyPlugin:
    @hookimpl
    def display_icc_backends(self, platform: Platform) -> list[Backend] | None:
        if platform is not Platform.LINUX:
            return None
        return [StaticBackend.with_test_data("xrandr-edid")]


class _BrokenPlugin:
    @hookimpl
    def display_icc_backends(self, platform: Platform) -> list[Backend] | None:
        raise RuntimeError("plugin bug")


class _SloppyPlugin:
    @hookimpl
    def display_icc_backends(self, platform: Platform) -> list[Backend] | None:
        return ["not a backend", StaticBackend("sloppy")]  # type: ignore[list-item]


class TestRegistration:
    def test_register_named(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_LinuxOnlyPlugin(), name="edid")
        assert pm.list_plugin_names() == ["edid"]

    def test_register_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_LinuxOnlyPlugin())
        assert "_LinuxOnlyPlugin" in pm.list_plugin_names()

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = _LinuxOnlyPlugin()
        pm.register_plugin(plugin)
        pm.unregister(plugin)
        assert pm.get_plugins() == []


class TestCollectBackends:
    def test_platform_specific(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_LinuxOnlyPlugin())
        assert [b.name for b in pm.collect_backends(Platform.LINUX)] == ["xrandr-edid"]
        assert pm.collect_backends(Platform.MACOS) == []

    def test_failing_plugin_isolated(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_BrokenPlugin(), name="broken")
        pm.register_plugin(_LinuxOnlyPlugin(), name="edid")
        with caplog.at_level(logging.WARNING, logger="display_icc.plugins.manager"):
            backends = pm.collect_backends(Platform.LINUX)
        assert [b.name for b in backends] == ["xrandr-edid"]
        assert "Plugin broken failed" in caplog.text

    def test_non_backend_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        pm = PluginManager()
        pm.register_plugin(_SloppyPlugin(), name="sloppy")
        with caplog.at_level(logging.WARNING, logger="display_icc.plugins.manager"):
            backends = pm.collect_backends(Platform.WINDOWS)
        assert [b.name for b in backends] == ["sloppy"]
        assert "non-Backend" in caplog.text


class TestDiscovery:
    def test_no_entry_points(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pm = PluginManager()
        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", lambda group: 0)
        assert pm.discover_and_load() == []
        assert pm.is_loaded

    def test_class_plugins_instantiated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pm = PluginManager()

        def load(group: str) -> int:
            assert group == "display_icc.plugins"
            pm._pm.register(_LinuxOnlyPlugin, name="edid")
            return 1

        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", load)
        assert pm.discover_and_load() == ["edid"]
        (plugin,) = pm.get_plugins()
        assert isinstance(plugin, _LinuxOnlyPlugin)
        assert len(pm.collect_backends(Platform.LINUX)) == 1

    def test_entry_point_failure_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        pm = PluginManager()

        def load(group: str) -> int:
            raise ImportError("missing module")

        monkeypatch.setattr(pm._pm, "load_setuptools_entrypoints", load)
        with caplog.at_level(logging.WARNING, logger="display_icc.plugins.manager"):
            assert pm.discover_and_load() == []
        assert "Failed to load display_icc.plugins entry points" in caplog.text
