"""Plugin discovery and backend collection.

Discovery: entry points in the ``display_icc.plugins`` group, loaded through
pluggy's setuptools entry-point support. Plugins may also be registered
directly (tests, embedding applications).
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from display_icc.backends.base import Backend
from display_icc.domain.types import Platform
from display_icc.plugins.hookspecs import DisplayIccHookSpec

PROJECT_NAME = "display_icc"
ENTRY_POINT_GROUP = "display_icc.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and the backend hook."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DisplayIccHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins.

        A plugin that fails to import is logged as a warning and skipped.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load %s entry points", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def collect_backends(self, platform: Platform) -> list[Backend]:
        """Ask every plugin for backends on *platform*.

        Each plugin is called on its own so one failing plugin cannot hide
        the others. Non-Backend entries are dropped with a warning.
        """
        backends: list[Backend] = []
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "display_icc_backends", None)
            if hook is None:
                continue
            try:
                contributed = hook(platform=platform)
            except Exception:
                logger.warning(
                    "Plugin %s failed to provide backends",
                    plugin_name,
                    exc_info=True,
                )
                continue
            if not contributed:
                continue
            for backend in contributed:
                if not isinstance(backend, Backend):
                    logger.warning(
                        "Plugin %s returned a non-Backend object: %r",
                        plugin_name,
                        backend,
                    )
                    continue
                backends.append(backend)
            logger.debug("Plugin %s contributed %d backend(s)", plugin_name, len(contributed))
        return backends

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("display_icc")`` sets a ``display_icc_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "display_icc_impl", None):
                return True
        return False
