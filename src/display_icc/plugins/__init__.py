"""Extension layer — backend plugins via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from display_icc.plugins.hookspecs import hookimpl
from display_icc.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
