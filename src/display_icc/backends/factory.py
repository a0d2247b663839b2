"""Platform descriptors — which backends exist on a host, in chain order.

Chain order is ``preferred -> baseline -> plugin -> fallbacks``. The engine
decides at call time whether a preferred backend is actually used.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from display_icc.backends.base import Backend
from display_icc.backends.builtin import BuiltinBackend
from display_icc.backends.colord_dbus import ColordDbusBackend
from display_icc.backends.colormgr import ColormgrBackend
from display_icc.backends.filesystem import FilesystemBackend, linux_profile_dirs
from display_icc.backends.quartz import QuartzBackend
from display_icc.backends.windows import (
    ColorDirectoryBackend,
    GdiBackend,
    RegistryBackend,
    windows_color_dir,
)
from display_icc.config.models import BackendsConfig
from display_icc.domain.types import Platform


@dataclass(frozen=True)
class PlatformDescriptor:
    """The backends available on one platform, grouped by role."""

    platform: Platform
    preferred: tuple[Backend, ...] = ()
    baseline: tuple[Backend, ...] = ()
    fallbacks: tuple[Backend, ...] = ()

    def chain(self, extra: Iterable[Backend] = ()) -> list[Backend]:
        """Full backend order, with *extra* (plugin) backends before the fallbacks."""
        return [*self.preferred, *self.baseline, *extra, *self.fallbacks]


def describe_platform(
    platform: Platform,
    config: BackendsConfig | None = None,
) -> PlatformDescriptor:
    """Build the descriptor for *platform* from the ``[backends]`` settings."""
    cfg = config or BackendsConfig()

    if platform is Platform.LINUX:
        preferred: Sequence[Backend] = (ColordDbusBackend(),) if cfg.dbus_enabled else ()
        return PlatformDescriptor(
            platform=platform,
            preferred=tuple(preferred),
            baseline=(ColormgrBackend(cfg.colormgr_command),),
            fallbacks=(FilesystemBackend([*linux_profile_dirs(), *cfg.profile_dirs]),),
        )

    if platform is Platform.WINDOWS:
        return PlatformDescriptor(
            platform=platform,
            baseline=(GdiBackend(),),
            fallbacks=(
                RegistryBackend(),
                ColorDirectoryBackend([windows_color_dir(), *cfg.profile_dirs]),
                BuiltinBackend(platform),
            ),
        )

    return PlatformDescriptor(
        platform=platform,
        baseline=(QuartzBackend(),),
        fallbacks=(BuiltinBackend(platform),),
    )
