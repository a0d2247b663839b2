"""Convenience layer — one-call access to the host's display profiles.

Each function builds a fresh provider for the host platform, so settings
changes (and newly attached displays) are picked up on every call.
"""

from __future__ import annotations

from display_icc.backends.base import Backend
from display_icc.backends.factory import PlatformDescriptor, describe_platform
from display_icc.config.models import BackendsConfig, ProfileConfig
from display_icc.domain.icc import IccHeader
from display_icc.domain.models import Display, ProfileInfo
from display_icc.domain.types import Platform, detect_platform
from display_icc.plugins.manager import PluginManager
from display_icc.services.provider import ProfileProvider


def create_provider(
    config: ProfileConfig | None = None,
    *,
    platform: Platform | str | PlatformDescriptor | None = None,
    backends_config: BackendsConfig | None = None,
    load_plugins: bool = True,
) -> ProfileProvider:
    """Build a ProfileProvider for the host, or for an injected *platform*.

    *platform* may name a platform (``"linux"``) or be a ready-made
    PlatformDescriptor. Raises UnsupportedPlatform when the host has no
    backends.
    """
    if isinstance(platform, PlatformDescriptor):
        descriptor = platform
    else:
        resolved = Platform(platform) if platform is not None else detect_platform()
        descriptor = describe_platform(resolved, backends_config)

    extra: list[Backend] = []
    if load_plugins:
        manager = PluginManager()
        manager.discover_and_load()
        extra = manager.collect_backends(descriptor.platform)

    return ProfileProvider(descriptor.chain(extra), config)


def get_primary_display_profile(config: ProfileConfig | None = None) -> ProfileInfo:
    provider = create_provider(config)
    return provider.get_profile(provider.get_primary_display())


def get_all_display_profiles(config: ProfileConfig | None = None) -> list[tuple[Display, ProfileInfo]]:
    return create_provider(config).get_all_profiles()


def get_primary_display_profile_data(config: ProfileConfig | None = None) -> bytes:
    provider = create_provider(config)
    return provider.get_profile_data(provider.get_primary_display())


def parse_icc_header(data: bytes) -> IccHeader:
    """Decode the 128-byte header of an ICC profile. Raises ParseError."""
    return IccHeader.parse(data)
