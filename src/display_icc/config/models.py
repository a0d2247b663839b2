"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, display_icc.toml only contains
overrides. An empty (or absent) file yields the default resolution policy:
prefer the message-bus channel, fallback enabled.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- Resolution policy (passed to the engine) ---


class ProfileConfig(BaseModel):
    """Resolution policy, frozen once handed to a provider.

    Attributes:
        prefer_secondary_channel: Try the preferred channel (colord over
            D-Bus on Linux) before the baseline tool. Ignored on platforms
            without such a channel.
        fallback_enabled: Continue down the adapter chain after the first
            adapter fails. When False, the first adapter's error is final.
    """

    model_config = {"frozen": True}

    prefer_secondary_channel: bool = True
    fallback_enabled: bool = True


# --- display_icc.toml sections ---


class ResolutionConfig(BaseModel):
    """[resolution] section."""

    model_config = {"frozen": True}

    prefer_secondary_channel: bool = True
    fallback_enabled: bool = True


class BackendsConfig(BaseModel):
    """[backends] section."""

    model_config = {"frozen": True}

    dbus_enabled: bool = True
    colormgr_command: str = "colormgr"
    profile_dirs: list[Path] = Field(default_factory=list)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
