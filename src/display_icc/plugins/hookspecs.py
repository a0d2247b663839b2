"""Pluggy hook specifications for display-icc backend plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from display_icc.backends.base import Backend
    from display_icc.domain.types import Platform

hookspec = pluggy.HookspecMarker("display_icc")
hookimpl = pluggy.HookimplMarker("display_icc")


class DisplayIccHookSpec:
    """Hook specifications for the display-icc plugin system."""

    @hookspec
    def display_icc_backends(self, platform: Platform) -> list[Backend] | None:
        """Return extra backends for *platform*, or None to contribute nothing.

        Plugin backends are consulted after the platform's baseline channel
        and before its terminal fallbacks.
        """
