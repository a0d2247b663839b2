"""Built-in constant profiles — the terminal fallback.

Never enumerates; answers a profile for any display. macOS constants carry a
minimal 128-byte header so callers always get bytes. The Windows constant
describes sRGB without any bytes behind it.
"""

from __future__ import annotations

from display_icc.backends.base import Backend, ProfileRecord
from display_icc.domain.errors import ProfileNotAvailable
from display_icc.domain.icc import build_header
from display_icc.domain.models import Display
from display_icc.domain.types import ColorSpace, Platform

COLOR_LCD = "color-lcd"
SRGB = "srgb"
DEFAULT_SRGB = "default-srgb"

BUILTIN_PROFILES: dict[str, ProfileRecord] = {
    COLOR_LCD: ProfileRecord(
        name="Color LCD",
        description="Apple Color LCD profile",
        color_space=ColorSpace.RGB,
        data=build_header(preferred_cmm="APPL"),
    ),
    SRGB: ProfileRecord(
        name="sRGB IEC61966-2.1",
        description="Standard RGB color space",
        color_space=ColorSpace.RGB,
        data=build_header(preferred_cmm="ADBE"),
    ),
    DEFAULT_SRGB: ProfileRecord(
        name="Default sRGB",
        description="Default sRGB color space (fallback)",
        color_space=ColorSpace.RGB,
    ),
}


def is_builtin_panel(display: Display) -> bool:
    return display.is_primary and "Built-in" in display.name


class BuiltinBackend(Backend):
    """Answer a constant profile chosen by platform and display."""

    name = "builtin"
    can_enumerate = False

    def __init__(self, platform: Platform) -> None:
        self._platform = platform

    def profile_ids_for(self, display: Display) -> list[str]:
        if self._platform is Platform.MACOS:
            return [COLOR_LCD if is_builtin_panel(display) else SRGB]
        if self._platform is Platform.WINDOWS:
            return [DEFAULT_SRGB]
        raise ProfileNotAvailable(display.id)

    def read_profile(self, profile_id: str) -> ProfileRecord:
        try:
            return BUILTIN_PROFILES[profile_id]
        except KeyError:
            raise ProfileNotAvailable(profile_id) from None
