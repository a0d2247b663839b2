"""Closed enumerations shared by every layer.

ColorSpace is the coarse color model reported for a profile.
Platform names the host color-management subsystem family.
"""

from __future__ import annotations

import sys
from enum import StrEnum

from display_icc.domain.errors import UnsupportedPlatform


class ColorSpace(StrEnum):
    """Primary color space of a display profile.

    ``UNKNOWN`` is a valid outcome: the backend answered, but with a color
    model other than RGB or Lab.
    """

    RGB = "RGB"
    LAB = "Lab"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, name: str | None) -> ColorSpace:
        """Map a free-form backend name (``rgb``, ``srgb``, ``lab``) to a ColorSpace."""
        if not name:
            return cls.UNKNOWN
        return _NAME_ALIASES.get(name.strip().lower(), cls.UNKNOWN)

    @classmethod
    def from_signature(cls, signature: str) -> ColorSpace:
        """Map a 4-character ICC color space signature to a ColorSpace."""
        return _SIGNATURES.get(signature, cls.UNKNOWN)


_NAME_ALIASES: dict[str, ColorSpace] = {
    "rgb": ColorSpace.RGB,
    "srgb": ColorSpace.RGB,
    "lab": ColorSpace.LAB,
}

_SIGNATURES: dict[str, ColorSpace] = {
    "RGB ": ColorSpace.RGB,
    "Lab ": ColorSpace.LAB,
}


class Platform(StrEnum):
    """Host platforms with a native color-management backend."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"

    @property
    def label(self) -> str:
        return _PLATFORM_LABELS[self]


_PLATFORM_LABELS: dict[Platform, str] = {
    Platform.MACOS: "macOS",
    Platform.LINUX: "Linux",
    Platform.WINDOWS: "Windows",
}


def detect_platform(sys_platform: str | None = None) -> Platform:
    """Return the Platform for *sys_platform* (default: ``sys.platform``).

    Raises UnsupportedPlatform for hosts without a known backend.
    """
    value = sys_platform if sys_platform is not None else sys.platform
    if value == "darwin":
        return Platform.MACOS
    if value.startswith("linux"):
        return Platform.LINUX
    if value in ("win32", "cygwin"):
        return Platform.WINDOWS
    raise UnsupportedPlatform()
