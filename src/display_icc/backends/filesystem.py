"""Directory-scan backend — the last structured answer before giving up.

When no color-management service answers, a scan of the well-known profile
directories still proves a profile exists. Enumeration then yields a single
synthetic display whose profile is the first file found.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.domain.errors import ProfileNotAvailable, SystemApiError
from display_icc.domain.models import Display

logger = logging.getLogger(__name__)

FALLBACK_DISPLAY_ID = "filesystem-fallback"
FALLBACK_DISPLAY_NAME = "Generic Display"
PROFILE_SUFFIXES = frozenset({".icc", ".icm"})


def linux_profile_dirs() -> list[Path]:
    """System and user ICC directories searched on Linux, in order."""
    return [
        Path("/usr/share/color/icc"),
        Path("/usr/local/share/color/icc"),
        Path.home() / ".local" / "share" / "icc",
        Path("/var/lib/color/icc"),
    ]


def scan_profile_dirs(directories: Iterable[Path]) -> list[Path]:
    """Return ``.icc``/``.icm`` files directly inside *directories*.

    Directories are visited in order and their entries sorted by name.
    Missing or unreadable directories are skipped.
    """
    found: list[Path] = []
    for directory in directories:
        try:
            entries = sorted(Path(directory).iterdir())
        except OSError:
            continue
        found.extend(p for p in entries if p.suffix.lower() in PROFILE_SUFFIXES and p.is_file())
    return found


class FilesystemBackend(Backend):
    """Scan profile directories and answer for the synthetic display only."""

    name = "filesystem"

    def __init__(self, directories: Iterable[Path]) -> None:
        self._directories = list(directories)

    @property
    def directories(self) -> list[Path]:
        return list(self._directories)

    def scan(self) -> list[Path]:
        return scan_profile_dirs(self._directories)

    def list_devices(self) -> list[DeviceRecord]:
        profiles = self.scan()
        if not profiles:
            msg = "No ICC profiles found in profile directories"
            raise SystemApiError(msg)
        logger.debug("Directory scan found %d profile(s)", len(profiles))
        return [
            DeviceRecord(
                device_id=FALLBACK_DISPLAY_ID,
                display_name=FALLBACK_DISPLAY_NAME,
                is_primary=True,
                profile_ids=(str(profiles[0]),),
            )
        ]

    def profile_ids_for(self, display: Display) -> list[str]:
        if display.id != FALLBACK_DISPLAY_ID:
            raise ProfileNotAvailable(display.id)
        profiles = self.scan()
        if not profiles:
            raise ProfileNotAvailable(display.id)
        return [str(profiles[0])]

    def read_profile(self, profile_id: str) -> ProfileRecord:
        path = Path(profile_id)
        return ProfileRecord(name=path.stem or "Unknown Profile", file_path=path)
