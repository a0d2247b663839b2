"""Windows backends — GDI monitors, ICM registry associations, color directory.

All Win32 access is imported lazily so the package imports on every host;
these backends are only constructed for :attr:`Platform.WINDOWS`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.backends.filesystem import FilesystemBackend
from display_icc.domain.errors import ParseError, ProfileNotAvailable, SystemApiError
from display_icc.domain.icc import IccHeader
from display_icc.domain.models import Display
from display_icc.domain.types import ColorSpace

logger = logging.getLogger(__name__)

ICM_DISPLAY_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\ICM\ProfileAssociations\Display"
ICM_PROFILE_VALUE = "ICMProfile"
MONITORINFOF_PRIMARY = 0x1
MAX_PATH = 260

COMMON_PROFILES = (
    "sRGB Color Space Profile.icm",
    "Adobe RGB (1998).icc",
    "ProPhoto RGB.icc",
    "Display.icc",
    "Generic RGB Profile.icc",
)


def windows_color_dir() -> Path:
    """``%WINDIR%\\System32\\spool\\drivers\\color``."""
    windir = os.environ.get("WINDIR", r"C:\Windows")
    return Path(windir, "System32", "spool", "drivers", "color")


def profile_record_from_file(path: Path) -> ProfileRecord:
    """Describe a profile file by name, taking the color space from its header.

    A file that cannot be read or parsed still yields a record, with
    ``Unknown`` color space.
    """
    color_space = ColorSpace.UNKNOWN
    try:
        with path.open("rb") as fh:
            color_space = IccHeader.parse(fh.read(128)).color_space
    except (OSError, ParseError) as exc:
        logger.debug("Could not read header of %s: %s", path, exc)
    return ProfileRecord(name=path.name, file_path=path, color_space=color_space)


class GdiBackend(Backend):
    """Monitors from ``EnumDisplayMonitors``, profiles from ``GetICMProfileW``."""

    name = "gdi"

    def list_devices(self) -> list[DeviceRecord]:
        import ctypes
        from ctypes import wintypes

        class MONITORINFOEXW(ctypes.Structure):
            _fields_ = [
                ("cbSize", wintypes.DWORD),
                ("rcMonitor", wintypes.RECT),
                ("rcWork", wintypes.RECT),
                ("dwFlags", wintypes.DWORD),
                ("szDevice", wintypes.WCHAR * 32),
            ]

        user32 = ctypes.windll.user32
        gdi32 = ctypes.windll.gdi32

        handles: list[int] = []
        monitor_enum_proc = ctypes.WINFUNCTYPE(
            wintypes.BOOL,
            wintypes.HMONITOR,
            wintypes.HDC,
            ctypes.POINTER(wintypes.RECT),
            wintypes.LPARAM,
        )

        def _collect(hmonitor: int, _hdc: int, _rect: object, _data: int) -> bool:
            handles.append(hmonitor)
            return True

        if not user32.EnumDisplayMonitors(None, None, monitor_enum_proc(_collect), 0):
            msg = "Failed to enumerate monitors"
            raise SystemApiError(msg)

        records: list[DeviceRecord] = []
        for index, hmonitor in enumerate(handles):
            info = MONITORINFOEXW()
            info.cbSize = ctypes.sizeof(MONITORINFOEXW)
            if not user32.GetMonitorInfoW(hmonitor, ctypes.byref(info)):
                logger.debug("GetMonitorInfoW failed for monitor %d", index)
                continue

            profile_ids: tuple[str, ...] = ()
            hdc = gdi32.CreateDCW(info.szDevice, info.szDevice, None, None)
            if hdc:
                try:
                    size = wintypes.DWORD(MAX_PATH)
                    buffer = ctypes.create_unicode_buffer(MAX_PATH)
                    if gdi32.GetICMProfileW(hdc, ctypes.byref(size), buffer):
                        profile_ids = (buffer.value,)
                finally:
                    gdi32.DeleteDC(hdc)

            records.append(
                DeviceRecord(
                    device_id=f"monitor_{index}",
                    display_name=info.szDevice,
                    is_primary=bool(info.dwFlags & MONITORINFOF_PRIMARY),
                    profile_ids=profile_ids,
                )
            )

        if not records:
            msg = "No monitors found"
            raise SystemApiError(msg)
        return records

    def read_profile(self, profile_id: str) -> ProfileRecord:
        path = Path(profile_id)
        if not path.is_absolute():
            path = windows_color_dir() / path
        if not path.is_file():
            raise ProfileNotAvailable(profile_id)
        return profile_record_from_file(path)


class RegistryBackend(Backend):
    """Profiles named under the ICM display associations in HKLM.

    The associations are not tied to a monitor id, so every display gets the
    same candidates: each existing file in the color directory, in registry
    order.
    """

    name = "registry"
    can_enumerate = False

    def __init__(self, color_dir: Path | None = None) -> None:
        self._color_dir = color_dir

    def _associated_names(self) -> list[str]:
        import winreg

        names: list[str] = []
        try:
            root = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, ICM_DISPLAY_KEY)
        except OSError:
            return names

        with root:
            index = 0
            while True:
                try:
                    subkey_name = winreg.EnumKey(root, index)
                except OSError:
                    break
                index += 1
                try:
                    with winreg.OpenKey(root, subkey_name) as subkey:
                        value, _kind = winreg.QueryValueEx(subkey, ICM_PROFILE_VALUE)
                except OSError:
                    continue
                if isinstance(value, str):
                    names.append(value)
                else:
                    names.extend(str(v) for v in value if v)
        return names

    def profile_ids_for(self, display: Display) -> list[str]:
        color_dir = self._color_dir or windows_color_dir()
        candidates = [str(color_dir / name) for name in self._associated_names()]
        existing = [c for c in candidates if Path(c).is_file()]
        if not existing:
            raise ProfileNotAvailable(display.id)
        return existing

    def read_profile(self, profile_id: str) -> ProfileRecord:
        return profile_record_from_file(Path(profile_id))


class ColorDirectoryBackend(FilesystemBackend):
    """The Windows color directory: well-known profiles first, then any file.

    Unlike the Linux directory scan, this answers for every display and never
    enumerates. When GDI cannot list monitors there is no synthetic display.
    """

    name = "color-directory"
    can_enumerate = False

    def __init__(self, directories: list[Path] | None = None) -> None:
        super().__init__(directories or [windows_color_dir()])

    def profile_ids_for(self, display: Display) -> list[str]:
        common = [d / name for d in self.directories for name in COMMON_PROFILES]
        ordered = [p for p in common if p.is_file()]
        ordered.extend(p for p in self.scan() if p not in ordered)
        if not ordered:
            raise ProfileNotAvailable(display.id)
        return [str(p) for p in ordered]

    def read_profile(self, profile_id: str) -> ProfileRecord:
        return profile_record_from_file(Path(profile_id))

