"""macOS backend — CoreGraphics display color spaces through pyobjc.

Profile bytes come straight from ``CGColorSpaceCopyICCData``; macOS display
profiles have no file path. Requires the ``macos`` extra
(``pyobjc-framework-Quartz``).
"""

from __future__ import annotations

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.domain.errors import DisplayNotFound, ParseError, ProfileNotAvailable, SystemApiError
from display_icc.domain.icc import IccHeader
from display_icc.domain.models import Display
from display_icc.domain.types import ColorSpace

MAX_DISPLAYS = 16
DEFAULT_PROFILE_NAME = "Display Profile"


def display_name(display_id: int, *, is_main: bool) -> str:
    if is_main:
        return "Built-in Display"
    return f"External Display {display_id}"


def _color_space_of(data: bytes | None) -> ColorSpace:
    if data is None:
        # CoreGraphics answered but withheld the ICC data; displays are RGB.
        return ColorSpace.RGB
    try:
        return IccHeader.parse(data).color_space
    except ParseError:
        return ColorSpace.UNKNOWN


class QuartzBackend(Backend):
    """Active displays from ``CGGetActiveDisplayList``, one profile each."""

    name = "quartz"

    def list_devices(self) -> list[DeviceRecord]:
        import Quartz

        err, display_ids, count = Quartz.CGGetActiveDisplayList(MAX_DISPLAYS, None, None)
        if err != 0:
            msg = f"CGGetActiveDisplayList failed with error {err}"
            raise SystemApiError(msg)
        if count == 0:
            msg = "No active displays found"
            raise SystemApiError(msg)

        records: list[DeviceRecord] = []
        for display_id in list(display_ids)[:count]:
            is_main = bool(Quartz.CGDisplayIsMain(display_id))
            records.append(
                DeviceRecord(
                    device_id=str(display_id),
                    display_name=display_name(display_id, is_main=is_main),
                    is_primary=is_main,
                    profile_ids=(str(display_id),),
                )
            )
        return records

    def profile_ids_for(self, display: Display) -> list[str]:
        # A CoreGraphics display id is its own profile handle.
        if not display.id.isdigit():
            raise DisplayNotFound(display.id)
        return [display.id]

    def read_profile(self, profile_id: str) -> ProfileRecord:
        import Quartz

        display_id = int(profile_id)
        color_space = Quartz.CGDisplayCopyColorSpace(display_id)
        if color_space is None:
            raise ProfileNotAvailable(f"Display {display_id}")

        name = Quartz.CGColorSpaceCopyName(color_space)
        icc_data = Quartz.CGColorSpaceCopyICCData(color_space)
        data = bytes(icc_data) if icc_data is not None else None
        is_main = bool(Quartz.CGDisplayIsMain(display_id))

        return ProfileRecord(
            name=str(name).strip() if name and str(name).strip() else DEFAULT_PROFILE_NAME,
            description=f"Color profile for {display_name(display_id, is_main=is_main)}",
            color_space=_color_space_of(data),
            data=data,
        )
