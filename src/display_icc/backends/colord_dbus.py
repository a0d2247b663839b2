"""colord over D-Bus — the preferred Linux channel.

Talks to ``org.freedesktop.ColorManager`` on the system bus with
``dbus-python`` (the ``dbus`` extra). The module is imported lazily: on a
host without it the backend reports itself unavailable and the engine
starts at colormgr instead.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.domain.errors import SystemApiError
from display_icc.domain.types import ColorSpace

logger = logging.getLogger(__name__)

COLORD_SERVICE = "org.freedesktop.ColorManager"
COLORD_PATH = "/org/freedesktop/ColorManager"
COLORD_INTERFACE = "org.freedesktop.ColorManager"
DEVICE_INTERFACE = "org.freedesktop.ColorManager.Device"
PROFILE_INTERFACE = "org.freedesktop.ColorManager.Profile"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

PROBE_TIMEOUT = 1.0
CALL_TIMEOUT = 5.0


class ColordDbusBackend(Backend):
    """Query the colord daemon directly over the system bus.

    Profile ids are colord object paths, so a profile is read straight from
    the path a device lists.
    """

    name = "colord-dbus"
    preferred = True

    def __init__(self) -> None:
        self._bus: Any = None

    def _connect(self) -> Any:
        import dbus

        if self._bus is None:
            try:
                self._bus = dbus.SystemBus()
            except dbus.exceptions.DBusException as exc:
                msg = f"Failed to connect to D-Bus: {exc}"
                raise SystemApiError(msg) from exc
        return self._bus

    def _properties(self, path: str, interface: str) -> dict[str, Any]:
        import dbus

        proxy = self._connect().get_object(COLORD_SERVICE, path)
        props = dbus.Interface(proxy, PROPERTIES_INTERFACE)
        return dict(props.GetAll(interface, timeout=CALL_TIMEOUT))

    def is_available(self) -> bool:
        try:
            import dbus
        except ImportError:
            logger.debug("dbus-python not installed; colord D-Bus channel disabled")
            return False
        try:
            manager = self._connect().get_object(COLORD_SERVICE, COLORD_PATH)
            manager.GetDevices(dbus_interface=COLORD_INTERFACE, timeout=PROBE_TIMEOUT)
        except (SystemApiError, dbus.exceptions.DBusException) as exc:
            logger.debug("colord not reachable over D-Bus: %s", exc)
            return False
        return True

    def list_devices(self) -> list[DeviceRecord]:
        import dbus

        try:
            manager = self._connect().get_object(COLORD_SERVICE, COLORD_PATH)
            paths = manager.GetDevices(dbus_interface=COLORD_INTERFACE, timeout=CALL_TIMEOUT)
        except dbus.exceptions.DBusException as exc:
            msg = f"D-Bus GetDevices failed: {exc}"
            raise SystemApiError(msg) from exc

        records: list[DeviceRecord] = []
        for path in paths:
            try:
                props = self._properties(str(path), DEVICE_INTERFACE)
            except dbus.exceptions.DBusException:
                logger.debug("Skipping unreadable colord device %s", path, exc_info=True)
                continue
            if "display" not in str(props.get("Kind", "")).lower():
                continue
            model = str(props.get("Model", ""))
            vendor = str(props.get("Vendor", ""))
            name = f"{vendor} {model}" if vendor and model else model
            records.append(
                DeviceRecord(
                    device_id=str(props.get("DeviceId", "")),
                    display_name=name,
                    profile_ids=tuple(str(p) for p in props.get("Profiles", [])),
                )
            )
        return records

    def read_profile(self, profile_id: str) -> ProfileRecord:
        import dbus

        try:
            props = self._properties(profile_id, PROFILE_INTERFACE)
        except dbus.exceptions.DBusException as exc:
            msg = f"D-Bus profile lookup failed for {profile_id}: {exc}"
            raise SystemApiError(msg) from exc

        filename = str(props.get("Filename", ""))
        title = str(props.get("Title", ""))
        return ProfileRecord(
            name=title or str(props.get("ProfileId", "")) or profile_id,
            file_path=Path(filename) if filename else None,
            color_space=ColorSpace.from_name(str(props.get("Colorspace", ""))),
        )
