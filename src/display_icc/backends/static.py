"""In-memory backend for tests, demos, and GUI prototyping.

Holds displays, profiles and profile bytes in plain dicts. Failures can be
injected per operation (``"list_devices"``, ``"read_profile"``) or per
display id, and every call is recorded in :attr:`StaticBackend.calls` so
tests can assert the order in which the engine consulted backends.
"""

from __future__ import annotations

from pathlib import Path

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.domain.errors import ProfileNotAvailable
from display_icc.domain.icc import build_header
from display_icc.domain.models import Display
from display_icc.domain.types import ColorSpace


class StaticBackend(Backend):
    """A backend whose answers are whatever you put into it."""

    def __init__(
        self,
        name: str = "static",
        *,
        preferred: bool = False,
        available: bool = True,
        can_enumerate: bool = True,
        can_resolve: bool = True,
    ) -> None:
        self.name = name
        self.preferred = preferred
        self.can_enumerate = can_enumerate
        self.can_resolve = can_resolve
        self.available = available
        self.devices: list[DeviceRecord] = []
        self.profiles: dict[str, ProfileRecord] = {}
        self.files: dict[Path, bytes] = {}
        self.calls: list[str] = []
        self._failures: dict[str, Exception] = {}

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def add_display(
        self,
        display_id: str,
        name: str = "",
        *,
        is_primary: bool | None = None,
        profile: ProfileRecord | None = None,
    ) -> None:
        """Add a device; *profile* (if given) is registered under the display id."""
        profile_ids: tuple[str, ...] = ()
        if profile is not None:
            self.profiles[display_id] = profile
            profile_ids = (display_id,)
        self.devices.append(
            DeviceRecord(
                device_id=display_id,
                display_name=name,
                is_primary=is_primary,
                profile_ids=profile_ids,
            )
        )

    def add_file(self, path: Path, data: bytes) -> None:
        self.files[Path(path)] = data

    def set_failure(self, key: str, error: Exception) -> None:
        """Raise *error* from the operation or display id named *key*."""
        self._failures[key] = error

    def clear(self) -> None:
        self.devices.clear()
        self.profiles.clear()
        self.files.clear()
        self._failures.clear()

    def _check(self, key: str) -> None:
        error = self._failures.get(key)
        if error is not None:
            raise error

    # ------------------------------------------------------------------
    # Backend contract
    # ------------------------------------------------------------------

    def is_available(self) -> bool:
        self.calls.append("is_available")
        return self.available

    def list_devices(self) -> list[DeviceRecord]:
        self.calls.append("list_devices")
        self._check("list_devices")
        return list(self.devices)

    def profile_ids_for(self, display: Display) -> list[str]:
        self.calls.append(f"profile_ids_for:{display.id}")
        self._check(display.id)
        return super().profile_ids_for(display)

    def read_profile(self, profile_id: str) -> ProfileRecord:
        self.calls.append(f"read_profile:{profile_id}")
        self._check("read_profile")
        try:
            return self.profiles[profile_id]
        except KeyError:
            raise ProfileNotAvailable(profile_id) from None

    def read_bytes(self, path: Path) -> bytes:
        self.calls.append(f"read_bytes:{path}")
        self._check("read_bytes")
        data = self.files.get(Path(path))
        if data is not None:
            return data
        return super().read_bytes(path)

    # ------------------------------------------------------------------
    # Fixtures
    # ------------------------------------------------------------------

    @classmethod
    def with_test_data(cls, name: str = "static") -> StaticBackend:
        """Two displays: a primary sRGB panel and a secondary Display P3 panel."""
        backend = cls(name)
        backend.add_display(
            "primary",
            "Primary Display",
            is_primary=True,
            profile=ProfileRecord(
                name="sRGB IEC61966-2.1",
                description="Standard RGB color space",
                file_path=Path("/System/Library/ColorSync/Profiles/sRGB Profile.icc"),
                color_space=ColorSpace.RGB,
                data=build_header(profile_size=1024, version=0),
            ),
        )
        backend.add_display(
            "secondary",
            "Secondary Display",
            is_primary=False,
            profile=ProfileRecord(
                name="Display P3",
                description="Display P3 color space",
                file_path=Path("/System/Library/ColorSync/Profiles/Display P3.icc"),
                color_space=ColorSpace.RGB,
                data=build_header(profile_size=2048, version=0),
            ),
        )
        return backend

