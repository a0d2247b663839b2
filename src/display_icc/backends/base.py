"""Backend — the adapter contract every color-management channel implements.

A backend answers two questions: which displays exist, and which profile a
display has. The resolution engine decides which backend to ask and in what
order; a backend never falls back on its own.

INVARIANT: Backends raise only ProfileError subclasses. Anything else that
escapes is wrapped as SystemApiError by the engine.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from display_icc.domain.errors import DisplayNotFound, ProfileIOError, ProfileNotAvailable
from display_icc.domain.models import Display, ProfileInfo
from display_icc.domain.types import ColorSpace


class DeviceRecord(BaseModel):
    """A display device as one backend sees it.

    Attributes:
        device_id: Backend-native identifier, becomes ``Display.id``.
        display_name: Human-readable name; empty means "let the engine name it".
        is_primary: Primary hint. None when the backend has no opinion.
        profile_ids: Profiles assigned to the device, best first.
    """

    model_config = {"frozen": True}

    device_id: str
    display_name: str = ""
    is_primary: bool | None = None
    profile_ids: tuple[str, ...] = ()


class ProfileRecord(BaseModel):
    """A resolved profile, optionally carrying its raw bytes."""

    model_config = {"frozen": True}

    name: str
    description: str | None = None
    file_path: Path | None = None
    color_space: ColorSpace = ColorSpace.UNKNOWN
    data: bytes | None = None

    def to_info(self) -> ProfileInfo:
        return ProfileInfo(
            name=self.name,
            description=self.description,
            file_path=self.file_path,
            color_space=self.color_space,
        )


class Backend:
    """Base class for display/profile backends.

    Subclasses set the capability flags and override :meth:`list_devices`
    and :meth:`read_profile`. The default :meth:`profile_ids_for` finds the
    display among :meth:`list_devices`; backends that can look a display up
    directly override it.

    Usage::

        class MyBackend(Backend):
            name = "my-backend"

            def list_devices(self) -> list[DeviceRecord]:
                ...

            def read_profile(self, profile_id: str) -> ProfileRecord:
                ...
    """

    name: str = "backend"
    preferred: bool = False
    can_enumerate: bool = True
    can_resolve: bool = True

    def is_available(self) -> bool:
        """Whether the channel is reachable right now. Must not raise."""
        return True

    def list_devices(self) -> list[DeviceRecord]:
        raise NotImplementedError

    def profile_ids_for(self, display: Display) -> list[str]:
        for device in self.list_devices():
            if device.device_id == display.id:
                if not device.profile_ids:
                    raise ProfileNotAvailable(display.id)
                return list(device.profile_ids)
        raise DisplayNotFound(display.id)

    def read_profile(self, profile_id: str) -> ProfileRecord:
        raise NotImplementedError

    def read_bytes(self, path: Path) -> bytes:
        """Read a profile file, translating OS failures into ProfileIOError."""
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise ProfileIOError.from_os_error(exc) from exc

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"
