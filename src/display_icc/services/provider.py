"""ProfileProvider — the uniform facade over a platform's backends."""

from __future__ import annotations

from collections.abc import Sequence

from display_icc.backends.base import Backend
from display_icc.config.models import ProfileConfig
from display_icc.domain.errors import DisplayNotFound, ProfileError, ProfileNotAvailable, SystemApiError
from display_icc.domain.models import Display, ProfileInfo
from display_icc.services.engine import Resolution, ResolutionEngine


class ProfileProvider:
    """Display and profile queries bound to one backend chain and one config.

    Every call re-queries the backends; nothing is cached between calls.

    Usage::

        provider = ProfileProvider(backends, ProfileConfig(fallback_enabled=False))
        display = provider.get_primary_display()
        info = provider.get_profile(display)
    """

    def __init__(self, backends: Sequence[Backend], config: ProfileConfig | None = None) -> None:
        self._engine = ResolutionEngine(backends, config)

    @property
    def config(self) -> ProfileConfig:
        return self._engine.config

    @property
    def backends(self) -> list[Backend]:
        return self._engine.backends

    def get_displays(self) -> list[Display]:
        return self._engine.enumerate().displays

    def get_primary_display(self) -> Display:
        for display in self.get_displays():
            if display.is_primary:
                return display
        raise DisplayNotFound("No primary display found")

    def find_display(self, display_id: str) -> Display:
        for display in self.get_displays():
            if display.id == display_id:
                return display
        raise DisplayNotFound(display_id)

    def resolve(self, display: Display) -> Resolution:
        """Profile lookup that also reports which backend answered."""
        return self._engine.resolve(display)

    def get_profile(self, display: Display) -> ProfileInfo:
        return self.resolve(display).record.to_info()

    def get_profile_data(self, display: Display) -> bytes:
        """Raw ICC bytes of the profile assigned to *display*.

        Backends that hold the bytes themselves (CoreGraphics, built-in
        constants) answer directly; otherwise the file is read through the
        backend that resolved it.
        """
        resolution = self.resolve(display)
        return self.read_resolution(resolution)

    @staticmethod
    def read_resolution(resolution: Resolution) -> bytes:
        record = resolution.record
        if record.data is not None:
            return record.data
        if record.file_path is None:
            raise ProfileNotAvailable(f"No file path available for display {resolution.display.id}")
        try:
            return resolution.backend.read_bytes(record.file_path)
        except ProfileError:
            raise
        except Exception as exc:
            raise SystemApiError(f"{resolution.backend.name}: {exc}") from exc

    def get_all_profiles(self) -> list[tuple[Display, ProfileInfo]]:
        """Every display paired with its profile.

        Displays without a profile are left out; any other failure aborts
        the whole call.
        """
        pairs: list[tuple[Display, ProfileInfo]] = []
        for display in self.get_displays():
            try:
                pairs.append((display, self.get_profile(display)))
            except ProfileNotAvailable:
                continue
        return pairs
