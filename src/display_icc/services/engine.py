"""ResolutionEngine — ordered backend fallback for enumeration and profile lookup.

For every operation the engine builds a plan from its backends and tries
them in order until one answers:

* A ``preferred`` backend heads the plan only when
  ``prefer_secondary_channel`` is set *and* the backend reports itself
  available; otherwise it is left out.
* Backends without the needed capability (``can_enumerate`` /
  ``can_resolve``) are skipped.
* With ``fallback_enabled`` off, the first backend's own error is final.
* When every backend fails the operation is exhausted: enumeration raises
  SystemApiError. Profile lookup raises ProfileNotAvailable when every
  backend merely had no profile, otherwise the first operational error.

INVARIANT: At most one Display in an enumeration has ``is_primary`` set.
The first device a backend flags as primary wins; without any flag the
first device is primary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.config.models import ProfileConfig
from display_icc.domain.errors import DisplayNotFound, ProfileError, ProfileNotAvailable, SystemApiError
from display_icc.domain.models import Display
from display_icc.services.telemetry import trace_span

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

ENUMERATE = "can_enumerate"
RESOLVE = "can_resolve"

EXHAUSTED_ENUMERATION = "No display devices found via any method"
EMPTY_ENUMERATION = "No display devices found"

ABSENCE_ERRORS = (ProfileNotAvailable, DisplayNotFound)


@dataclass(frozen=True)
class Enumeration:
    """Displays as answered by one backend."""

    displays: list[Display]
    backend: Backend


@dataclass(frozen=True)
class Resolution:
    """A profile as answered by one backend.

    The backend is kept so the profile bytes can be read through the same
    channel that found the profile.
    """

    display: Display
    record: ProfileRecord
    backend: Backend


def normalize_displays(devices: Sequence[DeviceRecord]) -> list[Display]:
    """Turn device records into Displays with exactly one primary and no blank names."""
    primary_index = next((i for i, d in enumerate(devices) if d.is_primary), 0)
    return [
        Display(
            id=device.device_id,
            name=device.display_name or f"Display {index + 1}",
            is_primary=index == primary_index,
        )
        for index, device in enumerate(devices)
    ]


def first_operational_error(errors: Sequence[ProfileError]) -> ProfileError | None:
    """The first error that is not a plain "nothing here" answer, if any."""
    return next((e for e in errors if not isinstance(e, ABSENCE_ERRORS)), None)


class ResolutionEngine:
    """Try backends in plan order, honoring a fixed ProfileConfig."""

    def __init__(self, backends: Sequence[Backend], config: ProfileConfig | None = None) -> None:
        self._backends = list(backends)
        self._config = config or ProfileConfig()

    @property
    def config(self) -> ProfileConfig:
        return self._config

    @property
    def backends(self) -> list[Backend]:
        return list(self._backends)

    def plan(self, capability: str) -> list[Backend]:
        """Return the backends to try for *capability*, in order."""
        preferred: list[Backend] = []
        rest: list[Backend] = []
        for backend in self._backends:
            if not getattr(backend, capability, False):
                continue
            if not backend.preferred:
                rest.append(backend)
                continue
            if not self._config.prefer_secondary_channel:
                logger.debug("Skipping %s: secondary channel not preferred", backend.name)
                continue
            if not self._probe(backend):
                logger.debug("Skipping %s: unavailable", backend.name)
                continue
            preferred.append(backend)
        return [*preferred, *rest]

    def enumerate(self) -> Enumeration:
        """Return the displays from the first backend that lists any."""

        def attempt(backend: Backend) -> Enumeration:
            devices = backend.list_devices()
            if not devices:
                raise SystemApiError(EMPTY_ENUMERATION)
            return Enumeration(displays=normalize_displays(devices), backend=backend)

        return self._run(
            "enumerate",
            self.plan(ENUMERATE),
            attempt,
            lambda _errors: SystemApiError(EXHAUSTED_ENUMERATION),
        )

    def resolve(self, display: Display) -> Resolution:
        """Return the profile for *display* from the first backend that has one.

        When a backend offers several profiles, the first one wins.
        """

        def attempt(backend: Backend) -> Resolution:
            profile_ids = backend.profile_ids_for(display)
            if not profile_ids:
                raise ProfileNotAvailable(display.id)
            record = backend.read_profile(profile_ids[0])
            return Resolution(display=display, record=record, backend=backend)

        return self._run(
            "resolve",
            self.plan(RESOLVE),
            attempt,
            lambda errors: first_operational_error(errors) or ProfileNotAvailable(display.id),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(
        self,
        operation: str,
        plan: list[Backend],
        attempt: Callable[[Backend], _T],
        exhausted: Callable[[list[ProfileError]], ProfileError],
    ) -> _T:
        errors: list[ProfileError] = []
        for backend in plan:
            try:
                return self._attempt(operation, backend, attempt)
            except ProfileError as exc:
                if not self._config.fallback_enabled:
                    raise
                errors.append(exc)
        logger.debug("%s exhausted after %s", operation, [b.name for b in plan])
        raise exhausted(errors)

    @staticmethod
    def _attempt(operation: str, backend: Backend, attempt: Callable[[Backend], _T]) -> _T:
        with trace_span(operation, backend=backend.name) as span:
            try:
                result = attempt(backend)
            except ProfileError as exc:
                logger.debug("%s via %s failed: %s", operation, backend.name, exc)
                if span:
                    span.fail(exc.code)
                raise
            except Exception as exc:
                logger.debug("%s via %s crashed", operation, backend.name, exc_info=True)
                if span:
                    span.fail(SystemApiError.code)
                raise SystemApiError(f"{backend.name}: {exc}") from exc
            logger.debug("%s answered by %s", operation, backend.name)
            if span:
                span.succeed()
            return result

    @staticmethod
    def _probe(backend: Backend) -> bool:
        try:
            return bool(backend.is_available())
        except Exception:
            logger.debug("Availability probe of %s failed", backend.name, exc_info=True)
            return False
