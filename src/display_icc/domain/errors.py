"""ProfileError taxonomy — the closed set of failures callers can observe.

INVARIANT: Callers never see a platform-specific exception type.
Backends translate OS, subprocess, and D-Bus failures into one of these
classes; the service layer maps ``code`` onto ServiceError.
"""

from __future__ import annotations


class ProfileError(Exception):
    """Base class for every failure surfaced by display-icc.

    Attributes:
        code: Stable machine-readable identifier.
        detail: The bare argument (display id or message) without the
            human-readable prefix.
    """

    code = "PROFILE_ERROR"
    prefix = "Profile error"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}" if detail else self.prefix)


class UnsupportedPlatform(ProfileError):
    """No backend exists for the host platform."""

    code = "UNSUPPORTED_PLATFORM"
    prefix = "Platform not supported"


class DisplayNotFound(ProfileError):
    """A requested display id has no matching device."""

    code = "DISPLAY_NOT_FOUND"
    prefix = "Display not found"


class ProfileNotAvailable(ProfileError):
    """A display exists but no profile could be resolved for it."""

    code = "PROFILE_NOT_AVAILABLE"
    prefix = "Profile not available for display"


class SystemApiError(ProfileError):
    """A backend reported an operational failure (subprocess, IPC, enumeration)."""

    code = "SYSTEM_ERROR"
    prefix = "System API error"


class ProfileIOError(ProfileError):
    """A local profile file could not be read."""

    code = "IO_ERROR"
    prefix = "IO error"

    @classmethod
    def from_os_error(cls, exc: OSError) -> ProfileIOError:
        return cls(str(exc))


class ParseError(ProfileError):
    """Malformed binary header or malformed backend output."""

    code = "PARSE_ERROR"
    prefix = "Parse error"
