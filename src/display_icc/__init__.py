"""display-icc — display ICC profile retrieval across Linux, macOS and Windows."""

from display_icc.api import (
    create_provider,
    get_all_display_profiles,
    get_primary_display_profile,
    get_primary_display_profile_data,
    parse_icc_header,
)
from display_icc.config.models import ProfileConfig
from display_icc.domain.errors import (
    DisplayNotFound,
    ParseError,
    ProfileError,
    ProfileIOError,
    ProfileNotAvailable,
    SystemApiError,
    UnsupportedPlatform,
)
from display_icc.domain.icc import IccHeader
from display_icc.domain.models import Display, ProfileInfo
from display_icc.domain.types import ColorSpace, Platform
from display_icc.services.provider import ProfileProvider

__version__ = "0.1.0"

__all__ = [
    "ColorSpace",
    "Display",
    "DisplayNotFound",
    "IccHeader",
    "ParseError",
    "Platform",
    "ProfileConfig",
    "ProfileError",
    "ProfileIOError",
    "ProfileInfo",
    "ProfileNotAvailable",
    "ProfileProvider",
    "SystemApiError",
    "UnsupportedPlatform",
    "__version__",
    "create_provider",
    "get_all_display_profiles",
    "get_primary_display_profile",
    "get_primary_display_profile_data",
    "parse_icc_header",
]
