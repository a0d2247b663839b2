"""Backend adapters — one per color-management channel."""

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.backends.static import StaticBackend

__all__ = ["Backend", "DeviceRecord", "ProfileRecord", "StaticBackend"]
