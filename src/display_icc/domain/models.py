"""Display and ProfileInfo value models.

Both are created per resolution call and handed to the caller; they are
frozen so a caller can share them freely.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel

from display_icc.domain.types import ColorSpace


class Display(BaseModel):
    """A physical (or synthetic) display known to a backend.

    Attributes:
        id: Opaque, platform-scoped identifier, stable across runs for the
            same physical display (colord device id, ``monitor_N``, or a
            CoreGraphics display id).
        name: Human-readable name.
        is_primary: Whether this is the primary display. At most one display
            of an enumeration carries this flag.
    """

    model_config = {"frozen": True}

    id: str
    name: str
    is_primary: bool = False


class ProfileInfo(BaseModel):
    """Metadata about the ICC profile assigned to a display.

    ``file_path`` is None when the profile is embedded in a system API or
    synthesized by a fallback.
    """

    model_config = {"frozen": True}

    name: str
    description: str | None = None
    file_path: Path | None = None
    color_space: ColorSpace = ColorSpace.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "file_path": str(self.file_path) if self.file_path is not None else None,
            "color_space": str(self.color_space),
        }
