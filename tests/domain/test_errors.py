"""Tests for the ProfileError taxonomy and Display/ProfileInfo models."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from display_icc.domain.errors import (
    DisplayNotFound,
    ParseError,
    ProfileError,
    ProfileIOError,
    ProfileNotAvailable,
    SystemApiError,
    UnsupportedPlatform,
)
from display_icc.domain.models import Display, ProfileInfo
from display_icc.domain.types import ColorSpace


class TestErrors:
    @pytest.mark.parametrize(
        "cls",
        [UnsupportedPlatform, DisplayNotFound, ProfileNotAvailable, SystemApiError, ProfileIOError, ParseError],
    )
    def test_all_are_profile_errors(self, cls: type[ProfileError]) -> None:
        assert issubclass(cls, ProfileError)

    def test_message_includes_detail(self) -> None:
        exc = DisplayNotFound("monitor_3")
        assert str(exc) == "Display not found: monitor_3"
        assert exc.detail == "monitor_3"
        assert exc.code == "DISPLAY_NOT_FOUND"

    def test_message_without_detail(self) -> None:
        assert str(UnsupportedPlatform()) == "Platform not supported"

    def test_codes_are_distinct(self) -> None:
        codes = {
            cls.code
            for cls in (UnsupportedPlatform, DisplayNotFound, ProfileNotAvailable, SystemApiError, ProfileIOError, ParseError)
        }
        assert len(codes) == 6

    def test_io_error_from_os_error(self) -> None:
        exc = ProfileIOError.from_os_error(FileNotFoundError(2, "No such file or directory", "/x.icc"))
        assert exc.code == "IO_ERROR"
        assert "No such file or directory" in str(exc)


class TestModels:
    def test_display_is_frozen(self) -> None:
        display = Display(id="a", name="A")
        with pytest.raises(ValidationError):
            display.name = "B"  # type: ignore[misc]

    def test_display_defaults_not_primary(self) -> None:
        assert Display(id="a", name="A").is_primary is False

    def test_profile_info_defaults(self) -> None:
        info = ProfileInfo(name="x")
        assert info.color_space is ColorSpace.UNKNOWN
        assert info.file_path is None

    def test_profile_info_to_dict(self) -> None:
        info = ProfileInfo(name="sRGB", file_path=Path("/p/sRGB.icc"), color_space=ColorSpace.RGB)
        assert info.to_dict() == {
            "name": "sRGB",
            "description": None,
            "file_path": "/p/sRGB.icc",
            "color_space": "RGB",
        }
