"""Tests for ColorSpace, Platform, and platform detection."""

from __future__ import annotations

import pytest

from display_icc.domain.errors import UnsupportedPlatform
from display_icc.domain.types import ColorSpace, Platform, detect_platform


class TestColorSpace:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("rgb", ColorSpace.RGB),
            ("RGB", ColorSpace.RGB),
            ("srgb", ColorSpace.RGB),
            ("lab", ColorSpace.LAB),
            ("LAB", ColorSpace.LAB),
            ("xyz", ColorSpace.UNKNOWN),
            ("", ColorSpace.UNKNOWN),
            (None, ColorSpace.UNKNOWN),
        ],
    )
    def test_from_name(self, name: str | None, expected: ColorSpace) -> None:
        assert ColorSpace.from_name(name) is expected

    def test_from_signature_keeps_padding(self) -> None:
        assert ColorSpace.from_signature("RGB ") is ColorSpace.RGB
        assert ColorSpace.from_signature("RGB") is ColorSpace.UNKNOWN

    def test_string_values(self) -> None:
        assert str(ColorSpace.LAB) == "Lab"
        assert str(ColorSpace.UNKNOWN) == "Unknown"


class TestDetectPlatform:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("darwin", Platform.MACOS),
            ("linux", Platform.LINUX),
            ("win32", Platform.WINDOWS),
            ("cygwin", Platform.WINDOWS),
        ],
    )
    def test_known(self, value: str, expected: Platform) -> None:
        assert detect_platform(value) is expected

    def test_unknown(self) -> None:
        with pytest.raises(UnsupportedPlatform, match="Platform not supported"):
            detect_platform("freebsd13")

    def test_labels(self) -> None:
        assert Platform.MACOS.label == "macOS"
        assert Platform("linux").label == "Linux"
