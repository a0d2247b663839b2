"""Tests for the colormgr command-line backend."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from display_icc.backends import colormgr
from display_icc.backends.colormgr import ColormgrBackend, parse_devices, parse_profile
from display_icc.domain.errors import ParseError, SystemApiError
from display_icc.domain.types import ColorSpace

DEVICES_OUTPUT = """
Device ID:          xrandr-Goldstar Company Ltd-LG ULTRAWIDE-0x00000101
Kind:               display
Model:              LG ULTRAWIDE
Vendor:             Goldstar Company Ltd
Serial:             0x00000101
Profile 1:          icc-2c9c8b0c8e5c4e9b8f7a6d5c4b3a2918
Profile 2:          icc-b7f8e9d0c1a2b3c4d5e6f7a8b9c0d1e2

Device ID:          usb-046d-c52b-event-mouse
Kind:               mouse
Model:              Logitech USB Receiver
Vendor:             Logitech

Device ID:          xrandr-Dell Inc.-DELL U2415-HT8XN64P0D2S
Kind:               display
Model:              DELL U2415
Vendor:             Dell Inc.
Serial:             HT8XN64P0D2S
Profile 1:          icc-a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6
"""

PROFILE_OUTPUT = """
Profile ID:         icc-2c9c8b0c8e5c4e9b8f7a6d5c4b3a2918
Filename:           /usr/share/color/icc/sRGB.icc
Title:              sRGB IEC61966-2.1
Kind:               display-device
Colorspace:         rgb
"""


class TestParseDevices:
    def test_displays_only(self) -> None:
        devices = parse_devices(DEVICES_OUTPUT)
        assert [d.device_id for d in devices] == [
            "xrandr-Goldstar Company Ltd-LG ULTRAWIDE-0x00000101",
            "xrandr-Dell Inc.-DELL U2415-HT8XN64P0D2S",
        ]

    def test_names_and_profiles(self) -> None:
        first, second = parse_devices(DEVICES_OUTPUT)
        assert first.display_name == "Goldstar Company Ltd LG ULTRAWIDE"
        assert first.profile_ids == (
            "icc-2c9c8b0c8e5c4e9b8f7a6d5c4b3a2918",
            "icc-b7f8e9d0c1a2b3c4d5e6f7a8b9c0d1e2",
        )
        assert second.display_name == "Dell Inc. DELL U2415"
        assert second.profile_ids == ("icc-a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6",)

    def test_no_primary_hint(self) -> None:
        assert all(d.is_primary is None for d in parse_devices(DEVICES_OUTPUT))

    def test_empty_output(self) -> None:
        assert parse_devices("") == []

    def test_model_without_vendor(self) -> None:
        (device,) = parse_devices("Device ID: d1\nKind: display\nModel: Panel\n")
        assert device.display_name == "Panel"

    def test_missing_model_leaves_name_blank(self) -> None:
        (device,) = parse_devices("Device ID: d1\nKind: display\nVendor: Acme\n")
        assert device.display_name == ""

    def test_lines_before_first_device_ignored(self) -> None:
        assert parse_devices("Kind: display\nModel: Ghost\n") == []


class TestParseProfile:
    def test_full(self) -> None:
        record = parse_profile(PROFILE_OUTPUT, "icc-2c9c")
        assert record.name == "sRGB IEC61966-2.1"
        assert record.file_path == Path("/usr/share/color/icc/sRGB.icc")
        assert record.color_space is ColorSpace.RGB
        assert record.data is None

    def test_no_filename(self) -> None:
        output = "Filename:  (none)\nTitle:  Built-in sRGB\nColorspace: rgb\n"
        record = parse_profile(output, "icc-builtin")
        assert record.file_path is None
        assert record.name == "Built-in sRGB"

    def test_title_falls_back_to_id(self) -> None:
        record = parse_profile("Colorspace: lab\n", "icc-xyz")
        assert record.name == "icc-xyz"
        assert record.color_space is ColorSpace.LAB

    def test_unknown_colorspace(self) -> None:
        assert parse_profile("Colorspace: gray\n", "p").color_space is ColorSpace.UNKNOWN


def _fake_run(
    monkeypatch: pytest.MonkeyPatch,
    *,
    stdout: bytes = b"",
    stderr: bytes = b"",
    returncode: int = 0,
    raises: Exception | None = None,
) -> list[list[str]]:
    calls: list[list[str]] = []

    def run(args: list[str], **_kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        calls.append(list(args))
        if raises is not None:
            raise raises
        return subprocess.CompletedProcess(args, returncode, stdout, stderr)

    monkeypatch.setattr(colormgr.subprocess, "run", run)
    return calls


class TestColormgrBackend:
    def test_list_devices(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = _fake_run(monkeypatch, stdout=DEVICES_OUTPUT.encode())
        devices = ColormgrBackend().list_devices()
        assert len(devices) == 2
        assert calls == [["colormgr", "get-devices"]]

    def test_read_profile(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = _fake_run(monkeypatch, stdout=PROFILE_OUTPUT.encode())
        record = ColormgrBackend().read_profile("icc-2c9c")
        assert record.name == "sRGB IEC61966-2.1"
        assert calls == [["colormgr", "get-profile", "icc-2c9c"]]

    def test_custom_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = _fake_run(monkeypatch)
        ColormgrBackend("/opt/colord/bin/colormgr").list_devices()
        assert calls[0][0] == "/opt/colord/bin/colormgr"

    def test_command_not_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _fake_run(monkeypatch, raises=FileNotFoundError("colormgr"))
        with pytest.raises(SystemApiError, match="colormgr command not found"):
            ColormgrBackend().list_devices()

    def test_other_os_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _fake_run(monkeypatch, raises=PermissionError("denied"))
        with pytest.raises(SystemApiError, match="Failed to execute colormgr"):
            ColormgrBackend().list_devices()

    def test_nonzero_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _fake_run(monkeypatch, returncode=1, stderr=b"daemon not running\n")
        with pytest.raises(SystemApiError, match="command failed: daemon not running"):
            ColormgrBackend().list_devices()

    def test_invalid_utf8(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _fake_run(monkeypatch, stdout=b"Device ID: \xff\xfe")
        with pytest.raises(ParseError, match="Invalid UTF-8"):
            ColormgrBackend().list_devices()

    def test_profile_lookup_via_device_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from display_icc.domain.models import Display

        _fake_run(monkeypatch, stdout=DEVICES_OUTPUT.encode())
        display = Display(id="xrandr-Dell Inc.-DELL U2415-HT8XN64P0D2S", name="Dell")
        assert ColormgrBackend().profile_ids_for(display) == ["icc-a1b2c3d4e5f6a7b8c9d0e1f2a3b4c5d6"]
