"""colormgr backend — colord through its command-line client.

The baseline Linux channel. Runs ``colormgr get-devices`` and
``colormgr get-profile ID`` and parses their ``Key:   value`` output line by
line. Only devices whose ``Kind`` contains ``display`` are kept.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from display_icc.backends.base import Backend, DeviceRecord, ProfileRecord
from display_icc.domain.errors import ParseError, SystemApiError
from display_icc.domain.types import ColorSpace

logger = logging.getLogger(__name__)

DEVICE_PREFIX = "Device ID:"
PROFILE_LINE_PREFIX = "Profile "
NO_FILENAME = "(none)"


def _field(line: str, key: str) -> str | None:
    """Return the value of ``key: value`` when *line* carries *key*, else None."""
    if line.startswith(key):
        return line[len(key) :].strip()
    return None


def _display_name(vendor: str, model: str) -> str:
    if not model:
        return ""
    if vendor:
        return f"{vendor} {model}"
    return model


@dataclass
class _ParsedDevice:
    device_id: str
    kind: str = ""
    model: str = ""
    vendor: str = ""
    profile_ids: list[str] = field(default_factory=list)

    def to_record(self) -> DeviceRecord:
        return DeviceRecord(
            device_id=self.device_id,
            display_name=_display_name(self.vendor, self.model),
            profile_ids=tuple(self.profile_ids),
        )


def parse_devices(output: str) -> list[DeviceRecord]:
    """Parse ``colormgr get-devices`` output into display device records.

    Each ``Device ID:`` line opens a new device; ``Kind``, ``Model``,
    ``Vendor`` and ``Profile N`` lines that follow belong to it. Non-display
    devices are dropped. A device without a model gets an empty name so the
    engine can assign ``Display N``.
    """
    devices: list[_ParsedDevice] = []
    current: _ParsedDevice | None = None

    for raw_line in output.splitlines():
        line = raw_line.strip()

        device_id = _field(line, DEVICE_PREFIX)
        if device_id is not None:
            current = _ParsedDevice(device_id=device_id)
            devices.append(current)
            continue
        if current is None:
            continue

        if (value := _field(line, "Kind:")) is not None:
            current.kind = value
        elif (value := _field(line, "Model:")) is not None:
            current.model = value
        elif (value := _field(line, "Vendor:")) is not None:
            current.vendor = value
        elif line.startswith(PROFILE_LINE_PREFIX) and ":" in line:
            # "Profile 1:   icc-abc..."
            profile_id = line.split(":", 1)[1].strip()
            if profile_id:
                current.profile_ids.append(profile_id)

    return [d.to_record() for d in devices if "display" in d.kind.lower()]


def parse_profile(output: str, profile_id: str) -> ProfileRecord:
    """Parse ``colormgr get-profile`` output.

    The profile is named by its ``Title`` (falling back to *profile_id*).
    ``Filename: (none)`` means the profile has no backing file.
    """
    filename: Path | None = None
    title: str | None = None
    colorspace = ""

    for raw_line in output.splitlines():
        line = raw_line.strip()
        if (value := _field(line, "Filename:")) is not None:
            if value and value != NO_FILENAME:
                filename = Path(value)
        elif (value := _field(line, "Title:")) is not None:
            title = value or None
        elif (value := _field(line, "Colorspace:")) is not None:
            colorspace = value

    return ProfileRecord(
        name=title or profile_id,
        file_path=filename,
        color_space=ColorSpace.from_name(colorspace),
    )


class ColormgrBackend(Backend):
    """Query colord by shelling out to ``colormgr``."""

    name = "colormgr"

    def __init__(self, command: str = "colormgr") -> None:
        self._command = command

    def _run(self, *args: str) -> str:
        """Run colormgr and return its stdout. Raises SystemApiError on failure."""
        logger.debug("Running %s %s", self._command, " ".join(args))
        try:
            result = subprocess.run(
                [self._command, *args],
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as exc:
            msg = f"{self._command} command not found. Please install colord package."
            raise SystemApiError(msg) from exc
        except OSError as exc:
            msg = f"Failed to execute {self._command}: {exc}"
            raise SystemApiError(msg) from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            msg = f"{self._command} command failed: {stderr}"
            raise SystemApiError(msg)

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Invalid UTF-8 output: {exc}"
            raise ParseError(msg) from exc

    def list_devices(self) -> list[DeviceRecord]:
        return parse_devices(self._run("get-devices"))

    def read_profile(self, profile_id: str) -> ProfileRecord:
        return parse_profile(self._run("get-profile", profile_id), profile_id)
