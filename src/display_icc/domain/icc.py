"""ICC profile header codec.

Decodes the fixed 128-byte header at the start of every ICC profile
(ICC.1 section 7.2). Only the header is read; tag tables and any bytes past
offset 127 are never interpreted.

Layout (all integers big-endian):

====== ======================= ===================================
Offset Field                   Encoding
====== ======================= ===================================
0      profile_size            u32
4      preferred_cmm           4-char signature
8      version                 major byte, minor in high nibble of byte 9
12     device_class            4-char signature
16     data_color_space        4-char signature
20     connection_space        4-char signature
24     creation_datetime       6 x u16 (Y, M, D, h, m, s)
40     platform                4-char signature
44     flags                   u32
48     device_manufacturer     4-char signature
52     device_model            4-char signature
====== ======================= ===================================

INVARIANT: Signatures keep trailing spaces (``"RGB "``); only trailing NUL
characters are stripped.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any

from display_icc.domain.errors import ParseError
from display_icc.domain.types import ColorSpace

HEADER_SIZE = 128

DEVICE_CLASSES: frozenset[str] = frozenset({"mntr", "scnr", "prtr", "link", "spac", "abst", "nmcl"})

DATA_COLOR_SPACES: frozenset[str] = frozenset(
    {"RGB ", "CMYK", "Lab ", "XYZ ", "Luv ", "YCbr", "Yxy ", "HSV ", "HLS ", "CMY "}
)

_DATETIME = struct.Struct(">6H")


def _signature(data: bytes, offset: int) -> str:
    return data[offset : offset + 4].decode("utf-8", errors="replace").rstrip("\0")


def _u32(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 4], "big")


def _creation_datetime(data: bytes) -> str | None:
    raw = data[24:36]
    if not any(raw):
        return None
    year, month, day, hour, minute, second = _DATETIME.unpack(raw)
    # No calendar validation: month 13 is rendered as-is.
    return f"{year:04d}-{month:02d}-{day:02d} {hour:02d}:{minute:02d}:{second:02d}"


@dataclass(frozen=True)
class IccHeader:
    """Decoded ICC profile header.

    Construct with :meth:`parse`; check with :meth:`validate`.
    """

    profile_size: int
    preferred_cmm: str
    version: tuple[int, int]
    device_class: str
    data_color_space: str
    connection_space: str
    creation_datetime: str | None
    platform: str
    flags: int
    device_manufacturer: str
    device_model: str

    @classmethod
    def parse(cls, data: bytes) -> IccHeader:
        """Decode the first 128 bytes of *data*.

        Raises ParseError when *data* is shorter than the header. Any buffer
        of 128 bytes or more decodes; malformed field contents are reported
        by :meth:`validate`, not here.
        """
        if len(data) < HEADER_SIZE:
            msg = f"ICC profile data too short: {len(data)} bytes (minimum {HEADER_SIZE})"
            raise ParseError(msg)

        version_raw = _u32(data, 8)
        return cls(
            profile_size=_u32(data, 0),
            preferred_cmm=_signature(data, 4),
            version=((version_raw >> 24) & 0xFF, (version_raw >> 20) & 0x0F),
            device_class=_signature(data, 12),
            data_color_space=_signature(data, 16),
            connection_space=_signature(data, 20),
            creation_datetime=_creation_datetime(data),
            platform=_signature(data, 40),
            flags=_u32(data, 44),
            device_manufacturer=_signature(data, 48),
            device_model=_signature(data, 52),
        )

    def validate(self) -> None:
        """Raise ParseError unless size, device class, and color space are recognized.

        Connection space, platform, and the remaining signatures are
        informational and never checked.
        """
        if self.profile_size < HEADER_SIZE:
            msg = f"Invalid profile size: {self.profile_size} bytes"
            raise ParseError(msg)
        if self.device_class not in DEVICE_CLASSES:
            msg = f"Invalid device class: {self.device_class}"
            raise ParseError(msg)
        if self.data_color_space not in DATA_COLOR_SPACES:
            msg = f"Invalid data color space: {self.data_color_space}"
            raise ParseError(msg)

    @property
    def version_string(self) -> str:
        return f"{self.version[0]}.{self.version[1]}"

    @property
    def color_space(self) -> ColorSpace:
        return ColorSpace.from_signature(self.data_color_space)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile_size": self.profile_size,
            "preferred_cmm": self.preferred_cmm,
            "version": self.version_string,
            "device_class": self.device_class,
            "data_color_space": self.data_color_space,
            "connection_space": self.connection_space,
            "creation_datetime": self.creation_datetime,
            "platform": self.platform,
            "flags": f"0x{self.flags:08X}",
            "device_manufacturer": self.device_manufacturer,
            "device_model": self.device_model,
        }


def parse_icc_header(data: bytes) -> IccHeader:
    """Decode an ICC header from raw profile bytes."""
    return IccHeader.parse(data)


def build_header(
    *,
    profile_size: int = HEADER_SIZE,
    preferred_cmm: str = "",
    version: int = 0x02100000,
    device_class: str = "mntr",
    data_color_space: str = "RGB ",
    connection_space: str = "XYZ ",
) -> bytes:
    """Assemble a minimal 128-byte header with all other fields zeroed.

    Used for the built-in constant profiles, which carry a header but no tags.
    """

    def sig(value: str) -> bytes:
        return value.encode("ascii").ljust(4, b"\0")[:4]

    data = bytearray(HEADER_SIZE)
    data[0:4] = profile_size.to_bytes(4, "big")
    data[4:8] = sig(preferred_cmm)
    data[8:12] = version.to_bytes(4, "big")
    data[12:16] = sig(device_class)
    data[16:20] = sig(data_color_space)
    data[20:24] = sig(connection_space)
    return bytes(data)
