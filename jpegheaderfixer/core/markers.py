"""JPEG marker signatures recognized by the inspector."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MarkerSignature:
    """A fixed two-byte marker pattern with a readable name."""

    code: bytes
    name: str
    description: str = ""

    @property
    def hex(self) -> str:
        return self.code.hex().upper()

    def __str__(self) -> str:
        return f"{self.name} (0x{self.hex})"


SOI = MarkerSignature(b"\xff\xd8", "SOI", "Start of Image")
EOI = MarkerSignature(b"\xff\xd9", "EOI", "End of Image")
APP0 = MarkerSignature(b"\xff\xe0", "APP0", "Application segment 0 (JFIF)")
APP1 = MarkerSignature(b"\xff\xe1", "APP1", "Application segment 1 (Exif)")
DQT = MarkerSignature(b"\xff\xdb", "DQT", "Define Quantization Table")

# Lookup table, built once at import
MARKERS: tuple[MarkerSignature, ...] = (SOI, EOI, APP0, APP1, DQT)

_BY_CODE = {marker.code: marker for marker in MARKERS}


def lookup_marker(window: bytes) -> Optional[MarkerSignature]:
    """Return the known marker matching the two given bytes, if any."""
    return _BY_CODE.get(bytes(window))
