"""Validation of the fixed SOI / APP1 / Exif prefix."""

from .errors import StructuralMismatch
from .markers import APP1, SOI, lookup_marker
from .models import APP1Segment
from .stream import ByteStream

EXIF_IDENTIFIER = b"Exif"
EXIF_PADDING = b"\x00\x00"


def expect_bytes(stream: ByteStream, expected: bytes, name: str) -> None:
    """Consume len(expected) bytes, raising StructuralMismatch if they differ."""
    offset = stream.cursor
    actual = stream.read(len(expected))
    if actual == expected:
        return

    recognized = lookup_marker(actual) if len(actual) == 2 else None
    raise StructuralMismatch(
        expected=name,
        expected_hex=expected.hex(" ").upper(),
        actual_hex=actual.hex(" ").upper(),
        offset=offset,
        actual_marker=recognized.name if recognized else None,
    )


def validate_header(stream: ByteStream) -> APP1Segment:
    """Consume and check the 12-byte header of a camera Exif JPEG.

    The stream must be positioned at offset 0. On success the cursor sits at
    the start of the APP1 body and the declared (unverified) APP1 length is
    returned inside an APP1Segment.

    Raises:
        StructuralMismatch: if any fixed pattern doesn't match, or the file
            ends before the header is complete
    """
    expect_bytes(stream, SOI.code, "Start of Image")
    expect_bytes(stream, APP1.code, "APP1 marker")

    length_offset = stream.cursor
    declared_length = stream.read_uint16()
    if declared_length is None:
        raise StructuralMismatch(
            expected="APP1 length",
            expected_hex="2 bytes",
            actual_hex=stream.peek_at(length_offset, 2).hex(" ").upper(),
            offset=length_offset,
        )

    expect_bytes(stream, EXIF_IDENTIFIER, "Exif identifier")
    expect_bytes(stream, EXIF_PADDING, "Exif padding")

    return APP1Segment(
        declared_length=declared_length,
        body_start=stream.cursor,
        length_offset=length_offset,
    )
