"""Error types raised while inspecting and repairing JPEG files.

Every error carries the process exit code the command-line driver reports
for it. Core code only raises; it never exits.
"""

from pathlib import Path
from typing import Optional


class JpegFixError(Exception):
    """Base class for all errors of this tool."""

    exit_code = 1


class UsageError(JpegFixError):
    """Raised for bad or missing command-line arguments."""

    exit_code = 1


class FileAccessError(JpegFixError):
    """Raised when the input can't be read or the output can't be written."""

    exit_code = 1

    def __init__(self, message: str, path: str | Path):
        super().__init__(message)
        self.path = Path(path)


class StructuralMismatch(JpegFixError):
    """Raised when the fixed SOI/APP1/Exif prefix is not what we expect."""

    exit_code = 2

    def __init__(
        self,
        expected: str,
        expected_hex: str,
        actual_hex: str,
        offset: int,
        actual_marker: Optional[str] = None,
    ):
        self.expected = expected
        self.expected_hex = expected_hex
        self.actual_hex = actual_hex
        self.offset = offset
        self.actual_marker = actual_marker

        message = (
            f"Expected {expected} ({expected_hex}) at offset {offset}, "
            f"found {actual_hex or '<end of file>'}"
        )
        if actual_marker:
            message += f" which is a {actual_marker} marker"
        super().__init__(message)


class UnrecognizedDefect(JpegFixError):
    """Raised when the APP1 length is wrong but not in the known wrap-around way."""

    exit_code = 2

    def __init__(self, message: str, hexdump: str = ""):
        super().__init__(message)
        self.hexdump = hexdump


class UnrepresentableLength(JpegFixError):
    """Raised when a wrap-around was found but the policy forbids restructuring."""

    exit_code = 2

    def __init__(self, true_length: int):
        super().__init__(
            f"True APP1 length {true_length} does not fit the 16-bit length field; "
            f"refusing to patch (use the 'split' policy to restructure the segment)"
        )
        self.true_length = true_length
