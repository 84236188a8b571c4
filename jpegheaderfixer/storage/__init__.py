"""File access - reading inputs, writing and verifying outputs."""

from .files import (
    JPEG_EXTENSIONS,
    check_output_path,
    is_jpeg,
    read_input,
    verify_image,
    write_output,
)

__all__ = [
    "JPEG_EXTENSIONS",
    "check_output_path",
    "is_jpeg",
    "read_input",
    "verify_image",
    "write_output",
]
