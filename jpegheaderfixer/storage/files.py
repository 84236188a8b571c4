"""Reading inputs, writing repaired outputs, and verifying them with Pillow."""

import os
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..core.errors import FileAccessError

JPEG_EXTENSIONS = {".jpg", ".jpeg"}


def is_jpeg(filepath: str | Path, extensions: Optional[set[str]] = None) -> bool:
    """Check if a file looks like a JPEG based on extension."""
    return Path(filepath).suffix.lower() in (extensions or JPEG_EXTENSIONS)


def read_input(filepath: str | Path) -> bytes:
    """Read the whole input file.

    Raises:
        FileAccessError: if the file is missing, not a regular file, or unreadable
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileAccessError(f"Input file '{filepath}' doesn't exist", filepath)
    if not filepath.is_file():
        raise FileAccessError(f"Input file '{filepath}' is not a regular file", filepath)

    try:
        with open(filepath, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(f"Input file '{filepath}' can't be read: {e}", filepath) from e


def check_output_path(filepath: str | Path) -> None:
    """Make sure the output can be created without clobbering anything.

    Raises:
        FileAccessError: if the path already exists or its directory isn't writable
    """
    filepath = Path(filepath)
    if filepath.exists():
        raise FileAccessError(f"Output file '{filepath}' already exists", filepath)

    parent = filepath.parent if str(filepath.parent) else Path(".")
    if parent.exists() and not os.access(parent, os.W_OK):
        raise FileAccessError(f"Output file '{filepath}' is not writable", filepath)


def write_output(filepath: str | Path, data: bytes) -> int:
    """Create the output file exclusively and write `data` to it.

    A file that was created but couldn't be written completely is removed
    again, so a failed write leaves nothing behind.

    Returns:
        Number of bytes written

    Raises:
        FileAccessError: if the file appeared in the meantime or can't be written
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        f = open(filepath, "xb")
    except FileExistsError as e:
        raise FileAccessError(f"Output file '{filepath}' already exists", filepath) from e
    except OSError as e:
        raise FileAccessError(f"Output file '{filepath}' can't be created: {e}", filepath) from e

    try:
        with f:
            f.write(data)
    except OSError as e:
        filepath.unlink(missing_ok=True)
        raise FileAccessError(f"Output file '{filepath}' can't be written: {e}", filepath) from e
    return len(data)


def verify_image(filepath: str | Path) -> bool:
    """Check whether Pillow can open and verify the image at `filepath`."""
    try:
        with Image.open(filepath) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False
    return True
