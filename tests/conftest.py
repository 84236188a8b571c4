import struct

import pytest

SOI = b"\xff\xd8"
EOI = b"\xff\xd9"
APP1 = b"\xff\xe1"


def build_jpeg(declared_length: int, body_size: int, tail: bytes = SOI + EOI) -> bytes:
    """SOI + APP1(Exif) prefix with the given declared length, a zero body, then `tail`."""
    prefix = SOI + APP1 + struct.pack(">H", declared_length) + b"Exif\x00\x00"
    return prefix + bytes(body_size) + tail


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("JPEGFIX_POLICY", "JPEGFIX_VERIFY", "JPEGFIX_SUFFIX"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def correct_bytes() -> bytes:
    # Declared length 16, next image starts right at offset 28
    return build_jpeg(0x0010, 16)


@pytest.fixture
def wrapped_bytes() -> bytes:
    # True length 65541 stored as 65541 % 65536 = 5; next SOI at 12 + 65541
    return build_jpeg(0x0005, 65541)


@pytest.fixture
def unrecognized_bytes() -> bytes:
    # Length points into the body, and nothing sits one wrap further either
    return build_jpeg(0x0010, 40)


@pytest.fixture
def correct_file(tmp_path, correct_bytes):
    path = tmp_path / "correct.jpg"
    path.write_bytes(correct_bytes)
    return path


@pytest.fixture
def wrapped_file(tmp_path, wrapped_bytes):
    path = tmp_path / "wrapped.jpg"
    path.write_bytes(wrapped_bytes)
    return path


@pytest.fixture
def unrecognized_file(tmp_path, unrecognized_bytes):
    path = tmp_path / "unrecognized.jpg"
    path.write_bytes(unrecognized_bytes)
    return path
