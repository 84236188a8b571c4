from conftest import build_jpeg
from jpegheaderfixer.core.markers import EOI, SOI
from jpegheaderfixer.core.models import APP1Segment
from jpegheaderfixer.core.scanner import scan_markers, sliding_windows
from jpegheaderfixer.core.stream import ByteStream
from jpegheaderfixer.core.validator import validate_header


def _scan(data: bytes):
    stream = ByteStream(data)
    segment = validate_header(stream)
    return scan_markers(stream, segment), stream


def test_sliding_windows_offsets_and_cursor():
    stream = ByteStream(b"\x00\x01\x02\x03")
    stream.cursor = 1

    windows = []
    for offset, window in sliding_windows(stream):
        assert stream.cursor == offset + 2
        windows.append((offset, window))

    assert windows == [(1, b"\x01\x02"), (2, b"\x02\x03")]
    assert stream.at_end()


def test_sliding_windows_too_short():
    stream = ByteStream(b"\x00")
    assert list(sliding_windows(stream)) == []
    assert stream.cursor == 1


def test_scan_finds_markers_in_order(correct_bytes):
    result, stream = _scan(correct_bytes)

    assert [(h.offset, h.marker) for h in result.hits] == [(28, SOI), (30, EOI)]
    assert stream.at_end()


def test_scan_records_raw_bytes_at_expected_end(unrecognized_bytes):
    result, _ = _scan(unrecognized_bytes)

    # 12 + 16 = 28 falls inside the zero body
    assert result.expected_end_bytes == b"\x00\x00"
    assert result.marker_at(28) is None
    assert result.wraparound_bytes is None


def test_scan_records_wraparound_bytes(wrapped_bytes):
    result, _ = _scan(wrapped_bytes)

    assert result.expected_end_bytes == b"\x00\x00"
    assert result.wraparound_bytes == b"\xff\xd8"
    assert result.marker_at(65553).marker is SOI


def test_scan_ignores_unknown_ff_windows():
    data = build_jpeg(4, 4, tail=b"\xff\x00\xff\xc4\xff\xdb")
    result, _ = _scan(data)

    assert [h.marker.name for h in result.hits] == ["DQT"]
    assert result.hits[0].offset == 20


def test_scan_is_deterministic(wrapped_bytes):
    first, _ = _scan(wrapped_bytes)
    second, _ = _scan(wrapped_bytes)

    assert first.hits == second.hits
    assert first.expected_end_bytes == second.expected_end_bytes
    assert first.wraparound_bytes == second.wraparound_bytes


def test_scan_with_empty_body():
    data = build_jpeg(0, 0, tail=b"")
    stream = ByteStream(data)
    segment = validate_header(stream)
    result = scan_markers(stream, segment)

    assert result.hits == []
    assert result.expected_end_bytes is None


def test_scan_starts_at_cursor():
    # A marker before the cursor must not be reported
    data = b"\xff\xd8\x00\x00"
    stream = ByteStream(data)
    stream.cursor = 1
    result = scan_markers(stream, APP1Segment(declared_length=0, body_start=1))

    assert result.hits == []
    assert result.expected_end_bytes == b"\xd8\x00"
