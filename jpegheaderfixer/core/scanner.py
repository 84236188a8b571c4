"""Single-pass marker scanning over the APP1 body and everything after it."""

from typing import Iterator

from .markers import lookup_marker
from .models import APP1Segment, MarkerHit, ScanResult
from .stream import ByteStream


def sliding_windows(stream: ByteStream) -> Iterator[tuple[int, bytes]]:
    """Yield (offset, two-byte window) pairs from the cursor to end of stream.

    The cursor advances one byte per window, so after yielding a window at
    `offset` the cursor sits at `offset + 2`. Consumed bytes are never
    revisited and the generator can't be restarted.
    """
    data = stream.data
    if stream.remaining() < 2:
        stream.cursor = stream.length
        return

    stream.cursor += 1
    while stream.cursor < stream.length:
        stream.cursor += 1
        offset = stream.cursor - 2
        yield offset, data[offset:stream.cursor]


def scan_markers(stream: ByteStream, segment: APP1Segment) -> ScanResult:
    """Scan forward from the APP1 body start, recording every known marker.

    Raw bytes are also captured at the segment's expected end offset and at
    the wrap-around candidate offset, whether or not a marker sits there.
    """
    result = ScanResult()
    expected_end = segment.expected_end
    wraparound_end = segment.wraparound_end

    for offset, window in sliding_windows(stream):
        marker = lookup_marker(window)
        if marker is not None:
            result.hits.append(MarkerHit(offset, marker))

        if offset == expected_end:
            result.expected_end_bytes = window
        elif offset == wraparound_end:
            result.wraparound_bytes = window

    return result
