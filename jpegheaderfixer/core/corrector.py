"""Decide whether the declared APP1 length is wrong, and build the repaired bytes."""

import struct

from .errors import UnrepresentableLength
from .markers import APP1
from .models import (
    APP1Segment,
    Correction,
    MAX_SEGMENT_LENGTH,
    RepairPolicy,
    ScanResult,
    Verdict,
    WRAP_SIZE,
)
from .validator import EXIF_IDENTIFIER, EXIF_PADDING


def decide_correction(segment: APP1Segment, scan: ScanResult) -> Correction:
    """Classify the declared APP1 length using the markers found by the scan.

    A known marker at the expected end means the length is already right.
    Failing that, a known marker exactly one 16-bit wrap further on is the
    firmware bug: the true length is the declared one plus 65536. Anything
    else is left alone.
    """
    hit = scan.marker_at(segment.expected_end)
    if hit is not None:
        return Correction(
            verdict=Verdict.ALREADY_CORRECT,
            segment=segment,
            true_length=segment.declared_length,
            evidence=hit,
        )

    hit = scan.marker_at(segment.wraparound_end)
    if hit is not None:
        return Correction(
            verdict=Verdict.WRAP_AROUND,
            segment=segment,
            true_length=segment.declared_length + WRAP_SIZE,
            evidence=hit,
        )

    return Correction(verdict=Verdict.UNRECOGNIZED, segment=segment)


def split_segment(data: bytes, segment: APP1Segment, true_length: int) -> bytes:
    """Rewrite an oversized APP1 as a full-size APP1 plus continuation APP1s.

    Every piece is framed like the original one (marker, length, "Exif\\0\\0",
    body) and its length counts the body bytes that follow the padding, so
    each declared length lands exactly on the next marker. All other bytes
    are copied unchanged.
    """
    body_end = segment.body_start + true_length
    body = data[segment.body_start:body_end]
    chunks = [body[i:i + MAX_SEGMENT_LENGTH] for i in range(0, len(body), MAX_SEGMENT_LENGTH)]

    out = bytearray(data[:segment.length_offset])
    out += struct.pack(">H", len(chunks[0]))
    out += data[segment.length_offset + 2:segment.body_start]
    out += chunks[0]
    for chunk in chunks[1:]:
        out += APP1.code
        out += struct.pack(">H", len(chunk))
        out += EXIF_IDENTIFIER + EXIF_PADDING
        out += chunk
    out += data[body_end:]
    return bytes(out)


def apply_correction(
    data: bytes,
    correction: Correction,
    policy: RepairPolicy = RepairPolicy.REFUSE,
) -> bytes:
    """Return the corrected file contents for a wrap-around correction.

    Raises:
        ValueError: if the correction doesn't call for a repair
        UnrepresentableLength: under the REFUSE policy, since the true length
            can't be written back into the 2-byte field
    """
    if not correction.needs_repair:
        raise ValueError(f"Nothing to correct (verdict: {correction.verdict.value})")

    if policy == RepairPolicy.REFUSE:
        raise UnrepresentableLength(correction.true_length)

    return split_segment(data, correction.segment, correction.true_length)
