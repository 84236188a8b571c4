import pytest

from conftest import build_jpeg
from jpegheaderfixer.core.corrector import apply_correction, decide_correction, split_segment
from jpegheaderfixer.core.errors import UnrepresentableLength
from jpegheaderfixer.core.inspector import MarkerStreamInspector
from jpegheaderfixer.core.markers import SOI
from jpegheaderfixer.core.models import RepairPolicy, Verdict
from jpegheaderfixer.core.scanner import scan_markers
from jpegheaderfixer.core.stream import ByteStream
from jpegheaderfixer.core.validator import validate_header


def _decide(data: bytes):
    stream = ByteStream(data)
    segment = validate_header(stream)
    return decide_correction(segment, scan_markers(stream, segment))


def test_already_correct(correct_bytes):
    correction = _decide(correct_bytes)

    assert correction.verdict == Verdict.ALREADY_CORRECT
    assert correction.true_length == 16
    assert correction.evidence.offset == 28
    assert correction.evidence.marker is SOI
    assert not correction.needs_repair


def test_wraparound_detected(wrapped_bytes):
    correction = _decide(wrapped_bytes)

    assert correction.verdict == Verdict.WRAP_AROUND
    assert correction.true_length == 65541
    assert correction.evidence.offset == 65553
    assert correction.needs_repair


def test_marker_at_expected_end_wins_over_wraparound():
    # Markers at both candidates: the declared length is trusted
    data = bytearray(build_jpeg(5, 65541))
    data[17:19] = b"\xff\xd9"
    assert _decide(bytes(data)).verdict == Verdict.ALREADY_CORRECT


def test_unrecognized(unrecognized_bytes):
    correction = _decide(unrecognized_bytes)

    assert correction.verdict == Verdict.UNRECOGNIZED
    assert correction.true_length is None
    assert correction.evidence is None


def test_refuse_policy_raises(wrapped_bytes):
    correction = _decide(wrapped_bytes)

    with pytest.raises(UnrepresentableLength) as exc_info:
        apply_correction(wrapped_bytes, correction, RepairPolicy.REFUSE)
    assert exc_info.value.true_length == 65541
    assert exc_info.value.exit_code == 2


def test_apply_without_defect_is_an_error(correct_bytes):
    with pytest.raises(ValueError):
        apply_correction(correct_bytes, _decide(correct_bytes), RepairPolicy.SPLIT)


def test_split_preserves_body_and_tail(wrapped_bytes):
    correction = _decide(wrapped_bytes)
    fixed = apply_correction(wrapped_bytes, correction, RepairPolicy.SPLIT)

    # One continuation segment of 6 body bytes, framed with 10 extra bytes
    assert len(fixed) == len(wrapped_bytes) + 10
    assert fixed[:4] == wrapped_bytes[:4]
    assert fixed[4:6] == b"\xff\xff"
    assert fixed[6:12] == b"Exif\x00\x00"
    assert fixed[65547:65557] == b"\xff\xe1\x00\x06Exif\x00\x00"

    body = fixed[12:65547] + fixed[65557:65563]
    assert body == wrapped_bytes[12:65553]
    assert fixed[65563:] == wrapped_bytes[65553:]


def test_split_output_reinspects_as_correct(wrapped_bytes):
    correction = _decide(wrapped_bytes)
    fixed = apply_correction(wrapped_bytes, correction, RepairPolicy.SPLIT)

    report = MarkerStreamInspector().inspect(fixed)
    assert report.verdict == Verdict.ALREADY_CORRECT
    assert report.segment.declared_length == 0xFFFF


def test_split_into_several_continuations():
    # True length 3 * 65535 + 100, declared as its value modulo 65536
    true_length = 3 * 65535 + 100
    data = build_jpeg(true_length % 65536, true_length)
    stream = ByteStream(data)
    segment = validate_header(stream)

    fixed = split_segment(data, segment, true_length)

    assert len(fixed) == len(data) + 3 * 10
    assert fixed.count(b"\xff\xe1") == 4
    assert fixed.endswith(b"\xff\xd8\xff\xd9")
