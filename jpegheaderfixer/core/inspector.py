"""Inspection and repair of a single JPEG file."""

from pathlib import Path
from typing import Callable, Optional

from .corrector import apply_correction, decide_correction
from .errors import UnrecognizedDefect, UsageError
from .models import InspectionReport, RepairPolicy, Verdict
from .scanner import scan_markers
from .stream import ByteStream
from .validator import validate_header
from ..storage.files import check_output_path, read_input, verify_image, write_output


class MarkerStreamInspector:
    """Validates, scans and (if asked to) repairs the APP1 framing of JPEG files."""

    def __init__(self, policy: RepairPolicy = RepairPolicy.REFUSE, verify: bool = False):
        """Initialize the inspector.

        Args:
            policy: What to do when the true APP1 length exceeds 16 bits
            verify: Open written files with Pillow to check they still decode
        """
        self.policy = RepairPolicy(policy)
        self.verify = verify

    def inspect(self, data: bytes, path: str | Path = "<memory>") -> InspectionReport:
        """Run header validation, the marker scan and the length decision on `data`.

        Raises:
            StructuralMismatch: if the SOI/APP1/Exif prefix is missing
        """
        stream = ByteStream(data)
        segment = validate_header(stream)
        scan = scan_markers(stream, segment)
        correction = decide_correction(segment, scan)
        return InspectionReport(
            path=Path(path),
            file_size=stream.length,
            segment=segment,
            scan=scan,
            correction=correction,
            policy=self.policy,
        )

    def fix_file(
        self,
        input_path: str | Path,
        output_path: Optional[str | Path] = None,
        dry_run: bool = False,
        on_analyzed: Optional[Callable[[InspectionReport], None]] = None,
    ) -> InspectionReport:
        """Analyze `input_path` and write the repaired file to `output_path`.

        The output path is checked before the input is analyzed, and the file
        is only created once the corrected bytes are complete. In a dry run
        nothing is written; the report says what would have been.

        Args:
            input_path: JPEG file to inspect
            output_path: Where to write the repaired copy (optional in a dry run)
            dry_run: Analyze and report only
            on_analyzed: Called with the report once analysis is done, before
                any decision about writing is taken

        Returns:
            InspectionReport describing the analysis and the outcome

        Raises:
            UsageError: no output path outside of a dry run
            FileAccessError: unreadable input, or existing/unwritable output
            StructuralMismatch: input doesn't start with SOI + APP1(Exif)
            UnrecognizedDefect: wrong length that isn't the wrap-around bug
            UnrepresentableLength: wrap-around found under the REFUSE policy
        """
        if output_path is None and not dry_run:
            raise UsageError("No output file given (required unless -n is used)")

        output_path = Path(output_path) if output_path is not None else None
        if output_path is not None:
            check_output_path(output_path)

        data = read_input(input_path)
        report = self.inspect(data, input_path)
        report.dry_run = dry_run
        report.output_path = output_path

        if on_analyzed is not None:
            on_analyzed(report)

        if report.verdict == Verdict.ALREADY_CORRECT:
            return report

        if report.verdict == Verdict.UNRECOGNIZED:
            segment = report.segment
            observed = report.scan.expected_end_bytes
            raise UnrecognizedDefect(
                f"Declared APP1 length {segment.declared_length} points to offset "
                f"{segment.expected_end} "
                f"({observed.hex(' ').upper() if observed else 'beyond end of file'}), "
                f"and no known marker sits there or at the wrap-around offset "
                f"{segment.wraparound_end}; not touching this file",
                hexdump=ByteStream(data).hexdump(segment.expected_end),
            )

        corrected = apply_correction(data, report.correction, self.policy)
        report.output_size = len(corrected)

        if dry_run:
            return report

        report.output_size = write_output(output_path, corrected)
        report.written = True
        if self.verify:
            report.verified = verify_image(output_path)
        return report
