"""Data models for APP1 inspection and correction."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from .markers import MarkerSignature

# The 16-bit length field wraps at this size
WRAP_SIZE = 0x10000
MAX_SEGMENT_LENGTH = 0xFFFF

PREFIX_SIZE = 12  # SOI + APP1 + length + "Exif" + padding
LENGTH_OFFSET = 4


class Verdict(str, Enum):
    ALREADY_CORRECT = "already correct"
    WRAP_AROUND = "wrap-around"
    UNRECOGNIZED = "unrecognized pattern"


class RepairPolicy(str, Enum):
    """What to do when the true APP1 length doesn't fit in 16 bits."""

    REFUSE = "refuse"
    SPLIT = "split"


@dataclass(frozen=True)
class APP1Segment:
    """The Exif APP1 segment as declared in the file header."""

    declared_length: int
    body_start: int = PREFIX_SIZE
    length_offset: int = LENGTH_OFFSET

    @property
    def expected_end(self) -> int:
        return self.body_start + self.declared_length

    @property
    def wraparound_end(self) -> int:
        return self.expected_end + WRAP_SIZE

    def to_dict(self) -> dict:
        return {
            "declared_length": self.declared_length,
            "body_start": self.body_start,
            "expected_end": self.expected_end,
            "wraparound_end": self.wraparound_end,
        }


@dataclass(frozen=True)
class MarkerHit:
    offset: int
    marker: MarkerSignature

    def __str__(self) -> str:
        return f"0x{self.offset:08X} ({self.offset}) {self.marker}  {self.marker.description}"


@dataclass
class ScanResult:
    """Markers found by a single forward pass, plus raw bytes at the probe offsets."""

    hits: list[MarkerHit] = field(default_factory=list)
    expected_end_bytes: Optional[bytes] = None  # None if the offset is past EOF
    wraparound_bytes: Optional[bytes] = None

    def marker_at(self, offset: int) -> Optional[MarkerHit]:
        for hit in self.hits:
            if hit.offset == offset:
                return hit
            if hit.offset > offset:
                break
        return None


@dataclass
class Correction:
    """Outcome of comparing the declared length against the scan."""

    verdict: Verdict
    segment: APP1Segment
    true_length: Optional[int] = None
    evidence: Optional[MarkerHit] = None

    @property
    def needs_repair(self) -> bool:
        return self.verdict == Verdict.WRAP_AROUND


@dataclass
class InspectionReport:
    """Everything learned about one input file, plus what was done about it."""

    path: Path
    file_size: int
    segment: APP1Segment
    scan: ScanResult
    correction: Correction
    dry_run: bool = False
    policy: RepairPolicy = RepairPolicy.REFUSE
    output_path: Optional[Path] = None
    output_size: Optional[int] = None  # bytes written (or that would be written)
    written: bool = False
    verified: Optional[bool] = None

    @property
    def verdict(self) -> Verdict:
        return self.correction.verdict

    def status(self) -> str:
        """One-word-ish outcome for summaries."""
        if self.verdict == Verdict.WRAP_AROUND:
            if self.written:
                return "corrected"
            if self.output_size is not None:
                return "would correct"
            return "wrap-around (not representable)"
        return self.verdict.value

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "file_size": self.file_size,
            "segment": self.segment.to_dict(),
            "markers": [
                {"offset": hit.offset, "marker": hit.marker.name} for hit in self.scan.hits
            ],
            "verdict": self.verdict.value,
            "true_length": self.correction.true_length,
            "status": self.status(),
            "policy": self.policy.value,
            "dry_run": self.dry_run,
            "output_path": str(self.output_path) if self.output_path else None,
            "written": self.written,
        }

    def __str__(self) -> str:
        seg = self.segment
        lines = [
            f"File:              {self.path} ({self.file_size} bytes)",
            f"Declared length:   {seg.declared_length} (0x{seg.declared_length:04X})",
            f"Body start:        0x{seg.body_start:08X} ({seg.body_start})",
            f"Expected end:      0x{seg.expected_end:08X} ({seg.expected_end})"
            f"  bytes: {_format_raw(self.scan.expected_end_bytes)}",
            f"Wrap-around end:   0x{seg.wraparound_end:08X} ({seg.wraparound_end})"
            f"  bytes: {_format_raw(self.scan.wraparound_bytes)}",
        ]

        if self.scan.hits:
            lines.append(f"Markers found:     {len(self.scan.hits)}")
            for hit in self.scan.hits[:20]:
                lines.append(f"  {hit}")
            if len(self.scan.hits) > 20:
                lines.append(f"  ... and {len(self.scan.hits) - 20} more")
        else:
            lines.append("Markers found:     none")

        correction = self.correction
        if correction.verdict == Verdict.WRAP_AROUND:
            lines.append(
                f"True length:       {correction.true_length} "
                f"(declared {seg.declared_length} + {WRAP_SIZE})"
            )
            lines.append(
                f"                   exceeds the 16-bit length field (max {MAX_SEGMENT_LENGTH}),"
                f" a 2-byte patch can't represent it"
            )
        lines.append(f"Verdict:           {self.verdict.value}")
        return "\n".join(lines)

    def outcome(self) -> str:
        """What was done (or would be done) about the file."""
        lines = [f"Result:            {self.status()}"]
        if self.output_size is not None:
            if self.written:
                lines.append(f"Written:           {self.output_path} ({self.output_size} bytes)")
            else:
                target = self.output_path or "<no output path>"
                lines.append(f"Dry run:           would write {self.output_size} bytes to {target}")
        elif self.verdict == Verdict.ALREADY_CORRECT:
            lines.append("Nothing to do, no output written")
        if self.verified is not None:
            lines.append(f"Verified:          {'decodes OK' if self.verified else 'does NOT decode'}")
        return "\n".join(lines)


def _format_raw(raw: Optional[bytes]) -> str:
    if raw is None:
        return "<beyond end of file>"
    return raw.hex(" ").upper()
