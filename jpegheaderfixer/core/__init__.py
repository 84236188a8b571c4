"""Core logic - header validation, marker scanning and length correction."""

from .errors import (
    FileAccessError,
    JpegFixError,
    StructuralMismatch,
    UnrecognizedDefect,
    UnrepresentableLength,
    UsageError,
)
from .inspector import MarkerStreamInspector
from .markers import MARKERS, MarkerSignature, lookup_marker
from .models import APP1Segment, Correction, InspectionReport, RepairPolicy, ScanResult, Verdict

__all__ = [
    "APP1Segment",
    "Correction",
    "FileAccessError",
    "InspectionReport",
    "JpegFixError",
    "MARKERS",
    "MarkerSignature",
    "MarkerStreamInspector",
    "RepairPolicy",
    "ScanResult",
    "StructuralMismatch",
    "UnrecognizedDefect",
    "UnrepresentableLength",
    "UsageError",
    "Verdict",
    "lookup_marker",
]
