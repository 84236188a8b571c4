"""JPEG Header Fixer - repair the APP1 (Exif) length of Samsung Galaxy S2 JPEGs.

Package structure:
    jpegheaderfixer/
    ├── cli.py              # Single-file command-line interface
    ├── cli_batch.py        # Batch command-line interface (YAML config)
    ├── config.py           # Environment and YAML configuration
    ├── core/               # Core logic
    │   ├── markers.py      # Marker signature table
    │   ├── stream.py       # Forward-only byte stream
    │   ├── validator.py    # SOI/APP1/Exif prefix validation
    │   ├── scanner.py      # Sliding-window marker scan
    │   ├── corrector.py    # Length decision and repair
    │   ├── inspector.py    # Single-file pipeline
    │   └── batch.py        # Multi-file runs
    └── storage/            # File access
        └── files.py        # Input/output and Pillow verification
"""

__version__ = "0.1.0"

from .core.errors import (
    FileAccessError,
    JpegFixError,
    StructuralMismatch,
    UnrecognizedDefect,
    UnrepresentableLength,
    UsageError,
)
from .core.inspector import MarkerStreamInspector
from .core.models import InspectionReport, RepairPolicy, Verdict
from .config import BatchConfig, load_config
from .core.batch import BatchFixer, BatchReport

__all__ = [
    # Core
    "MarkerStreamInspector",
    "InspectionReport",
    "RepairPolicy",
    "Verdict",
    # Batch
    "BatchConfig",
    "BatchFixer",
    "BatchReport",
    "load_config",
    # Errors
    "JpegFixError",
    "UsageError",
    "FileAccessError",
    "StructuralMismatch",
    "UnrecognizedDefect",
    "UnrepresentableLength",
]
