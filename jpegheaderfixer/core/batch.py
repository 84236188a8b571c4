"""Batch repair of every JPEG under the configured paths."""

from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from .errors import (
    FileAccessError,
    StructuralMismatch,
    UnrecognizedDefect,
    UnrepresentableLength,
)
from .inspector import MarkerStreamInspector
from .models import Verdict
from ..config import BatchConfig
from ..storage.files import is_jpeg


@dataclass
class BatchReport:
    """Per-outcome file lists of a batch run."""

    corrected: list[str] = field(default_factory=list)
    would_correct: list[str] = field(default_factory=list)  # dry run
    already_correct: list[str] = field(default_factory=list)
    refused: list[str] = field(default_factory=list)  # wrap-around, policy says no
    unrecognized: list[str] = field(default_factory=list)
    not_exif: list[str] = field(default_factory=list)  # prefix mismatch
    errors: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # name ends with the output suffix

    @property
    def total(self) -> int:
        return (
            len(self.skipped)
            + len(self.corrected)
            + len(self.would_correct)
            + len(self.already_correct)
            + len(self.refused)
            + len(self.unrecognized)
            + len(self.not_exif)
            + len(self.errors)
        )

    def __str__(self) -> str:
        lines = []
        if self.corrected:
            lines.append(f"Corrected: {len(self.corrected)}")
        if self.would_correct:
            lines.append(f"Would correct: {len(self.would_correct)}")
        if self.already_correct:
            lines.append(f"Already correct: {len(self.already_correct)}")
        if self.refused:
            lines.append(f"Wrap-around, not repaired (policy 'refuse'): {len(self.refused)}")
        if self.unrecognized:
            lines.append(f"Unrecognized length defect: {len(self.unrecognized)}")
        if self.not_exif:
            lines.append(f"Not an SOI+APP1(Exif) file: {len(self.not_exif)}")
        if self.errors:
            lines.append(f"Errors: {len(self.errors)}")
        if self.skipped:
            lines.append(f"Skipped (name ends with output suffix): {len(self.skipped)}")
        if not lines:
            lines.append("No files processed")
        return "\n".join(lines)


class BatchFixer:
    """Runs the inspector over every JPEG found under a BatchConfig's paths."""

    def __init__(self, config: BatchConfig):
        self.config = config
        self.paths = [Path(p) for p in config.paths]
        self.inspector = MarkerStreamInspector(policy=config.policy, verify=config.verify)

    def _is_candidate(self, filepath: Path) -> bool:
        return is_jpeg(filepath, set(self.config.extensions))

    def _has_output_suffix(self, filepath: Path) -> bool:
        """Whether the name looks like one of our outputs from an earlier run."""
        suffix = self.config.suffix
        return bool(suffix) and filepath.stem.endswith(suffix)

    def find_files(self) -> list[Path]:
        """Collect JPEG files from all configured paths, sorted per path."""
        files: list[Path] = []
        for path in self.paths:
            if not path.exists():
                continue
            if path.is_file():
                if self._is_candidate(path):
                    files.append(path)
                continue
            found = path.rglob("*") if self.config.recursive else path.glob("*")
            files.extend(sorted(f for f in found if f.is_file() and self._is_candidate(f)))
        return files

    def run(self, dry_run: bool = False, progress: bool = True) -> BatchReport:
        """Fix every candidate file and collect the outcomes.

        Per-file failures are recorded in the report rather than raised.
        Files whose name ends with the output suffix are skipped and listed.
        """
        report = BatchReport()

        for filepath in tqdm(self.find_files(), desc="Fixing", disable=not progress):
            name = str(filepath)
            if self._has_output_suffix(filepath):
                tqdm.write(
                    f"Skipped: {filepath.name}: name ends with output suffix "
                    f"'{self.config.suffix}'"
                )
                report.skipped.append(name)
                continue

            try:
                result = self.inspector.fix_file(
                    filepath,
                    self.config.output_for(filepath),
                    dry_run=dry_run,
                )
            except UnrepresentableLength as e:
                tqdm.write(f"Warning: {filepath.name}: {e}")
                report.refused.append(name)
                continue
            except UnrecognizedDefect as e:
                tqdm.write(f"Warning: {filepath.name}: {e}")
                report.unrecognized.append(name)
                continue
            except StructuralMismatch as e:
                tqdm.write(f"Skipped: {filepath.name}: {e}")
                report.not_exif.append(name)
                continue
            except FileAccessError as e:
                tqdm.write(f"Error: {e}")
                report.errors.append(f"{name}: {e}")
                continue

            if result.verdict == Verdict.ALREADY_CORRECT:
                report.already_correct.append(name)
            elif result.written:
                report.corrected.append(name)
                if result.verified is False:
                    tqdm.write(f"Warning: {result.output_path} does not decode after repair")
            else:
                report.would_correct.append(name)

        return report
