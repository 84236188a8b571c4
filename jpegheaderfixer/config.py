"""Configuration from environment variables and YAML batch config files.

Environment variables (a .env file in the working directory is loaded too):
    JPEGFIX_POLICY: Repair policy for oversized APP1 segments, "refuse" or "split"
        (default: "refuse")
    JPEGFIX_VERIFY: Verify written files with Pillow when set to 1/true/yes
    JPEGFIX_SUFFIX: Filename suffix for batch outputs (default: "_fixed")
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .core.errors import FileAccessError, UsageError
from .core.models import RepairPolicy

DEFAULT_SUFFIX = "_fixed"

SAMPLE_CONFIG = """# JPEG header fixer batch configuration
# Files or directories holding JPEGs with a broken APP1 (Exif) length

paths:
  - /path/to/photos

# Whether to scan subdirectories (default: true)
recursive: true

# Where repaired copies go. If omitted they are written next to the
# originals, with the suffix appended to the file name.
# output_dir: /path/to/fixed
suffix: "_fixed"

# "refuse" only reports oversized APP1 segments, "split" restructures them
policy: refuse

# Check that repaired files still decode
verify: false
"""


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def get_policy() -> RepairPolicy:
    """Get the repair policy from the environment."""
    value = os.environ.get("JPEGFIX_POLICY", RepairPolicy.REFUSE.value).strip().lower()
    try:
        return RepairPolicy(value)
    except ValueError:
        choices = ", ".join(p.value for p in RepairPolicy)
        raise UsageError(f"JPEGFIX_POLICY must be one of: {choices} (got '{value}')") from None


def get_verify() -> bool:
    """Whether written files should be verified, from the environment."""
    return _env_flag("JPEGFIX_VERIFY")


def get_suffix() -> str:
    """Get the batch output suffix from the environment."""
    return os.environ.get("JPEGFIX_SUFFIX", DEFAULT_SUFFIX)


class BatchConfig(BaseModel):
    """Batch run configuration, as read from YAML."""

    paths: list[str]
    recursive: bool = True
    output_dir: Optional[str] = None
    suffix: str = DEFAULT_SUFFIX
    policy: RepairPolicy = RepairPolicy.REFUSE
    verify: bool = False
    extensions: list[str] = [".jpg", ".jpeg"]

    @field_validator("paths")
    @classmethod
    def paths_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("'paths' list is empty")
        return value

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    def output_for(self, filepath: Path) -> Path:
        """Where the repaired copy of `filepath` goes."""
        name = f"{filepath.stem}{self.suffix}{filepath.suffix}"
        if self.output_dir:
            return Path(self.output_dir) / name
        return filepath.with_name(name)


def load_config(config_path: str | Path) -> BatchConfig:
    """Load and validate a batch configuration from a YAML file.

    Values missing from the file fall back to the environment for `suffix`,
    `policy` and `verify`.

    Raises:
        FileAccessError: if the file doesn't exist
        UsageError: if it is empty or doesn't validate
    """
    path = Path(config_path)
    if not path.exists():
        raise FileAccessError(f"Config file not found: {config_path}", path)

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise UsageError(f"Invalid YAML in {config_path}: {e}") from e

    if not raw:
        raise UsageError(f"Empty config file: {config_path}")
    if not isinstance(raw, dict) or "paths" not in raw:
        raise UsageError("Config file must contain 'paths' key")

    raw.setdefault("suffix", get_suffix())
    raw.setdefault("policy", get_policy().value)
    raw.setdefault("verify", get_verify())

    try:
        return BatchConfig(**raw)
    except ValidationError as e:
        raise UsageError(f"Invalid config file {config_path}:\n{e}") from e
