"""CLI for fixing every JPEG under the directories listed in a YAML config.

Environment variables:
    JPEGFIX_POLICY: Repair policy when the config doesn't set one
    JPEGFIX_VERIFY: Verify written files when the config doesn't say
    JPEGFIX_SUFFIX: Output filename suffix when the config doesn't set one
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import SAMPLE_CONFIG, load_config
from .core.batch import BatchFixer
from .core.errors import JpegFixError


def _print_list(title: str, items: list[str], limit: int = 10) -> None:
    if not items:
        return
    print(f"\n{title}:")
    for item in items[:limit]:
        print(f"  {item}")
    if len(items) > limit:
        print(f"  ... and {len(items) - limit} more")


def cmd_run(args):
    """Fix all configured files."""
    config = load_config(args.config)
    fixer = BatchFixer(config)

    for path in fixer.paths:
        if not path.exists():
            print(f"Warning: Configured path does not exist: {path}")

    if args.dry_run:
        print("=== DRY RUN (no changes will be made) ===\n")

    print(f"Scanning {len(fixer.paths)} configured path(s)...")
    print(f"Policy: {config.policy.value}")
    if config.output_dir:
        print(f"Output directory: {config.output_dir}")
    print()

    report = fixer.run(dry_run=args.dry_run, progress=not args.quiet)

    print("\n=== Batch Report ===")
    print(report)

    _print_list("Corrected", report.corrected)
    _print_list("Would correct", report.would_correct)
    _print_list("Not repaired (wrap-around, policy 'refuse')", report.refused)
    _print_list("Unrecognized length defect", report.unrecognized)
    _print_list("Errors", report.errors)
    _print_list("Skipped (name ends with output suffix)", report.skipped)

    if report.refused and not args.dry_run:
        print("\nRe-run with 'policy: split' to restructure oversized APP1 segments.")


def cmd_init(args):
    """Generate sample configuration file."""
    config_path = Path(args.config)

    if config_path.exists() and not args.force:
        print(f"Error: File already exists: {config_path}")
        print("Use --force to overwrite")
        sys.exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(SAMPLE_CONFIG)

    print(f"Created sample config: {config_path}")
    print("Edit the 'paths' list to add your photo directories.")


def main(argv=None):
    load_dotenv()
    parser = argparse.ArgumentParser(
        prog="jpegheaderfixer-batch",
        description="Fix the APP1 (Exif) length of every JPEG in the configured directories",
        epilog="Environment variables: JPEGFIX_POLICY, JPEGFIX_VERIFY, JPEGFIX_SUFFIX",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # run command
    run_parser = subparsers.add_parser("run", help="Fix all JPEGs under the configured paths")
    run_parser.add_argument("config", help="Path to YAML config file")
    run_parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Show what would happen without writing anything",
    )
    run_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Hide the progress bar",
    )
    run_parser.set_defaults(func=cmd_run)

    # init command
    init_parser = subparsers.add_parser("init", help="Generate sample config file")
    init_parser.add_argument("config", help="Path to config file to create")
    init_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing file",
    )
    init_parser.set_defaults(func=cmd_init)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except JpegFixError as e:
        print(f"Error: {e}")
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
