"""Command-line interface for fixing a single JPEG file.

Exit codes:
    0: success (corrected, already correct, or dry run of a fixable file)
    1: usage error or file access error
    2: input doesn't match the known defect (structural mismatch,
       unrecognized length, or oversized segment under the 'refuse' policy)

Environment variables:
    JPEGFIX_POLICY: Default repair policy ("refuse" or "split")
    JPEGFIX_VERIFY: Verify written files with Pillow when set to 1/true/yes
"""

import argparse
import sys

from dotenv import load_dotenv

from . import __version__
from .config import get_policy, get_verify
from .core.errors import JpegFixError, UnrecognizedDefect, UsageError
from .core.inspector import MarkerStreamInspector
from .core.models import RepairPolicy

PROGRAM_NAME = "jpegheaderfixer"


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROGRAM_NAME,
        description=(
            "Fix JPEGs whose APP1 (Exif) length field wrapped around, "
            "as written by the Samsung Galaxy S2"
        ),
        epilog="Environment variables: JPEGFIX_POLICY, JPEGFIX_VERIFY",
    )
    parser.add_argument("input", help="Corrupted JPEG file")
    parser.add_argument(
        "output",
        nargs="?",
        help="Target JPEG file (must not exist; optional with --dry-run)",
    )
    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Dry run. Do not change anything, just report what would be done",
    )
    parser.add_argument(
        "--policy", "-p",
        choices=[p.value for p in RepairPolicy],
        default=None,
        help="What to do when the true APP1 length exceeds 16 bits (default: refuse)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check that the written file still decodes",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"JPEG-Header-Fixer v{__version__}",
    )
    return parser


def fix(args, policy: RepairPolicy, verify: bool) -> None:
    """Analyze the input file and write the repaired copy."""
    inspector = MarkerStreamInspector(policy=policy, verify=verify)

    if args.dry_run:
        print("=== DRY RUN (no changes will be made) ===\n")
    print(f"Analyzing {args.input} (policy: {policy.value})...")
    print()

    report = inspector.fix_file(
        args.input,
        args.output,
        dry_run=args.dry_run,
        on_analyzed=print,
    )

    print()
    print(report.outcome())
    if report.verified is False:
        print(f"Warning: {report.output_path} was written but Pillow can't decode it")


def main(argv=None):
    load_dotenv()
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        policy = RepairPolicy(args.policy) if args.policy else get_policy()
        verify = args.verify or get_verify()
        fix(args, policy, verify)
    except UsageError as e:
        print(f"Error: {e}")
        print()
        parser.print_usage()
        print("Run with --help to see help information.")
        sys.exit(e.exit_code)
    except JpegFixError as e:
        print(f"Error: {e}")
        if isinstance(e, UnrecognizedDefect) and e.hexdump:
            print()
            print("Bytes around the expected end of the APP1 segment:")
            print(e.hexdump)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
