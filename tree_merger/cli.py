"""Command-line interface for tree merger."""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .merger import merge
from .models import RunConfig, RunStats


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="tree-merger",
        description="Merge source directory trees or files into a destination tree.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Without --force an existing destination file is never replaced.

Examples:
  %(prog)s -c -r -s ./incoming ./archive
  %(prog)s --copy --dry-run photos/ backup/photos/
  %(prog)s -i notes.txt todo.txt ./docs
        """
    )

    parser.add_argument("sources", type=Path, nargs="+", metavar="SOURCE",
                        help="Source directory or file")
    parser.add_argument("destination", metavar="DESTINATION",
                        help="Destination directory (or file, for a single file source); "
                             "a trailing slash always means a directory")

    parser.add_argument("-f", "--force", action="store_true",
                        help="Overwrite destination files that differ")
    parser.add_argument("-c", "--compare", action="store_true",
                        help="Compare existing files by size and checksum before acting")
    parser.add_argument("-r", "--remove-identical", action="store_true",
                        help="Delete the source when it is identical to the destination (requires --compare)")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="Show what would be done without changing anything")
    parser.add_argument("-C", "--copy", action="store_true",
                        help="Copy files instead of moving them")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="Ask before overwriting an existing file")
    parser.add_argument("-p", "--preserve-times", action="store_true",
                        help="Give destination files the source modification time")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print every action and comparison")
    parser.add_argument("-s", "--summary", action="store_true",
                        help="Print a summary of all counters at the end")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def wants_directory(destination: str, source_count: int) -> bool:
    """A trailing separator or several sources mean the destination is a directory."""
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    return source_count > 1 or destination.endswith(separators)


def print_summary(stats: RunStats) -> None:
    """Print the run counters in a fixed order."""
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for name, value in stats.counters():
        print(f"{name.capitalize() + ':':<13}{value}")


def exit_code(stats: RunStats) -> int:
    """Zero when no entry failed, otherwise the error count (capped at 255)."""
    return min(stats.errors, 255)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    config = RunConfig.from_args(args)

    if config.remove_identical and not config.compare_existing and config.verbose:
        print("Note: --remove-identical has no effect without --compare", file=sys.stderr)

    if config.dry_run:
        print("Dry run: no files will be changed.")

    try:
        stats = merge(args.sources, Path(args.destination), config,
                      destination_is_dir=wants_directory(args.destination, len(args.sources)))
    except KeyboardInterrupt:
        print("\n\nInterrupted! Entries processed so far are final.")
        print("To continue, run the same command again.")
        sys.exit(1)

    if config.summary:
        print_summary(stats)

    sys.exit(exit_code(stats))
