"""Conflict resolution policy for a single transfer entry."""

import sys
from pathlib import Path
from typing import Callable, Optional

from .comparator import compare_files
from .models import Action, RunConfig, RunStats

Confirm = Callable[[str], bool]


def prompt_yes_no(prompt: str) -> bool:
    """Ask the operator a yes/no question on the terminal. Defaults to no."""
    try:
        response = input(prompt).strip().lower()
    except EOFError:
        return False
    return response in ('y', 'yes')


def resolve(
    source: Path,
    destination: Path,
    dest_exists: bool,
    config: RunConfig,
    stats: RunStats,
    confirm: Confirm = prompt_yes_no,
    compare_with: Optional[Path] = None
) -> Action:
    """
    Decide what to do with ``source`` given the state of ``destination``.

    Comparison takes precedence over the force/interactive policy: a file
    found identical is only ever skipped or removed, never rewritten.
    Removal of identical sources requires comparison to be enabled.
    A comparison that fails yields ``Action.ERROR`` and is counted as an
    error in ``stats``. ``compare_with`` stands in for the destination
    contents when they only exist in a dry run.
    """
    if not dest_exists:
        return Action.PROCEED

    if config.compare_existing:
        try:
            comparison = compare_files(source, compare_with or destination, stats, verbose=config.verbose)
        except OSError as e:
            print(f"Error: cannot compare {source} with {destination}: {e}", file=sys.stderr)
            stats.record_error(source, destination, "read", str(e))
            return Action.ERROR

        if comparison.identical:
            if config.remove_identical:
                return Action.SKIP_IDENTICAL_REMOVED
            return Action.SKIP_IDENTICAL

    if config.interactive and not config.force:
        if confirm(f"Overwrite {destination} with {source}? (y/N): "):
            return Action.PROCEED
        return Action.SKIP_USER_DECLINED

    if not config.force:
        return Action.SKIP_NO_FORCE

    return Action.PROCEED
