"""Core merge logic: walk sources and drive each entry through the pipeline."""

import os
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from .models import Action, RunConfig, RunStats, TransferEntry
from .resolver import Confirm, prompt_yes_no, resolve
from .transfer import remove_source, transfer_file


def list_files(root: Path) -> list[str]:
    """Return POSIX relative paths of all regular files under ``root``, sorted."""
    all_files = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            abs_path = Path(dirpath) / filename
            if not abs_path.is_file():
                continue
            all_files.append(abs_path.relative_to(root).as_posix())
    return sorted(all_files)


def prune_empty_dirs(root: Path) -> list[Path]:
    """
    Remove every empty directory below ``root``, deepest first.

    ``root`` itself is left alone. Directories that still hold anything
    are skipped because ``rmdir`` refuses them.
    """
    removed = []
    for dirpath, _, _ in os.walk(root, topdown=False):
        directory = Path(dirpath)
        if directory == root:
            continue
        try:
            directory.rmdir()
        except OSError:
            continue
        removed.append(directory)
    return removed


def process_entry(
    entry: TransferEntry,
    config: RunConfig,
    stats: RunStats,
    confirm: Confirm = prompt_yes_no,
    boundary: Optional[Path] = None
) -> Action:
    """Resolve one entry, carry out the decision and record its outcome."""
    planned = stats.planned.get(entry.destination) if config.dry_run else None
    dest_exists = planned is not None or entry.destination.exists()
    action = resolve(entry.source, entry.destination, dest_exists, config, stats, confirm,
                     compare_with=planned)

    if action is Action.PROCEED:
        if transfer_file(entry, config, stats, overwrite=dest_exists) and config.dry_run:
            stats.planned[entry.destination] = entry.source
    elif action is Action.SKIP_IDENTICAL_REMOVED:
        remove_source(entry, config, stats, boundary=boundary)
    elif action is Action.SKIP_IDENTICAL:
        if config.verbose:
            print(f"skip (identical): {entry.source} -> {entry.destination}")
    elif action in (Action.SKIP_NO_FORCE, Action.SKIP_USER_DECLINED):
        stats.skipped += 1
        if config.verbose or config.dry_run:
            reason = "exists" if action is Action.SKIP_NO_FORCE else "declined"
            print(f"skip ({reason}): {entry.source} -> {entry.destination}")
    return action


def _is_within(path: Path, root: Path) -> bool:
    path, root = path.resolve(), root.resolve()
    return path == root or root in path.parents


def merge_directory(
    source: Path,
    destination: Path,
    config: RunConfig,
    stats: RunStats,
    confirm: Confirm = prompt_yes_no
) -> None:
    """
    Merge every file under ``source`` into ``destination``.

    Relative paths are preserved. After a real move, directories emptied
    by the merge are pruned and the source root is removed if empty. A
    copy leaves the source tree as it was.
    """
    all_files = list_files(source)
    quiet = config.verbose or config.interactive or config.dry_run

    with tqdm(all_files, desc=f"Merging {source.name or source}", unit="file",
              disable=True if quiet else None) as pbar:
        for rel_path in pbar:
            entry = TransferEntry(source / rel_path, destination / rel_path)
            process_entry(entry, config, stats, confirm, boundary=source)

    if config.dry_run or config.copy_mode:
        return

    for directory in prune_empty_dirs(source):
        if config.verbose:
            print(f"rmdir: {directory}")
    try:
        source.rmdir()
    except OSError:
        return
    if config.verbose:
        print(f"rmdir: {source}")


def merge_source(
    source: Path,
    destination: Path,
    config: RunConfig,
    stats: RunStats,
    confirm: Confirm = prompt_yes_no,
    destination_is_dir: bool = False
) -> None:
    """
    Classify one source argument and merge it into ``destination``.

    ``destination_is_dir`` makes a file source land inside ``destination``
    even when that directory does not exist yet.
    """
    if source.is_dir():
        if destination.exists() and not destination.is_dir():
            print(f"Error: cannot merge directory {source} into non-directory {destination}",
                  file=sys.stderr)
            stats.record_error(source, destination, "invalid", "destination is not a directory")
            return
        if _is_within(destination, source):
            print(f"Error: destination {destination} is inside source {source}", file=sys.stderr)
            stats.record_error(source, destination, "invalid", "destination is inside source")
            return
        merge_directory(source, destination, config, stats, confirm)
    elif source.is_file():
        target = destination / source.name if destination_is_dir or destination.is_dir() else destination
        if target.exists() and os.path.samefile(source, target):
            print(f"Error: {source} and {target} are the same file", file=sys.stderr)
            stats.record_error(source, target, "invalid", "source and destination are the same file")
            return
        process_entry(TransferEntry(source, target), config, stats, confirm)
    else:
        print(f"Warning: skipping {source}: not a file or directory", file=sys.stderr)
        stats.skipped += 1


def merge(
    sources: list[Path],
    destination: Path,
    config: RunConfig,
    confirm: Confirm = prompt_yes_no,
    destination_is_dir: bool = False
) -> RunStats:
    """
    Merge each source tree or file into ``destination``.

    Entries are processed one at a time; a failing entry is counted and
    the run continues with the next one.
    """
    stats = RunStats()
    for source in sources:
        merge_source(source, destination, config, stats, confirm, destination_is_dir)
        if config.verbose:
            print()
    return stats
