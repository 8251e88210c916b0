"""Physical file actions: move, copy, remove and directory pruning."""

import errno
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from .models import RunConfig, RunStats, TransferEntry


def _ensure_parent(dst: Path) -> None:
    os.makedirs(dst.parent, exist_ok=True)


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file, creating parent directories if needed."""
    _ensure_parent(dst)
    shutil.copy(src, dst)


def move_file(src: Path, dst: Path) -> None:
    """Move a file, creating parent directories if needed."""
    _ensure_parent(dst)
    shutil.move(str(src), str(dst))


def preserve_times(src_stat: os.stat_result, dst: Path, verbose: bool = False) -> bool:
    """Copy access/modification times onto ``dst``. Failures are only reported."""
    try:
        os.utime(dst, ns=(src_stat.st_atime_ns, src_stat.st_mtime_ns))
        return True
    except OSError as e:
        if verbose:
            print(f"Warning: could not preserve times on {dst}: {e}", file=sys.stderr)
        return False


def transfer_file(
    entry: TransferEntry,
    config: RunConfig,
    stats: RunStats,
    overwrite: bool = False
) -> bool:
    """
    Move or copy ``entry.source`` onto ``entry.destination``.

    Overwrites count as ``overwritten`` only; new files count as ``moved``
    or ``copied``. A dry run prints the intended action and counts it the
    same way without touching the filesystem.
    Returns True on success.
    """
    src, dst = entry.source, entry.destination
    label = config.verb + (" (overwrite)" if overwrite else "")

    if config.dry_run:
        print(f"would {label}: {src} -> {dst}")
    else:
        try:
            if dst.is_dir():
                raise IsADirectoryError(errno.EISDIR, "Destination is a directory", str(dst))
            src_stat = os.stat(src) if config.preserve_times else None
            if config.copy_mode:
                copy_file(src, dst)
            else:
                move_file(src, dst)
        except (OSError, IOError, PermissionError, shutil.Error) as e:
            print(f"Error: could not {config.verb} {src} -> {dst}: {e}", file=sys.stderr)
            stats.record_error(src, dst, "transfer", str(e))
            return False

        if src_stat is not None:
            preserve_times(src_stat, dst, verbose=config.verbose)

        if config.verbose:
            print(f"{label}: {src} -> {dst}")

    if overwrite:
        stats.overwritten += 1
    elif config.copy_mode:
        stats.copied += 1
    else:
        stats.moved += 1
    return True


def prune_empty_parents(start: Path, boundary: Optional[Path] = None) -> list[Path]:
    """
    Remove ``start`` and its ancestors while they are empty.

    Stops at the first directory that cannot be removed (``rmdir`` refuses
    non-empty directories), at ``boundary`` (never removed), or at the
    filesystem root / relative root. Returns the removed directories.
    """
    removed = []
    current = Path(start)
    while current != boundary and current != current.parent and current.name not in ('', '.', '..'):
        try:
            current.rmdir()
        except OSError:
            break
        removed.append(current)
        current = current.parent
    return removed


def remove_source(
    entry: TransferEntry,
    config: RunConfig,
    stats: RunStats,
    boundary: Optional[Path] = None
) -> bool:
    """
    Delete a source file that is identical to its destination.

    On success, directories left empty above the source are pruned up to
    ``boundary``. On failure the source stays in place and the error is
    counted. Returns True on success.
    """
    src, dst = entry.source, entry.destination

    if config.dry_run:
        print(f"would remove: {src} (identical to {dst})")
        stats.removed += 1
        return True

    try:
        os.remove(src)
    except OSError as e:
        print(f"Error: could not remove {src}: {e}", file=sys.stderr)
        stats.record_error(src, dst, "removal", str(e))
        return False

    stats.removed += 1
    if config.verbose:
        print(f"remove: {src} (identical to {dst})")

    for directory in prune_empty_parents(src.parent, boundary):
        if config.verbose:
            print(f"rmdir: {directory}")
    return True
