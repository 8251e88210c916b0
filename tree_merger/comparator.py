"""Size + checksum file comparison."""

import os
from datetime import datetime
from pathlib import Path

import xxhash

from .models import Comparison, ComparisonResult, FileSignature, RunStats


def _long_path(path: Path) -> str:
    """Convert path to long path format on Windows to handle paths > 260 chars."""
    path_str = str(Path(path).resolve())
    if os.name == 'nt' and not path_str.startswith('\\\\?\\'):
        return '\\\\?\\' + path_str
    return path_str


def format_timestamp(timestamp: float) -> str:
    """Format a Unix timestamp as a human-readable string."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def format_size(size: int) -> str:
    """Format a byte count, e.g. ``27 B`` or ``1.5 KB (1536 bytes)``."""
    if size < 1024:
        return f"{size} B"
    value = float(size)
    for unit in ['KB', 'MB', 'GB', 'TB']:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit} ({size} bytes)"


def compute_file_hash(file_path: Path, chunk_size: int = 65536) -> str:
    """Whole-file xxhash64 hex digest, read in chunks. Used for both sides of a comparison."""
    hasher = xxhash.xxh64()
    with open(_long_path(file_path), 'rb') as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()


def get_file_signature(file_path: Path) -> FileSignature:
    """Stat a file. The checksum is left empty until it is needed."""
    stat = os.stat(_long_path(file_path))
    return FileSignature(
        path=str(file_path),
        size=stat.st_size,
        modified_time=stat.st_mtime,
    )


def _describe(label: str, signature: FileSignature) -> None:
    print(f"  {label}: {signature.path}")
    print(f"    Size: {format_size(signature.size)}")
    print(f"    Modified: {format_timestamp(signature.modified_time)}")
    print(f"    Hash: {signature.hash or 'not computed'}")


def compare_files(source: Path, destination: Path, stats: RunStats, verbose: bool = False) -> Comparison:
    """
    Compare two files by size, then by xxhash64 checksum.

    The checksum is only computed when both sizes match. Every call counts
    once towards ``stats.compared``, including calls that fail.

    Raises:
        OSError: If either file cannot be stat'ed or read.
    """
    stats.compared += 1

    src_sig = get_file_signature(source)
    dst_sig = get_file_signature(destination)

    if src_sig.size != dst_sig.size:
        result = ComparisonResult.DIFFERENT
    else:
        src_sig.hash = compute_file_hash(source)
        dst_sig.hash = compute_file_hash(destination)
        if src_sig.hash == dst_sig.hash:
            result = ComparisonResult.IDENTICAL
        else:
            result = ComparisonResult.DIFFERENT

    if verbose:
        print(f"compare: {source} <-> {destination}")
        _describe("Source", src_sig)
        _describe("Destination", dst_sig)
        verdict = "identical" if result is ComparisonResult.IDENTICAL else "differ"
        print(f"  Verdict: {verdict}")

    return Comparison(result, src_sig, dst_sig)
