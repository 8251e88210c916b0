"""Data models for tree merger."""

import argparse
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Optional


class ComparisonResult(Enum):
    """Outcome of comparing two files."""
    IDENTICAL = "identical"
    DIFFERENT = "different"


class Action(Enum):
    """Decision taken for a single transfer entry."""
    PROCEED = "proceed"
    SKIP_NO_FORCE = "skip_no_force"
    SKIP_USER_DECLINED = "skip_user_declined"
    SKIP_IDENTICAL = "skip_identical"
    SKIP_IDENTICAL_REMOVED = "skip_identical_removed"
    ERROR = "error"


@dataclass(frozen=True)
class RunConfig:
    """Policy flags for one invocation. Read-only once built."""
    force: bool = False
    compare_existing: bool = False
    remove_identical: bool = False
    dry_run: bool = False
    copy_mode: bool = False
    interactive: bool = False
    preserve_times: bool = False
    verbose: bool = False
    summary: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            force=args.force,
            compare_existing=args.compare,
            remove_identical=args.remove_identical,
            dry_run=args.dry_run,
            copy_mode=args.copy,
            interactive=args.interactive,
            preserve_times=args.preserve_times,
            verbose=args.verbose,
            summary=args.summary,
        )

    @property
    def verb(self) -> str:
        return "copy" if self.copy_mode else "move"


@dataclass
class TransferEntry:
    """A source file and the path it maps to in the destination."""
    source: Path
    destination: Path


@dataclass
class FileSignature:
    """Size, modification time and (when computed) checksum of a file."""
    path: str
    size: int
    modified_time: float
    hash: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Comparison:
    """Result of comparing a source file against its destination."""
    result: ComparisonResult
    source: FileSignature
    destination: FileSignature

    @property
    def identical(self) -> bool:
        return self.result is ComparisonResult.IDENTICAL


@dataclass
class EntryError:
    """Record of an entry that could not be processed."""
    source: str
    destination: str
    kind: str
    error: str


@dataclass
class RunStats:
    """Counters for one run, passed explicitly through the merge pipeline."""
    moved: int = 0
    copied: int = 0
    overwritten: int = 0
    removed: int = 0
    skipped: int = 0
    compared: int = 0
    errors: int = 0
    failures: list[EntryError] = field(default_factory=list)
    # dry run only: destination -> source that would occupy it
    planned: dict[Path, Path] = field(default_factory=dict)

    def record_error(self, source: Path, destination: Optional[Path], kind: str, error: str) -> EntryError:
        """Count a failed entry and keep its details."""
        failure = EntryError(str(source), str(destination or ""), kind, error)
        self.failures.append(failure)
        self.errors += 1
        return failure

    def counters(self) -> list[tuple[str, int]]:
        """Counters in the fixed order used by the summary."""
        return [
            ("moved", self.moved),
            ("copied", self.copied),
            ("overwritten", self.overwritten),
            ("removed", self.removed),
            ("skipped", self.skipped),
            ("compared", self.compared),
            ("errors", self.errors),
        ]
