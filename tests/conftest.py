"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from tree_merger.models import RunConfig, RunStats


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def stats():
    """A fresh set of run counters."""
    return RunStats()


@pytest.fixture
def make_config():
    """Build a RunConfig with only the given flags set."""
    def _make(**flags) -> RunConfig:
        return RunConfig(**flags)
    return _make


@pytest.fixture
def project(temp_dir):
    """
    Build the worked example: a source tree and a destination tree that
    overlap in identical, differing and new files.
    """
    src = temp_dir / "project" / "src"
    dst = temp_dir / "project" / "dst"
    (src / "notes").mkdir(parents=True)
    (dst / "notes").mkdir(parents=True)

    (src / "report.txt").write_text("Weekly Report\\n-------------\\nEverything is fine.\n")
    (dst / "report.txt").write_text("Weekly Report\\n-------------\\nEverything is fine.\n")

    (dst / "data.csv").write_text("2023-12-31,Old Data,999\n")
    (src / "data.csv").write_text("2024-01-01,Sample Data,123\n")

    (src / "notes" / "hi.txt").write_text("Hi there!\n")

    (src / "notes" / "hello.txt").write_text("Hello!\n")
    (dst / "notes" / "hello.txt").write_text("Hello!\n")

    (dst / "important.txt").write_text("Important notes here.\n")

    return src, dst
