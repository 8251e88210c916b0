"""
Tree Merger - A CLI tool to merge source trees or files into a destination tree.

Features:
- Move or copy, per file, with skip/overwrite/remove decisions
- Size + checksum comparison using xxhash
- Force, interactive and default-safe conflict policies
- Dry-run previews that classify exactly like a real run
- Empty source directory pruning after a merge
- Run summary counters
"""

__version__ = "1.0.0"
