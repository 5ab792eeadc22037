"""Tracking module - snapshots, git access, snapshot diffs."""

from goimpact.tracking.differ import diff_snapshots
from goimpact.tracking.git_tracker import Credentials, GitTracker
from goimpact.tracking.snapshot import GitSnapshot, MemorySnapshot, Snapshot

__all__ = [
    "Snapshot",
    "MemorySnapshot",
    "GitSnapshot",
    "GitTracker",
    "Credentials",
    "diff_snapshots",
]
