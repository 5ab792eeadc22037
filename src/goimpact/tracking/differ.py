"""Compute path-level differences between two snapshots."""

from goimpact.core.models import ChangeKind, PathChange
from goimpact.tracking.snapshot import Snapshot


def diff_snapshots(from_snapshot: Snapshot, to_snapshot: Snapshot) -> list[PathChange]:
    """
    List the paths that were added, removed or modified between two trees.

    Paths whose content and presence match in both trees are never reported.
    A rename shows up as a removal plus an addition.

    Args:
        from_snapshot: The older tree
        to_snapshot: The tree being analyzed

    Returns:
        Path changes sorted by path
    """
    from_paths = set(from_snapshot.paths())
    to_paths = set(to_snapshot.paths())

    changes: list[PathChange] = []
    for path in sorted(from_paths | to_paths):
        if path not in from_paths:
            changes.append(PathChange(path=path, kind=ChangeKind.ADDED))
        elif path not in to_paths:
            changes.append(PathChange(path=path, kind=ChangeKind.REMOVED))
        elif from_snapshot.fingerprint(path) != to_snapshot.fingerprint(path):
            changes.append(PathChange(path=path, kind=ChangeKind.MODIFIED))

    return changes
