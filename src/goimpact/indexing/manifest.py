"""Read the module manifest (go.mod) and the dependency lock file (go.sum)."""

import logging

from goimpact.core.constants import LOCK_FILE, LOCK_LINE_FIELDS, MANIFEST_FILE, MODULE_KEYWORD
from goimpact.core.exceptions import (
    LockFileMissingError,
    ManifestMalformedError,
    ManifestMissingError,
)
from goimpact.tracking.snapshot import Snapshot

logger = logging.getLogger(__name__)

LockMap = dict[str, str]


def parse_namespace(content: str, source: str = MANIFEST_FILE) -> str:
    """
    Extract the module namespace from manifest text.

    Only the first declaration counts; later ones are ignored.

    Raises:
        ManifestMalformedError: If no module declaration is present
    """
    for line in content.splitlines():
        line = line.split("//", 1)[0].strip()
        fields = line.split()
        if len(fields) >= 2 and fields[0] == MODULE_KEYWORD:
            return fields[1].strip('"`')
    raise ManifestMalformedError(source)


def parse_lock_map(content: str) -> LockMap:
    """
    Parse lock file text into identifier -> fingerprint.

    Lines without exactly three fields are skipped. When an identifier
    appears more than once the last line wins.
    """
    lock_map: LockMap = {}
    skipped = 0
    for line in content.splitlines():
        fields = line.split()
        if len(fields) != LOCK_LINE_FIELDS:
            if fields:
                skipped += 1
            continue
        lock_map[fields[0]] = fields[1]
    if skipped:
        logger.debug("Skipped %d malformed lock lines", skipped)
    return lock_map


def read_namespace(tree: Snapshot, manifest_file: str = MANIFEST_FILE) -> str:
    """Read the module namespace declared at the root of a snapshot."""
    if not tree.exists(manifest_file):
        raise ManifestMissingError(manifest_file, tree.commit_id)
    return parse_namespace(tree.read_text(manifest_file), manifest_file)


def read_lock_map(tree: Snapshot, lock_file: str = LOCK_FILE) -> LockMap:
    """Read the dependency lock map at the root of a snapshot."""
    if not tree.exists(lock_file):
        raise LockFileMissingError(lock_file, tree.commit_id)
    return parse_lock_map(tree.read_text(lock_file))


def dependency_delta(from_map: LockMap, to_map: LockMap) -> list[str]:
    """
    Identifiers whose fingerprint in "to" is absent or different in "from".

    Dependencies dropped from "to" are not part of the delta.
    """
    return [
        identifier
        for identifier, fingerprint in to_map.items()
        if from_map.get(identifier) != fingerprint
    ]
