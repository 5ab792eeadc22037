"""Hashing utilities for goimpact."""

import hashlib


def git_blob_hash(content: str | bytes) -> str:
    """
    Compute the git blob id of some content.

    Matches what git stores for a file, so in-memory and git-backed
    snapshots fingerprint identical content identically.

    Args:
        content: String or bytes to hash

    Returns:
        Hex digest of the blob id
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    header = f"blob {len(content)}\0".encode()
    return hashlib.sha1(header + content).hexdigest()
