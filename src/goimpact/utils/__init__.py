"""Utility helpers."""

from goimpact.utils.hashing import git_blob_hash
from goimpact.utils.paths import directory_of, package_id

__all__ = ["git_blob_hash", "directory_of", "package_id"]
