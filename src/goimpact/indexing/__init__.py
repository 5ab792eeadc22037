"""Indexing module - manifest reading and import extraction."""

from goimpact.indexing.manifest import (
    LockMap,
    dependency_delta,
    parse_lock_map,
    parse_namespace,
    read_lock_map,
    read_namespace,
)
from goimpact.indexing.parsers import BaseParser, GoImportParser, SourceHeader

__all__ = [
    "LockMap",
    "read_namespace",
    "read_lock_map",
    "parse_namespace",
    "parse_lock_map",
    "dependency_delta",
    "BaseParser",
    "GoImportParser",
    "SourceHeader",
]
