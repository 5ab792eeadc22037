"""Source header parsers."""

from goimpact.indexing.parsers.base import BaseParser, SourceHeader
from goimpact.indexing.parsers.go_parser import GoImportParser

__all__ = ["BaseParser", "SourceHeader", "GoImportParser"]
