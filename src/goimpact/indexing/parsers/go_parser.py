"""Go header parser using tree-sitter."""

import logging
from typing import Iterator

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from goimpact.core.constants import CONSTRAINT_DIRECTIVES
from goimpact.core.exceptions import ParseError
from goimpact.indexing.parsers.base import BaseParser, SourceHeader

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

# Top-level nodes that make up a file header; parsing stops at anything else
_HEADER_NODES = {"comment", "package_clause", "import_declaration"}


class GoImportParser(BaseParser):
    """Parser for the package clause and imports of Go files."""

    def __init__(self, constraint_directives: list[str] | None = None) -> None:
        """
        Initialize the parser.

        Args:
            constraint_directives: Comment prefixes that mark a file as
                build-constrained (defaults to //go:build and // +build)
        """
        if constraint_directives is None:
            constraint_directives = CONSTRAINT_DIRECTIVES
        self.constraint_directives = list(constraint_directives)
        self._parser = Parser(GO_LANGUAGE)

    @property
    def supported_extensions(self) -> list[str]:
        return [".go"]

    @property
    def language(self) -> str:
        return "go"

    def parse_header(self, file_path: str, content: str | bytes) -> SourceHeader:
        """Parse the package clause, imports and header comments of a Go file."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        tree = self._parser.parse(content)
        if tree.root_node.type == "ERROR":
            raise ParseError(file_path, "not a Go source file")

        package: str | None = None
        imports: list[str] = []
        constrained = False

        for node in tree.root_node.children:
            if node.is_missing:
                raise ParseError(file_path, f"unexpected token at {_position(node)}")
            if not node.is_named:
                continue
            if node.type not in _HEADER_NODES:
                # Errors past the header belong to declarations we never look at
                if node.type == "ERROR" and (package is None or _opens_header(node)):
                    raise ParseError(file_path, f"syntax error at {_position(node)}")
                break
            if node.has_error:
                raise ParseError(file_path, f"invalid {node.type} at {_position(node)}")

            if node.type == "comment":
                constrained = constrained or self._is_constraint(node)
            elif node.type == "package_clause":
                if package is not None:
                    raise ParseError(file_path, f"duplicate package clause at {_position(node)}")
                package = _package_name(node)
            else:
                if package is None:
                    raise ParseError(file_path, "expected 'package' before imports")
                for comment in _iter_comments(node):
                    constrained = constrained or self._is_constraint(comment)
                for spec in _iter_import_specs(node):
                    imports.append(_import_path(file_path, spec))

        if package is None:
            raise ParseError(file_path, "expected 'package' clause")

        if constrained:
            logger.debug("Skipping imports of build-constrained file %s", file_path)
            return SourceHeader(package=package, build_constrained=True)
        return SourceHeader(package=package, imports=imports)

    def _is_constraint(self, comment: Node) -> bool:
        text = comment.text.decode("utf-8", errors="replace")
        return any(text.startswith(directive) for directive in self.constraint_directives)


def _position(node: Node) -> str:
    row, column = node.start_point
    return f"line {row + 1}, column {column + 1}"


def _opens_header(node: Node) -> bool:
    text = node.text.decode("utf-8", errors="replace").lstrip()
    return text.startswith(("import", "package"))


def _package_name(clause: Node) -> str:
    for child in clause.named_children:
        if child.type == "package_identifier":
            return child.text.decode("utf-8")
    return ""


def _iter_comments(node: Node) -> Iterator[Node]:
    for child in node.children:
        if child.type == "comment":
            yield child
        else:
            yield from _iter_comments(child)


def _iter_import_specs(declaration: Node) -> Iterator[Node]:
    for child in declaration.named_children:
        if child.type == "import_spec":
            yield child
        elif child.type == "import_spec_list":
            yield from (spec for spec in child.named_children if spec.type == "import_spec")


def _import_path(file_path: str, spec: Node) -> str:
    literal = spec.child_by_field_name("path")
    if literal is None:
        raise ParseError(file_path, f"missing import path at {_position(spec)}")
    # Strip the surrounding quotes or backticks
    path = literal.text.decode("utf-8")[1:-1]
    if not path:
        raise ParseError(file_path, f"invalid import path at {_position(spec)}")
    return path
