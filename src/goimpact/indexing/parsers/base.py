"""Base parser interface for source header parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class SourceHeader:
    """Leading declarations of a source file."""

    package: str
    imports: list[str] = field(default_factory=list)
    build_constrained: bool = False  # excluded from the import graph


class BaseParser(ABC):
    """Abstract base class for language-specific header parsers."""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """List of file extensions this parser supports."""
        ...

    @property
    @abstractmethod
    def language(self) -> str:
        """Language name for this parser."""
        ...

    @abstractmethod
    def parse_header(self, file_path: str, content: str | bytes) -> SourceHeader:
        """
        Parse the package and import declarations at the top of a file.

        Args:
            file_path: Path to the file (relative to the repository root)
            content: File content

        Returns:
            The file's package name, imports and constraint status

        Raises:
            ParseError: If the header is syntactically invalid
        """
        ...

    def extract_imports(self, content: str | bytes, file_path: str = "<source>") -> list[str]:
        """Import identifiers of a file, empty for build-constrained files."""
        header = self.parse_header(file_path, content)
        if header.build_constrained:
            return []
        return header.imports

    def can_parse(self, file_path: str) -> bool:
        """Check if this parser can handle the given file."""
        return any(file_path.lower().endswith(ext) for ext in self.supported_extensions)
