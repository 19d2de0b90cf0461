"""Registry for dependency file parsers."""

from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
from pathlib import Path
from .base import BaseParser, ParsedDependencies
from ...utils.logging import get_logger

if TYPE_CHECKING:
    from ..matcher import Finding, VulnerabilityMatcher


class ParserRegistry:
    """Registry mapping manifest file names to their parsers."""

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[Tuple[str, str], BaseParser] = {}
        self.logger = get_logger("ParserRegistry")

    def register(self, ecosystem: str, parser_type: str, parser: BaseParser) -> None:
        """Register a parser for an ecosystem and type.

        Args:
            ecosystem: Ecosystem name (e.g., 'nodejs')
            parser_type: Parser type (e.g., 'package', 'lockfile')
            parser: Parser instance to register
        """
        self._parsers[(ecosystem, parser_type)] = parser

    def find_parser_for_file(self, file_path: Path) -> Optional[BaseParser]:
        """Find a parser that can handle the given file.

        Args:
            file_path: Path to the file

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers.values():
            if parser.can_parse(file_path):
                return parser
        return None

    def parse_file(self, file_path: Path) -> Optional[ParsedDependencies]:
        """Parse a file using the appropriate parser.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed dependencies or None if no parser found

        Raises:
            OSError: If the file cannot be read
            ValueError: If the content is malformed
            RecursionError: If the JSON nesting is too deep to decode
        """
        parser = self.find_parser_for_file(file_path)
        if parser:
            return parser.parse(file_path)
        return None

    def extract_findings(
        self,
        file_path: Path,
        matcher: "VulnerabilityMatcher"
    ) -> List["Finding"]:
        """Parse a file and match its dependencies against the index.

        Unreadable or malformed files contribute no findings; the scan goes on.

        Args:
            file_path: Path to the manifest or lockfile
            matcher: Matcher holding the vulnerability index

        Returns:
            Findings for the file, possibly empty
        """
        try:
            parsed = self.parse_file(file_path)
        except (OSError, ValueError, RecursionError) as e:
            self.logger.debug(f"Skipping {file_path}: {e}")
            return []

        if parsed is None:
            return []

        return matcher.match_dependencies(parsed)
