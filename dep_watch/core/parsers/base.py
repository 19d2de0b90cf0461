"""Base parser class and data models for dependency parsing."""

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Any


@dataclass
class Dependency:
    """Represents a single declared or installed dependency."""

    name: str
    version: str
    source_file: Optional[Path] = None
    ecosystem: str = ""
    resolved: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the dependency.

        Names are kept exactly as declared: registry names are case-sensitive.
        """
        if not self.name:
            raise ValueError("Dependency name cannot be empty")


@dataclass
class ParsedDependencies:
    """Container for parsed dependencies from a file."""

    dependencies: List[Dependency] = field(default_factory=list)
    source_file: Optional[Path] = None
    ecosystem: str = ""
    parser_type: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_dependency(self, dependency: Dependency) -> None:
        """Add a dependency to the collection.

        Args:
            dependency: Dependency to add
        """
        self.dependencies.append(dependency)


class BaseParser(ABC):
    """Abstract base class for dependency file parsers."""

    def __init__(self) -> None:
        """Initialize the parser."""
        self.filenames: List[str] = []
        self.ecosystem: str = ""
        self.parser_type: str = ""

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the given file.

        Args:
            file_path: Path to the file to check

        Returns:
            True if parser can handle the file
        """
        return file_path.name in self.filenames

    @abstractmethod
    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a dependency file.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed dependencies from the file
        """
        pass

    def validate_file(self, file_path: Path) -> None:
        """Validate that the file exists and is readable.

        Args:
            file_path: Path to validate

        Raises:
            FileNotFoundError: If file doesn't exist
            PermissionError: If file is not readable
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File is not readable: {file_path}")

    def _load_json(self, file_path: Path) -> Any:
        """Read and decode a JSON document.

        Args:
            file_path: Path to the JSON file

        Returns:
            Decoded document

        Raises:
            ValueError: If the content is not valid UTF-8 JSON
        """
        self.validate_file(file_path)

        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def _new_result(self, file_path: Path) -> ParsedDependencies:
        return ParsedDependencies(
            source_file=file_path,
            ecosystem=self.ecosystem,
            parser_type=self.parser_type
        )
