"""Path utilities for finding dependency manifests in a project tree."""

import os
from pathlib import Path
from typing import Dict, Iterator, List, Tuple
from dataclasses import dataclass

from .logging import get_logger


@dataclass
class DependencyFile:
    """Represents a dependency file with metadata."""

    path: Path
    ecosystem: str
    parser_type: str

    def __post_init__(self) -> None:
        """Validate the dependency file."""
        if not self.path.exists():
            raise ValueError(f"Dependency file does not exist: {self.path}")


class DependencyFileFinder:
    """Finds dependency manifests and lockfiles in a project directory.

    Every directory is walked, ``node_modules`` included, since installed
    packages carry their own manifests.
    """

    DEPENDENCY_PATTERNS: Dict[str, Tuple[str, str]] = {
        "package.json": ("nodejs", "package"),
        "package-lock.json": ("nodejs", "lockfile"),
    }

    def __init__(self) -> None:
        """Initialize dependency file finder."""
        self.logger = get_logger("DependencyFileFinder")

    def find_dependency_files(self, root_path: Path) -> List[DependencyFile]:
        """Find all dependency files in a directory tree.

        Args:
            root_path: Root directory to search

        Returns:
            List of found dependency files, in depth-first name order

        Raises:
            ValueError: If the root path does not exist
        """
        if not root_path.exists():
            raise ValueError(f"Root path does not exist: {root_path}")

        dependency_files = []

        for file_path in self._walk_files(root_path):
            ecosystem, parser_type = self.DEPENDENCY_PATTERNS[file_path.name]
            try:
                dependency_files.append(DependencyFile(
                    path=file_path,
                    ecosystem=ecosystem,
                    parser_type=parser_type
                ))
            except ValueError:
                # Dangling symlink
                continue

        return dependency_files

    def _walk_files(self, directory: Path) -> Iterator[Path]:
        """Walk a directory depth-first, yielding recognized file names.

        Symlinked directories are not descended into, so link cycles cannot
        loop the walk.

        Args:
            directory: Directory to walk

        Yields:
            Paths of recognized dependency files
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except PermissionError:
            return
        except OSError as e:
            self.logger.error(f"Error reading directory {directory}: {e}")
            return

        for entry in entries:
            entry_path = directory / entry.name
            if entry.is_dir(follow_symlinks=False):
                yield from self._walk_files(entry_path)
            elif entry.name in self.DEPENDENCY_PATTERNS:
                yield entry_path

    def get_supported_filenames(self) -> List[str]:
        """Get the file names the finder recognizes.

        Returns:
            List of recognized file names
        """
        return list(self.DEPENDENCY_PATTERNS)


def find_dependency_files(root_path: Path) -> List[DependencyFile]:
    """Convenience function to find dependency files.

    Args:
        root_path: Root directory to search

    Returns:
        List of found dependency files
    """
    finder = DependencyFileFinder()
    return finder.find_dependency_files(root_path)
