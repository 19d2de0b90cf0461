"""Node.js dependency file parsers."""

from pathlib import Path
from typing import Any, Dict, Iterator, Tuple
from .base import BaseParser, Dependency, ParsedDependencies

INSTALL_DIR_PREFIX = "node_modules/"
NESTED_INSTALL_DIR = "/node_modules/"


def package_name_from_path(package_path: str) -> str:
    """Derive a package name from a lockfile ``packages`` key.

    ``node_modules/a/node_modules/@scope/b`` becomes ``@scope/b``. Keys outside
    ``node_modules`` (workspace folders) are returned unchanged.

    Args:
        package_path: Install path key from the lockfile

    Returns:
        Package name
    """
    if not package_path.startswith(INSTALL_DIR_PREFIX):
        return package_path
    return package_path[len(INSTALL_DIR_PREFIX):].split(NESTED_INSTALL_DIR)[-1]


def _entry_version(entry: Any) -> str:
    if not isinstance(entry, dict):
        return ""
    version = entry.get("version")
    return version if isinstance(version, str) else ""


class NodeJSPackageParser(BaseParser):
    """Parser for Node.js package.json files."""

    # Later sections override earlier ones when a name appears twice
    DEPENDENCY_SECTIONS = (
        ("dependencies", "runtime"),
        ("devDependencies", "dev"),
        ("peerDependencies", "peer"),
        ("optionalDependencies", "optional"),
    )

    def __init__(self) -> None:
        """Initialize the package.json parser."""
        super().__init__()
        self.ecosystem = "nodejs"
        self.parser_type = "package"
        self.filenames = ["package.json"]

    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a package.json file.

        Args:
            file_path: Path to the package.json file

        Returns:
            Parsed dependencies, one per declared name
        """
        result = self._new_result(file_path)
        data = self._load_json(file_path)

        for name, (version_spec, dep_type) in self._merge_sections(data).items():
            result.add_dependency(Dependency(
                name=name,
                version=version_spec,
                source_file=file_path,
                ecosystem=self.ecosystem,
                metadata={"type": dep_type}
            ))

        return result

    def _merge_sections(self, data: Any) -> Dict[str, Tuple[str, str]]:
        """Merge the dependency sections into one name-to-specifier mapping.

        Args:
            data: Parsed JSON data

        Returns:
            Mapping of name to ``(version specifier, dependency type)``
        """
        merged: Dict[str, Tuple[str, str]] = {}
        if not isinstance(data, dict):
            return merged

        for section_name, dep_type in self.DEPENDENCY_SECTIONS:
            section = data.get(section_name)
            if not isinstance(section, dict):
                continue
            for name, version_spec in section.items():
                if name and isinstance(version_spec, str):
                    merged[name] = (version_spec, dep_type)

        return merged


class NodeJSLockfileParser(BaseParser):
    """Parser for npm package-lock.json files.

    Both the ``packages`` layout (lockfileVersion 2/3) and the nested
    ``dependencies`` layout (lockfileVersion 1) are read whenever present;
    v2 lockfiles carry both.
    """

    def __init__(self) -> None:
        """Initialize the package-lock.json parser."""
        super().__init__()
        self.ecosystem = "nodejs"
        self.parser_type = "lockfile"
        self.filenames = ["package-lock.json"]

    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a package-lock.json file.

        Args:
            file_path: Path to the package-lock.json file

        Returns:
            Parsed dependencies with resolved versions
        """
        result = self._new_result(file_path)
        data = self._load_json(file_path)
        if not isinstance(data, dict):
            return result

        result.metadata["lockfile_version"] = data.get("lockfileVersion")

        for name, version in self._iter_packages(data.get("packages")):
            result.add_dependency(self._create_dependency(file_path, name, version, "packages"))

        for name, version in self._iter_dependency_tree(data.get("dependencies")):
            result.add_dependency(self._create_dependency(file_path, name, version, "dependencies"))

        return result

    def _iter_packages(self, packages: Any) -> Iterator[Tuple[str, str]]:
        """Yield installed packages from the flat ``packages`` mapping.

        Args:
            packages: Value of the ``packages`` field

        Yields:
            ``(name, version)`` for every entry with a version
        """
        if not isinstance(packages, dict):
            return

        for package_path, entry in packages.items():
            # "" is the project itself
            if not package_path:
                continue
            name = package_name_from_path(package_path)
            version = _entry_version(entry)
            if name and version:
                yield name, version

    def _iter_dependency_tree(self, dependencies: Any) -> Iterator[Tuple[str, str]]:
        """Walk the nested ``dependencies`` tree depth-first.

        Args:
            dependencies: Mapping of name to resolved entry

        Yields:
            ``(name, version)`` for every node with a version
        """
        if not isinstance(dependencies, dict):
            return

        for name, entry in dependencies.items():
            version = _entry_version(entry)
            if name and version:
                yield name, version
            if isinstance(entry, dict):
                yield from self._iter_dependency_tree(entry.get("dependencies"))

    def _create_dependency(
        self,
        file_path: Path,
        name: str,
        version: str,
        layout: str
    ) -> Dependency:
        return Dependency(
            name=name,
            version=version,
            source_file=file_path,
            ecosystem=self.ecosystem,
            resolved=True,
            metadata={"layout": layout}
        )
