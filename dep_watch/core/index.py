"""Known-vulnerability index loaded from a package/version list."""

from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..utils.logging import get_logger
from ..utils.performance import benchmark


class VulnerabilityIndex(Mapping):
    """Read-only mapping of package name to its known-vulnerable versions.

    Names are case-sensitive. Versions keep the order they were listed in,
    duplicates included.
    """

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()) -> None:
        """Build the index from ``(name, version)`` pairs.

        Args:
            entries: Package name and version pairs, in listing order
        """
        packages: Dict[str, List[str]] = {}
        for name, version in entries:
            packages.setdefault(name, []).append(version)

        self._packages: Dict[str, Tuple[str, ...]] = {
            name: tuple(versions) for name, versions in packages.items()
        }

    def __getitem__(self, name: str) -> Tuple[str, ...]:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"VulnerabilityIndex({len(self)} packages, {self.total_versions} versions)"

    @property
    def total_versions(self) -> int:
        """Number of listed package versions across all packages."""
        return sum(len(versions) for versions in self._packages.values())

    @classmethod
    def from_csv(cls, csv_path: Union[str, Path]) -> "VulnerabilityIndex":
        """Load an index from a ``name,version`` list with a header line.

        Args:
            csv_path: Path to the vulnerability list

        Returns:
            Populated vulnerability index

        Raises:
            FileNotFoundError: If the list does not exist
        """
        return cls(iter_vulnerability_entries(Path(csv_path)))


def parse_vulnerability_line(line: str) -> Optional[Tuple[str, str]]:
    """Parse one data line of the vulnerability list.

    Emptiness is checked on the raw fields; only the version is trimmed.

    Args:
        line: Line without its terminator

    Returns:
        ``(name, version)`` or None if either field is missing
    """
    fields = line.split(",")
    if len(fields) < 2:
        return None

    name, version = fields[0], fields[1]
    if not name or not version:
        return None

    return name, version.strip()


def iter_vulnerability_entries(csv_path: Path) -> Iterator[Tuple[str, str]]:
    """Stream ``(name, version)`` pairs from a vulnerability list.

    The first line is a header and is skipped. Malformed lines are skipped
    silently. Universal newlines make ``\\n``, ``\\r\\n`` and ``\\r`` endings
    equivalent.

    Args:
        csv_path: Path to the vulnerability list

    Yields:
        Package name and version pairs
    """
    with open(csv_path, 'r', encoding='utf-8', errors='replace') as f:
        header = next(f, None)
        if header is None:
            return

        for line in f:
            entry = parse_vulnerability_line(line.rstrip("\n"))
            if entry is not None:
                yield entry


@benchmark
def load_vulnerability_index(csv_path: Union[str, Path]) -> VulnerabilityIndex:
    """Load the known-vulnerability index.

    Args:
        csv_path: Path to the vulnerability list

    Returns:
        Vulnerability index
    """
    index = VulnerabilityIndex.from_csv(csv_path)
    get_logger("VulnerabilityIndex").debug(
        f"Loaded {len(index)} packages ({index.total_versions} versions) from {csv_path}"
    )
    return index
