"""Core vulnerability matching and aggregation logic for DepWatch."""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from ..utils.logging import get_logger
from .index import VulnerabilityIndex
from .parsers import Dependency, ParsedDependencies

# One leading range operator, e.g. "^1.2.3" or "~1.2.3"
RANGE_OPERATOR_PATTERN = re.compile(r'^[\^~>=<]')

FindingKey = Tuple[str, str, str]


def normalize_version(version: str) -> str:
    """Strip a single leading range operator and surrounding whitespace.

    Only the first character is considered, so ``>=1.0.0`` becomes
    ``=1.0.0``; ranges are not resolved.

    Args:
        version: Version specifier as declared

    Returns:
        Version string used for the match decision
    """
    return RANGE_OPERATOR_PATTERN.sub('', version, count=1).strip()


@dataclass
class Finding:
    """A package from the vulnerability index seen at some version in a file."""

    package: str
    installed_version: str
    vulnerable_versions: Tuple[str, ...]
    is_exact_match: bool
    file: str

    def __post_init__(self) -> None:
        """Validate finding data."""
        if not self.package:
            raise ValueError("Finding package cannot be empty")

    @property
    def key(self) -> FindingKey:
        """Identity used to collapse repeated detections."""
        return (self.file, self.package, self.installed_version)

    @property
    def label(self) -> str:
        return "EXACT MATCH" if self.is_exact_match else "DIFFERENT VERSION"


@dataclass
class ScanResult:
    """Deduplicated, ordered findings of one scan with their tallies."""

    findings: List[Finding] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def exact_matches(self) -> int:
        return sum(1 for finding in self.findings if finding.is_exact_match)

    @property
    def different_versions(self) -> int:
        return sum(1 for finding in self.findings if not finding.is_exact_match)

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 when any exact match was found, else 0."""
        return 1 if self.exact_matches > 0 else 0


class VulnerabilityMatcher:
    """Matches parsed dependencies against the known-vulnerability index."""

    def __init__(self, index: VulnerabilityIndex) -> None:
        """Initialize the vulnerability matcher.

        Args:
            index: Known-vulnerable package versions
        """
        self.index = index
        self.logger = get_logger("VulnerabilityMatcher")

    def match_dependency(self, dependency: Dependency, file: str) -> Optional[Finding]:
        """Match a single dependency.

        Declared specifiers are normalized before comparison; resolved
        lockfile versions are compared as they are.

        Args:
            dependency: Dependency to check
            file: Source file reported in the finding

        Returns:
            Finding, or None if the package is not in the index
        """
        vulnerable_versions = self.index.get(dependency.name)
        if vulnerable_versions is None:
            return None

        if dependency.resolved:
            candidate = dependency.version
        else:
            candidate = normalize_version(dependency.version)

        is_exact_match = candidate in vulnerable_versions
        self.logger.debug(
            f"{dependency.name}@{dependency.version} in {file}: "
            f"{'exact match' if is_exact_match else 'different version'}"
        )

        return Finding(
            package=dependency.name,
            installed_version=dependency.version,
            vulnerable_versions=vulnerable_versions,
            is_exact_match=is_exact_match,
            file=file,
        )

    def match_dependencies(self, parsed: ParsedDependencies) -> List[Finding]:
        """Match all dependencies parsed from one file.

        Args:
            parsed: Dependencies from a single manifest or lockfile

        Returns:
            Findings in parse order, duplicates included
        """
        file = str(parsed.source_file) if parsed.source_file else ""
        findings = []

        for dependency in parsed.dependencies:
            finding = self.match_dependency(dependency, file)
            if finding:
                findings.append(finding)

        return findings


def deduplicate_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Keep the first finding per ``(file, package, installed_version)``.

    Args:
        findings: Findings in detection order

    Returns:
        Unique findings in detection order
    """
    seen: Set[FindingKey] = set()
    unique = []

    for finding in findings:
        if finding.key not in seen:
            seen.add(finding.key)
            unique.append(finding)

    return unique


def sort_findings(findings: Iterable[Finding]) -> List[Finding]:
    """Order findings by file, exact matches first, then package name.

    Args:
        findings: Findings to order

    Returns:
        New sorted list
    """
    return sorted(
        findings,
        key=lambda finding: (finding.file, not finding.is_exact_match, finding.package)
    )


def aggregate_findings(findings: Iterable[Finding], files_scanned: int = 0) -> ScanResult:
    """Deduplicate and order findings collected from every file.

    Args:
        findings: Concatenated findings from all processed files
        files_scanned: Number of files that were inspected

    Returns:
        Scan result ready for reporting
    """
    return ScanResult(
        findings=sort_findings(deduplicate_findings(findings)),
        files_scanned=files_scanned,
    )
