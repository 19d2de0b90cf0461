"""Project scanning: discovery, extraction and aggregation in one pass."""

from pathlib import Path
from typing import List, Optional

from ..utils.logging import get_logger
from ..utils.path_utils import DependencyFile, DependencyFileFinder
from ..utils.performance import PerformanceMonitor
from .index import VulnerabilityIndex
from .matcher import Finding, ScanResult, VulnerabilityMatcher, aggregate_findings
from .parsers import ParserRegistry, registry as default_registry


class ProjectScanner:
    """Scans a project tree for packages listed in a vulnerability index."""

    def __init__(
        self,
        index: VulnerabilityIndex,
        parser_registry: Optional[ParserRegistry] = None,
        performance_monitor: Optional[PerformanceMonitor] = None
    ) -> None:
        """Initialize the scanner.

        Args:
            index: Known-vulnerable package versions
            parser_registry: Parsers to use (defaults to the built-in registry)
            performance_monitor: Optional monitor timing each phase
        """
        self.matcher = VulnerabilityMatcher(index)
        self.parser_registry = parser_registry or default_registry
        self.finder = DependencyFileFinder()
        self.performance_monitor = performance_monitor or PerformanceMonitor()
        self.logger = get_logger("ProjectScanner")

    def discover(self, root_path: Path) -> List[DependencyFile]:
        """Find every manifest and lockfile below ``root_path``."""
        with self.performance_monitor.measure("discover_files"):
            return self.finder.find_dependency_files(root_path)

    def extract(self, dependency_files: List[DependencyFile]) -> List[Finding]:
        """Extract findings file by file, in discovery order."""
        findings: List[Finding] = []

        with self.performance_monitor.measure("extract_findings"):
            for dep_file in dependency_files:
                file_findings = self.parser_registry.extract_findings(dep_file.path, self.matcher)
                if file_findings:
                    self.logger.debug(f"{dep_file.path}: {len(file_findings)} findings")
                findings.extend(file_findings)

        return findings

    def scan(
        self,
        root_path: Path,
        dependency_files: Optional[List[DependencyFile]] = None
    ) -> ScanResult:
        """Scan a project tree.

        Args:
            root_path: Directory to scan
            dependency_files: Already discovered files, to skip discovery

        Returns:
            Deduplicated and sorted scan result
        """
        if dependency_files is None:
            dependency_files = self.discover(root_path)

        findings = self.extract(dependency_files)

        with self.performance_monitor.measure("aggregate_findings"):
            return aggregate_findings(findings, files_scanned=len(dependency_files))
