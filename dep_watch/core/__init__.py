"""Core index, parsing and matching logic for DepWatch."""

from .index import VulnerabilityIndex, load_vulnerability_index
from .matcher import (
    Finding,
    ScanResult,
    VulnerabilityMatcher,
    aggregate_findings,
    normalize_version,
)
from .parsers import DependencyParser, Dependency, ParsedDependencies
from .scanner import ProjectScanner

__all__ = [
    "VulnerabilityIndex",
    "load_vulnerability_index",
    "Finding",
    "ScanResult",
    "VulnerabilityMatcher",
    "aggregate_findings",
    "normalize_version",
    "DependencyParser",
    "Dependency",
    "ParsedDependencies",
    "ProjectScanner",
]
