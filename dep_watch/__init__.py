"""DepWatch - scan npm manifests and lockfiles against a list of known-vulnerable package versions."""

__version__ = "0.1.0"

from .core.index import VulnerabilityIndex, load_vulnerability_index
from .core.matcher import Finding, ScanResult, VulnerabilityMatcher
from .core.parsers import DependencyParser
from .core.scanner import ProjectScanner
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "VulnerabilityIndex",
    "load_vulnerability_index",
    "Finding",
    "ScanResult",
    "VulnerabilityMatcher",
    "DependencyParser",
    "ProjectScanner",
    "ConsoleFormatter",
    "JSONFormatter",
]
