"""Dependency file parsers for npm manifests and lockfiles."""

from .base import BaseParser, Dependency, ParsedDependencies
from .nodejs import NodeJSPackageParser, NodeJSLockfileParser, package_name_from_path
from .registry import ParserRegistry

# Register built-in parsers
registry = ParserRegistry()

registry.register("nodejs", "package", NodeJSPackageParser())
registry.register("nodejs", "lockfile", NodeJSLockfileParser())

# Convenience exports
DependencyParser = registry
__all__ = [
    "BaseParser",
    "Dependency",
    "ParsedDependencies",
    "DependencyParser",
    "NodeJSPackageParser",
    "NodeJSLockfileParser",
    "ParserRegistry",
    "package_name_from_path",
    "registry",
]
