"""Utility functions and helpers for DepWatch."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor, benchmark
from .path_utils import DependencyFile, DependencyFileFinder, find_dependency_files

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "benchmark",
    "DependencyFile",
    "DependencyFileFinder",
    "find_dependency_files",
]
