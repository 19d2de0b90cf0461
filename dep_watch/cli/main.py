"""Main CLI interface for DepWatch."""

import time
from pathlib import Path
from typing import Optional
import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..utils.logging import setup_logging, get_logger
from ..utils.performance import PerformanceMonitor
from ..core.index import load_vulnerability_index
from ..core.scanner import ProjectScanner
from ..output.formatters import ConsoleFormatter, JSONFormatter

app = typer.Typer(
    name="depwatch",
    help="Scan npm manifests and lockfiles for packages from a known-vulnerable list",
    add_completion=False
)

console = Console()
error_console = Console(stderr=True)
logger = get_logger("CLI")


def _print_usage() -> None:
    console.print("[bold]Usage:[/bold] depwatch <vulnerability-list.csv> <folder-to-scan>")
    console.print("[bold]Example:[/bold] depwatch shai-hulud-2.0.csv ./my-project")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"depwatch {__version__}")
        raise typer.Exit()


@app.command()
def scan(
    vulnerability_list: Optional[Path] = typer.Argument(
        None,
        help="CSV file of known-vulnerable packages (header, then name,version lines)"
    ),
    scan_root: Optional[Path] = typer.Argument(
        None,
        help="Path to the project directory to scan"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    performance: bool = typer.Option(
        False,
        "--performance",
        help="Show performance summary"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit"
    ),
) -> None:
    """Scan a project for packages listed as known-vulnerable.

    Exits with status 1 when any exact version match is found.
    """
    setup_logging(verbose=verbose)

    if vulnerability_list is None or scan_root is None:
        _print_usage()
        raise typer.Exit(1)

    # Validate inputs
    error_formatter = ConsoleFormatter(error_console)
    if not vulnerability_list.exists():
        error_formatter.format_error(f"Vulnerability list not found: {vulnerability_list}")
        raise typer.Exit(1)

    if not scan_root.exists():
        error_formatter.format_error(f"Folder not found: {scan_root}")
        raise typer.Exit(1)

    try:
        exit_code = _run_scan(vulnerability_list, scan_root, output, performance)
    except Exception as e:
        logger.error(f"Scan failed: {e}")
        error_console.print(f"[red]Fatal error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    raise typer.Exit(exit_code)


def _run_scan(
    vulnerability_list: Path,
    scan_root: Path,
    output: Optional[Path],
    performance: bool
) -> int:
    """Run one scan and print the report.

    Args:
        vulnerability_list: Path to the vulnerability list
        scan_root: Directory to scan
        output: Optional JSON output file
        performance: Show the phase timing table

    Returns:
        Process exit code
    """
    formatter = ConsoleFormatter(console)
    monitor = PerformanceMonitor(enable_memory_tracking=performance, console=console)

    try:
        formatter.format_banner()

        with monitor.measure("load_index"):
            index = load_vulnerability_index(vulnerability_list)
        formatter.format_index_loaded(vulnerability_list, len(index))

        scanner = ProjectScanner(index, performance_monitor=monitor)
        formatter.format_scan_start(scan_root, scanner.finder.get_supported_filenames())

        start_time = time.perf_counter()
        dependency_files = scanner.discover(scan_root)
        formatter.format_files_found(len(dependency_files))

        result = scanner.scan(scan_root, dependency_files=dependency_files)
        scan_time = time.perf_counter() - start_time

        formatter.format_scan_results(result)

        if output:
            json_formatter = JSONFormatter(output)
            results = json_formatter.format_scan_results(
                result,
                scan_time=scan_time,
                metadata={
                    "vulnerability_list": str(vulnerability_list),
                    "scan_root": str(scan_root),
                    "vulnerable_packages": len(index),
                }
            )
            json_formatter.save_results(results)

        if performance:
            monitor.print_summary()
    finally:
        monitor.stop()

    return result.exit_code


def main() -> None:
    """Main entry point for DepWatch CLI."""
    app()


if __name__ == "__main__":
    main()
