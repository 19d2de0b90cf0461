"""Output formatters for DepWatch results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from ..core.matcher import Finding, ScanResult
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for DepWatch output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("ConsoleFormatter")

    def format_banner(self) -> None:
        """Print the scanner banner."""
        self.console.print("[cyan bold]=== DepWatch Vulnerability Scanner ===[/cyan bold]\n")

    def format_index_loaded(self, csv_path: Path, package_count: int) -> None:
        """Report the loaded vulnerability list.

        Args:
            csv_path: Path the list was read from
            package_count: Number of unique packages in the list
        """
        self.console.print(f"[bold]Loading vulnerable packages from:[/bold] {escape(str(csv_path))}", soft_wrap=True)
        self.console.print(f"[bold]Loaded:[/bold] {package_count} unique vulnerable packages\n")

    def format_scan_start(self, scan_root: Path, filenames: List[str]) -> None:
        """Report the folder being scanned.

        Args:
            scan_root: Directory being scanned
            filenames: Recognized manifest file names
        """
        self.console.print(f"[bold]Scanning folder:[/bold] {escape(str(scan_root))}", soft_wrap=True)
        self.console.print(f"[cyan]Searching for {escape(' and '.join(filenames))} files...[/cyan]\n")

    def format_files_found(self, file_count: int) -> None:
        self.console.print(f"[bold]Scanning:[/bold] {file_count} package files\n")

    def format_scan_results(self, result: ScanResult) -> None:
        """Format and display every finding followed by the summary.

        Args:
            result: Deduplicated and sorted scan result
        """
        if not result.findings:
            self.console.print("[green bold]✓ No vulnerable packages found![/green bold]\n")
            return

        self.console.print("[bold]=== FINDINGS ===[/bold]\n")

        for finding in result.findings:
            self._format_finding(finding)

        self.format_summary(result)

    def _format_finding(self, finding: Finding) -> None:
        """Print one finding block.

        Args:
            finding: Finding to display
        """
        style = "red" if finding.is_exact_match else "yellow"
        versions_label = "Vulnerable version" if finding.is_exact_match else "Vulnerable versions"
        versions = escape(", ".join(finding.vulnerable_versions))

        self.console.print(
            f"[{style} bold]\\[{finding.label}][/{style} bold] "
            f"{escape(finding.package)}@{escape(finding.installed_version)}",
            soft_wrap=True
        )
        self.console.print(f"  [{style}]{versions_label}: {versions}[/{style}]", soft_wrap=True)
        self.console.print(f"  [cyan]Found in: {escape(finding.file)}[/cyan]\n", soft_wrap=True)

    def format_summary(self, result: ScanResult) -> None:
        """Print the match counters.

        Args:
            result: Scan result to summarize
        """
        self.console.print("\n[bold]=== SUMMARY ===[/bold]")
        self.console.print(f"[red bold]Exact matches (CRITICAL):[/red bold] {result.exact_matches}")
        self.console.print(f"[yellow bold]Different versions (WARNING):[/yellow bold] {result.different_versions}")
        self.console.print(f"[bold]Total findings:[/bold] {result.total_findings}\n")

    def format_error(self, error: str) -> None:
        """Format and display error message.

        Args:
            error: Error message
        """
        self.console.print(f"[red]Error: {escape(error)}[/red]", soft_wrap=True)


class JSONFormatter:
    """JSON formatter for DepWatch output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_results(
        self,
        result: ScanResult,
        scan_time: float = 0.0,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Format scan results as JSON.

        Args:
            result: Scan result
            scan_time: Scan time in seconds
            metadata: Optional additional metadata

        Returns:
            Formatted JSON data
        """
        findings_data = [
            {
                "package": finding.package,
                "installed_version": finding.installed_version,
                "vulnerable_versions": list(finding.vulnerable_versions),
                "match": "exact" if finding.is_exact_match else "different_version",
                "file": finding.file,
            }
            for finding in result.findings
        ]

        data: Dict[str, Any] = {
            "scan_summary": {
                "files_scanned": result.files_scanned,
                "exact_matches": result.exact_matches,
                "different_versions": result.different_versions,
                "total_findings": result.total_findings,
                "scan_time_seconds": scan_time,
                "timestamp": datetime.now().isoformat()
            },
            "findings": findings_data
        }

        if metadata:
            data["metadata"] = metadata

        return data

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(results, f, indent=2, ensure_ascii=False)

            self.logger.info(f"Results saved to {file_path}")
        except IOError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
