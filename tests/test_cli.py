"""Tests for the depwatch command line."""

import json
import pytest
from pathlib import Path
from unittest.mock import patch
from typer.testing import CliRunner

from dep_watch import __version__
from dep_watch.cli.main import app

runner = CliRunner()


def _write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def vulnerability_csv(tmp_path):
    csv_file = tmp_path / "shai-hulud.csv"
    csv_file.write_text(
        "Package,Version\n"
        "left-pad,1.0.1\n"
        "evil-pkg,2.0.0\n"
        "evil-pkg,2.0.1\n"
    )
    return csv_file


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "project"
    root.mkdir()
    return root


class TestArguments:
    """Test argument handling and startup errors."""

    def test_no_arguments_prints_usage(self):
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Usage:" in result.output

    def test_one_argument_prints_usage(self, vulnerability_csv):
        result = runner.invoke(app, [str(vulnerability_csv)])

        assert result.exit_code == 1
        assert "Usage:" in result.output

    def test_missing_vulnerability_list(self, tmp_path, project):
        result = runner.invoke(app, [str(tmp_path / "missing.csv"), str(project)])

        assert result.exit_code == 1
        assert "Vulnerability list not found" in result.output

    def test_missing_scan_root_skips_scan(self, vulnerability_csv, tmp_path):
        with patch("dep_watch.cli.main.ProjectScanner") as scanner_cls:
            result = runner.invoke(app, [str(vulnerability_csv), str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Folder not found" in result.output
        scanner_cls.assert_not_called()

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestScan:
    """Test full scans through the command line."""

    def test_no_manifests(self, vulnerability_csv, project):
        (project / "README.md").write_text("# nothing here")

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 0
        assert "No vulnerable packages found" in result.output
        assert "2 unique vulnerable packages" in result.output

    def test_exact_match_exits_with_error(self, vulnerability_csv, project):
        _write_json(project / "package.json", {"dependencies": {"left-pad": "^1.0.1"}})

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 1
        assert "[EXACT MATCH]" in result.output
        assert "left-pad@^1.0.1" in result.output
        assert "Exact matches (CRITICAL): 1" in result.output

    def test_different_version_only_exits_cleanly(self, vulnerability_csv, project):
        _write_json(project / "package.json", {"devDependencies": {"evil-pkg": "~3.0.0"}})

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 0
        assert "[DIFFERENT VERSION]" in result.output
        assert "evil-pkg@~3.0.0" in result.output
        assert "Vulnerable versions: 2.0.0, 2.0.1" in result.output
        assert "Different versions (WARNING): 1" in result.output

    def test_lockfile_duplicates_reported_once(self, vulnerability_csv, project):
        _write_json(project / "package-lock.json", {
            "lockfileVersion": 2,
            "packages": {
                "": {"name": "app"},
                "node_modules/evil-pkg": {"version": "2.0.0"},
                "node_modules/other/node_modules/evil-pkg": {"version": "2.0.0"}
            },
            "dependencies": {"evil-pkg": {"version": "2.0.0"}}
        })

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 1
        assert result.output.count("evil-pkg@2.0.0") == 1
        assert "Total findings: 1" in result.output

    def test_malformed_manifest_ignored(self, vulnerability_csv, project):
        (project / "package.json").write_text("{broken")
        _write_json(project / "sub" / "package.json", {"dependencies": {"left-pad": "1.0.2"}})

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 0
        assert "Total findings: 1" in result.output

    def test_deeply_nested_manifest_ignored(self, vulnerability_csv, project):
        nested = project / "node_modules" / "evil" / "package.json"
        nested.parent.mkdir(parents=True)
        nested.write_text("[" * 100000 + "]" * 100000)
        _write_json(project / "package.json", {"dependencies": {"left-pad": "1.0.2"}})

        result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 0
        assert "Fatal error" not in result.output
        assert "left-pad.0.2" in result.output
        assert "Total findings: 1" in result.output

    def test_json_output(self, vulnerability_csv, project, tmp_path):
        _write_json(project / "package.json", {"dependencies": {"left-pad": "1.0.1"}})
        output_file = tmp_path / "report.json"

        result = runner.invoke(app, [
            str(vulnerability_csv), str(project), "--output", str(output_file)
        ])

        assert result.exit_code == 1
        report = json.loads(output_file.read_text(encoding="utf-8"))
        assert report["scan_summary"]["exact_matches"] == 1
        assert report["scan_summary"]["files_scanned"] == 1
        assert report["findings"] == [{
            "package": "left-pad",
            "installed_version": "1.0.1",
            "vulnerable_versions": ["1.0.1"],
            "match": "exact",
            "file": str(project / "package.json"),
        }]
        assert report["metadata"]["vulnerable_packages"] == 2

    def test_performance_summary(self, vulnerability_csv, project):
        result = runner.invoke(app, [str(vulnerability_csv), str(project), "--performance"])

        assert result.exit_code == 0
        assert "Performance Summary" in result.output

    def test_unexpected_error(self, vulnerability_csv, project):
        with patch(
            "dep_watch.cli.main.load_vulnerability_index",
            side_effect=RuntimeError("boom")
        ):
            result = runner.invoke(app, [str(vulnerability_csv), str(project)])

        assert result.exit_code == 1
        assert "Fatal error" in result.output
