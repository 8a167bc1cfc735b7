"""
Tests for CLI module.
"""

import json

import pytest
from typer.testing import CliRunner

from boring_table.cli.main import app, load_settings

runner = CliRunner()


@pytest.fixture
def rows_file(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps([{"id": i, "name": f"user-{i}"} for i in range(5)]))
    return path


@pytest.mark.unit
class TestCLI:
    """Test CLI commands."""

    def test_version_command(self):
        """Test version command."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "boring-table" in result.output

    def test_load_settings_returns_settings(self):
        """Test load_settings returns BoringTableSettings."""
        settings = load_settings()

        assert settings is not None
        assert hasattr(settings, "engine")
        assert hasattr(settings, "tracing")

    def test_inspect_all_rows(self, rows_file):
        """Test inspect shows every row on one page by default."""
        result = runner.invoke(app, ["inspect", str(rows_file)])

        assert result.exit_code == 0
        assert "Page 1 of 1 (5 rows)" in result.output
        assert "user-4" in result.output
        assert '"total_items": 5' in result.output

    def test_inspect_page(self, rows_file):
        """Test inspect pages and selects columns."""
        result = runner.invoke(app, ["inspect", str(rows_file), "--page-size", "2", "--page", "3", "-c", "name"])

        assert result.exit_code == 0
        assert "Page 3 of 3" in result.output
        assert "user-4" in result.output
        assert "user-0" not in result.output
        assert '"page": 3' in result.output

    def test_inspect_missing_file(self, tmp_path):
        """Test a missing file exits with code 2."""
        result = runner.invoke(app, ["inspect", str(tmp_path / "missing.json")])

        assert result.exit_code == 2
        assert "not found" in result.output

    def test_inspect_invalid_rows(self, tmp_path):
        """Test non-array JSON is rejected."""
        path = tmp_path / "rows.json"
        path.write_text(json.dumps({"id": 1}))

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 2
        assert "array of objects" in result.output

    def test_inspect_empty_rows(self, tmp_path):
        """Test an empty data set renders an empty page."""
        path = tmp_path / "rows.json"
        path.write_text("[]")

        result = runner.invoke(app, ["inspect", str(path)])

        assert result.exit_code == 0
        assert "Page 1 of 0 (0 rows)" in result.output
