"""
Tests for the gherkin-report CLI.

Tests the `generate`, `show` and `version` commands through Typer's
CliRunner.
"""

import shutil
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gherkin_report import __version__
from gherkin_report.cli import app
from gherkin_report.core.config import BUNDLED_TEMPLATES_DIR
from gherkin_report.core.report import ReportError

runner = CliRunner()


class TestHelp:
    """Test command help and structure."""

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "show" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestGenerateCommand:
    """Test the generate command."""

    def test_generate_into_output_folder(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        output = tmp_path / "site"

        result = runner.invoke(app, ["generate", str(features_dir), "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert "Report written" in result.output
        assert "3 features" in result.output
        assert (output / "index.html").exists()
        assert (output / "style.css").exists()

    def test_generate_default_folders(self, features_dir: Path, monkeypatch) -> None:
        monkeypatch.chdir(features_dir)

        result = runner.invoke(app, ["generate"])

        assert result.exit_code == 0, result.output
        assert (features_dir / "report" / "index.html").exists()

    def test_generate_recursive(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate", str(features_dir), "--recursive"])

        assert result.exit_code == 0, result.output
        assert "4 features" in result.output
        assert "Nested" in (tmp_path / "report" / "index.html").read_text()

    def test_generate_uses_project_config(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".gherkin-report.json").write_text('{"report_dir": "from-config", "title": "Nightly"}')

        result = runner.invoke(app, ["generate", str(features_dir)])

        assert result.exit_code == 0, result.output
        assert "Nightly" in (tmp_path / "from-config" / "index.html").read_text()

    def test_generate_missing_source(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_generate_invalid_config(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".gherkin-report.json").write_text('{"recursive": "maybe"}')

        result = runner.invoke(app, ["generate", str(features_dir)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_generate_report_error(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        with patch(
            "gherkin_report.cli.generate.Reporter.create_gherkins_report",
            side_effect=ReportError("Page template is not loaded"),
        ):
            result = runner.invoke(app, ["generate", str(features_dir)])

        assert result.exit_code == 1
        assert "Page template is not loaded" in result.output

    def test_generate_refuses_current_directory(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "notes.md").write_text("keep me")

        result = runner.invoke(app, ["generate", str(features_dir), "-o", "."])

        assert result.exit_code == 1
        assert "Refusing" in result.output
        assert (tmp_path / "notes.md").exists()
        assert (features_dir / "base.feature").exists()

    def test_generate_refuses_source_as_output(self, features_dir: Path, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["generate", str(features_dir), "-o", str(features_dir)])

        assert result.exit_code == 1
        assert "Refusing" in result.output
        assert (features_dir / "tagged.feature").exists()

    @pytest.mark.parametrize("page", ["{{ unknown_name }}", "{% if %}"])
    def test_generate_broken_custom_template(
        self, page: str, features_dir: Path, tmp_path: Path, monkeypatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        templates_dir = tmp_path / "my-templates"
        shutil.copytree(BUNDLED_TEMPLATES_DIR, templates_dir)
        (templates_dir / "page.html").write_text(page)

        result = runner.invoke(app, ["generate", str(features_dir), "-t", str(templates_dir)])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


class TestShowCommand:
    """Test the show command."""

    def test_show_prints_tree(self, features_dir: Path) -> None:
        result = runner.invoke(app, ["show", str(features_dir / "tagged.feature")])

        assert result.exit_code == 0, result.output
        assert "Feature:" in result.output
        assert "Login" in result.output
        assert "Valid credentials" in result.output
        assert "Scenario Outline:" in result.output
        assert "Examples" in result.output

    def test_show_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["show", str(tmp_path / "missing.feature")])

        assert result.exit_code == 1
        assert "Error" in result.output
