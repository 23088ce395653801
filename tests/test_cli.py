"""
Tests for CLI commands

Tests cover:
- Command registration
- Suite run exit codes and report rendering
- Configuration validation
- Health checks
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import responses
from click.testing import CliRunner

import main
from apisuite.cli import cli
from apisuite.runner import FeatureRun, SuiteResult
from config.settings import SuiteConfig
from tests import BASE_URL, BaseTestCase, SampleDataGenerator, project_root


class TestCLICommands(BaseTestCase):
    """Tests for CLI commands"""

    def setUp(self):
        super().setUp()
        self.runner = CliRunner()

    def test_cli_help(self) -> None:
        """Test that CLI help displays all commands"""
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("run", "report", "check-config", "health-check"):
            assert command in result.output

    @patch("apisuite.runner.run_suite")
    def test_run_success(self, mock_run) -> None:
        mock_run.return_value = SuiteResult([FeatureRun("bdd", 0, 1.0, "2 scenarios passed")])

        result = self.runner.invoke(cli, ["run", "--no-report", "--sequential"])

        assert result.exit_code == 0
        assert "2 scenarios passed" in result.output
        assert mock_run.call_args.kwargs["parallel"] is False

    @patch("apisuite.runner.run_suite")
    def test_run_failure_exit_code(self, mock_run) -> None:
        mock_run.return_value = SuiteResult([FeatureRun("bdd/api.feature", 1, 1.0, "")])

        result = self.runner.invoke(cli, ["run", "--no-report", "--workers", "2"])

        assert result.exit_code == 1
        assert mock_run.call_args.kwargs["workers"] == 2

    @patch("apisuite.runner.run_suite")
    def test_run_passes_tags_and_retries(self, mock_run) -> None:
        mock_run.return_value = SuiteResult([FeatureRun("bdd", 0, 1.0)])

        self.runner.invoke(
            cli, ["run", "--no-report", "--tags", "@negative", "--retries", "2"]
        )

        assert mock_run.call_args.kwargs["tags"] == ["@negative"]
        assert mock_run.call_args.kwargs["retries"] == 2

    def test_report_without_results_fails(self) -> None:
        data = SuiteConfig._get_default_config()
        data["report"]["json_dir"] = str(Path(self.temp_dir.name) / "empty")
        SuiteConfig.save_config(data)

        result = self.runner.invoke(cli, ["report"])

        assert result.exit_code == 1
        assert "No behave JSON results" in result.output

    def test_report_renders_html(self) -> None:
        json_dir = Path(self.temp_dir.name) / "json"
        json_dir.mkdir()
        (json_dir / "api.json").write_text(json.dumps([SampleDataGenerator.behave_feature()]))
        data = SuiteConfig._get_default_config()
        data["report"]["json_dir"] = str(json_dir)
        data["report"]["html_dir"] = str(Path(self.temp_dir.name) / "html")
        SuiteConfig.save_config(data)

        result = self.runner.invoke(cli, ["report"])

        assert result.exit_code == 0
        assert (Path(self.temp_dir.name) / "html" / "index.html").exists()

    def test_check_config_ok(self) -> None:
        result = self.runner.invoke(cli, ["check-config"])
        assert result.exit_code == 0
        assert "Configuration OK" in result.output

    def test_check_config_reports_issues(self) -> None:
        data = SuiteConfig._get_default_config()
        data["artifacts"]["trace"] = "sometimes"
        SuiteConfig.save_config(data)

        result = self.runner.invoke(cli, ["check-config"])

        assert result.exit_code == 1
        assert "Unknown trace policy" in result.output

    @responses.activate
    def test_health_check(self) -> None:
        responses.add(responses.GET, f"{BASE_URL}/users", json=SampleDataGenerator.users())
        responses.add(responses.GET, f"{BASE_URL}/posts", json=[], status=200)

        result = self.runner.invoke(cli, ["health-check", "--base-url", BASE_URL])

        assert result.exit_code == 1
        assert "✓ users" in result.output
        assert "✗ posts" in result.output


class TestEntryPoint(BaseTestCase):
    """The console script goes through main.main"""

    def test_console_script_targets_main(self) -> None:
        pyproject = Path(project_root, "pyproject.toml").read_text(encoding="utf-8")
        assert 'apisuite = "main:main"' in pyproject

    @patch("main.setup_logging")
    @patch("main.cli")
    def test_main_loads_dotenv_from_working_directory(self, mock_cli, _logging) -> None:
        Path(self.temp_dir.name, ".env").write_text("API_BASE_URL=http://from-dotenv.test\n")
        previous = os.getcwd()
        os.chdir(self.temp_dir.name)
        try:
            assert main.main() == 0
        finally:
            os.chdir(previous)

        mock_cli.assert_called_once()
        assert os.environ["API_BASE_URL"] == "http://from-dotenv.test"
        assert SuiteConfig.BASE_URL() == "http://from-dotenv.test"
