"""Tests for the Click CLI interface.

These tests verify that:
1. Options are parsed and merged into the configuration
2. Environment variables are used as fallbacks
3. Errors exit with status 1
4. Help and version options work
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from notice_generator import __version__
from notice_generator.cli.main import cli
from notice_generator.exceptions import ManifestError
from notice_generator.models import GenerationResult

CONFIG = "title: Example\ncopyright: Copyright Example\ndescription: Third-party software\nsearch: [package.json]\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(write_config):
    return write_config(CONFIG)


@pytest.fixture
def mock_generator():
    with patch("notice_generator.cli.main.NoticeGenerator") as generator_class:
        generator = generator_class.return_value.__enter__.return_value
        generator.run.return_value = GenerationResult(output_path="NOTICE.txt", generated=["left-pad"])
        yield generator_class


class TestCLIHelp:
    def test_help_option(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Generate a NOTICE.txt" in result.output
        assert "--config" in result.output
        assert "--token" in result.output
        assert "--max-workers" in result.output

    def test_short_help_option(self, runner):
        result = runner.invoke(cli, ["-h"])
        assert result.exit_code == 0

    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_required(self, runner):
        result = runner.invoke(cli, [], env={"NOTICE_CONFIG": None})

        assert result.exit_code == 2
        assert "--config" in result.output


class TestCLIOptions:
    def test_options_merged_into_config(self, runner, tmp_path, config_file, mock_generator):
        result = runner.invoke(
            cli,
            ["-p", str(tmp_path), "-c", str(config_file), "-t", "ghp_test", "--max-workers", "3"],
            env={"GITHUB_TOKEN": None, "NOTICE_MAX_WORKERS": None},
        )

        assert result.exit_code == 0, result.output
        config = mock_generator.call_args.args[0]
        assert config.path == tmp_path.resolve()
        assert config.title == "Example"
        assert config.github_token == "ghp_test"
        assert config.max_workers == 3

    def test_environment_fallbacks(self, runner, tmp_path, config_file, mock_generator):
        result = runner.invoke(
            cli,
            ["--path", str(tmp_path)],
            env={"NOTICE_CONFIG": str(config_file), "GITHUB_TOKEN": "ghp_env", "NOTICE_MAX_WORKERS": "4"},
        )

        assert result.exit_code == 0, result.output
        config = mock_generator.call_args.args[0]
        assert config.github_token == "ghp_env"
        assert config.max_workers == 4

    def test_token_option_overrides_environment(self, runner, tmp_path, config_file, mock_generator):
        result = runner.invoke(
            cli,
            ["-p", str(tmp_path), "-c", str(config_file), "--token", "ghp_cli"],
            env={"GITHUB_TOKEN": "ghp_env"},
        )

        assert result.exit_code == 0, result.output
        assert mock_generator.call_args.args[0].github_token == "ghp_cli"

    def test_max_workers_must_be_positive(self, runner, tmp_path, config_file):
        result = runner.invoke(
            cli, ["-p", str(tmp_path), "-c", str(config_file), "--max-workers", "0"], env={"NOTICE_MAX_WORKERS": None}
        )
        assert result.exit_code == 2

    def test_path_must_exist(self, runner, tmp_path, config_file):
        result = runner.invoke(cli, ["-p", str(tmp_path / "missing"), "-c", str(config_file)])
        assert result.exit_code == 2


class TestCLIErrors:
    def test_invalid_config_exits_1(self, runner, tmp_path, write_config):
        bad_config = write_config("search: [unclosed\n")

        result = runner.invoke(cli, ["-p", str(tmp_path), "-c", str(bad_config)])

        assert result.exit_code == 1

    def test_missing_config_file_exits_1(self, runner, tmp_path):
        result = runner.invoke(cli, ["-p", str(tmp_path), "-c", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1

    def test_generation_error_exits_1(self, runner, tmp_path, config_file, mock_generator):
        mock_generator.return_value.__enter__.return_value.run.side_effect = ManifestError("bad manifest")

        result = runner.invoke(cli, ["-p", str(tmp_path), "-c", str(config_file)])

        assert result.exit_code == 1

    def test_end_to_end_without_dependencies(self, runner, tmp_path, config_file):
        (tmp_path / "package.json").write_text("{}")

        result = runner.invoke(cli, ["-p", str(tmp_path), "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "NOTICE.txt").read_text() == (
            "Example\n\nCopyright Example\n\nNOTICES:\n--------\n\nThird-party software\n\n--------\n\n"
        )
