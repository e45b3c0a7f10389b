"""
CLI interface tests for coredeps.
Tests the command-line interface and main entry points.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from coredeps.main import cli


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test CLI help message."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "coredeps" in result.output.lower()

    def test_cli_version(self):
        """Test CLI version display."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_info_command(self):
        """Test the info command."""
        runner = CliRunner()
        result = runner.invoke(cli, ["info"])

        assert result.exit_code == 0
        assert "CI_GROOVY_VERSION" in result.output


class TestShowCommand:
    """Test the show command."""

    def test_show_all_scopes(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["show", "--platform-version", "2.5.6"])

        assert result.exit_code == 0
        assert "grails-bootstrap" in result.output
        assert "spock-core" in result.output
        assert "grails-plugin-async" not in result.output

    def test_show_single_scope(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["show", "-p", "2.5.6", "-t", "3.1", "--scope", "compile"]
        )

        assert result.exit_code == 0
        assert "grails-plugin-async" in result.output
        assert "spock-core" not in result.output

    def test_show_plain_project(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["show", "-p", "2.5.6", "--plain-project", "-s", "test"])

        assert result.exit_code == 0
        assert "junit" in result.output
        assert "spock-core" not in result.output

    def test_show_requires_platform_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["show"])

        assert result.exit_code != 0
        assert "platform version is required" in result.output.lower()

    def test_show_uses_environment_platform_version(self, monkeypatch):
        monkeypatch.setenv("COREDEPS_PLATFORM_VERSION", "2.5.7")

        runner = CliRunner()
        result = runner.invoke(cli, ["show", "-s", "doc"])

        assert result.exit_code == 0
        assert "2.5.7" in result.output

    def test_invalid_scope(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["show", "-p", "2.5.6", "--scope", "system"])

        assert result.exit_code != 0


class TestPatternsCommand:
    """Test the patterns command."""

    def test_patterns_output(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["patterns", "-p", "2.5.6"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines == [
            "xalan:serializer:2.7.2",
            "org.grails:grails-bootstrap:2.5.6",
            "org.grails:grails-project-api:2.5.6",
            "org.grails:grails-scripts:2.5.6",
        ]


class TestExportCommand:
    """Test the export command."""

    def test_export_json_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["export", "-p", "2.5.6", "-t", "3.1", "--legacy-compatible", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["legacy_compatible"] is True
        assert len(data["scopes"]["compile"]) == 12

    def test_export_pom_to_file(self, temp_dir):
        output_file = temp_dir / "deps.xml"

        runner = CliRunner()
        result = runner.invoke(
            cli, ["export", "-p", "2.5.6", "--format", "pom", "--output-file", str(output_file)]
        )

        assert result.exit_code == 0
        assert output_file.exists()
        content = output_file.read_text()
        assert "<artifactId>groovy-all</artifactId>" in content
        assert "grails-bootstrap" not in content

    def test_export_default_format_is_json(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["export", "-p", "2.5.6"])

        assert result.exit_code == 0
        assert json.loads(result.output)["platform_version"] == "2.5.6"

    def test_invalid_export_format(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["export", "-p", "2.5.6", "--format", "yaml"])

        assert result.exit_code != 0


class TestConfigCommands:
    """Test configuration management commands."""

    def test_config_init(self, temp_dir):
        """Test creating a configuration file."""
        config_file = temp_dir / "test-config.json"

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "init", "--path", str(config_file)])

        assert result.exit_code == 0
        assert config_file.exists()

        config_data = json.loads(config_file.read_text())
        assert "catalog" in config_data

    def test_config_init_does_not_overwrite(self, temp_dir):
        config_file = temp_dir / "existing.json"
        config_file.write_text("{}")

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "init", "--path", str(config_file)])

        assert result.exit_code == 0
        assert config_file.read_text() == "{}"

    def test_config_show(self):
        """Test showing current configuration."""
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "Platform Version" in result.output

    def test_config_show_json(self, monkeypatch):
        monkeypatch.setenv("COREDEPS_PLATFORM_VERSION", "2.5.6")

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "show", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["catalog"]["platform_version"] == "2.5.6"
        assert data["output"]["output_format"] == "console"

    def test_config_validate_valid_file(self, temp_dir):
        """Test validating a valid configuration file."""
        config_file = temp_dir / "valid-config.json"
        config_file.write_text(
            json.dumps({"catalog": {"platform_version": "2.5.6", "target_platform_version": "3.1"}})
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", str(config_file)])

        assert result.exit_code == 0
        assert "valid" in result.output.lower()

    def test_config_validate_toml_file(self, temp_dir):
        config_file = temp_dir / "config.toml"
        config_file.write_text('[catalog]\nplatform_version = "2.5.6"\n')

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", str(config_file)])

        assert result.exit_code == 0

    def test_config_validate_unknown_key(self, temp_dir):
        config_file = temp_dir / "unknown.json"
        config_file.write_text(json.dumps({"output": {"colour": "blue"}}))

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", str(config_file)])

        assert result.exit_code != 0
        assert "output.colour" in result.output

    def test_config_validate_invalid_file(self, temp_dir):
        """Test validating an invalid configuration file."""
        config_file = temp_dir / "invalid-config.json"
        config_file.write_text("invalid json content")

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", str(config_file)])

        assert result.exit_code != 0

    def test_project_config_file_is_used(self):
        Path(".coredeps.json").write_text(
            json.dumps({"catalog": {"platform_version": "2.5.8", "framework_project": False}})
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["export", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["platform_version"] == "2.5.8"
        assert len(data["scopes"]["test"]) == 2

    def test_unquoted_toml_versions_in_project_config(self):
        Path(".coredeps.toml").write_text(
            "[catalog]\nplatform_version = 2.5\ntarget_platform_version = 3.1\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["export", "--format", "pom"])

        assert result.exit_code == 0
        assert "<version>2.5</version>" in result.output
        assert "grails-plugin-async" in result.output

    def test_quoted_boolean_in_project_config(self):
        Path(".coredeps.json").write_text(
            json.dumps({"catalog": {"platform_version": "2.5.6", "legacy_compatible": "false"}})
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["export", "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["legacy_compatible"] is False

    def test_config_validate_wrong_type(self, temp_dir):
        config_file = temp_dir / "typed.json"
        config_file.write_text(json.dumps({"catalog": {"platform_version": ["2.5.6"]}}))

        runner = CliRunner()
        result = runner.invoke(cli, ["config", "validate", str(config_file)])

        assert result.exit_code != 0
        assert "catalog.platform_version must be a string" in result.output


class TestErrorHandling:
    """Test CLI error handling."""

    def test_invalid_command(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["invalid-command"])

        assert result.exit_code != 0

    def test_export_write_failure(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["export", "-p", "2.5.6", "-o", str(blocker / "deps.json")]
        )

        assert result.exit_code != 0
        assert "failed to write" in result.output.lower()
