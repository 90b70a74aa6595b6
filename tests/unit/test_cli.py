"""Test the command line interface."""

import pytest
from click.testing import CliRunner

from media_matcher.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def unconfigured_config_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text('llm:\n  provider: "none"\n')
    return config_file


def test_init_creates_config(runner, tmp_path):
    """Test that init writes a loadable configuration file."""
    output = tmp_path / "config" / "config.yaml"

    result = runner.invoke(cli, ["init", "--output", str(output)])

    assert result.exit_code == 0
    assert output.exists()
    content = output.read_text()
    assert "llm:" in content
    assert "matching:" in content


def test_init_keeps_existing_file_when_declined(runner, tmp_path):
    output = tmp_path / "config.yaml"
    output.write_text("existing: true\n")

    result = runner.invoke(cli, ["init", "--output", str(output)], input="n\n")

    assert result.exit_code == 0
    assert output.read_text() == "existing: true\n"


def test_status_shows_provider(runner, temp_config_file):
    result = runner.invoke(cli, ["--config", str(temp_config_file), "status"])

    assert result.exit_code == 0
    assert "LLM Media Matcher Status" in result.output
    assert "LLM Provider: openai" in result.output
    assert "LLM Configured: ✓" in result.output
    assert "LLM Model: gpt-4o-mini" in result.output
    assert "Channel Batch Size: 30" in result.output


def test_status_unconfigured(runner, unconfigured_config_file):
    result = runner.invoke(cli, ["--config", str(unconfigured_config_file), "status"])

    assert result.exit_code == 0
    assert "LLM Provider: none" in result.output
    assert "LLM Configured: ✗" in result.output


def test_invalid_config_exits(runner, tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text('llm:\n  provider: "gemini"\n')

    result = runner.invoke(cli, ["--config", str(config_file), "status"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["translate", "Der Untergang", "--lang", "de"],
        ["identify", "Das Boot", "--year", "1981", "--type", "movie"],
    ],
)
def test_commands_require_configured_provider(runner, unconfigured_config_file, args):
    result = runner.invoke(cli, ["--config", str(unconfigured_config_file)] + args)

    assert result.exit_code == 1
    assert "is not configured" in result.output


def test_match_channels_requires_configured_provider(runner, unconfigured_config_file, tmp_path):
    epg_file = tmp_path / "epg.txt"
    epg_file.write_text("rtl2.de\n")
    source_file = tmp_path / "sources.txt"
    source_file.write_text("RTL Zwei HD\n")

    result = runner.invoke(
        cli,
        ["--config", str(unconfigured_config_file), "match-channels", str(epg_file), str(source_file)],
    )

    assert result.exit_code == 1
    assert "is not configured" in result.output


def test_test_connection_reports_unconfigured(runner, unconfigured_config_file):
    result = runner.invoke(cli, ["--config", str(unconfigured_config_file), "test-connection"])

    assert result.exit_code == 1
    assert '"success": false' in result.output
    assert '"error": "LLM not configured"' in result.output


def test_identify_type_choices(runner, temp_config_file):
    result = runner.invoke(
        cli, ["--config", str(temp_config_file), "identify", "Dark", "--type", "documentary"]
    )

    assert result.exit_code == 2


def test_validate_accepts_valid_file(runner, temp_config_file):
    result = runner.invoke(cli, ["validate", str(temp_config_file)])

    assert result.exit_code == 0
    assert "is valid" in result.output


def test_validate_rejects_invalid_file(runner, tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("matching:\n  channel_batch_size: 0\n")

    result = runner.invoke(cli, ["validate", str(config_file)])

    assert result.exit_code == 1
    assert "Validation failed" in result.output
