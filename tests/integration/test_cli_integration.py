"""CLI integration tests."""

import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _run_cli(*args):
    return subprocess.run(
        [sys.executable, "-m", "media_matcher.cli", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )


@pytest.mark.integration
def test_cli_help():
    """Test CLI help command."""
    result = _run_cli("--help")

    assert result.returncode == 0
    assert "LLM Media Matcher" in result.stdout
    for command in ("init", "status", "translate", "identify-batch", "match-channels", "models"):
        assert command in result.stdout


@pytest.mark.integration
def test_cli_init_command(tmp_path):
    """Test CLI init command."""
    config_path = tmp_path / "test_config.yaml"

    result = _run_cli("init", "--output", str(config_path))

    assert result.returncode == 0
    assert config_path.exists()

    content = config_path.read_text()
    assert "llm:" in content
    assert "ollama:" in content
    assert "matching:" in content


@pytest.mark.integration
def test_cli_status_command(integration_config):
    """Test CLI status command."""
    result = _run_cli("--config", str(integration_config), "status")

    assert result.returncode == 0
    assert "LLM Media Matcher Status" in result.stdout
    assert "LLM Provider: openai" in result.stdout
    assert "Identification Batch Size: 2" in result.stdout


@pytest.mark.integration
def test_cli_validate_command(integration_config):
    """Test CLI validate command."""
    result = _run_cli("validate", str(integration_config))

    assert result.returncode == 0
    assert "is valid" in result.stdout
