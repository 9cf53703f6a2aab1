import json
import pytest
from typer.testing import CliRunner

from ecogen_core import config as config_module
from ecogen_core.config import ConfigManager, reset_config


@pytest.fixture(autouse=True)
def test_config(tmp_path):
    """Point the global config manager at a temporary file."""
    reset_config()
    config_module._config_instance = ConfigManager(tmp_path / "config.json")

    yield config_module._config_instance

    reset_config()


from cli.main import app

runner = CliRunner()


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "PM2 ecosystem generator" in result.stdout


def test_cli_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "ecogen" in result.stdout


def test_info():
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "Platform" in result.stdout


def test_platform_override():
    result = runner.invoke(app, ["platform", "--os", "Linux", "--arch", "aarch64"])
    assert result.exit_code == 0
    assert "target/aarch64-unknown-linux-gnu/release" in result.stdout


def test_layouts():
    result = runner.invoke(app, ["layouts"])
    assert result.exit_code == 0
    assert "development" in result.stdout
    assert "/opt/api0" in result.stdout


def test_show():
    result = runner.invoke(app, ["show", "--layout", "standard"])
    assert result.exit_code == 0
    assert "landing" in result.stdout


def test_generate_to_file(tmp_path):
    output = tmp_path / "ecosystem.json"
    result = runner.invoke(app, [
        "generate", "--layout", "development", "--os", "darwin", "--arch", "arm64",
        "--output", str(output),
    ])
    assert result.exit_code == 0
    data = json.loads(output.read_text())
    store = next(a for a in data["apps"] if a["name"] == "store")
    assert store["script"] == "store/target/aarch64-apple-darwin/release/store"


def test_generate_js_to_file(tmp_path):
    output = tmp_path / "ecosystem.config.js"
    result = runner.invoke(app, ["generate", "-l", "shared", "-f", "js", "-o", str(output)])
    assert result.exit_code == 0
    assert "module.exports" in output.read_text()


def test_generate_unknown_layout():
    result = runner.invoke(app, ["generate", "--layout", "cluster"])
    assert result.exit_code == 1
    assert "Unknown layout" in result.stdout


def test_generate_relative_root():
    result = runner.invoke(app, ["generate", "--layout", "standard", "--root", "opt/api0"])
    assert result.exit_code == 1
    assert "Invalid root" in result.stdout


def test_config_set_and_show(test_config):
    result = runner.invoke(app, ["config", "set", "default_layout", "shared"])
    assert result.exit_code == 0
    assert test_config.config_path.exists()

    result = runner.invoke(app, ["config", "show"])
    assert "default_layout: shared" in result.stdout


def test_config_set_unknown_key():
    result = runner.invoke(app, ["config", "set", "colour", "blue"])
    assert result.exit_code == 1


def test_config_set_unknown_layout(test_config):
    result = runner.invoke(app, ["config", "set", "default_layout", "cluster"])
    assert result.exit_code == 1
    assert "default_layout" in result.stdout
    assert not test_config.config_path.exists()


def test_config_set_bad_memory(test_config):
    result = runner.invoke(app, ["config", "set", "max_memory_restart", "lots"])
    assert result.exit_code == 1
    assert "max_memory_restart" in result.stdout
    assert not test_config.config_path.exists()
