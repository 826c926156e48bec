from skills_lock import __version__
from click.testing import CliRunner

from skills_lock.cli.main import cli


def test_version():
    assert __version__ == "0.1.0"


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "A lockfile for AI agent skills" in result.output
    for command in ("install", "add", "remove", "update", "check", "diff"):
        assert command in result.output


def test_cli_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
