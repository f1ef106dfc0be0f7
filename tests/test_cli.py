"""
Tests for the gistfs command-line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from conftest import GIST_ID, FakeFetcher
from gistfs import cli, decorators
from gistfs.cli import app
from gistfs.client import GistNotFoundError


runner = CliRunner()


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    """Keep the user's configuration out of the tests."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return config_dir


@pytest.fixture
def cli_fetcher(monkeypatch):
    """Route every CLI fetch to an in-memory gist."""
    fetcher = FakeFetcher({"a.txt": b"hi", "b.txt": b"bye", "notes.md": b"# Notes\n"})
    monkeypatch.setattr("gistfs.config.GitHubConfig.create_client", lambda self: fetcher)
    return fetcher


class TestLs:

    def test_ls(self, cli_fetcher):
        result = runner.invoke(app, ["ls", GIST_ID])

        assert result.exit_code == 0
        assert result.stdout.split() == ["a.txt", "b.txt", "notes.md"]

    def test_ls_paged(self, cli_fetcher):
        result = runner.invoke(app, ["ls", GIST_ID, "--page-size", "1"])

        assert result.exit_code == 0
        assert result.stdout.split() == ["a.txt", "b.txt", "notes.md"]

    def test_ls_long(self, cli_fetcher):
        result = runner.invoke(app, ["ls", GIST_ID, "--long"])

        assert result.exit_code == 0
        assert "notes.md" in result.stdout
        assert "-r--r--r--" in result.stdout

    def test_ls_timeout_forwarded(self, cli_fetcher):
        runner.invoke(app, ["ls", GIST_ID, "--timeout", "3"])
        assert cli_fetcher.calls == [(GIST_ID, 3.0)]

    def test_ls_fetch_error(self, cli_fetcher):
        cli_fetcher.error = GistNotFoundError("Gist not found", GIST_ID, 404)

        result = runner.invoke(app, ["ls", GIST_ID])

        assert result.exit_code == 1


class TestCat:

    def test_cat(self, cli_fetcher):
        result = runner.invoke(app, ["cat", GIST_ID, "notes.md"])

        assert result.exit_code == 0
        assert result.stdout == "# Notes\n"

    def test_cat_missing(self, cli_fetcher):
        result = runner.invoke(app, ["cat", GIST_ID, "missing.txt"])
        assert result.exit_code == 1

    def test_cat_root(self, cli_fetcher):
        result = runner.invoke(app, ["cat", GIST_ID, "."])
        assert result.exit_code == 1


class TestStat:

    def test_stat_file(self, cli_fetcher):
        result = runner.invoke(app, ["stat", GIST_ID, "b.txt"])

        assert result.exit_code == 0
        assert "b.txt" in result.stdout
        assert "Size:     3" in result.stdout
        assert "file" in result.stdout

    def test_stat_root(self, cli_fetcher):
        result = runner.invoke(app, ["stat", GIST_ID])

        assert result.exit_code == 0
        assert "directory" in result.stdout


class TestConfigCommand:

    def test_show_defaults(self):
        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        assert "api.github.com" in result.stdout
        assert "not set" in result.stdout

    def test_set_values(self, config_home):
        result = runner.invoke(app, ["config", "--server-port", "9001", "--github-token", "abcd1234efgh"])

        assert result.exit_code == 0
        saved = json.loads((config_home / "gistfs" / "config.json").read_text())
        assert saved["server"]["port"] == 9001
        assert saved["github"]["token"] == "abcd1234efgh"
        assert "abcd1234efgh" not in result.stdout

    def test_init(self, config_home):
        result = runner.invoke(app, ["config", "--init"])

        assert result.exit_code == 0
        assert (config_home / "gistfs" / "config.json").exists()

    def test_set_color(self, config_home):
        result = runner.invoke(app, ["config", "--no-cli-color"])

        assert result.exit_code == 0
        saved = json.loads((config_home / "gistfs" / "config.json").read_text())
        assert saved["cli"]["color"] is False
        assert "CLI color: False" in result.stdout


class TestColor:

    def test_color_disabled_from_config(self, cli_fetcher):
        runner.invoke(app, ["config", "--no-cli-color"])

        result = runner.invoke(app, ["ls", GIST_ID])

        assert result.exit_code == 0
        assert cli.console.no_color is True
        assert cli.log_console.no_color is True
        assert decorators.console.no_color is True

    def test_color_enabled_by_default(self, cli_fetcher):
        result = runner.invoke(app, ["ls", GIST_ID])

        assert result.exit_code == 0
        assert cli.console.no_color is False
        assert decorators.console.no_color is False
