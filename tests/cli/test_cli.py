"""Tests for the command-line interface.

Tests cover:
- Text, URL, account and tag commands
- JSON output
- Error exit codes for rejected input
- Status, stats and version commands
"""

import json

from typer.testing import CliRunner

from shadowban_system import __version__
from shadowban_system.cli.main import app

runner = CliRunner()


class TestCheckCommands:
    def test_text(self) -> None:
        result = runner.invoke(app, ["text", "Follow back #followback", "--platform", "x"])
        assert result.exit_code == 0
        assert "Recommendations" in result.stdout
        assert "#followback" in result.stdout

    def test_text_json(self) -> None:
        result = runner.invoke(app, ["text", "hello world", "-p", "reddit", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["platform"] == "reddit"
        assert len(payload["agent_results"]) == 5
        assert 0 <= payload["probability"] <= 100

    def test_text_with_link(self) -> None:
        result = runner.invoke(app, ["text", "read this", "-l", "https://bit.ly/abc", "--json"])
        assert result.exit_code == 0
        detection = json.loads(result.stdout)["agent_results"][3]
        assert "link_shorteners" in detection["flags"]

    def test_empty_text_fails(self) -> None:
        result = runner.invoke(app, ["text", "   "])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_unknown_platform_fails(self) -> None:
        result = runner.invoke(app, ["text", "hello", "-p", "myspace"])
        assert result.exit_code == 1

    def test_url(self) -> None:
        result = runner.invoke(app, ["url", "https://reddit.com/r/python/comments/abc123/title"])
        assert result.exit_code == 0
        assert "Shadow-ban risk" in result.stdout

    def test_bad_url_fails(self) -> None:
        result = runner.invoke(app, ["url", "https://example.org/post/1"])
        assert result.exit_code == 1

    def test_account(self) -> None:
        result = runner.invoke(app, ["account", "@jack", "-p", "twitter", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["kind"] == "account"


class TestTagCommand:
    def test_tags(self) -> None:
        result = runner.invoke(app, ["tags", "#followback", "python", "-p", "twitter"])
        assert result.exit_code == 0
        assert "AVOID" in result.stdout
        assert "SAFE" in result.stdout

    def test_tags_json(self) -> None:
        result = runner.invoke(app, ["tags", "#followback", "--json"])
        payload = json.loads(result.stdout)
        assert payload["tags"][0]["verdict"] == "AVOID"


class TestInfoCommands:
    def test_status(self) -> None:
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "All factors" in result.stdout

    def test_stats(self) -> None:
        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "hashtags" in result.stdout

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
