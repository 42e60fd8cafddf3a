"""Tests for the is-agentic-tui command line."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from is_agentic_tui import __version__
from is_agentic_tui.cli import cli
from is_agentic_tui.process import PsAncestorLookup, PsutilAncestorLookup


@pytest.fixture(autouse=True)
def no_ancestors(ancestors):
    yield ancestors


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCheck:

    def test_detected(self, runner, monkeypatch):
        monkeypatch.setenv("CLAUDECODE", "1")
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert result.output.strip() == "claude-code"

    def test_quiet(self, runner, monkeypatch):
        monkeypatch.setenv("GEMINI_CLI", "1")
        result = runner.invoke(cli, ["check", "--quiet"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_not_detected(self, runner):
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 1
        assert result.output == ""


class TestWhich:

    def test_json(self, runner, monkeypatch):
        monkeypatch.setenv("CODEX_SANDBOX", "seatbelt")
        result = runner.invoke(cli, ["which", "--output", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["ok"] is True
        assert payload["result"] == {
            "tool": "codex",
            "confidence": "high",
            "signals": ["CODEX_SANDBOX=seatbelt"],
        }
        assert payload["meta"]["tool"] == "is-agentic-tui"
        assert payload["meta"]["version"] == __version__
        assert payload["meta"]["duration_ms"] >= 0

    def test_json_nothing_detected(self, runner):
        result = runner.invoke(cli, ["which", "-o", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["result"] is None

    def test_text(self, runner, monkeypatch):
        monkeypatch.setenv("CURSOR_INVOKED_AS", "cursor-agent")
        result = runner.invoke(cli, ["which", "--output", "text"])
        assert result.exit_code == 0
        assert "Cursor Agent (cursor-agent)" in result.output
        assert "medium" in result.output
        assert "CURSOR_INVOKED_AS=cursor-agent" in result.output

    def test_text_nothing_detected(self, runner):
        result = runner.invoke(cli, ["which", "--output", "text"])
        assert "(none)" in result.output

    def test_auto_on_tty_is_text(self, runner, monkeypatch):
        monkeypatch.setenv("OPENCODE", "1")
        with patch("is_agentic_tui.output.is_tty", return_value=True):
            result = runner.invoke(cli, ["which"])
        assert "OpenCode (opencode)" in result.output

    def test_auto_off_tty_is_json(self, runner, monkeypatch):
        monkeypatch.setenv("OPENCODE", "1")
        with patch("is_agentic_tui.output.is_tty", return_value=False):
            result = runner.invoke(cli, ["which"])
        assert json.loads(result.output)["result"]["tool"] == "opencode"

    def test_env_output_override(self, runner, monkeypatch):
        monkeypatch.setenv("OPENCODE", "1")
        monkeypatch.setenv("IS_AGENTIC_TUI_OUTPUT", "text")
        with patch("is_agentic_tui.output.is_tty", return_value=False):
            result = runner.invoke(cli, ["which"])
        assert "OpenCode" in result.output
        assert not result.output.lstrip().startswith("{")

    def test_invalid_output_mode(self, runner):
        result = runner.invoke(cli, ["which", "--output", "yaml"])
        assert result.exit_code == 2


class TestIs:

    def test_match(self, runner, monkeypatch):
        monkeypatch.setenv("CLINE_ACTIVE", "true")
        assert runner.invoke(cli, ["is", "cline"]).exit_code == 0

    def test_other_tool(self, runner, monkeypatch):
        monkeypatch.setenv("CLINE_ACTIVE", "true")
        assert runner.invoke(cli, ["is", "aider"]).exit_code == 1

    def test_shared_marker(self, runner, monkeypatch, no_ancestors):
        monkeypatch.setenv("Q_TERM", "1.0.0")
        no_ancestors.return_value = ["node", "copilot"]
        assert runner.invoke(cli, ["is", "github-copilot-cli"]).exit_code == 0
        assert runner.invoke(cli, ["is", "kiro-cli"]).exit_code == 1

    def test_unknown_tool_rejected_by_parser(self, runner):
        result = runner.invoke(cli, ["is", "windsurf"])
        assert result.exit_code == 2


class TestTools:

    def test_lists_registry_order(self, runner):
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 9
        assert "claude-code" in lines[0]
        assert "github-copilot-cli" in lines[6]
        assert "(before: kiro-cli)" in lines[6]
        assert "kiro-cli" in lines[7]


class TestAncestors:

    def test_prints_names(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch.object(PsutilAncestorLookup, "lookup", return_value=["node", "zsh"]) as lookup:
            result = runner.invoke(cli, ["ancestors", "--max-depth", "4"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["node", "zsh"]
        lookup.assert_called_once_with(4)

    def test_backend_option(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with patch.object(PsAncestorLookup, "lookup", return_value=[]):
            result = runner.invoke(cli, ["ancestors", "--backend", "ps"])
        assert result.exit_code == 0
        assert result.output.strip() == "(none)"

    def test_unknown_backend(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["ancestors", "--backend", "wmic"])
        assert result.exit_code == 2
        assert "E1002" in result.output


def test_verbose_flag(runner):
    with patch("logging.basicConfig") as basic_config:
        result = runner.invoke(cli, ["--verbose", "check", "--quiet"])
    assert result.exit_code == 1
    basic_config.assert_called_once()
