"""Smoke tests for the command-line shell."""
import pytest
from typer.testing import CliRunner

from creatorai.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the store at a temp file and drop any real API key."""
    monkeypatch.setenv("CREATORAI_STORE_PATH", str(tmp_path / "store.json"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


class TestCLI:
    """Tests for CLI commands using the simulated assistant."""

    def test_ask_simulated(self):
        result = runner.invoke(app, ["ask", "help with a title", "--simulated"])

        assert result.exit_code == 0
        assert "Strong titles" in result.output

    def test_ask_without_api_key(self):
        result = runner.invoke(app, ["ask", "hello"])

        assert result.exit_code == 1
        assert "GEMINI_API_KEY" in result.output

    def test_history_roundtrip(self):
        runner.invoke(app, ["ask", "hello", "--simulated"])

        shown = runner.invoke(app, ["history"])
        assert shown.exit_code == 0
        assert "assistant" in shown.output

        cleared = runner.invoke(app, ["clear-history", "--yes"])
        assert cleared.exit_code == 0

        empty = runner.invoke(app, ["history"])
        assert "No stored history" in empty.output

    def test_ping_simulated(self):
        result = runner.invoke(app, ["ping", "--simulated"])

        assert result.exit_code == 0
        assert "simulated: OK" in result.output

    def test_theme_toggle(self):
        assert "light" in runner.invoke(app, ["theme"]).output
        assert "dark" in runner.invoke(app, ["theme", "--toggle"]).output
        assert "dark" in runner.invoke(app, ["theme"]).output

    def test_chat_exit(self):
        result = runner.invoke(app, ["chat", "--simulated"], input="hello\n/stats\nexit\n")

        assert result.exit_code == 0
        assert "Hi there" in result.output
        assert "Total Requests" in result.output
