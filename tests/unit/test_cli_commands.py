"""Unit tests for the CLI — command registration and basic behavior."""

from __future__ import annotations

import httpx
import pytest
import typer
from typer.testing import CliRunner

from tinyspeck.cli.app import app
from tinyspeck.cli.commands.send import parse_arguments

runner = CliRunner()


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("listen", "send", "digest", "rtm"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["listen", "send", "digest", "rtm"])
    def test_command_help(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0


class TestDigestCommand:
    def test_lists_topics(self):
        result = runner.invoke(app, ["digest", "command=%2Fdeploy&text=prod"])
        assert result.exit_code == 0
        assert "/deploy" in result.output
        assert "Topics" in result.output

    def test_categories_flag(self):
        result = runner.invoke(app, ["digest", "--categories", "command=%2Fdeploy"])
        assert result.exit_code == 0
        assert "slash_command" in result.output

    def test_reads_stdin(self):
        result = runner.invoke(app, ["digest"], input='{"event": {"type": "reaction_added"}}')
        assert result.exit_code == 0
        assert "reaction_added" in result.output

    def test_malformed_payload_exits_nonzero(self):
        result = runner.invoke(app, ["digest", '{"payload": "{oops"}'])
        assert result.exit_code == 1
        assert "Malformed payload" in result.output


class TestSendCommand:
    def test_parse_arguments(self):
        assert parse_arguments(["channel=C1", "text=a=b"]) == {"channel": "C1", "text": "a=b"}

    def test_parse_arguments_rejects_bare_words(self):
        with pytest.raises(typer.BadParameter):
            parse_arguments(["oops"])

    def test_send_prints_result(self, monkeypatch):
        def fake_post(self, url, data=None):
            request = httpx.Request("POST", url)
            return httpx.Response(200, json={"ok": True, "args": data}, request=request)

        monkeypatch.setattr(httpx.Client, "post", fake_post)
        result = runner.invoke(app, ["send", "api.test", "foo=bar", "--token", "xoxb-1"])

        assert result.exit_code == 0
        assert '"foo": "bar"' in result.output

    def test_send_failure_exits_nonzero(self, monkeypatch):
        def fake_post(self, url, data=None):
            request = httpx.Request("POST", url)
            return httpx.Response(200, json={"ok": False, "error": "invalid_auth"}, request=request)

        monkeypatch.setattr(httpx.Client, "post", fake_post)
        result = runner.invoke(app, ["send", "auth.test"])
        assert result.exit_code == 1
        assert "invalid_auth" in result.output
