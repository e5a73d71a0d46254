"""Tests for the encode CLI command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from chatwire.cli import cli

EVENT = {"guild_id": "3", "message_id": 2, "channel_id": "1", "emoji_hint": "x"}


class TestEncodeCommand:
    def test_human_output_is_payload(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["encode", "MESSAGE_REACTION_REMOVE_ALL"], input=json.dumps(EVENT)
        )
        assert result.exit_code == 0
        assert result.stdout == (
            "{\n"
            '  "channel_id": "1",\n'
            '  "message_id": "2",\n'
            '  "guild_id": "3",\n'
            '  "emoji_hint": "x"\n'
            "}\n"
        )

    def test_quiet_is_compact(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "encode", "MESSAGE_REACTION_REMOVE_ALL"], input=json.dumps(EVENT)
        )
        assert result.exit_code == 0
        assert result.stdout == (
            '{"channel_id":"1","message_id":"2","guild_id":"3","emoji_hint":"x"}\n'
        )

    def test_round_trip_is_stable(
        self, cli_runner: CliRunner, message_payload: dict[str, Any]
    ) -> None:
        payload = json.dumps(message_payload)
        result = cli_runner.invoke(cli, ["-q", "encode", "Message"], input=payload)
        assert result.exit_code == 0
        assert json.loads(result.stdout) == message_payload

    def test_config_drops_unknown_fields(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "strict.toml"
        config.write_text("[codec]\npreserve_unknown_fields = false\n")
        result = cli_runner.invoke(
            cli,
            ["-q", "-c", str(config), "encode", "MESSAGE_REACTION_REMOVE_ALL"],
            input=json.dumps(EVENT),
        )
        assert result.exit_code == 0
        assert "emoji_hint" not in result.stdout

    def test_indent_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[output]\nindent = 0\n")
        event = '{"channel_id": "1", "message_id": "2"}'
        result = cli_runner.invoke(cli, ["encode", "MESSAGE_REACTION_REMOVE_ALL"], input=event)
        assert result.exit_code == 0
        assert result.stdout == '{"channel_id": "1", "message_id": "2"}\n'

    def test_env_disables_numeric_ids(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CHATWIRE_CODEC__ALLOW_NUMERIC_IDS", "false")
        result = cli_runner.invoke(
            cli, ["--json", "encode", "MESSAGE_REACTION_REMOVE_ALL"], input=json.dumps(EVENT)
        )
        assert result.exit_code == 1
        issues = json.loads(result.stderr)["error"]["detail"]["issues"]
        assert issues[0]["path"] == "message_id"
