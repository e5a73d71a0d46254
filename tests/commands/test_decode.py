"""Tests for the decode CLI command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from chatwire.cli import cli


class TestDecodeCommand:
    def test_from_file(self, cli_runner: CliRunner, message_file: Path) -> None:
        result = cli_runner.invoke(cli, ["decode", "Message", str(message_file)])
        assert result.exit_code == 0
        assert "OK  decode" in result.stdout
        assert "edited_timestamp" in result.stdout

    def test_from_stdin(self, cli_runner: CliRunner, message_payload: dict[str, Any]) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "decode", "MESSAGE_CREATE"], input=json.dumps(message_payload)
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["schema"] == "Message"
        states = {row["wire_name"]: row["state"] for row in data["data"]["fields"]}
        assert states["edited_timestamp"] == "null"
        assert states["referenced_message"] == "absent"

    def test_schema_violation_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "decode", "User"], input='{"id": "x"}')
        assert result.exit_code == 1
        assert result.stdout == ""
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "SCHEMA_VIOLATION"
        paths = [issue["path"] for issue in data["error"]["detail"]["issues"]]
        assert paths == ["id", "username", "discriminator", "avatar"]

    def test_human_error_lists_issues(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["decode", "User"], input="{}")
        assert result.exit_code == 1
        assert "ERROR  decode: 4 schema violations in User payload" in result.stderr
        assert "missing_required_field" in result.stderr

    def test_invalid_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "decode", "User"], input="{nope")
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_JSON"

    def test_non_utf8_input(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "decode", "User"], input=b"\xff{")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_JSON"

    def test_unknown_schema(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "decode", "GUILD_CREATE"], input="{}")
        assert result.exit_code == 1
        assert result.stderr.strip() == "ERROR: decode: Unknown schema or event: GUILD_CREATE"

    def test_deprecation_warning_on_stderr(
        self, cli_runner: CliRunner, message_payload: dict[str, Any]
    ) -> None:
        message_payload["stickers"] = []
        result = cli_runner.invoke(
            cli, ["-q", "decode", "Message"], input=json.dumps(message_payload)
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "OK: decode"
        assert "WARNING: Deprecated field present: stickers" in result.stderr

    def test_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["decode", "User", str(tmp_path / "none.json")])
        assert result.exit_code == 2
