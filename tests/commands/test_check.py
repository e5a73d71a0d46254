"""Tests for the check CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from chatwire.cli import cli

BAD_USER = '{"id": 5.5, "username": "a", "discriminator": "0001", "avatar": null, "bot": "no"}'


class TestCheckCommand:
    def test_valid_payload(self, cli_runner: CliRunner, message_file: Path) -> None:
        result = cli_runner.invoke(cli, ["check", "Message", str(message_file)])
        assert result.exit_code == 0
        assert "valid: yes" in result.stdout

    def test_violations_are_reported_not_fatal(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "User"], input=BAD_USER)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["data"]["valid"] is False
        assert data["data"]["count"] == 2
        assert [i["path"] for i in data["data"]["issues"]] == ["id", "bot"]

    def test_strict_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "--strict", "User"], input=BAD_USER)
        assert result.exit_code == 1
        assert result.stdout == ""
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "SCHEMA_VIOLATION"
        assert data["error"]["detail"]["count"] == 2

    def test_strict_valid_exits_0(self, cli_runner: CliRunner, message_file: Path) -> None:
        result = cli_runner.invoke(cli, ["check", "--strict", "MESSAGE_CREATE", str(message_file)])
        assert result.exit_code == 0

    def test_quiet_lists_issue_paths(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "check", "User"], input=BAD_USER)
        assert result.stdout.splitlines() == [
            "id: invalid_identifier_format",
            "bot: type_mismatch",
        ]

    def test_verbose_includes_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "-v", "check", "User"], input=BAD_USER)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["meta"]["telemetry"]["name"] == "CodecService.check"
