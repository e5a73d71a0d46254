"""Tests for output mode dispatch."""

from __future__ import annotations

import json

from chatwire.output.formatters import OutputSettings, format_result
from chatwire.services.result import ServiceError, ServiceResult

OK = ServiceResult(ok=True, op="encode", data={"schema": "User", "payload": {"id": "1"}})
FAILED = ServiceResult(
    ok=False,
    op="decode",
    error=ServiceError(code="UNKNOWN_SCHEMA", message="Unknown schema or event: X"),
)


class TestJsonMode:
    def test_dumps_result(self) -> None:
        parsed = json.loads(format_result(OK, json_output=True))
        assert parsed["ok"] is True
        assert parsed["data"]["payload"] == {"id": "1"}

    def test_indent(self) -> None:
        pretty = format_result(OK, settings=OutputSettings(json_output=True, indent=4))
        assert '\n    "ok": true' in pretty

    def test_compact_when_indent_zero(self) -> None:
        compact = format_result(OK, settings=OutputSettings(json_output=True, indent=0))
        assert "\n" not in compact

    def test_json_beats_quiet(self) -> None:
        output = format_result(OK, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "encode"


class TestQuietMode:
    def test_error_line(self) -> None:
        output = format_result(FAILED, settings=OutputSettings(quiet=True))
        assert output == "ERROR: decode: Unknown schema or event: X"

    def test_encode_is_compact_payload(self) -> None:
        output = format_result(OK, settings=OutputSettings(quiet=True))
        assert output == '{"id":"1"}'

    def test_default_ok_line(self) -> None:
        result = ServiceResult(ok=True, op="decode", data={"fields": []})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: decode"


class TestHumanMode:
    def test_default_is_rich(self) -> None:
        output = format_result(FAILED)
        assert output.startswith("ERROR  decode: Unknown schema or event: X")
