"""Shared pytest fixtures and payload builders for chatwire tests."""

from __future__ import annotations

import copy
import json
import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from chatwire.services.telemetry import disable_telemetry

MESSAGE_PAYLOAD: dict[str, Any] = {
    "id": "334385199974967042",
    "channel_id": "290926798999357250",
    "guild_id": "290926798626357250",
    "author": {
        "id": "53908232506183680",
        "username": "Mason",
        "discriminator": "9999",
        "avatar": "a_bab14f271d565501444b2ca3be944b25",
        "public_flags": 0,
    },
    "member": {
        "roles": [],
        "joined_at": "2017-03-13T19:19:14.040000+00:00",
        "deaf": False,
        "mute": False,
    },
    "content": "Supa Hot",
    "timestamp": "2017-07-11T17:27:07.299000+00:00",
    "edited_timestamp": None,
    "tts": False,
    "mention_everyone": False,
    "mentions": [],
    "mention_roles": [],
    "attachments": [],
    "embeds": [],
    "reactions": [
        {"count": 1, "me": False, "emoji": {"id": None, "name": "\N{FIRE}"}},
    ],
    "nonce": "1234567890",
    "pinned": False,
    "type": 0,
}


@pytest.fixture
def message_payload() -> dict[str, Any]:
    """A fresh, mutable copy of a valid MESSAGE_CREATE payload."""
    return copy.deepcopy(MESSAGE_PAYLOAD)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def message_file(tmp_path: Path) -> Path:
    """A valid message payload written to disk."""
    path = tmp_path / "message.json"
    path.write_text(json.dumps(MESSAGE_PAYLOAD), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings discovery away from the developer's real environment."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CHATWIRE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Undo telemetry and logging changes made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    disable_telemetry()
    root.handlers = original_handlers
    root.setLevel(original_level)
    logging.getLogger("chatwire").setLevel(logging.NOTSET)
