"""Command: decode a payload and report the state of every field."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from chatwire.commands._base import ChatwireCommand

if TYPE_CHECKING:
    from chatwire.commands._context import AppContext


@click.command(
    cls=ChatwireCommand,
    examples="""\
  chatwire decode Message message.json
  chatwire decode MESSAGE_CREATE < event.json
  chatwire --json decode User user.json
  curl -s $URL | chatwire decode Message""",
)
@click.argument("name")
@click.argument("payload", type=click.File("rb"), default="-")
@click.pass_obj
def decode(app: AppContext, name: str, payload: BinaryIO) -> None:
    """Decode PAYLOAD (default: stdin) against schema or event NAME."""
    app.emit(app.service.decode(name, payload.read()))
