"""Command: re-encode a payload into its canonical wire form."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from chatwire.commands._base import ChatwireCommand

if TYPE_CHECKING:
    from chatwire.commands._context import AppContext


@click.command(
    cls=ChatwireCommand,
    examples="""\
  chatwire encode Message message.json
  chatwire -q encode MESSAGE_CREATE < event.json > canonical.json
  chatwire -c strict.toml encode User user.json""",
)
@click.argument("name")
@click.argument("payload", type=click.File("rb"), default="-")
@click.pass_obj
def encode(app: AppContext, name: str, payload: BinaryIO) -> None:
    """Decode PAYLOAD and print it re-encoded in schema order.

    Identifiers come out as strings and timestamps with microsecond
    precision. Unknown keys follow the schema fields.
    """
    app.emit(app.service.encode(name, payload.read()))
