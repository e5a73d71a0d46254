"""Command: report every schema violation in a payload."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

import click

from chatwire.commands._base import ChatwireCommand

if TYPE_CHECKING:
    from chatwire.commands._context import AppContext


@click.command(
    cls=ChatwireCommand,
    examples="""\
  chatwire check Message message.json
  chatwire check --strict MESSAGE_CREATE < event.json
  chatwire -q check Message message.json
  chatwire --json check User user.json""",
)
@click.argument("name")
@click.argument("payload", type=click.File("rb"), default="-")
@click.option("--strict", is_flag=True, help="Exit with status 1 when the payload is invalid.")
@click.pass_obj
def check(app: AppContext, name: str, payload: BinaryIO, strict: bool) -> None:
    """Validate PAYLOAD against schema or event NAME."""
    app.emit(app.service.check(name, payload.read(), strict=strict))
