"""Command: list registered schemas or describe one."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chatwire.commands._base import ChatwireCommand

if TYPE_CHECKING:
    from chatwire.commands._context import AppContext


@click.command(
    cls=ChatwireCommand,
    examples="""\
  chatwire schemas
  chatwire -v schemas
  chatwire schemas Message
  chatwire schemas MESSAGE_REACTION_REMOVE_ALL
  chatwire --json schemas Message""",
)
@click.argument("name", required=False)
@click.pass_obj
def schemas(app: AppContext, name: str | None) -> None:
    """List every schema, or describe schema or event NAME."""
    if name is None:
        app.emit(app.service.list_schemas())
    else:
        app.emit(app.service.describe_schema(name))
