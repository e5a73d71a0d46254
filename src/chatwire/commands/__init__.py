"""Subcommands of the ``chatwire`` group.

Command modules are imported inside :func:`register_commands` so that
importing the package stays cheap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from chatwire.commands.check import check
    from chatwire.commands.decode import decode
    from chatwire.commands.encode import encode
    from chatwire.commands.schemas import schemas

    for command in (decode, encode, check, schemas):
        cli.add_command(command)
