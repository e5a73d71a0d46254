"""``chatwire`` entry point: global options and subcommand registration."""

from __future__ import annotations

from typing import Any

import click

from chatwire import __version__
from chatwire.commands import register_commands
from chatwire.commands._base import ChatwireGroup
from chatwire.commands._context import AppContext
from chatwire.config.settings import ChatwireSettings

_EXAMPLES = """\
  chatwire schemas
  chatwire schemas MESSAGE_CREATE
  chatwire decode MESSAGE_CREATE event.json
  cat message.json | chatwire encode Message
  chatwire --json check --strict Message message.json
  chatwire -c strict.toml decode Message message.json"""


@click.group(cls=ChatwireGroup, invoke_without_command=True, examples=_EXAMPLES)
@click.version_option(version=__version__, prog_name="chatwire")
@click.option("--json", "json_output", is_flag=True, help="Emit results as JSON documents.")
@click.option("-q", "--quiet", is_flag=True, help="Print only what scripts need.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and timing spans.")
@click.option("--log-json", is_flag=True, help="Write log records to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this TOML file instead of discovering chatwire.toml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: Any) -> None:
    """Decode, validate and re-encode chat platform payloads."""
    ctx.obj = AppContext(ChatwireSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
