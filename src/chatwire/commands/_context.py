"""AppContext — the object behind ``@click.pass_obj``.

The root group builds one per invocation. It configures logging, turns on
telemetry for ``--verbose``, and owns the stdout/stderr and exit-code
rules for every command.
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

import click

from chatwire.config.logging import configure_logging
from chatwire.output.formatters import format_result
from chatwire.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from chatwire.config.settings import ChatwireSettings
    from chatwire.services.codec import CodecService
    from chatwire.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: ChatwireSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @cached_property
    def service(self) -> CodecService:
        from chatwire.services.codec import CodecService

        return CodecService.from_settings(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits 1.

        Warnings from a successful result go to stderr after the output,
        except in JSON mode where they are already part of the document.
        """
        output = self.settings.output_settings()
        text = format_result(result, settings=output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
