"""Rich/JSON output dispatch.

The CLI renders a ServiceResult for humans (Rich tables and colors),
for scripts (``--quiet``) or for machines (``--json``). This module
picks the mode; :mod:`chatwire.output.renderers` does the drawing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from chatwire.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from chatwire.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output mode flags resolved from the CLI."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    indent: int = 2


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; takes precedence over *json_output*.
        json_output: Shortcut for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)

    if settings.json_output:
        return result.model_dump_json(indent=settings.indent or None)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, indent=settings.indent)
