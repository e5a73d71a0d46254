"""Rich Console factory and theme for chatwire output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CHATWIRE_THEME = Theme(
    {
        "cw.ok": "bold green",
        "cw.error": "bold red",
        "cw.warning": "bold yellow",
        "cw.op": "bold cyan",
        "cw.key": "dim",
        "cw.schema": "bold blue",
        "cw.path": "bold",
        "cw.state.value": "green",
        "cw.state.null": "yellow",
        "cw.state.absent": "dim",
        "cw.kind": "magenta",
    }
)

_STATE_STYLES: dict[str, str] = {
    "value": "cw.state.value",
    "null": "cw.state.null",
    "absent": "cw.state.absent",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=CHATWIRE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for a field presence state."""
    return _STATE_STYLES.get(state, "")
