"""Locating and reading ``chatwire.toml``.

Lookup order: the ``CHATWIRE_CONFIG`` env var, then the nearest
``chatwire.toml`` in the start directory or any of its ancestors.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from chatwire.config.models import ChatwireConfig

CONFIG_FILENAME = "chatwire.toml"
CONFIG_ENV_VAR = "CHATWIRE_CONFIG"


class ConfigFileError(click.ClickException):
    """A config file exists but is not valid TOML."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    An env var pointing at a missing file disables discovery entirely.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        pinned = Path(override)
        return pinned if pinned.is_file() else None

    here = (start or Path.cwd()).resolve()
    return next(
        (d / CONFIG_FILENAME for d in (here, *here.parents) if (d / CONFIG_FILENAME).is_file()),
        None,
    )


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising :class:`ConfigFileError` on bad syntax."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ChatwireConfig:
    """Validate the config file at *path*, or the one discovered from *cwd*.

    With no file anywhere, every section takes its defaults.
    """
    source = path if path is not None else find_config(cwd)
    if source is None:
        return ChatwireConfig()
    return ChatwireConfig.model_validate(read_toml(source))
