"""One frozen settings object for CLI flags, env vars and TOML.

Sources, strongest first:

1. keyword arguments (the global CLI options)
2. ``CHATWIRE_*`` env vars, ``__`` for nesting (``CHATWIRE_OUTPUT__INDENT=4``)
3. ``chatwire.toml`` from :func:`chatwire.config.discovery.find_config`
4. the defaults on the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from chatwire.config.discovery import find_config, read_toml
from chatwire.config.models import CodecConfig, OutputConfig
from chatwire.domain.wiretypes import CodecOptions
from chatwire.output.formatters import OutputSettings

# pydantic-settings builds sources inside __init__, so the chosen file is
# handed over out of band for the duration of one construction.
_pending = threading.local()


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``chatwire.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables = read_toml(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class ChatwireSettings(BaseSettings):
    """Resolved configuration for one CLI invocation."""

    model_config = {
        "frozen": True,
        "env_prefix": "CHATWIRE_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    codec: CodecConfig = Field(default_factory=CodecConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "path", None))
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **flags: Any,
    ) -> ChatwireSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather
        than falling back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            path = explicit if explicit.is_file() else None
        else:
            path = find_config(start)

        _pending.path = path
        try:
            return cls(config_path=path, **flags)
        finally:
            _pending.path = None

    def codec_options(self) -> CodecOptions:
        """The ``[codec]`` section as options for the codec."""
        return CodecOptions(**self.codec.model_dump())

    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.json_output,
            quiet=self.quiet,
            verbose=self.verbose,
            indent=self.output.indent,
        )
