"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chatwire.toml only contains
overrides. An empty (or missing) file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- chatwire.toml sections ---


class CodecConfig(BaseModel):
    """[codec] section."""

    model_config = {"frozen": True}

    preserve_unknown_fields: bool = True
    reconcile_deprecated: bool = True
    allow_numeric_ids: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0, le=8)


class ChatwireConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    codec: CodecConfig = Field(default_factory=CodecConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
