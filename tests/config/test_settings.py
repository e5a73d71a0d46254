"""Tests for ChatwireSettings source priority."""

from pathlib import Path

import click
import pytest

from chatwire.config.settings import ChatwireSettings
from chatwire.domain.wiretypes import CodecOptions
from chatwire.output.formatters import OutputSettings


class TestChatwireSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = ChatwireSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.codec.preserve_unknown_fields is True
        assert settings.codec.allow_numeric_ids is True
        assert settings.output.indent == 2

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ChatwireSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "chatwire.toml"
        toml.write_text("[codec]\nallow_numeric_ids = false\n[output]\nindent = 4\n")
        settings = ChatwireSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml
        assert settings.codec.allow_numeric_ids is False
        assert settings.codec.reconcile_deprecated is True
        assert settings.output.indent == 4

    def test_found_by_walking_up(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[output]\nindent = 0\n")
        child = tmp_path / "payloads" / "gateway"
        child.mkdir(parents=True)
        assert ChatwireSettings.from_cli(start=child).output.indent == 0

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("")
        settings = ChatwireSettings.from_cli(start=tmp_path)
        assert settings.codec.preserve_unknown_fields is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "strict.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[codec]\npreserve_unknown_fields = false\n")
        settings = ChatwireSettings.from_cli(config_path=str(custom), start=tmp_path)
        assert settings.codec.preserve_unknown_fields is False
        assert settings.config_path == custom

    def test_missing_explicit_path_is_ignored(self, tmp_path: Path) -> None:
        settings = ChatwireSettings.from_cli(config_path=str(tmp_path / "nope.toml"))
        assert settings.config_path is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[codec\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            ChatwireSettings.from_cli(start=tmp_path)

    def test_out_of_range_indent(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[output]\nindent = 40\n")
        with pytest.raises(Exception):
            ChatwireSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "chatwire.toml").write_text(
            "[codec]\nallow_numeric_ids = true\nreconcile_deprecated = false\n"
        )
        monkeypatch.setenv("CHATWIRE_CODEC__ALLOW_NUMERIC_IDS", "false")
        settings = ChatwireSettings.from_cli(start=tmp_path)
        assert settings.codec.allow_numeric_ids is False
        assert settings.codec.reconcile_deprecated is False

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHATWIRE_VERBOSE", "false")
        settings = ChatwireSettings.from_cli(start=tmp_path, verbose=True, json_output=True)
        assert settings.verbose is True
        assert settings.json_output is True


class TestDerivedSettings:
    def test_codec_options_follow_section(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[codec]\nreconcile_deprecated = false\n")
        options = ChatwireSettings.from_cli(start=tmp_path).codec_options()
        assert options == CodecOptions(reconcile_deprecated=False)

    def test_output_settings_combine_flags_and_section(self, tmp_path: Path) -> None:
        (tmp_path / "chatwire.toml").write_text("[output]\nindent = 4\n")
        settings = ChatwireSettings.from_cli(start=tmp_path, quiet=True)
        assert settings.output_settings() == OutputSettings(quiet=True, indent=4)
