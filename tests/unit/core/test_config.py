"""Unit tests for configuration loading.

Tests for the config models, layered TOML loading and environment overrides.
"""

from datetime import timedelta
from pathlib import Path

import pytest
from mappingsbot.core.config import (
    ALL_NAMESPACES,
    DEFAULT_TIMEOUT,
    MappingsConfig,
    ScopeRules,
    YarnSettings,
    load_config,
)
from mappingsbot.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from mappingsbot.models.namespace import Channel
from pydantic import ValidationError


class TestModels:
    """Tests for the configuration models."""

    def test_defaults(self, config: MappingsConfig) -> None:
        """Default config enables every namespace with no scope rules."""
        assert config.enabled_namespaces == list(ALL_NAMESPACES)
        assert config.settings.timeout == DEFAULT_TIMEOUT
        assert config.timeout_delta == timedelta(seconds=DEFAULT_TIMEOUT)
        assert config.guilds == ScopeRules()
        assert config.settings.library is None

    def test_timeout_must_be_positive(self) -> None:
        """A zero timeout is rejected."""
        with pytest.raises(ValidationError):
            MappingsConfig(settings={"timeout": 0})

    def test_unknown_keys_rejected(self) -> None:
        """Unknown keys in a section are rejected."""
        with pytest.raises(ValidationError):
            MappingsConfig(guilds={"allowed": [], "blocked": [1]})

    def test_patchwork_default_requires_channel(self) -> None:
        """Patchwork can only be the default when it is enabled."""
        with pytest.raises(ValidationError, match="patchwork"):
            YarnSettings(default_channel=Channel.PATCHWORK)

        settings = YarnSettings(channels=[Channel.PATCHWORK], default_channel=Channel.PATCHWORK)
        assert settings.default_channel is Channel.PATCHWORK

    def test_channel_enabled_only_for_yarn(self) -> None:
        """Optional channels are only configurable for yarn."""
        config = MappingsConfig(yarn=YarnSettings(channels=[Channel.PATCHWORK]))

        assert config.channel_enabled("yarn", Channel.PATCHWORK)
        assert not config.channel_enabled("mojang", Channel.PATCHWORK)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_bundled_defaults(self) -> None:
        """Without a user file the bundled defaults are used."""
        config = load_config()

        assert config.enabled_namespaces == list(ALL_NAMESPACES)
        assert config.yarn.default_channel is Channel.OFFICIAL

    def test_user_file_overrides_defaults(self, isolated_config_home: Path) -> None:
        """Values in the user config file override bundled defaults."""
        user_dir = isolated_config_home / "mappingsbot"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text(
            '[settings]\nnamespaces = ["yarn"]\n\n[guilds]\nbanned = [7]\n'
        )

        config = load_config()

        assert config.enabled_namespaces == ["yarn"]
        assert config.guilds.banned == [7]
        # Keys not in the user file keep their defaults
        assert config.settings.timeout == DEFAULT_TIMEOUT

    def test_explicit_path(self, tmp_path: Path) -> None:
        """An explicit path is loaded instead of the user file."""
        path = tmp_path / "bot.toml"
        path.write_text('[yarn]\nchannels = ["patchwork"]\ndefault_channel = "patchwork"\n')

        config = load_config(path)

        assert config.yarn.channels == [Channel.PATCHWORK]
        assert config.yarn.default_channel is Channel.PATCHWORK

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        """A missing explicit path raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Invalid TOML raises ConfigParseError."""
        path = tmp_path / "bad.toml"
        path.write_text("[settings\n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("[settings]\ntimeout = -5\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """MAPPINGS_* environment variables win over config files."""
        path = tmp_path / "bot.toml"
        path.write_text("[settings]\ntimeout = 60\n")
        monkeypatch.setenv("MAPPINGS_SETTINGS__TIMEOUT", "120")

        config = load_config(path)

        assert config.settings.timeout == 120
