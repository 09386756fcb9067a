"""Unit tests for XDG path management."""

import os
import tomllib
from pathlib import Path
from unittest.mock import patch

from mappingsbot.core.paths import (
    APP_NAME,
    get_bundled_config_path,
    get_config_dir,
    get_config_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


def test_config_path_is_toml(tmp_path: Path) -> None:
    """get_config_path points at config.toml in the config directory."""
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
        assert get_config_path() == tmp_path / APP_NAME / "config.toml"


def test_bundled_config_is_valid_toml() -> None:
    """The bundled defaults ship with the package and parse as TOML."""
    data = tomllib.loads(get_bundled_config_path().read_text())

    assert data["settings"]["timeout"] == 300
    assert "yarn" in data["settings"]["namespaces"]
