"""Configuration models and loading.

Configuration is assembled from three layers, later layers winning:

1. The bundled defaults (``mappingsbot/data/default.toml``)
2. The user file (``~/.config/mappingsbot/config.toml`` or an explicit path)
3. Environment variables prefixed ``MAPPINGS_`` with ``__`` between
   section and key (e.g. ``MAPPINGS_SETTINGS__TIMEOUT=120``)
"""

import logging
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from mappingsbot.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from mappingsbot.core.paths import get_bundled_config_path, get_config_path
from mappingsbot.models.namespace import Channel

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300

ALL_NAMESPACES = ("legacy-yarn", "mcp", "mojang", "plasma", "yarn", "yarrn")


class ScopeRules(BaseModel):
    """Allow and ban lists for one kind of scope (category, channel or guild).

    Attributes:
        allowed: If non-empty, only these identifiers may run commands.
        banned: These identifiers may never run commands.
    """

    model_config = ConfigDict(extra="forbid")

    allowed: list[int] = Field(default_factory=list)
    banned: list[int] = Field(default_factory=list)


class GeneralSettings(BaseModel):
    """General bot settings.

    Attributes:
        namespaces: Namespace identifiers to register commands for.
        timeout: Seconds before a pagination session expires.
        library: ``module:attribute`` of the mappings library used by the CLI.
    """

    model_config = ConfigDict(extra="forbid")

    namespaces: list[str] = Field(default_factory=lambda: list(ALL_NAMESPACES))
    timeout: Annotated[
        int,
        Field(ge=1, description="Pagination timeout in seconds"),
    ] = DEFAULT_TIMEOUT
    library: Annotated[
        str | None,
        Field(description="Import path of the MappingsLibrary implementation"),
    ] = None


class YarnSettings(BaseModel):
    """Yarn-specific settings.

    Attributes:
        channels: Optional channels to enable (e.g., ``patchwork``).
        default_channel: Channel used when a command does not pick one.
    """

    model_config = ConfigDict(extra="forbid")

    channels: list[Channel] = Field(default_factory=list)
    default_channel: Channel = Channel.OFFICIAL

    @model_validator(mode="after")
    def validate_default_channel(self) -> "YarnSettings":
        """Ensure an optional default channel is also enabled."""
        if self.default_channel is Channel.PATCHWORK and Channel.PATCHWORK not in self.channels:
            msg = "default_channel 'patchwork' requires patchwork in channels"
            raise ValueError(msg)
        return self


class MappingsConfig(BaseSettings):
    """Complete mappingsbot configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MAPPINGS_",
        env_nested_delimiter="__",
        extra="forbid",
    )

    settings: GeneralSettings = Field(default_factory=GeneralSettings)
    categories: ScopeRules = Field(default_factory=ScopeRules)
    channels: ScopeRules = Field(default_factory=ScopeRules)
    guilds: ScopeRules = Field(default_factory=ScopeRules)
    yarn: YarnSettings = Field(default_factory=YarnSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides values read from TOML files
        return (env_settings, init_settings)

    @property
    def enabled_namespaces(self) -> list[str]:
        """Namespace identifiers configured for registration."""
        return list(self.settings.namespaces)

    @property
    def timeout_delta(self) -> timedelta:
        """Pagination timeout as a timedelta."""
        return timedelta(seconds=self.settings.timeout)

    def channel_enabled(self, namespace: str, channel: Channel) -> bool:
        """Check if an optional channel has been switched on.

        Args:
            namespace: Namespace identifier.
            channel: Optional channel of that namespace.

        Returns:
            True if the channel is enabled in configuration.
        """
        if namespace == "yarn":
            return channel in self.yarn.channels
        return False


def _read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two TOML documents, tables merged key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> MappingsConfig:
    """Load configuration from the bundled defaults, a user file and the environment.

    Args:
        path: Explicit config file. If None, the user config file is used
            when it exists.

    Returns:
        Validated MappingsConfig object.

    Raises:
        ConfigNotFoundError: If an explicit path doesn't exist.
        ConfigParseError: If a file's TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    data = _read_toml(Path(get_bundled_config_path()))

    if path is not None:
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")
        data = _deep_merge(data, _read_toml(path))
    else:
        user_path = get_config_path()
        if user_path.exists():
            logger.debug("Loading user config from %s", user_path)
            data = _deep_merge(data, _read_toml(user_path))

    try:
        return MappingsConfig(**data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e
