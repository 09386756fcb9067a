"""Shared types and utilities for CLI commands.

This module provides helpers used across multiple CLI command modules
to avoid code duplication.
"""

from pathlib import Path

import typer

from mappingsbot.core.config import MappingsConfig, load_config
from mappingsbot.core.errors import ConfigError, ConfigNotFoundError
from mappingsbot.core.session import NavigationAction
from mappingsbot.utils.formatting import print_error

# Keys accepted by interactive sessions
NAVIGATION_KEYS: dict[str, NavigationAction] = {
    "f": NavigationAction.FIRST,
    "p": NavigationAction.PREVIOUS,
    "n": NavigationAction.NEXT,
    "l": NavigationAction.LAST,
    "t": NavigationAction.TOGGLE,
}


def get_config_option(ctx: typer.Context) -> Path | None:
    """Return the --config path given to the main command, if any."""
    obj = ctx.find_root().obj or {}
    return obj.get("config")


def require_config(ctx: typer.Context) -> MappingsConfig:
    """Load configuration or exit with an error message.

    Args:
        ctx: Typer context carrying global options.

    Returns:
        Loaded MappingsConfig.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    try:
        return load_config(get_config_option(ctx))
    except ConfigNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load configuration: {e}")
        raise typer.Exit(code=1) from e
