"""Config inspection commands.

Provides commands to show the effective configuration and where it is
loaded from.
"""

import json

import typer

from mappingsbot.cli.types import get_config_option, require_config
from mappingsbot.core.paths import get_bundled_config_path, get_config_path
from mappingsbot.utils.formatting import console

app = typer.Typer(
    help="Inspect the bot configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration as JSON.

    Values come from the bundled defaults, the user config file and
    MAPPINGS_* environment variables, in that order.
    """
    config = require_config(ctx)
    console.print_json(json.dumps(config.model_dump(mode="json")))


@app.command()
def path(ctx: typer.Context) -> None:
    """Show the config files that are read."""
    explicit = get_config_option(ctx)
    user_path = explicit if explicit is not None else get_config_path()

    console.print(f"[muted]Defaults:[/muted] {get_bundled_config_path()}", soft_wrap=True)
    status = "[success]found[/success]" if user_path.exists() else "[warning]missing[/warning]"
    console.print(f"[muted]User:[/muted] {user_path} ({status})", soft_wrap=True)
