"""List command implementation.

Shows the commands that would be registered for the current configuration.
"""

import json
from typing import Annotated

import typer

from mappingsbot.cli.display import create_commands_table
from mappingsbot.cli.types import require_config
from mappingsbot.core.checks import CheckRegistry
from mappingsbot.core.dispatcher import build_commands
from mappingsbot.utils.formatting import console, print_warning


def list_commands(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List registered mappings commands.

    Examples:
        mappingsbot list            # Table of commands
        mappingsbot list --json     # JSON output for scripting
    """
    config = require_config(ctx)
    commands = build_commands(config, CheckRegistry())

    if json_output:
        data = [
            {
                "name": c.name,
                "aliases": list(c.aliases),
                "namespace": c.namespace.id,
                "kind": c.kind.value if c.kind is not None else None,
                "arguments": c.signature,
            }
            for c in commands
        ]
        console.print_json(json.dumps(data))
        return

    if not commands:
        print_warning("No namespaces have been enabled.")
        return

    console.print(create_commands_table(commands))
