"""CLI commands for mappingsbot.

This package contains all subcommand implementations.
"""

from mappingsbot.cli.commands import config, listing, run

__all__ = ["config", "listing", "run"]
