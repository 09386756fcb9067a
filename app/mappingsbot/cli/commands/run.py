"""Run command implementation.

Runs a single mappings command against the configured mappings library,
printing replies to the terminal. With --interactive the result pages can
be navigated from stdin until the session times out.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from typing import Annotated

import typer

from mappingsbot.cli.host import ConsoleHost
from mappingsbot.cli.types import NAVIGATION_KEYS, require_config
from mappingsbot.core.dispatcher import CommandDispatcher
from mappingsbot.core.errors import ConfigError
from mappingsbot.core.library import load_library
from mappingsbot.core.session import NavigationEvent, PaginationSession
from mappingsbot.models.invocation import InvocationContext
from mappingsbot.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)


def _read_navigation(
    session: PaginationSession,
    user_id: int,
    loop: asyncio.AbstractEventLoop,
) -> None:
    """Forward navigation keys typed on stdin to a running session."""
    for line in sys.stdin:
        key = line.strip().lower()[:1]
        action = NAVIGATION_KEYS.get(key)
        if action is None:
            continue
        try:
            loop.call_soon_threadsafe(session.submit, NavigationEvent(user_id, action))
        except RuntimeError:
            # Event loop already closed
            return


async def _serve(
    dispatcher: CommandDispatcher,
    host: ConsoleHost,
    context: InvocationContext,
    command: str,
    arguments: list[str],
    interactive: bool,
    show_all: bool,
) -> PaginationSession | None:
    session = await dispatcher.prepare(context, command, arguments)
    if session is None:
        return None

    if interactive and session.controls():
        keys = ", ".join(f"{k}={a.value}" for k, a in NAVIGATION_KEYS.items())
        print_info(f"Navigate with {keys} followed by Enter.")
        reader = threading.Thread(
            target=_read_navigation,
            args=(session, context.user_id, asyncio.get_running_loop()),
            daemon=True,
        )
        reader.start()
        await session.run(host, context)
        return session

    groups = session.groups.items() if show_all else [(session.group, (session.current_page,))]
    for _group, pages in groups:
        page_count = len(pages) if show_all else session.page_count
        for number, page in enumerate(pages, start=1):
            await host.send_page(
                context,
                page,
                page_number=number,
                page_count=page_count,
                controls=(),
            )
    session.expire()
    return session


def run_command(
    ctx: typer.Context,
    command: Annotated[
        str,
        typer.Argument(help="Command name or alias, e.g. 'yc' or 'mojmap'."),
    ],
    arguments: Annotated[
        list[str] | None,
        typer.Argument(help="Command arguments: <query> [channel] [version]."),
    ] = None,
    user: Annotated[
        int,
        typer.Option("--user", "-u", help="User ID of the invocation."),
    ] = 0,
    guild: Annotated[
        int | None,
        typer.Option("--guild", help="Guild ID of the invocation."),
    ] = None,
    channel: Annotated[
        int | None,
        typer.Option("--channel", help="Channel ID of the invocation."),
    ] = None,
    category: Annotated[
        int | None,
        typer.Option("--category", help="Category ID of the invocation."),
    ] = None,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Navigate result pages from stdin."),
    ] = False,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Print every page instead of the first."),
    ] = False,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", "-t", min=1, help="Session timeout in seconds."),
    ] = None,
) -> None:
    """Run a mappings command from the terminal.

    Examples:
        mappingsbot run yc Block                 # Yarn classes matching Block
        mappingsbot run ym getBlockState 1.20.1  # Methods in a given version
        mappingsbot run yarn                     # Yarn versions and defaults
        mappingsbot run mmc Entity --all         # Print every page
        mappingsbot run pc Item -i               # Navigate pages interactively
    """
    config = require_config(ctx)
    if timeout is not None:
        settings = config.settings.model_copy(update={"timeout": timeout})
        config = config.model_copy(update={"settings": settings})

    try:
        library = load_library(config.settings.library)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    host = ConsoleHost(console)
    dispatcher = CommandDispatcher(config, library, host)
    dispatcher.setup()

    if dispatcher.find(command) is None:
        print_error(f"Unknown command: {command}")
        raise typer.Exit(code=1)

    context = InvocationContext(
        user_id=user,
        guild_id=guild,
        channel_id=channel,
        category_id=category,
    )
    logger.debug("Running %s %s as %s", command, arguments or [], context)

    asyncio.run(
        _serve(dispatcher, host, context, command, arguments or [], interactive, show_all)
    )
