"""Console messaging host.

Implements the MessagingHost port on a Rich console so commands can be
run from a terminal. Messages are printed in order; editing a page prints
the new page below the old one.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markdown import Markdown

from mappingsbot.cli.display import render_page
from mappingsbot.utils.formatting import console

if TYPE_CHECKING:
    from rich.console import Console

    from mappingsbot.models.invocation import InvocationContext
    from mappingsbot.models.pages import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConsoleMessage:
    """Handle of a page printed by the console host.

    Attributes:
        id: Sequence number of the message.
        context: Invocation the message replied to.
    """

    id: int
    context: InvocationContext


class ConsoleHost:
    """MessagingHost printing to a Rich console."""

    def __init__(self, output: Console | None = None) -> None:
        self._console = output if output is not None else console
        self._sent = 0

    async def send_text(self, context: InvocationContext, text: str) -> None:
        self._console.print(Markdown(text))

    @asynccontextmanager
    async def typing(self, context: InvocationContext) -> AsyncIterator[None]:
        with self._console.status("[muted]Working...[/muted]"):
            yield

    async def send_page(
        self,
        context: InvocationContext,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> ConsoleMessage:
        self._sent += 1
        self._console.print(render_page(page, page_number, page_count, controls))
        return ConsoleMessage(self._sent, context)

    async def edit_page(
        self,
        handle: ConsoleMessage,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> None:
        logger.debug("Updating message %d", handle.id)
        self._console.print(render_page(page, page_number, page_count, controls))

    async def disable_controls(self, handle: ConsoleMessage) -> None:
        logger.debug("Disabling controls of message %d", handle.id)
        self._console.print("[muted]Session expired.[/muted]")
