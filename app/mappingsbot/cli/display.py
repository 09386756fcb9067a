"""Shared Rich display functions for pages and commands.

Provides the renderables used by the console host and the table builder
used by ``mappingsbot list``.
"""

from collections.abc import Sequence

from rich.console import Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mappingsbot.core.dispatcher import Command
from mappingsbot.models.pages import Page


def render_page(
    page: Page,
    page_number: int,
    page_count: int,
    controls: Sequence[str] = (),
) -> Panel:
    """Render a page as a Rich panel.

    The panel shows the page body as Markdown, the footer with the page
    position, and the available controls below the body.

    Args:
        page: Page to render.
        page_number: One-based position of the page in its group.
        page_count: Number of pages in the group.
        controls: Labels of the navigation controls, empty if inert.

    Returns:
        Rich Panel for the page.
    """
    parts: list[Markdown | Text] = [Markdown(page.body)]
    if controls:
        parts.append(Text(f"\n[{' | '.join(controls)}]", style="muted"))

    return Panel(
        Group(*parts),
        title=f"[header]{page.title}[/header]",
        subtitle=f"[muted]Page {page_number}/{page_count} • {page.footer}[/muted]",
        border_style="border",
    )


def create_commands_table(commands: Sequence[Command]) -> Table:
    """Create a Rich table listing registered commands.

    Args:
        commands: Commands in registration order.

    Returns:
        Rich Table with Command, Aliases, Namespace and Arguments columns.
    """
    table = Table(
        title="Mappings Commands",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Command", no_wrap=True)
    table.add_column("Aliases", style="muted")
    table.add_column("Namespace", style="info")
    table.add_column("Kind")
    table.add_column("Arguments", style="muted")

    for command in commands:
        table.add_row(
            command.name,
            ", ".join(command.aliases) or "-",
            command.namespace.id,
            command.kind.value if command.kind is not None else "info",
            command.signature or "-",
        )

    return table
