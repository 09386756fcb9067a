"""Port interfaces for the collaborators mappingsbot depends on.

The core depends only on these protocols. The mappings library indexes
and searches the datasets; the messaging host delivers messages and
navigation input. Neither is implemented here apart from the console host
used by the CLI.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mappingsbot.models.invocation import InvocationContext
    from mappingsbot.models.namespace import QueryKind
    from mappingsbot.models.pages import Page, ResultEntry
    from mappingsbot.models.provider import Provider


@runtime_checkable
class Dataset(Protocol):
    """A loaded mappings snapshot for one (namespace, version) pair."""

    @property
    def name(self) -> str:
        """Display name of the mappings (e.g., 'Yarn')."""
        ...

    @property
    def version(self) -> str:
        """Version this snapshot was built from."""
        ...


@runtime_checkable
class MappingsLibrary(Protocol):
    """Dataset lookup and query backend.

    Implementations own their caching and locking. Every method may
    perform I/O. Failures are reported by raising
    :class:`~mappingsbot.core.errors.MappingsLibraryError`.
    """

    async def get_all_versions(self, namespace: str) -> set[str]:
        """Return every version known for the namespace."""
        ...

    async def get_sorted_versions(self, namespace: str) -> list[str]:
        """Return every known version, newest release first."""
        ...

    async def get_dataset(self, namespace: str, version: str) -> Dataset | None:
        """Fetch the dataset for a version.

        Returns:
            The dataset, or None if the version is known by name but has
            not been materialised.
        """
        ...

    async def get_default_version(self, namespace: str, channel: str) -> str:
        """Return the current default version of a channel."""
        ...

    async def query(self, kind: QueryKind, provider: Provider, search_key: str) -> list[ResultEntry]:
        """Search the provider's dataset.

        Args:
            kind: Kind of identifier to look for.
            provider: Provider selecting the dataset; resolve it with ``load()``.
            search_key: Slash-separated search key.

        Returns:
            Matching entries, ordered by relevance.

        Raises:
            QueryError: If the query cannot be run.
        """
        ...


class MessageHandle(Protocol):
    """Opaque reference to a message sent by the host."""


@runtime_checkable
class MessagingHost(Protocol):
    """Chat platform operations used by commands."""

    async def send_text(self, context: InvocationContext, text: str) -> None:
        """Reply to the invocation with plain text."""
        ...

    def typing(self, context: InvocationContext) -> AbstractAsyncContextManager[None]:
        """Show a typing indicator while the block runs."""
        ...

    async def send_page(
        self,
        context: InvocationContext,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> MessageHandle:
        """Send a page, attaching navigation controls when any are given."""
        ...

    async def edit_page(
        self,
        handle: MessageHandle,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> None:
        """Replace the page shown by a previously sent message."""
        ...

    async def disable_controls(self, handle: MessageHandle) -> None:
        """Make the navigation controls of a message inert."""
        ...
