"""Interactive pagination sessions.

A session shows one page at a time on a single message and moves between
pages in response to navigation events from its owner. It is a small
state machine:

- ``ACTIVE(group, index)`` moves to another ``ACTIVE`` state on navigation.
  Moving past either end is a no-op; there is no wrap-around.
- ``ACTIVE`` becomes ``EXPIRED`` once the timeout has elapsed. Expired
  sessions ignore every event and their controls are disabled.

Events reach a running session through :meth:`PaginationSession.submit`
and are processed one at a time, in arrival order, by
:meth:`PaginationSession.run`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from mappingsbot.models.pages import Page, PageGroup

if TYPE_CHECKING:
    from mappingsbot.core.ports import MessageHandle, MessagingHost
    from mappingsbot.models.invocation import InvocationContext

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class NavigationAction(str, Enum):
    """Navigation input accepted by a session."""

    FIRST = "first"
    PREVIOUS = "previous"
    NEXT = "next"
    LAST = "last"
    TOGGLE = "toggle"


class SessionState(Enum):
    """Lifecycle state of a session."""

    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    """Navigation input from a user.

    Attributes:
        user_id: User who pressed the control.
        action: Requested navigation.
    """

    user_id: int
    action: NavigationAction


class PaginationSession:
    """A bounded, expiring multi-page presentation owned by one user.

    Attributes:
        owner_id: The only user whose navigation is honoured.
        timeout: Time after start at which the session expires.
    """

    def __init__(
        self,
        owner_id: int,
        groups: Mapping[PageGroup, Sequence[Page]],
        timeout: timedelta,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        if not groups.get(PageGroup.MORE):
            msg = "A session needs at least one page in its primary group"
            raise ValueError(msg)
        for group, pages in groups.items():
            if not pages:
                msg = f"Page group {group.name} is empty"
                raise ValueError(msg)

        self.owner_id = owner_id
        self.timeout = timeout
        self._groups: Mapping[PageGroup, tuple[Page, ...]] = MappingProxyType(
            {group: tuple(pages) for group, pages in groups.items()}
        )
        self._clock = clock
        self._started = clock()
        self._group = PageGroup.MORE
        self._index = 0
        self._state = SessionState.ACTIVE
        self._events: asyncio.Queue[NavigationEvent] = asyncio.Queue()

    @property
    def groups(self) -> Mapping[PageGroup, tuple[Page, ...]]:
        """Pages of every group present in the session."""
        return self._groups

    @property
    def group(self) -> PageGroup:
        """The active page group."""
        return self._group

    @property
    def index(self) -> int:
        """Index of the current page within the active group."""
        return self._index

    @property
    def page_count(self) -> int:
        """Number of pages in the active group."""
        return len(self._groups[self._group])

    @property
    def current_page(self) -> Page:
        """The page currently shown."""
        return self._groups[self._group][self._index]

    @property
    def can_toggle(self) -> bool:
        """Check if the session has a second page group."""
        return len(self._groups) > 1

    @property
    def started_at(self) -> float:
        """Clock reading when the session was created."""
        return self._started

    @property
    def remaining(self) -> float:
        """Seconds left before the session expires (never negative)."""
        elapsed = self._clock() - self._started
        return max(0.0, self.timeout.total_seconds() - elapsed)

    @property
    def state(self) -> SessionState:
        """Current lifecycle state, expiring the session if it timed out."""
        self._check_expiry()
        return self._state

    @property
    def is_expired(self) -> bool:
        """Check if the session no longer accepts navigation."""
        return self.state is SessionState.EXPIRED

    def controls(self) -> tuple[str, ...]:
        """Labels of the navigation controls to attach to the message.

        Returns:
            Empty tuple when the session is expired or has nothing to navigate.
        """
        if self.is_expired:
            return ()

        labels: list[str] = []
        if self.page_count > 1:
            labels.extend(
                action.value
                for action in (
                    NavigationAction.FIRST,
                    NavigationAction.PREVIOUS,
                    NavigationAction.NEXT,
                    NavigationAction.LAST,
                )
            )
        if self.can_toggle:
            labels.append(self._group.value)
        return tuple(labels)

    def handle(self, event: NavigationEvent) -> bool:
        """Apply a navigation event.

        Args:
            event: The navigation input.

        Returns:
            True if the shown page changed, False if the event was ignored
            or had no effect.
        """
        if self.is_expired:
            logger.debug("Ignoring %s on expired session", event.action.value)
            return False

        if event.user_id != self.owner_id:
            logger.debug("Ignoring %s from non-owner %s", event.action.value, event.user_id)
            return False

        group, index = self._group, self._index
        last = self.page_count - 1

        if event.action is NavigationAction.FIRST:
            index = 0
        elif event.action is NavigationAction.PREVIOUS:
            index = max(0, index - 1)
        elif event.action is NavigationAction.NEXT:
            index = min(last, index + 1)
        elif event.action is NavigationAction.LAST:
            index = last
        elif event.action is NavigationAction.TOGGLE and self.can_toggle:
            group = group.other
            index = min(index, len(self._groups[group]) - 1)

        if (group, index) == (self._group, self._index):
            return False

        self._group, self._index = group, index
        return True

    def expire(self) -> None:
        """Move the session to the expired state."""
        if self._state is not SessionState.EXPIRED:
            logger.debug("Pagination session for %s expired", self.owner_id)
        self._state = SessionState.EXPIRED

    def submit(self, event: NavigationEvent) -> None:
        """Queue a navigation event for :meth:`run` to process."""
        self._events.put_nowait(event)

    async def run(self, host: MessagingHost, context: InvocationContext) -> None:
        """Send the session's first page and serve navigation until expiry.

        Events are handled one at a time. When the timeout elapses the
        session expires and the message's controls are disabled. The same
        happens if showing a page fails or the task is cancelled; the error
        is then re-raised.

        Args:
            host: Messaging host showing the session.
            context: Invocation the session replies to.
        """
        handle = await host.send_page(
            context,
            self.current_page,
            page_number=self._index + 1,
            page_count=self.page_count,
            controls=self.controls(),
        )

        if not self.controls():
            self.expire()
            return

        try:
            while True:
                remaining = self.remaining
                if remaining <= 0:
                    break
                try:
                    event = await asyncio.wait_for(self._events.get(), timeout=remaining)
                except TimeoutError:
                    break
                if self.handle(event):
                    await self._show(host, handle)
        finally:
            self.expire()
            await host.disable_controls(handle)

    async def _show(self, host: MessagingHost, handle: MessageHandle) -> None:
        await host.edit_page(
            handle,
            self.current_page,
            page_number=self._index + 1,
            page_count=self.page_count,
            controls=self.controls(),
        )

    def _check_expiry(self) -> None:
        if self._state is SessionState.ACTIVE and self.remaining <= 0:
            self.expire()
