"""Result pagination.

Builds pagination sessions from lookup results (compact and detailed
forms) and from static text blocks such as version listings.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping, Sequence
from datetime import timedelta
from typing import TYPE_CHECKING

from mappingsbot.core.errors import EmptyResultError
from mappingsbot.core.session import Clock, PaginationSession
from mappingsbot.models.pages import Page, PageGroup

if TYPE_CHECKING:
    from mappingsbot.models.namespace import Channel, Namespace
    from mappingsbot.models.pages import ResultEntry

VERSION_CHUNK_SIZE = 10


def chunked(items: Sequence[str], size: int) -> list[list[str]]:
    """Split items into consecutive groups of at most ``size``."""
    if size < 1:
        msg = f"Chunk size must be positive, got {size}"
        raise ValueError(msg)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def _format_version(
    version: str,
    default: str,
    channel_defaults: Mapping[str, Channel],
) -> str:
    if version == default:
        return f"**» {version}** (Default)"
    channel = channel_defaults.get(version)
    if channel is not None:
        return f"**» {version}** (Default: {channel.label})"
    return f"**»** {version}"


def version_listing(
    namespace: Namespace,
    versions: Sequence[str],
    defaults: Mapping[Channel, str],
    default_channel: Channel,
    see_also: Namespace | None = None,
) -> list[str]:
    """Render the text blocks of a namespace's version listing.

    The first block is a summary of the namespace; the rest list the
    versions ten at a time, marking each channel's default version.

    Args:
        namespace: Namespace being described.
        versions: Every known version, in release order.
        defaults: Current default version of each enabled channel.
        default_channel: Channel used when commands don't pick one.
        see_also: Enabled namespace to point readers to at the end of the summary.

    Returns:
        Summary block followed by one block per group of versions.
    """
    default = defaults[default_channel]
    channel_defaults = {
        version: channel for channel, version in defaults.items() if channel is not default_channel
    }

    blocks = [
        "\n".join(_format_version(v, default, channel_defaults) for v in chunk)
        for chunk in chunked(versions, VERSION_CHUNK_SIZE)
    ]

    lines = [
        f"{namespace.display_name} mappings are available for queries across "
        f"**{len(versions)}** versions.",
        "",
        f"**Default version:** {default}",
    ]
    lines.extend(
        f"**Default {channel.value} version:** {version}"
        for channel, version in defaults.items()
        if channel is not default_channel
    )
    lines.append("")
    if len(defaults) > 1:
        lines.append("**Channels:** " + ", ".join(f"`{c.value}`" for c in defaults))
    commands = ", ".join(f"`{namespace.lookups[kind].name}`" for kind in namespace.lookups)
    lines.append(f"**Commands:** {commands}")
    lines.append("")
    closing = (
        f"For a full list of supported {namespace.display_name} versions, "
        "please view the rest of the pages."
    )
    if see_also is not None:
        closing += (
            f" For {see_also.display_name} mappings, "
            f"please see the `{see_also.info.name}` command."
        )
    lines.append(closing)

    return ["\n".join(lines), *blocks]


class ResultPaginator:
    """Creates pagination sessions.

    Attributes:
        timeout: Lifetime of the sessions this paginator creates.
    """

    def __init__(self, timeout: timedelta, *, clock: Clock = time.monotonic) -> None:
        self.timeout = timeout
        self._clock = clock

    @classmethod
    def from_seconds(cls, seconds: int, *, clock: Clock = time.monotonic) -> ResultPaginator:
        """Create a paginator from a timeout in seconds."""
        return cls(timedelta(seconds=seconds), clock=clock)

    def paginate(
        self,
        title: str,
        entries: Sequence[ResultEntry],
        owner_id: int,
    ) -> PaginationSession:
        """Create a session from lookup results.

        Compact forms become the primary page group. Detailed forms become
        the secondary group, unless every detailed form equals its compact
        form, in which case the secondary group is left out.

        Args:
            title: Title shown on every page.
            entries: Lookup results in the order returned by the query.
            owner_id: User allowed to navigate the session.

        Returns:
            A new active session on its first page.

        Raises:
            EmptyResultError: If there are no entries.
        """
        if not entries:
            raise EmptyResultError()

        shorts = [entry.short for entry in entries]
        longs = [entry.long for entry in entries]

        groups = {PageGroup.MORE: [Page(title, body, PageGroup.MORE) for body in shorts]}
        if shorts != longs:
            groups[PageGroup.LESS] = [Page(title, body, PageGroup.LESS) for body in longs]

        return PaginationSession(owner_id, groups, self.timeout, clock=self._clock)

    def paginate_static(
        self,
        title: str,
        chunks: Iterable[str],
        owner_id: int,
    ) -> PaginationSession:
        """Create a single-group session from static text blocks.

        Raises:
            ValueError: If there are no blocks.
        """
        pages = [Page(title, body) for body in chunks]
        return PaginationSession(owner_id, {PageGroup.MORE: pages}, self.timeout, clock=self._clock)
