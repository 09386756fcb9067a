"""Invocation context model.

Describes who ran a command and where, as reported by the messaging host.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Read-only view of a single command invocation.

    Attributes:
        user_id: Identifier of the invoking user.
        guild_id: Guild (server) the command was sent in, None for direct messages.
        channel_id: Channel the command was sent in.
        category_id: Category containing the channel, None if uncategorised.
        extras: Host-specific data for custom checks (read-only).
    """

    user_id: int
    guild_id: int | None = None
    channel_id: int | None = None
    category_id: int | None = None
    extras: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
