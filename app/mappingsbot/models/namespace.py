"""Namespace models for mappings lookups.

This module defines the data structures describing a mappings namespace:
its release channels, the command names it registers and the rule used
to pick a default channel.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mappingsbot.core.config import MappingsConfig


class Channel(str, Enum):
    """Release channels known to the mappings library.

    Attributes:
        OFFICIAL: Stable releases.
        SNAPSHOT: Development snapshots.
        PATCHWORK: Community patch channel (yarn only, enabled by config).
    """

    OFFICIAL = "official"
    SNAPSHOT = "snapshot"
    PATCHWORK = "patchwork"

    @property
    def label(self) -> str:
        """Capitalised name used in user-facing text."""
        return self.value.capitalize()


class QueryKind(str, Enum):
    """Kind of identifier a lookup command searches for."""

    CLASS = "class"
    FIELD = "field"
    METHOD = "method"

    @property
    def plural(self) -> str:
        """Plural form used in page titles."""
        if self is QueryKind.CLASS:
            return "classes"
        return f"{self.value}s"


@dataclass(frozen=True, slots=True)
class CommandNames:
    """Primary name and aliases of a single command.

    Attributes:
        name: Primary command name (e.g., 'yc').
        aliases: Alternative names accepted for the command.
    """

    name: str
    aliases: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate command names after initialization."""
        if not self.name:
            msg = "Command name cannot be empty"
            raise ValueError(msg)

    @property
    def all(self) -> tuple[str, ...]:
        """Return the primary name followed by every alias."""
        return (self.name, *self.aliases)


def _official_channel(_config: MappingsConfig) -> Channel:
    return Channel.OFFICIAL


@dataclass(frozen=True, slots=True, eq=False)
class Namespace:
    """A mappings namespace and the commands registered for it.

    This is an immutable data structure; one instance exists per namespace
    for the lifetime of the process.

    Attributes:
        id: Identifier used by the mappings library (e.g., 'yarn').
        display_name: Human-readable name (e.g., 'Legacy Yarn').
        channels: Ordered release channels the namespace supports.
        optional_channels: Channels that are only usable when enabled in config.
        lookups: Command names for class, field and method lookups.
        info: Command names for the informational version listing.
        default_channel_rule: Picks the default channel from the loaded config.
        related: Identifier of a namespace the info listing points to, if enabled.
    """

    id: str
    display_name: str
    channels: tuple[Channel, ...]
    lookups: Mapping[QueryKind, CommandNames]
    info: CommandNames
    optional_channels: frozenset[Channel] = field(default_factory=frozenset)
    default_channel_rule: Callable[[MappingsConfig], Channel] = _official_channel
    related: str | None = None

    def __post_init__(self) -> None:
        """Validate namespace data after initialization."""
        if not self.channels:
            msg = f"Namespace {self.id!r} must support at least one channel"
            raise ValueError(msg)
        if not self.optional_channels <= set(self.channels):
            msg = f"Optional channels of {self.id!r} must be a subset of its channels"
            raise ValueError(msg)
        if set(self.lookups) != set(QueryKind):
            msg = f"Namespace {self.id!r} must define class, field and method commands"
            raise ValueError(msg)
        object.__setattr__(self, "lookups", MappingProxyType(dict(self.lookups)))

    @property
    def has_channels(self) -> bool:
        """Check if users may pick a channel for this namespace."""
        return len(self.channels) > 1

    def supports(self, channel: Channel) -> bool:
        """Check if the channel belongs to this namespace at all."""
        return channel in self.channels

    def channel_enabled(self, channel: Channel, config: MappingsConfig) -> bool:
        """Check if a channel of this namespace is usable under the given config."""
        if channel not in self.channels:
            return False
        if channel in self.optional_channels:
            return config.channel_enabled(self.id, channel)
        return True

    def enabled_channels(self, config: MappingsConfig) -> tuple[Channel, ...]:
        """Return the channels usable under the given configuration."""
        return tuple(c for c in self.channels if self.channel_enabled(c, config))

    def default_channel(self, config: MappingsConfig) -> Channel:
        """Return the channel used when the caller does not pick one."""
        return self.default_channel_rule(config)
