"""Argument parsing for lookup commands.

Lookup commands take ``<query> [channel] [version]``. The channel is only
accepted by namespaces with more than one channel; a token that is not one
of the namespace's channels is treated as the version.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mappingsbot.core.errors import ArgumentError
from mappingsbot.models.namespace import Channel

if TYPE_CHECKING:
    from mappingsbot.models.namespace import Namespace


@dataclass(frozen=True, slots=True)
class LookupArguments:
    """Parsed arguments of a lookup command.

    Attributes:
        query: Name to search for, dotted or slashed.
        channel: Explicitly requested channel, if any.
        version: Explicitly requested version, if any.
    """

    query: str
    channel: Channel | None = None
    version: str | None = None

    @property
    def search_key(self) -> str:
        """Query with package dots turned into the library's slashes."""
        return self.query.replace(".", "/")


def split_arguments(raw: str) -> list[str]:
    """Split a raw argument string, honouring quotes.

    Raises:
        ArgumentError: If the quoting is unbalanced.
    """
    try:
        return shlex.split(raw)
    except ValueError as e:
        raise ArgumentError(f"Unable to parse arguments: {e}") from e


def usage(namespace: Namespace) -> str:
    """Return the argument signature of the namespace's lookup commands."""
    if namespace.has_channels:
        return "<query> [channel] [version]"
    return "<query> [version]"


def parse_lookup_arguments(namespace: Namespace, tokens: Sequence[str]) -> LookupArguments:
    """Parse lookup command arguments.

    Args:
        namespace: Namespace the command belongs to.
        tokens: Arguments after the command name.

    Returns:
        The parsed arguments. Versions and channels are not validated
        against configuration or the library here.

    Raises:
        ArgumentError: If the query is missing or there are extra arguments.
    """
    if not tokens:
        raise ArgumentError(f"Missing required argument: query\nUsage: {usage(namespace)}")

    query, rest = tokens[0], list(tokens[1:])
    channel: Channel | None = None
    version: str | None = None

    if rest and namespace.has_channels:
        candidate = _as_channel(rest[0])
        if candidate is not None and namespace.supports(candidate):
            channel = candidate
            rest.pop(0)

    if rest:
        version = rest.pop(0)

    if rest:
        raise ArgumentError(f"Unexpected argument: {rest[0]}\nUsage: {usage(namespace)}")

    return LookupArguments(query=query, channel=channel, version=version)


def _as_channel(token: str) -> Channel | None:
    try:
        return Channel(token.lower())
    except ValueError:
        return None
