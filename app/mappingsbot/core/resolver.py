"""Provider resolution.

Turns a user-supplied, possibly absent version and channel into a
Provider. Explicit versions are validated immediately; defaults are
deferred until the provider is first used.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mappingsbot.core.errors import UnresolvedVersionError
from mappingsbot.models.provider import LazyVersion, Provider

if TYPE_CHECKING:
    from mappingsbot.core.config import MappingsConfig
    from mappingsbot.core.ports import MappingsLibrary
    from mappingsbot.models.namespace import Channel, Namespace

logger = logging.getLogger(__name__)


class ProviderResolver:
    """Creates providers for lookup commands.

    Channel gating is not done here: callers reject disabled channels
    before asking for a provider.
    """

    def __init__(self, library: MappingsLibrary, config: MappingsConfig) -> None:
        self._library = library
        self._config = config

    async def resolve(
        self,
        namespace: Namespace,
        version: str | None = None,
        channel: Channel | None = None,
    ) -> Provider:
        """Create a provider for a namespace.

        Args:
            namespace: Namespace to look up in.
            version: Explicit version. Takes precedence over the channel.
            channel: Channel whose default version should be used.

        Returns:
            A provider bound to ``version`` if given, otherwise an empty
            provider resolving to the channel's (or the namespace's default
            channel's) current default version on first use.

        Raises:
            UnresolvedVersionError: If ``version`` is not a known version.
        """
        selected = channel or namespace.default_channel(self._config)

        if version is not None:
            provider = await self._bound(namespace, version)
        else:
            provider = Provider.empty(
                namespace,
                self._library,
                self.default_version(namespace, selected),
            )

        provider.inject_default(self.default_version(namespace, selected))
        return provider

    def default_version(self, namespace: Namespace, channel: Channel) -> LazyVersion:
        """Return a pending supplier of a channel's current default version."""

        async def _lookup() -> str:
            return await self._library.get_default_version(namespace.id, channel.value)

        return LazyVersion(_lookup)

    async def _bound(self, namespace: Namespace, version: str) -> Provider:
        known = await self._library.get_all_versions(namespace.id)
        if version not in known:
            raise UnresolvedVersionError(namespace.id, version)

        # Known by name is not enough, the library must also have the dataset
        dataset = await self._library.get_dataset(namespace.id, version)
        if dataset is None:
            logger.info("%s version %s is known but not available", namespace.id, version)
            raise UnresolvedVersionError(namespace.id, version)

        return Provider.bound(namespace, self._library, version, dataset)
