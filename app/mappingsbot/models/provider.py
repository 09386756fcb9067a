"""Provider models for deferred version resolution.

A Provider selects the dataset a lookup runs against. Providers created
without an explicit version defer the choice until first use, so the
default tracks whatever the library currently considers latest.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING

from mappingsbot.core.errors import MappingsLibraryError, UnresolvedVersionError

if TYPE_CHECKING:
    from mappingsbot.core.ports import Dataset, MappingsLibrary
    from mappingsbot.models.namespace import Namespace

logger = logging.getLogger(__name__)

VersionResolver = Callable[[], Awaitable[str]]


class VersionState(Enum):
    """State of a LazyVersion."""

    PENDING = "pending"
    RESOLVED = "resolved"


class LazyVersion:
    """A version that is either known or computed once on first use.

    Pending versions hold a resolver coroutine function. The first call to
    :meth:`get` runs it and memoizes the result; later calls return the
    memoized version. A resolver that raises leaves the value pending.

    Example:
        >>> default = LazyVersion(lambda: library.get_default_version("yarn", "snapshot"))
        >>> default.state
        <VersionState.PENDING: 'pending'>
    """

    __slots__ = ("_lock", "_resolver", "_version")

    def __init__(self, resolver: VersionResolver) -> None:
        self._resolver = resolver
        self._version: str | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def of(cls, version: str) -> LazyVersion:
        """Create an already resolved version."""

        async def _known() -> str:
            return version

        lazy = cls(_known)
        lazy._version = version
        return lazy

    @property
    def state(self) -> VersionState:
        """Return whether the version has been computed yet."""
        if self._version is None:
            return VersionState.PENDING
        return VersionState.RESOLVED

    @property
    def value(self) -> str | None:
        """Return the version if resolved, None otherwise."""
        return self._version

    async def get(self) -> str:
        """Return the version, running the resolver on first use."""
        if self._version is not None:
            return self._version

        async with self._lock:
            if self._version is None:
                self._version = await self._resolver()
        return self._version

    def __repr__(self) -> str:
        return f"LazyVersion(state={self.state.value}, value={self._version!r})"


class Provider:
    """Handle to the dataset of one namespace and version.

    A provider is either bound (its version is fixed) or empty (the version
    comes from its default supplier, falling back to an injected supplier
    when the default cannot be used). Once a version is chosen the provider
    never rebinds.

    Providers live for a single command invocation; the datasets they load
    are cached by the mappings library.

    Attributes:
        namespace: Namespace the provider belongs to.
    """

    def __init__(
        self,
        namespace: Namespace,
        library: MappingsLibrary,
        *,
        version: str | None = None,
        default: LazyVersion | None = None,
        dataset: Dataset | None = None,
    ) -> None:
        self.namespace = namespace
        self._library = library
        self._version = version
        self._default = default
        self._fallback: LazyVersion | None = None
        self._dataset = dataset

    @classmethod
    def bound(
        cls,
        namespace: Namespace,
        library: MappingsLibrary,
        version: str,
        dataset: Dataset | None = None,
    ) -> Provider:
        """Create a provider bound to an explicit version."""
        return cls(namespace, library, version=version, dataset=dataset)

    @classmethod
    def empty(
        cls,
        namespace: Namespace,
        library: MappingsLibrary,
        default: LazyVersion | None = None,
    ) -> Provider:
        """Create a provider whose version is chosen on first use."""
        return cls(namespace, library, default=default)

    @property
    def is_empty(self) -> bool:
        """Check if no version has been chosen yet."""
        return self._version is None

    @property
    def version(self) -> str | None:
        """Return the chosen version, or None while the provider is empty."""
        return self._version

    @property
    def default(self) -> LazyVersion | None:
        """Return the primary default supplier."""
        return self._default

    @property
    def fallback(self) -> LazyVersion | None:
        """Return the injected fallback supplier."""
        return self._fallback

    def inject_default(self, fallback: LazyVersion) -> None:
        """Attach the fallback default supplier.

        Has no effect on the version of a bound provider.
        """
        self._fallback = fallback

    async def resolve(self) -> str:
        """Return the provider's version, choosing it on first use.

        Raises:
            UnresolvedVersionError: If neither supplier yields a version.
        """
        if self._version is None:
            self._version = await self._resolve_default()
            logger.debug("Resolved %s provider to %s", self.namespace.id, self._version)
        return self._version

    async def load(self) -> Dataset:
        """Resolve the version and fetch its dataset.

        Raises:
            UnresolvedVersionError: If the version has no dataset.
        """
        version = await self.resolve()
        if self._dataset is None:
            dataset = await self._library.get_dataset(self.namespace.id, version)
            if dataset is None:
                raise UnresolvedVersionError(self.namespace.id, version)
            self._dataset = dataset
        return self._dataset

    async def _resolve_default(self) -> str:
        if self._default is not None:
            try:
                version = await self._default.get()
            except MappingsLibraryError as e:
                logger.warning("Default %s version lookup failed: %s", self.namespace.id, e)
            else:
                known = await self._library.get_all_versions(self.namespace.id)
                if version in known:
                    return version
                logger.debug(
                    "Default %s version %r is not available, using fallback",
                    self.namespace.id,
                    version,
                )

        if self._fallback is None:
            raise UnresolvedVersionError(self.namespace.id, None)
        return await self._fallback.get()

    def __repr__(self) -> str:
        return f"Provider(namespace={self.namespace.id!r}, version={self._version!r})"
