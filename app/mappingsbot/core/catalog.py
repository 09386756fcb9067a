"""Registry of the mappings namespaces mappingsbot knows about.

Each namespace carries its channels and the names of the commands it
registers. The catalog is built once and never changes afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from mappingsbot.core.errors import UnsupportedNamespaceError
from mappingsbot.models.namespace import Channel, CommandNames, Namespace, QueryKind

if TYPE_CHECKING:
    from mappingsbot.core.config import MappingsConfig

logger = logging.getLogger(__name__)


def _lookups(
    class_name: str,
    field_name: str,
    method_name: str,
    *prefixes: str,
) -> dict[QueryKind, CommandNames]:
    """Build lookup command names, deriving aliases from prefixes.

    An alias is the prefix followed by the kind's letter, so the prefix
    'yarn' yields 'yarnc', 'yarnf' and 'yarnm'.
    """
    names = {
        QueryKind.CLASS: (class_name, "c"),
        QueryKind.FIELD: (field_name, "f"),
        QueryKind.METHOD: (method_name, "m"),
    }
    return {
        kind: CommandNames(name, tuple(f"{prefix}{suffix}" for prefix in prefixes))
        for kind, (name, suffix) in names.items()
    }


def _yarn_default_channel(config: MappingsConfig) -> Channel:
    return config.yarn.default_channel


LEGACY_YARN = Namespace(
    id="legacy-yarn",
    display_name="Legacy Yarn",
    channels=(Channel.OFFICIAL,),
    lookups=_lookups("lyc", "lyf", "lym", "lyarn", "legacy-yarn", "legacyyarn", "legacyarn"),
    info=CommandNames("lyarn", ("legacy-yarn", "legacyyarn", "legacyarn")),
)

MCP = Namespace(
    id="mcp",
    display_name="MCP",
    channels=(Channel.OFFICIAL,),
    lookups=_lookups("mcpc", "mcpf", "mcpm"),
    info=CommandNames("mcp"),
)

MOJANG = Namespace(
    id="mojang",
    display_name="Mojang",
    channels=(Channel.OFFICIAL, Channel.SNAPSHOT),
    lookups=_lookups("mmc", "mmf", "mmm", "moj", "mojmap"),
    info=CommandNames("mojang", ("mojmap",)),
)

PLASMA = Namespace(
    id="plasma",
    display_name="Plasma",
    channels=(Channel.OFFICIAL,),
    lookups=_lookups("pc", "pf", "pm"),
    info=CommandNames("plasma"),
)

YARN = Namespace(
    id="yarn",
    display_name="Yarn",
    channels=(Channel.OFFICIAL, Channel.SNAPSHOT, Channel.PATCHWORK),
    optional_channels=frozenset({Channel.PATCHWORK}),
    lookups=_lookups("yc", "yf", "ym", "yarn"),
    info=CommandNames("yarn"),
    default_channel_rule=_yarn_default_channel,
    related="legacy-yarn",
)

YARRN = Namespace(
    id="yarrn",
    display_name="Yarrn",
    channels=(Channel.OFFICIAL,),
    lookups=_lookups("yrc", "yrf", "yrm"),
    info=CommandNames("yarrn"),
)


class NamespaceCatalog:
    """Static registry of known namespaces.

    Example:
        >>> catalog = NamespaceCatalog.default()
        >>> catalog.get("yarn").channels
        (<Channel.OFFICIAL: 'official'>, <Channel.SNAPSHOT: 'snapshot'>, ...)
    """

    def __init__(self, namespaces: Iterable[Namespace]) -> None:
        entries: dict[str, Namespace] = {}
        for namespace in namespaces:
            if namespace.id in entries:
                msg = f"Duplicate namespace: {namespace.id}"
                raise ValueError(msg)
            entries[namespace.id] = namespace
        self._namespaces: Mapping[str, Namespace] = MappingProxyType(entries)

    @classmethod
    def default(cls) -> NamespaceCatalog:
        """Create the catalog of all namespaces supported by the bot."""
        return cls((LEGACY_YARN, MCP, MOJANG, PLASMA, YARN, YARRN))

    def __contains__(self, namespace_id: object) -> bool:
        return namespace_id in self._namespaces

    def __iter__(self) -> Iterator[Namespace]:
        return iter(self._namespaces.values())

    def __len__(self) -> int:
        return len(self._namespaces)

    def get(self, namespace_id: str) -> Namespace:
        """Look up a namespace by identifier.

        Raises:
            UnsupportedNamespaceError: If the namespace is unknown.
        """
        try:
            return self._namespaces[namespace_id]
        except KeyError:
            raise UnsupportedNamespaceError(namespace_id) from None

    def enabled(self, namespace_ids: Iterable[str]) -> list[Namespace]:
        """Return the known namespaces among the given identifiers.

        Unknown identifiers are logged and skipped so that the remaining
        namespaces can still register their commands.

        Args:
            namespace_ids: Identifiers from configuration, in order.

        Returns:
            Namespaces in configuration order, without duplicates.
        """
        result: list[Namespace] = []
        for namespace_id in namespace_ids:
            try:
                namespace = self.get(namespace_id)
            except UnsupportedNamespaceError as e:
                logger.error("%s, skipping its commands", e)
                continue
            if namespace not in result:
                result.append(namespace)
        return result
