"""Command registration and dispatch.

For every enabled namespace three lookup commands (class, field, method)
and one info command are registered. Running a command goes through these
steps:

1. Run the command's composed check; stop silently if it fails
2. Parse the arguments
3. Reject disabled channels
4. Resolve the provider
5. Query the mappings library
6. Paginate the results

User-facing errors from steps 2-6 are sent back as text and never
propagate out of :meth:`CommandDispatcher.prepare`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mappingsbot.core.arguments import parse_lookup_arguments, split_arguments, usage
from mappingsbot.core.catalog import NamespaceCatalog
from mappingsbot.core.checks import AccessControlPipeline, CheckPredicate, CheckRegistry
from mappingsbot.core.errors import (
    AccessDeniedError,
    ArgumentError,
    ChannelDisabledError,
    EmptyResultError,
    MappingsLibraryError,
    UnresolvedVersionError,
)
from mappingsbot.core.pagination import ResultPaginator, version_listing
from mappingsbot.core.resolver import ProviderResolver
from mappingsbot.core.session import Clock

if TYPE_CHECKING:
    from mappingsbot.core.config import MappingsConfig
    from mappingsbot.core.ports import MappingsLibrary, MessagingHost
    from mappingsbot.core.session import PaginationSession
    from mappingsbot.models.invocation import InvocationContext
    from mappingsbot.models.namespace import Namespace, QueryKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    """A registered chat command.

    Attributes:
        name: Primary command name.
        aliases: Alternative names.
        description: Help text.
        namespace: Namespace the command operates on.
        kind: Identifier kind for lookup commands, None for the info command.
        check: Composed access check.
    """

    name: str
    aliases: tuple[str, ...]
    description: str
    namespace: Namespace
    kind: QueryKind | None
    check: CheckPredicate

    @property
    def is_info(self) -> bool:
        """Check if this is the namespace's info command."""
        return self.kind is None

    @property
    def signature(self) -> str:
        """Argument signature shown in help."""
        if self.kind is None:
            return ""
        return usage(self.namespace)


def lookup_description(namespace: Namespace, kind: QueryKind, config: MappingsConfig) -> str:
    """Help text of a lookup command, listing the enabled channels."""
    description = f"Look up {namespace.display_name} mappings info for a {kind.value}.\n\n"
    if namespace.has_channels:
        channels = ", ".join(f"`{c.value}`" for c in namespace.enabled_channels(config))
        description += f"**Channels:** {channels}\n\n"
    description += (
        f"For more information or a list of versions for {namespace.display_name} "
        f"mappings, you can use the `{namespace.info.name}` command."
    )
    return description


def info_description(namespace: Namespace) -> str:
    """Help text of a namespace's info command."""
    return (
        f"Get information and a list of supported versions for {namespace.display_name} mappings."
    )


def build_commands(
    config: MappingsConfig,
    registry: CheckRegistry,
    catalog: NamespaceCatalog | None = None,
) -> list[Command]:
    """Build the command set of every enabled namespace.

    Namespaces that are not known are skipped. If no namespace is left,
    no commands are built.

    Args:
        config: Loaded configuration.
        registry: Custom checks to include in every command's check.
        catalog: Known namespaces. Defaults to every supported namespace.

    Returns:
        Commands in registration order: class, field, method, info per namespace.
    """
    catalog = catalog if catalog is not None else NamespaceCatalog.default()
    namespaces = catalog.enabled(config.enabled_namespaces)
    if not namespaces:
        logger.warning("No namespaces have been enabled, not registering commands.")
        return []

    pipeline = AccessControlPipeline(registry, config)
    commands: list[Command] = []

    for namespace in namespaces:
        for kind, names in namespace.lookups.items():
            commands.append(
                Command(
                    name=names.name,
                    aliases=names.aliases,
                    description=lookup_description(namespace, kind, config),
                    namespace=namespace,
                    kind=kind,
                    check=pipeline.build(names.name, namespace),
                )
            )
        commands.append(
            Command(
                name=namespace.info.name,
                aliases=namespace.info.aliases,
                description=info_description(namespace),
                namespace=namespace,
                kind=None,
                check=pipeline.build(namespace.info.name, namespace),
            )
        )

    return commands


class CommandDispatcher:
    """Registers mappings commands and runs invocations of them.

    Custom checks must be added to :attr:`registry` before :meth:`setup`,
    which seals it.

    Example:
        >>> dispatcher = CommandDispatcher(config, library, host)
        >>> dispatcher.registry.add_name_check(my_check_factory)
        >>> dispatcher.setup()
        >>> await dispatcher.dispatch(context, "yc", "Block")
    """

    def __init__(
        self,
        config: MappingsConfig,
        library: MappingsLibrary,
        host: MessagingHost,
        *,
        registry: CheckRegistry | None = None,
        catalog: NamespaceCatalog | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self._config = config
        self._library = library
        self._host = host
        self._registry = registry if registry is not None else CheckRegistry()
        self._catalog = catalog
        self._resolver = ProviderResolver(library, config)
        self._paginator = ResultPaginator(config.timeout_delta, clock=clock)
        self._commands: dict[str, Command] = {}
        self._names: dict[str, Command] = {}

    @property
    def registry(self) -> CheckRegistry:
        """Registry for custom checks."""
        return self._registry

    @property
    def commands(self) -> tuple[Command, ...]:
        """Registered commands in registration order."""
        return tuple(self._commands.values())

    def find(self, name: str) -> Command | None:
        """Look up a command by name or alias (case-insensitive)."""
        return self._names.get(name.lower())

    def setup(self) -> list[Command]:
        """Seal the check registry and register commands.

        Returns:
            The commands registered by this call.

        Raises:
            ValueError: If a command name or alias is already registered.
        """
        self._registry.seal()

        commands = build_commands(self._config, self._registry, self._catalog)
        for command in commands:
            self._register(command)

        if commands:
            logger.info(
                "Registered %d commands for namespaces: %s",
                len(commands),
                ", ".join(dict.fromkeys(c.namespace.id for c in commands)),
            )
        return commands

    async def dispatch(
        self,
        context: InvocationContext,
        name: str,
        arguments: str | Sequence[str] = "",
    ) -> PaginationSession | None:
        """Run a command and serve its pagination session until it expires.

        Returns:
            The expired session, or None if the command produced no session.
        """
        session = await self.prepare(context, name, arguments)
        if session is not None:
            await session.run(self._host, context)
        return session

    async def prepare(
        self,
        context: InvocationContext,
        name: str,
        arguments: str | Sequence[str] = "",
    ) -> PaginationSession | None:
        """Run a command up to the point where its session is ready.

        Args:
            context: The invocation.
            name: Command name or alias.
            arguments: Raw argument string or already split tokens.

        Returns:
            A new session, or None if the command is unknown, was denied, or
            replied with a notice instead of results.
        """
        command = self.find(name)
        if command is None:
            logger.debug("Unknown command: %s", name)
            return None

        try:
            await self.authorize(context, command)
        except AccessDeniedError as e:
            logger.debug("%s (user %s)", e, context.user_id)
            return None

        try:
            if command.kind is None:
                return await self._run_info(context, command)
            return await self._run_lookup(context, command, command.kind, arguments)
        except (ArgumentError, ChannelDisabledError, UnresolvedVersionError, EmptyResultError) as e:
            await self._host.send_text(context, str(e))
            return None

    async def authorize(self, context: InvocationContext, command: Command) -> None:
        """Run a command's composed check.

        Raises:
            AccessDeniedError: If any check rejects the invocation.
        """
        if not await command.check(context):
            raise AccessDeniedError(command.name)

    async def _run_lookup(
        self,
        context: InvocationContext,
        command: Command,
        kind: QueryKind,
        arguments: str | Sequence[str],
    ) -> PaginationSession | None:
        namespace = command.namespace
        tokens = split_arguments(arguments) if isinstance(arguments, str) else list(arguments)

        async with self._host.typing(context):
            args = parse_lookup_arguments(namespace, tokens)

        if args.channel is not None and not namespace.channel_enabled(args.channel, self._config):
            raise ChannelDisabledError(namespace.id, args.channel.value)

        provider = await self._resolver.resolve(namespace, args.version, args.channel)

        async with self._host.typing(context):
            try:
                entries = await self._library.query(kind, provider, args.search_key)
                if not entries:
                    raise EmptyResultError()
                dataset = await provider.load()
            except MappingsLibraryError as e:
                logger.warning("%s query for %r failed: %s", command.name, args.query, e)
                await self._host.send_text(context, str(e))
                return None

        logger.debug(
            "%s %r matched %d entries in %s %s",
            command.name,
            args.query,
            len(entries),
            namespace.id,
            dataset.version,
        )

        title = f"List of {dataset.name} {kind.plural}: {dataset.version}"
        return self._paginator.paginate(title, entries, context.user_id)

    async def _run_info(
        self,
        context: InvocationContext,
        command: Command,
    ) -> PaginationSession | None:
        namespace = command.namespace
        default_channel = namespace.default_channel(self._config)

        async with self._host.typing(context):
            try:
                versions = await self._library.get_sorted_versions(namespace.id)
                defaults = {
                    default_channel: await self._library.get_default_version(
                        namespace.id, default_channel.value
                    )
                }
                for channel in namespace.enabled_channels(self._config):
                    if channel not in defaults:
                        defaults[channel] = await self._library.get_default_version(
                            namespace.id, channel.value
                        )
            except MappingsLibraryError as e:
                logger.warning("Listing %s versions failed: %s", namespace.id, e)
                await self._host.send_text(context, str(e))
                return None

        blocks = version_listing(
            namespace, versions, defaults, default_channel, self._see_also(namespace)
        )
        return self._paginator.paginate_static(
            f"Mappings info: {namespace.display_name}",
            blocks,
            context.user_id,
        )

    def _see_also(self, namespace: Namespace) -> Namespace | None:
        if namespace.related is None or namespace.related not in self._config.enabled_namespaces:
            return None
        catalog = self._catalog if self._catalog is not None else NamespaceCatalog.default()
        if namespace.related not in catalog:
            return None
        return catalog.get(namespace.related)

    def _register(self, command: Command) -> None:
        for name in (command.name, *command.aliases):
            key = name.lower()
            if key in self._names:
                msg = f"Command name {name!r} is already registered"
                raise ValueError(msg)
            self._names[key] = command
        self._commands[command.name] = command
