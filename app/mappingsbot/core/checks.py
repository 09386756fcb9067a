"""Access control for mappings commands.

Every command runs a single composed check before its arguments are parsed.
The check is built from, in order:

1. Custom checks registered by command name
2. Custom checks registered by namespace
3. The category allow/ban check
4. The channel allow/ban check
5. The guild allow/ban check

Evaluation stops at the first check that fails.

Checks must only inspect the invocation context. They must not send
messages or change any state; this is a contract for anyone registering a
custom check and is not enforced at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from mappingsbot.core.errors import RegistrySealedError

if TYPE_CHECKING:
    from mappingsbot.core.config import MappingsConfig, ScopeRules
    from mappingsbot.models.invocation import InvocationContext
    from mappingsbot.models.namespace import Namespace

logger = logging.getLogger(__name__)


class CheckPredicate(Protocol):
    """Decides whether a command may run for an invocation."""

    async def __call__(self, context: InvocationContext) -> bool: ...


NameCheckFactory = Callable[[str], CheckPredicate]
NamespaceCheckFactory = Callable[["Namespace"], CheckPredicate]


class CheckRegistry:
    """Registered custom check factories.

    Factories are added during setup, before any command runs. Sealing the
    registry freezes it; it is then read concurrently by every invocation
    without locking.
    """

    def __init__(self) -> None:
        self._name_checks: list[NameCheckFactory] = []
        self._namespace_checks: list[NamespaceCheckFactory] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        """Check if the registry no longer accepts factories."""
        return self._sealed

    @property
    def name_checks(self) -> tuple[NameCheckFactory, ...]:
        """Name-scoped factories in registration order."""
        return tuple(self._name_checks)

    @property
    def namespace_checks(self) -> tuple[NamespaceCheckFactory, ...]:
        """Namespace-scoped factories in registration order."""
        return tuple(self._namespace_checks)

    def add_name_check(self, factory: NameCheckFactory) -> None:
        """Register a check factory called with each command's name.

        Raises:
            RegistrySealedError: If the registry has been sealed.
        """
        self._ensure_open()
        self._name_checks.append(factory)

    def add_namespace_check(self, factory: NamespaceCheckFactory) -> None:
        """Register a check factory called with each command's namespace.

        Raises:
            RegistrySealedError: If the registry has been sealed.
        """
        self._ensure_open()
        self._namespace_checks.append(factory)

    def seal(self) -> None:
        """Stop accepting new factories."""
        if not self._sealed:
            logger.debug(
                "Sealing check registry with %d name and %d namespace checks",
                len(self._name_checks),
                len(self._namespace_checks),
            )
        self._sealed = True

    def _ensure_open(self) -> None:
        if self._sealed:
            msg = "Checks must be registered before commands are set up"
            raise RegistrySealedError(msg)


@dataclass(frozen=True, slots=True)
class ScopeCheck:
    """Allow/ban check for one scope of an invocation.

    Attributes:
        name: Scope name used in log messages (e.g., 'guild').
        allowed: If non-empty, the scope must be one of these.
        banned: The scope must not be one of these.
        scope: Extracts the scope identifier from the invocation.
    """

    name: str
    allowed: frozenset[int]
    banned: frozenset[int]
    scope: Callable[[InvocationContext], int | None]

    @classmethod
    def from_rules(
        cls,
        name: str,
        rules: ScopeRules,
        scope: Callable[[InvocationContext], int | None],
    ) -> ScopeCheck:
        """Create a check from configured allow and ban lists."""
        return cls(name, frozenset(rules.allowed), frozenset(rules.banned), scope)

    async def __call__(self, context: InvocationContext) -> bool:
        value = self.scope(context)

        if self.banned and value in self.banned:
            logger.debug("Denied: %s %s is banned", self.name, value)
            return False

        if self.allowed and value not in self.allowed:
            logger.debug("Denied: %s %s is not allowed", self.name, value)
            return False

        return True


@dataclass(frozen=True, slots=True)
class AllOf:
    """Passes when every check passes, stopping at the first failure."""

    checks: tuple[CheckPredicate, ...]

    async def __call__(self, context: InvocationContext) -> bool:
        for check in self.checks:
            if not await check(context):
                return False
        return True


def all_of(checks: Iterable[CheckPredicate]) -> CheckPredicate:
    """Compose checks into one that short-circuits on the first failure."""
    return AllOf(tuple(checks))


class AccessControlPipeline:
    """Builds the composed check for each command.

    Example:
        >>> pipeline = AccessControlPipeline(registry, config)
        >>> check = pipeline.build("yc", YARN)
        >>> await check(context)
        True
    """

    def __init__(self, registry: CheckRegistry, config: MappingsConfig) -> None:
        self._registry = registry
        self._builtin: Sequence[CheckPredicate] = (
            ScopeCheck.from_rules("category", config.categories, lambda c: c.category_id),
            ScopeCheck.from_rules("channel", config.channels, lambda c: c.channel_id),
            ScopeCheck.from_rules("guild", config.guilds, lambda c: c.guild_id),
        )

    def build(self, command: str, namespace: Namespace) -> CheckPredicate:
        """Build the check for a command.

        Custom check factories are invoked here, once per command.

        Args:
            command: Primary name of the command.
            namespace: Namespace the command operates on.

        Returns:
            A single check running every configured check in order.
        """
        checks: list[CheckPredicate] = [factory(command) for factory in self._registry.name_checks]
        checks.extend(factory(namespace) for factory in self._registry.namespace_checks)
        checks.extend(self._builtin)
        return all_of(checks)
