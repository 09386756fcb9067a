"""Exception hierarchy for mappingsbot.

Errors raised before a query (version resolution, channel gating, argument
parsing) carry the message shown to the user as their string value.
"""


class MappingsBotError(Exception):
    """Base exception for all mappingsbot errors."""


class UnsupportedNamespaceError(MappingsBotError):
    """Raised when configuration names a namespace that is not known."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        super().__init__(f"Unsupported mappings namespace: {namespace}")


class UnresolvedVersionError(MappingsBotError):
    """Raised when a version is not part of a namespace's known versions."""

    def __init__(self, namespace: str, version: str | None) -> None:
        self.namespace = namespace
        self.version = version
        if version is None:
            super().__init__(f"No default {namespace} version is available")
        else:
            super().__init__(f"Invalid {namespace} version: `{version}`")


class ChannelDisabledError(MappingsBotError):
    """Raised when a channel is requested that configuration has turned off."""

    def __init__(self, namespace: str, channel: str) -> None:
        self.namespace = namespace
        self.channel = channel
        super().__init__(f"{channel.capitalize()} support is currently disabled.")


class EmptyResultError(MappingsBotError):
    """Raised when a lookup succeeds but matches nothing."""

    def __init__(self) -> None:
        super().__init__("No results found")


class AccessDeniedError(MappingsBotError):
    """Raised when a command's checks reject an invocation."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Checks failed for command: {command}")


class ArgumentError(MappingsBotError):
    """Raised when command arguments cannot be parsed."""


class RegistrySealedError(MappingsBotError):
    """Raised when a check is registered after the registry was sealed."""


class ConfigError(MappingsBotError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when a config file is not valid TOML."""


class MappingsLibraryError(MappingsBotError):
    """Base exception raised by mappings library implementations."""


class QueryError(MappingsLibraryError):
    """Raised by a mappings library when a lookup query fails."""
