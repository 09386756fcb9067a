"""Unit tests for namespace models.

Tests for Channel, QueryKind, CommandNames and Namespace.
"""

import pytest
from mappingsbot.core.catalog import MOJANG, PLASMA, YARN
from mappingsbot.core.config import MappingsConfig, YarnSettings
from mappingsbot.models.namespace import Channel, CommandNames, Namespace, QueryKind


def _names() -> dict[QueryKind, CommandNames]:
    return {
        QueryKind.CLASS: CommandNames("tc"),
        QueryKind.FIELD: CommandNames("tf"),
        QueryKind.METHOD: CommandNames("tm"),
    }


class TestChannel:
    """Tests for Channel enum."""

    def test_channel_values(self) -> None:
        """Channel enum has expected string values."""
        assert Channel.OFFICIAL.value == "official"
        assert Channel.SNAPSHOT.value == "snapshot"
        assert Channel.PATCHWORK.value == "patchwork"

    def test_channel_label(self) -> None:
        """Channel label is capitalised."""
        assert Channel.SNAPSHOT.label == "Snapshot"


class TestQueryKind:
    """Tests for QueryKind enum."""

    @pytest.mark.parametrize(
        ("kind", "plural"),
        [
            (QueryKind.CLASS, "classes"),
            (QueryKind.FIELD, "fields"),
            (QueryKind.METHOD, "methods"),
        ],
    )
    def test_plural(self, kind: QueryKind, plural: str) -> None:
        """QueryKind plural is used in page titles."""
        assert kind.plural == plural


class TestCommandNames:
    """Tests for CommandNames dataclass."""

    def test_all_lists_name_first(self) -> None:
        """all returns the primary name followed by aliases."""
        names = CommandNames("mmc", ("mojc", "mojmapc"))

        assert names.all == ("mmc", "mojc", "mojmapc")

    def test_empty_name_raises(self) -> None:
        """CommandNames rejects an empty name."""
        with pytest.raises(ValueError, match="cannot be empty"):
            CommandNames("")

    def test_is_frozen(self) -> None:
        """CommandNames is immutable."""
        names = CommandNames("yc")

        with pytest.raises(AttributeError):
            names.name = "other"  # type: ignore[misc]


class TestNamespace:
    """Tests for Namespace dataclass."""

    def test_requires_a_channel(self) -> None:
        """Namespace rejects an empty channel list."""
        with pytest.raises(ValueError, match="at least one channel"):
            Namespace("test", "Test", (), _names(), CommandNames("test"))

    def test_optional_channels_must_be_supported(self) -> None:
        """Optional channels must be among the namespace's channels."""
        with pytest.raises(ValueError, match="subset"):
            Namespace(
                "test",
                "Test",
                (Channel.OFFICIAL,),
                _names(),
                CommandNames("test"),
                optional_channels=frozenset({Channel.PATCHWORK}),
            )

    def test_requires_every_lookup_kind(self) -> None:
        """Namespace needs class, field and method commands."""
        names = _names()
        del names[QueryKind.FIELD]

        with pytest.raises(ValueError, match="class, field and method"):
            Namespace("test", "Test", (Channel.OFFICIAL,), names, CommandNames("test"))

    def test_single_channel_namespace_has_no_channels(self) -> None:
        """Namespaces with one channel don't accept a channel argument."""
        assert PLASMA.has_channels is False
        assert MOJANG.has_channels is True

    def test_supports(self) -> None:
        """supports reflects the declared channels."""
        assert MOJANG.supports(Channel.SNAPSHOT)
        assert not MOJANG.supports(Channel.PATCHWORK)

    def test_optional_channel_disabled_by_default(self, config: MappingsConfig) -> None:
        """Optional channels are off unless enabled in config."""
        assert YARN.channel_enabled(Channel.SNAPSHOT, config)
        assert not YARN.channel_enabled(Channel.PATCHWORK, config)
        assert YARN.enabled_channels(config) == (Channel.OFFICIAL, Channel.SNAPSHOT)

    def test_optional_channel_enabled_by_config(self) -> None:
        """Enabling patchwork in config makes it usable."""
        config = MappingsConfig(yarn=YarnSettings(channels=[Channel.PATCHWORK]))

        assert YARN.channel_enabled(Channel.PATCHWORK, config)
        assert Channel.PATCHWORK in YARN.enabled_channels(config)

    def test_unsupported_channel_is_never_enabled(self, config: MappingsConfig) -> None:
        """Channels outside the namespace are never enabled."""
        assert not PLASMA.channel_enabled(Channel.SNAPSHOT, config)

    def test_default_channel_follows_config(self) -> None:
        """Yarn's default channel is read from the yarn section."""
        config = MappingsConfig(yarn=YarnSettings(default_channel=Channel.SNAPSHOT))

        assert YARN.default_channel(config) is Channel.SNAPSHOT
        assert MOJANG.default_channel(config) is Channel.OFFICIAL

    def test_namespaces_compare_by_identity(self) -> None:
        """Namespaces are hashable and equal only to themselves."""
        assert {YARN: 1}[YARN] == 1
        assert YARN != MOJANG

    def test_lookups_are_read_only(self) -> None:
        """Lookup command names can't be changed after construction."""
        with pytest.raises(TypeError):
            YARN.lookups[QueryKind.CLASS] = CommandNames("xc")  # type: ignore[index]

        assert YARN.lookups[QueryKind.CLASS].name == "yc"

    def test_lookups_are_copied(self) -> None:
        """Changing the source dict doesn't affect the namespace."""
        names = _names()
        namespace = Namespace("test", "Test", (Channel.OFFICIAL,), names, CommandNames("test"))

        names[QueryKind.CLASS] = CommandNames("xc")

        assert namespace.lookups[QueryKind.CLASS].name == "tc"
