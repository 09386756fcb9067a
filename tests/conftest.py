"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules: an in-memory
mappings library, a messaging host that records what it was asked to
show, and a manually advanced clock.
"""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import pytest
from mappingsbot.core.config import MappingsConfig
from mappingsbot.core.errors import MappingsLibraryError
from mappingsbot.models.invocation import InvocationContext
from mappingsbot.models.namespace import QueryKind
from mappingsbot.models.pages import Page, ResultEntry
from mappingsbot.models.provider import Provider

DISPLAY_NAMES = {
    "legacy-yarn": "Legacy Yarn",
    "mcp": "MCP",
    "mojang": "Mojang",
    "plasma": "Plasma",
    "yarn": "Yarn",
    "yarrn": "Yarrn",
}


@dataclass(frozen=True)
class FakeDataset:
    """Dataset returned by FakeLibrary."""

    name: str
    version: str


class FakeLibrary:
    """In-memory MappingsLibrary.

    Tests adjust the public attributes to shape responses and inspect
    ``calls`` to see what was asked of the library.
    """

    def __init__(self) -> None:
        self.versions: dict[str, list[str]] = {
            "legacy-yarn": ["1.12.2", "1.13.2", "1.14.4"],
            "mcp": ["1.12.2", "1.15.2", "1.16.5"],
            "mojang": ["1.19.4", "1.20.1", "23w31a"],
            "plasma": ["1.15.2", "1.16.5"],
            "yarn": ["1.19.4", "1.20.1", "23w31a"],
            "yarrn": ["b1.7.3"],
        }
        self.defaults: dict[tuple[str, str], str] = {
            ("legacy-yarn", "official"): "1.14.4",
            ("mcp", "official"): "1.16.5",
            ("mojang", "official"): "1.20.1",
            ("mojang", "snapshot"): "23w31a",
            ("plasma", "official"): "1.16.5",
            ("yarn", "official"): "1.20.1",
            ("yarn", "snapshot"): "23w31a",
            ("yarn", "patchwork"): "1.19.4",
            ("yarrn", "official"): "b1.7.3",
        }
        self.missing: set[tuple[str, str]] = set()
        self.entries: list[ResultEntry] = [
            ResultEntry("net/minecraft/block/Block", "**Class:** net/minecraft/block/Block"),
        ]
        self.error: MappingsLibraryError | None = None
        self.calls: list[tuple[object, ...]] = []

    async def get_all_versions(self, namespace: str) -> set[str]:
        self.calls.append(("all_versions", namespace))
        return set(self.versions.get(namespace, []))

    async def get_sorted_versions(self, namespace: str) -> list[str]:
        self.calls.append(("sorted_versions", namespace))
        if self.error is not None:
            raise self.error
        return list(self.versions.get(namespace, []))

    async def get_dataset(self, namespace: str, version: str) -> FakeDataset | None:
        self.calls.append(("dataset", namespace, version))
        if version not in self.versions.get(namespace, []) or (namespace, version) in self.missing:
            return None
        return FakeDataset(DISPLAY_NAMES[namespace], version)

    async def get_default_version(self, namespace: str, channel: str) -> str:
        self.calls.append(("default", namespace, channel))
        return self.defaults[(namespace, channel)]

    async def query(
        self,
        kind: QueryKind,
        provider: Provider,
        search_key: str,
    ) -> list[ResultEntry]:
        version = await provider.resolve()
        self.calls.append(("query", kind, provider.namespace.id, version, search_key))
        if self.error is not None:
            raise self.error
        return list(self.entries)


@dataclass
class RecordedMessage:
    """A page message sent through RecordingHost."""

    id: int
    page: Page
    page_number: int
    page_count: int
    controls: tuple[str, ...]
    disabled: bool = False


class RecordingHost:
    """MessagingHost that records every request."""

    def __init__(self) -> None:
        self.texts: list[str] = []
        self.messages: list[RecordedMessage] = []
        self.edits: list[RecordedMessage] = []
        self.typing_count = 0

    async def send_text(self, context: InvocationContext, text: str) -> None:
        self.texts.append(text)

    @asynccontextmanager
    async def typing(self, context: InvocationContext) -> AsyncIterator[None]:
        self.typing_count += 1
        yield

    async def send_page(
        self,
        context: InvocationContext,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> RecordedMessage:
        message = RecordedMessage(len(self.messages) + 1, page, page_number, page_count, controls)
        self.messages.append(message)
        return message

    async def edit_page(
        self,
        handle: RecordedMessage,
        page: Page,
        *,
        page_number: int,
        page_count: int,
        controls: tuple[str, ...],
    ) -> None:
        handle.page = page
        handle.page_number = page_number
        handle.page_count = page_count
        handle.controls = controls
        self.edits.append(RecordedMessage(handle.id, page, page_number, page_count, controls))

    async def disable_controls(self, handle: RecordedMessage) -> None:
        handle.disabled = True
        handle.controls = ()


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory and clear MAPPINGS_* variables."""
    for name in list(os.environ):
        if name.startswith("MAPPINGS_"):
            monkeypatch.delenv(name)
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def config() -> MappingsConfig:
    """Configuration with every namespace enabled and no scope rules."""
    return MappingsConfig()


@pytest.fixture
def library() -> FakeLibrary:
    """In-memory mappings library."""
    return FakeLibrary()


@pytest.fixture
def host() -> RecordingHost:
    """Messaging host recording sent texts and pages."""
    return RecordingHost()


@pytest.fixture
def clock() -> FakeClock:
    """Clock that only moves when advanced."""
    return FakeClock()


@pytest.fixture
def context() -> InvocationContext:
    """Invocation from user 42 in guild 1, channel 10, category 100."""
    return InvocationContext(user_id=42, guild_id=1, channel_id=10, category_id=100)
