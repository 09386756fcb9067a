"""Data models for mappingsbot.

This module exports the core data structures used throughout the application.
"""

from mappingsbot.models.invocation import InvocationContext
from mappingsbot.models.namespace import Channel, CommandNames, Namespace, QueryKind
from mappingsbot.models.pages import PAGE_FOOTER, Page, PageGroup, ResultEntry
from mappingsbot.models.provider import LazyVersion, Provider, VersionState

__all__ = [
    "PAGE_FOOTER",
    "Channel",
    "CommandNames",
    "InvocationContext",
    "LazyVersion",
    "Namespace",
    "Page",
    "PageGroup",
    "Provider",
    "QueryKind",
    "ResultEntry",
    "VersionState",
]
