"""Lookup result and page models.

This module defines the data structures handed from the mappings library
to the paginator, and the pages the paginator builds from them.
"""

from dataclasses import dataclass
from enum import Enum

PAGE_FOOTER = "Powered by Linkie"


class PageGroup(Enum):
    """Logical page group a page belongs to.

    Lookup sessions show compact results in the MORE group and, when they
    differ, the detailed renderings in the LESS group. The value is the
    label of the control that switches away from the group.

    Attributes:
        MORE: Compact results, switch to see more detail.
        LESS: Detailed results, switch to see less detail.
    """

    MORE = "for more"
    LESS = "for less"

    @property
    def other(self) -> "PageGroup":
        """Return the opposite group."""
        return PageGroup.LESS if self is PageGroup.MORE else PageGroup.MORE


@dataclass(frozen=True, slots=True)
class ResultEntry:
    """One matched identifier rendered in two forms.

    Attributes:
        short: Compact rendering.
        long: Fully detailed rendering.
    """

    short: str
    long: str


@dataclass(frozen=True, slots=True)
class Page:
    """A single page of a pagination session.

    Attributes:
        title: Page title.
        body: Text block shown on the page.
        group: Page group this page belongs to.
        footer: Footer text.
    """

    title: str
    body: str
    group: PageGroup = PageGroup.MORE
    footer: str = PAGE_FOOTER
