"""
Tab registry: which tabs each kind of page has, and how each is rendered.

A details page is split into tabs (overview, doc, versions, ...). The
registry is the static catalog of those tabs for each resource kind. It is
built once by :meth:`TabRegistry.build`, never mutated afterwards, and is
passed explicitly to the dispatcher and the request handlers, so it can be
read from any number of request threads without locking.

The directory view reuses the package tabs so both pages look the same,
but tabs that make no sense for a bare directory (doc, versions, imports,
imported by) are always disabled there.

Tags:
    tabs, registry, frontend, pkgdocs
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType

from pkgdocs.core.errors import UnknownTabError

DEFAULT_TAB = "overview"


class ResourceKind(str, Enum):
    PACKAGE = "package"
    MODULE = "module"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class TabSettings:
    """Tab-specific metadata.

    Attributes:
        name: Tab name used in the URL (``?tab=<name>``)
        display_name: Formatted tab name
        always_show_details: Whether the tab content can be shown even if the
            package is not determined to be redistributable
        template_name: Page template used to render the tab
        disabled: Whether the tab is displayed as disabled
    """

    name: str
    display_name: str
    template_name: str
    always_show_details: bool = False
    disabled: bool = False


PACKAGE_TAB_SETTINGS: tuple[TabSettings, ...] = (
    TabSettings(
        name="doc",
        display_name="Doc",
        template_name="doc.html",
    ),
    TabSettings(
        name="overview",
        display_name="Overview",
        always_show_details=True,
        template_name="overview.html",
    ),
    TabSettings(
        name="subdirectories",
        display_name="Subdirectories",
        always_show_details=True,
        template_name="subdirectories.html",
    ),
    TabSettings(
        name="versions",
        display_name="Versions",
        always_show_details=True,
        template_name="versions.html",
    ),
    TabSettings(
        name="imports",
        display_name="Imports",
        always_show_details=True,
        template_name="imports.html",
    ),
    TabSettings(
        name="importedby",
        display_name="Imported By",
        always_show_details=True,
        template_name="importedby.html",
    ),
    TabSettings(
        name="licenses",
        display_name="Licenses",
        template_name="licenses.html",
    ),
)

MODULE_TAB_SETTINGS: tuple[TabSettings, ...] = (
    TabSettings(
        name="overview",
        display_name="Overview",
        always_show_details=True,
        template_name="overview.html",
    ),
    TabSettings(
        name="packages",
        display_name="Packages",
        always_show_details=True,
        template_name="subdirectories.html",
    ),
    TabSettings(
        name="versions",
        display_name="Versions",
        always_show_details=True,
        template_name="versions.html",
    ),
    TabSettings(
        name="licenses",
        display_name="Licenses",
        template_name="licenses.html",
    ),
)

# Tabs enabled in the directory view.
VALID_DIRECTORY_TABS = frozenset({"licenses", "overview", "subdirectories"})


def directory_tab_settings(package_tabs: Sequence[TabSettings]) -> tuple[TabSettings, ...]:
    """Derive the directory tabs from the package tabs."""
    return tuple(
        ts if ts.name in VALID_DIRECTORY_TABS else replace(ts, disabled=True)
        for ts in package_tabs
    )


class TabRegistry:
    """Immutable per-kind catalogs of :class:`TabSettings`.

    Example:
        registry = TabRegistry.build()
        registry.lookup(ResourceKind.DIRECTORY, "doc").disabled  # True
    """

    def __init__(self, catalogs: Mapping[ResourceKind, Sequence[TabSettings]]):
        ordered: dict[ResourceKind, tuple[TabSettings, ...]] = {}
        lookups: dict[ResourceKind, Mapping[str, TabSettings]] = {}
        for kind in ResourceKind:
            tabs = tuple(catalogs.get(kind, ()))
            ordered[kind] = tabs
            lookups[kind] = MappingProxyType({ts.name: ts for ts in tabs})
        self._tabs = MappingProxyType(ordered)
        self._lookup = MappingProxyType(lookups)

    @classmethod
    def build(cls) -> TabRegistry:
        return cls({
            ResourceKind.PACKAGE: PACKAGE_TAB_SETTINGS,
            ResourceKind.DIRECTORY: directory_tab_settings(PACKAGE_TAB_SETTINGS),
            ResourceKind.MODULE: MODULE_TAB_SETTINGS,
        })

    def tabs_for(self, kind: ResourceKind) -> tuple[TabSettings, ...]:
        """Tabs of a resource kind, in display order."""
        return self._tabs[kind]

    def get(self, kind: ResourceKind, name: str) -> TabSettings | None:
        return self._lookup[kind].get(name)

    def lookup(self, kind: ResourceKind, name: str) -> TabSettings:
        """Return the settings for a tab, or raise :class:`UnknownTabError`."""
        settings = self.get(kind, name)
        if settings is None:
            raise UnknownTabError(name, kind.value)
        return settings

    def resolve(self, kind: ResourceKind, requested: str | None) -> TabSettings:
        """Settings for a user-supplied tab name.

        Missing, unknown or disabled names fall back to the overview tab;
        bad input from a URL is not an error.
        """
        settings = self.get(kind, requested) if requested else None
        if settings is None or settings.disabled:
            return self.lookup(kind, DEFAULT_TAB)
        return settings


def default_registry() -> TabRegistry:
    return TabRegistry.build()
