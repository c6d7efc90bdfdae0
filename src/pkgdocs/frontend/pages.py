"""Page data passed to the templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pkgdocs.domain.paths import STDLIB_MODULE_PATH
from pkgdocs.frontend.tabs import TabSettings


@dataclass
class BasePageData:
    """Fields every page template can rely on."""

    title: str = ""
    # Echo of the search box contents.
    query: str = ""
    # Per-request Content-Security-Policy nonce for inline scripts.
    nonce: str = ""


@dataclass
class ErrorPage(BasePageData):
    message: str = ""
    secondary_message: str = ""


@dataclass
class DetailsPage(BasePageData):
    """Everything the details templates need for one tab of one resource."""

    kind: str = ""
    name: str = ""
    path: str = ""
    module_path: str = ""
    version: str = ""
    # Breadcrumb segments: (label, url) pairs from the module root down.
    namespace: list[tuple[str, str]] = field(default_factory=list)
    is_redistributable: bool = True
    can_show_details: bool = True
    settings: TabSettings | None = None
    tabs: tuple[TabSettings, ...] = ()
    details: Any = None
    # URL of the page without the query string; tab links are built from it.
    url_path: str = ""


def breadcrumbs(path: str, module_path: str, version: str | None) -> list[tuple[str, str]]:
    """Links to every directory from the module root down to path."""
    suffix = f"@{version}" if version else ""
    crumbs = [(module_path, f"/{module_path}{suffix}")]
    if module_path == STDLIB_MODULE_PATH:
        rest = "" if path == STDLIB_MODULE_PATH else path
        current = ""
    elif path.startswith(module_path + "/"):
        rest = path[len(module_path) + 1 :]
        current = module_path
    else:
        return crumbs
    for part in filter(None, rest.split("/")):
        current = f"{current}/{part}" if current else part
        crumbs.append((part, f"/{current}{suffix}"))
    return crumbs
