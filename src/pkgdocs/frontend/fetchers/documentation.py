"""Doc tab: the pre-rendered package documentation."""

from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup

from pkgdocs.domain.models import Documentation, LegacyVersionedPackage


@dataclass
class DocumentationDetails:
    goos: str
    goarch: str
    # Sanitized when the module was processed; rendered as-is.
    documentation_html: Markup


def fetch_documentation_details(doc: Documentation) -> DocumentationDetails:
    return DocumentationDetails(
        goos=doc.goos,
        goarch=doc.goarch,
        documentation_html=Markup(doc.html),
    )


def legacy_fetch_documentation_details(pkg: LegacyVersionedPackage) -> DocumentationDetails:
    return DocumentationDetails(
        goos=pkg.package.goos,
        goarch=pkg.package.goarch,
        documentation_html=Markup(pkg.package.documentation_html),
    )
