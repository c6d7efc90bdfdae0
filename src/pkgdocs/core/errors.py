"""
Structured error types for pkgdocs.

Every failure the frontend can produce while resolving a documentation page
is expressed as a :class:`PkgDocsError` subclass. Each error carries an
:class:`ErrorCategory` so the HTTP layer can choose a status code and an
error page without inspecting message strings.

Manifesto:
    - **Typed errors:** Callers branch on the class or the category, never on text
    - **Defects are loud:** Registry/dispatcher drift is INTERNAL, never defaulted
    - **Capabilities are explicit:** A missing data-source feature is UNSUPPORTED,
      so users see "feature unavailable" rather than "internal error"
    - **Error chaining:** The underlying exception is kept as ``cause``

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                       PkgDocsError                           │
        │                 (category, context, cause)                   │
        ├─────────────────────────────────────────────────────────────┤
        │  UnknownTabError            INTERNAL      → 500              │
        │  CapabilityNotSupportedError UNSUPPORTED  → 424              │
        │  NotFoundError              NOT_FOUND     → 404              │
        │  InvalidArgumentError       INVALID_INPUT → 400              │
        │  DataSourceError            DATA_SOURCE   → 500              │
        │  TemplateError              TEMPLATE      → 500              │
        │    ├── TemplateCompileError                                  │
        │    └── TemplateRenderError                                   │
        └─────────────────────────────────────────────────────────────┘

Tags:
    error-handling, exception-hierarchy, pkgdocs, frontend

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories used to pick an HTTP status and error page."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    UNSUPPORTED = "UNSUPPORTED"
    DATA_SOURCE = "DATA_SOURCE"
    TEMPLATE = "TEMPLATE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error for logging.

    Attributes:
        path: Request path being served (without version)
        version: Requested version, if any
        tab: Tab being dispatched
        kind: Resource kind (package, module, directory)
        metadata: Free-form extra fields
    """

    path: str | None = None
    version: str | None = None
    tab: str | None = None
    kind: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "version", "tab", "kind"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PkgDocsError(Exception):
    """
    Base exception for all pkgdocs errors.

    Subclasses set ``default_category``; the category can be overridden per
    instance when a generic error needs a more specific classification.

    Examples:
        >>> error = PkgDocsError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(tab="doc").context.tab
        'doc'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PkgDocsError:
        """Add context to this error (fluent API).

        Usage:
            raise NotFoundError("no such package").with_context(path="example.com/a")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# DISPATCH ERRORS
# =============================================================================


class UnknownTabError(PkgDocsError):
    """A dispatcher was asked for a tab it has no case for.

    This is a programming defect: the tab registry and the dispatcher have
    drifted apart. It is never turned into a default tab.
    """

    default_category = ErrorCategory.INTERNAL

    def __init__(self, tab: str, kind: str | None = None):
        super().__init__(
            f"BUG: unable to fetch details: unknown tab {tab!r}",
            context=ErrorContext(tab=tab, kind=kind),
        )
        self.tab = tab


class CapabilityNotSupportedError(PkgDocsError):
    """The active data source does not advertise a capability the tab needs."""

    default_category = ErrorCategory.UNSUPPORTED

    def __init__(self, capability: str, message: str | None = None):
        super().__init__(
            message or f"data source does not support {capability!r}",
            context=ErrorContext(metadata={"capability": capability}),
        )
        self.capability = capability


class InvalidArgumentError(PkgDocsError):
    """A fetcher was called with arguments that cannot be satisfied."""

    default_category = ErrorCategory.INVALID_INPUT


# =============================================================================
# DATA SOURCE ERRORS
# =============================================================================


class DataSourceError(PkgDocsError):
    """The backing data source failed."""

    default_category = ErrorCategory.DATA_SOURCE


class NotFoundError(DataSourceError):
    """The data source has no record for the requested path/version."""

    default_category = ErrorCategory.NOT_FOUND


# =============================================================================
# TEMPLATE ERRORS
# =============================================================================


class TemplateError(PkgDocsError):
    """Base for template compilation and execution failures."""

    default_category = ErrorCategory.TEMPLATE


class TemplateCompileError(TemplateError):
    """Parsing a template set from disk failed."""

    pass


class TemplateRenderError(TemplateError):
    """Executing a compiled template failed."""

    pass


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, PkgDocsError):
        return error.category
    return ErrorCategory.INTERNAL


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PkgDocsError",
    "UnknownTabError",
    "CapabilityNotSupportedError",
    "InvalidArgumentError",
    "DataSourceError",
    "NotFoundError",
    "TemplateError",
    "TemplateCompileError",
    "TemplateRenderError",
    "categorize_error",
]
