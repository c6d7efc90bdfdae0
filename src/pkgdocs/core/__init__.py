"""
Core infrastructure shared by every pkgdocs layer.

- errors        : typed error hierarchy with categories
- logging       : structlog configuration and context binding
- feature_flags : runtime flags with environment overrides
- protocols     : DataSource protocol and capabilities
- rwlock        : reader/writer lock
"""

from pkgdocs.core.errors import (
    CapabilityNotSupportedError,
    DataSourceError,
    ErrorCategory,
    InvalidArgumentError,
    NotFoundError,
    PkgDocsError,
    TemplateCompileError,
    TemplateError,
    TemplateRenderError,
    UnknownTabError,
)
from pkgdocs.core.protocols import Capability, DataSource, ImportedBySource, supports

__all__ = [
    "Capability",
    "CapabilityNotSupportedError",
    "DataSource",
    "DataSourceError",
    "ErrorCategory",
    "ImportedBySource",
    "InvalidArgumentError",
    "NotFoundError",
    "PkgDocsError",
    "TemplateCompileError",
    "TemplateError",
    "TemplateRenderError",
    "UnknownTabError",
    "supports",
]
