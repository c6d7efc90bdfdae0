"""Tests for the pkgdocs error hierarchy."""

from __future__ import annotations

import pytest

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
    categorize_error,
)


class TestCategories:
    @pytest.mark.parametrize(
        "error,category",
        [
            (UnknownTabError("bogus"), ErrorCategory.INTERNAL),
            (CapabilityNotSupportedError("imported_by"), ErrorCategory.UNSUPPORTED),
            (InvalidArgumentError("bad"), ErrorCategory.INVALID_INPUT),
            (DataSourceError("boom"), ErrorCategory.DATA_SOURCE),
            (NotFoundError("missing"), ErrorCategory.NOT_FOUND),
            (TemplateCompileError("parse"), ErrorCategory.TEMPLATE),
            (TemplateRenderError("exec"), ErrorCategory.TEMPLATE),
        ],
    )
    def test_default_category(self, error, category):
        assert error.category == category
        assert categorize_error(error) == category

    def test_plain_exception_is_internal(self):
        assert categorize_error(ValueError("x")) == ErrorCategory.INTERNAL

    def test_category_override(self):
        error = DataSourceError("gone", category=ErrorCategory.NOT_FOUND)
        assert error.category == ErrorCategory.NOT_FOUND

    def test_hierarchy(self):
        assert issubclass(NotFoundError, DataSourceError)
        assert issubclass(TemplateCompileError, TemplateError)
        assert issubclass(TemplateRenderError, TemplateError)
        assert issubclass(UnknownTabError, PkgDocsError)


class TestUnknownTab:
    def test_message_names_tab(self):
        error = UnknownTabError("bogus", kind="package")
        assert "bogus" in str(error)
        assert error.tab == "bogus"
        assert error.context.kind == "package"


class TestCapability:
    def test_custom_message(self):
        error = CapabilityNotSupportedError("imported_by", "not here")
        assert error.message == "not here"
        assert error.capability == "imported_by"
        assert error.to_dict()["context"] == {"capability": "imported_by"}


class TestContext:
    def test_with_context_known_and_extra_keys(self):
        error = NotFoundError("missing").with_context(path="example.com/a", build="x")
        assert error.context.path == "example.com/a"
        assert error.context.metadata == {"build": "x"}

    def test_to_dict(self):
        cause = OSError("disk")
        error = DataSourceError("read failed", cause=cause).with_context(version="v1.0.0")
        d = error.to_dict()
        assert d["error_type"] == "DataSourceError"
        assert d["category"] == "DATA_SOURCE"
        assert d["context"] == {"version": "v1.0.0"}
        assert d["cause"] == "disk"
        assert error.__cause__ is cause

    def test_to_dict_without_context(self):
        assert "context" not in PkgDocsError("x").to_dict()

    def test_repr(self):
        assert repr(NotFoundError("m")) == "NotFoundError('m', category=NOT_FOUND)"
