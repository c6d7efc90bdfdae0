"""Tests for module and package path helpers."""

from __future__ import annotations

import pytest

from pkgdocs.domain.paths import (
    LATEST_VERSION,
    is_std_lib_path,
    path_suffix,
    series_path_for_module,
    split_versioned_path,
    url_is_versioned,
    v1_path,
)


class TestSeriesPath:
    @pytest.mark.parametrize(
        "module_path,series",
        [
            ("example.com/mod", "example.com/mod"),
            ("example.com/mod/v2", "example.com/mod"),
            ("example.com/mod/v12", "example.com/mod"),
            ("example.com/mod/v1", "example.com/mod/v1"),
            ("example.com/mod/v0", "example.com/mod/v0"),
            ("gopkg.in/yaml.v2", "gopkg.in/yaml"),
            ("gopkg.in/check.v1", "gopkg.in/check"),
            ("std", "std"),
        ],
    )
    def test_series(self, module_path, series):
        assert series_path_for_module(module_path) == series


class TestV1Path:
    def test_major_version_module(self):
        assert v1_path("example.com/mod/v2/sub", "example.com/mod/v2") == "example.com/mod/sub"
        assert v1_path("example.com/mod/v2", "example.com/mod/v2") == "example.com/mod"

    def test_std(self):
        assert v1_path("net/http", "std") == "net/http"


class TestSuffix:
    def test_suffix(self):
        assert path_suffix("example.com/mod/a/b", "example.com/mod") == "a/b"
        assert path_suffix("example.com/mod", "example.com/mod") == ""
        assert path_suffix("net/http", "std") == "net/http"

    def test_not_a_prefix_boundary(self):
        assert path_suffix("example.com/modx", "example.com/mod") == "example.com/modx"


class TestStdLib:
    def test_detection(self):
        assert is_std_lib_path("fmt")
        assert is_std_lib_path("net/http")
        assert not is_std_lib_path("example.com/mod")


class TestVersionedPath:
    def test_split(self):
        assert split_versioned_path("example.com/mod@v1.2.3") == ("example.com/mod", "v1.2.3")
        assert split_versioned_path("/example.com/mod/") == ("example.com/mod", LATEST_VERSION)
        assert split_versioned_path("example.com/mod@") == ("example.com/mod", LATEST_VERSION)

    def test_url_is_versioned(self):
        assert url_is_versioned("foo/bar") is False
        assert url_is_versioned("foo/bar@v1.2.3") is True
