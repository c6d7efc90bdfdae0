"""
Module and package path helpers.

Module paths follow Go conventions: a module whose major version is 2 or
higher ends in ``/vN`` (or ``.vN`` for ``gopkg.in`` paths), and every major
version of a module shares one *series path* with that suffix removed. The
standard library is the special module ``std`` whose package paths have no
dot in their first element.
"""

from __future__ import annotations

import re

STDLIB_MODULE_PATH = "std"

# Version placeholder meaning "the newest version the data source knows".
LATEST_VERSION = "latest"

_MAJOR_SUFFIX = re.compile(r"^(?P<series>.+?)(?:/v(?P<major>[2-9]|[1-9][0-9]+))$")
_GOPKG_SUFFIX = re.compile(r"^(?P<series>gopkg\.in/.+?)\.v(?P<major>[0-9]+)(?:-unstable)?$")


def series_path_for_module(module_path: str) -> str:
    """Return the module path with any major version suffix removed.

    >>> series_path_for_module("example.com/mod/v3")
    'example.com/mod'
    >>> series_path_for_module("gopkg.in/yaml.v2")
    'gopkg.in/yaml'
    """
    for pattern in (_GOPKG_SUFFIX, _MAJOR_SUFFIX):
        m = pattern.match(module_path)
        if m:
            return m.group("series")
    return module_path


def path_suffix(full_path: str, prefix: str) -> str:
    """Return ``full_path`` relative to ``prefix`` ("" if they are equal)."""
    if full_path == prefix:
        return ""
    if prefix == STDLIB_MODULE_PATH:
        return full_path
    if full_path.startswith(prefix + "/"):
        return full_path[len(prefix) + 1:]
    return full_path


def v1_path(package_path: str, module_path: str) -> str:
    """Return the package path as it would appear in the series' v1 module."""
    if module_path == STDLIB_MODULE_PATH:
        return package_path
    suffix = path_suffix(package_path, module_path)
    series = series_path_for_module(module_path)
    return f"{series}/{suffix}" if suffix else series


def is_std_lib_path(path: str) -> bool:
    """Report whether path belongs to the standard library."""
    first = path.split("/", 1)[0]
    return "." not in first


def split_versioned_path(full_path: str) -> tuple[str, str]:
    """Split ``path@version`` into its parts; version defaults to latest.

    >>> split_versioned_path("example.com/mod@v1.2.3")
    ('example.com/mod', 'v1.2.3')
    >>> split_versioned_path("example.com/mod")
    ('example.com/mod', 'latest')
    """
    full_path = full_path.strip("/")
    path, sep, version = full_path.partition("@")
    if not sep or not version:
        return path, LATEST_VERSION
    return path, version


def url_is_versioned(path: str) -> bool:
    """Report whether a request path names an explicit version."""
    return "@" in path
