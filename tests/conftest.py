"""
Shared pytest fixtures for pkgdocs tests.

This module provides:
- A small module corpus (``MODULES``) loaded into a full MemoryStore
- The same corpus laid out as a module mirror for the read-through source
- Tab registry, feature flags and dispatcher instances
- A minimal template directory for renderer tests
- A TestClient over the app factory

Usage:
    def test_something(store, dispatcher):
        ...
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml
from fastapi.testclient import TestClient

import pkgdocs
from pkgdocs.api.app import create_app
from pkgdocs.api.settings import PkgDocsSettings
from pkgdocs.core.feature_flags import build_flag_registry
from pkgdocs.datasource import MemoryStore, ReadThroughDataSource, module_record_from_dict
from pkgdocs.frontend.details import DetailDispatcher
from pkgdocs.frontend.renderer import PAGE_SETS
from pkgdocs.frontend.tabs import TabRegistry

TEMPLATE_DIR = Path(pkgdocs.__file__).parent / "content" / "static" / "html"

PSEUDO_VERSION = "v0.0.0-20200101000000-abcdefabcdef"

MIT = {"types": ["MIT"], "file_path": "LICENSE", "contents": "Permission is hereby granted..."}

MODULES: list[dict[str, Any]] = [
    {
        "module_path": "example.com/hello",
        "version": "v1.0.0",
        "commit_time": "2020-01-01T00:00:00Z",
        "repository_url": "https://git.example.com/hello",
        "readme": {"file_path": "README.md", "contents": "Hello module readme"},
        "licenses": [MIT],
        "packages": [
            {
                "path": "example.com/hello",
                "synopsis": "Package hello says hello.",
                "documentation_html": "<p>Package hello says hello.</p>",
                "imports": ["fmt", "example.com/hello/internal/greet", "example.com/other/util"],
            },
            {"path": "example.com/hello/internal/greet", "synopsis": "Greetings.", "imports": ["strings"]},
            {"path": "example.com/hello/cmd/hi", "name": "main", "imports": ["example.com/hello"]},
        ],
    },
    {
        "module_path": "example.com/hello",
        "version": "v1.1.0",
        "commit_time": "2020-03-01T00:00:00Z",
        "repository_url": "https://git.example.com/hello",
        "readme": {"file_path": "README.md", "contents": "Hello module readme"},
        "licenses": [MIT],
        "packages": [
            {
                "path": "example.com/hello",
                "synopsis": "Package hello says hello.",
                "documentation_html": "<p>Package hello says hello.</p>",
                "imports": ["fmt", "example.com/hello/internal/greet", "example.com/other/util"],
            },
            {"path": "example.com/hello/internal/greet", "synopsis": "Greetings.", "imports": ["strings"]},
            {"path": "example.com/hello/cmd/hi", "name": "main", "imports": ["example.com/hello"]},
        ],
    },
    {
        "module_path": "example.com/hello/v2",
        "version": "v2.0.0",
        "commit_time": "2021-01-01T00:00:00Z",
        "licenses": [MIT],
        "packages": [{"path": "example.com/hello/v2", "name": "hello"}],
    },
    {
        "module_path": "example.com/other",
        "version": "v0.3.0",
        "licenses": [MIT],
        "packages": [{"path": "example.com/other/util", "imports": ["example.com/hello"]}],
    },
    {
        "module_path": "example.com/closed",
        "version": "v1.0.0",
        "is_redistributable": False,
        "readme": {"file_path": "README", "contents": "closed readme"},
        "packages": [
            {"path": "example.com/closed", "documentation_html": "<p>closed source docs</p>"},
        ],
    },
    {
        "module_path": "example.com/pseudo",
        "version": PSEUDO_VERSION,
        "packages": [{"path": "example.com/pseudo"}],
    },
    {
        "module_path": "std",
        "version": "v1.21.0",
        "licenses": [{"types": ["BSD-3-Clause"], "file_path": "LICENSE", "contents": "Copyright..."}],
        "packages": [{"path": "fmt"}, {"path": "strings"}, {"path": "net/http", "imports": ["fmt"]}],
    },
]


def write_mirror(root: Path, modules: list[dict[str, Any]]) -> Path:
    """Lay modules out as ``<root>/<module_path>/@v/<version>.yaml``."""
    for module in modules:
        vdir = root.joinpath(*module["module_path"].split("/")) / "@v"
        vdir.mkdir(parents=True, exist_ok=True)
        (vdir / f"{module['version']}.yaml").write_text(yaml.safe_dump(module), encoding="utf-8")
    return root


def write_templates(root: Path, marker: str = "v1", overrides: dict[str, str] | None = None) -> Path:
    """Write a minimal template directory with every page set the renderer needs.

    ``marker`` appears in both base.html and every page file, so a rendered
    page shows which generation of templates produced it.
    """
    (root / "helpers").mkdir(parents=True, exist_ok=True)
    (root / "pages").mkdir(parents=True, exist_ok=True)
    files = {
        "base.html": f"<base {marker}>{{% block main %}}{{% endblock %}}</base {marker}>",
        "helpers/util.html": "{% macro shout(s) %}{{ s | upper }}{% endmacro %}",
        "pages/details.html": (
            '{% extends "base.html" %}{% block main %}'
            "[{{ page.name }}]{% block details %}{% endblock %}{% endblock %}"
        ),
        "pages/error.html": (
            '{% extends "base.html" %}{% block main %}'
            "error {{ page.title }}: {{ page.message }}{% endblock %}"
        ),
    }
    names = {name for page_set in PAGE_SETS for name in page_set}
    for name in names - {"details.html", "error.html"}:
        parent = "pages/details.html" if any(name == s[0] and len(s) > 1 for s in PAGE_SETS) else "base.html"
        block = "details" if parent != "base.html" else "main"
        files[f"pages/{name}"] = (
            f'{{% extends "{parent}" %}}{{% block {block} %}}{name} {marker} {{{{ page.title }}}}{{% endblock %}}'
        )
    files.update(overrides or {})
    for name, content in files.items():
        (root / name).write_text(content, encoding="utf-8")
    return root


# =============================================================================
# Data sources
# =============================================================================


@pytest.fixture
def modules() -> list[dict[str, Any]]:
    return copy.deepcopy(MODULES)


@pytest.fixture
def store(modules) -> MemoryStore:
    return MemoryStore(module_record_from_dict(m) for m in modules)


@pytest.fixture
def mirror_dir(tmp_path, modules) -> Path:
    return write_mirror(tmp_path / "mirror", modules)


@pytest.fixture
def readthrough(mirror_dir) -> ReadThroughDataSource:
    return ReadThroughDataSource(mirror_dir)


# =============================================================================
# Frontend
# =============================================================================


@pytest.fixture
def registry() -> TabRegistry:
    return TabRegistry.build()


@pytest.fixture
def flags():
    return build_flag_registry()


@pytest.fixture
def dispatcher(registry, flags) -> DetailDispatcher:
    return DetailDispatcher(registry, flags)


@pytest.fixture
def template_dir(tmp_path) -> Path:
    return write_templates(tmp_path / "html")


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def settings() -> PkgDocsSettings:
    return PkgDocsSettings(log_json=True, log_level="WARNING")


@pytest.fixture
def client(settings, store, flags):
    app = create_app(settings, data_source=store, flags=flags)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_templates():
    """The :func:`write_templates` helper, for tests that rewrite templates."""
    return write_templates


@pytest.fixture
def shipped_template_dir() -> Path:
    return TEMPLATE_DIR


@pytest.fixture
def make_mirror():
    """The :func:`write_mirror` helper, for tests that need their own corpus."""
    return write_mirror
