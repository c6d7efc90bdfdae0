"""
Tests for server settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pkgdocs.api.deps import get_settings
from pkgdocs.api.settings import PkgDocsSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "DATA_SOURCE", "TEMPLATE_DIR", "STATIC_DIR", "USE_DIRECTORIES", "CACHE_SIZE"):
        monkeypatch.delenv(f"PKGDOCS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    def test_defaults(self):
        s = PkgDocsSettings()
        assert s.port == 8080
        assert s.data_source == "memory"
        assert s.use_directories is False
        assert s.reload_templates is False
        assert s.debug is False

    def test_default_template_dir_is_shipped(self):
        s = PkgDocsSettings()
        assert Path(s.resolved_template_dir) == Path(s.static_dir) / "html"
        assert (Path(s.resolved_template_dir) / "base.html").is_file()


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PKGDOCS_PORT", "9000")
        monkeypatch.setenv("PKGDOCS_DATA_SOURCE", "readthrough")
        monkeypatch.setenv("PKGDOCS_USE_DIRECTORIES", "true")
        s = PkgDocsSettings()
        assert s.port == 9000
        assert s.data_source == "readthrough"
        assert s.use_directories is True

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("PKGDOCS_PORT=7000\n")
        assert PkgDocsSettings().port == 7000

    def test_invalid_data_source(self, monkeypatch):
        monkeypatch.setenv("PKGDOCS_DATA_SOURCE", "postgres")
        with pytest.raises(ValidationError):
            PkgDocsSettings()

    def test_cache_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            PkgDocsSettings(cache_size=0)

    def test_explicit_template_dir(self, monkeypatch):
        monkeypatch.setenv("PKGDOCS_TEMPLATE_DIR", "/srv/templates")
        assert PkgDocsSettings().resolved_template_dir == "/srv/templates"


class TestCachedSettings:
    def test_cached(self):
        assert get_settings() is get_settings()
