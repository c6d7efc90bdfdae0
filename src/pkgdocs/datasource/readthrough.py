"""
Read-through data source over a module mirror directory.

Modules are read on demand from a mirror laid out like a module proxy::

    <mirror_dir>/<module_path>/@v/<version>.yaml

and kept in an :class:`InMemoryCache`. The source only ever sees the
modules a request names, so it cannot answer reverse-import queries and
advertises no optional capabilities.
"""

from __future__ import annotations

import posixpath
from pathlib import Path

from pkgdocs.core.errors import DataSourceError
from pkgdocs.core.logging import get_logger
from pkgdocs.domain.paths import STDLIB_MODULE_PATH, series_path_for_module
from pkgdocs.datasource.base import RecordBackedSource
from pkgdocs.datasource.cache import InMemoryCache
from pkgdocs.datasource.records import ModuleRecord, load_yaml, module_record_from_dict

logger = get_logger(__name__)

_VERSION_DIR = "@v"


class ReadThroughDataSource(RecordBackedSource):
    """Restricted data source that loads module versions lazily from disk."""

    capabilities = frozenset()

    def __init__(
        self,
        mirror_dir: str | Path,
        *,
        cache: InMemoryCache | None = None,
    ):
        self._mirror_dir = Path(mirror_dir)
        self._cache = cache or InMemoryCache()

    def _module_dir(self, module_path: str) -> Path | None:
        parts = module_path.split("/")
        if any(p in ("", ".", "..") or p.startswith("@") for p in parts):
            return None
        return self._mirror_dir.joinpath(*parts) / _VERSION_DIR

    def _module_versions(self, module_path: str) -> list[str]:
        vdir = self._module_dir(module_path)
        if vdir is None or not vdir.is_dir():
            return []
        return sorted(f.stem for f in vdir.glob("*.yaml"))

    def _load_record(self, module_path: str, version: str) -> ModuleRecord | None:
        key = f"{module_path}@{version}"
        record = self._cache.get(key)
        if record is not None:
            return record

        vdir = self._module_dir(module_path)
        if vdir is None:
            return None
        path = vdir / f"{version}.yaml"
        if not path.is_file():
            return None

        data = load_yaml(path) or {}
        if not isinstance(data, dict):
            raise DataSourceError(f"{path}: module record must be a mapping, got {type(data).__name__}")
        data.setdefault("module_path", module_path)
        data.setdefault("version", version)
        record = module_record_from_dict(data)
        self._cache.set(key, record)
        logger.debug("module_loaded", module_path=module_path, version=version)
        return record

    def _series_module_paths(self, series_path: str) -> list[str]:
        if series_path == STDLIB_MODULE_PATH:
            return [series_path] if self._module_versions(series_path) else []

        candidates = {series_path}
        root = self._module_dir(series_path)
        if root is not None:
            series_dir = root.parent
            if series_dir.is_dir():
                candidates.update(f"{series_path}/{child.name}" for child in series_dir.iterdir())
            if series_dir.parent.is_dir():
                candidates.update(
                    posixpath.join(posixpath.dirname(series_path), child.name)
                    for child in series_dir.parent.glob(series_dir.name + ".v*")
                )
        return sorted(
            mp for mp in candidates
            if series_path_for_module(mp) == series_path and self._module_versions(mp)
        )
