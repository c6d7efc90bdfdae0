"""
In-memory full store.

Holds every module record in process memory and, because it sees the whole
corpus, can answer reverse-import ("imported by") queries.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path

from pkgdocs.core.logging import get_logger
from pkgdocs.core.protocols import Capability
from pkgdocs.domain import semver
from pkgdocs.domain.paths import series_path_for_module
from pkgdocs.datasource.base import RecordBackedSource
from pkgdocs.datasource.records import ModuleRecord, load_fixture

logger = get_logger(__name__)


class MemoryStore(RecordBackedSource):
    """Full data source over a fixed set of module records.

    Example:
        store = MemoryStore.from_fixture("modules.yaml")
        info = store.get_path_info("example.com/hello", "latest")
    """

    capabilities = frozenset({Capability.IMPORTED_BY})

    def __init__(self, records: Iterable[ModuleRecord] = ()):
        self._lock = threading.Lock()
        self._records: dict[str, dict[str, ModuleRecord]] = {}
        for record in records:
            self.insert(record)

    @classmethod
    def from_fixture(cls, path: str | Path) -> MemoryStore:
        records = load_fixture(path)
        logger.info("fixture_loaded", path=str(path), modules=len(records))
        return cls(records)

    def insert(self, record: ModuleRecord) -> None:
        """Add or replace one module version."""
        with self._lock:
            self._records.setdefault(record.module_path, {})[record.version] = record

    def _module_versions(self, module_path: str) -> list[str]:
        with self._lock:
            return list(self._records.get(module_path, {}))

    def _load_record(self, module_path: str, version: str) -> ModuleRecord | None:
        with self._lock:
            return self._records.get(module_path, {}).get(version)

    def _series_module_paths(self, series_path: str) -> list[str]:
        with self._lock:
            return sorted(mp for mp in self._records if series_path_for_module(mp) == series_path)

    def _latest_records(self) -> list[ModuleRecord]:
        with self._lock:
            by_module = {mp: dict(versions) for mp, versions in self._records.items()}
        latest = []
        for versions in by_module.values():
            tagged = [v for v in versions if not semver.is_pseudo(v)]
            newest = semver.sort_newest_first(tagged or list(versions))[0]
            latest.append(versions[newest])
        return latest

    def get_imported_by(self, path: str, module_path: str, limit: int) -> list[str]:
        importers = {
            pkg.path
            for record in self._latest_records()
            if record.module_path != module_path
            for pkg in record.packages
            if path in pkg.imports
        }
        return sorted(importers)[:limit]
