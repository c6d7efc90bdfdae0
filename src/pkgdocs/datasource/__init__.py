"""
Data sources: where module, package and license records come from.

- :class:`MemoryStore`: full store, supports every tab
- :class:`ReadThroughDataSource`: restricted read-through mirror reader
"""

from __future__ import annotations

from pathlib import Path

from pkgdocs.core.errors import InvalidArgumentError
from pkgdocs.core.protocols import DataSource
from pkgdocs.datasource.cache import InMemoryCache
from pkgdocs.datasource.memory import MemoryStore
from pkgdocs.datasource.readthrough import ReadThroughDataSource
from pkgdocs.datasource.records import ModuleRecord, load_fixture, module_record_from_dict


def create_data_source(
    kind: str,
    *,
    fixture_path: str | Path | None = None,
    mirror_dir: str | Path | None = None,
    cache_size: int = 1_000,
    cache_ttl_seconds: int | None = 3600,
) -> DataSource:
    """Build the data source named by configuration."""
    if kind == "memory":
        if fixture_path is None:
            return MemoryStore()
        return MemoryStore.from_fixture(fixture_path)
    if kind == "readthrough":
        if mirror_dir is None:
            raise InvalidArgumentError("readthrough data source requires a mirror directory")
        cache = InMemoryCache(max_size=cache_size, default_ttl_seconds=cache_ttl_seconds)
        return ReadThroughDataSource(mirror_dir, cache=cache)
    raise InvalidArgumentError(f"unknown data source {kind!r}")


__all__ = [
    "InMemoryCache",
    "MemoryStore",
    "ModuleRecord",
    "ReadThroughDataSource",
    "create_data_source",
    "load_fixture",
    "module_record_from_dict",
]
