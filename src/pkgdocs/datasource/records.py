"""
Module records: the unit of storage behind every data source.

A :class:`ModuleRecord` holds one version of one module: its metadata,
readme, license files and legacy packages. Records are loaded from YAML
documents shaped like::

    module_path: example.com/hello
    version: v1.2.0
    commit_time: 2020-01-01T00:00:00Z
    repository_url: https://github.com/example/hello
    is_redistributable: true
    readme: {file_path: README.md, contents: "# hello"}
    licenses:
      - {types: [MIT], file_path: LICENSE, contents: "..."}
    packages:
      - path: example.com/hello
        name: hello
        synopsis: Package hello says hello.
        documentation_html: "<p>Package hello says hello.</p>"
        imports: [fmt]

A fixture file for :class:`~pkgdocs.datasource.memory.MemoryStore` wraps a
list of these under a top-level ``modules`` key.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from pkgdocs.core.errors import DataSourceError
from pkgdocs.domain.models import (
    LegacyModuleInfo,
    LegacyPackage,
    License,
    LicenseMetadata,
)
from pkgdocs.domain.paths import path_suffix, v1_path


@dataclass
class ModuleRecord:
    module_info: LegacyModuleInfo
    licenses: list[License] = field(default_factory=list)
    packages: list[LegacyPackage] = field(default_factory=list)

    @property
    def module_path(self) -> str:
        return self.module_info.module_path

    @property
    def version(self) -> str:
        return self.module_info.version

    def licenses_for(self, path: str) -> list[License]:
        """Licenses whose file sits in path's directory or one of its parents."""
        suffix = path_suffix(path, self.module_path)
        result = []
        for lic in self.licenses:
            lic_dir = posixpath.dirname(lic.file_path)
            if lic_dir in ("", ".") or suffix == lic_dir or suffix.startswith(lic_dir + "/"):
                result.append(lic)
        return result

    def package(self, path: str) -> LegacyPackage | None:
        for pkg in self.packages:
            if pkg.path == path:
                return pkg
        return None

    def packages_under(self, path: str) -> list[LegacyPackage]:
        """Packages at path or below it, sorted by path."""
        pkgs = [
            p for p in self.packages
            if path == self.module_path or p.path == path or p.path.startswith(path + "/")
        ]
        return sorted(pkgs, key=lambda p: p.path)

    def contains_directory(self, path: str) -> bool:
        return path == self.module_path or bool(self.packages_under(path))


def _parse_time(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise DataSourceError(f"invalid commit_time {value!r}", cause=e) from e


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DataSourceError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _required(entry: dict[str, Any], key: str, what: str) -> Any:
    try:
        return entry[key]
    except KeyError as e:
        raise DataSourceError(f"{what} is missing {key!r}") from e


def module_record_from_dict(data: Any) -> ModuleRecord:
    """Build a record from one parsed YAML module document.

    Raises:
        DataSourceError: the document is not a mapping or lacks a required field
    """
    data = _mapping(data, "module record")
    module_path = _required(data, "module_path", "module record")
    version = _required(data, "version", "module record")

    readme = _mapping(data.get("readme") or {}, "readme")
    mi = LegacyModuleInfo(
        module_path=module_path,
        version=version,
        commit_time=_parse_time(data.get("commit_time")),
        is_redistributable=data.get("is_redistributable", True),
        has_go_mod=data.get("has_go_mod", True),
        repository_url=data.get("repository_url"),
        legacy_readme_file_path=readme.get("file_path"),
        legacy_readme_contents=readme.get("contents"),
    )
    licenses = []
    for lic in data.get("licenses") or []:
        lic = _mapping(lic, "license")
        licenses.append(
            License(
                metadata=LicenseMetadata(
                    types=tuple(lic.get("types") or ()),
                    file_path=_required(lic, "file_path", f"license in {module_path}@{version}"),
                ),
                contents=lic.get("contents", ""),
            )
        )
    record = ModuleRecord(module_info=mi, licenses=licenses)

    for pkg in data.get("packages") or []:
        pkg = _mapping(pkg, "package")
        path = _required(pkg, "path", f"package in {module_path}@{version}")
        record.packages.append(
            LegacyPackage(
                path=path,
                name=pkg.get("name") or posixpath.basename(path),
                v1_path=v1_path(path, module_path),
                synopsis=pkg.get("synopsis", ""),
                is_redistributable=pkg.get("is_redistributable", mi.is_redistributable),
                licenses=[lic.metadata for lic in record.licenses_for(path)],
                documentation_html=pkg.get("documentation_html", ""),
                goos=pkg.get("goos", "linux"),
                goarch=pkg.get("goarch", "amd64"),
                imports=list(pkg.get("imports") or []),
            )
        )
    return record


def load_yaml(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise DataSourceError(f"reading {path}: {e}", cause=e) from e


def load_fixture(path: str | Path) -> list[ModuleRecord]:
    """Load every module in a fixture file."""
    data = _mapping(load_yaml(Path(path)) or {}, f"fixture {path}")
    return [module_record_from_dict(m) for m in data.get("modules") or []]
