"""
Tests for the detail dispatcher.

Covers dispatch of every registered tab, capability checks, unknown-tab
errors, and equivalence of the legacy and version-aware paths.
"""

from __future__ import annotations

import pytest

from pkgdocs.core.errors import CapabilityNotSupportedError, NotFoundError, UnknownTabError
from pkgdocs.core.feature_flags import USE_DIRECTORIES
from pkgdocs.datasource import MemoryStore, ReadThroughDataSource, module_record_from_dict
from pkgdocs.frontend.details import (
    NOT_SUPPORTED_MESSAGE,
    DetailDispatcher,
    DirectoryView,
    LegacyDirectoryView,
    LegacyPackageView,
    ModuleView,
    PackageView,
    ResourceShape,
)
from pkgdocs.frontend.fetchers import (
    DirectoryDetails,
    DocumentationDetails,
    ImportedByDetails,
    ImportsDetails,
    LicensesDetails,
    OverviewDetails,
    VersionsDetails,
)
from pkgdocs.frontend.tabs import (
    MODULE_TAB_SETTINGS,
    PACKAGE_TAB_SETTINGS,
    ResourceKind,
    TabRegistry,
    TabSettings,
    directory_tab_settings,
)

HELLO = "example.com/hello"
HELLO_CMD = "example.com/hello/cmd"

EXPECTED_PACKAGE_PAYLOADS = {
    "doc": DocumentationDetails,
    "overview": OverviewDetails,
    "subdirectories": DirectoryDetails,
    "versions": VersionsDetails,
    "imports": ImportsDetails,
    "importedby": ImportedByDetails,
    "licenses": LicensesDetails,
}


def legacy_package(ds, path=HELLO, module_path=HELLO, version="v1.0.0"):
    return ds.legacy_get_package(path, module_path, version)


def versioned_package(ds, path=HELLO, module_path=HELLO, version="v1.0.0"):
    return ds.get_directory(path, module_path, version)


def module_args(ds, module_path=HELLO, version="v1.0.0"):
    mi = ds.legacy_get_module_info(module_path, version)
    return mi, ds.legacy_get_module_licenses(module_path, version), mi.readme


# =============================================================================
# Package tabs
# =============================================================================


class TestPackageDispatch:
    @pytest.mark.parametrize("tab", [ts.name for ts in PACKAGE_TAB_SETTINGS])
    def test_every_tab_legacy(self, dispatcher, store, tab):
        details = dispatcher.legacy_fetch_details_for_package(tab, store, legacy_package(store))
        assert isinstance(details, EXPECTED_PACKAGE_PAYLOADS[tab])

    @pytest.mark.parametrize("tab", [ts.name for ts in PACKAGE_TAB_SETTINGS])
    def test_every_tab_versioned(self, dispatcher, store, tab):
        details = dispatcher.fetch_details_for_package(tab, store, versioned_package(store))
        assert isinstance(details, EXPECTED_PACKAGE_PAYLOADS[tab])

    @pytest.mark.parametrize("tab", [ts.name for ts in PACKAGE_TAB_SETTINGS if ts.name != "importedby"])
    def test_every_other_tab_against_readthrough(self, dispatcher, readthrough, tab):
        details = dispatcher.legacy_fetch_details_for_package(tab, readthrough, legacy_package(readthrough))
        assert isinstance(details, EXPECTED_PACKAGE_PAYLOADS[tab])

    def test_doc(self, dispatcher, store):
        details = dispatcher.legacy_fetch_details_for_package("doc", store, legacy_package(store))
        assert str(details.documentation_html) == "<p>Package hello says hello.</p>"
        assert (details.goos, details.goarch) == ("linux", "amd64")

    def test_imports_are_split(self, dispatcher, store):
        details = dispatcher.legacy_fetch_details_for_package("imports", store, legacy_package(store))
        assert details.std_lib == ["fmt"]
        assert details.internal_imports == ["example.com/hello/internal/greet"]
        assert details.external_imports == ["example.com/other/util"]

    def test_imported_by_excludes_own_module(self, dispatcher, store):
        details = dispatcher.legacy_fetch_details_for_package("importedby", store, legacy_package(store))
        assert details.imported_by == ["example.com/other/util"]
        assert details.total == 1
        assert details.total_is_exact

    def test_subdirectories_exclude_package_itself(self, dispatcher, store):
        details = dispatcher.legacy_fetch_details_for_package("subdirectories", store, legacy_package(store))
        assert [p.path for p in details.packages] == [
            "example.com/hello/cmd/hi",
            "example.com/hello/internal/greet",
        ]

    def test_versions_grouped_by_major_newest_first(self, dispatcher, store):
        details = dispatcher.legacy_fetch_details_for_package("versions", store, legacy_package(store))
        assert [g.major for g in details.this_module] == ["v2", "v1"]
        assert [v.version for v in details.this_module[1].versions] == ["v1.1.0", "v1.0.0"]
        assert details.this_module[0].versions[0].link == "/example.com/hello/v2@v2.0.0"

    def test_overview_versioned_links(self, dispatcher, store):
        pkg = legacy_package(store)
        assert dispatcher.legacy_fetch_details_for_package(
            "overview", store, pkg, versioned=True
        ).module_url == "/mod/example.com/hello@v1.0.0"
        assert dispatcher.legacy_fetch_details_for_package("overview", store, pkg).module_url == "/mod/example.com/hello"

    def test_doc_for_directory_without_package(self, dispatcher, store):
        vdir = store.get_directory(HELLO_CMD, HELLO, "v1.0.0")
        with pytest.raises(NotFoundError):
            dispatcher.fetch_details_for_package("doc", store, vdir)


NESTED_MODULES = [
    {"module_path": "example.com/a", "version": "v1.0.0", "packages": [{"path": "example.com/a"}, {"path": "example.com/a/b"}]},
    {"module_path": "example.com/a", "version": "v1.1.0", "packages": [{"path": "example.com/a"}]},
    {"module_path": "example.com/a/b", "version": "v0.1.0", "packages": [{"path": "example.com/a/b"}]},
]


class TestNestedModules:
    def test_package_versions_list_other_modules(self, dispatcher):
        store = MemoryStore(module_record_from_dict(m) for m in NESTED_MODULES)
        pkg = store.legacy_get_package("example.com/a/b", "example.com/a/b", "latest")
        details = dispatcher.legacy_fetch_details_for_package("versions", store, pkg)
        assert details.other_modules == ["example.com/a"]
        assert [g.module_path for g in details.this_module] == ["example.com/a/b"]
        assert [v.version for v in details.this_module[0].versions] == ["v0.1.0"]

    def test_versioned_package_against_readthrough(self, dispatcher, tmp_path, make_mirror):
        ds = ReadThroughDataSource(make_mirror(tmp_path / "nested", NESTED_MODULES))
        vdir = ds.get_directory("example.com/a/b", "example.com/a/b", "v0.1.0")
        details = dispatcher.fetch_details_for_package("versions", ds, vdir)
        assert details.other_modules == ["example.com/a"]

    def test_module_without_the_package_is_skipped(self):
        store = MemoryStore(module_record_from_dict(m) for m in NESTED_MODULES)
        versions = store.get_tagged_versions_for_package_series("example.com/a/b")
        assert sorted((v.module_path, v.version) for v in versions) == [
            ("example.com/a", "v1.0.0"),
            ("example.com/a/b", "v0.1.0"),
        ]


class TestCapabilities:
    def test_imported_by_against_readthrough_is_not_supported(self, dispatcher, readthrough):
        with pytest.raises(CapabilityNotSupportedError) as exc_info:
            dispatcher.legacy_fetch_details_for_package("importedby", readthrough, legacy_package(readthrough))
        assert exc_info.value.message == NOT_SUPPORTED_MESSAGE

    def test_versioned_imported_by_against_readthrough_is_not_supported(self, dispatcher, readthrough):
        with pytest.raises(CapabilityNotSupportedError):
            dispatcher.fetch_details_for_package("importedby", readthrough, versioned_package(readthrough))

    def test_capability_checked_before_call(self, dispatcher, store):
        class Restricted:
            capabilities = frozenset()

            def __getattr__(self, name):
                return getattr(store, name)

            def get_imported_by(self, *args):
                raise AssertionError("get_imported_by must not be called")

        with pytest.raises(CapabilityNotSupportedError):
            dispatcher.legacy_fetch_details_for_package("importedby", Restricted(), legacy_package(store))


# =============================================================================
# Unknown tabs
# =============================================================================


class TestUnknownTab:
    @pytest.mark.parametrize("tab", ["", "nope", "packages", "Doc"])
    def test_package_dispatchers(self, dispatcher, store, tab):
        with pytest.raises(UnknownTabError, match="BUG: unable to fetch details: unknown tab"):
            dispatcher.legacy_fetch_details_for_package(tab, store, legacy_package(store))
        with pytest.raises(UnknownTabError):
            dispatcher.fetch_details_for_package(tab, store, versioned_package(store))

    @pytest.mark.parametrize("tab", ["nope", "doc", "subdirectories", "importedby"])
    def test_module_dispatcher(self, dispatcher, store, tab):
        with pytest.raises(UnknownTabError):
            dispatcher.fetch_details_for_module(tab, store, *module_args(store))

    @pytest.mark.parametrize("tab", ["nope", "doc", "versions", "imports", "importedby", "packages"])
    def test_directory_dispatchers(self, dispatcher, store, tab):
        vdir = store.get_directory(HELLO_CMD, HELLO, "v1.0.0")
        with pytest.raises(UnknownTabError):
            dispatcher.fetch_details_for_directory(tab, store, vdir)
        legacy = store.legacy_get_directory(HELLO_CMD, HELLO, "v1.0.0")
        with pytest.raises(UnknownTabError):
            dispatcher.legacy_fetch_details_for_directory(tab, store, legacy, [])

    def test_error_carries_tab_and_kind(self, dispatcher, store):
        with pytest.raises(UnknownTabError) as exc_info:
            dispatcher.fetch_details_for_module("nope", store, *module_args(store))
        assert exc_info.value.tab == "nope"
        assert exc_info.value.context.kind == "module"

    def test_registry_drift_fails_at_construction(self, flags):
        extra = TabSettings(name="graph", display_name="Graph", template_name="overview.html")
        registry = TabRegistry({
            ResourceKind.PACKAGE: PACKAGE_TAB_SETTINGS,
            ResourceKind.DIRECTORY: directory_tab_settings(PACKAGE_TAB_SETTINGS),
            ResourceKind.MODULE: (*MODULE_TAB_SETTINGS, extra),
        })
        with pytest.raises(UnknownTabError, match="graph"):
            DetailDispatcher(registry, flags)

    def test_tab_missing_from_registry_is_unknown(self, flags, store):
        registry = TabRegistry({
            ResourceKind.PACKAGE: tuple(ts for ts in PACKAGE_TAB_SETTINGS if ts.name != "imports"),
            ResourceKind.MODULE: MODULE_TAB_SETTINGS,
        })
        dispatcher = DetailDispatcher(registry, flags)
        with pytest.raises(UnknownTabError):
            dispatcher.legacy_fetch_details_for_package("imports", store, legacy_package(store))


# =============================================================================
# Modules
# =============================================================================


class TestModuleDispatch:
    @pytest.mark.parametrize("tab", [ts.name for ts in MODULE_TAB_SETTINGS])
    def test_every_tab(self, dispatcher, store, tab):
        assert dispatcher.fetch_details_for_module(tab, store, *module_args(store)) is not None

    def test_packages_include_module_root(self, dispatcher, store):
        details = dispatcher.fetch_details_for_module("packages", store, *module_args(store))
        assert [p.path for p in details.packages] == [
            "example.com/hello",
            "example.com/hello/cmd/hi",
            "example.com/hello/internal/greet",
        ]
        assert details.module.license_types == ["MIT"]

    @pytest.mark.parametrize("module_path,version", [
        (HELLO, "v1.0.0"),
        ("example.com/hello/v2", "v2.0.0"),
        ("std", "v1.21.0"),
        ("example.com/closed", "v1.0.0"),
    ])
    def test_packages_equivalent_across_flag(self, dispatcher, flags, store, module_path, version):
        args = module_args(store, module_path, version)
        with flags.override(USE_DIRECTORIES, False):
            legacy = dispatcher.fetch_details_for_module("packages", store, *args)
        with flags.override(USE_DIRECTORIES, True):
            versioned = dispatcher.fetch_details_for_module("packages", store, *args)
        assert versioned == legacy

    def test_licenses(self, dispatcher, store):
        details = dispatcher.fetch_details_for_module("licenses", store, *module_args(store))
        assert [(lic.anchor, lic.types) for lic in details.licenses] == [("lic-0", ("MIT",))]
        assert details.licenses[0].module_link == "/mod/example.com/hello@v1.0.0"

    def test_overview_readme(self, dispatcher, store):
        details = dispatcher.fetch_details_for_module("overview", store, *module_args(store))
        assert details.readme_file_path == "README.md"
        assert details.readme == "Hello module readme"

    def test_overview_hides_readme_when_not_redistributable(self, dispatcher, store):
        details = dispatcher.fetch_details_for_module(
            "overview", store, *module_args(store, "example.com/closed", "v1.0.0")
        )
        assert details.readme is None
        assert not details.redistributable

    def test_versions_fall_back_to_pseudo(self, dispatcher, store):
        details = dispatcher.fetch_details_for_module(
            "versions", store, *module_args(store, "example.com/pseudo", "latest")
        )
        versions = [v for group in details.this_module for v in group.versions]
        assert len(versions) == 1
        assert versions[0].is_pseudo


# =============================================================================
# Legacy / version-aware equivalence
# =============================================================================


class TestEquivalence:
    @pytest.mark.parametrize("tab", ["overview", "versions", "licenses", "subdirectories", "imports", "doc"])
    @pytest.mark.parametrize("path,module_path", [
        (HELLO, HELLO),
        ("example.com/hello/internal/greet", HELLO),
        ("net/http", "std"),
    ])
    @pytest.mark.parametrize("versioned", [False, True])
    def test_package_paths_agree(self, dispatcher, store, tab, path, module_path, versioned):
        version = "latest"
        info = store.get_path_info(path, version)
        legacy = store.legacy_get_package(path, module_path, info.version)
        vdir = store.get_directory(path, module_path, info.version)
        assert dispatcher.legacy_fetch_details_for_package(
            tab, store, legacy, versioned=versioned
        ) == dispatcher.fetch_details_for_package(tab, store, vdir, versioned=versioned)

    @pytest.mark.parametrize("tab", ["overview", "subdirectories", "licenses"])
    @pytest.mark.parametrize("path", [HELLO_CMD, "example.com/hello/internal"])
    def test_directory_paths_agree(self, dispatcher, store, tab, path):
        legacy = store.legacy_get_directory(path, HELLO, "v1.1.0")
        licenses = store.legacy_get_module_licenses(HELLO, "v1.1.0")
        vdir = store.get_directory(path, HELLO, "v1.1.0")
        assert dispatcher.legacy_fetch_details_for_directory(
            tab, store, legacy, licenses
        ) == dispatcher.fetch_details_for_directory(tab, store, vdir)


# =============================================================================
# Resource views
# =============================================================================


class TestResourceViews:
    def test_views_share_adapter_properties(self, store):
        mi, licenses, readme = module_args(store)
        views = [
            LegacyPackageView(legacy_package(store)),
            PackageView(versioned_package(store)),
            ModuleView(mi, licenses, readme),
            DirectoryView(store.get_directory(HELLO, HELLO, "v1.0.0")),
            LegacyDirectoryView(store.legacy_get_directory(HELLO, HELLO, "v1.0.0"), licenses),
        ]
        for view in views:
            assert (view.path, view.module_path, view.version) == (HELLO, HELLO, "v1.0.0")
            assert view.is_redistributable

    def test_view_tags(self, store):
        assert LegacyPackageView.kind is ResourceKind.PACKAGE
        assert LegacyPackageView.shape is ResourceShape.LEGACY
        assert PackageView.shape is ResourceShape.VERSIONED
        assert ModuleView.kind is ResourceKind.MODULE
        assert DirectoryView.kind is LegacyDirectoryView.kind is ResourceKind.DIRECTORY
