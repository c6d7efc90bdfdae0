"""
Page renderer: compiled Jinja2 template sets behind a reader/writer lock.

Each page is rendered from its own template set: ``base.html``, every
file under ``helpers/`` and one or two files under ``pages/`` (tab pages
add the shared ``details.html`` chrome). Each set is its own Jinja2
``Environment`` so globals can be bound per page.

The mapping of sets is the only shared mutable state in the frontend.
Renders hold the read lock. A reload takes the write lock, recompiles the
whole mapping from disk and replaces it only if every set compiled, so a
render sees either the old sets or the new ones, never a mixture.

A 500 error page is rendered once at construction and kept as bytes. It is
served whenever a later render fails, so a response can always be
produced even if the templates themselves are broken.

Architecture:
    ::

        serve_page(name, page)
            │
            ├── reload_if_configured()   (write lock, dev mode only)
            │
            ├── render_page(name, page)  (read lock)
            │        │
            │        └── failure ──► fallback bytes, status 500
            ▼
        (status, body)

Tags:
    rendering, jinja2, templates, hot-reload, rwlock, pkgdocs
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from http import HTTPStatus
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, Template, select_autoescape
from jinja2 import TemplateError as JinjaTemplateError

from pkgdocs.core.errors import TemplateCompileError, TemplateRenderError
from pkgdocs.core.logging import get_logger
from pkgdocs.core.rwlock import ReadWriteLock
from pkgdocs.frontend.pages import ErrorPage

logger = get_logger(__name__)

BASE_TEMPLATE = "base.html"
HELPERS_DIR = "helpers"
PAGES_DIR = "pages"
ERROR_TEMPLATE = "error.html"

# Each entry is one template set; the first file names the set.
PAGE_SETS: tuple[tuple[str, ...], ...] = (
    ("index.html",),
    ("error.html",),
    ("license_policy.html",),
    ("doc.html", "details.html"),
    ("importedby.html", "details.html"),
    ("imports.html", "details.html"),
    ("licenses.html", "details.html"),
    ("overview.html", "details.html"),
    ("subdirectories.html", "details.html"),
    ("versions.html", "details.html"),
)


def pluralize(count: int, word: str) -> str:
    """``{{ n | pluralize("package") }}``"""
    return word if count == 1 else word + "s"


def add(i: int, j: int) -> int:
    return i + j


def cur_year() -> int:
    return datetime.now(timezone.utc).year


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateCompileError(f"cannot read template {path}: {e}", cause=e) from e


def _build_environment(sources: dict[str, str]) -> Environment:
    env = Environment(
        loader=DictLoader(sources),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["pluralize"] = pluralize
    env.globals["add"] = add
    env.globals["cur_year"] = cur_year
    return env


def parse_page_templates(base_dir: str | Path) -> dict[str, Template]:
    """Compile every page set under base_dir.

    Returns a mapping of set name (the first file of the set) to its
    compiled entry template.

    Raises:
        TemplateCompileError: a file is missing or fails to parse
    """
    base = Path(base_dir)
    common = {BASE_TEMPLATE: _read(base / BASE_TEMPLATE)}
    helpers_dir = base / HELPERS_DIR
    if not helpers_dir.is_dir():
        raise TemplateCompileError(f"helpers directory {helpers_dir} not found")
    for helper in sorted(helpers_dir.glob("*.html")):
        common[f"{HELPERS_DIR}/{helper.name}"] = _read(helper)

    templates: dict[str, Template] = {}
    for page_set in PAGE_SETS:
        sources = dict(common)
        for name in page_set:
            sources[f"{PAGES_DIR}/{name}"] = _read(base / PAGES_DIR / name)
        env = _build_environment(sources)
        try:
            for name in sources:
                env.get_template(name)
            templates[page_set[0]] = env.get_template(f"{PAGES_DIR}/{page_set[0]}")
        except JinjaTemplateError as e:
            raise TemplateCompileError(f"error parsing template set {page_set}: {e}", cause=e) from e
    return templates


def status_info(status: int) -> str:
    """``"404 Not Found"``"""
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


class PageRenderer:
    """Renders pages from compiled template sets.

    Args:
        template_dir: Directory holding base.html, helpers/ and pages/
        reload_templates: Recompile from disk before every page (development)

    Raises:
        TemplateCompileError: the templates cannot be compiled, or the
            fallback error page cannot be rendered
    """

    def __init__(self, template_dir: str | Path, *, reload_templates: bool = False):
        self.template_dir = Path(template_dir)
        self.reload_templates = reload_templates
        self._lock = ReadWriteLock()
        self._templates: Mapping[str, Template] = parse_page_templates(self.template_dir)
        try:
            self._fallback = self.render_error_page(HTTPStatus.INTERNAL_SERVER_ERROR)
        except TemplateRenderError as e:
            raise TemplateCompileError(f"cannot render fallback error page: {e}", cause=e) from e
        logger.info(
            "templates_loaded",
            template_dir=str(self.template_dir),
            sets=len(self._templates),
            reload=reload_templates,
        )

    @property
    def fallback_page(self) -> bytes:
        return self._fallback

    def page_names(self) -> list[str]:
        with self._lock.read_locked():
            return sorted(self._templates)

    def reload_if_configured(self) -> None:
        """Recompile the templates from disk when reloading is enabled.

        The new sets replace the old ones only if every set compiles.

        Raises:
            TemplateCompileError: compilation failed; the previous sets stay
        """
        if not self.reload_templates:
            return
        with self._lock.write_locked():
            try:
                templates = parse_page_templates(self.template_dir)
            except TemplateCompileError as e:
                logger.error("template_reload_failed", error=str(e))
                raise
            self._templates = templates

    def render_page(self, name: str, page: Any) -> bytes:
        """Execute the named set against page.

        Raises:
            TemplateRenderError: unknown set or template execution failed
        """
        with self._lock.read_locked():
            template = self._templates.get(name)
            if template is None:
                raise TemplateRenderError(f"no template set named {name!r}")
            try:
                return template.render(page=page).encode("utf-8")
            except Exception as e:
                logger.error("template_render_failed", template=name, error=str(e))
                raise TemplateRenderError(f"error executing template {name!r}: {e}", cause=e) from e

    def render_error_page(self, status: int, page: ErrorPage | None = None) -> bytes:
        """Render error.html with a title derived from status."""
        info = status_info(status)
        if page is None:
            page = ErrorPage(message=info)
        page.title = info
        return self.render_page(ERROR_TEMPLATE, page)

    def serve_page(self, name: str, page: Any) -> tuple[int, bytes]:
        """Render a page for a response, falling back to the static 500 page."""
        try:
            self.reload_if_configured()
        except TemplateCompileError:
            # Keep serving the previous sets.
            pass
        try:
            return HTTPStatus.OK, self.render_page(name, page)
        except TemplateRenderError:
            return HTTPStatus.INTERNAL_SERVER_ERROR, self._fallback

    def serve_error_page(self, status: int, page: ErrorPage | None = None) -> tuple[int, bytes]:
        try:
            return status, self.render_error_page(status, page)
        except TemplateRenderError as e:
            logger.error("error_page_render_failed", status=int(status), error=str(e))
            return HTTPStatus.INTERNAL_SERVER_ERROR, self._fallback
