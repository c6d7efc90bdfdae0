"""
Server settings.

All values can be overridden via environment variables prefixed with
``PKGDOCS_`` (``PKGDOCS_PORT=9000``, ``PKGDOCS_DATA_SOURCE=readthrough``)
or a ``.env`` file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings

_CONTENT_DIR = Path(__file__).resolve().parent.parent / "content" / "static"


class PkgDocsSettings(BaseSettings):
    """Settings for the documentation frontend.

    Order of precedence (highest → lowest):
        1. Environment variables (``PKGDOCS_TEMPLATE_DIR``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, description="Bind port")
    debug: bool = Field(default=False, description="Show exception text on error pages")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool | None = Field(default=None, description="JSON logs (None: auto-detect tty)")

    # ── Content ──────────────────────────────────────────────────────────
    static_dir: str = Field(default=str(_CONTENT_DIR), description="Static files served under /static")
    template_dir: str | None = Field(
        default=None,
        description="Template directory (defaults to <static_dir>/html)",
    )
    reload_templates: bool = Field(
        default=False,
        description="Recompile templates from disk on every page (development only)",
    )

    # ── Data source ──────────────────────────────────────────────────────
    data_source: Literal["memory", "readthrough"] = Field(
        default="memory",
        description="memory: full store loaded from a fixture; readthrough: module mirror",
    )
    fixture_path: str | None = Field(default=None, description="YAML fixture for the memory store")
    mirror_dir: str | None = Field(default=None, description="Module mirror root for readthrough")
    cache_size: int = Field(default=1_000, ge=1, description="Read-through cache entries")
    cache_ttl_seconds: int | None = Field(default=3600, description="Read-through cache TTL")

    # ── Feature flags ────────────────────────────────────────────────────
    use_directories: bool = Field(
        default=False,
        description="Serve pages through the version-aware directory model",
    )

    model_config: dict[str, Any] = {
        "env_prefix": "PKGDOCS_",
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def resolved_template_dir(self) -> str:
        return self.template_dir or str(Path(self.static_dir) / "html")
