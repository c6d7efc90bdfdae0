"""Feature flags for in-flight migrations.

The frontend is midway through moving from the legacy package/directory
model to the version-aware directory model. Flags gate which code path a
request takes so the two can be compared and rolled back without a deploy.

Resolution order for a flag value:

1. Runtime override (``FlagRegistry.set`` / ``FlagRegistry.override``)
2. Environment variable ``PKGDOCS_FF_<NAME>``
3. Default from registration

The app factory builds one registry per application and hands it to the
dispatcher; there is no module-level registry.

Examples:
    >>> flags = FlagRegistry()
    >>> flags.register(USE_DIRECTORIES, default=False)
    >>> flags.is_enabled(USE_DIRECTORIES)
    False
    >>> with flags.override(USE_DIRECTORIES, True):
    ...     flags.is_enabled(USE_DIRECTORIES)
    True

Tags:
    feature-flags, migration, configuration, pkgdocs
"""

from __future__ import annotations

import os
import re
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

ENV_PREFIX = "PKGDOCS_FF_"

# Serve package, module and directory pages from the version-aware
# directory model instead of the legacy package model.
USE_DIRECTORIES = "use_directories"


@dataclass(frozen=True)
class FlagDefinition:
    """Definition of a boolean feature flag."""

    name: str
    default: bool = False
    description: str = ""


class FlagNotFoundError(KeyError):
    """Raised when accessing an unregistered flag."""

    def __init__(self, flag_name: str):
        super().__init__(f"Feature flag not registered: {flag_name}")
        self.flag_name = flag_name


def _parse_env_value(env_value: str) -> bool:
    return env_value.strip().lower() in ("true", "1", "yes", "on")


class FlagRegistry:
    """Thread-safe registry of boolean feature flags."""

    def __init__(self) -> None:
        self._flags: dict[str, FlagDefinition] = {}
        self._overrides: dict[str, bool] = {}
        self._lock = threading.RLock()

    def register(self, name: str, default: bool = False, description: str = "") -> FlagDefinition:
        """Register a new flag.

        Raises:
            ValueError: If name is not snake_case or is already registered
        """
        if not re.match(r"^[a-z][a-z0-9_]*$", name):
            raise ValueError(f"Flag name must be snake_case: {name}")

        with self._lock:
            if name in self._flags:
                raise ValueError(f"Flag already registered: {name}")
            flag_def = FlagDefinition(name=name, default=default, description=description)
            self._flags[name] = flag_def
            return flag_def

    def is_enabled(self, name: str) -> bool:
        """Return the current value of a flag."""
        with self._lock:
            if name not in self._flags:
                raise FlagNotFoundError(name)
            if name in self._overrides:
                return self._overrides[name]
            env_value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if env_value is not None:
                return _parse_env_value(env_value)
            return self._flags[name].default

    def set(self, name: str, value: bool) -> None:
        """Set a runtime override for a flag."""
        with self._lock:
            if name not in self._flags:
                raise FlagNotFoundError(name)
            self._overrides[name] = bool(value)

    def reset(self, name: str) -> None:
        """Remove the runtime override for a flag."""
        with self._lock:
            if name not in self._flags:
                raise FlagNotFoundError(name)
            self._overrides.pop(name, None)

    @contextmanager
    def override(self, name: str, value: bool) -> Iterator[None]:
        """Temporarily override a flag value."""
        with self._lock:
            had_override = name in self._overrides
            old_value = self._overrides.get(name)
        self.set(name, value)
        try:
            yield
        finally:
            if had_override:
                self.set(name, bool(old_value))
            else:
                self.reset(name)

    def list_flags(self) -> list[FlagDefinition]:
        """List all registered flags."""
        with self._lock:
            return list(self._flags.values())


def build_flag_registry(*, use_directories: bool = False) -> FlagRegistry:
    """Create a registry with every flag the frontend knows about."""
    flags = FlagRegistry()
    flags.register(
        USE_DIRECTORIES,
        default=use_directories,
        description="Serve pages from the version-aware directory model",
    )
    return flags


__all__ = [
    "ENV_PREFIX",
    "USE_DIRECTORIES",
    "FlagDefinition",
    "FlagNotFoundError",
    "FlagRegistry",
    "build_flag_registry",
]
