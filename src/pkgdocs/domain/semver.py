"""
Semantic version parsing and ordering for ``vMAJOR.MINOR.PATCH`` strings.

Only the subset of semver that module versions use is supported: a
leading ``v``, three numeric components, an optional pre-release and
optional build metadata (``+incompatible``).
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

_SEMVER = re.compile(
    r"^v(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)

# vX.0.0-yyyymmddhhmmss-abcdefabcdef, vX.Y.Z-pre.0.yyyymmddhhmmss-abcdefabcdef,
# vX.Y.(Z+1)-0.yyyymmddhhmmss-abcdefabcdef
_PSEUDO = re.compile(r"(^|[.-])(0\.)?\d{14}-[0-9a-f]{12}$")


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str = ""

    @property
    def major_string(self) -> str:
        return f"v{self.major}"


def parse(version: str) -> Version | None:
    """Parse a version string, returning None if it is not valid semver."""
    m = _SEMVER.match(version)
    if m is None:
        return None
    pre = m.group("pre")
    return Version(
        major=int(m.group("major")),
        minor=int(m.group("minor")),
        patch=int(m.group("patch")),
        prerelease=tuple(pre.split(".")) if pre else (),
        build=m.group("build") or "",
    )


def is_valid(version: str) -> bool:
    return parse(version) is not None


def is_pseudo(version: str) -> bool:
    """Report whether version is a pseudo-version derived from a commit."""
    v = parse(version)
    if v is None or not v.prerelease:
        return False
    return bool(_PSEUDO.search(".".join(v.prerelease)))


def major(version: str) -> str:
    """Return ``vN`` for a valid version, or "" otherwise."""
    v = parse(version)
    return v.major_string if v else ""


def _compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    # A release sorts after any of its pre-releases.
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for x, y in zip(a, b):
        if x == y:
            continue
        x_num, y_num = x.isdigit(), y.isdigit()
        if x_num and y_num:
            return -1 if int(x) < int(y) else 1
        if x_num != y_num:
            return -1 if x_num else 1
        return -1 if x < y else 1
    return (len(a) > len(b)) - (len(a) < len(b))


def compare(a: str, b: str) -> int:
    """Compare two versions; invalid versions sort before valid ones."""
    va, vb = parse(a), parse(b)
    if va is None or vb is None:
        if va is None and vb is None:
            return (a > b) - (a < b)
        return -1 if va is None else 1
    ka = (va.major, va.minor, va.patch)
    kb = (vb.major, vb.minor, vb.patch)
    if ka != kb:
        return -1 if ka < kb else 1
    return _compare_prerelease(va.prerelease, vb.prerelease)


def sort_newest_first(versions: list[str]) -> list[str]:
    return sorted(versions, key=functools.cmp_to_key(compare), reverse=True)
