"""Semantic versions, release tags and branch ranges.

Parsing, precedence and range matching come from `semantic_version`; this
module only decides which tag strings count as releases and adapts the
library's errors to `SemVerError`.

Release tag grammar (previous versions):
    v?MAJOR.MINOR.PATCH[-PRERELEASE]

where PRERELEASE is dot-separated [0-9A-Za-z-] identifiers and the last
identifier must end in a digit, so that every pre-release is numbered:
`v1.2.0-rc1` and `v1.2.0-beta.2` are releases, `v1.2.0-rc` is not.
Build metadata and a fourth numeric component are rejected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from semantic_version import NpmSpec, Version

__all__ = [
    "NpmSpec",
    "SemVerError",
    "Version",
    "parse_branch_range",
    "parse_release_tag",
    "parse_version",
    "satisfies",
    "sort_versions",
    "with_prerelease",
]

_RELEASE_TAG_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class SemVerError(ValueError):
    """Raised for version or range strings that cannot be parsed."""


def parse_version(text: str) -> Version:
    """Parse a version string, stripping a leading 'v' (as in git tags).

    Raises:
        SemVerError: If the string is not valid semver.
    """
    cleaned = text.strip().removeprefix("v")
    try:
        return Version(cleaned)
    except ValueError as exc:
        raise SemVerError(f"Invalid semver version: {text!r}") from exc


def parse_release_tag(tag: str) -> Version | None:
    """Parse a tag that follows the release tag grammar, else None."""
    m = _RELEASE_TAG_RE.match(tag.strip())
    if m is None:
        return None

    prerelease = m.group(4)
    if prerelease is not None and not prerelease[-1].isdigit():
        return None

    try:
        return parse_version(tag)
    except SemVerError:
        # Grammar allows what semver forbids, e.g. "rc.01"
        return None


def parse_branch_range(text: str) -> NpmSpec:
    """Parse an npm-style range such as "^1.4.0" or ">=1.2.0 <1.3.0".

    Raises:
        SemVerError: If the range cannot be parsed.
    """
    try:
        return NpmSpec(text.strip())
    except ValueError as exc:
        raise SemVerError(f"Invalid branch version range: {text!r}") from exc


def satisfies(version: Version, spec: NpmSpec) -> bool:
    """True if version is within the range."""
    result: bool = spec.match(version)
    return result


def with_prerelease(version: Version, prerelease: Sequence[str]) -> Version:
    """Copy of version with the given pre-release identifiers and no build metadata.

    The keyword constructor of `Version` only rejects empty identifiers and
    leading zeros, so the result is re-parsed from its string form: it must
    parse, and to the same identifiers.

    Raises:
        SemVerError: If an identifier is not valid semver (e.g. "01", "a b",
            "1.2" as a single identifier).
    """
    identifiers = tuple(prerelease)
    try:
        candidate = Version(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=identifiers,
            build=(),
        )
        reparsed = Version(str(candidate))
    except ValueError as exc:
        raise SemVerError(f"Invalid pre-release identifiers: {list(identifiers)!r}") from exc

    if reparsed.prerelease != identifiers:
        raise SemVerError(f"Invalid pre-release identifiers: {list(identifiers)!r}")
    return reparsed


def sort_versions(versions: Iterable[Version]) -> list[Version]:
    """Ascending by semver precedence, duplicates removed."""
    unique: dict[str, Version] = {}
    for v in versions:
        unique.setdefault(str(v), v)
    return sorted(unique.values())
