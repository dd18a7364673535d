"""Version resolution result types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from semantic_version import Version

from tagver.core.config import PackageDescriptor
from tagver.git.repo_info import GitRepoInfo

__all__ = [
    "CurrentVersion",
    "DecorateVersion",
    "SHORT_SHA_LENGTH",
    "VersionInfo",
    "VersionInfoError",
    "VersionInfoErrorKind",
]

SHORT_SHA_LENGTH = 7

# Called once per previous version, ascending; the return value is ignored
DecorateVersion = Callable[[Version], object]

VersionInfoErrorKind = Literal[
    "no_commit",
    "branch_mismatch",
    "invalid_branch_version",
    "invalid_package_version",
]


@dataclass(frozen=True, slots=True)
class VersionInfoError:
    """Failure that stops version resolution.

    Only two situations are fatal by nature: there is no commit to describe,
    or a release tag sits outside the branch's version range. The remaining
    kinds report invalid inputs from the package file or CI environment.
    """

    kind: VersionInfoErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class CurrentVersion:
    """Version of the checked-out commit.

    Attributes:
        version: Release version, or the snapshot version with its
            synthesized pre-release ("local" or "build.<n>")
        is_snapshot: True when HEAD carries no release tag
        code_name: "snapshot" for snapshots; for releases the declared code
            name, None if none was declared, "" if the declaration was malformed
        commit_sha: Full SHA of HEAD
    """

    version: Version
    is_snapshot: bool
    code_name: str | None
    commit_sha: str

    @property
    def major(self) -> int:
        return self.version.major

    @property
    def minor(self) -> int:
        return self.version.minor

    @property
    def patch(self) -> int:
        return self.version.patch

    @property
    def prerelease(self) -> tuple[str, ...]:
        return tuple(self.version.prerelease)

    @property
    def version_string(self) -> str:
        """Canonical version string without build metadata."""
        return str(self.version)

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:SHORT_SHA_LENGTH]

    @property
    def full(self) -> str:
        """Version string; snapshots carry the commit as build metadata."""
        if self.is_snapshot:
            return f"{self.version_string}+sha.{self.short_sha}"
        return self.version_string

    def as_dict(self) -> dict[str, object]:
        return {
            "version": self.version_string,
            "full": self.full,
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "prerelease": list(self.prerelease),
            "isSnapshot": self.is_snapshot,
            "codeName": self.code_name,
            "commitSHA": self.commit_sha,
        }


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """Everything a build needs to label its output."""

    current_package: PackageDescriptor
    git_repo_info: GitRepoInfo
    previous_versions: tuple[Version, ...]
    current_version: CurrentVersion

    def to_dict(self) -> dict[str, object]:
        """JSON-serialisable form, keyed the way documentation templates expect."""
        return {
            "currentPackage": self.current_package.as_dict(),
            "gitRepoInfo": self.git_repo_info.as_dict(),
            "previousVersions": [str(v) for v in self.previous_versions],
            "currentVersion": self.current_version.as_dict(),
        }
