"""Version of the checked-out commit.

A commit is a release when `git describe --exact-match` finds an annotated
tag on it; otherwise it is a snapshot of the package's declared version.

Usage:
    match resolve_version_info(Path("."), package, ResolverSettings.from_env()):
        case Ok(info):
            print(info.current_version.full)
        case Err(e):
            print(f"error: {e.pretty()}")
"""

from __future__ import annotations

from pathlib import Path

from tagver.core.config import PackageDescriptor, ResolverSettings
from tagver.core.result import Err, Ok, Result
from tagver.git.repo_info import GitRepoInfo, detect_repo_info
from tagver.git.repository import Repository
from tagver.git.runner import GitRunner
from tagver.output.console import ConsoleProtocol, Style

from .codename import SNAPSHOT, is_malformed, parse_code_name
from .model import CurrentVersion, DecorateVersion, VersionInfo, VersionInfoError
from .previous import PreviousVersionsResolver
from .semver import (
    SemVerError,
    parse_branch_range,
    parse_version,
    satisfies,
    with_prerelease,
)

__all__ = ["CurrentVersionResolver", "resolve_version_info"]

LOCAL_PRERELEASE = ("local",)
BUILD_PRERELEASE = "build"


class CurrentVersionResolver:
    """Classify HEAD as release or snapshot and assemble the VersionInfo.

    Git calls, in order: `rev-parse HEAD`, `describe --exact-match`,
    `cat-file -p <tag>` (releases only), then the previous versions'
    `tag -l`.

    Failure policy:
    - No HEAD commit: Err("no_commit").
    - No exact tag, or a tag that is not semver: snapshot.
    - Release outside `branch_version`: Err("branch_mismatch").
    - Build number that is not a semver identifier: "local" plus a warning.
    - Missing or malformed code name: None / "" on the result.
    """

    def __init__(
        self,
        repository: Repository,
        previous_versions: PreviousVersionsResolver,
        settings: ResolverSettings,
        *,
        git_repo_info: GitRepoInfo | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._repository = repository
        self._previous_versions = previous_versions
        self._settings = settings
        self._git_repo_info = git_repo_info or GitRepoInfo()
        self._console = console

    def resolve(self, package: PackageDescriptor) -> Result[VersionInfo, VersionInfoError]:
        sha = self._repository.head_sha()
        if isinstance(sha, Err):
            return Err(
                VersionInfoError(
                    kind="no_commit",
                    message=f"cannot identify the current commit: {sha.error.message}",
                    hint="run inside a git checkout with at least one commit",
                )
            )
        commit_sha = sha.value

        tagged = self._tagged_version(package, commit_sha)
        if isinstance(tagged, Err):
            return tagged

        current = tagged.value
        if current is None:
            snapshot = self._snapshot_version(package, commit_sha)
            if isinstance(snapshot, Err):
                return snapshot
            current = snapshot.value

        return Ok(
            VersionInfo(
                current_package=package,
                git_repo_info=self._git_repo_info,
                previous_versions=self._previous_versions.resolve(),
                current_version=current,
            )
        )

    def _tagged_version(
        self, package: PackageDescriptor, commit_sha: str
    ) -> Result[CurrentVersion | None, VersionInfoError]:
        """Release version of HEAD, Ok(None) if HEAD is not a release."""
        described = self._repository.describe_exact()
        if isinstance(described, Err):
            self._note(f"no tag on HEAD, snapshot build ({described.error.message})")
            return Ok(None)
        tag = described.value

        try:
            version = parse_version(tag)
        except SemVerError:
            self._note(f"tag on HEAD is not a version, snapshot build: {tag}")
            return Ok(None)

        if package.branch_version:
            try:
                branch_range = parse_branch_range(package.branch_version)
            except SemVerError as e:
                return Err(
                    VersionInfoError(
                        kind="invalid_branch_version",
                        message=str(e),
                        hint=f"fix branch version in {package.source or 'the package file'}",
                    )
                )
            if not satisfies(version, branch_range):
                return Err(
                    VersionInfoError(
                        kind="branch_mismatch",
                        message=(
                            f"release {tag} does not satisfy branch version "
                            f"{package.branch_version}"
                        ),
                        hint="tag the release on the branch that owns this version range",
                    )
                )

        return Ok(
            CurrentVersion(
                version=with_prerelease(version, version.prerelease),
                is_snapshot=False,
                code_name=self._code_name(tag),
                commit_sha=commit_sha,
            )
        )

    def _snapshot_version(
        self, package: PackageDescriptor, commit_sha: str
    ) -> Result[CurrentVersion, VersionInfoError]:
        try:
            declared = parse_version(package.version)
        except SemVerError as e:
            return Err(
                VersionInfoError(
                    kind="invalid_package_version",
                    message=str(e),
                    hint=f"fix version in {package.source or 'the package file'}",
                )
            )

        version = with_prerelease(declared, LOCAL_PRERELEASE)
        build_number = self._settings.build_number
        if build_number:
            try:
                version = with_prerelease(declared, (BUILD_PRERELEASE, build_number))
            except SemVerError:
                self._warn(
                    f"build number {build_number!r} is not a semver identifier, "
                    f"using {version}"
                )

        return Ok(
            CurrentVersion(
                version=version,
                is_snapshot=True,
                code_name=SNAPSHOT,
                commit_sha=commit_sha,
            )
        )

    def _code_name(self, tag: str) -> str | None:
        body = self._repository.cat_object(tag)
        if isinstance(body, Err):
            self._note(f"cannot read tag {tag}: {body.error.message}")
            return None

        code_name = parse_code_name(body.value)
        if is_malformed(code_name):
            self._warn(f"malformed codename line in tag {tag}")
        return code_name

    def _note(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.DIM)

    def _warn(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.WARNING)


def resolve_version_info(
    path: Path,
    package: PackageDescriptor,
    settings: ResolverSettings,
    *,
    decorate: DecorateVersion | None = None,
    runner: GitRunner | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[VersionInfo, VersionInfoError]:
    """Resolve the version info of the working tree at path.

    Args:
        path: Working tree
        package: Descriptor supplying the snapshot version and branch range
        settings: CI build number and git timeout
        decorate: Hook called once per previous version, ascending
        runner: GitRunner override (spawns git if None)
        console: Receives diagnostics if given

    Returns:
        Ok(VersionInfo), or Err(VersionInfoError) when HEAD cannot be
        identified or the release does not belong on this branch
    """
    repository = Repository(path, runner, timeout=settings.git_timeout)
    previous = PreviousVersionsResolver(repository, decorate=decorate, console=console)
    resolver = CurrentVersionResolver(
        repository,
        previous,
        settings,
        git_repo_info=detect_repo_info(repository),
        console=console,
    )
    return resolver.resolve(package)
