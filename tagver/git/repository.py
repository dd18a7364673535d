"""Git repository queries used for version resolution.

Repository wraps a GitRunner and turns raw git output into the small
values the resolvers need. Methods that can fail return Result types;
lookups that are purely informational return None on failure.

Usage:
    repo = Repository(Path("."))

    match repo.describe_exact():
        case Ok(tag):
            print(f"HEAD is tagged {tag}")
        case Err(_):
            print("HEAD is not tagged: snapshot build")
"""

from __future__ import annotations

from pathlib import Path

from tagver.core.config import DEFAULT_GIT_TIMEOUT_SECONDS
from tagver.core.result import Err, Ok, Result

from .runner import GitError, GitRunner, SubprocessGitRunner

__all__ = ["Repository"]


class Repository:
    """Version-control queries for a single working tree.

    Attributes:
        path: Path to the working tree
    """

    def __init__(
        self,
        path: Path,
        runner: GitRunner | None = None,
        *,
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize repository.

        Args:
            path: Path to the working tree
            runner: GitRunner to use (spawns git in path if None)
            timeout: Seconds allowed per git call for the default runner
        """
        self.path = path
        self._runner: GitRunner = runner or SubprocessGitRunner(path, timeout=timeout)

    def list_tags(self) -> Result[list[str], GitError]:
        """List all tag names (`git tag -l`), blank lines removed."""
        match self._runner.run("tag", ["-l"]):
            case Err(e):
                return Err(e)
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def head_sha(self) -> Result[str, GitError]:
        """Full SHA of HEAD (`git rev-parse HEAD`).

        Empty output is an error: there is no commit to report.
        """
        return self._non_empty(self._runner.run("rev-parse", ["HEAD"]), "rev-parse")

    def describe_exact(self) -> Result[str, GitError]:
        """Annotated tag pointing exactly at HEAD (`git describe --exact-match`)."""
        return self._non_empty(self._runner.run("describe", ["--exact-match"]), "describe")

    def cat_object(self, name: str) -> Result[str, GitError]:
        """Pretty-printed body of an object, e.g. an annotated tag (`git cat-file -p`)."""
        return self._runner.run("cat-file", ["-p", name])

    def remote_url(self, remote: str = "origin") -> str | None:
        """URL of a remote, or None if it is not configured."""
        match self._runner.run("config", ["--get", f"remote.{remote}.url"]):
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def current_branch(self) -> str | None:
        """Current branch name.

        Returns None if detached HEAD or error.
        """
        match self._runner.run("rev-parse", ["--abbrev-ref", "HEAD"]):
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch in ("", "HEAD") else branch
            case Err(_):
                return None

    @staticmethod
    def _non_empty(result: Result[str, GitError], command: str) -> Result[str, GitError]:
        match result:
            case Err(e):
                return Err(e)
            case Ok(stdout):
                value = stdout.strip()
                if not value:
                    return Err(GitError(command=command, message=f"git {command} returned no output"))
                return Ok(value)
