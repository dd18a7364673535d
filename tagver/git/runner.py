"""The git capability used by the resolvers.

Every version-control query goes through `GitRunner.run(subcommand, args)`.
Production code uses SubprocessGitRunner; tests use FakeGitRunner, which
returns canned output per subcommand and records every call.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from tagver.core.config import DEFAULT_GIT_TIMEOUT_SECONDS
from tagver.core.result import Err, Ok, Result
from tagver.platform.process import run as run_process

__all__ = [
    "FakeGitRunner",
    "GitCall",
    "GitError",
    "GitRunner",
    "SubprocessGitRunner",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git invocation.

    "git not found" and "git exited non-zero" are both reported this way.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code (-1 if git could not run)
    """

    command: str
    message: str
    returncode: int = 1


class GitRunner(Protocol):
    """Runs one git subcommand and returns its stdout."""

    def run(self, subcommand: str, args: Sequence[str] = ()) -> Result[str, GitError]: ...


class SubprocessGitRunner:
    """GitRunner that spawns the git binary against a working tree."""

    def __init__(
        self,
        path: Path,
        *,
        git: str = "git",
        timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS,
    ) -> None:
        self.path = path
        self._git = git
        self._timeout = timeout

    def run(self, subcommand: str, args: Sequence[str] = ()) -> Result[str, GitError]:
        result = run_process(
            [self._git, "-C", str(self.path), subcommand, *args],
            cwd=self.path,
            timeout=self._timeout,
        )
        match result:
            case Ok(stdout):
                return Ok(stdout)
            case Err(e):
                return Err(
                    GitError(
                        command=subcommand,
                        message=e.stderr.strip() or str(e),
                        returncode=e.returncode,
                    )
                )


@dataclass(frozen=True, slots=True)
class GitCall:
    """A call recorded by FakeGitRunner."""

    subcommand: str
    args: tuple[str, ...]

    @property
    def key(self) -> str:
        return " ".join((self.subcommand, *self.args))


def _no_calls() -> list[GitCall]:
    return []


@dataclass
class FakeGitRunner:
    """GitRunner returning canned results, for tests.

    Responses are looked up by the full command line first
    ("rev-parse --abbrev-ref HEAD"), then by subcommand alone ("rev-parse").
    A str response is returned as Ok(str); None or a missing key fails the
    call as if git had exited with status 128.
    """

    responses: Mapping[str, str | None] = field(default_factory=dict)
    calls: list[GitCall] = field(default_factory=_no_calls)

    def run(self, subcommand: str, args: Sequence[str] = ()) -> Result[str, GitError]:
        call = GitCall(subcommand=subcommand, args=tuple(args))
        self.calls.append(call)

        if call.key in self.responses:
            stdout = self.responses[call.key]
        else:
            stdout = self.responses.get(subcommand)

        if stdout is None:
            return Err(GitError(command=subcommand, message="fatal: no canned output", returncode=128))
        return Ok(stdout)

    # Test helpers

    def called(self, subcommand: str) -> list[GitCall]:
        """All recorded calls of a subcommand."""
        return [c for c in self.calls if c.subcommand == subcommand]
