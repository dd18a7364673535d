"""Repository identity derived from the origin remote.

GitRepoInfo is pass-through metadata for consumers of the version info
(e.g. to build "view source" links); nothing in version resolution
depends on it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .repository import Repository

__all__ = ["GitRepoInfo", "detect_repo_info", "parse_remote_url"]

# git@host:owner/repo.git, ssh://git@host[:port]/owner/repo.git, https://host/owner/repo
_SCP_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")
_URL_RE = re.compile(r"^[a-z+]+://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+)$")


@dataclass(frozen=True, slots=True)
class GitRepoInfo:
    """Identity of the repository the build comes from.

    Attributes:
        url: Remote URL as configured
        host: Remote host (e.g. "github.com")
        owner: Owner/organisation path segment
        repo: Repository name without ".git"
        branch: Checked-out branch, None on detached HEAD
    """

    url: str | None = None
    host: str | None = None
    owner: str | None = None
    repo: str | None = None
    branch: str | None = None

    @property
    def slug(self) -> str | None:
        """The "owner/repo" slug, or None when either part is unknown."""
        if self.owner and self.repo:
            return f"{self.owner}/{self.repo}"
        return None

    def as_dict(self) -> dict[str, str | None]:
        return {
            "url": self.url,
            "host": self.host,
            "owner": self.owner,
            "repo": self.repo,
            "branch": self.branch,
        }


def parse_remote_url(url: str) -> GitRepoInfo:
    """Split a remote URL into host/owner/repo.

    Unrecognised URLs (e.g. local paths) keep only the url.
    """
    url = url.strip()
    m = _URL_RE.match(url) or _SCP_RE.match(url)
    if m is None:
        return GitRepoInfo(url=url)

    parts = [p for p in m.group("path").rstrip("/").split("/") if p]
    if len(parts) < 2:
        return GitRepoInfo(url=url, host=m.group("host"))

    repo = parts[-1].removesuffix(".git")
    owner = "/".join(parts[:-1])
    return GitRepoInfo(url=url, host=m.group("host"), owner=owner, repo=repo)


def detect_repo_info(repository: Repository, remote: str = "origin") -> GitRepoInfo:
    """Build GitRepoInfo from the remote URL and current branch."""
    branch = repository.current_branch()
    url = repository.remote_url(remote)
    if url is None:
        return GitRepoInfo(branch=branch)

    info = parse_remote_url(url)
    return GitRepoInfo(
        url=info.url,
        host=info.host,
        owner=info.owner,
        repo=info.repo,
        branch=branch,
    )
