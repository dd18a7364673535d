"""Git access for version resolution.

Usage:
    from tagver.git import Repository, detect_repo_info

    repo = Repository(Path("."))
    match repo.list_tags():
        case Ok(tags):
            print(tags)
    info = detect_repo_info(repo)
"""

from tagver.git.repo_info import GitRepoInfo, detect_repo_info, parse_remote_url
from tagver.git.repository import Repository
from tagver.git.runner import (
    FakeGitRunner,
    GitCall,
    GitError,
    GitRunner,
    SubprocessGitRunner,
)

__all__ = [
    # Runner
    "FakeGitRunner",
    "GitCall",
    "GitError",
    "GitRunner",
    "SubprocessGitRunner",
    # Repository
    "Repository",
    # Identity
    "GitRepoInfo",
    "detect_repo_info",
    "parse_remote_url",
]
