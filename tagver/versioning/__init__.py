"""Version resolution from git tags.

Usage:
    from tagver.versioning import resolve_version_info

    match resolve_version_info(root, package, settings):
        case Ok(info):
            print(info.current_version.full, [str(v) for v in info.previous_versions])
        case Err(e):
            print(e.pretty())
"""

from tagver.versioning.codename import SNAPSHOT, parse_code_name
from tagver.versioning.current import CurrentVersionResolver, resolve_version_info
from tagver.versioning.model import (
    CurrentVersion,
    DecorateVersion,
    VersionInfo,
    VersionInfoError,
)
from tagver.versioning.previous import PreviousVersionsResolver
from tagver.versioning.semver import (
    SemVerError,
    parse_branch_range,
    parse_release_tag,
    parse_version,
)

__all__ = [
    # Resolvers
    "CurrentVersionResolver",
    "PreviousVersionsResolver",
    "resolve_version_info",
    # Model
    "CurrentVersion",
    "DecorateVersion",
    "VersionInfo",
    "VersionInfoError",
    # Parsing
    "SNAPSHOT",
    "SemVerError",
    "parse_branch_range",
    "parse_code_name",
    "parse_release_tag",
    "parse_version",
]
