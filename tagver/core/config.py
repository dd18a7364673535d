"""Package descriptor and resolver settings.

The package descriptor supplies the fallback version used for snapshot
builds and the optional branch version range. It is read from one of:

- `tagver.toml`:    [package] name / version / branch-version
- `pyproject.toml`: [project] name / version, [tool.tagver] version /
  branch-version (a [tool.tagver] version wins over [project])
- `package.json`:   name / version / branchVersion
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "ConfigError",
    "DEFAULT_BUILD_NUMBER_ENV",
    "DEFAULT_GIT_TIMEOUT_SECONDS",
    "PACKAGE_FILE_NAMES",
    "PackageDescriptor",
    "ResolverSettings",
    "find_package_file",
    "load_package",
]

DEFAULT_BUILD_NUMBER_ENV = "TRAVIS_BUILD_NUMBER"
DEFAULT_GIT_TIMEOUT_SECONDS = 30.0

# Search order when no package file is given explicitly
PACKAGE_FILE_NAMES = ("tagver.toml", "pyproject.toml", "package.json")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when a package file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    """The package being versioned.

    Attributes:
        name: Package name (informational)
        version: Declared version, used as the snapshot base
        branch_version: npm-style range the release version must satisfy
        source: File the descriptor was read from, if any
    """

    name: str
    version: str
    branch_version: str | None = None
    source: Path | None = None

    def as_dict(self) -> dict[str, str]:
        out = {"name": self.name, "version": self.version}
        if self.branch_version:
            out["branchVersion"] = self.branch_version
        return out


@dataclass(frozen=True, slots=True)
class ResolverSettings:
    """Explicit inputs that would otherwise be read from the environment.

    Attributes:
        build_number: CI build number, None for local builds
        git_timeout: Seconds to wait for each git call
    """

    build_number: str | None = None
    git_timeout: float = DEFAULT_GIT_TIMEOUT_SECONDS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        build_number_env: str = DEFAULT_BUILD_NUMBER_ENV,
    ) -> ResolverSettings:
        """Read the CI build number once, at the edge of the program."""
        env = os.environ if environ is None else environ
        build_number = (env.get(build_number_env) or "").strip() or None
        return cls(build_number=build_number)


def find_package_file(root: Path) -> Path | None:
    """Return the first known package file in root, or None."""
    for name in PACKAGE_FILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _read_json(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Package file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading package file: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Package file root must be a JSON object", path=path))
    return Ok(data)


def _read_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Package file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading package file: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Package file root must be a TOML table", path=path))
    return Ok(data)


def _descriptor_fields(path: Path, data: StrDict) -> tuple[str | None, str | None, str | None]:
    """Extract (name, version, branch_version) for the given file flavour."""
    if path.suffix == ".json":
        return (
            get_str(data, "name"),
            get_str(data, "version"),
            get_str(data, "branchVersion"),
        )

    if path.name == "pyproject.toml":
        project = get_table(data, "project") or {}
        tool = get_table(get_table(data, "tool") or {}, "tagver") or {}
        return (
            get_str(project, "name"),
            get_str(tool, "version") or get_str(project, "version"),
            get_str(tool, "branch-version"),
        )

    package = get_table(data, "package") or {}
    return (
        get_str(package, "name"),
        get_str(package, "version"),
        get_str(package, "branch-version"),
    )


def load_package(path: Path) -> Result[PackageDescriptor, ConfigError]:
    """Load a package descriptor from a package file.

    Args:
        path: tagver.toml, pyproject.toml or package.json

    Returns:
        Ok(PackageDescriptor) on success, Err(ConfigError) on failure
    """
    parsed = _read_json(path) if path.suffix == ".json" else _read_toml(path)
    if isinstance(parsed, Err):
        return parsed

    name, version, branch_version = _descriptor_fields(path, parsed.value)
    if version is None:
        return Err(ConfigError(f"No version declared in {path.name}", path=path))

    return Ok(
        PackageDescriptor(
            name=name or path.parent.name,
            version=version,
            branch_version=branch_version,
            source=path,
        )
    )
