from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from tagver.core.config import (
    DEFAULT_BUILD_NUMBER_ENV,
    PACKAGE_FILE_NAMES,
    PackageDescriptor,
    ResolverSettings,
    find_package_file,
    load_package,
)
from tagver.core.errors import ErrorCode
from tagver.core.result import Err
from tagver.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    package: PackageDescriptor
    settings: ResolverSettings
    console: ConsoleProtocol


def resolve_root(path: Path) -> Path:
    try:
        root = path.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --path: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: --path '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return root


def build_context(
    path: Path,
    *,
    package_file: Path | None = None,
    build_number_env: str = DEFAULT_BUILD_NUMBER_ENV,
    verbose: bool = False,
) -> CLIContext:
    root = resolve_root(path)
    console = RichConsole(verbose=verbose)

    source = package_file or find_package_file(root)
    if source is None:
        console.error(f"no package file in {root} (looked for {', '.join(PACKAGE_FILE_NAMES)})")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    package_result = load_package(source)
    if isinstance(package_result, Err):
        console.error(package_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        root=root,
        package=package_result.value,
        settings=ResolverSettings.from_env(build_number_env=build_number_env),
        console=console,
    )
