"""Previous command - list released versions, oldest first."""

from __future__ import annotations

from pathlib import Path

import typer

from tagver.cli.context import resolve_root
from tagver.core.config import DEFAULT_GIT_TIMEOUT_SECONDS
from tagver.git.repository import Repository
from tagver.output.console import RichConsole
from tagver.versioning.previous import PreviousVersionsResolver


def previous(
    path: Path = typer.Option(Path("."), "--path", "-C", help="Working tree to inspect"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report skipped tags"),
) -> None:
    """List previously released versions from the tag history."""
    root = resolve_root(path)
    console = RichConsole(verbose=verbose)
    repository = Repository(root, timeout=DEFAULT_GIT_TIMEOUT_SECONDS)

    for version in PreviousVersionsResolver(repository, console=console).resolve():
        typer.echo(str(version))
