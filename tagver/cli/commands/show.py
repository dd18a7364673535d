"""Show command - resolve and print the version info of a working tree."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from tagver.cli.context import build_context
from tagver.core.config import DEFAULT_BUILD_NUMBER_ENV
from tagver.core.errors import ErrorCode
from tagver.core.result import Err, Ok
from tagver.versioning.current import resolve_version_info
from tagver.versioning.model import VersionInfo, VersionInfoError

_console = Console()

# Previous versions listed in the text view
_MAX_PREVIOUS = 10


def exit_code_for(error: VersionInfoError) -> ErrorCode:
    if error.kind == "no_commit":
        return ErrorCode.ENV_ERROR
    return ErrorCode.VERSION_ERROR


def render_version_info(info: VersionInfo) -> Text:
    current = info.current_version
    text = Text()

    text.append(info.current_package.name, style="bold")
    text.append(" ")
    text.append(current.full, style="green bold" if not current.is_snapshot else "yellow bold")
    text.append("\n")

    text.append("commit   ", style="dim")
    text.append(current.commit_sha)
    text.append("\n")

    text.append("kind     ", style="dim")
    text.append("snapshot" if current.is_snapshot else "release")
    if not current.is_snapshot:
        text.append("\n")
        text.append("codename ", style="dim")
        if current.code_name is None:
            text.append("-", style="dim")
        elif not current.code_name:
            text.append("(malformed)", style="red")
        else:
            text.append(current.code_name)

    repo = info.git_repo_info
    if repo.slug or repo.branch:
        text.append("\n")
        text.append("repo     ", style="dim")
        text.append(repo.slug or "?", style="blue")
        if repo.branch:
            text.append(f" ({repo.branch})", style="dim")

    text.append("\n")
    text.append("previous ", style="dim")
    if not info.previous_versions:
        text.append("none", style="dim")
    else:
        shown = [str(v) for v in info.previous_versions[-_MAX_PREVIOUS:]]
        hidden = len(info.previous_versions) - len(shown)
        if hidden:
            text.append(f"({hidden} older) ", style="dim")
        text.append(", ".join(shown))

    return text


def show(
    path: Path = typer.Option(Path("."), "--path", "-C", help="Working tree to inspect"),
    package: Path | None = typer.Option(
        None,
        "--package",
        "-p",
        help="Package file (tagver.toml, pyproject.toml or package.json)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
    build_number_env: str = typer.Option(
        DEFAULT_BUILD_NUMBER_ENV,
        "--build-number-env",
        help="Environment variable holding the CI build number",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show resolution diagnostics"),
) -> None:
    """Resolve the current version, code name and previous releases."""
    ctx = build_context(
        path,
        package_file=package,
        build_number_env=build_number_env,
        verbose=verbose,
    )

    match resolve_version_info(ctx.root, ctx.package, ctx.settings, console=ctx.console):
        case Err(e):
            ctx.console.error(e.pretty())
            raise typer.Exit(code=int(exit_code_for(e)))
        case Ok(info):
            if as_json:
                typer.echo(json.dumps(info.to_dict(), indent=2))
                return
            _console.print(
                Panel(
                    render_version_info(info),
                    title="[bold]version[/bold]",
                    title_align="left",
                    border_style="green dim" if not info.current_version.is_snapshot else "yellow",
                    padding=(0, 1),
                )
            )
