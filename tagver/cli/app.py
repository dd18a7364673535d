from __future__ import annotations

import typer

from tagver import __version__
from tagver.cli.commands.previous import previous
from tagver.cli.commands.show import show


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


# Commands
app.command()(show)
app.command()(previous)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
