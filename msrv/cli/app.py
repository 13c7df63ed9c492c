from __future__ import annotations

import typer

from msrv import __version__
from msrv.cli.commands.list_cmd import list_deps
from msrv.cli.commands.show_cmd import show


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command(name="list")(list_deps)
app.command()(show)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Report the minimum supported Rust version of a dependency graph."""


def main() -> None:
    app()
