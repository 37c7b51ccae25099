"""Entry point of the ``pipmaster`` command.

Builds the root Typer app, wires up the subcommands and configures
logging from the global flags.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from pipmaster import __version__
from pipmaster.cli.commands import analyze, config, dashboard, list_cmd, stats, uninstall
from pipmaster.utils.formatting import err_console

app = typer.Typer(
    name="pipmaster",
    help="Python package dashboard with AI-assisted metadata and uninstall analysis.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"pipmaster version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr through Rich.

    Warnings are shown by default; ``verbose`` adds debug output and
    wins over ``quiet``, which keeps errors only.
    """
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_print_version,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details, including advisor traffic."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log errors."),
    ] = False,
) -> None:
    """pipmaster - a dashboard for your Python packages.

    Import a package list, search, filter and sort it, see where the
    disk space goes, and ask an AI model what is safe to remove.
    """
    configure_logging(verbose, quiet)


app.add_typer(list_cmd.app, name="list")
app.add_typer(stats.app, name="stats")
app.command(name="analyze")(analyze.analyze_package)
app.command(name="uninstall")(uninstall.uninstall_package)
app.add_typer(dashboard.app, name="dashboard")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
