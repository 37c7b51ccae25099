"""CLI package for pipmaster.

This package contains the Typer application and all subcommands.
"""

from pipmaster.cli.main import app

__all__ = ["app"]
