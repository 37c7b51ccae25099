"""CLI commands for pipmaster.

This package contains all subcommand implementations.
"""

from pipmaster.cli.commands import analyze, config, dashboard, list_cmd, stats, uninstall

__all__ = ["analyze", "config", "dashboard", "list_cmd", "stats", "uninstall"]
