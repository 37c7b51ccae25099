"""Shared Rich consoles and the markup helpers built on them.

Normal output goes to ``console`` (stdout); warnings, errors and log
records go to ``err_console`` (stderr) so that ``--json`` output stays
machine-readable.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pipmaster.core.theme import category_style, get_theme

if TYPE_CHECKING:
    from pipmaster.models.package import PackageCategory, PackageRecord


def _make_console(*, stderr: bool = False) -> Console:
    """Themed console; forces truecolor on a terminal so hex colors survive."""
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def create_package_table(title: str = "Installed Packages") -> Table:
    """Empty package table with the six columns every listing uses."""
    table = Table(
        title=title,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Package", no_wrap=True)
    table.add_column("Version", style="muted")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Category", no_wrap=True)
    table.add_column("Installed", style="muted", no_wrap=True)
    table.add_column("Description", style="text", overflow="ellipsis")
    return table


def format_category(category: PackageCategory) -> str:
    """Format a category name in its theme color."""
    style = category_style(category)
    return f"[{style}]{category.value}[/{style}]"


def format_install_date(value: str) -> str:
    """Shorten an ISO timestamp to its date part for display."""
    return value.split("T", 1)[0]


def format_package_row(pkg: PackageRecord) -> tuple[str, str, str, str, str, str]:
    """Format a package as a table row with proper styling.

    Args:
        pkg: The package record to format.

    Returns:
        Tuple of (name, version, size, category, installed, description) with Rich markup.
    """
    return (
        f"[package.name]{escape(pkg.name)}[/]",
        f"[muted]{pkg.version}[/]",
        f"[info]{pkg.size_human}[/]",
        format_category(pkg.category),
        f"[muted]{format_install_date(pkg.install_date)}[/]",
        f"[text]{escape(pkg.description or '-')}[/]",
    )


def print_info(message: str) -> None:
    console.print(escape(message), style="info")


def print_success(message: str) -> None:
    console.print(escape(message), style="success")


def print_warning(message: str) -> None:
    """Print a warning to stderr; markup in ``message`` is shown literally."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error to stderr; markup in ``message`` is shown literally."""
    err_console.print(f"[error]Error:[/] {escape(message)}")
