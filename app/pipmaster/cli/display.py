"""Shared Rich display functions for package views and analysis results.

Provides reusable table builders and printers used by the one-shot
commands (list, stats, analyze, uninstall) and the interactive dashboard.
"""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pipmaster.models.analysis import AnalysisResult
from pipmaster.models.package import PackageRecord
from pipmaster.models.view import ALL_CATEGORIES, DerivedView, SortOption, ViewSelection
from pipmaster.utils.formatting import (
    console,
    create_package_table,
    format_category,
    format_package_row,
)

_SORT_LABELS = {
    SortOption.NAME: "name",
    SortOption.SIZE_DESC: "size, largest first",
    SortOption.DATE_DESC: "install date, newest first",
}

_BAR_WIDTH = 20


def format_size(size_mb: float) -> str:
    """Format a size in MB for summaries."""
    if size_mb >= 1024:
        return f"{size_mb / 1024:.1f} GB"
    return f"{size_mb:.1f} MB"


def describe_selection(selection: ViewSelection) -> str:
    """Describe the active filters and sort order in one line."""
    parts: list[str] = []
    if selection.search_term:
        parts.append(f"search '{escape(selection.search_term)}'")
    if selection.selected_category != ALL_CATEGORIES:
        parts.append(f"category {escape(selection.selected_category)}")
    parts.append(f"sorted by {_SORT_LABELS[selection.sort_option]}")
    return ", ".join(parts)


def create_view_table(
    packages: tuple[PackageRecord, ...] | list[PackageRecord],
    title: str = "Installed Packages",
) -> Table:
    """Create a Rich table listing packages in the given order.

    Args:
        packages: Records to display, already filtered and sorted.
        title: Table title.

    Returns:
        Rich Table with one row per package.
    """
    table = create_package_table(title)
    for pkg in packages:
        table.add_row(*format_package_row(pkg))
    return table


def print_empty_state() -> None:
    """Print the message shown when no package matches the selection."""
    console.print("\n[bold]No packages found[/bold]")
    console.print("[muted]Try adjusting your filters or import a new list.[/muted]")


def print_view(
    view: DerivedView,
    selection: ViewSelection,
    total_count: int,
    limit: int | None = None,
) -> None:
    """Print the package table for a derived view with a summary line.

    Args:
        view: Derived view to display.
        selection: Selection the view was derived from.
        total_count: Size of the full collection.
        limit: Maximum number of rows to display.
    """
    if view.is_empty:
        print_empty_state()
        return

    display = view.packages[:limit] if limit else view.packages
    console.print(create_view_table(display))

    summary = f"Showing {len(display)} of {total_count} packages ({describe_selection(selection)})"
    if limit and len(display) < view.count:
        summary += f" (limited to {limit})"
    console.print(f"\n[muted]{summary}[/muted]")


def create_stats_table(view: DerivedView) -> Table:
    """Create a Rich table with the storage distribution by category.

    Args:
        view: Derived view whose visible packages are aggregated.

    Returns:
        Rich Table with one row per category, largest first.
    """
    table = Table(
        title="Storage Distribution",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Category", no_wrap=True)
    table.add_column("Packages", justify="right")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Share", no_wrap=True)

    for total in view.category_totals:
        share = total.size_mb / view.total_size_mb if view.total_size_mb else 0.0
        filled = round(share * _BAR_WIDTH)
        bar = "█" * filled + "░" * (_BAR_WIDTH - filled)
        table.add_row(
            format_category(total.category),
            str(total.count),
            format_size(total.size_mb),
            f"{bar} {share:5.1%}",
        )

    return table


def print_stats(view: DerivedView) -> None:
    """Print the storage distribution table and totals."""
    if view.is_empty:
        print_empty_state()
        return

    console.print(create_stats_table(view))
    console.print(f"\n  Total Packages  [bold]{view.count}[/bold]")
    console.print(f"  MB Used         [bold]{view.total_size_mb:.0f}[/bold]")
    console.print(f"  Avg Size        [bold]{format_size(view.average_size_mb)}[/bold]")


def create_analysis_panel(package_name: str, result: AnalysisResult) -> Panel:
    """Create a Rich panel presenting an uninstall risk verdict.

    Args:
        package_name: Package that was analyzed.
        result: Verdict to display.

    Returns:
        Panel styled green for safe, amber for caution.
    """
    if result.is_safe_to_uninstall:
        heading = "[verdict.safe]✓ Likely Safe to Uninstall[/]"
        border = "success"
    else:
        heading = "[verdict.caution]⚠ Caution Recommended[/]"
        border = "warning"

    lines = [heading, "", escape(result.reasoning)]
    if result.has_dependents:
        lines.extend(["", "[muted]Potential dependents:[/muted]"])
        lines.append(", ".join(escape(d) for d in result.dependents))

    return Panel(
        "\n".join(lines),
        title=f"AI Analysis: {escape(package_name)}",
        border_style=border,
        expand=False,
    )
