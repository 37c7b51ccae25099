"""List command implementation.

Displays the package collection filtered, categorized and sorted.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pipmaster.cli.display import print_view
from pipmaster.cli.types import (
    FromPipOption,
    InputOption,
    ModelOption,
    OfflineOption,
    OutputFormat,
    ProviderOption,
    load_state,
)
from pipmaster.models.package import PackageRecord
from pipmaster.models.view import DerivedView, SortOption
from pipmaster.utils.formatting import console, err_console, print_error

app = typer.Typer(
    help="List packages with search, category filter and sorting.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_packages(
    ctx: typer.Context,
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="Case-insensitive substring of the package name."),
    ] = "",
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="Category to show, or 'All'."),
    ] = "All",
    sort: Annotated[
        SortOption,
        typer.Option("--sort", help="Sort by name, size or date.", case_sensitive=False),
    ] = SortOption.SIZE_DESC,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Limit number of packages to display.", min=1),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: table or json.", case_sensitive=False),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option("--export", "-e", help="Export the listed packages to a JSON file."),
    ] = None,
    input_path: InputOption = None,
    from_pip: FromPipOption = False,
    offline: OfflineOption = False,
    provider: ProviderOption = None,
    model: ModelOption = None,
) -> None:
    """List packages.

    Without --input or --from-pip a demo collection is shown.

    Examples:
        pipmaster list                              # Demo packages, largest first
        pipmaster list -i pip.json                  # Import and enrich pip list output
        pipmaster list --from-pip --offline         # Current environment, no AI
        pipmaster list -s api -c Web                # Search within a category
        pipmaster list --sort date --limit 5        # Five most recent installs
        pipmaster list --format json                # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    state = load_state(input_path, from_pip, offline, provider, model)
    state.set_search_term(search)
    state.set_sort_option(sort)
    try:
        state.select_category(category)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    view = state.view()
    shown = view.packages[:limit] if limit else view.packages

    if export_path is not None:
        _export_packages(export_path.resolve(), shown)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(_json_payload(view, shown)))
        return

    print_view(view, state.selection, len(state), limit)


def _export_packages(path: Path, packages: tuple[PackageRecord, ...]) -> None:
    """Write records to ``path`` in the import format; exits 1 on failure."""
    if path.is_dir():
        print_error(f"Export path is a directory: {path}")
        raise typer.Exit(code=1)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps([p.to_dict() for p in packages], indent=2))
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
    err_console.print(f"[info]Exported {len(packages)} package(s) to {escape(str(path))}[/]")


def _json_payload(view: DerivedView, shown: tuple[PackageRecord, ...]) -> dict[str, object]:
    return {
        "packages": [p.to_dict() for p in shown],
        "summary": {
            "count": view.count,
            "totalSizeMB": round(view.total_size_mb, 3),
            "averageSizeMB": round(view.average_size_mb, 3),
        },
    }
