"""Stats command implementation.

Shows how storage is distributed across package categories.
"""

from typing import Annotated

import typer

from pipmaster.cli.display import print_stats
from pipmaster.cli.types import (
    FromPipOption,
    InputOption,
    ModelOption,
    OfflineOption,
    ProviderOption,
    load_state,
)
from pipmaster.utils.formatting import print_error

app = typer.Typer(
    help="Show storage distribution by category.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_stats(
    ctx: typer.Context,
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="Only count packages whose name contains this."),
    ] = "",
    category: Annotated[
        str,
        typer.Option("--category", "-c", help="Only count one category, or 'All'."),
    ] = "All",
    input_path: InputOption = None,
    from_pip: FromPipOption = False,
    offline: OfflineOption = False,
    provider: ProviderOption = None,
    model: ModelOption = None,
) -> None:
    """Show total, average and per-category package sizes.

    Examples:
        pipmaster stats
        pipmaster stats --from-pip --offline
        pipmaster stats -c "AI/ML"
    """
    if ctx.invoked_subcommand is not None:
        return

    state = load_state(input_path, from_pip, offline, provider, model)
    state.set_search_term(search)
    try:
        state.select_category(category)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_stats(state.view())
