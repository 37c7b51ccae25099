"""Uninstall command implementation.

Simulates removing a package: the record leaves the collection and the
matching pip command is printed and copied to the clipboard. Nothing is
removed from the real environment.
"""

from typing import Annotated

import typer
from rich.markup import escape

from pipmaster.cli.display import format_size
from pipmaster.cli.types import (
    FromPipOption,
    InputOption,
    ModelOption,
    OfflineOption,
    ProviderOption,
    load_state,
)
from pipmaster.core.state import DashboardState, PackageNotFoundError
from pipmaster.models.package import PackageRecord
from pipmaster.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from pipmaster.utils.shell import copy_to_clipboard


def confirm_uninstall(record: PackageRecord) -> bool:
    """Prompt user to confirm a simulated uninstall."""
    console.print(
        f"\n[bold]Uninstall {escape(record.name)}?[/bold]\n"
        "[muted]This simulates the uninstall and copies the pip command to your clipboard.[/muted]"
    )
    return typer.confirm("Confirm & copy?", default=False)


def perform_uninstall(state: DashboardState, record: PackageRecord) -> None:
    """Remove a record from the state and hand the pip command to the user."""
    state.uninstall(record.name)
    command = record.uninstall_command

    print_success(f"Removed {record.name} from the dashboard.")
    console.print(f"  [muted]$[/muted] [bold]{escape(command)}[/bold]")
    if copy_to_clipboard(command):
        print_info("Command copied to clipboard.")
    else:
        print_warning("Could not copy to clipboard; copy the command above manually.")


def uninstall_package(
    package: Annotated[str, typer.Argument(help="Name of the package to uninstall.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    input_path: InputOption = None,
    from_pip: FromPipOption = False,
    offline: OfflineOption = False,
    provider: ProviderOption = None,
    model: ModelOption = None,
) -> None:
    """Simulate uninstalling a package and copy the pip command.

    Examples:
        pipmaster uninstall black
        pipmaster uninstall requests --from-pip --offline -y
    """
    state = load_state(input_path, from_pip, offline, provider, model)

    try:
        record = state.get(package)
    except PackageNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not yes and not confirm_uninstall(record):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    perform_uninstall(state, record)

    view = state.view()
    total = format_size(view.total_size_mb)
    console.print(f"\n[muted]{view.count} package(s) remaining, {total} total[/muted]")
