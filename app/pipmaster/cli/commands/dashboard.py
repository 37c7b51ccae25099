"""Dashboard command implementation.

Runs an interactive session over one DashboardState. Every command
either changes the state (import, uninstall, search, category, sort)
or reads a view derived from it (list, stats, analyze).
"""

import shlex
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from pipmaster.advisor import AdvisorClient
from pipmaster.cli.commands.analyze import run_analysis
from pipmaster.cli.commands.uninstall import confirm_uninstall, perform_uninstall
from pipmaster.cli.display import create_analysis_panel, print_stats, print_view
from pipmaster.cli.types import (
    FromPipOption,
    InputOption,
    ModelOption,
    OfflineOption,
    ProviderOption,
    build_client,
    enrich_with_status,
    load_state,
)
from pipmaster.core.importer import ImportParseError, parse_import_text
from pipmaster.core.state import DashboardState, PackageNotFoundError
from pipmaster.models.view import SortOption
from pipmaster.scanners.pip import PipScanner
from pipmaster.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Interactive package dashboard.",
    invoke_without_command=True,
)

HELP_TEXT = """[bold_header]Commands[/bold_header]
  [bold]list[/bold]                    Show the current view
  [bold]search[/bold] [muted]\\[term][/muted]           Filter by name (no term clears the filter)
  [bold]category[/bold] [muted]<name>[/muted]         Show one category ('All' for everything)
  [bold]categories[/bold]              List available categories
  [bold]sort[/bold] [muted]name|size|date[/muted]     Change the sort order
  [bold]import[/bold] [muted]\\[file|pip][/muted]      Import a list (no argument: paste it)
  [bold]analyze[/bold] [muted]<name>[/muted]          Ask the AI whether a package is safe to remove
  [bold]uninstall[/bold] [muted]<name>[/muted]        Remove a package and copy the pip command
  [bold]stats[/bold]                   Storage distribution by category
  [bold]help[/bold]                    Show this help
  [bold]quit[/bold]                    Leave the dashboard"""


class DashboardSession:
    """Dispatches dashboard commands against one state container.

    Attributes:
        state: The session's package collection and view selection.
        client: Advisor client, or None in offline mode.
    """

    PROMPT = "[bold_header]pipmaster>[/bold_header] "

    def __init__(self, state: DashboardState, client: AdvisorClient | None) -> None:
        self.state = state
        self.client = client
        self._handlers: dict[str, Callable[[list[str]], None]] = {
            "list": self._list,
            "ls": self._list,
            "search": self._search,
            "category": self._category,
            "categories": self._categories,
            "sort": self._sort,
            "import": self._import,
            "analyze": self._analyze,
            "uninstall": self._uninstall,
            "stats": self._stats,
            "help": self._help,
        }

    def run(self) -> None:
        """Read and execute commands until quit or end of input."""
        console.print("[bold]PipMaster dashboard[/bold] [muted](type 'help' for commands)[/muted]")
        self._list([])

        while True:
            try:
                line = console.input(self.PROMPT)
            except (EOFError, KeyboardInterrupt):
                console.print()
                break
            if not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Execute one command line.

        Args:
            line: Raw input line.

        Returns:
            False when the session should end, True otherwise.
        """
        try:
            words = shlex.split(line)
        except ValueError as e:
            print_error(f"Could not parse command: {e}")
            return True

        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit", "q"):
            return False

        handler = self._handlers.get(command)
        if handler is None:
            print_error(f"Unknown command '{command}'. Type 'help' for commands.")
            return True

        handler(args)
        return True

    def _list(self, args: list[str]) -> None:
        print_view(self.state.view(), self.state.selection, len(self.state))

    def _search(self, args: list[str]) -> None:
        self.state.set_search_term(" ".join(args))
        self._list([])

    def _category(self, args: list[str]) -> None:
        if not args:
            print_error("Usage: category <name>")
            return
        try:
            self.state.select_category(" ".join(args))
        except ValueError as e:
            print_error(str(e))
            return
        self._list([])

    def _categories(self, args: list[str]) -> None:
        console.print(", ".join(self.state.categories()))

    def _sort(self, args: list[str]) -> None:
        choices = "|".join(o.value for o in SortOption)
        if len(args) != 1:
            print_error(f"Usage: sort {choices}")
            return
        try:
            option = SortOption(args[0].lower())
        except ValueError:
            print_error(f"Unknown sort order '{args[0]}'. Use {choices}.")
            return
        self.state.set_sort_option(option)
        self._list([])

    def _import(self, args: list[str]) -> None:
        try:
            raw = self._read_import(args)
            partials = parse_import_text(raw)
        except ImportParseError as e:
            print_error(f"Failed to parse input. Ensure it is JSON or a list of names.\n{e}")
            return
        except (OSError, RuntimeError, UnicodeDecodeError) as e:
            print_error(str(e))
            return

        records = enrich_with_status(partials, self.client)
        self.state.replace_packages(records)
        print_success(f"Imported {len(self.state)} package(s).")
        self._list([])

    def _read_import(self, args: list[str]) -> str:
        if not args:
            console.print(
                "[muted]Paste pip list --format=json output or package names; "
                "finish with an empty line.[/muted]"
            )
            lines: list[str] = []
            while True:
                try:
                    line = console.input()
                except EOFError:
                    break
                if not line.strip():
                    break
                lines.append(line)
            return "\n".join(lines)

        source = " ".join(args)
        if source == "pip":
            return PipScanner().list_json()
        return Path(source).expanduser().read_text(encoding="utf-8")

    def _analyze(self, args: list[str]) -> None:
        if len(args) != 1:
            print_error("Usage: analyze <name>")
            return
        try:
            result = run_analysis(self.state, args[0], self.client)
        except PackageNotFoundError as e:
            print_error(str(e))
            return
        console.print(create_analysis_panel(args[0], result))

    def _uninstall(self, args: list[str]) -> None:
        if len(args) != 1:
            print_error("Usage: uninstall <name>")
            return
        try:
            record = self.state.get(args[0])
        except PackageNotFoundError as e:
            print_error(str(e))
            return
        if not confirm_uninstall(record):
            print_info("Cancelled.")
            return
        perform_uninstall(self.state, record)

    def _stats(self, args: list[str]) -> None:
        print_stats(self.state.view())

    def _help(self, args: list[str]) -> None:
        console.print(HELP_TEXT)


@app.callback(invoke_without_command=True)
def run_dashboard(
    ctx: typer.Context,
    empty: Annotated[
        bool,
        typer.Option("--empty", help="Start with an empty collection instead of the demo."),
    ] = False,
    input_path: InputOption = None,
    from_pip: FromPipOption = False,
    offline: OfflineOption = False,
    provider: ProviderOption = None,
    model: ModelOption = None,
) -> None:
    """Open the interactive dashboard.

    Examples:
        pipmaster dashboard                     # Start with the demo packages
        pipmaster dashboard -i pip.json         # Start with an imported list
        pipmaster dashboard --empty --offline   # Empty, no AI calls
    """
    if ctx.invoked_subcommand is not None:
        return

    if empty and input_path is None and not from_pip:
        state = DashboardState()
    else:
        state = load_state(input_path, from_pip, offline, provider, model)

    client = None if offline else build_client(provider, model)
    DashboardSession(state, client).run()
