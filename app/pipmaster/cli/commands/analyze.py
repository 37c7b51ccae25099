"""Analyze command implementation.

Asks the AI advisor whether a package can be uninstalled safely.
"""

from typing import Annotated

import typer

from pipmaster.advisor import AdvisorClient, analyze_uninstall_risk
from pipmaster.cli.display import create_analysis_panel
from pipmaster.cli.types import (
    FromPipOption,
    InputOption,
    ModelOption,
    OfflineOption,
    ProviderOption,
    build_client,
    load_state,
)
from pipmaster.core.state import DashboardState, PackageNotFoundError
from pipmaster.models.analysis import AnalysisResult
from pipmaster.utils.formatting import console, print_error


def run_analysis(
    state: DashboardState,
    package_name: str,
    client: AdvisorClient | None,
) -> AnalysisResult:
    """Analyze one package of the collection behind a busy indicator.

    Raises:
        PackageNotFoundError: If the package is not in the collection.
    """
    record = state.get(package_name)
    if client is None:
        return analyze_uninstall_risk(record.name, state.packages, None)

    with console.status(f"Consulting {client.description}..."):
        return analyze_uninstall_risk(record.name, state.packages, client)


def analyze_package(
    package: Annotated[str, typer.Argument(help="Name of the package to analyze.")],
    input_path: InputOption = None,
    from_pip: FromPipOption = False,
    offline: OfflineOption = False,
    provider: ProviderOption = None,
    model: ModelOption = None,
) -> None:
    """Analyze whether a package is safe to uninstall.

    The whole collection is sent as context so the model can point out
    packages that depend on the one being removed.

    Examples:
        pipmaster analyze numpy
        pipmaster analyze requests --from-pip
    """
    state = load_state(input_path, from_pip, offline, provider, model)
    client = None if offline else build_client(provider, model)

    try:
        result = run_analysis(state, package, client)
    except PackageNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(create_analysis_panel(package, result))
