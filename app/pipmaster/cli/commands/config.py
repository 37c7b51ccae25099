"""Config commands for the AI advisor settings.

Manages ~/.config/pipmaster/advisor.toml.
"""

from typing import Annotated

import typer
from rich.table import Table

from pipmaster.advisor.config import (
    AdvisorConfig,
    AdvisorConfigError,
    AdvisorConfigNotFoundError,
    load_advisor_config,
    save_advisor_config,
)
from pipmaster.cli.types import ProviderChoice
from pipmaster.core.paths import get_advisor_config_path
from pipmaster.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or change AI advisor settings.",
    no_args_is_help=True,
)


def _load_existing() -> AdvisorConfig:
    """Load the saved config, or defaults when there is none yet."""
    try:
        return load_advisor_config()
    except AdvisorConfigNotFoundError:
        return AdvisorConfig()
    except AdvisorConfigError as e:
        print_warning(f"Error loading config, using defaults: {e}")
        return AdvisorConfig()


@app.command("show")
def show_config() -> None:
    """Show the effective advisor configuration."""
    config = _load_existing()
    api_key = config.resolve_api_key()

    table = Table(show_header=False, border_style="border", title="Advisor Configuration")
    table.add_column("Setting", style="bold_header")
    table.add_column("Value")
    table.add_row("Provider", config.provider)
    table.add_row("Model", config.effective_model)
    table.add_row("Timeout", f"{config.timeout_seconds}s")
    if config.provider == "gemini":
        key_state = "[success]set[/success]" if api_key else "[warning]not set[/warning]"
        table.add_row("API key", f"{config.api_key_env} ({key_state})")
    table.add_row("File", str(get_advisor_config_path()))
    console.print(table)


@app.command("path")
def show_path() -> None:
    """Print the advisor configuration file path."""
    console.print(str(get_advisor_config_path()))


@app.command("set")
def set_config(
    provider: Annotated[
        ProviderChoice | None,
        typer.Option("--provider", help="AI provider.", case_sensitive=False),
    ] = None,
    model: Annotated[
        str | None,
        typer.Option("--model", help="Model name ('' resets to the provider default)."),
    ] = None,
    timeout: Annotated[
        int | None,
        typer.Option("--timeout", help="Request timeout in seconds (5-600)."),
    ] = None,
    api_key_env: Annotated[
        str | None,
        typer.Option("--api-key-env", help="Environment variable holding the Gemini API key."),
    ] = None,
) -> None:
    """Change advisor settings and save them.

    Examples:
        pipmaster config set --provider claude
        pipmaster config set --model gemini-2.5-pro --timeout 120
    """
    current = _load_existing()
    updates: dict[str, object] = {}
    if provider is not None:
        updates["provider"] = provider.value
    if model is not None:
        updates["model"] = model or None
    if timeout is not None:
        updates["timeout_seconds"] = timeout
    if api_key_env is not None:
        updates["api_key_env"] = api_key_env

    if not updates:
        print_error("Nothing to change. Pass at least one option.")
        raise typer.Exit(code=1)

    try:
        config = AdvisorConfig.model_validate({**current.model_dump(), **updates})
    except ValueError as e:
        print_error(f"Invalid setting: {e}")
        raise typer.Exit(code=1) from e

    try:
        path = save_advisor_config(config)
    except AdvisorConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Saved advisor configuration to {path}")
