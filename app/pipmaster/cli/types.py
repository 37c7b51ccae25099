"""Shared types and utilities for CLI commands.

This module provides the option types and helpers every data command
uses to build its package collection: read an import source, enrich it
through the advisor, and wrap it in a DashboardState.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from pipmaster.advisor import AdvisorClient, create_client, enrich_packages
from pipmaster.advisor.config import AdvisorConfig, load_or_default_config
from pipmaster.core.demo import DEMO_PACKAGES
from pipmaster.core.importer import ImportParseError, parse_import_text
from pipmaster.core.state import DashboardState
from pipmaster.models.package import PackageRecord, PartialPackage
from pipmaster.scanners.pip import PipScanner
from pipmaster.utils.formatting import console, print_error

logger = logging.getLogger(__name__)


class ProviderChoice(str, Enum):
    """Available AI providers."""

    GEMINI = "gemini"
    CLAUDE = "claude"


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Import file: pip list --format=json output or a list of names ('-' for stdin).",
    ),
]
FromPipOption = Annotated[
    bool,
    typer.Option("--from-pip", help="Import the packages of the current Python environment."),
]
OfflineOption = Annotated[
    bool,
    typer.Option("--offline", help="Skip AI enrichment and use local defaults."),
]
ProviderOption = Annotated[
    ProviderChoice | None,
    typer.Option("--provider", help="AI provider override.", case_sensitive=False),
]
ModelOption = Annotated[
    str | None,
    typer.Option("--model", help="Model name override."),
]


def build_client(
    provider: ProviderChoice | None = None,
    model: str | None = None,
) -> AdvisorClient:
    """Create the advisor client from saved config and CLI overrides.

    Args:
        provider: Optional provider override from CLI.
        model: Optional model override from CLI.

    Returns:
        Client for the effective provider.
    """
    config = load_or_default_config()

    if provider is not None or model is not None:
        config = AdvisorConfig(
            provider=provider.value if provider is not None else config.provider,
            model=model if model is not None else (None if provider is not None else config.model),
            timeout_seconds=config.timeout_seconds,
            api_key_env=config.api_key_env,
        )

    return create_client(config)


def read_import_source(input_path: Path | None, from_pip: bool) -> str:
    """Read raw import text from a file, stdin or the live environment.

    Raises:
        typer.Exit: If the source cannot be read.
    """
    if from_pip:
        try:
            return PipScanner().list_json()
        except RuntimeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    if input_path is None:
        return ""

    if str(input_path) == "-":
        return sys.stdin.read()

    if not input_path.exists():
        print_error(f"Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Failed to read {input_path}: {e}")
        raise typer.Exit(code=1) from e


def parse_or_exit(raw: str) -> list[PartialPackage]:
    """Parse import text, turning malformed input into a CLI error.

    Raises:
        typer.Exit: If the text is not a valid import.
    """
    try:
        return parse_import_text(raw)
    except ImportParseError as e:
        print_error(f"Failed to parse input. Ensure it is JSON or a list of names.\n{e}")
        raise typer.Exit(code=1) from e


def enrich_with_status(
    partials: list[PartialPackage],
    client: AdvisorClient | None,
) -> list[PackageRecord]:
    """Run enrichment behind a busy indicator."""
    if client is None:
        return enrich_packages(partials, None)

    with console.status(f"Analyzing {len(partials)} package(s) with {client.description}..."):
        return enrich_packages(partials, client)


def load_state(
    input_path: Path | None = None,
    from_pip: bool = False,
    offline: bool = False,
    provider: ProviderChoice | None = None,
    model: str | None = None,
) -> DashboardState:
    """Build the dashboard state for a one-shot command.

    Without an import source the demo collection is used.

    Raises:
        typer.Exit: If the import source is missing or malformed.
    """
    if input_path is None and not from_pip:
        return DashboardState(DEMO_PACKAGES)

    partials = parse_or_exit(read_import_source(input_path, from_pip))
    client = None if offline else build_client(provider, model)
    records = enrich_with_status(partials, client)
    logger.info("Imported %d package(s)", len(records))
    return DashboardState(records)
