"""AI advisor integration for package enrichment and risk analysis.

This module provides access to a hosted text-generation model (Gemini
API or Claude Code CLI) that fills in package metadata and judges
whether a package is safe to uninstall.

Public API:
- AdvisorConfig: Configuration model for advisor settings
- load_advisor_config: Load advisor configuration from TOML file
- save_advisor_config: Save advisor configuration to TOML file
- load_or_default_config: Load configuration, falling back to defaults
- AdvisorClient: Abstract model client
- create_client: Build the client for the configured provider
- enrich_packages: Complete partial records with model metadata
- analyze_uninstall_risk: Get an uninstall verdict for one package
"""

from pipmaster.advisor.client import (
    AdvisorAuthError,
    AdvisorClient,
    AdvisorError,
    AdvisorRequestError,
    AdvisorResponseError,
    ClaudeCliClient,
    GeminiClient,
    create_client,
)
from pipmaster.advisor.config import (
    AdvisorConfig,
    AdvisorConfigError,
    AdvisorProvider,
    load_advisor_config,
    load_or_default_config,
    save_advisor_config,
)
from pipmaster.advisor.gateway import analyze_uninstall_risk, enrich_packages

__all__ = [
    "AdvisorAuthError",
    "AdvisorClient",
    "AdvisorConfig",
    "AdvisorConfigError",
    "AdvisorError",
    "AdvisorProvider",
    "AdvisorRequestError",
    "AdvisorResponseError",
    "ClaudeCliClient",
    "GeminiClient",
    "analyze_uninstall_risk",
    "create_client",
    "enrich_packages",
    "load_advisor_config",
    "load_or_default_config",
    "save_advisor_config",
]
