"""Prompt templates and response schemas for the AI advisor.

Schemas use the OpenAPI subset understood by the Gemini
``responseSchema`` field. Providers without schema support get the
same shape described in the prompt text.
"""

from collections.abc import Sequence
from typing import Any

from pipmaster.models.package import PackageCategory

CATEGORIES: tuple[str, ...] = tuple(c.value for c in PackageCategory)

ENRICHMENT_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "description": {"type": "STRING"},
            "category": {"type": "STRING"},
            "typicalSizeMB": {"type": "NUMBER"},
        },
    },
}

RISK_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "isSafeToUninstall": {"type": "BOOLEAN"},
        "reasoning": {"type": "STRING"},
        "dependents": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
}


def join_names(names: Sequence[str]) -> str:
    """Join package names into the comma-separated list used in prompts."""
    return ", ".join(names)


def build_enrichment_prompt(names: Sequence[str]) -> str:
    """Build the prompt asking for metadata about a list of packages.

    Args:
        names: Package names to describe.

    Returns:
        Prompt text.
    """
    categories = ", ".join(f"'{c}'" for c in CATEGORIES)
    return f"""I have a list of Python packages: {join_names(names)}.
Return a JSON array where each object contains:
- name (string)
- description (string, max 10 words)
- category (one of: {categories})
- typicalSizeMB (number, an estimate of installed size in MB, \
e.g. numpy is around 30, flask is around 1)

If you don't know a package, estimate based on its name.
Respond with JSON only."""


def build_risk_prompt(package_name: str, installed: Sequence[str]) -> str:
    """Build the prompt asking whether a package can be removed safely.

    Args:
        package_name: Package the user wants to uninstall.
        installed: Names of every package currently in the collection.

    Returns:
        Prompt text.
    """
    return f"""Context: A user has these Python packages installed: [{join_names(installed)}].
User wants to uninstall: "{package_name}".

Analyze if this is safe.
1. Is it a core system library (like pip, setuptools)?
2. Is it a dependency for other popular libraries in the list?

Return a JSON object with:
- isSafeToUninstall (boolean)
- reasoning (string)
- dependents (array of package names from the list that depend on it)
Respond with JSON only."""
