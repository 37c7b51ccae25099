"""Import parsing for package lists.

Two input forms are auto-detected:

- A JSON array of package objects, as printed by ``pip list --format=json``.
- Plain text: package names separated by newlines or commas. Pinned
  requirement lines (``numpy==1.26.4``) also carry a version.
"""

import json
import logging
import re

from pydantic import TypeAdapter, ValidationError

from pipmaster.models.package import PartialPackage

logger = logging.getLogger(__name__)

_PARTIALS_ADAPTER = TypeAdapter(list[PartialPackage])
_ENTRY_SPLIT = re.compile(r"[\n,]")
_PINNED = re.compile(r"^(?P<name>[A-Za-z0-9][A-Za-z0-9._\-]*)\s*==\s*(?P<version>\S+)$")


class ImportParseError(Exception):
    """Raised when import text is neither a package array nor a name list."""


def parse_import_text(raw: str) -> list[PartialPackage]:
    """Parse pasted import text into partial package records.

    Args:
        raw: Text from a file, stdin or the dashboard prompt.

    Returns:
        Partial records in input order.

    Raises:
        ImportParseError: If the text is blank, is structurally invalid
            JSON package data, or contains no package names.
    """
    if not raw or not raw.strip():
        raise ImportParseError("Nothing to import: input is empty")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return _parse_name_list(raw)

    if isinstance(data, list):
        return _parse_package_array(data)
    if isinstance(data, dict):
        raise ImportParseError("Expected a JSON array of packages, got a single object")

    # Bare JSON scalars ("42", "true") are treated as a one-entry name list
    return _parse_name_list(raw)


def _parse_package_array(data: list[object]) -> list[PartialPackage]:
    """Validate a decoded JSON array of package objects."""
    if not data:
        raise ImportParseError("Nothing to import: package array is empty")

    try:
        partials = _PARTIALS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise ImportParseError(f"Invalid package data: {e.error_count()} error(s)\n{e}") from e

    logger.debug("Parsed %d package object(s) from JSON input", len(partials))
    return partials


def _parse_name_list(raw: str) -> list[PartialPackage]:
    """Split plain text into one partial record per name."""
    partials: list[PartialPackage] = []
    for entry in _ENTRY_SPLIT.split(raw):
        entry = entry.strip()
        if not entry:
            continue

        match = _PINNED.match(entry)
        if match:
            partials.append(PartialPackage(name=match["name"], version=match["version"]))
        else:
            partials.append(PartialPackage(name=entry))

    if not partials:
        raise ImportParseError("Nothing to import: no package names found")

    logger.debug("Parsed %d package name(s) from text input", len(partials))
    return partials
