"""Package models for the dashboard collection.

This module defines the core data structures for representing
Python packages: the partial records produced by an import and the
complete records held by the dashboard state.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_VERSION = "0.0.0"
UNKNOWN_NAME = "Unknown"
NO_DESCRIPTION = "No description available"

_SEPARATORS = re.compile(r"[\s_\-]+")


class PackageCategory(Enum):
    """Fixed set of package categories shown on the dashboard."""

    DATA_SCIENCE = "Data Science"
    WEB = "Web"
    UTILITY = "Utility"
    SYSTEM = "System"
    AI_ML = "AI/ML"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> "PackageCategory":
        """Map a loosely formatted category string to a member.

        Matching ignores case and treats spaces, hyphens and underscores
        as the same separator, so "Data-Science" and "data_science" both
        resolve to DATA_SCIENCE. Anything unrecognised becomes OTHER.

        Args:
            value: Raw category value (usually a string from the model).

        Returns:
            The matching PackageCategory, or OTHER.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.OTHER

        key = _SEPARATORS.sub(" ", value.strip()).casefold()
        for member in cls:
            if key in (member.value.casefold(), member.name.replace("_", " ").casefold()):
                return member
        return cls.OTHER


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an install date string into an aware datetime.

    Date-only values ("2024-01-10") and a trailing "Z" are accepted.
    Naive values are interpreted as UTC.

    Returns:
        Parsed datetime, or None if the value is missing or unparsable.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class PartialPackage(BaseModel):
    """A package as it arrives from an import, before enrichment.

    Every field is optional. Both the camelCase wire names used by the
    JSON import format and the snake_case attribute names are accepted.
    Unknown keys (e.g. pip's ``editable_project_location``) are ignored.

    Attributes:
        name: Package name.
        version: Installed version string.
        size_mb: Installed size in MB, if known.
        install_date: ISO format installation date, if known.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str | None = None
    version: str | None = None
    size_mb: Annotated[
        float | None,
        Field(ge=0, allow_inf_nan=False, validation_alias=AliasChoices("sizeMB", "size_mb")),
    ] = None
    install_date: Annotated[
        str | None,
        Field(validation_alias=AliasChoices("installDate", "install_date")),
    ] = None


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """A complete package entry held by the dashboard.

    Records are immutable; the collection changes only by wholesale
    replacement (re-import) or removal (uninstall).

    Attributes:
        name: Package name, unique within a collection.
        version: Installed version string.
        size_mb: Installed size in MB.
        install_date: ISO format installation date.
        description: Short human-readable description.
        category: Dashboard category.
    """

    name: str
    version: str
    size_mb: float
    install_date: str
    description: str | None = field(default=None)
    category: PackageCategory = field(default=PackageCategory.OTHER)

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.version:
            msg = "Package version cannot be empty"
            raise ValueError(msg)
        if not (math.isfinite(self.size_mb) and self.size_mb >= 0):
            msg = f"Package size must be a non-negative number, got {self.size_mb}"
            raise ValueError(msg)

    @property
    def uninstall_command(self) -> str:
        """Return the pip command that would remove this package."""
        return f"pip uninstall {self.name} -y"

    @property
    def install_timestamp(self) -> datetime | None:
        """Return the parsed install date, or None if unparsable."""
        return parse_timestamp(self.install_date)

    @property
    def size_human(self) -> str:
        """Return human-readable size string."""
        if self.size_mb >= 1024:
            return f"{self.size_mb / 1024:.1f} GB"
        return f"{self.size_mb:.1f} MB"

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the JSON import format."""
        result: dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "sizeMB": self.size_mb,
            "installDate": self.install_date,
            "category": self.category.value,
        }
        if self.description is not None:
            result["description"] = self.description
        return result
