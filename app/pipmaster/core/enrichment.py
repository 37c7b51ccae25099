"""Merging of partial package records with model-provided metadata.

Both entry points are total: they return exactly one complete
PackageRecord per input, in input order, and never raise on odd
candidate data.

Size defaults differ between the two paths on purpose: a record with no
size gets 0.1 MB after a successful enrichment call and 1 MB when the
call failed.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pipmaster.models.package import (
    DEFAULT_VERSION,
    NO_DESCRIPTION,
    UNKNOWN_NAME,
    PackageCategory,
    PackageRecord,
    PartialPackage,
    utc_now_iso,
)

logger = logging.getLogger(__name__)

ENRICHED_DEFAULT_SIZE_MB = 0.1
FALLBACK_DEFAULT_SIZE_MB = 1.0


class EnrichmentCandidate(BaseModel):
    """One metadata object returned by the model.

    Only ``name`` is required. Fields of the wrong type are dropped
    rather than rejected so that one bad value does not discard the
    rest of the candidate.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str
    description: str | None = None
    category: PackageCategory = PackageCategory.OTHER
    typical_size_mb: float | None = Field(default=None, alias="typicalSizeMB")

    @field_validator("description", mode="before")
    @classmethod
    def drop_invalid_description(cls, v: object) -> str | None:
        """Keep non-blank strings only."""
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, v: object) -> PackageCategory:
        """Collapse anything outside the fixed set to OTHER."""
        return PackageCategory.parse(v)

    @field_validator("typical_size_mb", mode="before")
    @classmethod
    def drop_invalid_size(cls, v: object) -> float | None:
        """Keep finite, non-negative numbers only."""
        if isinstance(v, bool) or not isinstance(v, int | float):
            return None
        if not (math.isfinite(v) and v >= 0):
            return None
        return float(v)


def parse_candidates(raw: Any) -> list[EnrichmentCandidate]:
    """Validate the model's raw response into candidates.

    Anything that is not a list yields no candidates; list items that
    are not usable objects are skipped.

    Args:
        raw: Decoded JSON from the model.

    Returns:
        Usable candidates in response order.
    """
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Enrichment response is not an array (got %s)", type(raw).__name__)
        return []

    candidates: list[EnrichmentCandidate] = []
    for index, item in enumerate(raw):
        try:
            candidates.append(EnrichmentCandidate.model_validate(item))
        except ValidationError as e:
            logger.debug("Skipping enrichment candidate %d: %s", index, e)
    return candidates


def index_candidates(
    candidates: Iterable[EnrichmentCandidate],
) -> dict[str, EnrichmentCandidate]:
    """Index candidates by lowercased name; the first one for a name wins."""
    index: dict[str, EnrichmentCandidate] = {}
    for candidate in candidates:
        index.setdefault(candidate.name.strip().lower(), candidate)
    return index


def merge_enrichment(
    partials: Sequence[PartialPackage],
    candidates: Iterable[EnrichmentCandidate],
    now: str | None = None,
) -> list[PackageRecord]:
    """Combine partial records with enrichment candidates.

    Args:
        partials: Imported records, possibly only names.
        candidates: Metadata returned by the model.
        now: Timestamp for records without an install date.
            Defaults to the current UTC time.

    Returns:
        One complete record per partial, in the same order.
    """
    timestamp = now or utc_now_iso()
    index = index_candidates(candidates)
    records: list[PackageRecord] = []

    for partial in partials:
        name = _name_or_unknown(partial)
        match = index.get(name.lower()) if partial.name else None

        if match is not None:
            size = _first_size(partial.size_mb, match.typical_size_mb, ENRICHED_DEFAULT_SIZE_MB)
            description = match.description or NO_DESCRIPTION
            category = match.category
        else:
            size = _first_size(partial.size_mb, None, ENRICHED_DEFAULT_SIZE_MB)
            description = NO_DESCRIPTION
            category = PackageCategory.OTHER

        records.append(
            PackageRecord(
                name=name,
                version=partial.version or DEFAULT_VERSION,
                size_mb=size,
                install_date=partial.install_date or timestamp,
                description=description,
                category=category,
            )
        )

    return records


def fallback_records(
    partials: Sequence[PartialPackage],
    now: str | None = None,
) -> list[PackageRecord]:
    """Materialize partial records using local defaults only.

    Used when enrichment is unavailable: category is OTHER, there is no
    description, and a missing size becomes 1 MB.

    Args:
        partials: Imported records.
        now: Timestamp for records without an install date.

    Returns:
        One complete record per partial, in the same order.
    """
    timestamp = now or utc_now_iso()
    return [
        PackageRecord(
            name=_name_or_unknown(partial),
            version=partial.version or DEFAULT_VERSION,
            size_mb=_first_size(partial.size_mb, None, FALLBACK_DEFAULT_SIZE_MB),
            install_date=partial.install_date or timestamp,
            category=PackageCategory.OTHER,
        )
        for partial in partials
    ]


def _name_or_unknown(partial: PartialPackage) -> str:
    if partial.name and partial.name.strip():
        return partial.name.strip()
    return UNKNOWN_NAME


def _first_size(local: float | None, suggested: float | None, default: float) -> float:
    if local is not None:
        return float(local)
    if suggested is not None:
        return suggested
    return default
