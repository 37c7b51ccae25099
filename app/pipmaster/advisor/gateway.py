"""Enrichment gateway: the dashboard's only route to the model.

Both operations absorb every AdvisorError and return a complete,
usable result. Callers never need to handle model failures.
"""

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pipmaster.advisor.client import AdvisorClient, AdvisorError
from pipmaster.advisor.prompts import (
    ENRICHMENT_SCHEMA,
    RISK_SCHEMA,
    build_enrichment_prompt,
    build_risk_prompt,
)
from pipmaster.core.enrichment import fallback_records, merge_enrichment, parse_candidates
from pipmaster.models.analysis import AnalysisResult
from pipmaster.models.package import UNKNOWN_NAME, PackageRecord, PartialPackage

logger = logging.getLogger(__name__)


class RiskVerdict(BaseModel):
    """Risk analysis object as returned by the model."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    is_safe_to_uninstall: bool = Field(alias="isSafeToUninstall")
    reasoning: str
    dependents: list[str] = Field(default_factory=lambda: [])

    def to_result(self) -> AnalysisResult:
        """Convert to the dashboard's AnalysisResult."""
        return AnalysisResult(
            is_safe_to_uninstall=self.is_safe_to_uninstall,
            reasoning=self.reasoning,
            dependents=tuple(self.dependents),
        )


def enrich_packages(
    partials: Sequence[PartialPackage],
    client: AdvisorClient | None,
    now: str | None = None,
) -> list[PackageRecord]:
    """Turn partial records into complete ones with model metadata.

    Args:
        partials: Imported records, possibly only names.
        client: Model client, or None to use local defaults only.
        now: Timestamp for records without an install date.

    Returns:
        One complete record per partial, in input order.
    """
    if not partials:
        return []

    if client is None:
        logger.info("Enrichment skipped (offline), using local defaults")
        return fallback_records(partials, now)

    names = [p.name or UNKNOWN_NAME for p in partials]
    prompt = build_enrichment_prompt(names)

    try:
        raw = client.generate_json(prompt, ENRICHMENT_SCHEMA)
    except AdvisorError as e:
        logger.warning("Enrichment failed, using local defaults: %s", e)
        return fallback_records(partials, now)

    candidates = parse_candidates(raw)
    logger.debug(
        "Enrichment returned %d candidate(s) for %d package(s)", len(candidates), len(names)
    )
    return merge_enrichment(partials, candidates, now)


def analyze_uninstall_risk(
    package_name: str,
    packages: Sequence[PackageRecord],
    client: AdvisorClient | None,
) -> AnalysisResult:
    """Ask the model whether removing a package is safe.

    Args:
        package_name: Package to analyze.
        packages: The full current collection (names are used as context).
        client: Model client, or None when offline.

    Returns:
        The model's verdict, or the conservative unverified result when
        the model cannot be consulted or answers in the wrong shape.
    """
    if client is None:
        return AnalysisResult.unverified()

    prompt = build_risk_prompt(package_name, [p.name for p in packages])

    try:
        raw = client.generate_json(prompt, RISK_SCHEMA)
    except AdvisorError as e:
        logger.warning("Risk analysis for %s failed: %s", package_name, e)
        return AnalysisResult.unverified()

    try:
        return RiskVerdict.model_validate(raw).to_result()
    except ValidationError as e:
        logger.warning("Risk analysis for %s returned an invalid verdict: %s", package_name, e)
        return AnalysisResult.unverified()
