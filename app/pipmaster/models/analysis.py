"""Uninstall risk analysis model."""

from dataclasses import dataclass, field

UNVERIFIED_REASONING = "Could not verify with AI. Proceed with caution."


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Verdict on whether a package can be removed safely.

    Results are ephemeral: they are produced per request and never
    stored in the dashboard state.

    Attributes:
        is_safe_to_uninstall: Whether removal looks safe.
        reasoning: Free-text explanation.
        dependents: Packages from the collection that may depend on it.
    """

    is_safe_to_uninstall: bool
    reasoning: str
    dependents: tuple[str, ...] = field(default=())

    @classmethod
    def unverified(cls) -> "AnalysisResult":
        """Conservative result used when the model could not be consulted."""
        return cls(is_safe_to_uninstall=True, reasoning=UNVERIFIED_REASONING)

    @property
    def has_dependents(self) -> bool:
        """Check if any dependents were reported."""
        return bool(self.dependents)
