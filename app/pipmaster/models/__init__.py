"""Data models for pipmaster.

This module exports the core data structures used throughout the application.
"""

from pipmaster.models.analysis import UNVERIFIED_REASONING, AnalysisResult
from pipmaster.models.package import (
    DEFAULT_VERSION,
    NO_DESCRIPTION,
    UNKNOWN_NAME,
    PackageCategory,
    PackageRecord,
    PartialPackage,
)
from pipmaster.models.view import (
    ALL_CATEGORIES,
    CategoryTotal,
    DerivedView,
    SortOption,
    ViewSelection,
)

__all__ = [
    "ALL_CATEGORIES",
    "DEFAULT_VERSION",
    "NO_DESCRIPTION",
    "UNKNOWN_NAME",
    "UNVERIFIED_REASONING",
    "AnalysisResult",
    "CategoryTotal",
    "DerivedView",
    "PackageCategory",
    "PackageRecord",
    "PartialPackage",
    "SortOption",
    "ViewSelection",
]
