"""View selection and derived view models.

The selection is the only user-controlled view state; everything in
DerivedView is recomputed from the collection and the selection.
"""

from dataclasses import dataclass, field
from enum import Enum

from pipmaster.models.package import PackageCategory, PackageRecord

ALL_CATEGORIES = "All"


class SortOption(str, Enum):
    """Sort orders for the package list."""

    NAME = "name"
    SIZE_DESC = "size"
    DATE_DESC = "date"


@dataclass(frozen=True, slots=True)
class ViewSelection:
    """Search, category and sort choices applied to the collection.

    Attributes:
        search_term: Case-insensitive substring matched against names.
        sort_option: Display order.
        selected_category: "All" or a category display value.
    """

    search_term: str = ""
    sort_option: SortOption = SortOption.SIZE_DESC
    selected_category: str = ALL_CATEGORIES


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    """Aggregated size of one category."""

    category: PackageCategory
    size_mb: float
    count: int


@dataclass(frozen=True, slots=True)
class DerivedView:
    """Everything the dashboard displays for one selection.

    Attributes:
        packages: Visible records in display order.
        category_totals: Size per category over the visible records,
            largest first.
        total_size_mb: Sum of visible sizes.
        average_size_mb: Mean visible size (0 when nothing is visible).
        categories: "All" followed by the categories present in the
            full collection, in first-appearance order.
    """

    packages: tuple[PackageRecord, ...]
    category_totals: tuple[CategoryTotal, ...]
    total_size_mb: float
    average_size_mb: float
    categories: tuple[str, ...] = field(default=(ALL_CATEGORIES,))

    @property
    def count(self) -> int:
        """Number of visible packages."""
        return len(self.packages)

    @property
    def is_empty(self) -> bool:
        """Check if the selection matched nothing."""
        return not self.packages
