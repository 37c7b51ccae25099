"""View derivation: filter, sort and aggregate the package collection.

All functions here are pure. The dashboard recomputes its view from
the current collection and selection every time it is displayed.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from pipmaster.models.package import PackageCategory, PackageRecord
from pipmaster.models.view import (
    ALL_CATEGORIES,
    CategoryTotal,
    DerivedView,
    SortOption,
    ViewSelection,
)

# Records whose install date cannot be parsed sort after every real date
_UNPARSABLE_DATE = datetime.min.replace(tzinfo=UTC)


def matches(record: PackageRecord, search_term: str, selected_category: str) -> bool:
    """Check a record against the search term and category selection."""
    if search_term.casefold() not in record.name.casefold():
        return False
    return selected_category == ALL_CATEGORIES or record.category.value == selected_category


def filter_packages(
    packages: Iterable[PackageRecord],
    search_term: str = "",
    selected_category: str = ALL_CATEGORIES,
) -> list[PackageRecord]:
    """Keep records whose name contains the search term and whose category matches.

    Args:
        packages: Records to filter.
        search_term: Case-insensitive substring; empty matches everything.
        selected_category: "All" or a category display value.

    Returns:
        Matching records in their original order.
    """
    return [p for p in packages if matches(p, search_term, selected_category)]


def sort_packages(
    packages: Iterable[PackageRecord],
    sort_option: SortOption,
) -> list[PackageRecord]:
    """Order records for display.

    Sorting is stable, so ties keep their input order.

    Args:
        packages: Records to sort.
        sort_option: NAME ascending, SIZE_DESC or DATE_DESC.

    Returns:
        A new sorted list.
    """
    if sort_option == SortOption.NAME:
        return sorted(packages, key=lambda p: p.name)
    if sort_option == SortOption.SIZE_DESC:
        return sorted(packages, key=lambda p: p.size_mb, reverse=True)
    return sorted(packages, key=_date_key, reverse=True)


def _date_key(record: PackageRecord) -> datetime:
    return record.install_timestamp or _UNPARSABLE_DATE


def aggregate_by_category(packages: Iterable[PackageRecord]) -> list[CategoryTotal]:
    """Sum sizes per category, largest total first.

    Args:
        packages: Records to aggregate.

    Returns:
        One CategoryTotal per category present.
    """
    sizes: dict[PackageCategory, list[float]] = {}
    for record in packages:
        sizes.setdefault(record.category, []).append(record.size_mb)

    # Independent of input order: fsum rounds once, ties follow enum order
    rank = {category: i for i, category in enumerate(PackageCategory)}
    totals = [
        CategoryTotal(category=c, size_mb=math.fsum(s), count=len(s)) for c, s in sizes.items()
    ]
    totals.sort(key=lambda t: (-t.size_mb, rank[t.category]))
    return totals


def available_categories(packages: Iterable[PackageRecord]) -> list[str]:
    """Return "All" followed by present categories in first-appearance order."""
    seen: dict[str, None] = {}
    for record in packages:
        seen.setdefault(record.category.value, None)
    return [ALL_CATEGORIES, *seen]


def derive_view(packages: Sequence[PackageRecord], selection: ViewSelection) -> DerivedView:
    """Compute everything the dashboard shows for one selection.

    Args:
        packages: The full collection.
        selection: Search, category and sort choices.

    Returns:
        DerivedView with visible records and statistics over them.
    """
    visible = filter_packages(packages, selection.search_term, selection.selected_category)
    ordered = sort_packages(visible, selection.sort_option)

    total = math.fsum(p.size_mb for p in ordered)
    average = total / len(ordered) if ordered else 0.0

    return DerivedView(
        packages=tuple(ordered),
        category_totals=tuple(aggregate_by_category(ordered)),
        total_size_mb=total,
        average_size_mb=average,
        categories=tuple(available_categories(packages)),
    )
