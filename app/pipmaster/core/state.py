"""Dashboard state container.

This module provides the DashboardState class, the single owner of the
package collection and the view selection for one session.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from pipmaster.core.view import available_categories, derive_view
from pipmaster.models.package import PackageRecord
from pipmaster.models.view import ALL_CATEGORIES, DerivedView, SortOption, ViewSelection

logger = logging.getLogger(__name__)


class PackageNotFoundError(KeyError):
    """Raised when a package name is not in the collection."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Package not found: {self.name}"


class DashboardState:
    """Holds the package collection and the current view selection.

    Packages are keyed by name. The state stores only the collection and
    the selection; the displayed list and statistics are derived on
    demand by view().

    Example:
        >>> state = DashboardState(DEMO_PACKAGES)
        >>> state.set_search_term("py")
        >>> [p.name for p in state.view().packages]
    """

    def __init__(
        self,
        packages: Iterable[PackageRecord] = (),
        selection: ViewSelection | None = None,
    ) -> None:
        """Initialize DashboardState.

        Args:
            packages: Initial collection.
            selection: Initial view selection. Defaults to all packages,
                largest first.
        """
        self._packages: dict[str, PackageRecord] = {}
        self._selection = selection or ViewSelection()
        self.replace_packages(packages)

    @property
    def packages(self) -> tuple[PackageRecord, ...]:
        """The full collection in insertion order."""
        return tuple(self._packages.values())

    @property
    def selection(self) -> ViewSelection:
        """The current view selection."""
        return self._selection

    @property
    def package_names(self) -> list[str]:
        """Names of all packages in insertion order."""
        return list(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, name: object) -> bool:
        return name in self._packages

    def get(self, name: str) -> PackageRecord:
        """Look up a package by name.

        Raises:
            PackageNotFoundError: If no package has that name.
        """
        try:
            return self._packages[name]
        except KeyError:
            raise PackageNotFoundError(name) from None

    def replace_packages(self, packages: Iterable[PackageRecord]) -> None:
        """Replace the whole collection.

        Duplicate names keep their first occurrence.

        Args:
            packages: The new collection.
        """
        collection: dict[str, PackageRecord] = {}
        for record in packages:
            if record.name in collection:
                logger.warning("Ignoring duplicate package entry: %s", record.name)
                continue
            collection[record.name] = record

        self._packages = collection
        self._reset_orphaned_category()
        logger.debug("Collection replaced: %d package(s)", len(collection))

    def uninstall(self, name: str) -> PackageRecord:
        """Remove a package from the collection.

        Args:
            name: Name of the package to remove.

        Returns:
            The removed record.

        Raises:
            PackageNotFoundError: If no package has that name.
        """
        record = self.get(name)
        del self._packages[name]
        self._reset_orphaned_category()
        logger.debug("Uninstalled %s from local state", name)
        return record

    def set_search_term(self, term: str) -> None:
        """Set the name filter (case-insensitive substring)."""
        self._selection = replace(self._selection, search_term=term.strip())

    def set_sort_option(self, option: SortOption) -> None:
        """Set the display order."""
        self._selection = replace(self._selection, sort_option=option)

    def select_category(self, category: str) -> None:
        """Select "All" or a category present in the collection.

        Matching is case-insensitive; the stored value is the category's
        display form.

        Raises:
            ValueError: If the category is not present in the collection.
        """
        for candidate in available_categories(self._packages.values()):
            if candidate.casefold() == category.strip().casefold():
                self._selection = replace(self._selection, selected_category=candidate)
                return

        msg = f"Unknown category '{category}'. Available: {', '.join(self.categories())}"
        raise ValueError(msg)

    def categories(self) -> list[str]:
        """Return "All" plus the categories present in the collection."""
        return available_categories(self._packages.values())

    def view(self) -> DerivedView:
        """Derive the displayed list and statistics from the current state."""
        return derive_view(self.packages, self._selection)

    def _reset_orphaned_category(self) -> None:
        selected = self._selection.selected_category
        if selected != ALL_CATEGORIES and selected not in self.categories():
            logger.debug("Category '%s' no longer present, showing all", selected)
            self._selection = replace(self._selection, selected_category=ALL_CATEGORIES)
