"""Unit tests for cli/display.py.

Tests for the Rich tables and panels shared by the one-shot commands
and the interactive dashboard.
"""

import io
from collections.abc import Callable

import pipmaster.cli.display as display_mod
import pytest
from pipmaster.cli.display import (
    create_analysis_panel,
    create_stats_table,
    create_view_table,
    describe_selection,
    format_size,
    print_stats,
    print_view,
)
from pipmaster.core.demo import DEMO_PACKAGES
from pipmaster.core.theme import get_theme
from pipmaster.core.view import derive_view
from pipmaster.models.analysis import AnalysisResult
from pipmaster.models.package import PackageRecord
from pipmaster.models.view import SortOption, ViewSelection
from rich.console import Console, RenderableType


def _render(renderable: RenderableType) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=120).print(renderable)
    return buf.getvalue()


@pytest.fixture
def capture(monkeypatch: pytest.MonkeyPatch) -> Callable[..., str]:
    """Run a print function against a recording console and return its output."""

    def run(func: Callable[..., None], *args: object) -> str:
        buf = io.StringIO()
        test_console = Console(theme=get_theme(), file=buf, color_system=None, width=120)
        monkeypatch.setattr(display_mod, "console", test_console)
        func(*args)
        return buf.getvalue()

    return run


class TestFormatting:
    """Tests for small formatting helpers."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(0.4, "0.4 MB"), (960.6, "960.6 MB"), (2048, "2.0 GB")],
    )
    def test_format_size(self, size: float, expected: str) -> None:
        """Sizes switch to GB from 1024 MB."""
        assert format_size(size) == expected

    def test_describe_default_selection(self) -> None:
        """The default selection only mentions the sort order."""
        assert describe_selection(ViewSelection()) == "sorted by size, largest first"

    def test_describe_full_selection(self) -> None:
        """Search and category are listed before the sort order."""
        selection = ViewSelection("api", SortOption.NAME, "Web")

        assert describe_selection(selection) == "search 'api', category Web, sorted by name"


class TestViewTable:
    """Tests for package table rendering."""

    def test_columns(self) -> None:
        """The table shows the package attributes."""
        table = create_view_table(DEMO_PACKAGES)

        assert [col.header for col in table.columns] == [
            "Package",
            "Version",
            "Size",
            "Category",
            "Installed",
            "Description",
        ]
        assert table.row_count == len(DEMO_PACKAGES)

    def test_markup_in_names_is_escaped(self) -> None:
        """Package names are shown literally."""
        record = PackageRecord(name="[bold]x", version="1", size_mb=1, install_date="2024-01-01")

        assert "[bold]x" in _render(create_view_table([record]))

    def test_print_view_summary(self, capture: Callable[..., str]) -> None:
        """print_view shows rows and the 'Showing X of N' summary."""
        view = derive_view(DEMO_PACKAGES, ViewSelection())

        output = capture(print_view, view, ViewSelection(), len(DEMO_PACKAGES), 3)

        assert "torch" in output
        assert "uvicorn" not in output
        assert "Showing 3 of 8 packages" in output
        assert "(limited to 3)" in output

    def test_print_view_empty(self, capture: Callable[..., str]) -> None:
        """An empty view prints the empty-state hint."""
        selection = ViewSelection(search_term="zzz")
        view = derive_view(DEMO_PACKAGES, selection)

        output = capture(print_view, view, selection, len(DEMO_PACKAGES))

        assert "No packages found" in output
        assert "Try adjusting your filters" in output


class TestStats:
    """Tests for the storage distribution output."""

    def test_stats_table_rows(self) -> None:
        """One row per category, largest first."""
        view = derive_view(DEMO_PACKAGES, ViewSelection())

        output = _render(create_stats_table(view))

        assert output.index("AI/ML") < output.index("Data Science") < output.index("Utility")

    def test_print_stats_totals(self, capture: Callable[..., str]) -> None:
        """Totals, storage used and average size are printed."""
        view = derive_view(DEMO_PACKAGES, ViewSelection())

        output = capture(print_stats, view)

        assert "Total Packages" in output
        assert "961" in output
        assert "120.1 MB" in output


class TestAnalysisPanel:
    """Tests for create_analysis_panel."""

    def test_safe_verdict(self) -> None:
        """A safe verdict is headed as likely safe."""
        output = _render(create_analysis_panel("black", AnalysisResult(True, "Formatter only.")))

        assert "Likely Safe to Uninstall" in output
        assert "AI Analysis: black" in output
        assert "Potential dependents" not in output

    def test_caution_with_dependents(self) -> None:
        """An unsafe verdict lists the dependents."""
        result = AnalysisResult(False, "Core dependency.", ("pandas", "scikit-learn"))

        output = _render(create_analysis_panel("numpy", result))

        assert "Caution Recommended" in output
        assert "Potential dependents:" in output
        assert "pandas, scikit-learn" in output
