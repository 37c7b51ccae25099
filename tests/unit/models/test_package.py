"""Unit tests for package models.

Tests for PackageCategory, PartialPackage, PackageRecord and the
analysis and view models.
"""

from datetime import UTC, datetime

import pytest
from pipmaster.models.analysis import UNVERIFIED_REASONING, AnalysisResult
from pipmaster.models.package import (
    PackageCategory,
    PackageRecord,
    PartialPackage,
    parse_timestamp,
)
from pipmaster.models.view import ALL_CATEGORIES, DerivedView, SortOption, ViewSelection
from pydantic import ValidationError


class TestPackageCategory:
    """Tests for PackageCategory enum."""

    def test_display_values(self) -> None:
        """Categories use their dashboard display names."""
        assert [c.value for c in PackageCategory] == [
            "Data Science",
            "Web",
            "Utility",
            "System",
            "AI/ML",
            "Other",
        ]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Data Science", PackageCategory.DATA_SCIENCE),
            ("data-science", PackageCategory.DATA_SCIENCE),
            ("DATA_SCIENCE", PackageCategory.DATA_SCIENCE),
            ("web", PackageCategory.WEB),
            ("ai/ml", PackageCategory.AI_ML),
            ("AI ML", PackageCategory.AI_ML),
            ("  System ", PackageCategory.SYSTEM),
        ],
    )
    def test_parse_loose_spellings(self, raw: str, expected: PackageCategory) -> None:
        """parse() ignores case and separator style."""
        assert PackageCategory.parse(raw) == expected

    @pytest.mark.parametrize("raw", ["Gaming", "", None, 42, ["Web"]])
    def test_parse_unknown_is_other(self, raw: object) -> None:
        """Anything unrecognised collapses to OTHER."""
        assert PackageCategory.parse(raw) == PackageCategory.OTHER

    def test_parse_member_passthrough(self) -> None:
        """A member is returned unchanged."""
        assert PackageCategory.parse(PackageCategory.WEB) is PackageCategory.WEB


class TestParseTimestamp:
    """Tests for parse_timestamp function."""

    def test_date_only_is_utc_midnight(self) -> None:
        """Date-only strings parse as midnight UTC."""
        assert parse_timestamp("2024-01-10") == datetime(2024, 1, 10, tzinfo=UTC)

    def test_zulu_suffix(self) -> None:
        """A trailing Z is accepted."""
        assert parse_timestamp("2024-01-10T12:30:00Z") == datetime(2024, 1, 10, 12, 30, tzinfo=UTC)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2024-13-45"])
    def test_unparsable_returns_none(self, value: str | None) -> None:
        """Missing or malformed values yield None."""
        assert parse_timestamp(value) is None


class TestPartialPackage:
    """Tests for PartialPackage model."""

    def test_all_fields_optional(self) -> None:
        """An empty object is a valid partial record."""
        partial = PartialPackage()
        assert partial.name is None
        assert partial.version is None
        assert partial.size_mb is None
        assert partial.install_date is None

    def test_accepts_camel_case_keys(self) -> None:
        """The JSON import keys sizeMB and installDate are recognised."""
        partial = PartialPackage.model_validate(
            {"name": "numpy", "sizeMB": 30, "installDate": "2024-01-10"}
        )
        assert partial.size_mb == 30.0
        assert partial.install_date == "2024-01-10"

    def test_accepts_snake_case_keys(self) -> None:
        """Attribute names work as well."""
        partial = PartialPackage(name="numpy", size_mb=1.5)
        assert partial.size_mb == 1.5

    def test_ignores_unknown_keys(self) -> None:
        """Extra pip fields are dropped silently."""
        partial = PartialPackage.model_validate(
            {"name": "mypkg", "version": "1.0", "editable_project_location": "/src/mypkg"}
        )
        assert partial.name == "mypkg"

    def test_rejects_negative_size(self) -> None:
        """Sizes must be non-negative."""
        with pytest.raises(ValidationError):
            PartialPackage.model_validate({"name": "numpy", "sizeMB": -1})

    @pytest.mark.parametrize("size", [float("nan"), float("inf")])
    def test_rejects_non_finite_size(self, size: float) -> None:
        """Sizes must be finite."""
        with pytest.raises(ValidationError):
            PartialPackage.model_validate({"name": "numpy", "sizeMB": size})


class TestPackageRecord:
    """Tests for PackageRecord dataclass."""

    def test_defaults(self) -> None:
        """Description and category have defaults."""
        record = PackageRecord(
            name="black", version="24.2.0", size_mb=1.2, install_date="2024-02-10"
        )
        assert record.description is None
        assert record.category == PackageCategory.OTHER

    def test_is_immutable(self) -> None:
        """Records cannot be modified after creation."""
        record = PackageRecord(
            name="black", version="24.2.0", size_mb=1.2, install_date="2024-02-10"
        )
        with pytest.raises(AttributeError):
            record.size_mb = 2.0  # type: ignore[misc]

    def test_empty_name_rejected(self) -> None:
        """Empty names raise ValueError."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            PackageRecord(name="", version="1.0", size_mb=1.0, install_date="2024-01-01")

    def test_empty_version_rejected(self) -> None:
        """Empty versions raise ValueError."""
        with pytest.raises(ValueError, match="version cannot be empty"):
            PackageRecord(name="x", version="", size_mb=1.0, install_date="2024-01-01")

    @pytest.mark.parametrize("size", [-0.5, float("nan"), float("inf")])
    def test_invalid_size_rejected(self, size: float) -> None:
        """Negative or non-finite sizes raise ValueError."""
        with pytest.raises(ValueError, match="non-negative number"):
            PackageRecord(name="x", version="1.0", size_mb=size, install_date="2024-01-01")

    def test_uninstall_command(self) -> None:
        """The simulated command uses pip's non-interactive flag."""
        record = PackageRecord(name="requests", version="2.31.0", size_mb=0.4, install_date="x")
        assert record.uninstall_command == "pip uninstall requests -y"

    def test_size_human(self) -> None:
        """Sizes are shown in MB, or GB from 1024 MB upward."""
        small = PackageRecord(name="a", version="1", size_mb=32.54, install_date="x")
        large = PackageRecord(name="b", version="1", size_mb=2048.0, install_date="x")
        assert small.size_human == "32.5 MB"
        assert large.size_human == "2.0 GB"

    def test_install_timestamp(self) -> None:
        """install_timestamp parses the stored date."""
        record = PackageRecord(name="a", version="1", size_mb=1, install_date="2024-02-01")
        assert record.install_timestamp == datetime(2024, 2, 1, tzinfo=UTC)

    def test_to_dict_uses_import_keys(self) -> None:
        """Serialization uses the camelCase import format."""
        record = PackageRecord(
            name="fastapi",
            version="0.109.2",
            size_mb=0.8,
            install_date="2024-02-01",
            description="Web framework",
            category=PackageCategory.WEB,
        )
        assert record.to_dict() == {
            "name": "fastapi",
            "version": "0.109.2",
            "sizeMB": 0.8,
            "installDate": "2024-02-01",
            "category": "Web",
            "description": "Web framework",
        }

    def test_to_dict_omits_missing_description(self) -> None:
        """Records without a description serialize without the key."""
        record = PackageRecord(name="a", version="1", size_mb=1, install_date="x")
        assert "description" not in record.to_dict()

    def test_to_dict_round_trips_through_partial(self) -> None:
        """Exported records can be imported again."""
        record = PackageRecord(name="a", version="1.0", size_mb=3.0, install_date="2024-01-01")
        partial = PartialPackage.model_validate(record.to_dict())
        assert (partial.name, partial.version, partial.size_mb, partial.install_date) == (
            "a",
            "1.0",
            3.0,
            "2024-01-01",
        )


class TestAnalysisResult:
    """Tests for AnalysisResult dataclass."""

    def test_unverified(self) -> None:
        """The fallback verdict is safe with a cautionary note and no dependents."""
        result = AnalysisResult.unverified()
        assert result.is_safe_to_uninstall is True
        assert result.reasoning == UNVERIFIED_REASONING
        assert result.dependents == ()
        assert not result.has_dependents

    def test_has_dependents(self) -> None:
        """has_dependents reflects the dependents tuple."""
        result = AnalysisResult(False, "Needed by pandas", ("pandas",))
        assert result.has_dependents


class TestViewModels:
    """Tests for ViewSelection and DerivedView."""

    def test_selection_defaults(self) -> None:
        """Default selection shows everything, largest first."""
        selection = ViewSelection()
        assert selection.search_term == ""
        assert selection.sort_option == SortOption.SIZE_DESC
        assert selection.selected_category == ALL_CATEGORIES

    def test_sort_option_values(self) -> None:
        """Sort options map to their CLI spellings."""
        assert SortOption("name") == SortOption.NAME
        assert SortOption("size") == SortOption.SIZE_DESC
        assert SortOption("date") == SortOption.DATE_DESC

    def test_empty_view(self) -> None:
        """A view without packages is empty."""
        view = DerivedView(packages=(), category_totals=(), total_size_mb=0.0, average_size_mb=0.0)
        assert view.is_empty
        assert view.count == 0
        assert view.categories == (ALL_CATEGORIES,)
