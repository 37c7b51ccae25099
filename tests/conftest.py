"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path
from typing import Any

import pytest
from pipmaster.advisor.client import AdvisorClient, AdvisorError
from pipmaster.models.package import PackageCategory, PackageRecord


class FakeAdvisorClient(AdvisorClient):
    """Advisor client that returns a canned answer or raises.

    Every prompt is recorded so tests can inspect what was sent.
    """

    def __init__(self, response: Any = None, error: AdvisorError | None = None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []
        self.schemas: list[dict[str, Any]] = []

    @property
    def description(self) -> str:
        return "Fake advisor"

    def generate_json(self, prompt: str, schema: dict[str, Any]) -> Any:
        self.prompts.append(prompt)
        self.schemas.append(schema)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temp dir and clear API keys."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    return config_home


@pytest.fixture
def sample_records() -> list[PackageRecord]:
    """A small collection spanning three categories."""
    return [
        PackageRecord(
            name="numpy",
            version="1.26.4",
            size_mb=32.5,
            install_date="2023-11-15",
            description="Array computing",
            category=PackageCategory.DATA_SCIENCE,
        ),
        PackageRecord(
            name="requests",
            version="2.31.0",
            size_mb=0.4,
            install_date="2023-10-05",
            description="HTTP for humans",
            category=PackageCategory.UTILITY,
        ),
        PackageRecord(
            name="fastapi",
            version="0.109.2",
            size_mb=0.8,
            install_date="2024-02-01",
            description="Web framework",
            category=PackageCategory.WEB,
        ),
        PackageRecord(
            name="pandas",
            version="2.2.1",
            size_mb=45.2,
            install_date="2024-01-10",
            description="Data analysis",
            category=PackageCategory.DATA_SCIENCE,
        ),
    ]


@pytest.fixture
def fake_client() -> type[FakeAdvisorClient]:
    """The FakeAdvisorClient class, for building clients inside tests."""
    return FakeAdvisorClient


@pytest.fixture
def pip_list_json() -> str:
    """Sample ``pip list --format=json`` output."""
    return '[{"name": "numpy", "version": "1.26.4"}, {"name": "requests", "version": "2.31.0"}]'
