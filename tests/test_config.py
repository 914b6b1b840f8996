"""Tests for near_miss_dashboard.config."""

from __future__ import annotations

import pytest

from near_miss_dashboard.config import DEFAULT_DATA_PATH, Settings, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["INCIDENTS_DATA_PATH", "TOP_LOCATIONS_LIMIT", "LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.data_path == DEFAULT_DATA_PATH
    assert settings.top_locations_limit == 10
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INCIDENTS_DATA_PATH", "/srv/incidents.csv")
    monkeypatch.setenv("TOP_LOCATIONS_LIMIT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.data_path == "/srv/incidents.csv"
    assert settings.top_locations_limit == 5
    assert settings.log_level == "DEBUG"


def test_invalid_limit_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOP_LOCATIONS_LIMIT", "ten")
    assert load_settings().top_locations_limit == 10


def test_display_order_covers_colors() -> None:
    settings = Settings()
    assert set(settings.severity_display_order) == set(settings.severity_colors)
