"""Tests for near_miss_dashboard.viz."""

from __future__ import annotations

from pathlib import Path

from near_miss_dashboard.aggregate import count_by_month, get_severity_by_month
from near_miss_dashboard.viz import (
    bar_counts,
    monthly_series,
    monthly_trend,
    severity_pivot_frame,
    severity_stacked_bars,
    top_entries,
    truncate_label,
)

DISPLAY_ORDER = ["None", "Low", "Medium", "High", "Critical"]


class TestShaping:
    def test_truncate_label(self) -> None:
        assert truncate_label("short", 20) == "short"
        assert truncate_label("a" * 25, 20) == "a" * 20 + "..."

    def test_top_entries(self) -> None:
        bucket = {"x" * 30: 1, "Slip": 5, "Trip": 3}
        counts = top_entries(bucket, 2, max_label_length=10)
        assert list(counts.index) == ["Slip", "Trip"]
        assert list(counts.values) == [5, 3]

    def test_top_entries_empty(self) -> None:
        assert top_entries({}, 6).empty

    def test_severity_pivot_frame(self, incidents: list[dict]) -> None:
        pivot = severity_pivot_frame(get_severity_by_month(incidents), DISPLAY_ORDER)
        assert list(pivot.columns) == DISPLAY_ORDER
        assert list(pivot.index) == ["Nov 2022", "Jan 2023", "Mar 2023", "Feb 2024"]
        assert int(pivot.loc["Jan 2023", "High"]) == 1
        assert int(pivot.loc["Feb 2024"].sum()) == 0

    def test_monthly_series_keeps_order(self, incidents: list[dict]) -> None:
        series = monthly_series(count_by_month(incidents))
        assert list(series.index) == ["Nov 2022", "Jan 2023", "Mar 2023", "Feb 2024"]
        assert monthly_series([]).empty


class TestFigures:
    def test_bar_counts_writes_png(self, tmp_path: Path) -> None:
        out = tmp_path / "figures" / "causes.png"
        bar_counts({"Slip": 2, "Trip": 1}, "Incidents by Action Cause", out)
        assert out.exists()

    def test_empty_figures_still_render(self, tmp_path: Path) -> None:
        bar_counts({}, "Empty", tmp_path / "empty.png")
        monthly_trend([], tmp_path / "trend.png")
        severity_stacked_bars([], tmp_path / "stacked.png", DISPLAY_ORDER)
        assert (tmp_path / "empty.png").exists()
        assert (tmp_path / "trend.png").exists()
        assert (tmp_path / "stacked.png").exists()

    def test_trend_and_stacked(self, tmp_path: Path, incidents: list[dict]) -> None:
        monthly_trend(count_by_month(incidents), tmp_path / "trend.png")
        severity_stacked_bars(get_severity_by_month(incidents), tmp_path / "stacked.png", DISPLAY_ORDER)
        assert (tmp_path / "trend.png").stat().st_size > 0
        assert (tmp_path / "stacked.png").stat().st_size > 0
