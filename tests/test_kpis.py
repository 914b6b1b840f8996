"""Tests for near_miss_dashboard.kpis."""

from __future__ import annotations

import pytest

from near_miss_dashboard.kpis import calculate_kpis, empty_kpis


class TestCalculateKPIs:
    def test_empty_input(self) -> None:
        assert calculate_kpis([]) == {
            "total_incidents": 0,
            "highest_severity_count": 0,
            "highest_severity_level": "Unknown",
            "most_common_action_cause": "Unknown",
            "most_common_location": "Unknown",
        }

    @pytest.mark.parametrize("value", [None, "data", {"id": 1}])
    def test_non_sequence_input(self, value) -> None:
        assert calculate_kpis(value) == empty_kpis()

    def test_summary(self, incidents: list[dict]) -> None:
        kpis = calculate_kpis(incidents)
        assert kpis["total_incidents"] == 5
        assert kpis["most_common_action_cause"] == "Slip"
        assert kpis["most_common_location"] == "Warehouse A"
        assert kpis["highest_severity_count"] == 1
        # every label appears once, so the first one seen wins
        assert kpis["highest_severity_level"] == "Medium"

    def test_ties_go_to_first_encountered(self) -> None:
        data = [
            {"action_cause": "B", "location": "Yard", "severity_label": "Low"},
            {"action_cause": "A", "location": "Dock", "severity_label": "High"},
            {"action_cause": "A", "location": "Dock", "severity_label": "High"},
            {"action_cause": "B", "location": "Yard", "severity_label": "Low"},
        ]
        kpis = calculate_kpis(data)
        assert kpis["most_common_action_cause"] == "B"
        assert kpis["most_common_location"] == "Yard"
        assert kpis["highest_severity_level"] == "Low"
        assert kpis["highest_severity_count"] == 2

    def test_clear_maximum(self) -> None:
        data = [{"severity_label": "High"}] + [{"severity_label": "Low"}] * 3
        kpis = calculate_kpis(data)
        assert kpis["highest_severity_level"] == "Low"
        assert kpis["highest_severity_count"] == 3
        assert kpis["most_common_action_cause"] == "Unknown"
