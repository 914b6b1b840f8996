"""Shared fixtures for the pipeline tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from near_miss_dashboard.transform import normalize_data


@pytest.fixture
def raw_incidents() -> list[dict]:
    return [
        {
            "id": 1,
            "incident_date": "2023-03-15",
            "severity_level": 2,
            "action_cause": "Slip",
            "location": "Warehouse A",
            "region": "North",
            "behavior_type": "Unsafe Act",
            "primary_category": "Near Miss",
            "job": "J-100",
            "gbu": "Ops",
        },
        {
            "id": 2,
            "incident_date": 1673827200000,
            "severity_level": 3,
            "action_cause": "Trip",
            "location": "Dock 4",
            "region": None,
            "unsafe_condition_or_behavior": "Unsafe Condition",
            "job": "",
        },
        {
            "incident_number": "INC-3",
            "incident_date": "2024-02-10T08:30:00Z",
            "severity_level": 99,
            "action_cause": "Slip",
            "location": "Warehouse A",
            "region": "South",
        },
        {
            "id": None,
            "year": 2022,
            "month": 11,
            "severity_level": None,
            "action_cause": None,
            "location": "",
        },
        {
            "id": 5,
            "incident_date": "not a date",
            "severity_level": 0,
            "action_cause": "Falling Object",
            "location": 0,
        },
    ]


@pytest.fixture
def incidents(raw_incidents: list[dict]) -> list[dict]:
    return normalize_data(raw_incidents)
