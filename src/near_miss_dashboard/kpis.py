from __future__ import annotations

import pandas as pd

from .aggregate import group_by_field, group_by_severity
from .transform import UNKNOWN, is_record_sequence


def _stable_max(counts: dict[str, int]) -> tuple[str, int]:
    """Key with the highest count; ties go to the key seen first."""
    if not counts:
        return UNKNOWN, 0
    series = pd.Series(counts, dtype="int64")
    top = series.idxmax()
    return str(top), int(series.loc[top])


def empty_kpis() -> dict:
    return {
        "total_incidents": 0,
        "highest_severity_count": 0,
        "highest_severity_level": UNKNOWN,
        "most_common_action_cause": UNKNOWN,
        "most_common_location": UNKNOWN,
    }


def calculate_kpis(data) -> dict:
    if not is_record_sequence(data) or len(data) == 0:
        return empty_kpis()

    severity_level, severity_count = _stable_max(group_by_severity(data))
    action_cause, _ = _stable_max(group_by_field(data, "action_cause"))
    location, _ = _stable_max(group_by_field(data, "location"))

    return {
        "total_incidents": len(data),
        "highest_severity_count": severity_count,
        "highest_severity_level": severity_level,
        "most_common_action_cause": action_cause,
        "most_common_location": location,
    }
