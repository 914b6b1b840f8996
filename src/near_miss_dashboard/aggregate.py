from __future__ import annotations

import logging

import pandas as pd

from .transform import (
    SEVERITY_LABELS,
    UNKNOWN,
    coerce_int,
    get_field,
    is_record_sequence,
    normalize_value,
    record_date,
    record_severity_label,
)

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
SEVERITY_COLUMNS = SEVERITY_LABELS + (UNKNOWN,)
ROW_LABEL_KEY = "name"

logger = logging.getLogger(__name__)


def _count_in_order(keys: list[str]) -> dict[str, int]:
    if not keys:
        return {}
    series = pd.Series(keys, dtype=object)
    counts = series.groupby(series, sort=False).size()
    return {str(key): int(count) for key, count in counts.items()}


def group_by_field(data, field: str) -> dict[str, int]:
    """Count records per value of ``field``, keyed in first-seen order."""
    if not is_record_sequence(data) or not field:
        return {}
    return _count_in_order([normalize_value(get_field(item, field)) for item in data])


def group_by_severity(data) -> dict[str, int]:
    if not is_record_sequence(data):
        return {}
    return _count_in_order([record_severity_label(item) for item in data])


def month_label(item) -> tuple[str, tuple] | None:
    """Return the ``"<Mon> <Year>"`` label of a record and its sort key.

    Explicit year and month win over the parsed date. A month outside 1-12
    yields a ``"Month <n> <Year>"`` label that sorts after every real month.
    """
    year = coerce_int(get_field(item, "year"))
    month = coerce_int(get_field(item, "month"))
    if year is not None and month is not None:
        if 1 <= month <= 12:
            label = f"{MONTH_ABBREVIATIONS[month - 1]} {year}"
            return label, (0, year, month, "")
        label = f"Month {month} {year}"
        return label, (1, 0, 0, label)

    parsed = record_date(item)
    if parsed is None:
        return None
    label = f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"
    return label, (0, parsed.year, parsed.month, "")


def _month_frame(data) -> pd.DataFrame:
    rows = []
    for item in data:
        labelled = month_label(item)
        if labelled is None:
            continue
        label, order = labelled
        rows.append({"month": label, "_order": order, "severity_label": record_severity_label(item)})
    return pd.DataFrame(rows, columns=["month", "_order", "severity_label"])


def _month_order(frame: pd.DataFrame) -> dict[str, tuple]:
    return dict(zip(frame["month"], frame["_order"]))


def count_by_month(data) -> list[dict]:
    if not is_record_sequence(data):
        return []
    frame = _month_frame(data)
    if frame.empty:
        return []

    order = _month_order(frame)
    counts = frame.groupby("month", sort=False).size()
    monthly = [{"month": str(label), "count": int(count)} for label, count in counts.items()]
    return sorted(monthly, key=lambda row: order[row["month"]])


def get_top_locations(data, limit: int = 10) -> list[dict]:
    if not is_record_sequence(data):
        return []
    counts = group_by_field(data, "location")
    if not counts:
        return []
    ranked = pd.Series(counts, dtype="int64").sort_values(ascending=False, kind="stable").head(limit)
    return [{"location": str(location), "count": int(count)} for location, count in ranked.items()]


def get_severity_by_month(data) -> list[dict]:
    """One row per month with a count per severity label, oldest month first."""
    if not is_record_sequence(data):
        return []
    frame = _month_frame(data)
    if frame.empty:
        return []

    order = _month_order(frame)
    counts = frame.groupby(["month", "severity_label"], sort=False).size()
    by_month: dict[str, dict[str, int]] = {}
    for (label, severity), count in counts.items():
        severities = by_month.setdefault(label, dict.fromkeys(SEVERITY_COLUMNS, 0))
        severities[severity] = severities.get(severity, 0) + int(count)

    rows = []
    for label, severities in by_month.items():
        # "name" is reserved for the month label
        if ROW_LABEL_KEY in severities:
            logger.debug("Dropping severity label %r in %s; it collides with the row label", ROW_LABEL_KEY, label)
        row = {ROW_LABEL_KEY: label}
        row.update((severity, count) for severity, count in severities.items() if severity != ROW_LABEL_KEY)
        rows.append(row)
    return sorted(rows, key=lambda row: order[row[ROW_LABEL_KEY]])


def get_action_cause_data(data) -> dict[str, int]:
    return group_by_field(data, "action_cause")


def get_region_data(data) -> dict[str, int]:
    return group_by_field(data, "region")


def get_behavior_type_data(data) -> dict[str, int]:
    return group_by_field(data, "behavior_type")


def get_job_data(data) -> dict[str, int]:
    return group_by_field(data, "job")
