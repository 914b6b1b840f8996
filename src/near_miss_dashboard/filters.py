from __future__ import annotations

import logging
import re

from .transform import (
    SEVERITY_LABELS,
    UNKNOWN,
    coerce_int,
    get_field,
    is_missing,
    is_record_sequence,
    record_date,
    record_severity_label,
)

logger = logging.getLogger(__name__)

ALL = "All"
SEVERITY_ORDER = SEVERITY_LABELS + (UNKNOWN,)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def record_year(item) -> int | None:
    year = coerce_int(get_field(item, "year"))
    if year is not None:
        return year
    parsed = record_date(item)
    return parsed.year if parsed is not None else None


def _is_all(selection) -> bool:
    return is_missing(selection) or selection == ALL


def _parse_year(selection) -> int | None:
    if isinstance(selection, bool):
        return None
    if isinstance(selection, int):
        return selection
    if isinstance(selection, float):
        return int(selection) if selection.is_integer() else None
    match = _LEADING_INT.match(str(selection))
    return int(match.group(1)) if match else None


def get_unique_years(data) -> list[int]:
    if not is_record_sequence(data):
        return []
    years = {record_year(item) for item in data}
    years.discard(None)
    return sorted(years, reverse=True)


def _severity_rank(label: str) -> tuple:
    if label in SEVERITY_ORDER:
        return (SEVERITY_ORDER.index(label), "")
    return (len(SEVERITY_ORDER), label)


def get_unique_severities(data) -> list[str]:
    if not is_record_sequence(data):
        return []
    labels = {record_severity_label(item) for item in data}
    return sorted(labels, key=_severity_rank)


def filter_by_year(data, year):
    """Keep records from ``year``; ``"All"`` or a non-numeric year keeps everything."""
    if not is_record_sequence(data):
        return []
    if _is_all(year):
        return data
    target = _parse_year(year)
    if target is None:
        logger.debug("Ignoring non-numeric year filter %r", year)
        return data
    return [item for item in data if record_year(item) == target]


def filter_by_severity(data, severity):
    if not is_record_sequence(data):
        return []
    if _is_all(severity):
        return data
    return [item for item in data if record_severity_label(item) == severity]


def apply_filters(data, year=ALL, severity=ALL):
    return filter_by_severity(filter_by_year(data, year), severity)
