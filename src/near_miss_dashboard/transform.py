from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime

import pandas as pd

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
SEVERITY_LABELS = ("None", "Low", "Medium", "High", "Critical")
CATEGORICAL_FIELDS = (
    "action_cause",
    "location",
    "region",
    "behavior_type",
    "primary_category",
    "job",
    "gbu",
)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]
    return df


def is_record_sequence(data) -> bool:
    return isinstance(data, (list, tuple))


def get_field(item, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return None


def is_missing(value) -> bool:
    """True for None, NaN/NaT and the empty string. Zero and False are values."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def _is_numeric(value) -> bool:
    return pd.api.types.is_number(value) and not pd.api.types.is_bool(value)


def normalize_value(value) -> str:
    """Sentinel for missing values, otherwise the value as a string."""
    if is_missing(value):
        return UNKNOWN
    return str(value)


def coerce_int(value) -> int | None:
    """Integer form of a year/month style value; zero counts as absent."""
    if is_missing(value) or pd.api.types.is_bool(value):
        return None
    if _is_numeric(value):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not number.is_integer():
        return None
    return int(number) or None


def _format_number(value) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(value)


def severity_label(value) -> str:
    if is_missing(value):
        return UNKNOWN
    if _is_numeric(value):
        number = float(value)
        if number.is_integer() and 0 <= number < len(SEVERITY_LABELS):
            return SEVERITY_LABELS[int(number)]
        return _format_number(value)
    return str(value) or UNKNOWN


def _severity_level(value):
    if is_missing(value):
        return UNKNOWN
    if _is_numeric(value) and float(value).is_integer():
        return int(value)
    return value


def parse_date(value) -> pd.Timestamp | None:
    """Parse epoch milliseconds or a date string into a naive timestamp.

    Timezone-aware values are converted to UTC before the zone is dropped.
    Anything that does not parse comes back as None.
    """
    if is_missing(value) or pd.api.types.is_bool(value):
        return None
    if isinstance(value, (datetime, date)):
        parsed = pd.Timestamp(value)
    elif _is_numeric(value):
        if not value:
            return None
        try:
            parsed = pd.to_datetime(value, unit="ms", errors="coerce")
        except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
            # errors="coerce" does not cover epochs past the int64 range
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        parsed = pd.to_datetime(text, errors="coerce")
    else:
        return None

    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.tz_convert(None)
    return parsed


def record_date(item) -> pd.Timestamp | None:
    return parse_date(get_field(item, "incident_date"))


def record_severity_label(item) -> str:
    label = get_field(item, "severity_label")
    if not is_missing(label):
        return str(label)
    return severity_label(get_field(item, "severity_level"))


def _first_present(raw, *names):
    for name in names:
        value = get_field(raw, name)
        if not is_missing(value) and value != 0:
            return value
    return None


def normalize_incident(raw) -> dict:
    raw_date = get_field(raw, "incident_date")
    parsed = parse_date(raw_date)
    if parsed is None and not is_missing(raw_date):
        logger.debug("Unparseable incident date %r", raw_date)

    year = coerce_int(get_field(raw, "year"))
    if year is None and parsed is not None:
        year = parsed.year
    month = coerce_int(get_field(raw, "month"))
    if month is None and parsed is not None:
        month = parsed.month

    incident_id = _first_present(raw, "id", "incident_number")
    level = get_field(raw, "severity_level")

    normalized = {
        "id": UNKNOWN if incident_id is None else str(incident_id),
        "incident_date": parsed,
        "incident_date_timestamp": None if is_missing(raw_date) else raw_date,
        "year": year,
        "month": month,
        "severity_level": _severity_level(level),
        "severity_label": severity_label(level),
    }
    for name in CATEGORICAL_FIELDS:
        normalized[name] = normalize_value(get_field(raw, name))
    normalized["behavior_type"] = normalize_value(
        _first_present(raw, "behavior_type", "unsafe_condition_or_behavior")
    )
    return normalized


def normalize_data(records) -> list[dict]:
    """Map raw incident records to canonical ones, keeping order and count.

    Accepts a list/tuple of mappings or a DataFrame. Any other input gives an
    empty list.
    """
    if isinstance(records, pd.DataFrame):
        records = normalize_columns(records).to_dict(orient="records")
    if not is_record_sequence(records):
        logger.warning("Expected a sequence of incident records, got %s", type(records).__name__)
        return []

    normalized = [normalize_incident(raw) for raw in records]
    undated = sum(1 for item in normalized if item["incident_date"] is None)
    logger.info("Normalized %d incident records (%d without a usable date)", len(normalized), undated)
    return normalized
