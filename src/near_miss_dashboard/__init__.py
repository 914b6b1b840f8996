"""Normalization and aggregation pipeline behind the near-miss incident dashboard."""

from .aggregate import (
    count_by_month,
    get_action_cause_data,
    get_behavior_type_data,
    get_job_data,
    get_region_data,
    get_severity_by_month,
    get_top_locations,
    group_by_field,
    group_by_severity,
)
from .filters import (
    apply_filters,
    filter_by_severity,
    filter_by_year,
    get_unique_severities,
    get_unique_years,
)
from .kpis import calculate_kpis
from .transform import normalize_data, normalize_incident

__version__ = "0.1.0"
