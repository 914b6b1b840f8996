from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

DATA_PATH_ENV = "INCIDENTS_DATA_PATH"
TOP_LOCATIONS_LIMIT_ENV = "TOP_LOCATIONS_LIMIT"
LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_DATA_PATH = "data/incidents.json"
DEFAULT_TOP_LOCATIONS = 10

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Presentation and loading configuration.

    Nothing here is read by the aggregation core; the dashboard and the
    batch report pass these values into it explicitly.
    """

    data_path: str = DEFAULT_DATA_PATH
    top_locations_limit: int = DEFAULT_TOP_LOCATIONS
    log_level: str = "INFO"

    # Charts
    palette: tuple[str, ...] = (
        "#3b82f6",
        "#ef4444",
        "#10b981",
        "#f59e0b",
        "#8b5cf6",
        "#ec4899",
    )
    severity_display_order: tuple[str, ...] = ("None", "Low", "Medium", "High", "Critical")
    severity_colors: dict[str, str] = field(
        default_factory=lambda: {
            "None": "#9ca3af",
            "Low": "#10b981",
            "Medium": "#f59e0b",
            "High": "#f97316",
            "Critical": "#ef4444",
        }
    )
    top_causes_limit: int = 6
    chart_label_length: int = 20
    kpi_label_length: int = 30


def load_settings() -> Settings:
    return Settings(
        data_path=os.getenv(DATA_PATH_ENV, "").strip() or DEFAULT_DATA_PATH,
        top_locations_limit=_env_int(TOP_LOCATIONS_LIMIT_ENV, DEFAULT_TOP_LOCATIONS),
        log_level=os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO",
    )


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper(),
        format=LOG_FORMAT,
    )
