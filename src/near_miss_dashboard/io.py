from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from .transform import normalize_columns

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".json", ".csv"}
_WRAPPER_KEYS = ("incidents", "data")


def _records_from_json(payload, path: Path) -> list[dict]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _WRAPPER_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    raise ValueError(f"{path} must hold a JSON array of incidents or an object with an 'incidents' array")


def load_incidents(data_path: str | Path) -> list[dict]:
    """Load the raw incident collection from a JSON or CSV file.

    The whole file is read at once; the pipeline never sees partial data.
    """
    path = Path(data_path)
    if not path.exists():
        raise FileNotFoundError(f"Missing incident data file: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported incident data format {suffix!r}; expected .json or .csv")

    if suffix == ".json":
        records = _records_from_json(json.loads(path.read_text(encoding="utf-8")), path)
    else:
        records = normalize_columns(pd.read_csv(path)).to_dict(orient="records")

    logger.info("Loaded %d raw incident records from %s", len(records), path)
    return records


def save_run_metadata(out_path: Path, data_path: Path, versions: dict, record_count: int) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "data_file": str(data_path),
        "record_count": record_count,
        "generated_at_utc": pd.Timestamp.now(tz="UTC").isoformat(),
        "package_versions": versions,
    }
    out_path.write_text(json.dumps(payload, indent=2))
